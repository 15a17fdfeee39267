from __future__ import annotations

from functools import lru_cache

from ..chain import TableStage

IVS_SELECTOR = "\U000E0100"

# (old form, new form) pairs from the 1946/1949 simplification lists
OLD_NEW_PAIRS = (
    "亞亜 惡悪 壓圧 圍囲 爲為 醫医 壹壱 隱隠 營営 榮栄 衞衛 驛駅 圓円 艷艶 鹽塩 奧奥 "
    "應応 歐欧 毆殴 穩穏 假仮 價価 畫画 會会 壞壊 懷懐 繪絵 擴拡 覺覚 學学 嶽岳 樂楽 "
    "勸勧 卷巻 歡歓 觀観 關関 陷陥 巖巌 顏顔 歸帰 氣気 僞偽 戲戯 犧犠 舊旧 據拠 擧挙 "
    "峽峡 挾挟 狹狭 曉暁 區区 驅駆 勳勲 徑径 惠恵 溪渓 經経 繼継 莖茎 螢蛍 輕軽 鷄鶏 "
    "藝芸 缺欠 儉倹 劍剣 圈圏 檢検 權権 獻献 縣県 險険 顯顕 驗験 嚴厳 效効 廣広 恆恒 "
    "鑛鉱 號号 國国 黑黒 濟済 碎砕 齋斎 劑剤 參参 慘惨 棧桟 蠶蚕 贊賛 殘残 絲糸 齒歯 "
    "兒児 辭辞 濕湿 實実 舍舎 寫写 釋釈 壽寿 收収 從従 澁渋 獸獣 縱縦 肅粛 處処 緖緒 "
    "敍叙 奬奨 將将 燒焼 稱称 證証 乘乗 剩剰 壤壌 孃嬢 條条 淨浄 疊畳 穰穣 讓譲 釀醸 "
    "囑嘱 觸触 寢寝 愼慎 眞真 盡尽 圖図 粹粋 醉酔 穗穂 隨随 髓髄 樞枢 數数 瀨瀬 聲声 "
    "齊斉 靜静 竊窃 攝摂 專専 戰戦 淺浅 潛潜 纖繊 踐践 錢銭 禪禅 雙双 壯壮 搜捜 插挿 "
    "爭争 總総 聰聡 莊荘 裝装 騷騒 臟臓 藏蔵 屬属 續続 墮堕 體体 對対 帶帯 滯滞 臺台 "
    "瀧滝 擇択 澤沢 單単 擔担 膽胆 團団 彈弾 斷断 癡痴 遲遅 晝昼 蟲虫 鑄鋳 廳庁 聽聴 "
    "鎭鎮 遞逓 鐵鉄 轉転 點点 傳伝 黨党 盜盗 燈灯 當当 鬪闘 德徳 獨独 讀読 屆届 繩縄 "
    "貳弐 腦脳 霸覇 廢廃 拜拝 賣売 麥麦 發発 髮髪 拔抜 蠻蛮 祕秘 濱浜 甁瓶 拂払 佛仏 "
    "竝並 變変 邊辺 辨弁 寶宝 豐豊 沒没 飜翻 萬万 滿満 默黙 彌弥 譯訳 藥薬 與与 豫予 "
    "餘余 譽誉 搖揺 樣様 謠謡 來来 賴頼 亂乱 覽覧 龍竜 兩両 獵猟 壘塁 勵励 禮礼 靈霊 "
    "齡齢 戀恋 爐炉 勞労 樓楼 祿禄 灣湾"
).split()


@lru_cache(maxsize=None)
def kanji_old_new_table() -> dict[str, str]:
    """Old form + IVS → new form + IVS.

    Plain characters are expected to be expanded to their IVS form by an
    ``ivs-svs-base`` stage first, which the recipe arranges.
    """
    return {old + IVS_SELECTOR: new + IVS_SELECTOR for old, new in OLD_NEW_PAIRS}


def kanji_characters() -> list[str]:
    """Every old and new form in the table, in table order without repeats."""
    return list(dict.fromkeys(ch for pair in OLD_NEW_PAIRS for ch in pair))


class KanjiOldNewStage(TableStage):
    """Replace traditional (kyūjitai) kanji with their modern (shinjitai) forms."""

    name = "kanji-old-new"

    def table(self):
        return kanji_old_new_table()
