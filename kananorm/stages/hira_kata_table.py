"""Shared kana tables used by the composition, conversion and width stages."""
from __future__ import annotations

from functools import lru_cache

# hiragana, voiced, semi-voiced, katakana, voiced, semi-voiced, halfwidth
HIRAGANA_KATAKANA_TABLE: tuple[tuple[str, str, str, str, str, str, str], ...] = (
    ("あ", "", "", "ア", "", "", "ｱ"),
    ("い", "", "", "イ", "", "", "ｲ"),
    ("う", "ゔ", "", "ウ", "ヴ", "", "ｳ"),
    ("え", "", "", "エ", "", "", "ｴ"),
    ("お", "", "", "オ", "", "", "ｵ"),
    ("か", "が", "", "カ", "ガ", "", "ｶ"),
    ("き", "ぎ", "", "キ", "ギ", "", "ｷ"),
    ("く", "ぐ", "", "ク", "グ", "", "ｸ"),
    ("け", "げ", "", "ケ", "ゲ", "", "ｹ"),
    ("こ", "ご", "", "コ", "ゴ", "", "ｺ"),
    ("さ", "ざ", "", "サ", "ザ", "", "ｻ"),
    ("し", "じ", "", "シ", "ジ", "", "ｼ"),
    ("す", "ず", "", "ス", "ズ", "", "ｽ"),
    ("せ", "ぜ", "", "セ", "ゼ", "", "ｾ"),
    ("そ", "ぞ", "", "ソ", "ゾ", "", "ｿ"),
    ("た", "だ", "", "タ", "ダ", "", "ﾀ"),
    ("ち", "ぢ", "", "チ", "ヂ", "", "ﾁ"),
    ("つ", "づ", "", "ツ", "ヅ", "", "ﾂ"),
    ("て", "で", "", "テ", "デ", "", "ﾃ"),
    ("と", "ど", "", "ト", "ド", "", "ﾄ"),
    ("な", "", "", "ナ", "", "", "ﾅ"),
    ("に", "", "", "ニ", "", "", "ﾆ"),
    ("ぬ", "", "", "ヌ", "", "", "ﾇ"),
    ("ね", "", "", "ネ", "", "", "ﾈ"),
    ("の", "", "", "ノ", "", "", "ﾉ"),
    ("は", "ば", "ぱ", "ハ", "バ", "パ", "ﾊ"),
    ("ひ", "び", "ぴ", "ヒ", "ビ", "ピ", "ﾋ"),
    ("ふ", "ぶ", "ぷ", "フ", "ブ", "プ", "ﾌ"),
    ("へ", "べ", "ぺ", "ヘ", "ベ", "ペ", "ﾍ"),
    ("ほ", "ぼ", "ぽ", "ホ", "ボ", "ポ", "ﾎ"),
    ("ま", "", "", "マ", "", "", "ﾏ"),
    ("み", "", "", "ミ", "", "", "ﾐ"),
    ("む", "", "", "ム", "", "", "ﾑ"),
    ("め", "", "", "メ", "", "", "ﾒ"),
    ("も", "", "", "モ", "", "", "ﾓ"),
    ("や", "", "", "ヤ", "", "", "ﾔ"),
    ("ゆ", "", "", "ユ", "", "", "ﾕ"),
    ("よ", "", "", "ヨ", "", "", "ﾖ"),
    ("ら", "", "", "ラ", "", "", "ﾗ"),
    ("り", "", "", "リ", "", "", "ﾘ"),
    ("る", "", "", "ル", "", "", "ﾙ"),
    ("れ", "", "", "レ", "", "", "ﾚ"),
    ("ろ", "", "", "ロ", "", "", "ﾛ"),
    ("わ", "", "", "ワ", "ヷ", "", "ﾜ"),
    ("ゐ", "", "", "ヰ", "ヸ", "", ""),
    ("ゑ", "", "", "ヱ", "ヹ", "", ""),
    ("を", "", "", "ヲ", "ヺ", "", "ｦ"),
    ("ん", "", "", "ン", "", "", "ﾝ"),
)

# hiragana, katakana, halfwidth
SMALL_KANA_TABLE: tuple[tuple[str, str, str], ...] = (
    ("ぁ", "ァ", "ｧ"),
    ("ぃ", "ィ", "ｨ"),
    ("ぅ", "ゥ", "ｩ"),
    ("ぇ", "ェ", "ｪ"),
    ("ぉ", "ォ", "ｫ"),
    ("っ", "ッ", "ｯ"),
    ("ゃ", "ャ", "ｬ"),
    ("ゅ", "ュ", "ｭ"),
    ("ょ", "ョ", "ｮ"),
    ("ゎ", "ヮ", ""),
    ("ゕ", "ヵ", ""),
    ("ゖ", "ヶ", ""),
)

HALFWIDTH_VOICED_MARK = "ﾞ"
HALFWIDTH_SEMI_VOICED_MARK = "ﾟ"


@lru_cache(maxsize=None)
def voiced_characters() -> dict[str, str]:
    """Base kana → voiced kana, including the iteration marks."""
    table: dict[str, str] = {}
    for hira, hira_v, _, kata, kata_v, _, _ in HIRAGANA_KATAKANA_TABLE:
        if hira_v:
            table[hira] = hira_v
        if kata_v:
            table[kata] = kata_v
    table["ゝ"] = "ゞ"
    table["ヽ"] = "ヾ"
    table["〱"] = "〲"
    table["〳"] = "〴"
    return table


@lru_cache(maxsize=None)
def semi_voiced_characters() -> dict[str, str]:
    table: dict[str, str] = {}
    for hira, _, hira_s, kata, _, kata_s, _ in HIRAGANA_KATAKANA_TABLE:
        if hira_s:
            table[hira] = hira_s
        if kata_s:
            table[kata] = kata_s
    return table


@lru_cache(maxsize=None)
def jisx0201_gr_table() -> dict[str, str]:
    """Fullwidth katakana and punctuation → JIS X 0201 GR (halfwidth)."""
    table = {
        "。": "｡",
        "「": "｢",
        "」": "｣",
        "、": "､",
        "・": "･",
        "ー": "ｰ",
        "゛": HALFWIDTH_VOICED_MARK,
        "゜": HALFWIDTH_SEMI_VOICED_MARK,
    }
    for row in HIRAGANA_KATAKANA_TABLE:
        if row[6]:
            table[row[3]] = row[6]
    for _, kata, halfwidth in SMALL_KANA_TABLE:
        if halfwidth:
            table[kata] = halfwidth
    return table


@lru_cache(maxsize=None)
def voiced_letters_table() -> dict[str, str]:
    """Precomposed voiced katakana → halfwidth base plus halfwidth mark."""
    table: dict[str, str] = {}
    for row in HIRAGANA_KATAKANA_TABLE:
        halfwidth = row[6]
        if not halfwidth:
            continue
        if row[4]:
            table[row[4]] = halfwidth + HALFWIDTH_VOICED_MARK
        if row[5]:
            table[row[5]] = halfwidth + HALFWIDTH_SEMI_VOICED_MARK
    return table


@lru_cache(maxsize=None)
def hiragana_to_halfwidth_table() -> dict[str, str]:
    table: dict[str, str] = {}
    for hira, hira_v, hira_s, _, _, _, halfwidth in HIRAGANA_KATAKANA_TABLE:
        if not halfwidth:
            continue
        table[hira] = halfwidth
        if hira_v:
            table[hira_v] = halfwidth + HALFWIDTH_VOICED_MARK
        if hira_s:
            table[hira_s] = halfwidth + HALFWIDTH_SEMI_VOICED_MARK
    for hira, _, halfwidth in SMALL_KANA_TABLE:
        if halfwidth:
            table[hira] = halfwidth
    return table
