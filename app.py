from __future__ import annotations
import logging
import os
import pandas as pd
import streamlit as st
from kananorm.api import make_transliterator
from kananorm.errors import TransliterationConfigError
from kananorm.utils import normalize_dataframe, recipe_from_flags, to_excel_bytes

EXCEL_MIME = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
)

logging.basicConfig(level=os.getenv("KANANORM_LOG_LEVEL", "WARNING").upper())

st.set_page_config(page_title="Kana Normalizer")
st.title("Excel 文字正規化ツール")

uploaded = st.file_uploader("Excelを選択", type=["xlsx"])

if "df" not in st.session_state and uploaded:
    st.session_state.template_bytes = uploaded.getvalue()
    st.session_state.df = pd.read_excel(uploaded)

if "df" in st.session_state:
    df = st.session_state.df
    st.write("アップロードしたデータ:")
    st.dataframe(df.head())

    columns = list(df.columns)
    column = st.selectbox("正規化する列を選択", columns, key="column")

    with st.expander("変換オプション", expanded=True):
        flags = {
            "replace_spaces": st.checkbox("空白を半角スペースに統一", value=True),
            "replace_hyphens": st.checkbox("ハイフン類を統一"),
            "replace_suspicious_hyphens_to_prolonged_sound_marks": st.checkbox(
                "カナ直後のハイフンを長音符に"
            ),
            "combine_decomposed_hiraganas_and_katakanas": st.checkbox(
                "分解された濁点・半濁点を合成", value=True
            ),
            "replace_japanese_iteration_marks": st.checkbox("踊り字を展開"),
            "kanji_old_new": st.checkbox("旧字体を新字体に"),
            "replace_circled_or_squared_characters": st.checkbox("丸数字・囲み文字を展開"),
            "replace_combined_characters": st.checkbox("組文字を展開"),
            "replace_roman_numerals": st.checkbox("ローマ数字を展開"),
            "replace_radicals": st.checkbox("部首を漢字に"),
            "replace_mathematical_alphanumerics": st.checkbox("数学用英数字を通常の英数字に"),
            "replace_ideographic_annotations": st.checkbox("漢文注記を漢字に"),
            "remove_ivs_svs": st.checkbox("異体字セレクタを除去"),
        }
        hira_kata = st.selectbox(
            "ひらがな・カタカナ変換",
            ["", "hira_to_kata", "kata_to_hira"],
            format_func=lambda v: {"": "しない", "hira_to_kata": "ひらがな→カタカナ",
                                   "kata_to_hira": "カタカナ→ひらがな"}[v],
        )
        width = st.radio(
            "文字幅",
            ["そのまま", "全角に", "半角に", "半角に(カナも)"],
            horizontal=True,
        )
        flags["hira_kata"] = hira_kata
        flags["to_fullwidth"] = width == "全角に"
        flags["to_halfwidth"] = {"半角に": True, "半角に(カナも)": "hankaku-kana"}.get(width, False)
        flags["charset"] = st.selectbox("文字集合", ["unijis_2004", "unijis_90"])

    if st.button("正規化実行"):
        try:
            transliterate = make_transliterator(recipe_from_flags(flags))
        except TransliterationConfigError as exc:
            st.error(f"設定エラー: {exc}")
        else:
            progress = st.progress(0.0)

            def on_progress(done: int, total: int) -> None:
                progress.progress(done / total)

            with st.spinner("変換中..."):
                out_df = normalize_dataframe(df, column, transliterate, on_progress)
            progress.empty()
            st.session_state.out_df = out_df

if "out_df" in st.session_state:
    st.write("結果プレビュー:")
    st.dataframe(st.session_state.out_df.head())
    tmpl = st.session_state.get("template_bytes")
    bytes_data = to_excel_bytes(st.session_state.out_df, template_bytes=tmpl)
    st.download_button(
        label="保存してダウンロード",
        data=bytes_data,
        file_name="正規化結果.xlsx",
        mime=EXCEL_MIME,
    )
