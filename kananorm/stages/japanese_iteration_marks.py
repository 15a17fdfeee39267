from __future__ import annotations

from typing import Iterable, Iterator

from ..chain import Stage
from ..chars import CodePointUnit, byte_len

HIRAGANA_ITERATION_MARK = "ゝ"
HIRAGANA_VOICED_ITERATION_MARK = "ゞ"
KATAKANA_ITERATION_MARK = "ヽ"
KATAKANA_VOICED_ITERATION_MARK = "ヾ"
KANJI_ITERATION_MARK = "々"

ITERATION_MARKS = frozenset(
    (
        HIRAGANA_ITERATION_MARK,
        HIRAGANA_VOICED_ITERATION_MARK,
        KATAKANA_ITERATION_MARK,
        KATAKANA_VOICED_ITERATION_MARK,
        KANJI_ITERATION_MARK,
    )
)

OTHER = 0
HIRAGANA = 1
KATAKANA = 2
KANJI = 3

HATSUON = frozenset("んンﾝ")
SOKUON = frozenset("っッｯ")
SEMI_VOICED = frozenset("ぱぴぷぺぽパピプペポ")

HIRAGANA_VOICING = dict(
    zip("かきくけこさしすせそたちつてとはひふへほ", "がぎぐげござじずぜぞだぢづでどばびぶべぼ")
)
KATAKANA_VOICING = dict(
    zip("カキクケコサシスセソタチツテトハヒフヘホウ", "ガギグゲゴザジズゼゾダヂヅデドバビブベボヴ")
)
VOICED = frozenset(HIRAGANA_VOICING.values()) | frozenset(KATAKANA_VOICING.values())

KANJI_RANGES = (
    (0x4E00, 0x9FFF),
    (0x3400, 0x4DBF),
    (0x20000, 0x2A6DF),
    (0x2A700, 0x2B73F),
    (0x2B740, 0x2B81F),
    (0x2B820, 0x2CEAF),
    (0x2CEB0, 0x2EBEF),
    (0x30000, 0x3134F),
)


def char_type(text: str) -> int:
    """Classify the base character of ``text`` as a repeatable kana or kanji."""
    if not text:
        return OTHER
    if text in HATSUON or text in SOKUON or text in VOICED or text in SEMI_VOICED:
        return OTHER
    cp = ord(text[0])
    if 0x3041 <= cp <= 0x3096:
        return HIRAGANA
    if 0x30A1 <= cp <= 0x30FA:
        return KATAKANA
    for lo, hi in KANJI_RANGES:
        if lo <= cp <= hi:
            return KANJI
    return OTHER


class JapaneseIterationMarksStage(Stage):
    """Expand ゝ ゞ ヽ ヾ 々 into the character they repeat.

    Only the first of consecutive iteration marks is expanded. Halfwidth
    katakana, ん, っ and kana that already carry a voicing mark are never
    repeated.
    """

    name = "japanese-iteration-marks"

    def __call__(self, units: Iterable[CodePointUnit]) -> Iterator[CodePointUnit]:
        offset = 0
        prev: tuple[str, int] | None = None
        prev_was_mark = False
        for unit in units:
            text = unit.text
            if text not in ITERATION_MARKS:
                yield unit.with_offset(offset)
                offset += byte_len(text)
                kind = char_type(text)
                prev = (text, kind) if kind != OTHER else None
                prev_was_mark = False
                continue

            replacement = None
            if not prev_was_mark and prev is not None:
                replacement = self._expand(text, *prev)
            prev_was_mark = True
            if replacement is None:
                yield unit.with_offset(offset)
                offset += byte_len(text)
            else:
                yield unit.derive(replacement, offset)
                offset += byte_len(replacement)

    @staticmethod
    def _expand(mark: str, base: str, kind: int) -> str | None:
        if mark == HIRAGANA_ITERATION_MARK and kind == HIRAGANA:
            return base
        if mark == HIRAGANA_VOICED_ITERATION_MARK and kind == HIRAGANA:
            return HIRAGANA_VOICING.get(base)
        if mark == KATAKANA_ITERATION_MARK and kind == KATAKANA:
            return base
        if mark == KATAKANA_VOICED_ITERATION_MARK and kind == KATAKANA:
            return KATAKANA_VOICING.get(base)
        if mark == KANJI_ITERATION_MARK and kind == KANJI:
            return base
        return None
