from __future__ import annotations

from typing import Iterable, Iterator

from ..chain import Stage
from ..chars import CodePointUnit, byte_len

# Character classes live in the top three bits, flags in the low five.
OTHER = 0x00
HIRAGANA = 0x20
KATAKANA = 0x40
ALPHABET = 0x60
DIGIT = 0x80
EITHER = 0xA0
TYPE_MASK = 0xE0

HALFWIDTH = 1 << 0
VOWEL_ENDED = 1 << 1
HATSUON = 1 << 2
SOKUON = 1 << 3
PROLONGED_SOUND_MARK = 1 << 4

SPECIALS = {
    0xFF70: KATAKANA | PROLONGED_SOUND_MARK | HALFWIDTH,  # ｰ
    0x30FC: EITHER | PROLONGED_SOUND_MARK,  # ー
    0x3063: HIRAGANA | SOKUON,  # っ
    0x3093: HIRAGANA | HATSUON,  # ん
    0x30C3: KATAKANA | SOKUON,  # ッ
    0x30F3: KATAKANA | HATSUON,  # ン
    0xFF6F: KATAKANA | SOKUON | HALFWIDTH,  # ｯ
    0xFF9D: KATAKANA | HATSUON | HALFWIDTH,  # ﾝ
}

HYPHEN_LIKE = frozenset("-‐—―−－ｰー")

PROLONGED_MARK = "ー"
HALFWIDTH_PROLONGED_MARK = "ｰ"
HYPHEN = "-"
FULLWIDTH_HYPHEN = "－"


def char_type(text: str) -> int:
    """Return the class and flags word for the first scalar of ``text``."""
    if not text:
        return OTHER
    cp = ord(text[0])
    if 0x30 <= cp <= 0x39:
        return DIGIT | HALFWIDTH
    if 0xFF10 <= cp <= 0xFF19:
        return DIGIT
    if 0x41 <= cp <= 0x5A or 0x61 <= cp <= 0x7A:
        return ALPHABET | HALFWIDTH
    if 0xFF21 <= cp <= 0xFF3A or 0xFF41 <= cp <= 0xFF5A:
        return ALPHABET
    special = SPECIALS.get(cp)
    if special is not None:
        return special
    if 0x3041 <= cp <= 0x309C or cp == 0x309F:
        return HIRAGANA | VOWEL_ENDED
    if 0x30A1 <= cp <= 0x30FA or 0x30FD <= cp <= 0x30FF:
        return KATAKANA | VOWEL_ENDED
    if 0xFF66 <= cp <= 0xFF6F or 0xFF71 <= cp <= 0xFF9F:
        return KATAKANA | VOWEL_ENDED | HALFWIDTH
    return OTHER


def is_alnum(kind: int) -> bool:
    return (kind & TYPE_MASK) in (ALPHABET, DIGIT)


def is_halfwidth(kind: int) -> bool:
    return bool(kind & HALFWIDTH)


class ProlongedSoundMarksStage(Stage):
    """Turn hyphen-like characters after kana into ー, and ー between alphanumerics into hyphens.

    Parameters
    ----------
    skip_already_transliterated_chars : bool, default False
        Leave hyphen-like units alone when an earlier stage produced them.
    allow_prolonged_hatsuon : bool, default False
        Allow ん/ン/ﾝ to be followed by a prolonged sound mark.
    allow_prolonged_sokuon : bool, default False
        Allow っ/ッ/ｯ to be followed by a prolonged sound mark.
    replace_prolonged_marks_following_alnums : bool, default False
        Replace hyphen-like runs sitting between alphanumerics with hyphens.
    """

    name = "prolonged-sound-marks"

    def __init__(
        self,
        skip_already_transliterated_chars: bool = False,
        allow_prolonged_hatsuon: bool = False,
        allow_prolonged_sokuon: bool = False,
        replace_prolonged_marks_following_alnums: bool = False,
    ):
        self.skip_already_transliterated_chars = bool(skip_already_transliterated_chars)
        self.allow_prolonged_hatsuon = bool(allow_prolonged_hatsuon)
        self.allow_prolonged_sokuon = bool(allow_prolonged_sokuon)
        self.replace_prolonged_marks_following_alnums = bool(
            replace_prolonged_marks_following_alnums
        )
        self.prolongables = VOWEL_ENDED | PROLONGED_SOUND_MARK
        if self.allow_prolonged_hatsuon:
            self.prolongables |= HATSUON
        if self.allow_prolonged_sokuon:
            self.prolongables |= SOKUON

    def _skipped(self, unit: CodePointUnit) -> bool:
        return self.skip_already_transliterated_chars and unit.is_transliterated()

    def __call__(self, units: Iterable[CodePointUnit]) -> Iterator[CodePointUnit]:
        offset = 0
        run: list[CodePointUnit] = []
        run_touched = False
        last_kind: int | None = None

        for unit in units:
            if run:
                if unit.text in HYPHEN_LIKE:
                    run.append(unit)
                    run_touched = run_touched or self._skipped(unit)
                    continue
                # The run ends here; last_kind still describes the alnum before it.
                kind = char_type(unit.text)
                if is_alnum(kind) and not run_touched:
                    hyphen = HYPHEN if is_halfwidth(last_kind or 0) else FULLWIDTH_HYPHEN
                    for buffered in run:
                        yield buffered.derive(hyphen, offset)
                        offset += byte_len(hyphen)
                else:
                    for buffered in run:
                        yield buffered.with_offset(offset)
                        offset += byte_len(buffered.text)
                run = []
                run_touched = False
                last_kind = kind
                yield unit.with_offset(offset)
                offset += byte_len(unit.text)
                continue

            if unit.text in HYPHEN_LIKE:
                if last_kind is not None and not self._skipped(unit):
                    if last_kind & self.prolongables:
                        mark = (
                            HALFWIDTH_PROLONGED_MARK
                            if is_halfwidth(last_kind)
                            else PROLONGED_MARK
                        )
                        yield unit.derive(mark, offset)
                        offset += byte_len(mark)
                        continue
                    if self.replace_prolonged_marks_following_alnums and is_alnum(last_kind):
                        run.append(unit)
                        continue
            else:
                last_kind = char_type(unit.text)
            yield unit.with_offset(offset)
            offset += byte_len(unit.text)

        # A stream without a sentinel may end inside a run.
        for buffered in run:
            yield buffered.with_offset(offset)
            offset += byte_len(buffered.text)
