from __future__ import annotations

import re
import unicodedata
from functools import lru_cache
from typing import Mapping, NamedTuple

from ..chain import TableStage
from ..errors import TransliterationConfigError

CIRCLED_OR_SQUARED_RANGES = (
    range(0x2460, 0x2474),
    range(0x24B6, 0x2500),
    range(0x2776, 0x2794),
    range(0x3244, 0x3250),
    range(0x3251, 0x3260),
    range(0x3260, 0x327F),
    range(0x3280, 0x32C0),
    range(0x32D0, 0x32FF),
    range(0x1F10B, 0x1F110),
    range(0x1F12B, 0x1F1AE),
    range(0x1F1E6, 0x1F200),
    range(0x1F200, 0x1F240),
    range(0x1F250, 0x1F252),
)

CIRCLE = "circle"
SQUARE = "square"
DEFAULT_TEMPLATES = {CIRCLE: "(?)", SQUARE: "[?]"}

# Emoji_Presentation characters in the ranges above. Regional indicators are
# left out so that they are always written as letters.
EMOJIS = frozenset(
    chr(cp)
    for cp in (
        0x1F18E,
        *range(0x1F191, 0x1F19B),
        0x1F201, 0x1F21A, 0x1F22F,
        *range(0x1F232, 0x1F237),
        *range(0x1F238, 0x1F23B),
        0x1F250, 0x1F251,
    )
)

NUMBER_WORDS = {
    word: n
    for n, word in enumerate(
        "ZERO ONE TWO THREE FOUR FIVE SIX SEVEN EIGHT NINE TEN ELEVEN TWELVE "
        "THIRTEEN FOURTEEN FIFTEEN SIXTEEN SEVENTEEN EIGHTEEN NINETEEN TWENTY".split()
    )
}

_LETTER_RE = re.compile(r"LATIN CAPITAL LETTER ([A-Z])$")
_NUMBER_RE = re.compile(r"(?:DIGIT|NUMBER) ([A-Z]+)$")
_WORD_RE = re.compile(r"^(?:NEGATIVE )?SQUARED ([A-Z]{2,4})$")
_REGIONAL_RE = re.compile(r"^REGIONAL INDICATOR SYMBOL LETTER ([A-Z])$")


def _shape(name: str) -> str | None:
    if "CIRCLED" in name:
        return CIRCLE
    if "SQUARED" in name or name.startswith(("SQUARE ", "REGIONAL INDICATOR ")):
        return SQUARE
    return None


def _inner(ch: str, name: str) -> str | None:
    """Return what is drawn inside the circle or square, if it can be told."""
    folded = unicodedata.normalize("NFKC", ch)
    if folded != ch:
        return folded
    for pattern in (_LETTER_RE, _WORD_RE, _REGIONAL_RE):
        match = pattern.search(name)
        if match:
            return match.group(1)
    match = _NUMBER_RE.search(name)
    if match and match.group(1) in NUMBER_WORDS:
        return str(NUMBER_WORDS[match.group(1)])
    return None


class Record(NamedTuple):
    rendering: str
    shape: str
    emoji: bool


@lru_cache(maxsize=None)
def circled_or_squared_records() -> dict[str, Record]:
    records: dict[str, Record] = {}
    for cps in CIRCLED_OR_SQUARED_RANGES:
        for cp in cps:
            ch = chr(cp)
            name = unicodedata.name(ch, "")
            shape = _shape(name)
            if shape is None:
                continue
            inner = _inner(ch, name)
            if inner:
                records[ch] = Record(inner, shape, ch in EMOJIS)
    return records


@lru_cache(maxsize=None)
def circled_or_squared_table(
    include_emojis: bool,
    circle: str = DEFAULT_TEMPLATES[CIRCLE],
    square: str = DEFAULT_TEMPLATES[SQUARE],
) -> dict[str, str]:
    """Render every record through its template; ``?`` stands for the inner text."""
    templates = {CIRCLE: circle, SQUARE: square}
    table: dict[str, str] = {}
    for ch, record in circled_or_squared_records().items():
        if record.emoji and not include_emojis:
            continue
        replacement = templates[record.shape].replace("?", record.rendering)
        if replacement:
            table[ch] = replacement
    return table


class CircledOrSquaredStage(TableStage):
    """Write circled and squared characters as ``(X)`` and ``[X]``.

    Parameters
    ----------
    templates : Mapping[str, str], optional
        ``"circle"`` and/or ``"square"`` templates, where ``?`` is replaced
        by the enclosed text. Defaults are ``"(?)"`` and ``"[?]"``.
    include_emojis : bool, default False
        Also convert characters that are normally rendered as emoji (🆘, 🈁, 🉐 ...).
    """

    name = "circled-or-squared"

    def __init__(
        self,
        templates: Mapping[str, str] | None = None,
        include_emojis: bool = False,
    ):
        templates = dict(templates or {})
        unknown = sorted(set(templates) - set(DEFAULT_TEMPLATES))
        if unknown:
            raise TransliterationConfigError(
                f"circled-or-squared: unknown template names {', '.join(unknown)}"
            )
        self.templates = {**DEFAULT_TEMPLATES, **templates}
        self.include_emojis = bool(include_emojis)

    def table(self):
        return circled_or_squared_table(
            self.include_emojis, self.templates[CIRCLE], self.templates[SQUARE]
        )

    def __repr__(self) -> str:
        return (
            f"CircledOrSquaredStage(templates={self.templates!r}, "
            f"include_emojis={self.include_emojis})"
        )
