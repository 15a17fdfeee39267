from __future__ import annotations

from ..chain import TableStage

_VALUES = ("I", "II", "III", "IV", "V", "VI", "VII", "VIII", "IX", "X", "XI", "XII", "L", "C", "D", "M")

ROMAN_NUMERALS: dict[str, str] = {}
for _i, _value in enumerate(_VALUES):
    ROMAN_NUMERALS[chr(0x2160 + _i)] = _value
    ROMAN_NUMERALS[chr(0x2170 + _i)] = _value.lower()


class RomanNumeralsStage(TableStage):
    """Spell Ⅰ..Ⅿ and ⅰ..ⅿ with ASCII letters, one unit per letter."""

    name = "roman-numerals"

    def table(self):
        return ROMAN_NUMERALS
