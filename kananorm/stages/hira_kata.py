from __future__ import annotations

import threading
from typing import Iterable, Iterator

import jaconv

from ..chain import Stage
from ..chars import CodePointUnit, byte_len
from ..errors import TransliterationConfigError
from .hira_kata_table import HIRAGANA_KATAKANA_TABLE, SMALL_KANA_TABLE

HIRA_TO_KATA = "hira_to_kata"
KATA_TO_HIRA = "kata_to_hira"
MODES = (HIRA_TO_KATA, KATA_TO_HIRA)

_tables: dict[str, dict[str, str]] = {}
_tables_lock = threading.Lock()


def _convertible(mode: str) -> list[str]:
    """Characters that have a counterpart in the other syllabary."""
    chars: list[str] = []
    for hira, hira_v, hira_s, kata, kata_v, kata_s, _ in HIRAGANA_KATAKANA_TABLE:
        pairs = ((hira, kata), (hira_v, kata_v), (hira_s, kata_s))
        for h, k in pairs:
            if h and k:
                chars.append(h if mode == HIRA_TO_KATA else k)
    for hira, kata, _ in SMALL_KANA_TABLE:
        chars.append(hira if mode == HIRA_TO_KATA else kata)
    return chars


def conversion_table(mode: str) -> dict[str, str]:
    """Return the per-character table for ``mode``, built once per process."""
    table = _tables.get(mode)
    if table is not None:
        return table
    with _tables_lock:
        table = _tables.get(mode)
        if table is None:
            convert = jaconv.hira2kata if mode == HIRA_TO_KATA else jaconv.kata2hira
            table = {}
            for ch in _convertible(mode):
                converted = convert(ch)
                if converted != ch:
                    table[ch] = converted
            _tables[mode] = table
    return table


class HiraKataStage(Stage):
    """Convert hiragana to katakana or the other way round."""

    name = "hira-kata"

    def __init__(self, mode: str = HIRA_TO_KATA):
        if mode not in MODES:
            raise TransliterationConfigError(
                f"hira-kata: unsupported mode {mode!r} (expected one of {', '.join(MODES)})"
            )
        self.mode = mode
        self.table = conversion_table(mode)

    def __call__(self, units: Iterable[CodePointUnit]) -> Iterator[CodePointUnit]:
        offset = 0
        for unit in units:
            converted = self.table.get(unit.text)
            if converted is None:
                yield unit.with_offset(offset)
                offset += byte_len(unit.text)
            else:
                yield unit.derive(converted, offset)
                offset += byte_len(converted)

    def __repr__(self) -> str:
        return f"HiraKataStage(mode={self.mode!r})"
