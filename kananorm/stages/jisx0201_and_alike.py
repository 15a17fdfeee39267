from __future__ import annotations

import threading
from typing import Iterable, Iterator, NamedTuple

from ..chain import Stage
from ..chars import CodePointUnit, byte_len
from .hira_kata_table import (
    hiragana_to_halfwidth_table,
    jisx0201_gr_table,
    voiced_letters_table,
)

# U+3000 and U+FF01..U+FF5D except U+FF3C, which is one of the overrides below.
GL_TABLE: dict[str, str] = {"\u3000": " "}
GL_TABLE.update(
    (chr(cp), chr(cp - 0xFEE0)) for cp in range(0xFF01, 0xFF5E) if cp != 0xFF3C
)

GL_OVERRIDES: dict[str, dict[str, str]] = {
    "u005c_as_yen_sign": {"￥": "\\"},
    "u005c_as_backslash": {"＼": "\\"},
    "u007e_as_fullwidth_tilde": {"～": "~"},
    "u007e_as_wave_dash": {"〜": "~"},
    "u007e_as_overline": {"‾": "~"},
    "u007e_as_fullwidth_macron": {"￣": "~"},
    "u00a5_as_yen_sign": {"￥": "¥"},
}
OVERRIDE_NAMES = tuple(GL_OVERRIDES)

SPECIAL_PUNCTUATIONS: dict[str, str] = {"゠": "="}


class _Key(NamedTuple):
    convert_gl: bool
    convert_gr: bool
    convert_unsafe_specials: bool
    convert_hiraganas: bool
    combine_voiced_sound_marks: bool
    overrides: tuple[bool, ...]


class _Tables(NamedTuple):
    forward: dict[str, str]
    reverse: dict[str, str]
    voiced_reverse: dict[str, dict[str, str]]


_cache: dict[_Key, _Tables] = {}
_cache_lock = threading.Lock()


def _enabled_overrides(key: _Key) -> list[dict[str, str]]:
    return [GL_OVERRIDES[n] for n, on in zip(OVERRIDE_NAMES, key.overrides) if on]


def _build_forward(key: _Key) -> dict[str, str]:
    table: dict[str, str] = {}
    if key.convert_gl:
        table.update(GL_TABLE)
        for override in _enabled_overrides(key):
            table.update(override)
        if key.convert_unsafe_specials:
            table.update(SPECIAL_PUNCTUATIONS)
    if key.convert_gr:
        table.update(jisx0201_gr_table())
        table.update(voiced_letters_table())
        table["\u3099"] = "\uff9e"
        table["\u309a"] = "\uff9f"
        if key.convert_hiraganas:
            table.update(hiragana_to_halfwidth_table())
    return table


def _inverted(table: dict[str, str]) -> dict[str, str]:
    return {v: k for k, v in table.items()}


def _build_reverse(key: _Key) -> dict[str, str]:
    table: dict[str, str] = {}
    if key.convert_gl:
        table.update(_inverted(GL_TABLE))
        for override in _enabled_overrides(key):
            table.update(_inverted(override))
        if key.convert_unsafe_specials:
            table.update(_inverted(SPECIAL_PUNCTUATIONS))
    if key.convert_gr:
        table.update(_inverted(jisx0201_gr_table()))
    return table


def _build_voiced_reverse(key: _Key) -> dict[str, dict[str, str]]:
    table: dict[str, dict[str, str]] = {}
    if key.combine_voiced_sound_marks and key.convert_gr:
        for fullwidth, halfwidth in voiced_letters_table().items():
            base, mark = halfwidth
            table.setdefault(base, {})[mark] = fullwidth
    return table


def mapping_tables(key: _Key) -> _Tables:
    """Return the tables for ``key``; identical keys share one instance."""
    tables = _cache.get(key)
    if tables is not None:
        return tables
    with _cache_lock:
        tables = _cache.get(key)
        if tables is None:
            tables = _Tables(
                _build_forward(key), _build_reverse(key), _build_voiced_reverse(key)
            )
            _cache[key] = tables
    return tables


class Jisx0201AndAlikeStage(Stage):
    """Convert between fullwidth characters and their JIS X 0201 counterparts.

    ``fullwidth_to_halfwidth`` picks the direction. The other options default
    differently per direction; an override left as ``None`` is derived from
    the ones that were given explicitly.
    """

    name = "jisx0201-and-alike"

    def __init__(
        self,
        fullwidth_to_halfwidth: bool = True,
        convert_gl: bool = True,
        convert_gr: bool = True,
        convert_unsafe_specials: bool | None = None,
        convert_hiraganas: bool = False,
        combine_voiced_sound_marks: bool = True,
        u005c_as_yen_sign: bool | None = None,
        u005c_as_backslash: bool | None = None,
        u007e_as_fullwidth_tilde: bool | None = None,
        u007e_as_wave_dash: bool | None = None,
        u007e_as_overline: bool | None = None,
        u007e_as_fullwidth_macron: bool | None = None,
        u00a5_as_yen_sign: bool | None = None,
    ):
        self.fullwidth_to_halfwidth = bool(fullwidth_to_halfwidth)

        def given(value: bool | None, default: bool) -> bool:
            return default if value is None else bool(value)

        if self.fullwidth_to_halfwidth:
            unsafe = given(convert_unsafe_specials, True)
            hiraganas = bool(convert_hiraganas)
            combine = False
            overrides = {
                "u005c_as_yen_sign": given(u005c_as_yen_sign, u00a5_as_yen_sign is None),
                "u005c_as_backslash": given(u005c_as_backslash, False),
                "u007e_as_fullwidth_tilde": given(u007e_as_fullwidth_tilde, True),
                "u007e_as_wave_dash": given(u007e_as_wave_dash, True),
                "u007e_as_overline": given(u007e_as_overline, False),
                "u007e_as_fullwidth_macron": given(u007e_as_fullwidth_macron, False),
                "u00a5_as_yen_sign": given(u00a5_as_yen_sign, False),
            }
        else:
            unsafe = given(convert_unsafe_specials, False)
            hiraganas = False
            combine = bool(combine_voiced_sound_marks)
            tilde_default = (
                u007e_as_wave_dash is None
                and u007e_as_overline is None
                and u007e_as_fullwidth_macron is None
            )
            overrides = {
                "u005c_as_yen_sign": given(u005c_as_yen_sign, u005c_as_backslash is None),
                "u005c_as_backslash": given(u005c_as_backslash, False),
                "u007e_as_fullwidth_tilde": given(u007e_as_fullwidth_tilde, tilde_default),
                "u007e_as_wave_dash": given(u007e_as_wave_dash, False),
                "u007e_as_overline": given(u007e_as_overline, False),
                "u007e_as_fullwidth_macron": given(u007e_as_fullwidth_macron, False),
                "u00a5_as_yen_sign": given(u00a5_as_yen_sign, False),
            }
        self.overrides = overrides
        self.key = _Key(
            bool(convert_gl),
            bool(convert_gr),
            unsafe,
            hiraganas,
            combine,
            tuple(overrides[n] for n in OVERRIDE_NAMES),
        )
        self.tables = mapping_tables(self.key)

    def __call__(self, units: Iterable[CodePointUnit]) -> Iterator[CodePointUnit]:
        if self.fullwidth_to_halfwidth:
            return self._to_halfwidth(units)
        return self._to_fullwidth(units)

    def _to_halfwidth(self, units: Iterable[CodePointUnit]) -> Iterator[CodePointUnit]:
        forward = self.tables.forward
        offset = 0
        for unit in units:
            mapped = forward.get(unit.text)
            if mapped is None:
                yield unit.with_offset(offset)
                offset += byte_len(unit.text)
            else:
                yield unit.derive(mapped, offset)
                offset += byte_len(mapped)

    def _to_fullwidth(self, units: Iterable[CodePointUnit]) -> Iterator[CodePointUnit]:
        reverse = self.tables.reverse
        voiced_reverse = self.tables.voiced_reverse
        offset = 0
        pending: CodePointUnit | None = None

        def emit(unit: CodePointUnit) -> CodePointUnit:
            mapped = reverse.get(unit.text)
            if mapped is None:
                return unit.with_offset(offset)
            return unit.derive(mapped, offset)

        for unit in units:
            if pending is not None:
                combined = voiced_reverse[pending.text].get(unit.text)
                if combined is not None:
                    yield pending.derive(combined, offset)
                    offset += byte_len(combined)
                    pending = None
                    continue
                out = emit(pending)
                yield out
                offset += byte_len(out.text)
                pending = None
            if unit.text in voiced_reverse:
                pending = unit
                continue
            out = emit(unit)
            yield out
            offset += byte_len(out.text)
        if pending is not None:
            yield emit(pending)

    def __repr__(self) -> str:
        return f"Jisx0201AndAlikeStage(fullwidth_to_halfwidth={self.fullwidth_to_halfwidth})"
