from __future__ import annotations

from typing import Iterable, Iterator, Mapping

from ..chain import Stage
from ..chars import CodePointUnit, byte_len
from .hira_kata_table import semi_voiced_characters, voiced_characters

COMBINING_VOICED_MARK = "\u3099"
COMBINING_SEMI_VOICED_MARK = "\u309a"
VOICED_MARK = "\u309b"
SEMI_VOICED_MARK = "\u309c"


class HiraKataCompositionStage(Stage):
    """Compose a kana followed by a voiced or semi-voiced mark into one character.

    Parameters
    ----------
    compose_non_combining_marks : bool, default False
        Also treat the spacing marks ゛ (U+309B) and ゜ (U+309C) as triggers.
    """

    name = "hira-kata-composition"

    def __init__(self, compose_non_combining_marks: bool = False):
        self.compose_non_combining_marks = bool(compose_non_combining_marks)
        voiced = voiced_characters()
        semi_voiced = semi_voiced_characters()
        self.marks: dict[str, Mapping[str, str]] = {
            COMBINING_VOICED_MARK: voiced,
            COMBINING_SEMI_VOICED_MARK: semi_voiced,
        }
        if self.compose_non_combining_marks:
            self.marks[VOICED_MARK] = voiced
            self.marks[SEMI_VOICED_MARK] = semi_voiced

    def __call__(self, units: Iterable[CodePointUnit]) -> Iterator[CodePointUnit]:
        offset = 0
        pending: CodePointUnit | None = None
        for unit in units:
            if pending is not None:
                table = self.marks.get(unit.text)
                composed = table.get(pending.text) if table is not None else None
                if composed is not None:
                    yield pending.derive(composed, offset)
                    offset += byte_len(composed)
                    pending = None
                    continue
                yield pending.with_offset(offset)
                offset += byte_len(pending.text)
                pending = None
            if unit.is_sentinel():
                yield unit.with_offset(offset)
                continue
            pending = unit
        if pending is not None:
            yield pending.with_offset(offset)

    def __repr__(self) -> str:
        return (
            "HiraKataCompositionStage("
            f"compose_non_combining_marks={self.compose_non_combining_marks})"
        )
