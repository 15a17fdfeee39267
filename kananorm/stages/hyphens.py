from __future__ import annotations

from typing import Iterable, Iterator, Sequence

from ..chain import Stage
from ..chars import CodePointUnit, byte_len
from ..errors import TransliterationConfigError

COLUMNS = ("ascii", "jisx0201", "jisx0208_90", "jisx0208_90_windows", "jisx0208_verbatim")
DEFAULT_PRECEDENCE = ("jisx0208_90",)

# character: (ascii, jisx0201, jisx0208_90, jisx0208_90_windows, jisx0208_verbatim)
MAPPINGS: dict[str, tuple[str | None, ...]] = {
    "-": ("-", "-", "−", "−", None),
    "|": ("|", "|", "｜", "｜", None),
    "~": ("~", "~", "〜", "～", None),
    "¢": (None, None, "¢", "￠", "¢"),
    "£": (None, None, "£", "￡", "£"),
    "¦": ("|", "|", "｜", "｜", "¦"),
    "˗": ("-", "-", "−", "－", None),
    "‐": ("-", "-", "‐", "‐", "‐"),
    "‑": ("-", "-", "‐", "‐", None),
    "‒": ("-", "-", "―", "―", None),
    "–": ("-", "-", "―", "―", "–"),
    "—": ("-", "-", "—", "―", "—"),
    "―": ("-", "-", "―", "―", "―"),
    "‖": (None, None, "‖", "∥", "‖"),
    "‾": (None, "~", "￣", "￣", "‽"),
    "⁃": ("-", "-", "‐", "‐", None),
    "⁓": ("~", "~", "〜", "〜", None),
    "−": ("-", "-", "−", "－", "−"),
    "∥": (None, None, "‖", "∥", "∥"),
    "∼": ("~", "~", "〜", "～", None),
    "∽": ("~", "~", "〜", "～", None),
    "─": ("-", "-", "―", "―", "─"),
    "━": ("-", "-", "―", "―", "━"),
    "│": ("|", "|", "｜", "｜", "│"),
    "➖": ("-", "-", "−", "－", None),
    "⧿": ("-", "-", "‐", "－", None),
    "⸺": ("-", "-", "—", "―", None),
    "⸻": ("-", "-", "—", "―", None),
    "〜": ("~", "~", "〜", "～", "〜"),
    "゠": ("=", "=", "＝", "＝", "゠"),
    "・": (None, "･", "・", "・", "・"),
    "ー": ("-", "-", "ー", "ー", "ー"),
    "︱": ("|", "|", "｜", "｜", None),
    "﹘": ("-", "-", "‐", "‐", None),
    "﹣": ("-", "-", "‐", "‐", None),
    "＂": ('"', '"', "″", "＂", None),
    "＇": ("'", "'", "′", "＇", None),
    "－": ("-", "-", "−", "－", None),
    "｜": ("|", "|", "｜", "｜", "｜"),
    "～": ("~", "~", "〜", "～", None),
    "￤": ("|", "|", "｜", "￤", "￤"),
    "ｰ": ("-", "ｰ", "ー", "ー", None),
    "￨": ("|", "|", "｜", "｜", None),
}


class HyphensStage(Stage):
    """Normalize hyphen, dash, tilde and bar look-alikes to one target repertoire.

    ``precedence`` lists mapping columns to try in order; the first column
    with an entry for the character wins.
    """

    name = "hyphens"

    def __init__(self, precedence: Sequence[str] | None = None):
        if precedence is None:
            precedence = DEFAULT_PRECEDENCE
        if isinstance(precedence, str):
            raise TransliterationConfigError("hyphens: precedence must be a list of column names")
        unknown = [p for p in precedence if p not in COLUMNS]
        if unknown:
            raise TransliterationConfigError(f"hyphens: unknown mapping columns {unknown}")
        self.precedence = tuple(precedence)
        self._indices = [COLUMNS.index(p) for p in self.precedence]

    def replacement(self, text: str) -> str | None:
        record = MAPPINGS.get(text)
        if record is None:
            return None
        for index in self._indices:
            if record[index] is not None:
                return record[index]
        return None

    def __call__(self, units: Iterable[CodePointUnit]) -> Iterator[CodePointUnit]:
        offset = 0
        for unit in units:
            replacement = self.replacement(unit.text)
            if replacement is None or replacement == unit.text:
                yield unit.with_offset(offset)
                offset += byte_len(unit.text)
            else:
                yield unit.derive(replacement, offset)
                offset += byte_len(replacement)

    def __repr__(self) -> str:
        return f"HyphensStage(precedence={list(self.precedence)!r})"
