from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator


def byte_len(text: str) -> int:
    """Return the UTF-8 length of ``text``."""
    return len(text.encode("utf-8"))


def is_variation_selector(codepoint: int) -> bool:
    return 0xFE00 <= codepoint <= 0xFE0F or 0xE0100 <= codepoint <= 0xE01EF


@dataclass(frozen=True)
class CodePointUnit:
    """One logical character flowing through the pipeline.

    ``text`` holds a base character and optionally one variation selector.
    The sentinel that terminates every stream has an empty ``text``.
    ``offset`` is the UTF-8 byte offset in the output being built and
    ``origin`` points at the unit this one was derived from.
    """

    text: str
    offset: int
    origin: CodePointUnit | None = field(default=None, repr=False, compare=False)

    def with_offset(self, offset: int) -> CodePointUnit:
        return CodePointUnit(self.text, offset, self)

    def derive(self, text: str, offset: int) -> CodePointUnit:
        """Return a replacement unit carrying ``text`` that points back at ``self``."""
        return CodePointUnit(text, offset, self)

    def is_sentinel(self) -> bool:
        return self.text == ""

    def is_transliterated(self) -> bool:
        """Return True if any ancestor in the origin chain had different text."""
        unit = self
        while unit.origin is not None:
            if unit.text != unit.origin.text:
                return True
            unit = unit.origin
        return False


def segments(text: str) -> Iterator[str]:
    """Yield the characters of ``text``, keeping a variation selector with its base."""
    pending: str | None = None
    for ch in text:
        if pending is not None:
            if is_variation_selector(ord(ch)):
                yield pending + ch
                pending = None
                continue
            yield pending
        pending = ch
    if pending is not None:
        yield pending


def iter_units(text: str) -> Iterator[CodePointUnit]:
    """Yield units for ``text`` lazily, followed by the sentinel."""
    offset = 0
    for segment in segments(text):
        yield CodePointUnit(segment, offset)
        offset += byte_len(segment)
    yield CodePointUnit("", offset)


def build_units(text: str) -> list[CodePointUnit]:
    """Split ``text`` into units, always ending with a sentinel."""
    return list(iter_units(text))


def flatten(units: Iterable[CodePointUnit]) -> str:
    """Concatenate unit texts back into a string, ignoring sentinels."""
    return "".join(unit.text for unit in units if unit.text)
