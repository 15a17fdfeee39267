from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Iterator, Mapping, Sequence

from .chars import CodePointUnit, byte_len, segments
from .errors import TransliterationConfigError


class Stage(ABC):
    """A single-pass rewrite over a stream of units.

    Subclasses implement ``__call__`` as a generator. Every stage owns its
    output offsets: it starts counting at zero and never reuses the offsets
    of the units it receives.
    """

    name = ""

    @abstractmethod
    def __call__(self, units: Iterable[CodePointUnit]) -> Iterator[CodePointUnit]:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class TableStage(Stage):
    """Per-unit lookup against a fixed ``str -> str`` table.

    A replacement longer than one character is emitted as one unit per
    character (a variation selector stays with its base); an empty
    replacement drops the unit.
    """

    @abstractmethod
    def table(self) -> Mapping[str, str]:
        ...

    def __call__(self, units: Iterable[CodePointUnit]) -> Iterator[CodePointUnit]:
        table = self.table()
        offset = 0
        for unit in units:
            replacement = table.get(unit.text)
            if replacement is None:
                yield unit.with_offset(offset)
                offset += byte_len(unit.text)
                continue
            for segment in segments(replacement):
                yield unit.derive(segment, offset)
                offset += byte_len(segment)


class StageChain(Stage):
    """Feed the output of each stage into the next one, lazily."""

    def __init__(self, stages: Sequence[Stage]):
        if not stages:
            raise TransliterationConfigError(
                "At least one transliterator must be specified"
            )
        self.stages = list(stages)

    def __call__(self, units: Iterable[CodePointUnit]) -> Iterator[CodePointUnit]:
        stream: Iterable[CodePointUnit] = units
        for stage in self.stages:
            stream = stage(stream)
        return iter(stream)

    def __repr__(self) -> str:
        return f"StageChain({self.stages!r})"
