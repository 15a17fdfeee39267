from __future__ import annotations

from ..chain import TableStage

# ㆒..㆟ (kanbun annotation marks) in code point order
ANNOTATIONS = dict(zip(map(chr, range(0x3192, 0x31A0)), "一二三四上中下甲乙丙丁天地人"))


class IdeographicAnnotationsStage(TableStage):
    """Replace kanbun annotation marks with the ideographs they stand for."""

    name = "ideographic-annotations"

    def table(self):
        return ANNOTATIONS
