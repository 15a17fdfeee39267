from __future__ import annotations

import unicodedata
from functools import lru_cache

from ..chain import TableStage

KANGXI_RADICALS = range(0x2F00, 0x2FD6)
RADICALS_SUPPLEMENT = range(0x2E80, 0x2EF4)

# Supplement forms without a compatibility decomposition, mapped to the
# unified ideograph used for the same component.
SUPPLEMENT_EXTRAS = {
    "⺅": "亻",
    "⺉": "刂",
    "⺖": "忄",
    "⺘": "扌",
    "⺡": "氵",
    "⺨": "犭",
    "⻌": "辶",
    "⻏": "阝",
    "⻖": "阝",
}


@lru_cache(maxsize=None)
def radicals_table() -> dict[str, str]:
    table: dict[str, str] = {}
    for cp in (*KANGXI_RADICALS, *RADICALS_SUPPLEMENT):
        ch = chr(cp)
        folded = unicodedata.normalize("NFKC", ch)
        if folded != ch and len(folded) == 1:
            table[ch] = folded
    table.update(SUPPLEMENT_EXTRAS)
    return table


class RadicalsStage(TableStage):
    """Replace CJK radical symbols with the equivalent ideographs."""

    name = "radicals"

    def table(self):
        return radicals_table()
