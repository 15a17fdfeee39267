from __future__ import annotations

import unicodedata
from functools import lru_cache

from ..chain import TableStage

MATHEMATICAL_ALPHANUMERIC_SYMBOLS = range(0x1D400, 0x1D800)
LETTERLIKE_SYMBOLS = range(0x2100, 0x2150)


def _plain(folded: str) -> bool:
    return len(folded) == 1 and (folded.isascii() or "GREEK" in unicodedata.name(folded, ""))


@lru_cache(maxsize=None)
def mathematical_alphanumerics_table() -> dict[str, str]:
    """Styled letters and digits (𝐀, 𝔸, 𝟘, ℝ ...) to their plain form."""
    table: dict[str, str] = {}
    for cp in (*MATHEMATICAL_ALPHANUMERIC_SYMBOLS, *LETTERLIKE_SYMBOLS):
        ch = chr(cp)
        folded = unicodedata.normalize("NFKC", ch)
        if folded != ch and _plain(folded) and folded.isalnum():
            table[ch] = folded
    return table


class MathematicalAlphanumericsStage(TableStage):
    name = "mathematical-alphanumerics"

    def table(self):
        return mathematical_alphanumerics_table()
