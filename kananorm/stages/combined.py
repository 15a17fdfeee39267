from __future__ import annotations

import unicodedata
from functools import lru_cache

from ..chain import TableStage

# Parenthesized/full-stop forms, telegraph symbols, squared katakana words,
# era names and unit symbols. Circled and squared single letters are handled
# by the circled-or-squared stage.
COMBINED_RANGES = (
    range(0x2474, 0x24B6),
    range(0x3200, 0x321F),
    range(0x3220, 0x3244),
    range(0x32C0, 0x32D0),
    range(0x3300, 0x3400),
    range(0x1F100, 0x1F10B),
    range(0x1F110, 0x1F12B),
)

# Control Pictures have no decomposition; they spell the control code's
# abbreviation.
CONTROL_PICTURES = dict(
    zip(
        map(chr, range(0x2400, 0x2422)),
        (
            "NUL SOH STX ETX EOT ENQ ACK BEL BS HT LF VT FF CR SO SI "
            "DLE DC1 DC2 DC3 DC4 NAK SYN ETB CAN EM SUB ESC FS GS RS US SP DEL"
        ).split(),
    )
)
CONTROL_PICTURES["\u2424"] = "NL"


@lru_cache(maxsize=None)
def combined_table() -> dict[str, str]:
    table: dict[str, str] = {}
    for cps in COMBINED_RANGES:
        for cp in cps:
            ch = chr(cp)
            expanded = unicodedata.normalize("NFKC", ch)
            if len(expanded) > 1:
                table[ch] = expanded
    table.update(CONTROL_PICTURES)
    return table


class CombinedStage(TableStage):
    """Expand characters that pack several characters into one (⑴, ㍿, ㎏ ...)."""

    name = "combined"

    def table(self):
        return combined_table()
