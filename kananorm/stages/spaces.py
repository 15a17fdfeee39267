from __future__ import annotations

from functools import lru_cache

from ..chain import TableStage

SPACE_LIKE = (
    [0x00A0]
    + list(range(0x2000, 0x200B))
    + [0x200B, 0x202F, 0x205F, 0x3000, 0x3164, 0xFFA0]
)
# Invisible characters that are dropped outright.
ZERO_WIDTH = (0x180E, 0xFEFF)


@lru_cache(maxsize=None)
def spaces_table() -> dict[str, str]:
    table = {chr(cp): " " for cp in SPACE_LIKE}
    table.update((chr(cp), "") for cp in ZERO_WIDTH)
    return table


class SpacesStage(TableStage):
    """Replace the various Unicode space characters with U+0020."""

    name = "spaces"

    def table(self):
        return spaces_table()
