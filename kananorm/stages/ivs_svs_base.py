from __future__ import annotations

import logging
import os
import struct
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from ..chain import Stage
from ..chars import CodePointUnit, byte_len, is_variation_selector
from ..errors import IvsSvsDataError, TransliterationConfigError

logger = logging.getLogger(__name__)

DATA_ENV = "KANANORM_IVS_SVS_DATA"
DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "ivs_svs_base.data"

CHARSETS = ("unijis_90", "unijis_2004")
MODES = ("base", "ivs-or-svs")

HEADER = struct.Struct(">I")
RECORD = struct.Struct(">6I")


@dataclass(frozen=True)
class Variants:
    ivs: str | None
    svs: str | None


@dataclass(frozen=True)
class Bases:
    unijis_90: str | None
    unijis_2004: str | None

    def for_charset(self, charset: str) -> str | None:
        return self.unijis_90 if charset == "unijis_90" else self.unijis_2004


@dataclass(frozen=True)
class IvsSvsTables:
    base_to_variants: dict[str, dict[str, Variants]]
    variant_to_bases: dict[str, Bases]


def _sequence(first: int, second: int) -> str | None:
    if not first:
        return None
    return chr(first) + (chr(second) if second else "")


def parse_tables(data: bytes) -> IvsSvsTables:
    """Decode the binary layout: a big-endian record count, then six uint32 per record."""
    if len(data) < HEADER.size:
        raise IvsSvsDataError("IVS/SVS data is truncated: missing record count")
    (count,) = HEADER.unpack_from(data)
    expected = HEADER.size + count * RECORD.size
    if len(data) != expected:
        raise IvsSvsDataError(
            f"IVS/SVS data size mismatch: {count} records need {expected} bytes, got {len(data)}"
        )
    base_to_variants: dict[str, dict[str, Variants]] = {c: {} for c in CHARSETS}
    variant_to_bases: dict[str, Bases] = {}
    for ivs1, ivs2, svs1, svs2, base90, base2004 in RECORD.iter_unpack(data[HEADER.size:]):
        variants = Variants(_sequence(ivs1, ivs2), _sequence(svs1, svs2))
        bases = Bases(chr(base90) if base90 else None, chr(base2004) if base2004 else None)
        if bases.unijis_90 is not None:
            base_to_variants["unijis_90"][bases.unijis_90] = variants
        if bases.unijis_2004 is not None:
            base_to_variants["unijis_2004"][bases.unijis_2004] = variants
        if variants.ivs is not None:
            variant_to_bases[variants.ivs] = bases
        if variants.svs is not None:
            variant_to_bases[variants.svs] = bases
    return IvsSvsTables(base_to_variants, variant_to_bases)


_tables: IvsSvsTables | None = None
_tables_lock = threading.Lock()


def data_path() -> Path:
    override = os.getenv(DATA_ENV)
    return Path(override) if override else DEFAULT_DATA_PATH


def load_tables() -> IvsSvsTables:
    """Parse the IVS/SVS table on first use; later calls return the same object."""
    global _tables
    if _tables is not None:
        return _tables
    with _tables_lock:
        if _tables is None:
            path = data_path()
            try:
                data = path.read_bytes()
            except OSError as exc:
                raise IvsSvsDataError(f"IVS/SVS data file not readable: {path}") from exc
            tables = parse_tables(data)
            logger.info(
                "loaded %d IVS/SVS variant entries from %s",
                len(tables.variant_to_bases),
                path,
            )
            _tables = tables
    return _tables


def reset_tables() -> None:
    """Forget the loaded table so the next stage reloads it."""
    global _tables
    with _tables_lock:
        _tables = None


def strip_selectors(text: str) -> str:
    return "".join(ch for ch in text if not is_variation_selector(ord(ch)))


class IvsSvsBaseStage(Stage):
    """Add or remove ideographic/standardized variation selectors.

    Parameters
    ----------
    mode : {"base", "ivs-or-svs"}, default "base"
        ``"ivs-or-svs"`` expands base characters into a variation sequence,
        ``"base"`` folds variation sequences back to their base character.
    charset : {"unijis_2004", "unijis_90"}, default "unijis_2004"
        Which JIS edition decides the base character.
    drop_selectors_altogether : bool, default False
        In base mode, also strip selectors from sequences missing from the table.
    prefer_svs : bool, default False
        In ivs-or-svs mode, emit the SVS form when the table has one.
    """

    name = "ivs-svs-base"

    def __init__(
        self,
        mode: str = "base",
        charset: str = "unijis_2004",
        drop_selectors_altogether: bool = False,
        prefer_svs: bool = False,
    ):
        if mode not in MODES:
            raise TransliterationConfigError(f"ivs-svs-base: unsupported mode {mode!r}")
        if charset not in CHARSETS:
            raise TransliterationConfigError(f"ivs-svs-base: unsupported charset {charset!r}")
        self.mode = mode
        self.charset = charset
        self.drop_selectors_altogether = bool(drop_selectors_altogether)
        self.prefer_svs = bool(prefer_svs)
        self.tables = load_tables()

    def __call__(self, units: Iterable[CodePointUnit]) -> Iterator[CodePointUnit]:
        if self.mode == "ivs-or-svs":
            return self._expand(units)
        return self._fold(units)

    def _expand(self, units: Iterable[CodePointUnit]) -> Iterator[CodePointUnit]:
        table = self.tables.base_to_variants[self.charset]
        offset = 0
        for unit in units:
            variants = table.get(unit.text)
            replacement = None
            if variants is not None:
                if self.prefer_svs and variants.svs is not None:
                    replacement = variants.svs
                else:
                    replacement = variants.ivs
            if replacement is None:
                yield unit.with_offset(offset)
                offset += byte_len(unit.text)
            else:
                yield unit.derive(replacement, offset)
                offset += byte_len(replacement)

    def _fold(self, units: Iterable[CodePointUnit]) -> Iterator[CodePointUnit]:
        table = self.tables.variant_to_bases
        offset = 0
        for unit in units:
            bases = table.get(unit.text)
            replacement = None
            if bases is not None:
                replacement = bases.for_charset(self.charset)
            elif self.drop_selectors_altogether:
                replacement = strip_selectors(unit.text)
            if replacement is None or replacement == unit.text:
                yield unit.with_offset(offset)
                offset += byte_len(unit.text)
            else:
                yield unit.derive(replacement, offset)
                offset += byte_len(replacement)

    def __repr__(self) -> str:
        return f"IvsSvsBaseStage(mode={self.mode!r}, charset={self.charset!r})"


def _codepoints(seq: list[str] | None) -> tuple[int, int]:
    values = [int(cp.removeprefix("U+"), 16) for cp in seq or ()]
    if len(values) > 2:
        raise ValueError(f"variation sequence too long: {seq}")
    values += [0] * (2 - len(values))
    return values[0], values[1]


def _codepoint(value: str | None) -> int:
    return int(value.removeprefix("U+"), 16) if value else 0


def encode_records(records: list[dict]) -> bytes:
    """Pack JSON-style records (``ivs``, ``svs``, ``base90``, ``base2004``) into the binary layout."""
    chunks = [HEADER.pack(len(records))]
    for record in records:
        chunks.append(
            RECORD.pack(
                *_codepoints(record.get("ivs")),
                *_codepoints(record.get("svs")),
                _codepoint(record.get("base90")),
                _codepoint(record.get("base2004")),
            )
        )
    return b"".join(chunks)
