"""Regenerate kananorm/data/ivs_svs_base.data from the JSON source.

Usage: python scripts/build_ivs_svs_data.py [SOURCE_JSON] [OUTPUT_DATA]
"""
import json
import sys
from pathlib import Path

from kananorm.stages.ivs_svs_base import encode_records, parse_tables
from kananorm.stages.kanji_old_new import kanji_characters

DATA_DIR = Path(__file__).resolve().parent.parent / "kananorm" / "data"


def main(argv: list[str]) -> None:
    source = Path(argv[0]) if argv else DATA_DIR / "ivs_svs_base.json"
    output = Path(argv[1]) if len(argv) > 1 else DATA_DIR / "ivs_svs_base.data"

    records = json.loads(source.read_text(encoding="utf-8"))
    data = encode_records(records)
    # parse back so a broken source never replaces a good table
    tables = parse_tables(data)
    # kanji-old-new only sees characters the ivs-svs-base stage expanded
    missing = [
        ch for ch in kanji_characters()
        if ch not in tables.base_to_variants["unijis_2004"]
        or ch not in tables.base_to_variants["unijis_90"]
    ]
    if missing:
        raise SystemExit(f"no IVS record for: {''.join(missing)}")
    output.write_bytes(data)

    print(f"records: {len(records)}")
    print(f"variant sequences: {len(tables.variant_to_bases)}")
    print(f"written: {output} ({len(data)} bytes)")


if __name__ == '__main__':
    main(sys.argv[1:])
