from __future__ import annotations

import logging
from io import BytesIO
from typing import Any, Callable, Mapping, Optional

import pandas as pd

from .recipe import TransliterationRecipe

logger = logging.getLogger(__name__)

CHANGED_COL = "変更"


def recipe_from_flags(flags: Mapping[str, Any]) -> TransliterationRecipe:
    """Build a recipe from form values, ignoring unset and unknown entries.

    Empty strings and ``None`` are treated as "not selected".
    """
    fields = TransliterationRecipe.__dataclass_fields__
    kwargs = {
        key: value
        for key, value in flags.items()
        if key in fields and value not in (None, "")
    }
    return TransliterationRecipe(**kwargs)


def normalize_dataframe(
    df: pd.DataFrame,
    column: str,
    transliterate: Callable[[str], str],
    on_progress: Optional[Callable[[int, int], None]] = None,
    output_column: str | None = None,
) -> pd.DataFrame:
    """Apply ``transliterate`` to ``column`` and append the result.

    Identical cell values are converted only once.

    Parameters
    ----------
    df : pd.DataFrame
        Input data.
    column : str
        Column to normalize.
    transliterate : Callable[[str], str]
        Function returned by ``make_transliterator``.
    on_progress : Callable[[int, int], None] | None
        Optional callback receiving processed and total counts.
    output_column : str | None
        Name of the result column. Defaults to ``"<column>_正規化"``.
    """
    out_col = output_column or f"{column}_正規化"
    total = len(df)
    results: list[str] = []
    changed: list[bool] = []
    seen: dict[str, str] = {}

    for done, value in enumerate(df[column], start=1):
        text = "" if pd.isna(value) else str(value)
        if text not in seen:
            seen[text] = transliterate(text)
        results.append(seen[text])
        changed.append(seen[text] != text)
        if on_progress:
            on_progress(done, total)

    logger.info(
        "normalized %d rows of %r (%d unique, %d changed)",
        total,
        column,
        len(seen),
        sum(changed),
    )
    df = df.copy()
    df[out_col] = results
    df[CHANGED_COL] = changed
    return df


def to_excel_bytes(
    df: pd.DataFrame, template_bytes: bytes | None = None
) -> bytes:
    """Return Excel bytes for ``df``.

    If ``template_bytes`` is provided the workbook is loaded with ``openpyxl``
    and its first sheet is overwritten with ``df`` while preserving existing
    formatting. Otherwise a fresh workbook is written with ``xlsxwriter``."""
    if template_bytes:
        buf = BytesIO(template_bytes)
        with pd.ExcelWriter(
            buf,
            engine="openpyxl",
            mode="a",
            if_sheet_exists="replace",
        ) as writer:
            sheet = (
                writer.book.sheetnames[0]
                if writer.book.sheetnames
                else "Sheet1"
            )
            df.to_excel(writer, index=False, sheet_name=sheet)
        buf.seek(0)
        return buf.getvalue()
    else:
        buf = BytesIO()
        with pd.ExcelWriter(buf, engine="xlsxwriter") as writer:
            df.to_excel(writer, index=False)
        return buf.getvalue()
