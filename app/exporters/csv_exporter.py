"""
CSV export helper built on pandas.

Writes the semicolon-separated layout spreadsheet programs in Brazilian
locale open directly: every field quoted, ``"`` doubled inside values,
``\\n`` line endings, UTF-8 with a byte-order mark.
"""

import csv
from typing import Any, Sequence

import pandas as pd

CSV_SEPARATOR = ";"
CSV_ENCODING = "utf-8-sig"


def export_csv(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> bytes:
    """Serialise already-formatted rows to CSV bytes.

    Args:
        headers: Column header strings.
        rows: Data rows of text values (see ``formatting.format_value``).

    Returns:
        The encoded CSV, BOM included.
    """
    frame = pd.DataFrame([list(row) for row in rows], columns=list(headers), dtype=object)
    text = frame.to_csv(
        sep=CSV_SEPARATOR,
        index=False,
        quoting=csv.QUOTE_ALL,
        lineterminator="\n",
    )
    return text.encode(CSV_ENCODING)
