"""Spreadsheet loading primitives shared by every import.

Provides the column-mapping and result containers plus the functions that
turn an uploaded workbook into plain ``{header: value}`` row dicts.  The
row-level mapping itself lives in ``row_mapper``.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, BinaryIO

import pandas as pd

from app.parsers.transforms import is_blank

logger = logging.getLogger(__name__)

FILE_ERROR_MESSAGE = "Erro ao processar arquivo Excel"


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ColumnMapping:
    """Pairs a spreadsheet header with a model field.

    Several mappings may share ``target_field`` to accept legacy header
    spellings; the first one that carries a value on a given row is used.

    Attributes:
        source_header: Header text as it appears in the template.
        target_field: Column name on the SQLAlchemy model.
        required: A blank value invalidates the row.
        transform: Optional cell normaliser from ``transforms``.
    """

    source_header: str
    target_field: str
    required: bool = False
    transform: Callable[[Any], Any] | None = None


@dataclass
class ImportResult:
    """Outcome of mapping spreadsheet rows onto one entity.

    Attributes:
        data: Normalised rows that passed validation, keyed by model field.
        errors: Row-level messages (``"Linha N: ..."``).
        total_rows: Rows read from the sheet, valid or not.
        row_numbers: Spreadsheet row number of each entry in ``data``.
    """

    data: list[dict[str, Any]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    total_rows: int = 0
    row_numbers: list[int] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return len(self.errors) == 0

    @property
    def valid_rows(self) -> int:
        return len(self.data)

    @property
    def invalid_rows(self) -> int:
        return self.total_rows - self.valid_rows

    def summary(self) -> str:
        status = "OK" if self.success else "ERRO"
        return (
            f"[{status}] total={self.total_rows} "
            f"validas={self.valid_rows} erros={len(self.errors)}"
        )


# ---------------------------------------------------------------------------
# Source handling
# ---------------------------------------------------------------------------


def read_source(source: str | Path | bytes | BinaryIO) -> bytes:
    """Normalise a path, raw bytes or binary file object to bytes."""
    if isinstance(source, bytes):
        return source
    if isinstance(source, (str, Path)):
        return Path(source).read_bytes()
    data = source.read()
    if hasattr(source, "seek"):
        source.seek(0)
    return data if isinstance(data, bytes) else data.encode()


def _load_first_sheet(raw: bytes, nrows: int | None = None) -> pd.DataFrame:
    try:
        return pd.read_excel(
            io.BytesIO(raw),
            sheet_name=0,
            header=0,
            nrows=nrows,
            dtype=object,
            engine="openpyxl",
        )
    except Exception as exc:
        logger.warning("Failed to read workbook: %s", exc)
        raise ValueError(FILE_ERROR_MESSAGE) from exc


def _clean_cell(value: Any) -> Any:
    if is_blank(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return value.strip()
    return value


def _is_placeholder_header(header: str) -> bool:
    return header.startswith("Unnamed:")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_file(source: str | Path | bytes | BinaryIO) -> list[dict[str, Any]]:
    """Read the first sheet of a workbook into header→value dicts.

    The first row is the header.  Fully blank rows are dropped and blank
    cells become ``None``.

    Args:
        source: File path, raw bytes or an open binary file.

    Returns:
        One dict per non-blank data row, in sheet order.

    Raises:
        ValueError: ``"Erro ao processar arquivo Excel"`` when the file
            cannot be read as a workbook.
    """
    raw = read_source(source)
    df = _load_first_sheet(raw)
    df.columns = [str(col).strip() for col in df.columns]

    rows: list[dict[str, Any]] = []
    for record in df.to_dict(orient="records"):
        cleaned = {header: _clean_cell(value) for header, value in record.items()}
        if all(value is None for value in cleaned.values()):
            continue
        rows.append(cleaned)

    logger.debug("Parsed %d rows with %d columns", len(rows), len(df.columns))
    return rows


def extract_headers(source: str | Path | bytes | BinaryIO) -> list[str]:
    """Return the header row of the first sheet, skipping unnamed columns."""
    raw = read_source(source)
    df = _load_first_sheet(raw, nrows=0)
    headers = [str(col).strip() for col in df.columns]
    return [header for header in headers if header and not _is_placeholder_header(header)]
