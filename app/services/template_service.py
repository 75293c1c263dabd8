"""
Template service — blank import spreadsheets for each entity.

Builds an ``.xlsx`` with a single ``Template`` sheet whose first row holds
the labels of the entity's ``template_columns``; the import engine reads
exactly that header row back.

Design notes
------------
- Uses ``openpyxl`` directly; workbooks are built in memory and returned
  as bytes so the router can stream them without touching disk.
- Every column gets a fixed width of 20 characters.
- Required columns are marked with a darker header fill so users can tell
  them apart before uploading.
"""

from __future__ import annotations

import io
import logging
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from app.parsers.import_configs import ImportConfig

logger = logging.getLogger(__name__)

TEMPLATE_SHEET_NAME = "Template"
TEMPLATE_COLUMN_WIDTH = 20

# ---------------------------------------------------------------------------
# Design tokens (kept in sync with excel_exporter.py)
# ---------------------------------------------------------------------------

_HEX_PRIMARY = "1E40AF"        # header background
_HEX_REQUIRED = "1E3A5F"       # header background for required columns
_HEX_WHITE = "FFFFFF"
_HEX_BORDER = "CBD5E1"


def _make_thin_border() -> Border:
    side = Side(style="thin", color=_HEX_BORDER)
    return Border(left=side, right=side, top=side, bottom=side)


def _apply_col_header_style(cell: Any, required: bool = False) -> None:
    cell.font = Font(bold=True, color=_HEX_WHITE, size=11, name="Calibri")
    cell.fill = PatternFill(
        fill_type="solid",
        fgColor=_HEX_REQUIRED if required else _HEX_PRIMARY,
    )
    cell.border = _make_thin_border()
    cell.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_template(
    columns: list[tuple[str, str]],
    filename: str,
    required_labels: set[str] | None = None,
) -> tuple[str, bytes]:
    """Build an empty import spreadsheet.

    Args:
        columns: ``(key, label)`` pairs; labels become the header row.
        filename: Base name, without extension.
        required_labels: Labels to highlight as mandatory.

    Returns:
        ``("{filename}_template.xlsx", workbook_bytes)``.
    """
    required_labels = required_labels or set()

    wb = Workbook()
    ws = wb.active
    ws.title = TEMPLATE_SHEET_NAME  # type: ignore[union-attr]

    for col_idx, (_, label) in enumerate(columns, start=1):
        cell = ws.cell(row=1, column=col_idx, value=label)  # type: ignore[union-attr]
        _apply_col_header_style(cell, required=label in required_labels)
        ws.column_dimensions[get_column_letter(col_idx)].width = TEMPLATE_COLUMN_WIDTH  # type: ignore[union-attr]

    ws.row_dimensions[1].height = 22  # type: ignore[union-attr]
    ws.freeze_panes = "A2"  # type: ignore[union-attr]

    buffer = io.BytesIO()
    wb.save(buffer)
    name = f"{filename}_template.xlsx"
    logger.info("build_template: '%s' with %d columns", name, len(columns))
    return name, buffer.getvalue()


def build_entity_template(config: ImportConfig) -> tuple[str, bytes]:
    """Template for one registry entry, required headers highlighted."""
    required = {mapping.source_header for mapping in config.mappings if mapping.required}
    return build_template(config.template_columns, config.template_filename, required)
