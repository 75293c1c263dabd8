"""
Excel export helper wrapping xlsxwriter.

Provides ``ExcelExporter``, a stateful builder that writes a styled
Sistema Splice workbook in memory and returns its bytes for a FastAPI
``Response``.

Usage example::

    exporter = ExcelExporter(title="Veículos", filters={"Status": "active"})
    exporter.add_header()
    exporter.add_data_table(headers, rows)
    file_bytes = exporter.finalize()

Design notes
------------
- Uses ``xlsxwriter`` in in-memory mode (``BytesIO``).
- The worksheet tab is named after the title, truncated to the 31
  characters Excel allows.
- Column widths are auto-sized from the longest header or cell text plus
  two characters, capped at 50.
- Values arrive already formatted by ``exporters.formatting`` except
  numbers, which keep the ``#,##0.00`` number format.
"""

import io
from datetime import datetime
from typing import Any, Sequence

import xlsxwriter
from xlsxwriter.workbook import Workbook
from xlsxwriter.worksheet import Worksheet

# Splice palette
_NAVY = "#1E3A5F"
_TEAL = "#0F766E"
_WHITE = "#FFFFFF"
_STRIPE = "#F1F5F9"
_GRID = "#CBD5E1"
_INK = "#111827"

MAX_COL_WIDTH = 50
MAX_SHEET_NAME = 31
_MIN_COL_WIDTH = 8

# Characters Excel rejects in worksheet names
_INVALID_SHEET_CHARS = str.maketrans({c: " " for c in "[]:*?/\\"})

# Format name -> xlsxwriter properties; every format is vertically centred
_STYLES: dict[str, dict[str, Any]] = {
    "title": {"bold": True, "font_size": 15, "font_color": _WHITE, "bg_color": _NAVY, "align": "center"},
    "subtitle": {"font_size": 9, "font_color": _WHITE, "bg_color": _TEAL, "align": "center"},
    "filter_key": {"bold": True, "font_size": 9, "bg_color": "#E2E8F0", "align": "right"},
    "filter_value": {"font_size": 9, "font_color": _INK, "align": "left"},
    "col_header": {
        "bold": True, "font_size": 10, "font_color": _WHITE, "bg_color": _NAVY,
        "align": "center", "text_wrap": True, "border": 1, "border_color": _GRID,
    },
}
_CELL = {"font_size": 9, "font_color": _INK, "border": 1, "border_color": _GRID}
for _suffix, _bg in (("", _WHITE), ("_alt", _STRIPE)):
    _STYLES[f"text{_suffix}"] = {**_CELL, "bg_color": _bg, "align": "left"}
    _STYLES[f"number{_suffix}"] = {**_CELL, "bg_color": _bg, "align": "right", "num_format": "#,##0.00"}


def sheet_name_for(title: str) -> str:
    """Worksheet tab name derived from the export title."""
    name = title.translate(_INVALID_SHEET_CHARS).strip() or "Dados"
    return name[:MAX_SHEET_NAME]


class ExcelExporter:
    """In-memory workbook for one registry export.

    Layout of the single worksheet: title band, generation time, one row
    per applied filter, a blank row, then the header row and the data.

    Args:
        title: Export title, e.g. ``"Veículos"``; also names the sheet.
        filters: Filter labels shown under the title, e.g. ``{"Status": "active"}``.
    """

    def __init__(self, title: str, filters: dict[str, str] | None = None) -> None:
        self._title = title
        self._filters = filters or {}
        self._buffer = io.BytesIO()
        self._workbook: Workbook = xlsxwriter.Workbook(self._buffer, {"in_memory": True})
        self._worksheet: Worksheet = self._workbook.add_worksheet(sheet_name_for(title))
        self._formats = {
            name: self._workbook.add_format({"valign": "vcenter", **props})
            for name, props in _STYLES.items()
        }
        self._row = 0

    @property
    def sheet_name(self) -> str:
        return self._worksheet.get_name()

    def _band(self, text: str, fmt: str, width: int, height: int | None = None) -> None:
        if height is not None:
            self._worksheet.set_row(self._row, height)
        if width > 1:
            self._worksheet.merge_range(self._row, 0, self._row, width - 1, text, self._formats[fmt])
        else:
            self._worksheet.write_string(self._row, 0, text, self._formats[fmt])
        self._row += 1

    def add_header(self, width: int = 6) -> "ExcelExporter":
        """Title, ``Gerado em`` timestamp and the filter rows, then a blank row."""
        self._band(self._title, "title", width, height=28)
        self._band(f"Gerado em: {datetime.now():%d/%m/%Y %H:%M}", "subtitle", width)
        for key, value in self._filters.items():
            self._worksheet.write_string(self._row, 0, key, self._formats["filter_key"])
            self._worksheet.write_string(self._row, 1, value, self._formats["filter_value"])
            self._row += 1
        self._row += 1
        return self

    def add_data_table(self, headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> "ExcelExporter":
        """Header row plus striped data rows.

        ``int``/``float`` cells (not ``bool``) are written as numbers with
        the ``#,##0.00`` format so the sheet can still sum them.
        """
        ws = self._worksheet
        ws.set_row(self._row, 20)
        for col, header in enumerate(headers):
            ws.write_string(self._row, col, header, self._formats["col_header"])
        ws.freeze_panes(self._row + 1, 0)
        self._row += 1

        for index, values in enumerate(rows):
            stripe = "_alt" if index % 2 else ""
            for col, value in enumerate(values):
                if isinstance(value, (int, float)) and not isinstance(value, bool):
                    ws.write_number(self._row, col, value, self._formats[f"number{stripe}"])
                else:
                    ws.write_string(self._row, col, str(value), self._formats[f"text{stripe}"])
            self._row += 1

        for col, width in enumerate(column_widths(headers, rows)):
            ws.set_column(col, col, max(width, _MIN_COL_WIDTH))
        return self

    def finalize(self) -> bytes:
        """Close the workbook and return the ``.xlsx`` bytes; the exporter is spent afterwards."""
        self._workbook.close()
        return self._buffer.getvalue()


def column_widths(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> list[int]:
    """Longest header or cell text per column plus 2, capped at ``MAX_COL_WIDTH``."""
    widths: list[int] = []
    for ci, header in enumerate(headers):
        longest = max([len(str(header))] + [len(str(row[ci])) for row in rows])
        widths.append(min(longest + 2, MAX_COL_WIDTH))
    return widths
