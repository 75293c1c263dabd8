from datetime import datetime

import pytest

from app.parsers.base_parser import FILE_ERROR_MESSAGE, extract_headers, parse_file


class TestParseFile:
    """Reading the first sheet of an uploaded workbook."""

    def test_rows_become_header_dicts(self, workbook_factory):
        raw = workbook_factory(["Placa", "Litros"], [["ABC1D23", 40.5], ["XYZ9A88", 12]])

        rows = parse_file(raw)

        assert rows == [
            {"Placa": "ABC1D23", "Litros": 40.5},
            {"Placa": "XYZ9A88", "Litros": 12},
        ]

    def test_blank_cells_are_none_and_blank_rows_dropped(self, workbook_factory):
        raw = workbook_factory(
            ["Placa", "Marca"],
            [["ABC1D23", None], [None, None], ["XYZ9A88", "  Fiat  "]],
        )

        rows = parse_file(raw)

        assert rows == [
            {"Placa": "ABC1D23", "Marca": None},
            {"Placa": "XYZ9A88", "Marca": "Fiat"},
        ]

    def test_dates_come_back_as_datetime(self, workbook_factory):
        raw = workbook_factory(["Data"], [[datetime(2025, 3, 10)]])

        rows = parse_file(raw)

        assert rows[0]["Data"] == datetime(2025, 3, 10)

    def test_headers_are_trimmed(self, workbook_factory):
        raw = workbook_factory(["  Placa  "], [["ABC1D23"]])

        assert parse_file(raw) == [{"Placa": "ABC1D23"}]

    def test_invalid_file(self):
        with pytest.raises(ValueError, match=FILE_ERROR_MESSAGE):
            parse_file(b"isto nao e uma planilha")


class TestExtractHeaders:
    def test_lists_header_row(self, workbook_factory):
        raw = workbook_factory(["Placa", "Marca", "Modelo"], [["ABC1D23", "Fiat", "Strada"]])

        assert extract_headers(raw) == ["Placa", "Marca", "Modelo"]

    def test_unnamed_columns_are_skipped(self, workbook_factory):
        raw = workbook_factory(["Placa", None, "Marca"], [["ABC1D23", "x", "Fiat"]])

        assert extract_headers(raw) == ["Placa", "Marca"]
