import io
from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest
from openpyxl import load_workbook
from reportlab.lib.pagesizes import A4, landscape

from app.exporters.csv_exporter import export_csv
from app.exporters.excel_exporter import column_widths, sheet_name_for
from app.exporters.formatting import build_rows, format_value, resolve_attr
from app.exporters.pdf_exporter import LANDSCAPE_THRESHOLD, PdfExporter, page_size_for
from app.models import Vehicle
from app.services.exportacao_service import MEDIA_TYPES, export_filename


class TestFormatting:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, "-"),
            (True, "Sim"),
            (False, "Não"),
            (date(2026, 3, 5), "05/03/2026"),
            (datetime(2026, 3, 5, 14, 30), "05/03/2026"),
            (Decimal("1500.00"), "1500"),
            (12.5, "12.5"),
            (3, "3"),
            ("ativo", "ativo"),
        ],
    )
    def test_format_value(self, value, expected):
        assert format_value(value) == expected

    def test_resolve_dotted_path(self):
        record = SimpleNamespace(vehicle=SimpleNamespace(plate="ABC1D23"), contract=None)

        assert resolve_attr(record, "vehicle.plate") == "ABC1D23"
        assert resolve_attr(record, "contract.number") is None

    def test_build_rows_numeric(self):
        record = SimpleNamespace(plate="ABC1D23", current_km=Decimal("45000.5"), active=True)
        columns = [("plate", "Placa"), ("current_km", "Km"), ("active", "Ativo")]

        assert build_rows([record], columns) == [["ABC1D23", "45000.5", "Sim"]]
        assert build_rows([record], columns, numeric=True) == [["ABC1D23", 45000.5, "Sim"]]


class TestExcelHelpers:
    def test_sheet_name_strips_invalid_characters(self):
        assert sheet_name_for("Contas/Energia: 2026") == "Contas Energia  2026"

    def test_sheet_name_is_truncated(self):
        assert len(sheet_name_for("Relatório " * 10)) == 31

    def test_empty_sheet_name(self):
        assert sheet_name_for("[]") == "Dados"

    def test_column_widths(self):
        rows = [["ABC1D23", "x" * 80]]

        assert column_widths(["Placa", "Obs"], rows) == [9, 50]


class TestCsv:
    """Semicolon-separated CSV with a byte-order mark."""

    def test_layout(self):
        content = export_csv(["Nome", "Obs"], [["Ana", 'diz "oi"'], ["Bruno", "-"]])

        assert content.startswith(b"\xef\xbb\xbf")
        lines = content.decode("utf-8-sig").split("\n")
        assert lines[0] == '"Nome";"Obs"'
        assert lines[1] == '"Ana";"diz ""oi"""'
        assert lines[2] == '"Bruno";"-"'

    def test_empty_export_keeps_header(self):
        content = export_csv(["Placa"], [])

        assert content.decode("utf-8-sig").strip() == '"Placa"'


class TestPdf:
    def test_orientation_follows_column_count(self):
        assert page_size_for(LANDSCAPE_THRESHOLD) == A4
        assert page_size_for(LANDSCAPE_THRESHOLD + 1) == landscape(A4)
        assert page_size_for(2, force_landscape=True) == landscape(A4)

    def test_markup_characters_do_not_break_layout(self):
        pdf = PdfExporter(title="Notas <b>", filters={"Status": "a & b"})
        pdf.add_header()
        pdf.add_table(["Nome", "Valor"], [["<i>x</i>", 10], ["y", 2.5]])

        assert pdf.build().startswith(b"%PDF")

    def test_header_only_document(self):
        pdf = PdfExporter(title="Vazio")
        pdf.add_header()

        assert pdf.build().startswith(b"%PDF")


class TestFilename:
    def test_title_is_slugged(self):
        assert export_filename("Contas de Energia", "excel") == "contas-de-energia.xlsx"
        assert export_filename("Veículos", "pdf") == "veículos.pdf"
        assert export_filename("SLA", "csv") == "sla.csv"


class TestExportApi:
    def _seed(self, db):
        db.add_all(
            [
                Vehicle(plate="ABC1D23", brand="Fiat", current_km=45000, status="active"),
                Vehicle(plate="XYZ9K88", brand="Ford", status="inactive"),
            ]
        )
        db.commit()

    def test_excel(self, client, user_headers, db):
        self._seed(db)

        response = client.get("/api/exportar/excel", params={"entidade": "veiculos"}, headers=user_headers)

        assert response.status_code == 200
        assert response.headers["content-type"] == MEDIA_TYPES["excel"]
        disposition = response.headers["content-disposition"]
        assert disposition.startswith('attachment; filename="veiculos.xlsx"')
        assert "filename*=UTF-8''ve%C3%ADculos.xlsx" in disposition
        ws = load_workbook(io.BytesIO(response.content)).active
        assert ws.title == "Veículos"
        values = [cell for row in ws.iter_rows(values_only=True) for cell in row]
        assert "ABC1D23" in values
        assert 45000 in values

    def test_csv_honours_filters(self, client, user_headers, db):
        self._seed(db)

        response = client.get(
            "/api/exportar/csv", params={"entidade": "veiculos", "status": "active"}, headers=user_headers
        )

        assert response.status_code == 200
        text = response.content.decode("utf-8-sig")
        assert "ABC1D23" in text
        assert "XYZ9K88" not in text

    def test_pdf(self, client, user_headers, db):
        self._seed(db)

        response = client.get("/api/exportar/pdf", params={"entidade": "veiculos"}, headers=user_headers)

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")

    def test_unsupported_format(self, client, user_headers):
        response = client.get("/api/exportar/docx", params={"entidade": "veiculos"}, headers=user_headers)

        assert response.status_code == 400

    def test_unknown_entity(self, client, user_headers):
        response = client.get("/api/exportar/csv", params={"entidade": "naves"}, headers=user_headers)

        assert response.status_code == 404

    def test_unknown_filter(self, client, user_headers):
        response = client.get(
            "/api/exportar/csv", params={"entidade": "veiculos", "renavam": "1"}, headers=user_headers
        )

        assert response.status_code == 422
