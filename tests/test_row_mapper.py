from app.parsers.base_parser import ColumnMapping, ImportResult
from app.parsers.row_mapper import map_rows, normalize_header
from app.parsers.transforms import to_date, to_integer, to_number, to_text


MAPPINGS = [
    ColumnMapping("Placa", "plate", True, to_text),
    ColumnMapping("Data", "date", True, to_date),
    ColumnMapping("Litros", "liters", transform=to_number),
    ColumnMapping("Odômetro", "odometer", transform=to_integer),
]


class TestNormalizeHeader:
    def test_accents_case_spacing_and_colon(self):
        assert normalize_header("  Número  de Série: ") == "numero de serie"

    def test_plain_header_is_lowercased(self):
        assert normalize_header("Placa") == "placa"


class TestMapRows:
    """Header matching, required fields and per-row error isolation."""

    def test_valid_row_is_converted(self):
        rows = [{"Placa": " ABC1D23 ", "Data": "31/12/2024", "Litros": "45,5", "Odômetro": "12.345"}]

        result = map_rows(rows, MAPPINGS)

        assert result.errors == []
        assert result.data == [
            {"plate": "ABC1D23", "date": "2024-12-31", "liters": 45.5, "odometer": 12345}
        ]
        assert result.row_numbers == [2]

    def test_headers_match_after_normalisation(self):
        rows = [{"placa:": "XYZ9A88", " DATA ": "01/02/2025", "odometro": 10}]

        result = map_rows(rows, MAPPINGS)

        assert result.success
        assert result.data[0]["plate"] == "XYZ9A88"
        assert result.data[0]["date"] == "2025-02-01"
        assert result.data[0]["odometer"] == 10

    def test_missing_optional_field_is_none(self):
        result = map_rows([{"Placa": "ABC1D23", "Data": "01/02/2025"}], MAPPINGS)

        assert result.data[0]["liters"] is None

    def test_missing_required_field_rejects_row(self):
        rows = [
            {"Placa": "ABC1D23", "Data": "01/02/2025"},
            {"Placa": None, "Data": "02/02/2025"},
        ]

        result = map_rows(rows, MAPPINGS)

        assert result.total_rows == 2
        assert result.valid_rows == 1
        assert result.invalid_rows == 1
        assert result.errors == ['Linha 3: Campo "Placa" é obrigatório']
        assert result.row_numbers == [2]

    def test_required_value_that_fails_to_parse(self):
        result = map_rows([{"Placa": "ABC1D23", "Data": "amanhã"}], MAPPINGS)

        assert result.data == []
        assert result.errors == ['Linha 2: Valor inválido no campo "Data"']

    def test_one_message_per_offending_field(self):
        result = map_rows([{"Litros": "10"}], MAPPINGS)

        assert result.errors == [
            'Linha 2: Campo "Placa" é obrigatório',
            'Linha 2: Campo "Data" é obrigatório',
        ]

    def test_first_alias_with_value_wins(self):
        mappings = [
            ColumnMapping("Nome Completo", "full_name", True, to_text),
            ColumnMapping("Nome", "full_name", transform=to_text),
        ]
        rows = [
            {"Nome Completo": None, "Nome": "Maria Souza"},
            {"Nome Completo": "João Lima", "Nome": "João"},
        ]

        result = map_rows(rows, mappings)

        assert result.success
        assert [row["full_name"] for row in result.data] == ["Maria Souza", "João Lima"]

    def test_failing_transform_is_reported(self):
        def explode(_value):
            raise RuntimeError("boom")

        result = map_rows([{"Placa": "ABC1D23"}], [ColumnMapping("Placa", "plate", transform=explode)])

        assert result.errors == ['Linha 2: Erro ao processar campo "Placa"']


class TestImportResult:
    def test_summary(self):
        result = ImportResult(data=[{"a": 1}], errors=["Linha 3: x"], total_rows=2)

        assert result.summary() == "[ERRO] total=2 validas=1 erros=1"
        assert not result.success
