import io

from openpyxl import load_workbook

from app.parsers.import_configs import IMPORT_CONFIGS, get_import_config
from app.parsers.row_mapper import map_rows
from app.services.template_service import TEMPLATE_SHEET_NAME, build_entity_template


EXPECTED_KEYS = {
    "contracts",
    "employees",
    "equipment",
    "vehicles",
    "fuel_records",
    "maintenance_records",
    "mileage_records",
    "toll_tags",
    "advances",
    "calibrations",
    "seals",
    "energy_bills",
    "internet_bills",
    "invoices",
    "inventory",
    "infrastructure_services",
    "pending_issues",
    "customer_satisfaction",
    "sla_metrics",
    "infractions",
    "image_metrics",
    "service_calls",
    "service_goals",
}


class TestRegistry:
    """Consistency of the column-mapping registry."""

    def test_every_entity_is_registered(self):
        assert set(IMPORT_CONFIGS) == EXPECTED_KEYS

    def test_unknown_key(self):
        assert get_import_config("planetas") is None

    def test_template_columns_are_mapped(self):
        for config in IMPORT_CONFIGS.values():
            headers = {mapping.source_header for mapping in config.mappings}
            for _, label in config.template_columns:
                assert label in headers, f"{config.key}: '{label}' has no mapping"

    def test_mapped_fields_exist_on_model_or_lookup(self):
        for config in IMPORT_CONFIGS.values():
            columns = config.model.__table__.columns
            lookup_sources = {lookup.source_field for lookup in config.lookups}
            for mapping in config.mappings:
                assert (
                    mapping.target_field in columns or mapping.target_field in lookup_sources
                ), f"{config.key}: unknown field '{mapping.target_field}'"

    def test_lookup_targets_are_model_columns(self):
        for config in IMPORT_CONFIGS.values():
            columns = config.model.__table__.columns
            for lookup in config.lookups:
                assert lookup.target_field in columns


class TestEntityMappings:
    def test_fuel_record_row(self):
        config = IMPORT_CONFIGS["fuel_records"]
        rows = [
            {
                "Placa": "ABC1D23",
                "Data": "10/03/2025",
                "Litros": "40,5",
                "Preço/Litro": "R$ 5,89",
                "Valor Total": "R$ 238,55",
                "Odômetro": "45.120",
                "Posto": "Posto Central",
            }
        ]

        result = map_rows(rows, config.mappings)

        assert result.success
        row = result.data[0]
        assert row["vehicle_plate"] == "ABC1D23"
        assert row["date"] == "2025-03-10"
        assert row["liters"] == 40.5
        assert row["total_value"] == 238.55
        assert row["odometer"] == 45120

    def test_employee_name_alias(self):
        config = IMPORT_CONFIGS["employees"]

        result = map_rows([{"Nome": "Ana Paula", "Status": "Em férias"}], config.mappings)

        assert result.success
        assert result.data[0]["full_name"] == "Ana Paula"
        assert result.data[0]["status"] == "vacation"

    def test_energy_bill_reference_month(self):
        config = IMPORT_CONFIGS["energy_bills"]

        result = map_rows(
            [{"UC": "123456", "Mês Referência": "jan/26", "Fatura Zerada": "Sim"}],
            config.mappings,
        )

        assert result.success
        assert result.data[0]["consumer_unit"] == "123456"
        assert result.data[0]["reference_month"] == "2026-01-01"
        assert result.data[0]["zero_invoice"] is True

    def test_service_call_status_and_mob_code(self):
        config = IMPORT_CONFIGS["service_calls"]

        result = map_rows(
            [
                {"Data": "12/02/2026", "Tipo": "Corretiva", "Cód. Mob": 88213, "Status": "Em atendimento"},
                {"Data": "13/02/2026", "Tipo": "Preventiva"},
            ],
            config.mappings,
        )

        assert result.success
        assert result.data[0]["date"] == "2026-02-12"
        assert result.data[0]["mob_code"] == "88213"
        assert result.data[0]["status"] == "in_progress"
        assert result.data[1]["status"] is None

    def test_service_goal_requires_contract_and_month(self):
        config = IMPORT_CONFIGS["service_goals"]

        result = map_rows(
            [
                {"Contrato": "CT-001", "Mês": "fev/26", "Meta Atendimentos": "120", "Percentual": "87,5"},
                {"Mês": "mar/26", "Meta Atendimentos": "120"},
            ],
            config.mappings,
        )

        assert not result.success
        assert result.data[0]["month"] == "2026-02-01"
        assert result.data[0]["target_calls"] == 120
        assert result.data[0]["percentage"] == 87.5
        assert len(result.data) == 1
        assert result.errors == ['Linha 3: Campo "Contrato" é obrigatório']


class TestTemplates:
    def test_template_header_row_matches_registry(self):
        config = IMPORT_CONFIGS["vehicles"]

        filename, content = build_entity_template(config)

        assert filename == "veiculos_template.xlsx"
        ws = load_workbook(io.BytesIO(content)).active
        assert ws.title == TEMPLATE_SHEET_NAME
        headers = [cell.value for cell in ws[1]]
        assert headers == config.template_labels
        assert ws.max_row == 1
