from datetime import date

from app.models import FuelRecord, ImageMetric, RegistroImportacao, Vehicle

BASE = "/api/importacao"
XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _upload(content: bytes, name: str = "planilha.xlsx") -> dict:
    return {"file": (name, content, XLSX)}


class TestCatalog:
    def test_entidades(self, client, user_headers):
        response = client.get(f"{BASE}/entidades", headers=user_headers)

        assert response.status_code == 200
        vehicles = next(item for item in response.json() if item["key"] == "vehicles")
        assert vehicles["label"] == "Veículos"
        assert vehicles["obrigatorios"] == ["Placa"]
        assert vehicles["colunas"][0] == "Placa"

    def test_template_download(self, client, user_headers):
        response = client.get(f"{BASE}/fuel_records/template", headers=user_headers)

        assert response.status_code == 200
        assert response.headers["content-type"] == XLSX
        assert 'filename="abastecimentos_template.xlsx"' in response.headers["content-disposition"]

    def test_unknown_entity(self, client, user_headers, workbook_factory):
        response = client.post(
            f"{BASE}/planetas",
            files=_upload(workbook_factory(["Nome"], [["Marte"]])),
            headers=user_headers,
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Entidade 'planetas' não suporta importação."

    def test_requires_auth(self, client):
        assert client.get(f"{BASE}/entidades").status_code == 401


class TestUpload:
    """End-to-end spreadsheet imports."""

    def test_vehicles_imported(self, client, user_headers, db, contract, workbook_factory):
        content = workbook_factory(
            ["Placa", "Marca", "Ano", "Status", "Contrato"],
            [
                ["RST4U56", "Fiat", 2022, "Ativo", "CT-001"],
                ["JKL7M89", "Ford", "2021", "Manutenção", None],
            ],
        )

        response = client.post(f"{BASE}/vehicles", files=_upload(content, "frota.xlsx"), headers=user_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "SUCESSO"
        assert body["arquivo"] == "frota.xlsx"
        assert body["total_linhas"] == 2
        assert body["registros_importados"] == 2
        assert body["errors"] == []

        db.expire_all()
        rows = {v.plate: v for v in db.query(Vehicle).all()}
        assert rows["RST4U56"].contract_id == contract.id
        assert rows["RST4U56"].year == 2022
        assert rows["JKL7M89"].status == "maintenance"
        assert rows["JKL7M89"].contract_id is None

    def test_image_metrics_resolve_equipment(self, client, user_headers, db, equipment, workbook_factory):
        content = workbook_factory(
            ["Número de Série", "Data", "Total Capturas", "Capturas Válidas", "Taxa Aproveitamento"],
            [
                ["EQ-100", "01/02/2026", 1200, 1050, "87,5"],
                ["EQ-999", "02/02/2026", 800, 640, 80],
            ],
        )

        response = client.post(f"{BASE}/image_metrics", files=_upload(content), headers=user_headers)

        body = response.json()
        assert body["status"] == "PARCIAL"
        assert body["registros_importados"] == 1
        assert body["errors"] == ['Linha 3: Equipamento não encontrado: "EQ-999"']

        db.expire_all()
        metric = db.query(ImageMetric).one()
        assert metric.equipment_id == equipment.id
        assert metric.date == date(2026, 2, 1)
        assert metric.valid_captures == 1050
        assert float(metric.utilization_rate) == 87.5

    def test_unknown_plate_gives_partial_import(self, client, user_headers, db, vehicle, workbook_factory):
        content = workbook_factory(
            ["Placa", "Data", "Litros", "Valor Total"],
            [
                ["abc1d23", "05/01/2026", "35,2", "R$ 210,00"],
                ["ZZZ0Z00", "06/01/2026", "20", "R$ 120,00"],
            ],
        )

        response = client.post(f"{BASE}/fuel_records", files=_upload(content), headers=user_headers)

        body = response.json()
        assert body["status"] == "PARCIAL"
        assert body["registros_importados"] == 1
        assert body["registros_invalidos"] == 1
        assert body["errors"] == ['Linha 3: Veículo não encontrado: "ZZZ0Z00"']
        assert body["warnings"] == ["1 linha(s) ignorada(s) por erros de validação."]

        db.expire_all()
        record = db.query(FuelRecord).one()
        assert record.vehicle_id == vehicle.id
        assert record.date == date(2026, 1, 5)
        assert float(record.liters) == 35.2

    def test_all_rows_invalid(self, client, user_headers, workbook_factory):
        content = workbook_factory(["Placa", "Data", "Litros"], [[None, "05/01/2026", "10"]])

        body = client.post(f"{BASE}/fuel_records", files=_upload(content), headers=user_headers).json()

        assert body["status"] == "FALHA"
        assert body["registros_importados"] == 0
        assert body["errors"] == ['Linha 2: Campo "Placa" é obrigatório']

    def test_sheet_without_rows(self, client, user_headers, workbook_factory):
        content = workbook_factory(["Placa", "Marca"], [])

        body = client.post(f"{BASE}/vehicles", files=_upload(content), headers=user_headers).json()

        assert body["status"] == "FALHA"
        assert "A planilha não contém linhas de dados." in body["errors"]

    def test_empty_file(self, client, user_headers):
        response = client.post(f"{BASE}/vehicles", files=_upload(b""), headers=user_headers)

        assert response.status_code == 422
        assert response.json()["detail"] == "O arquivo está vazio."

    def test_unreadable_file(self, client, user_headers):
        response = client.post(
            f"{BASE}/vehicles", files=_upload(b"isto nao e uma planilha", "dados.xlsx"), headers=user_headers
        )

        assert response.status_code == 422
        assert response.json()["detail"].startswith("Erro ao processar arquivo Excel")

    def test_history_is_recorded(self, client, user_headers, regular_user, db, workbook_factory):
        content = workbook_factory(["Placa"], [["HIS7T01"]])
        client.post(f"{BASE}/vehicles", files=_upload(content, "historico.xlsx"), headers=user_headers)

        db.expire_all()
        entry = db.query(RegistroImportacao).one()
        assert entry.usuario_id == regular_user.id
        assert entry.registros_ok == 1

        history = client.get(f"{BASE}/historico", params={"entidade": "vehicles"}, headers=user_headers)
        assert history.status_code == 200
        assert history.json()[0]["arquivo_nome"] == "historico.xlsx"
        assert history.json()[0]["usuario_username"] == "operador"
        assert client.get(
            f"{BASE}/historico", params={"entidade": "contracts"}, headers=user_headers
        ).json() == []


class TestPreviewAndHeaders:
    def test_preview_writes_nothing(self, client, user_headers, db, workbook_factory):
        content = workbook_factory(["Placa", "Marca"], [["PRE1V00", "Fiat"], [None, "Ford"]])

        response = client.post(f"{BASE}/vehicles/preview", files=_upload(content), headers=user_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["cabecalhos"] == ["Placa", "Marca"]
        assert body["total_linhas"] == 2
        assert body["linhas_validas"] == 1
        assert body["amostra"][0]["plate"] == "PRE1V00"
        db.expire_all()
        assert db.query(Vehicle).count() == 0
        assert db.query(RegistroImportacao).count() == 0

    def test_header_check(self, client, user_headers, workbook_factory):
        content = workbook_factory(["Data", "litros ", "Observação"], [["05/01/2026", "10", "x"]])

        response = client.post(f"{BASE}/fuel_records/cabecalhos", files=_upload(content), headers=user_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["reconhecidos"] == ["Data", "litros"]
        assert body["nao_reconhecidos"] == ["Observação"]
        assert body["obrigatorios_ausentes"] == ["Placa"]
