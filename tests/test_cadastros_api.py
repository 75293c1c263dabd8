import json
from datetime import date

from app.models import AuditLog, Employee, FuelRecord, Vehicle

BASE = "/api/cadastros"


class TestAuthRequired:
    def test_list_without_token(self, client):
        assert client.get(f"{BASE}/veiculos/").status_code == 401

    def test_invalid_token(self, client):
        response = client.get(f"{BASE}/veiculos/", headers={"Authorization": "Bearer lixo"})

        assert response.status_code == 401


class TestCrud:
    """Create, read, update and list through the generic registry router."""

    def test_create_and_get(self, client, user_headers, contract):
        response = client.post(
            f"{BASE}/veiculos/",
            json={"plate": "BRA2E19", "brand": "Renault", "model": "Kwid", "contract_id": contract.id},
            headers=user_headers,
        )

        assert response.status_code == 201
        created = response.json()
        assert created["plate"] == "BRA2E19"
        assert created["status"] == "active"

        fetched = client.get(f"{BASE}/veiculos/{created['id']}", headers=user_headers)
        assert fetched.status_code == 200
        assert fetched.json()["brand"] == "Renault"

    def test_create_validates_payload(self, client, user_headers):
        response = client.post(
            f"{BASE}/veiculos/", json={"plate": "BRA2E19", "status": "voando"}, headers=user_headers
        )

        assert response.status_code == 422

    def test_service_call_lifecycle(self, client, user_headers, equipment):
        rejected = client.post(
            f"{BASE}/atendimentos/",
            json={"date": "2026-02-03", "status": "pausado"},
            headers=user_headers,
        )
        assert rejected.status_code == 422

        response = client.post(
            f"{BASE}/atendimentos/",
            json={"date": "2026-02-03", "type": "Corretiva", "equipment_id": equipment.id},
            headers=user_headers,
        )
        assert response.status_code == 201
        assert response.json()["status"] == "open"

        closed = client.put(
            f"{BASE}/atendimentos/{response.json()['id']}",
            json={"status": "closed", "resolution": "Câmera substituída"},
            headers=user_headers,
        )
        assert closed.status_code == 200
        assert closed.json()["status"] == "closed"
        assert closed.json()["type"] == "Corretiva"

    def test_create_with_unknown_reference(self, client, user_headers):
        response = client.post(
            f"{BASE}/veiculos/", json={"plate": "BRA2E19", "contract_id": 999}, headers=user_headers
        )

        assert response.status_code == 422
        assert response.json()["detail"] == "Referência inválida ou valor obrigatório ausente."

    def test_get_missing_record(self, client, user_headers):
        response = client.get(f"{BASE}/veiculos/4242", headers=user_headers)

        assert response.status_code == 404
        assert "id=4242" in response.json()["detail"]

    def test_partial_update(self, client, user_headers, vehicle):
        response = client.put(
            f"{BASE}/veiculos/{vehicle.id}", json={"current_km": 52000}, headers=user_headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["current_km"] == 52000
        assert body["plate"] == "ABC1D23"

    def test_list_search_and_filters(self, client, user_headers, db, contract):
        db.add_all(
            [
                Vehicle(plate="AAA1A11", brand="Fiat", status="active"),
                Vehicle(plate="BBB2B22", brand="Fiat", status="maintenance"),
                Vehicle(plate="CCC3C33", brand="Volkswagen", status="active"),
            ]
        )
        db.commit()

        everything = client.get(f"{BASE}/veiculos/", headers=user_headers).json()
        search = client.get(f"{BASE}/veiculos/", params={"busca": "volks"}, headers=user_headers).json()
        by_status = client.get(f"{BASE}/veiculos/", params={"status": "active"}, headers=user_headers).json()
        by_brand = client.get(
            f"{BASE}/veiculos/", params={"brand": "Fiat", "status": "maintenance"}, headers=user_headers
        ).json()

        assert everything["total"] == 3
        assert [item["plate"] for item in search["items"]] == ["CCC3C33"]
        assert by_status["total"] == 2
        assert [item["plate"] for item in by_brand["items"]] == ["BBB2B22"]

    def test_pagination(self, client, user_headers, db):
        db.add_all([Vehicle(plate=f"PAG{n:04d}") for n in range(5)])
        db.commit()

        page = client.get(
            f"{BASE}/veiculos/", params={"page": 2, "page_size": 2}, headers=user_headers
        ).json()

        assert page["total"] == 5
        assert page["page"] == 2
        assert len(page["items"]) == 2

    def test_unknown_filter_is_rejected(self, client, user_headers):
        response = client.get(f"{BASE}/veiculos/", params={"renavam": "123"}, headers=user_headers)

        assert response.status_code == 422
        assert "renavam" in response.json()["detail"]

    def test_badly_typed_filter(self, client, user_headers):
        response = client.get(f"{BASE}/veiculos/", params={"contract_id": "abc"}, headers=user_headers)

        assert response.status_code == 422


class TestDashboard:
    def test_counts_and_sums(self, client, user_headers, db):
        client.post(
            f"{BASE}/contratos/",
            json={"number": "C-1", "client_name": "Prefeitura A", "value": 1000, "state": "SP"},
            headers=user_headers,
        )
        client.post(
            f"{BASE}/contratos/",
            json={"number": "C-2", "client_name": "Prefeitura B", "value": 3000, "state": "SP"},
            headers=user_headers,
        )
        client.post(
            f"{BASE}/contratos/",
            json={"number": "C-3", "client_name": "Prefeitura C", "value": 500, "status": "expired"},
            headers=user_headers,
        )

        body = client.get(f"{BASE}/contratos/dashboard", headers=user_headers).json()

        assert body["entidade"] == "contratos"
        assert body["total"] == 3
        assert body["valor_total"] == 4500.0
        status_buckets = {b["label"]: b for b in body["distribuicoes"]["status"]}
        assert status_buckets["active"]["quantidade"] == 2
        assert status_buckets["active"]["valor"] == 4000.0
        state_labels = [b["label"] for b in body["distribuicoes"]["state"]]
        assert state_labels == ["SP", "Não informado"]


class TestAuditTrail:
    def test_writes_are_audited(self, client, user_headers, regular_user, db):
        created = client.post(f"{BASE}/veiculos/", json={"plate": "AUD1T00"}, headers=user_headers).json()
        client.put(f"{BASE}/veiculos/{created['id']}", json={"brand": "Ford"}, headers=user_headers)
        client.delete(f"{BASE}/veiculos/{created['id']}", headers=user_headers)

        db.expire_all()
        rows = db.query(AuditLog).filter(AuditLog.table_name == "vehicles").order_by(AuditLog.id).all()

        assert [row.action for row in rows] == ["INSERT", "UPDATE", "DELETE"]
        assert all(row.user_id == regular_user.id for row in rows)
        assert rows[0].old_data is None
        assert json.loads(rows[1].new_data)["brand"] == "Ford"
        assert rows[2].new_data is None


class TestDelete:
    """Dependency-aware deletes."""

    def test_dependency_check_endpoint(self, client, user_headers, contract, vehicle):
        response = client.get(f"{BASE}/contratos/{contract.id}/dependencias", headers=user_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["has_dependencies"] is True
        assert body["dependencies"] == [{"table": "vehicles", "count": 1, "label": "Veículos"}]

    def test_dependency_check_of_missing_record(self, client, user_headers):
        assert client.get(f"{BASE}/contratos/999/dependencias", headers=user_headers).status_code == 404

    def test_regular_user_is_blocked(self, client, user_headers, contract, vehicle, db):
        response = client.delete(f"{BASE}/contratos/{contract.id}", headers=user_headers)

        assert response.status_code == 409
        assert "Veículos: 1 registro" in response.json()["detail"]
        db.expire_all()
        assert db.get(Vehicle, vehicle.id).contract_id == contract.id

    def test_admin_detaches_dependents(self, client, admin_headers, contract, vehicle, db):
        response = client.delete(f"{BASE}/contratos/{contract.id}", headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["excluidos"] == 1
        assert body["warning"] is not None
        assert body["dependencias"][0]["table"] == "vehicles"
        db.expire_all()
        assert db.get(Vehicle, vehicle.id).contract_id is None

    def test_admin_removes_mandatory_dependents(self, client, admin_headers, vehicle, db):
        db.add(FuelRecord(vehicle_id=vehicle.id, date=date(2026, 1, 5), liters=20))
        db.commit()

        response = client.delete(f"{BASE}/veiculos/{vehicle.id}", headers=admin_headers)

        assert response.status_code == 200
        db.expire_all()
        assert db.query(FuelRecord).count() == 0

    def test_delete_without_dependents(self, client, user_headers, contract):
        response = client.delete(f"{BASE}/contratos/{contract.id}", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["warning"] is None

    def test_batch_delete_is_all_or_nothing(self, client, user_headers, db, contract):
        free = Employee(full_name="Livre")
        db.add(free)
        db.commit()

        response = client.post(
            f"{BASE}/funcionarios/excluir-lote", json={"ids": [free.id, 999]}, headers=user_headers
        )

        assert response.status_code == 404
        db.expire_all()
        assert db.get(Employee, free.id) is not None

    def test_batch_delete(self, client, user_headers, db):
        rows = [Employee(full_name=f"Func {n}") for n in range(3)]
        db.add_all(rows)
        db.commit()
        ids = [row.id for row in rows]

        response = client.post(
            f"{BASE}/funcionarios/excluir-lote", json={"ids": ids + [ids[0]]}, headers=user_headers
        )

        assert response.status_code == 200
        assert response.json()["excluidos"] == 3
