from datetime import date, timedelta

from app.models import Contract, InventoryItem

BASE = "/api/alertas"


def _seed(db):
    db.add(
        Contract(
            number="CT-900",
            client_name="DER Minas",
            value=90000,
            end_date=date.today() - timedelta(days=3),
            status="active",
        )
    )
    db.add(InventoryItem(component_name="Fonte 12V", quantity=0, min_quantity=5))
    db.commit()


class TestAlertasApi:
    def test_list_is_sorted_by_severity(self, client, user_headers, db):
        _seed(db)

        response = client.get(f"{BASE}/", headers=user_headers)

        assert response.status_code == 200
        alerts = response.json()
        contract_alert = next(a for a in alerts if a["category"] == "contracts")
        assert contract_alert["severity"] == "critical"
        assert contract_alert["title"] == "Contrato Vencido"
        assert alerts[0]["severity"] == "critical"

    def test_filter_by_category(self, client, user_headers, db):
        _seed(db)

        alerts = client.get(f"{BASE}/", params={"categoria": "inventory"}, headers=user_headers).json()

        assert alerts
        assert {a["category"] for a in alerts} == {"inventory"}

    def test_unknown_severity(self, client, user_headers):
        response = client.get(f"{BASE}/", params={"severidade": "catastrofica"}, headers=user_headers)

        assert response.status_code == 422
        assert "catastrofica" in response.json()["detail"]

    def test_summary_and_groups(self, client, user_headers, db):
        _seed(db)

        summary = client.get(f"{BASE}/resumen", headers=user_headers).json()
        groups = client.get(f"{BASE}/por-categoria", headers=user_headers).json()

        assert summary["total"] == sum(group["total"] for group in groups)
        assert summary["critical"] >= 1
        assert {group["category"] for group in groups} >= {"contracts", "inventory"}

    def test_requires_auth(self, client):
        assert client.get(f"{BASE}/").status_code == 401
