from datetime import date, datetime, timedelta

import pytest

from app.models import (
    Calibration,
    Contract,
    ContractAmendment,
    EnergyBill,
    EnergyConsumerUnit,
    Equipment,
    InternetBill,
    InternetConnection,
    InventoryItem,
    Invoice,
    MileageRecord,
    Vehicle,
)
from app.schemas.alerta import SystemAlert
from app.services import alerta_service
from app.services.alerta_service import (
    compute_alerts,
    count_by_severity,
    filter_alerts,
    get_resumen,
    group_by_category,
)

TODAY = date(2026, 3, 15)


def _by_id(alerts):
    return {alert.id: alert for alert in alerts}


def _add(db, *rows):
    db.add_all(rows)
    db.commit()
    return rows


def _contract(db, end_date, number="CT-100", status="active"):
    (row,) = _add(
        db,
        Contract(number=number, client_name="Prefeitura de Sorocaba", end_date=end_date, status=status),
    )
    return row


class TestContractRules:
    """Contract and amendment expiration."""

    def test_contract_expiring_soon(self, db):
        contract = _contract(db, TODAY + timedelta(days=10))

        alert = _by_id(compute_alerts(db, TODAY))[f"contract-{contract.id}"]

        assert alert.severity == "high"
        assert alert.category == "contracts"
        assert alert.title == "Contrato Próximo do Vencimento"
        assert "vence em 10 dias" in alert.description
        assert alert.resolved is False and alert.ignored is False

    def test_expired_contract_is_critical(self, db):
        contract = _contract(db, TODAY - timedelta(days=5))

        alert = _by_id(compute_alerts(db, TODAY))[f"contract-{contract.id}"]

        assert alert.severity == "critical"
        assert alert.title == "Contrato Vencido"
        assert "venceu há 5 dias" in alert.description

    @pytest.mark.parametrize(
        "days, expected",
        [
            (0, "critical"),
            (15, "high"),
            (16, "medium"),
            (30, "medium"),
            (31, "low"),
            (60, "low"),
            (61, None),
            (90, None),
        ],
    )
    def test_severity_at_window_edges(self, db, days, expected):
        contract = _contract(db, TODAY + timedelta(days=days))

        alert = _by_id(compute_alerts(db, TODAY)).get(f"contract-{contract.id}")

        if expected is None:
            assert alert is None
        else:
            assert alert.severity == expected

    def test_far_or_inactive_contracts_are_silent(self, db):
        far = _contract(db, TODAY + timedelta(days=200), number="CT-1")
        inactive = _contract(db, TODAY + timedelta(days=5), number="CT-2", status="inactive")

        alerts = _by_id(compute_alerts(db, TODAY))

        assert f"contract-{far.id}" not in alerts
        assert f"contract-{inactive.id}" not in alerts

    def test_latest_amendment_extends_contract(self, db):
        contract = _contract(db, TODAY + timedelta(days=5))
        _add(
            db,
            ContractAmendment(contract_id=contract.id, amendment_number=1, end_date=TODAY + timedelta(days=20)),
            ContractAmendment(contract_id=contract.id, amendment_number=2, end_date=TODAY + timedelta(days=25)),
        )

        alerts = _by_id(compute_alerts(db, TODAY))
        alert = alerts[f"contract-{contract.id}"]

        assert alert.severity == "medium"
        assert "(2 aditivos)" in alert.description
        assert not any(alert_id.startswith("amendment-") for alert_id in alerts)

    def test_amendment_alert_when_contract_rule_is_silent(self, db):
        contract = _contract(db, TODAY + timedelta(days=5))
        (amendment,) = _add(
            db,
            ContractAmendment(contract_id=contract.id, amendment_number=1, end_date=TODAY + timedelta(days=75)),
        )

        alerts = _by_id(compute_alerts(db, TODAY))

        assert f"contract-{contract.id}" not in alerts
        alert = alerts[f"amendment-{amendment.id}"]
        assert alert.severity == "medium"
        assert alert.entity_id == contract.id


class TestInventoryRule:
    @pytest.mark.parametrize(
        "quantity, expected",
        [(0, "critical"), (2, "high"), (4, "medium")],
    )
    def test_severity_by_stock_ratio(self, db, quantity, expected):
        (item,) = _add(db, InventoryItem(component_name="Cabo UTP", quantity=quantity, min_quantity=5))

        alert = _by_id(compute_alerts(db, TODAY))[f"inventory-{item.id}"]

        assert alert.severity == expected

    def test_zero_stock_title(self, db):
        (item,) = _add(db, InventoryItem(component_name="Cabo UTP", quantity=0, min_quantity=5))

        alert = _by_id(compute_alerts(db, TODAY))[f"inventory-{item.id}"]

        assert alert.title == "Estoque Zerado"

    def test_stock_above_minimum_is_silent(self, db):
        (item,) = _add(db, InventoryItem(component_name="Cabo UTP", quantity=6, min_quantity=5))

        assert f"inventory-{item.id}" not in _by_id(compute_alerts(db, TODAY))


class TestMileageRule:
    """Monthly km per vehicle against the 3,000 km limit."""

    @pytest.mark.parametrize(
        "driven, expected",
        [(3100, "critical"), (3000, "critical"), (2600, "high"), (2500, "medium"), (2100, "medium")],
    )
    def test_severity_by_total_km(self, db, driven, expected):
        (vehicle,) = _add(db, Vehicle(plate="KMX1A00", brand="VW", model="Gol"))
        _add(
            db,
            MileageRecord(vehicle_id=vehicle.id, date=TODAY.replace(day=2), initial_km=0, final_km=driven // 2),
            MileageRecord(
                vehicle_id=vehicle.id, date=TODAY.replace(day=9), initial_km=1000, final_km=1000 + driven - driven // 2
            ),
        )

        alert = _by_id(compute_alerts(db, TODAY))[f"mileage-{vehicle.id}"]

        assert alert.severity == expected
        assert alert.category == "mileage"

    def test_below_warning_or_other_month_is_silent(self, db):
        (vehicle,) = _add(db, Vehicle(plate="KMX1A00"))
        _add(
            db,
            MileageRecord(vehicle_id=vehicle.id, date=TODAY, initial_km=0, final_km=1500),
            MileageRecord(vehicle_id=vehicle.id, date=date(2026, 2, 20), initial_km=0, final_km=5000),
        )

        assert f"mileage-{vehicle.id}" not in _by_id(compute_alerts(db, TODAY))

    def test_exceeded_description(self, db):
        (vehicle,) = _add(db, Vehicle(plate="KMX1A00", brand="VW", model="Gol"))
        _add(db, MileageRecord(vehicle_id=vehicle.id, date=TODAY, initial_km=10000, final_km=13200))

        alert = _by_id(compute_alerts(db, TODAY))[f"mileage-{vehicle.id}"]

        assert alert.title == "Limite de Km Mensal Excedido"
        assert "3.000 km" in alert.description
        assert "3.200 km" in alert.description


class TestBillRules:
    def test_pending_energy_bill_due(self, db):
        (bill,) = _add(
            db,
            EnergyBill(
                consumer_unit="UC-1",
                reference_month=date(2026, 2, 1),
                value=300,
                due_date=TODAY + timedelta(days=3),
                status="pending",
            ),
        )

        alert = _by_id(compute_alerts(db, TODAY))[f"energy-{bill.id}"]

        assert alert.severity == "high"
        assert alert.entity_type == "energy_bills"

    def test_paid_bill_is_silent(self, db):
        (bill,) = _add(
            db,
            EnergyBill(
                consumer_unit="UC-1",
                reference_month=date(2026, 2, 1),
                due_date=TODAY,
                status="paid",
            ),
        )

        assert f"energy-{bill.id}" not in _by_id(compute_alerts(db, TODAY))

    def test_energy_value_anomaly(self, db):
        rows = _add(
            db,
            EnergyBill(consumer_unit="UC-9", reference_month=date(2025, 12, 1), value=100, status="paid"),
            EnergyBill(consumer_unit="UC-9", reference_month=date(2026, 1, 1), value=100, status="paid"),
            EnergyBill(consumer_unit="UC-9", reference_month=date(2026, 2, 1), value=200, status="paid"),
        )

        alert = _by_id(compute_alerts(db, TODAY))[f"energy-anomaly-{rows[2].id}"]

        assert alert.severity == "high"
        assert alert.title == "Conta de Energia Acima da Média"
        assert "100% acima" in alert.description

    def test_small_deviation_is_not_an_anomaly(self, db):
        rows = _add(
            db,
            EnergyBill(consumer_unit="UC-9", reference_month=date(2025, 12, 1), value=100, status="paid"),
            EnergyBill(consumer_unit="UC-9", reference_month=date(2026, 1, 1), value=100, status="paid"),
            EnergyBill(consumer_unit="UC-9", reference_month=date(2026, 2, 1), value=120, status="paid"),
        )

        assert f"energy-anomaly-{rows[2].id}" not in _by_id(compute_alerts(db, TODAY))

    def test_internet_anomaly_below_average(self, db):
        (connection,) = _add(db, InternetConnection(serial_number="NET-1", provider="Vivo"))
        rows = _add(
            db,
            InternetBill(provider="Vivo", connection_id=connection.id, reference_month=date(2025, 12, 1), value=200),
            InternetBill(provider="Vivo", connection_id=connection.id, reference_month=date(2026, 1, 1), value=200),
            InternetBill(provider="Vivo", connection_id=connection.id, reference_month=date(2026, 2, 1), value=120),
        )

        alert = _by_id(compute_alerts(db, TODAY))[f"internet-anomaly-{rows[2].id}"]

        assert alert.severity == "medium"
        assert alert.title == "Conta de Internet Abaixo da Média"

    def test_consumer_unit_without_bills(self, db):
        (unit,) = _add(db, EnergyConsumerUnit(consumer_unit="UC-7"))

        alerts = _by_id(compute_alerts(db, TODAY))

        assert alerts[f"missing-energy-prev-{unit.id}"].severity == "high"
        assert "2026-02" in alerts[f"missing-energy-prev-{unit.id}"].description
        assert alerts[f"missing-energy-curr-{unit.id}"].severity == "medium"

    def test_current_month_is_not_checked_early_in_the_month(self, db):
        (unit,) = _add(db, EnergyConsumerUnit(consumer_unit="UC-7"))
        _add(db, EnergyBill(consumer_unit="UC-7", reference_month=date(2026, 2, 1), value=90))

        alerts = _by_id(compute_alerts(db, date(2026, 3, 5)))

        assert f"missing-energy-prev-{unit.id}" not in alerts
        assert f"missing-energy-curr-{unit.id}" not in alerts

    def test_connection_without_bills(self, db):
        (connection,) = _add(db, InternetConnection(serial_number="NET-2", provider="Claro"))

        alerts = _by_id(compute_alerts(db, TODAY))

        assert alerts[f"missing-internet-prev-{connection.id}"].category == "internet"


class TestEquipmentRules:
    def test_active_equipment_without_valid_calibration(self, db):
        (equip,) = _add(db, Equipment(serial_number="EQ-1", status="active"))

        alert = _by_id(compute_alerts(db, TODAY))[f"no-calibration-{equip.id}"]

        assert alert.severity == "high"
        assert alert.category == "calibrations"

    def test_calibration_expiring(self, db):
        (equip,) = _add(db, Equipment(serial_number="EQ-2", status="active"))
        (calibration,) = _add(
            db,
            Calibration(
                equipment_id=equip.id,
                calibration_date=date(2025, 3, 20),
                expiration_date=TODAY + timedelta(days=20),
                status="valid",
            ),
        )

        alerts = _by_id(compute_alerts(db, TODAY))

        assert alerts[f"calibration-{calibration.id}"].severity == "medium"
        assert "EQ-2" in alerts[f"calibration-{calibration.id}"].description
        assert f"no-calibration-{equip.id}" not in alerts

    def test_prolonged_maintenance(self, db):
        (equip,) = _add(
            db,
            Equipment(serial_number="EQ-3", status="maintenance", updated_at=datetime(2026, 3, 1, 9, 0)),
        )

        alert = _by_id(compute_alerts(db, TODAY))[f"equipment-maintenance-{equip.id}"]

        assert alert.severity == "medium"
        assert "há 14 dias" in alert.description


class TestInvoiceRules:
    def test_overdue_invoice(self, db):
        contract = _contract(db, None)
        (invoice,) = _add(
            db,
            Invoice(
                contract_id=contract.id,
                number="NF-77",
                issue_date=date(2026, 2, 1),
                due_date=TODAY - timedelta(days=2),
                value=1500,
                status="pending",
            ),
        )

        alert = _by_id(compute_alerts(db, TODAY))[f"invoice-{invoice.id}"]

        assert alert.severity == "critical"
        assert "R$ 1.500,00" in alert.description

    @pytest.mark.parametrize(
        "days, expected",
        [(-1, "critical"), (0, "critical"), (1, "high"), (15, "high"), (16, None), (30, None)],
    )
    def test_fifteen_day_window(self, db, days, expected):
        contract = _contract(db, None)
        (invoice,) = _add(
            db,
            Invoice(
                contract_id=contract.id,
                number="NF-80",
                issue_date=date(2026, 3, 1),
                due_date=TODAY + timedelta(days=days),
                value=900,
                status="pending",
            ),
        )

        alert = _by_id(compute_alerts(db, TODAY)).get(f"invoice-{invoice.id}")

        if expected is None:
            assert alert is None
        else:
            assert alert.severity == expected

    def test_active_contract_without_recent_invoice(self, db):
        contract = _contract(db, None)

        alerts = _by_id(compute_alerts(db, TODAY))

        assert alerts[f"no-invoice-{contract.id}"].severity == "medium"


class TestEngine:
    """Ordering, isolation and aggregation."""

    def test_sorted_by_severity(self, db):
        _contract(db, TODAY - timedelta(days=1))
        _add(db, InventoryItem(component_name="Fusível", quantity=4, min_quantity=5))

        alerts = compute_alerts(db, TODAY)
        ranks = [["critical", "high", "medium", "low"].index(alert.severity) for alert in alerts]

        assert ranks == sorted(ranks)

    def test_failing_rule_does_not_abort(self, db, monkeypatch):
        (item,) = _add(db, InventoryItem(component_name="Fusível", quantity=0, min_quantity=5))
        contract = _contract(db, TODAY + timedelta(days=3))

        def broken(*_args):
            raise RuntimeError("boom")

        monkeypatch.setattr(alerta_service, "_rule_estoque", broken)
        alerts = _by_id(compute_alerts(db, TODAY))

        assert f"inventory-{item.id}" not in alerts
        assert f"contract-{contract.id}" in alerts

    def test_ids_are_stable_between_calls(self, db):
        _contract(db, TODAY + timedelta(days=3))

        first = [alert.id for alert in compute_alerts(db, TODAY)]
        second = [alert.id for alert in compute_alerts(db, TODAY)]

        assert first == second

    def test_resumen_counts(self, db):
        _contract(db, TODAY - timedelta(days=1))

        summary = get_resumen(db, TODAY)

        assert summary.critical == 1
        assert summary.medium == 1
        assert summary.total == 2
        assert summary.by_category == {"contracts": 1, "invoices": 1}


def _alert(alert_id, severity, category):
    return SystemAlert(
        id=alert_id,
        severity=severity,
        category=category,
        title="t",
        description="d",
        suggestion="s",
        detected_at=datetime(2026, 3, 15),
        entity_id=1,
        entity_type=category,
    )


class TestAggregation:
    def setup_method(self):
        self.alerts = [
            _alert("a", "critical", "contracts"),
            _alert("b", "high", "energy"),
            _alert("c", "high", "contracts"),
            _alert("d", "low", "invoices"),
        ]

    def test_filter(self):
        assert [a.id for a in filter_alerts(self.alerts, categoria="contracts")] == ["a", "c"]
        assert [a.id for a in filter_alerts(self.alerts, severidade="high")] == ["b", "c"]
        assert [a.id for a in filter_alerts(self.alerts, "contracts", "high")] == ["c"]

    def test_group_keeps_order(self):
        groups = group_by_category(self.alerts)

        assert list(groups) == ["contracts", "energy", "invoices"]
        assert [a.id for a in groups["contracts"]] == ["a", "c"]

    def test_count(self):
        assert count_by_severity(self.alerts) == {
            "critical": 1,
            "high": 2,
            "medium": 0,
            "low": 1,
            "total": 4,
        }
