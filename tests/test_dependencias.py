from datetime import date, datetime

from app.models import (
    Calibration,
    Employee,
    FuelRecord,
    ImageMetric,
    ServiceCall,
    TollTag,
    Vehicle,
)
from app.services.dependencia_service import (
    DEPENDENCY_MAP,
    check_dependencies,
    dependency_summary,
    release_dependencies,
)


class TestDependencyMap:
    def test_rules_point_at_real_columns(self):
        for rules in DEPENDENCY_MAP.values():
            for rule in rules:
                assert rule.column in rule.model.__table__.columns

    def test_mileage_records_block_vehicle_deletes(self):
        tables = {rule.table for rule in DEPENDENCY_MAP["vehicles"]}

        assert "mileage_records" in tables


class TestCheckDependencies:
    """Counting the rows that reference a parent record."""

    def test_contract_with_vehicle_and_equipment(self, db, vehicle, equipment):
        result = check_dependencies(db, "contracts", vehicle.contract_id)

        assert result.has_dependencies
        assert {(item.table, item.count) for item in result.dependencies} == {
            ("vehicles", 1),
            ("equipment", 1),
        }

    def test_no_dependents(self, db, contract):
        result = check_dependencies(db, "contracts", contract.id)

        assert not result.has_dependencies
        assert result.dependencies == []

    def test_table_without_rules(self, db):
        assert not check_dependencies(db, "inventory", 1).has_dependencies

    def test_summary_text(self, db, contract):
        db.add_all([Employee(full_name=f"Técnico {n}", contract_id=contract.id) for n in range(2)])
        db.add(Vehicle(plate="QWE1R23", contract_id=contract.id))
        db.commit()

        summary = dependency_summary(check_dependencies(db, "contracts", contract.id))

        assert summary == "Colaboradores: 2 registros; Veículos: 1 registro"


class TestReleaseDependencies:
    def test_nullable_references_are_detached(self, db, vehicle):
        db.add(TollTag(vehicle_id=vehicle.id, tag_number="TAG-1", passage_date=datetime(2026, 1, 5, 8, 30), value=12.5))
        db.commit()

        touched = release_dependencies(db, "vehicles", vehicle.id)
        db.commit()

        tag = db.query(TollTag).one()
        db.refresh(tag)
        assert touched == 1
        assert tag.vehicle_id is None

    def test_mandatory_references_are_deleted(self, db, vehicle, equipment):
        db.add(FuelRecord(vehicle_id=vehicle.id, date=date(2026, 1, 5), liters=30))
        db.add(
            Calibration(
                equipment_id=equipment.id,
                calibration_date=date(2025, 6, 1),
                expiration_date=date(2026, 6, 1),
            )
        )
        db.commit()

        release_dependencies(db, "vehicles", vehicle.id)
        release_dependencies(db, "equipment", equipment.id)
        db.commit()

        assert db.query(FuelRecord).count() == 0
        assert db.query(Calibration).count() == 0

    def test_equipment_with_metrics_and_calls(self, db, equipment):
        db.add(ImageMetric(equipment_id=equipment.id, date=date(2026, 2, 1), total_captures=900))
        db.add(ServiceCall(date=date(2026, 2, 3), type="Corretiva", equipment_id=equipment.id))
        db.commit()

        result = check_dependencies(db, "equipment", equipment.id)
        assert {(item.table, item.count) for item in result.dependencies} == {
            ("image_metrics", 1),
            ("service_calls", 1),
        }

        release_dependencies(db, "equipment", equipment.id)
        db.commit()

        assert db.query(ImageMetric).count() == 0
        call = db.query(ServiceCall).one()
        db.refresh(call)
        assert call.equipment_id is None
