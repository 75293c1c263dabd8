"""
Dependency checks for deletes.

Before a registry record is deleted, the tables that reference it are
counted.  Regular users cannot delete a record that still has dependents
(HTTP 409); admins can, in which case nullable references are cleared and
rows whose reference is mandatory are removed with their parent.

Dependency map
--------------
contracts → employees, equipment, vehicles, invoices,
            infractions, service_calls, service_goals  (contract_id)
employees → advances, service_calls (employee_id), seals (technician_id)
equipment → calibrations, seals, infractions, image_metrics,
            service_calls                              (equipment_id)
vehicles  → fuel_records, maintenance_records, toll_tags,
            mileage_records                            (vehicle_id)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.advance import Advance
from app.models.calibration import Calibration
from app.models.employee import Employee
from app.models.equipment import Equipment
from app.models.fuel_record import FuelRecord
from app.models.image_metric import ImageMetric
from app.models.infraction import Infraction
from app.models.invoice import Invoice
from app.models.maintenance_record import MaintenanceRecord
from app.models.mileage_record import MileageRecord
from app.models.seal import Seal
from app.models.service_call import ServiceCall
from app.models.service_goal import ServiceGoal
from app.models.toll_tag import TollTag
from app.models.vehicle import Vehicle
from app.schemas.dependencia import DependencyItem, DependencyResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DependencyRule:
    """A child table column that points at a parent row."""

    model: Any
    column: str
    label: str

    @property
    def table(self) -> str:
        return self.model.__tablename__

    @property
    def nullable(self) -> bool:
        return bool(self.model.__table__.columns[self.column].nullable)


DEPENDENCY_MAP: dict[str, list[DependencyRule]] = {
    "contracts": [
        DependencyRule(Employee, "contract_id", "Colaboradores"),
        DependencyRule(Equipment, "contract_id", "Equipamentos"),
        DependencyRule(Vehicle, "contract_id", "Veículos"),
        DependencyRule(Invoice, "contract_id", "Faturas"),
        DependencyRule(Infraction, "contract_id", "Infrações"),
        DependencyRule(ServiceCall, "contract_id", "Atendimentos"),
        DependencyRule(ServiceGoal, "contract_id", "Metas de Atendimento"),
    ],
    "employees": [
        DependencyRule(Advance, "employee_id", "Adiantamentos"),
        DependencyRule(Seal, "technician_id", "Lacres"),
        DependencyRule(ServiceCall, "employee_id", "Atendimentos"),
    ],
    "equipment": [
        DependencyRule(Calibration, "equipment_id", "Aferições"),
        DependencyRule(Seal, "equipment_id", "Lacres"),
        DependencyRule(Infraction, "equipment_id", "Infrações"),
        DependencyRule(ImageMetric, "equipment_id", "Métricas de Imagem"),
        DependencyRule(ServiceCall, "equipment_id", "Atendimentos"),
    ],
    "vehicles": [
        DependencyRule(FuelRecord, "vehicle_id", "Abastecimentos"),
        DependencyRule(MaintenanceRecord, "vehicle_id", "Manutenções"),
        DependencyRule(TollTag, "vehicle_id", "Tags de Pedágio"),
        DependencyRule(MileageRecord, "vehicle_id", "Quilometragem"),
    ],
}


def check_dependencies(db: Session, table: str, record_id: int) -> DependencyResult:
    """Count the rows of every child table that reference *record_id*.

    Args:
        db: Active SQLAlchemy session.
        table: Parent table name (e.g. ``"contracts"``).
        record_id: Primary key of the parent row.

    Returns:
        A ``DependencyResult``; tables with zero referencing rows are
        omitted and tables without rules never have dependencies.
    """
    items: list[DependencyItem] = []
    for rule in DEPENDENCY_MAP.get(table, []):
        column = getattr(rule.model, rule.column)
        count = db.query(func.count(rule.model.id)).filter(column == record_id).scalar() or 0
        if count:
            items.append(DependencyItem(table=rule.table, count=count, label=rule.label))

    logger.debug("check_dependencies: %s id=%d -> %d tables", table, record_id, len(items))
    return DependencyResult(has_dependencies=bool(items), dependencies=items)


def dependency_summary(result: DependencyResult) -> str:
    """Portuguese one-line summary, e.g. ``"Faturas: 2 registros"``."""
    parts = [
        f"{item.label}: {item.count} registro{'s' if item.count > 1 else ''}"
        for item in result.dependencies
    ]
    return "; ".join(parts)


def release_dependencies(db: Session, table: str, record_id: int) -> int:
    """Detach or remove the dependents of a parent row about to be deleted.

    Nullable references are set to NULL; rows whose reference is mandatory
    are deleted.  Nothing is committed here; the caller commits together
    with the parent delete.

    Returns:
        Number of child rows touched.
    """
    touched = 0
    for rule in DEPENDENCY_MAP.get(table, []):
        column = getattr(rule.model, rule.column)
        query = db.query(rule.model).filter(column == record_id)
        if rule.nullable:
            affected = query.update({column: None}, synchronize_session=False)
        else:
            affected = query.delete(synchronize_session=False)
        if affected:
            logger.info(
                "release_dependencies: %s id=%d %s %d row(s) in %s",
                table,
                record_id,
                "detached" if rule.nullable else "deleted",
                affected,
                rule.table,
            )
        touched += affected
    return touched
