"""SQLAlchemy models package for Sistema Splice.

Importing all models here ensures that SQLAlchemy's mapper registry is
populated before ``Base.metadata.create_all()`` runs.
The import order follows the foreign-key dependency graph so that parent
tables are always registered before their children.

Usage from other modules:
    from app.models import Contract, Vehicle
"""

# Users and cross-cutting logs
from app.models.usuario import Usuario  # noqa: F401
from app.models.audit_log import AuditLog  # noqa: F401
from app.models.registro_importacao import RegistroImportacao  # noqa: F401

# Contracts are the root of most foreign keys
from app.models.contract import Contract, ContractAmendment  # noqa: F401

# People and assets
from app.models.employee import Employee  # noqa: F401
from app.models.vehicle import Vehicle  # noqa: F401
from app.models.equipment import Equipment  # noqa: F401
from app.models.inventory import InventoryItem  # noqa: F401

# Fleet
from app.models.fuel_record import FuelRecord  # noqa: F401
from app.models.maintenance_record import MaintenanceRecord  # noqa: F401
from app.models.mileage_record import MileageRecord  # noqa: F401
from app.models.toll_tag import TollTag  # noqa: F401

# HR
from app.models.advance import Advance  # noqa: F401

# Metrology
from app.models.calibration import Calibration  # noqa: F401
from app.models.seal import Seal  # noqa: F401

# Enforcement output
from app.models.infraction import Infraction  # noqa: F401
from app.models.image_metric import ImageMetric  # noqa: F401

# Utilities and billing
from app.models.energy import EnergyBill, EnergyConsumerUnit  # noqa: F401
from app.models.internet import InternetBill, InternetConnection  # noqa: F401
from app.models.invoice import Invoice  # noqa: F401

# Quality indicators and field work
from app.models.sla_metric import SlaMetric  # noqa: F401
from app.models.customer_satisfaction import CustomerSatisfaction  # noqa: F401
from app.models.infrastructure_service import InfrastructureService  # noqa: F401
from app.models.service_call import ServiceCall  # noqa: F401
from app.models.service_goal import ServiceGoal  # noqa: F401

# Kanban board
from app.models.pending_issue import KanbanColumn, PendingIssue  # noqa: F401

__all__ = [
    "Usuario",
    "AuditLog",
    "RegistroImportacao",
    "Contract",
    "ContractAmendment",
    "Employee",
    "Vehicle",
    "Equipment",
    "InventoryItem",
    "FuelRecord",
    "MaintenanceRecord",
    "MileageRecord",
    "TollTag",
    "Advance",
    "Calibration",
    "Seal",
    "Infraction",
    "ImageMetric",
    "EnergyConsumerUnit",
    "EnergyBill",
    "InternetConnection",
    "InternetBill",
    "Invoice",
    "SlaMetric",
    "CustomerSatisfaction",
    "InfrastructureService",
    "ServiceCall",
    "ServiceGoal",
    "KanbanColumn",
    "PendingIssue",
]
