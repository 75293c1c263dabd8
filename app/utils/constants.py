"""
Application-wide constants for Sistema Splice.

Defines domain enumerations, business rule thresholds, and
lookup lists used across routers, services, and models.
"""

from typing import Final

# ---------------------------------------------------------------------------
# User roles
# ---------------------------------------------------------------------------

ROLE_ADMIN: Final[str] = "admin"
ROLE_USER: Final[str] = "user"

ROLES: Final[list[str]] = [ROLE_ADMIN, ROLE_USER]

# ---------------------------------------------------------------------------
# Record states (canonical values stored in ``status`` columns)
# ---------------------------------------------------------------------------

CONTRACT_STATUS: Final[list[str]] = ["active", "inactive", "expired", "pending", "cancelled"]
EMPLOYEE_STATUS: Final[list[str]] = ["active", "inactive", "vacation", "terminated"]
VEHICLE_STATUS: Final[list[str]] = ["active", "inactive", "maintenance"]
EQUIPMENT_STATUS: Final[list[str]] = ["active", "inactive", "maintenance"]
ADVANCE_STATUS: Final[list[str]] = ["pending", "approved", "paid", "rejected"]
CALIBRATION_STATUS: Final[list[str]] = ["valid", "expired", "pending"]
SEAL_STATUS: Final[list[str]] = ["available", "installed", "damaged", "lost"]
BILL_STATUS: Final[list[str]] = ["pending", "paid", "overdue"]
INVOICE_STATUS: Final[list[str]] = ["pending", "paid", "overdue", "cancelled"]
INFRASTRUCTURE_STATUS: Final[list[str]] = ["scheduled", "completed", "unscheduled", "cancelled"]
ISSUE_STATUS: Final[list[str]] = ["open", "in_progress", "resolved", "closed"]
SERVICE_CALL_STATUS: Final[list[str]] = ["open", "in_progress", "closed"]
ISSUE_PRIORITY: Final[list[str]] = ["low", "medium", "high", "urgent"]

# ---------------------------------------------------------------------------
# Alert severities and categories
# ---------------------------------------------------------------------------

SEVERITIES: Final[list[str]] = ["critical", "high", "medium", "low"]

# Lower rank sorts first
SEVERITY_ORDER: Final[dict[str, int]] = {
    "critical": 0,
    "high": 1,
    "medium": 2,
    "low": 3,
}

ALERT_CATEGORIES: Final[list[str]] = [
    "contracts",
    "calibrations",
    "invoices",
    "inventory",
    "equipment",
    "energy",
    "internet",
    "mileage",
]

# ---------------------------------------------------------------------------
# Alert lookback windows (days)
# ---------------------------------------------------------------------------

DIAS_ALERTA_CONTRATO: Final[int] = 60
DIAS_ALERTA_ADITIVO: Final[int] = 90
DIAS_ALERTA_ADITIVO_ALTO: Final[int] = 30
DIAS_ALERTA_AFERICAO: Final[int] = 60
DIAS_ALERTA_FATURA: Final[int] = 15
DIAS_ALERTA_CONTA: Final[int] = 15
DIAS_EQUIPAMENTO_MANUTENCAO: Final[int] = 7
DIAS_EQUIPAMENTO_MANUTENCAO_ALTO: Final[int] = 30

# Day-count severity table: <=0 critical, <=15 high, <=30 medium, else low
DIAS_SEVERIDADE_ALTA: Final[int] = 15
DIAS_SEVERIDADE_MEDIA: Final[int] = 30

# ---------------------------------------------------------------------------
# Mileage limits (km per vehicle per calendar month)
# ---------------------------------------------------------------------------

KM_MENSAL_LIMITE: Final[int] = 3_000
KM_MENSAL_ALTO: Final[int] = 2_500
KM_MENSAL_AVISO: Final[int] = 2_000

# ---------------------------------------------------------------------------
# Bill anomaly detection
# ---------------------------------------------------------------------------

ANOMALIA_MIN_CONTAS: Final[int] = 3
ANOMALIA_DESVIO: Final[float] = 0.30
ANOMALIA_DESVIO_ALTO: Final[float] = 0.50
DIA_LIMITE_CONTA_MES_ATUAL: Final[int] = 10
MESES_SEM_FATURA: Final[int] = 2

# ---------------------------------------------------------------------------
# Import audit states
# ---------------------------------------------------------------------------

IMPORT_SUCESSO: Final[str] = "SUCESSO"
IMPORT_PARCIAL: Final[str] = "PARCIAL"
IMPORT_FALHA: Final[str] = "FALHA"

# ---------------------------------------------------------------------------
# Kanban
# ---------------------------------------------------------------------------

KANBAN_DONE_KEY: Final[str] = "done"

# Finished cards are purged once they have sat in "done" this long
KANBAN_DONE_RETENTION_HOURS: Final[int] = 24

KANBAN_DEFAULT_COLUMNS: Final[list[dict]] = [
    {"key": "backlog", "title": "Backlog", "color": "#64748b", "order_index": 0},
    {"key": "todo", "title": "A Fazer", "color": "#3b82f6", "order_index": 1},
    {"key": "in_progress", "title": "Em Andamento", "color": "#f59e0b", "order_index": 2},
    {"key": "review", "title": "Em Revisão", "color": "#8b5cf6", "order_index": 3},
    {"key": "done", "title": "Concluído", "color": "#22c55e", "order_index": 4},
]

# ---------------------------------------------------------------------------
# Audit actions
# ---------------------------------------------------------------------------

AUDIT_INSERT: Final[str] = "INSERT"
AUDIT_UPDATE: Final[str] = "UPDATE"
AUDIT_DELETE: Final[str] = "DELETE"
