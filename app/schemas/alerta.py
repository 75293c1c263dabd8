"""
Pydantic v2 schemas for the Alertas module.

These models define the JSON shapes for all endpoints under
``/api/alertas``.  Alerts are derived on every request by the alert engine
(``alerta_service.compute_alerts``) from the current database state; they
are never stored, so ``resolved`` and ``ignored`` are always ``False``.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Single alert
# ---------------------------------------------------------------------------


class SystemAlert(BaseModel):
    """One derived alert.

    Attributes:
        id: Deterministic identifier ``"{prefix}-{entity_id}"``; the same
            condition on the same row always yields the same id.
        severity: ``"critical"``, ``"high"``, ``"medium"`` or ``"low"``.
        category: Area of the business that raised it (``"contracts"``,
            ``"calibrations"``, ``"invoices"`` …).
        title: Short title for the alert card.
        description: Detailed description with the offending values.
        suggestion: Recommended action.
        detected_at: Moment the alert list was computed.
        entity_id: Primary key of the source row.
        entity_type: Table name of the source row.
        resolved: Reserved, always ``False``.
        ignored: Reserved, always ``False``.
    """

    id: str = Field(..., description="Identificador determinístico do alerta.")
    severity: str = Field(..., description="Severidade: critical, high, medium, low.")
    category: str = Field(..., description="Categoria do alerta (contracts, energy …).")
    title: str = Field(..., description="Título curto do alerta.")
    description: str = Field(..., description="Descrição detalhada.")
    suggestion: str = Field(..., description="Ação sugerida.")
    detected_at: datetime = Field(..., description="Data e hora do cálculo.")
    entity_id: int = Field(..., description="ID do registro de origem.")
    entity_type: str = Field(..., description="Tabela do registro de origem.")
    resolved: bool = Field(default=False, description="Reservado; sempre False.")
    ignored: bool = Field(default=False, description="Reservado; sempre False.")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "contract-12",
                "severity": "high",
                "category": "contracts",
                "title": "Contrato Próximo do Vencimento",
                "description": (
                    "O contrato 045/2023 - Prefeitura de Campinas (1 aditivo) "
                    "vence em 12 dias."
                ),
                "suggestion": "Iniciar processo de renovação ou novo aditivo.",
                "detected_at": "2026-03-02T08:30:00",
                "entity_id": 12,
                "entity_type": "contracts",
                "resolved": False,
                "ignored": False,
            }
        }
    )


# ---------------------------------------------------------------------------
# Summary / counter response
# ---------------------------------------------------------------------------


class AlertSummary(BaseModel):
    """Alert counts for the dashboard notification badge.

    Attributes:
        critical: Alerts at ``critical`` severity.
        high: Alerts at ``high`` severity.
        medium: Alerts at ``medium`` severity.
        low: Alerts at ``low`` severity.
        total: Every alert.
        by_category: Map of category → alert count.
    """

    critical: int = Field(..., ge=0, description="Alertas críticos.")
    high: int = Field(..., ge=0, description="Alertas de severidade alta.")
    medium: int = Field(..., ge=0, description="Alertas de severidade média.")
    low: int = Field(..., ge=0, description="Alertas de severidade baixa.")
    total: int = Field(..., ge=0, description="Total de alertas.")
    by_category: dict[str, int] = Field(
        default_factory=dict,
        description="Contagem de alertas por categoria.",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "critical": 3,
                "high": 7,
                "medium": 11,
                "low": 2,
                "total": 23,
                "by_category": {
                    "contracts": 4,
                    "calibrations": 6,
                    "energy": 9,
                    "mileage": 4,
                },
            }
        }
    )


class AlertCategoryGroup(BaseModel):
    """Alerts of one category, in severity order."""

    category: str = Field(..., description="Categoria.")
    total: int = Field(..., ge=0)
    alerts: list[SystemAlert] = Field(default_factory=list)
