"""
Alertas router.

Mounts under ``/api/alertas`` (prefix set in ``main.py``).

Alerts are derived on every request from the current state of the
registries; nothing is stored, so there are no read/resolve endpoints.
All endpoints require a valid JWT token.

Endpoints
---------
GET  /               — List alerts (?categoria=contracts&severidade=high).
GET  /resumen        — Severity and category counts for the notification badge.
GET  /por-categoria  — Alerts grouped by category.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.usuario import Usuario
from app.schemas.alerta import AlertCategoryGroup, AlertSummary, SystemAlert
from app.services import alerta_service
from app.services.auth_service import get_current_user
from app.utils.constants import ALERT_CATEGORIES, SEVERITIES

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Alertas"])


def _check_choice(value: str | None, allowed: list[str], field: str) -> None:
    if value is not None and value not in allowed:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Valor inválido para '{field}': '{value}'. Use um de: {', '.join(allowed)}.",
        )


# ---------------------------------------------------------------------------
# GET /
# ---------------------------------------------------------------------------


@router.get(
    "/",
    response_model=list[SystemAlert],
    summary="Listar alertas do sistema",
    description=(
        "Calcula os alertas a partir dos dados atuais e os retorna ordenados "
        "por severidade (critical, high, medium, low)."
    ),
    responses={
        200: {"description": "Lista de alertas."},
        401: {"description": "Token JWT ausente ou inválido."},
        422: {"description": "Categoria ou severidade desconhecida."},
    },
)
def get_alertas(
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
    categoria: Annotated[
        str | None,
        Query(description="Categoria: contracts, calibrations, invoices, inventory …"),
    ] = None,
    severidade: Annotated[
        str | None,
        Query(description="Severidade: critical, high, medium, low."),
    ] = None,
) -> list[SystemAlert]:
    """Return the computed alerts, optionally filtered.

    Args:
        db: Database session injected by ``get_db``.
        _current_user: Authenticated user guard.
        categoria: Optional category filter.
        severidade: Optional severity filter.

    Returns:
        List of ``SystemAlert``, most severe first.
    """
    _check_choice(categoria, ALERT_CATEGORIES, "categoria")
    _check_choice(severidade, SEVERITIES, "severidade")
    logger.debug("GET /alertas/ categoria=%s severidade=%s", categoria, severidade)
    alerts = alerta_service.compute_alerts(db)
    return alerta_service.filter_alerts(alerts, categoria=categoria, severidade=severidade)


# ---------------------------------------------------------------------------
# GET /resumen
# ---------------------------------------------------------------------------


@router.get(
    "/resumen",
    response_model=AlertSummary,
    summary="Resumo de alertas (contagens)",
    responses={
        200: {"description": "Resumo calculado com sucesso."},
        401: {"description": "Token JWT ausente ou inválido."},
    },
)
def get_resumen(
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> AlertSummary:
    logger.debug("GET /alertas/resumen")
    return alerta_service.get_resumen(db)


# ---------------------------------------------------------------------------
# GET /por-categoria
# ---------------------------------------------------------------------------


@router.get(
    "/por-categoria",
    response_model=list[AlertCategoryGroup],
    summary="Alertas agrupados por categoria",
    responses={401: {"description": "Token JWT ausente ou inválido."}},
)
def get_por_categoria(
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> list[AlertCategoryGroup]:
    alerts = alerta_service.compute_alerts(db)
    return [
        AlertCategoryGroup(category=category, total=len(items), alerts=items)
        for category, items in alerta_service.group_by_category(alerts).items()
    ]
