"""
Audit log router.

Mounts under ``/api/auditoria`` (prefix set in ``main.py``).
Requires the ``admin`` role.

Endpoints
---------
GET /   — Paginated audit entries, newest first
          (?tabela=contracts&acao=DELETE&record_id=12&user_id=1).
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.audit_log import AuditLog
from app.models.usuario import Usuario
from app.schemas.auditoria import AuditLogPage, AuditLogResponse
from app.services.auth_service import require_role

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auditoria"])


@router.get(
    "/",
    response_model=AuditLogPage,
    summary="Consultar log de auditoria",
    responses={
        401: {"description": "Token JWT ausente ou inválido."},
        403: {"description": "Requer perfil admin."},
    },
)
def get_auditoria(
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[Usuario, Depends(require_role("admin"))],
    tabela: Annotated[str | None, Query(max_length=100, description="Tabela alterada.")] = None,
    acao: Annotated[
        str | None, Query(pattern="^(INSERT|UPDATE|DELETE)$", description="Tipo de operação.")
    ] = None,
    record_id: Annotated[int | None, Query(ge=1)] = None,
    user_id: Annotated[int | None, Query(ge=1)] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1, le=200)] = 50,
) -> AuditLogPage:
    """Return audit entries matching the optional filters.

    Args:
        db: Database session.
        _admin: Admin-role user guard.
        tabela: Exact table name.
        acao: ``INSERT``, ``UPDATE`` or ``DELETE``.
        record_id: Primary key of the changed row.
        user_id: Author of the change.
        page: 1-based page number.
        page_size: Entries per page.

    Returns:
        An ``AuditLogPage`` with decoded before/after snapshots.
    """
    q = db.query(AuditLog)
    if tabela:
        q = q.filter(AuditLog.table_name == tabela)
    if acao:
        q = q.filter(AuditLog.action == acao)
    if record_id is not None:
        q = q.filter(AuditLog.record_id == record_id)
    if user_id is not None:
        q = q.filter(AuditLog.user_id == user_id)

    total = q.count()
    rows = (
        q.order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    logger.debug("GET /auditoria tabela=%s acao=%s total=%d", tabela, acao, total)
    return AuditLogPage(
        total=total,
        page=page,
        page_size=page_size,
        items=[AuditLogResponse.model_validate(row) for row in rows],
    )
