"""
Kanban router.

Mounts under ``/api/kanban`` (prefix set in ``main.py``).  Cards are
created, edited and deleted through ``/api/cadastros/pendencias``; this
router serves the board view, the drag-and-drop move and the cleanup
of finished cards.

Endpoints
---------
GET  /quadro               — Active columns with their cards.
PUT  /issues/{id}/mover    — Move a card to another column.
POST /limpar-concluidas    — Admin: purge cards finished over a day ago.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.usuario import Usuario
from app.schemas.kanban import (
    KanbanBoardResponse,
    KanbanIssueCard,
    MoverIssueRequest,
    PurgeResponse,
)
from app.services import kanban_service
from app.services.auth_service import get_current_user, require_role

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Kanban"])


@router.get(
    "/quadro",
    response_model=KanbanBoardResponse,
    summary="Quadro kanban",
    description="Colunas ativas em ordem, cada uma com suas pendências não arquivadas.",
    responses={401: {"description": "Token JWT ausente ou inválido."}},
)
def get_quadro(
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> KanbanBoardResponse:
    return kanban_service.get_board(db)


@router.put(
    "/issues/{issue_id}/mover",
    response_model=KanbanIssueCard,
    summary="Mover pendência",
    description="Move o cartão para outra coluna. Em 'done' a data de conclusão é registrada.",
    responses={
        404: {"description": "Pendência não encontrada."},
        422: {"description": "Coluna inexistente ou inativa."},
    },
)
def mover_issue(
    issue_id: Annotated[int, Path(ge=1, description="ID da pendência.")],
    payload: Annotated[MoverIssueRequest, Body()],
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[Usuario, Depends(get_current_user)],
) -> KanbanIssueCard:
    issue = kanban_service.move_issue(db, issue_id, payload.column_key, current_user)
    return KanbanIssueCard.model_validate(issue)


@router.post(
    "/limpar-concluidas",
    response_model=PurgeResponse,
    summary="Remover pendências concluídas",
    description=(
        "Exclui os cartões concluídos há mais de 24 horas. Cada exclusão "
        "fica registrada na auditoria."
    ),
    responses={403: {"description": "Requer perfil admin."}},
)
def limpar_concluidas(
    db: Annotated[Session, Depends(get_db)],
    admin: Annotated[Usuario, Depends(require_role("admin"))],
) -> PurgeResponse:
    return kanban_service.purge_completed(db, usuario=admin)
