"""
Kanban board service.

Builds the issue board from the active ``KanbanColumn`` rows and moves
cards between columns.  Columns are seeded on startup from
``constants.KANBAN_DEFAULT_COLUMNS``.

Design notes
------------
- Cards whose ``status`` is ``"closed"`` are archived and left off the board.
- Cards pointing at an unknown or inactive column are not shown.
- Reaching the ``done`` column stamps ``completed_at``; leaving it clears
  the stamp so the archive only lists finished work.
- ``purge_completed`` drops cards whose ``completed_at`` is older than
  ``KANBAN_DONE_RETENTION_HOURS``; run it from a scheduler or the admin
  endpoint.
"""

import logging
from datetime import datetime, timedelta

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.models.pending_issue import KanbanColumn, PendingIssue
from app.models.usuario import Usuario
from app.schemas.kanban import (
    KanbanBoardResponse,
    KanbanColumnResponse,
    KanbanIssueCard,
    PurgedIssue,
    PurgeResponse,
)
from app.services.cadastro_service import snapshot, write_audit
from app.utils.constants import (
    AUDIT_DELETE,
    AUDIT_UPDATE,
    KANBAN_DEFAULT_COLUMNS,
    KANBAN_DONE_KEY,
    KANBAN_DONE_RETENTION_HOURS,
)

logger = logging.getLogger(__name__)

ARCHIVED_STATUS = "closed"


def seed_default_columns(db: Session) -> int:
    """Insert the system columns that are missing. Returns how many were added."""
    existing = {key for (key,) in db.query(KanbanColumn.key).all()}
    added = 0
    for column in KANBAN_DEFAULT_COLUMNS:
        if column["key"] in existing:
            continue
        db.add(KanbanColumn(is_system=True, is_active=True, **column))
        added += 1
    if added:
        db.commit()
        logger.info("seed_default_columns: %d column(s) created", added)
    return added


def get_board(db: Session) -> KanbanBoardResponse:
    columns = (
        db.query(KanbanColumn)
        .filter(KanbanColumn.is_active.is_(True))
        .order_by(KanbanColumn.order_index, KanbanColumn.id)
        .all()
    )
    keys = [column.key for column in columns]
    issues = (
        db.query(PendingIssue)
        .filter(PendingIssue.column_key.in_(keys), PendingIssue.status != ARCHIVED_STATUS)
        .order_by(PendingIssue.created_at.desc(), PendingIssue.id.desc())
        .all()
        if keys
        else []
    )

    by_column: dict[str, list[KanbanIssueCard]] = {key: [] for key in keys}
    for issue in issues:
        by_column[issue.column_key].append(KanbanIssueCard.model_validate(issue))

    board = [
        KanbanColumnResponse(
            key=column.key,
            title=column.title,
            color=column.color,
            order_index=column.order_index,
            is_system=column.is_system,
            total=len(by_column[column.key]),
            issues=by_column[column.key],
        )
        for column in columns
    ]
    return KanbanBoardResponse(columns=board, total=len(issues))


def move_issue(
    db: Session,
    issue_id: int,
    column_key: str,
    usuario: Usuario | None = None,
) -> PendingIssue:
    """Place a card in another column.

    Raises:
        HTTPException 404: Unknown issue.
        HTTPException 422: Unknown or inactive destination column.
    """
    issue = db.get(PendingIssue, issue_id)
    if issue is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Pendência id={issue_id} não encontrada.",
        )
    column = (
        db.query(KanbanColumn)
        .filter(KanbanColumn.key == column_key, KanbanColumn.is_active.is_(True))
        .first()
    )
    if column is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Coluna '{column_key}' não existe ou está inativa.",
        )

    old_data = snapshot(issue)
    issue.column_key = column_key
    if column_key == KANBAN_DONE_KEY:
        if issue.completed_at is None:
            issue.completed_at = datetime.now()
    else:
        issue.completed_at = None

    db.flush()
    write_audit(
        db,
        action=AUDIT_UPDATE,
        table_name=PendingIssue.__tablename__,
        record_id=issue.id,
        old_data=old_data,
        new_data=snapshot(issue),
        usuario=usuario,
    )
    db.commit()
    db.refresh(issue)
    logger.info("move_issue: id=%d -> %s", issue_id, column_key)
    return issue


def purge_completed(
    db: Session,
    usuario: Usuario | None = None,
    now: datetime | None = None,
    retention_hours: int = KANBAN_DONE_RETENTION_HOURS,
) -> PurgeResponse:
    """Delete cards completed more than ``retention_hours`` ago.

    Only ``completed_at`` matters, so a card dragged back out of ``done``
    (which clears the stamp) is never purged.  Each removal is audited.
    """
    cutoff = (now or datetime.now()) - timedelta(hours=retention_hours)
    stale = (
        db.query(PendingIssue)
        .filter(PendingIssue.completed_at.is_not(None), PendingIssue.completed_at < cutoff)
        .order_by(PendingIssue.completed_at, PendingIssue.id)
        .all()
    )

    removed = [PurgedIssue(id=issue.id, title=issue.title) for issue in stale]
    for issue in stale:
        write_audit(
            db,
            action=AUDIT_DELETE,
            table_name=PendingIssue.__tablename__,
            record_id=issue.id,
            old_data=snapshot(issue),
            new_data=None,
            usuario=usuario,
        )
        db.delete(issue)
    db.commit()

    logger.info("purge_completed: %d card(s) older than %s removed", len(removed), cutoff)
    return PurgeResponse(removidas=len(removed), issues=removed)
