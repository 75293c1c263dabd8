"""
Registry ("cadastros") service layer.

Generic CRUD, listing and dashboard aggregation for every entity in
``entidades.ENTIDADES``.  Functions receive a SQLAlchemy ``Session`` and the
entity's ``EntityConfig`` and return ORM rows or schema instances ready for
serialisation by FastAPI.

Design notes
------------
- ``func.coalesce(..., 0)`` guards against NULL sums on empty result sets.
- ``_safe_pct`` mirrors the percentage helper used by the other services.
- Write operations commit immediately and refresh the ORM instance so
  callers always receive the up-to-date record.
- Every write is recorded in ``audit_log`` with JSON snapshots of the row
  before and after the change, inside the same transaction.
- Deletes go through ``dependencia_service``: regular users get HTTP 409
  when other rows still reference the record; admins may proceed.
"""

from __future__ import annotations

import datetime
import json
import logging
from typing import Any

from fastapi import HTTPException, status
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.audit_log import AuditLog
from app.models.usuario import Usuario
from app.schemas.cadastros import DashboardBucket, DashboardResponse
from app.schemas.common import ListFilterParams, PaginatedResponse, PaginationParams
from app.schemas.dependencia import DependencyItem, ExclusaoResponse
from app.services.dependencia_service import (
    check_dependencies,
    dependency_summary,
    release_dependencies,
)
from app.services.entidades import EntityConfig
from app.utils.constants import AUDIT_DELETE, AUDIT_INSERT, AUDIT_UPDATE

logger = logging.getLogger(__name__)

_SEM_VALOR = "Não informado"
_TRUE_FILTER_VALUES = frozenset({"true", "1", "sim", "s", "yes"})


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_pct(numerator: float, denominator: float) -> float:
    """Return numerator / denominator × 100, capped at 100.0, or 0.0 when
    denominator is zero.

    Args:
        numerator: Dividend value (e.g. rows in one bucket).
        denominator: Divisor value (e.g. total rows).

    Returns:
        Percentage rounded to two decimal places in the range [0.0, 100.0].
    """
    if denominator == 0:
        return 0.0
    return round(min((numerator / denominator) * 100, 100.0), 2)


def snapshot(obj: Any) -> dict[str, Any]:
    """Column values of an ORM row, JSON-ready."""
    return jsonable_encoder({col.name: getattr(obj, col.name) for col in obj.__table__.columns})


def write_audit(
    db: Session,
    *,
    action: str,
    table_name: str,
    record_id: int | None,
    old_data: dict[str, Any] | None,
    new_data: dict[str, Any] | None,
    usuario: Usuario | None,
) -> None:
    db.add(
        AuditLog(
            action=action,
            table_name=table_name,
            record_id=record_id,
            old_data=json.dumps(old_data, ensure_ascii=False) if old_data is not None else None,
            new_data=json.dumps(new_data, ensure_ascii=False) if new_data is not None else None,
            user_id=usuario.id if usuario is not None else None,
        )
    )


def _coerce_filter(column: Any, raw: Any) -> Any:
    """Convert a query-string value to the Python type of *column*.

    Raises:
        HTTPException 422: If the value cannot be converted.
    """
    if not isinstance(raw, str):
        return raw
    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return raw

    try:
        if python_type is bool:
            return raw.strip().lower() in _TRUE_FILTER_VALUES
        if python_type is int:
            return int(raw)
        if python_type is datetime.date:
            return datetime.date.fromisoformat(raw)
        if python_type is datetime.datetime:
            return datetime.datetime.fromisoformat(raw)
        if python_type is float:
            return float(raw)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Valor inválido para o filtro '{column.key}': '{raw}'.",
        )
    return raw


def _apply_filters(query: Any, config: EntityConfig, filters: ListFilterParams) -> Any:
    """Apply search, status and column filters to a query on ``config.model``.

    Each filter is applied only when provided; filter keys outside
    ``config.filter_columns`` are rejected with HTTP 422.
    """
    model = config.model

    if filters.busca and config.search_columns:
        pattern = f"%{filters.busca.strip()}%"
        query = query.filter(
            or_(*[getattr(model, name).ilike(pattern) for name in config.search_columns])
        )

    if filters.status is not None and hasattr(model, "status"):
        query = query.filter(model.status == filters.status)

    for name, raw in filters.filtros.items():
        if name not in config.filter_columns:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=(
                    f"Filtro '{name}' não permitido. "
                    f"Filtros válidos: {list(config.filter_columns)}."
                ),
            )
        column = getattr(model, name)
        query = query.filter(column == _coerce_filter(column, raw))

    return query


def _integrity_error(exc: IntegrityError) -> HTTPException:
    logger.warning("Integrity error: %s", exc.orig)
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail="Referência inválida ou valor obrigatório ausente.",
    )


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def list_records(
    db: Session,
    config: EntityConfig,
    filters: ListFilterParams,
    pagination: PaginationParams,
) -> PaginatedResponse:
    """Return one page of filtered rows, newest first by the entity's order column.

    Args:
        db: Active SQLAlchemy session.
        config: Registry entry of the entity.
        filters: Search, status and column filters.
        pagination: Page number and page size.

    Returns:
        A ``PaginatedResponse`` whose items are serialised response models.
    """
    model = config.model
    total: int = _apply_filters(db.query(func.count(model.id)), config, filters).scalar() or 0

    rows = (
        _apply_filters(db.query(model), config, filters)
        .order_by(getattr(model, config.default_order).desc(), model.id.desc())
        .offset(pagination.offset)
        .limit(pagination.page_size)
        .all()
    )

    logger.debug(
        "list_records: %s page=%d size=%d total=%d returned=%d",
        config.slug, pagination.page, pagination.page_size, total, len(rows),
    )
    return PaginatedResponse(
        total=total,
        page=pagination.page,
        page_size=pagination.page_size,
        items=[config.response_schema.model_validate(row).model_dump() for row in rows],
    )


def query_all(db: Session, config: EntityConfig, filters: ListFilterParams, limit: int) -> list[Any]:
    """Filtered rows without pagination, capped at *limit* (used by exports)."""
    model = config.model
    return (
        _apply_filters(db.query(model), config, filters)
        .order_by(getattr(model, config.default_order).desc(), model.id.desc())
        .limit(limit)
        .all()
    )


def get_dashboard(
    db: Session, config: EntityConfig, filters: ListFilterParams
) -> DashboardResponse:
    """Aggregate counts and sums for the entity's header cards and charts.

    For each group-by column the rows are bucketed; every bucket carries its
    count, the sum of the value column and its share of the total count.

    Args:
        db: Active SQLAlchemy session.
        config: Registry entry of the entity.
        filters: Same filters as the list endpoint.

    Returns:
        A ``DashboardResponse``; buckets are ordered by quantity descending.
    """
    model = config.model
    sum_expr = (
        func.coalesce(func.sum(getattr(model, config.sum_column)), 0)
        if config.sum_column
        else None
    )

    head_columns = [func.count(model.id)]
    if sum_expr is not None:
        head_columns.append(sum_expr)
    head = _apply_filters(db.query(*head_columns), config, filters).one()
    total = int(head[0] or 0)
    valor_total = float(head[1]) if sum_expr is not None else 0.0

    distribuicoes: dict[str, list[DashboardBucket]] = {}
    for name in config.group_columns:
        column = getattr(model, name)
        select_columns = [column.label("grupo"), func.count(model.id).label("quantidade")]
        if sum_expr is not None:
            select_columns.append(sum_expr.label("valor"))
        q = _apply_filters(db.query(*select_columns), config, filters).group_by(column)

        buckets = [
            DashboardBucket(
                label=_SEM_VALOR if row.grupo is None else str(row.grupo),
                quantidade=row.quantidade,
                valor=float(row.valor) if sum_expr is not None else 0.0,
                percentual=_safe_pct(row.quantidade, total),
            )
            for row in q.all()
        ]
        buckets.sort(key=lambda bucket: bucket.quantidade, reverse=True)
        distribuicoes[name] = buckets

    logger.debug("get_dashboard: %s total=%d groups=%d", config.slug, total, len(distribuicoes))
    return DashboardResponse(
        entidade=config.slug,
        total=total,
        valor_total=valor_total,
        distribuicoes=distribuicoes,
    )


def get_record(db: Session, config: EntityConfig, record_id: int) -> Any:
    """Load one row by primary key.

    Raises:
        HTTPException 404: If no row with ``record_id`` exists.
    """
    obj = db.query(config.model).filter(config.model.id == record_id).first()
    if obj is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{config.title}: registro id={record_id} não encontrado.",
        )
    return obj


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


def create_record(
    db: Session, config: EntityConfig, data: BaseModel, usuario: Usuario | None = None
) -> Any:
    """Insert a new row and audit it.

    Raises:
        HTTPException 422: If the database rejects the row (bad reference,
                           missing mandatory value).
    """
    obj = config.model(**data.model_dump())
    db.add(obj)
    try:
        db.flush()
        write_audit(
            db,
            action=AUDIT_INSERT,
            table_name=config.table_name,
            record_id=obj.id,
            old_data=None,
            new_data=snapshot(obj),
            usuario=usuario,
        )
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise _integrity_error(exc)
    db.refresh(obj)

    logger.info("create_record: %s id=%d", config.slug, obj.id)
    return obj


def update_record(
    db: Session,
    config: EntityConfig,
    record_id: int,
    data: BaseModel,
    usuario: Usuario | None = None,
) -> Any:
    """Apply a partial update; only the fields sent by the client are written.

    Raises:
        HTTPException 404: If the row does not exist.
        HTTPException 422: If the database rejects the change.
    """
    obj = get_record(db, config, record_id)
    old_data = snapshot(obj)

    update_data = data.model_dump(exclude_unset=True)
    for field_name, value in update_data.items():
        setattr(obj, field_name, value)

    try:
        db.flush()
        write_audit(
            db,
            action=AUDIT_UPDATE,
            table_name=config.table_name,
            record_id=record_id,
            old_data=old_data,
            new_data=snapshot(obj),
            usuario=usuario,
        )
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise _integrity_error(exc)
    db.refresh(obj)

    logger.info("update_record: %s id=%d fields=%s", config.slug, record_id, list(update_data))
    return obj


def _delete_one(db: Session, config: EntityConfig, obj: Any, usuario: Usuario | None) -> None:
    release_dependencies(db, config.table_name, obj.id)
    write_audit(
        db,
        action=AUDIT_DELETE,
        table_name=config.table_name,
        record_id=obj.id,
        old_data=snapshot(obj),
        new_data=None,
        usuario=usuario,
    )
    db.delete(obj)


def _blocked(summary: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=(
            f"Este registro possui dependências ({summary}). "
            "Apenas administradores podem excluir registros com dependências."
        ),
    )


def delete_records(
    db: Session,
    config: EntityConfig,
    record_ids: list[int],
    usuario: Usuario,
) -> ExclusaoResponse:
    """Delete one or more rows in a single transaction.

    Every id must exist.  When any row still has dependents, regular users
    are refused with HTTP 409 and nothing is deleted; admins proceed and
    the dependents are detached (nullable FK) or removed (mandatory FK).

    Args:
        db: Active SQLAlchemy session.
        config: Registry entry of the entity.
        record_ids: Primary keys to delete; duplicates are ignored.
        usuario: Caller, for the role check and the audit log.

    Returns:
        An ``ExclusaoResponse``; ``warning`` is set when dependents were touched.

    Raises:
        HTTPException 404: If any id does not exist.
        HTTPException 409: If a non-admin tries to delete a record with
                           dependents, or the database still refuses the delete.
    """
    unique_ids = list(dict.fromkeys(record_ids))
    rows = [get_record(db, config, record_id) for record_id in unique_ids]

    dependencies: list[DependencyItem] = []
    for obj in rows:
        result = check_dependencies(db, config.table_name, obj.id)
        if not result.has_dependencies:
            continue
        if not usuario.is_admin:
            raise _blocked(dependency_summary(result))
        dependencies.extend(result.dependencies)

    try:
        for obj in rows:
            _delete_one(db, config, obj, usuario)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("delete_records: %s refused by database: %s", config.slug, exc.orig)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Não foi possível excluir: o registro é referenciado por outros dados.",
        )

    warning = None
    if dependencies:
        warning = "Registros dependentes foram desvinculados ou excluídos junto com o registro."

    logger.info(
        "delete_records: %s ids=%s by '%s' (dependents=%d)",
        config.slug, unique_ids, usuario.username, len(dependencies),
    )
    return ExclusaoResponse(
        message=f"{len(rows)} registro(s) excluído(s).",
        excluidos=len(rows),
        warning=warning,
        dependencias=dependencies,
    )
