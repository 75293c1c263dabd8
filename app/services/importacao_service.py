"""
Import (Importação) service layer.

Handles spreadsheet uploads end-to-end for every entity of the registry:

1. Look up the entity's ``ImportConfig`` (unknown entity → 404).
2. Keep a copy of the raw file under ``UPLOADS_DIR``.
3. Parse the first sheet and map its rows through the column mappings.
4. Resolve human keys (plate, serial number, contract number, CPF) to
   foreign keys; unresolved keys reject the row.
5. Insert the valid rows in a single flush.
6. Write a ``RegistroImportacao`` audit row and commit.
7. Return an ``ImportacaoUploadResponse`` summary to the calling router.

Bulk insert strategy
--------------------
- All valid rows of one upload are added and flushed together; if the
  database rejects any of them the whole batch is rolled back and the
  upload reports zero imported rows.
- Mapped rows carry ISO date strings; they are converted to ``date`` /
  ``datetime`` objects according to the model column types right before
  the insert.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import date, datetime, timezone
from typing import Any

from fastapi import HTTPException, UploadFile, status
from sqlalchemy import Date, DateTime
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.models.registro_importacao import RegistroImportacao
from app.models.usuario import Usuario
from app.parsers.base_parser import ImportResult, extract_headers, parse_file
from app.parsers.import_configs import IMPORT_CONFIGS, ImportConfig, Lookup
from app.parsers.row_mapper import map_rows, normalize_header
from app.parsers.transforms import to_text
from app.schemas.importacao import (
    CabecalhosResponse,
    EntidadImportacao,
    HistoricoImportacao,
    ImportacaoPreviewResponse,
    ImportacaoUploadResponse,
)
from app.services.file_storage import relative_upload_path, save_upload
from app.utils.constants import IMPORT_FALHA, IMPORT_PARCIAL, IMPORT_SUCESSO

logger = logging.getLogger(__name__)

PREVIEW_SAMPLE_SIZE = 20
_NON_DIGIT_RE = re.compile(r"\D")


# ---------------------------------------------------------------------------
# Registry helpers
# ---------------------------------------------------------------------------


def get_config_or_404(entidade: str) -> ImportConfig:
    config = IMPORT_CONFIGS.get(entidade)
    if config is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Entidade '{entidade}' não suporta importação.",
        )
    return config


def list_entidades() -> list[EntidadImportacao]:
    """Catalog of importable entities with their template headers."""
    return [
        EntidadImportacao(
            key=config.key,
            label=config.label,
            template_filename=config.template_filename,
            colunas=config.template_labels,
            obrigatorios=[m.source_header for m in config.mappings if m.required],
        )
        for config in IMPORT_CONFIGS.values()
    ]


# ---------------------------------------------------------------------------
# Foreign-key lookups
# ---------------------------------------------------------------------------


def _lookup_key(value: Any, digits_only: bool) -> str:
    text = to_text(value)
    if digits_only:
        return _NON_DIGIT_RE.sub("", text)
    return " ".join(text.lower().split())


def _build_lookup_index(db: Session, lookup: Lookup) -> dict[str, int]:
    """Map normalised ``match_column`` values of ``lookup.model`` to ids.

    When several rows share a key the lowest id wins.
    """
    column = getattr(lookup.model, lookup.match_column)
    index: dict[str, int] = {}
    for row_id, raw in db.query(lookup.model.id, column).order_by(lookup.model.id).all():
        if raw is None:
            continue
        index.setdefault(_lookup_key(raw, lookup.digits_only), row_id)
    return index


def resolve_lookups(db: Session, config: ImportConfig, result: ImportResult) -> ImportResult:
    """Replace lookup source fields with foreign-key ids.

    Rows whose lookup value matches nothing are moved out of ``data`` and
    reported as ``Linha N: <label> não encontrado: "<value>"``.
    """
    if not config.lookups or not result.data:
        return result

    indexes = {lookup.source_field: _build_lookup_index(db, lookup) for lookup in config.lookups}
    kept_rows: list[dict[str, Any]] = []
    kept_numbers: list[int] = []

    for row, row_number in zip(result.data, result.row_numbers):
        is_valid = True
        for lookup in config.lookups:
            raw = row.pop(lookup.source_field, None)
            if raw is None or raw == "":
                row[lookup.target_field] = None
                continue
            found = indexes[lookup.source_field].get(_lookup_key(raw, lookup.digits_only))
            if found is None:
                result.errors.append(f'Linha {row_number}: {lookup.label} não encontrado: "{raw}"')
                is_valid = False
                continue
            row[lookup.target_field] = found
        if is_valid:
            kept_rows.append(row)
            kept_numbers.append(row_number)

    result.data = kept_rows
    result.row_numbers = kept_numbers
    return result


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


def coerce_for_model(model: Any, row: dict[str, Any]) -> dict[str, Any]:
    """Keep only model columns and convert ISO strings for date columns.

    ``None`` is dropped for columns with a default so the default applies.
    """
    columns = model.__table__.columns
    values: dict[str, Any] = {}
    for field_name, value in row.items():
        if field_name not in columns:
            continue
        column = columns[field_name]
        if value is None:
            if column.default is not None:
                continue
            values[field_name] = None
            continue
        if isinstance(value, str):
            if isinstance(column.type, DateTime):
                value = datetime.fromisoformat(value)
            elif isinstance(column.type, Date):
                value = date.fromisoformat(value[:10])
        values[field_name] = value
    return values


def _persist_rows(db: Session, model: Any, rows: list[dict[str, Any]]) -> int:
    objects = [model(**coerce_for_model(model, row)) for row in rows]
    db.add_all(objects)
    db.flush()
    return len(objects)


def _import_status(registros_ok: int, errors: list[str]) -> str:
    if registros_ok == 0:
        return IMPORT_FALHA
    return IMPORT_PARCIAL if errors else IMPORT_SUCESSO


def _write_audit_log(
    db: Session,
    *,
    entidade: str,
    arquivo_nome: str,
    arquivo_path: str | None,
    usuario: Usuario,
    total_linhas: int,
    registros_ok: int,
    registros_erro: int,
    estado: str,
    errors: list[str],
) -> None:
    """Persist a ``RegistroImportacao`` row as an import audit record."""
    db.add(
        RegistroImportacao(
            entidade=entidade,
            arquivo_nome=arquivo_nome,
            arquivo_path=arquivo_path,
            data=datetime.now(timezone.utc),
            usuario_id=usuario.id,
            usuario_username=usuario.username,
            total_linhas=total_linhas,
            registros_ok=registros_ok,
            registros_erro=registros_erro,
            status=estado,
            errors_json=json.dumps(errors, ensure_ascii=False) if errors else None,
        )
    )


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------


async def _read_upload(file: UploadFile) -> tuple[bytes, str]:
    raw: bytes = await file.read()
    if not raw:
        raise ValueError("O arquivo está vazio.")
    return raw, file.filename or "upload.xlsx"


def map_spreadsheet(db: Session, config: ImportConfig, raw: bytes) -> ImportResult:
    """Parse, map and resolve lookups without writing anything.

    Raises:
        ValueError: When the file is not a readable workbook.
    """
    rows = parse_file(raw)
    result = map_rows(rows, config.mappings)
    return resolve_lookups(db, config, result)


async def process_upload(
    db: Session,
    entidade: str,
    file: UploadFile,
    usuario: Usuario,
) -> ImportacaoUploadResponse:
    """Import an uploaded spreadsheet into the entity's table.

    Raises:
        HTTPException: 404 for an entity without import support.
        ValueError: Empty or unreadable file (router maps to 422).
        RuntimeError: The audit row could not be written (router maps to 500).
    """
    config = get_config_or_404(entidade)
    raw, filename = await _read_upload(file)

    settings = get_settings()
    arquivo_path: str | None = None
    try:
        saved = save_upload(raw, filename, settings.UPLOADS_DIR, username=usuario.username)
        arquivo_path = relative_upload_path(saved, settings.UPLOADS_DIR)
    except OSError as exc:
        logger.warning("Could not save upload to disk: %s", exc)

    logger.info(
        "process_upload: entidade='%s' file='%s' user='%s'",
        entidade, filename, usuario.username,
    )

    result = map_spreadsheet(db, config, raw)
    errors = list(result.errors)
    warnings: list[str] = []
    if result.total_rows == 0:
        errors.append("A planilha não contém linhas de dados.")

    registros_ok = 0
    if result.data:
        try:
            registros_ok = _persist_rows(db, config.model, result.data)
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Bulk insert failed for entity '%s'", entidade)
            errors.append(f"Erro ao inserir registros no banco de dados: {exc.__class__.__name__}")
            registros_ok = 0

    registros_erro = result.total_rows - registros_ok
    if registros_ok and result.invalid_rows:
        warnings.append(f"{result.invalid_rows} linha(s) ignorada(s) por erros de validação.")
    estado = _import_status(registros_ok, errors)

    try:
        _write_audit_log(
            db,
            entidade=entidade,
            arquivo_nome=filename,
            arquivo_path=arquivo_path,
            usuario=usuario,
            total_linhas=result.total_rows,
            registros_ok=registros_ok,
            registros_erro=registros_erro,
            estado=estado,
            errors=errors,
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to write audit log for import '%s'", filename)
        raise RuntimeError("Erro ao salvar o registro de importação.") from exc

    logger.info(
        "process_upload: entidade='%s' ok=%d erro=%d status=%s",
        entidade, registros_ok, registros_erro, estado,
    )

    return ImportacaoUploadResponse(
        entidade=entidade,
        arquivo=filename,
        total_linhas=result.total_rows,
        registros_importados=registros_ok,
        registros_invalidos=registros_erro,
        status=estado,
        errors=errors,
        warnings=warnings,
    )


async def preview_upload(
    db: Session,
    entidade: str,
    file: UploadFile,
) -> ImportacaoPreviewResponse:
    """Run the mapping pipeline on an upload and report, without persisting."""
    config = get_config_or_404(entidade)
    raw, _ = await _read_upload(file)

    headers = extract_headers(raw)
    result = map_spreadsheet(db, config, raw)

    return ImportacaoPreviewResponse(
        entidade=entidade,
        cabecalhos=headers,
        total_linhas=result.total_rows,
        linhas_validas=result.valid_rows,
        errors=result.errors,
        amostra=result.data[:PREVIEW_SAMPLE_SIZE],
    )


async def check_headers(entidade: str, file: UploadFile) -> CabecalhosResponse:
    """Compare the header row of an upload with the entity's mappings."""
    config = get_config_or_404(entidade)
    raw, _ = await _read_upload(file)
    headers = extract_headers(raw)

    known = {normalize_header(m.source_header) for m in config.mappings}
    present = {normalize_header(header) for header in headers}

    missing_required: list[str] = []
    seen_targets: set[str] = set()
    for mapping in config.mappings:
        if mapping.target_field in seen_targets:
            continue
        aliases = [m for m in config.mappings if m.target_field == mapping.target_field]
        seen_targets.add(mapping.target_field)
        if any(m.required for m in aliases) and not any(
            normalize_header(m.source_header) in present for m in aliases
        ):
            missing_required.append(aliases[0].source_header)

    return CabecalhosResponse(
        cabecalhos=headers,
        reconhecidos=[h for h in headers if normalize_header(h) in known],
        nao_reconhecidos=[h for h in headers if normalize_header(h) not in known],
        obrigatorios_ausentes=missing_required,
    )


# ---------------------------------------------------------------------------
# History query
# ---------------------------------------------------------------------------


def get_historico(
    db: Session,
    entidade: str | None = None,
    limit: int = 100,
) -> list[HistoricoImportacao]:
    """Return the import history list, most-recent first."""
    q = db.query(RegistroImportacao)
    if entidade:
        q = q.filter(RegistroImportacao.entidade == entidade)

    records = (
        q.order_by(RegistroImportacao.data.desc(), RegistroImportacao.id.desc())
        .limit(limit)
        .all()
    )
    logger.debug("get_historico: %d records returned", len(records))
    return [HistoricoImportacao.model_validate(rec) for rec in records]
