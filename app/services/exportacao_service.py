"""
Export service layer.

Turns a registry listing into an Excel, PDF or CSV file.  Rows come from
``cadastro_service.query_all`` so exports honour exactly the same search
and filters as the list endpoint; the column set comes from the entity's
``export_columns``.

Design notes
------------
- The row count is capped by ``EXPORT_MAX_ROWS`` from the settings.
- Values are rendered by ``exporters.formatting``: ``None`` → ``-``,
  booleans ``Sim``/``Não``, dates ``DD/MM/YYYY``.  Excel keeps numbers
  numeric so the sheet can still sum them.
- File names are the entity title in lower case with whitespace runs
  replaced by ``-``, e.g. ``"contas-de-energia.xlsx"``.
"""

import logging
import re
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.config import get_settings
from app.exporters.csv_exporter import export_csv
from app.exporters.excel_exporter import ExcelExporter
from app.exporters.formatting import build_rows
from app.exporters.pdf_exporter import PdfExporter
from app.schemas.common import ListFilterParams
from app.services.cadastro_service import query_all
from app.services.entidades import EntityConfig

logger = logging.getLogger(__name__)

MEDIA_TYPES: dict[str, str] = {
    "excel": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "pdf": "application/pdf",
    "csv": "text/csv; charset=utf-8",
}

EXTENSIONS: dict[str, str] = {"excel": "xlsx", "pdf": "pdf", "csv": "csv"}

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class ExportFile:
    filename: str
    media_type: str
    content: bytes


def export_filename(title: str, formato: str) -> str:
    """``"Contas de Energia"`` + ``"excel"`` → ``"contas-de-energia.xlsx"``."""
    base = _WHITESPACE_RE.sub("-", title.strip().lower())
    return f"{base}.{EXTENSIONS[formato]}"


def _filter_labels(filters: ListFilterParams) -> dict[str, str]:
    labels: dict[str, str] = {}
    if filters.busca:
        labels["Busca"] = filters.busca
    if filters.status:
        labels["Status"] = filters.status
    for column, value in filters.filtros.items():
        labels[column] = str(value)
    return labels


def export_entity(
    db: Session,
    config: EntityConfig,
    formato: str,
    filters: ListFilterParams,
) -> ExportFile:
    """Build the export file for one entity.

    Args:
        db: Active SQLAlchemy session.
        config: Registry entry of the entity.
        formato: ``"excel"``, ``"pdf"`` or ``"csv"``.
        filters: Same filters accepted by the list endpoint.

    Returns:
        An ``ExportFile`` with name, media type and bytes.

    Raises:
        ValueError: If ``formato`` is not supported.
        HTTPException 422: If a filter column is not allowed for the entity.
    """
    if formato not in MEDIA_TYPES:
        raise ValueError(
            f"Formato '{formato}' não suportado. Valores válidos: {sorted(MEDIA_TYPES)}."
        )

    settings = get_settings()
    records = query_all(db, config, filters, settings.EXPORT_MAX_ROWS)
    headers = [header for _, header in config.export_columns]

    if formato == "excel":
        exporter = ExcelExporter(title=config.title, filters=_filter_labels(filters))
        exporter.add_header(width=len(headers))
        exporter.add_data_table(headers, build_rows(records, config.export_columns, numeric=True))
        content = exporter.finalize()
    elif formato == "pdf":
        pdf = PdfExporter(title=config.title, filters=_filter_labels(filters))
        pdf.add_header()
        pdf.add_table(headers, build_rows(records, config.export_columns))
        content = pdf.build()
    else:
        content = export_csv(headers, build_rows(records, config.export_columns))

    if len(records) >= settings.EXPORT_MAX_ROWS:
        logger.warning(
            "export_entity: %s truncated at %d rows", config.slug, settings.EXPORT_MAX_ROWS
        )
    logger.info(
        "export_entity: entidade=%s formato=%s rows=%d bytes=%d",
        config.slug, formato, len(records), len(content),
    )
    return ExportFile(
        filename=export_filename(config.title, formato),
        media_type=MEDIA_TYPES[formato],
        content=content,
    )
