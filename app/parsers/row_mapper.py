"""Maps parsed spreadsheet rows onto model fields.

Headers are matched exactly first and then by their normalised form, so
``"Contrato:"``, ``"contrato"`` and ``" Contrato "`` all hit a mapping
declared as ``"Contrato"``.  Failures are isolated per row: a bad row adds
one message per offending field and is left out of ``ImportResult.data``.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from app.parsers.base_parser import ColumnMapping, ImportResult
from app.parsers.transforms import is_blank, strip_accents

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")

# Data starts on sheet row 2 (row 1 is the header).
FIRST_DATA_ROW = 2


def normalize_header(value: str) -> str:
    """Accent-, case- and spacing-insensitive form of a header.

    Example::

        normalize_header("  Número  de Série: ")  # "numero de serie"
    """
    text = strip_accents(str(value)).strip()
    if text.endswith(":"):
        text = text[:-1]
    return _WHITESPACE_RE.sub(" ", text).strip().lower()


def _group_by_target(mappings: list[ColumnMapping]) -> dict[str, list[ColumnMapping]]:
    groups: dict[str, list[ColumnMapping]] = {}
    for mapping in mappings:
        groups.setdefault(mapping.target_field, []).append(mapping)
    return groups


def _header_index(row: dict[str, Any]) -> dict[str, str]:
    index: dict[str, str] = {}
    for header in row:
        index.setdefault(normalize_header(header), header)
    return index


def _cell_value(row: dict[str, Any], index: dict[str, str], source_header: str) -> Any:
    if source_header in row:
        return row[source_header]
    found = index.get(normalize_header(source_header))
    return row[found] if found is not None else None


def map_rows(rows: list[dict[str, Any]], mappings: list[ColumnMapping]) -> ImportResult:
    """Apply *mappings* to every row and collect per-row errors.

    Args:
        rows: Output of ``parse_file``.
        mappings: Column mappings of one entity, aliases included.

    Returns:
        ``ImportResult`` with the valid rows, their sheet row numbers and
        the error messages of the rejected ones.
    """
    groups = _group_by_target(mappings)
    result = ImportResult(total_rows=len(rows))

    for position, row in enumerate(rows):
        row_number = position + FIRST_DATA_ROW
        index = _header_index(row)
        mapped: dict[str, Any] = {}
        is_valid = True

        for target, aliases in groups.items():
            chosen: ColumnMapping | None = None
            value: Any = None
            for alias in aliases:
                candidate = _cell_value(row, index, alias.source_header)
                if not is_blank(candidate):
                    chosen, value = alias, candidate
                    break

            required = any(alias.required for alias in aliases)
            if chosen is None:
                if required:
                    result.errors.append(
                        f'Linha {row_number}: Campo "{aliases[0].source_header}" é obrigatório'
                    )
                    is_valid = False
                else:
                    mapped[target] = None
                continue

            try:
                converted = chosen.transform(value) if chosen.transform else value
            except Exception:  # transforms are user-supplied callables
                logger.debug("Transform failed on row %d field %s", row_number, target, exc_info=True)
                result.errors.append(
                    f'Linha {row_number}: Erro ao processar campo "{chosen.source_header}"'
                )
                is_valid = False
                continue

            if required and (converted is None or converted == ""):
                result.errors.append(
                    f'Linha {row_number}: Valor inválido no campo "{chosen.source_header}"'
                )
                is_valid = False
                continue

            mapped[target] = converted

        if is_valid:
            result.data.append(mapped)
            result.row_numbers.append(row_number)

    logger.debug("Row mapping finished: %s", result.summary())
    return result
