"""Spreadsheet import parsers package.

Public API
----------
ColumnMapping     — Header → model field pairing with an optional transform.
ImportResult      — Dataclass returned by ``map_rows``.
parse_file        — Read the first sheet of a workbook into row dicts.
extract_headers   — List the header row of a workbook.
map_rows          — Apply mappings to parsed rows, collecting row errors.
normalize_header  — Accent/case/spacing-insensitive header key.
ImportConfig      — Per-entity mapping set, template columns and lookups.
IMPORT_CONFIGS    — Registry of every importable entity.

Usage example::

    from app.parsers import IMPORT_CONFIGS, map_rows, parse_file

    config = IMPORT_CONFIGS["vehicles"]
    result = map_rows(parse_file("/path/to/veiculos.xlsx"), config.mappings)
    print(result.summary())
"""

from .base_parser import ColumnMapping, ImportResult, extract_headers, parse_file
from .import_configs import IMPORT_CONFIGS, ImportConfig, Lookup, get_import_config
from .row_mapper import map_rows, normalize_header

__all__: list[str] = [
    "ColumnMapping",
    "ImportResult",
    "parse_file",
    "extract_headers",
    "map_rows",
    "normalize_header",
    "ImportConfig",
    "Lookup",
    "IMPORT_CONFIGS",
    "get_import_config",
]
