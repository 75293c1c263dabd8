"""Cell formatting shared by the Excel, PDF and CSV exporters."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Sequence

EMPTY_VALUE = "-"


def resolve_attr(obj: Any, path: str) -> Any:
    """Follow a dotted attribute path (``"vehicle.plate"``); ``None`` stops the walk."""
    value = obj
    for part in path.split("."):
        if value is None:
            return None
        value = getattr(value, part, None)
    return value


def _format_number(value: float | int) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_value(value: Any) -> str:
    """Text rendering used in exports.

    ``None`` becomes ``"-"``, booleans ``"Sim"``/``"Não"``, dates and
    datetimes ``DD/MM/YYYY``; numbers keep their plain representation.
    """
    if value is None:
        return EMPTY_VALUE
    if isinstance(value, bool):
        return "Sim" if value else "Não"
    if isinstance(value, (datetime, date)):
        return value.strftime("%d/%m/%Y")
    if isinstance(value, Decimal):
        return _format_number(float(value))
    if isinstance(value, (int, float)):
        return _format_number(value)
    return str(value)


def cell_value(value: Any) -> Any:
    """Like ``format_value`` but numbers stay numeric (for spreadsheet cells)."""
    if isinstance(value, bool) or value is None:
        return format_value(value)
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (int, float)):
        return value
    return format_value(value)


def build_rows(
    records: Sequence[Any],
    columns: Sequence[tuple[str, str]],
    numeric: bool = False,
) -> list[list[Any]]:
    """Project ORM rows onto ``(attribute, header)`` columns.

    Args:
        records: ORM instances.
        columns: ``(attribute path, header)`` pairs.
        numeric: Keep numbers as numbers (Excel) instead of text.
    """
    fmt = cell_value if numeric else format_value
    return [[fmt(resolve_attr(record, attr)) for attr, _ in columns] for record in records]
