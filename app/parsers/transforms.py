"""Cell-value transforms used by the spreadsheet import mappings.

Every function here is total: it never raises for malformed input and
returns a safe default (``0``, ``None`` or ``""``) instead.  Spreadsheets
are maintained by hand, so the same column can hold native numbers, Excel
serial dates, Brazilian-formatted strings or free text on different rows.

Design notes
------------
* Numbers: Brazilian (``1.234,56``) and US (``1,234.56``) notations are
  told apart by separator layout; ambiguous strings fall back to "the last
  separator with at most three trailing digits is the decimal mark".
* Dates: Excel serials count days from 1899-12-30 and are only accepted
  from numeric cells landing in 1900–2100.  Digit-only text is an id or a
  code, never a date.  Slash dates default to day/month order.
* Dates are returned as ISO strings so mapped rows stay JSON-serialisable
  for previews; the import service converts them for the ORM.
"""

from __future__ import annotations

import logging
import math
import re
import unicodedata
from collections.abc import Callable
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any

import pandas as pd

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

EXCEL_EPOCH = date(1899, 12, 30)
MIN_YEAR = 1900
MAX_YEAR = 2100
MAX_DATE_TEXT_LENGTH = 20

_PLAIN_NUMBER_RE = re.compile(r"^-?\d+(\.\d+)?$")
_CURRENCY_RE = re.compile(r"R\$|\$|\s")
_BR_NUMBER_RE = re.compile(r"^-?\d{1,3}(\.\d{3})+(,\d+)$")
_US_NUMBER_RE = re.compile(r"^-?\d{1,3}(,\d{3})+(\.\d+)$")
_NON_DIGIT_RE = re.compile(r"\D")

_NUMERIC_TEXT_RE = re.compile(r"^\d+(\.\d+)?$")
_ISO_DATE_RE = re.compile(r"^(\d{4})[-/](\d{1,2})[-/](\d{1,2})(?:[T\s].*)?$")
_DMY_DATE_RE = re.compile(r"^(\d{1,2})[/.\-](\d{1,2})[/.\-](\d{4}|\d{2})(?:\s.*)?$")
_BR_DATETIME_RE = re.compile(
    r"^(\d{1,2})/(\d{1,2})/(\d{4}|\d{2})(?:\s+(\d{1,2}):(\d{2})(?::(\d{2}))?)?$"
)
_MONTH_YEAR_RE = re.compile(r"^(\d{1,2})[/.\-](\d{4}|\d{2})$")
_MONTH_NAME_RE = re.compile(r"^([a-z]+)\.?\s*(?:[/\-]|de)?\s*(\d{4}|\d{2})$")

PT_MONTHS: dict[str, int] = {
    "janeiro": 1, "jan": 1,
    "fevereiro": 2, "fev": 2,
    "marco": 3, "mar": 3,
    "abril": 4, "abr": 4,
    "maio": 5, "mai": 5,
    "junho": 6, "jun": 6,
    "julho": 7, "jul": 7,
    "agosto": 8, "ago": 8,
    "setembro": 9, "set": 9,
    "outubro": 10, "out": 10,
    "novembro": 11, "nov": 11,
    "dezembro": 12, "dez": 12,
}

_TRUE_VALUES = frozenset({"sim", "s", "true", "verdadeiro", "1", "x", "yes", "y"})


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def strip_accents(text: str) -> str:
    """Remove diacritics: ``"Número"`` → ``"Numero"``."""
    normalized = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in normalized if not unicodedata.combining(ch))


def is_blank(value: Any) -> bool:
    """True for ``None``, NaN/NaT and strings that are empty after trimming."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (float, Decimal)):
        return math.isnan(value)
    if value is pd.NaT:
        return True
    return False


def _expand_year(year: int) -> int:
    return 2000 + year if year < 100 else year


def _safe_date(year: int, month: int, day: int) -> date | None:
    if not MIN_YEAR <= year <= MAX_YEAR:
        return None
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _serial_to_datetime(serial: float) -> datetime | None:
    """Convert an Excel serial (days since 1899-12-30) to a datetime."""
    if math.isnan(serial) or math.isinf(serial):
        return None
    try:
        whole = int(serial)
        seconds = round((serial - whole) * 86_400)
        base = EXCEL_EPOCH + timedelta(days=whole)
    except (OverflowError, ValueError):
        return None
    if not MIN_YEAR <= base.year <= MAX_YEAR:
        return None
    return datetime(base.year, base.month, base.day) + timedelta(seconds=seconds)


def _parse_date(raw: Any) -> date | None:
    """Core date parser shared by ``to_date`` and ``to_month``."""
    if is_blank(raw) or isinstance(raw, bool):
        return None
    if isinstance(raw, datetime):
        return raw.date() if MIN_YEAR <= raw.year <= MAX_YEAR else None
    if isinstance(raw, date):
        return raw if MIN_YEAR <= raw.year <= MAX_YEAR else None
    if isinstance(raw, (int, float, Decimal)):
        parsed = _serial_to_datetime(float(raw))
        return parsed.date() if parsed else None

    text = str(raw).strip()
    if len(text) > MAX_DATE_TEXT_LENGTH:
        return None

    if _NUMERIC_TEXT_RE.match(text):
        # Digits typed as text are codes or ids; serials only come as numbers.
        return None

    match = _ISO_DATE_RE.match(text)
    if match:
        year, month, day = (int(part) for part in match.groups())
        return _safe_date(year, month, day)

    match = _DMY_DATE_RE.match(text)
    if match:
        first, second, year = (int(part) for part in match.groups())
        year = _expand_year(year)
        if first > 12:
            day, month = first, second
        elif second > 12:
            month, day = first, second
        else:
            day, month = first, second
        return _safe_date(year, month, day)

    return None


# ---------------------------------------------------------------------------
# Numeric transforms
# ---------------------------------------------------------------------------


def to_number(raw: Any) -> float:
    """Parse a loosely formatted number, ``0.0`` when unparseable.

    Examples::

        to_number("R$ 1.234,56")  # 1234.56
        to_number("1,234.56")     # 1234.56
        to_number("12,5")         # 12.5
    """
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float, Decimal)):
        value = float(raw)
        return 0.0 if math.isnan(value) or math.isinf(value) else value

    text = str(raw).strip()
    if not text:
        return 0.0
    if _PLAIN_NUMBER_RE.match(text):
        return float(text)

    text = _CURRENCY_RE.sub("", text)
    if _BR_NUMBER_RE.match(text):
        text = text.replace(".", "").replace(",", ".")
    elif _US_NUMBER_RE.match(text):
        text = text.replace(",", "")
    else:
        last_sep = max(text.rfind(","), text.rfind("."))
        if last_sep >= 0 and len(text) - last_sep - 1 <= 3:
            decimal_mark = text[last_sep]
            thousands = "." if decimal_mark == "," else ","
            text = text.replace(thousands, "").replace(decimal_mark, ".")

    for candidate in (text, text.replace(",", "").replace(".", "")):
        try:
            value = float(candidate)
        except ValueError:
            continue
        if math.isfinite(value):
            return value

    logger.debug("Unparseable number %r, using 0", raw)
    return 0.0


def to_integer(raw: Any) -> int:
    """Keep only the digits of *raw* and parse them, ``0`` when none remain."""
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, (int, float, Decimal)):
        value = float(raw)
        return 0 if math.isnan(value) or math.isinf(value) else int(value)
    digits = _NON_DIGIT_RE.sub("", str(raw))
    return int(digits, 10) if digits else 0


# ---------------------------------------------------------------------------
# Date transforms
# ---------------------------------------------------------------------------


def to_date(raw: Any) -> str | None:
    """Parse a date cell into ``YYYY-MM-DD`` or ``None``.

    Accepts ``date``/``datetime`` objects, Excel serials in numeric cells,
    ISO strings and ``D/M/Y`` strings with ``/``, ``-`` or ``.`` separators.
    Digit-only text such as ``"45000"`` is rejected.
    """
    parsed = _parse_date(raw)
    return parsed.isoformat() if parsed else None


def to_month(raw: Any) -> str | None:
    """Parse a reference month into ``YYYY-MM-01`` or ``None``.

    On top of ``to_date`` inputs, understands ``MM/YYYY`` and Portuguese
    month names such as ``"jan/26"``, ``"janeiro/2026"`` or ``"março 2025"``.
    """
    parsed = _parse_date(raw)
    if parsed:
        return parsed.replace(day=1).isoformat()
    if is_blank(raw) or not isinstance(raw, str):
        return None

    text = strip_accents(raw.strip()).lower()
    if len(text) > MAX_DATE_TEXT_LENGTH:
        return None

    match = _MONTH_YEAR_RE.match(text)
    if match:
        month, year = int(match.group(1)), _expand_year(int(match.group(2)))
        first_day = _safe_date(year, month, 1)
        return first_day.isoformat() if first_day else None

    match = _MONTH_NAME_RE.match(text)
    if match:
        month = PT_MONTHS.get(match.group(1))
        if month is None:
            return None
        first_day = _safe_date(_expand_year(int(match.group(2))), month, 1)
        return first_day.isoformat() if first_day else None

    return None


def to_datetime(raw: Any) -> str | None:
    """Parse a timestamp into ``YYYY-MM-DDTHH:MM:SS`` or ``None``.

    Brazilian ``DD/MM/YYYY HH:MM[:SS]`` and Excel serials (fraction = time
    of day) are handled explicitly; anything else goes through pandas.
    """
    if is_blank(raw) or isinstance(raw, bool):
        return None

    parsed: datetime | None = None
    if isinstance(raw, datetime):
        parsed = raw.replace(tzinfo=None)
    elif isinstance(raw, date):
        parsed = datetime(raw.year, raw.month, raw.day)
    elif isinstance(raw, (int, float, Decimal)):
        parsed = _serial_to_datetime(float(raw))
    else:
        text = str(raw).strip()
        match = _BR_DATETIME_RE.match(text)
        if match:
            day, month, year = (int(part) for part in match.groups()[:3])
            hour, minute, second = (int(part or 0) for part in match.groups()[3:])
            base = _safe_date(_expand_year(year), month, day)
            if base and hour < 24 and minute < 60 and second < 60:
                parsed = datetime(base.year, base.month, base.day, hour, minute, second)
        elif len(text) <= 40 and not _NUMERIC_TEXT_RE.match(text):
            stamp = pd.to_datetime(text, errors="coerce")
            if not pd.isna(stamp):
                parsed = stamp.to_pydatetime().replace(tzinfo=None)

    if parsed is None or not MIN_YEAR <= parsed.year <= MAX_YEAR:
        return None
    return parsed.strftime("%Y-%m-%dT%H:%M:%S")


# ---------------------------------------------------------------------------
# Text transforms
# ---------------------------------------------------------------------------


def to_text(raw: Any) -> str:
    """Trimmed string; ``""`` for ``None``/NaN.  Integral floats lose ``.0``."""
    if is_blank(raw):
        return ""
    if isinstance(raw, float) and raw.is_integer():
        return str(int(raw))
    return str(raw).strip()


def normalize_label(raw: Any) -> str:
    """Lowercase, accent-free, single-spaced version of a cell value."""
    return " ".join(strip_accents(to_text(raw)).lower().split())


def to_bool(raw: Any) -> bool:
    """``Sim``/``S``/``true``/``1``/``x`` (any case) map to ``True``."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)) and not is_blank(raw):
        return raw != 0
    return normalize_label(raw) in _TRUE_VALUES


def status_map(mapping: dict[str, str], default: str) -> Callable[[Any], str]:
    """Build a status normaliser from Portuguese labels to canonical values.

    Keys are compared accent- and case-insensitively.  A value that already
    is one of the canonical targets is kept; anything else yields *default*.

    Example::

        to_status = status_map({"ativo": "active", "inativo": "inactive"}, "active")
        to_status("INATIVO")  # "inactive"
        to_status("???")      # "active"
    """
    lookup = {normalize_label(label): value for label, value in mapping.items()}
    canonical = set(mapping.values()) | {default}

    def _transform(raw: Any) -> str:
        key = normalize_label(raw)
        if key in lookup:
            return lookup[key]
        if key in canonical:
            return key
        return default

    return _transform
