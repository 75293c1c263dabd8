from datetime import date, datetime

import pytest

from app.parsers.transforms import (
    normalize_label,
    status_map,
    to_bool,
    to_date,
    to_datetime,
    to_integer,
    to_month,
    to_number,
    to_text,
)


class TestToNumber:
    """Brazilian and US notations, currency symbols and garbage."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("R$ 1.234,56", 1234.56),
            ("1,234.56", 1234.56),
            ("12,5", 12.5),
            ("1.234", 1.234),
            ("R$ 1.234", 1.234),
            ("1,234", 1.234),
            ("45,320", 45.32),
            ("R$ 1.234.567,00", 1234567.0),
            ("1,234,567", 1234567.0),
            ("-3,75", -3.75),
            (42, 42.0),
            (3.5, 3.5),
        ],
    )
    def test_parses_known_formats(self, raw, expected):
        assert to_number(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw", [None, "", "   ", "abc", float("nan"), True])
    def test_unparseable_values_become_zero(self, raw):
        assert to_number(raw) == 0.0


class TestToInteger:
    def test_keeps_only_digits(self):
        assert to_integer("12.345-6") == 123456

    def test_native_numbers_are_truncated(self):
        assert to_integer(7.9) == 7

    def test_no_digits_is_zero(self):
        assert to_integer("sem número") == 0
        assert to_integer(None) == 0


class TestToDate:
    """Excel serials, ISO and day/month/year strings."""

    def test_excel_serial(self):
        assert to_date(45658) == "2025-01-01"

    def test_brazilian_string(self):
        assert to_date("31/12/2024") == "2024-12-31"

    def test_day_month_order_is_default(self):
        assert to_date("05/03/2024") == "2024-03-05"

    def test_two_digit_year(self):
        assert to_date("15-08-24") == "2024-08-15"

    def test_native_objects(self):
        assert to_date(date(2024, 6, 1)) == "2024-06-01"
        assert to_date(datetime(2024, 6, 1, 10, 30)) == "2024-06-01"

    def test_digit_text_is_not_a_serial(self):
        assert to_date(45000) == "2023-03-15"
        assert to_date("45000") is None
        assert to_month("45000") is None
        assert to_datetime("45000") is None

    @pytest.mark.parametrize("raw", ["2024-02-30", "1234", "45000", "45658.5", "amanhã", None, "", True])
    def test_invalid_dates_are_none(self, raw):
        assert to_date(raw) is None


class TestToMonth:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("jan/26", "2026-01-01"),
            ("março 2025", "2025-03-01"),
            ("03/2025", "2025-03-01"),
            ("Dezembro/2024", "2024-12-01"),
            ("2025-03-15", "2025-03-01"),
        ],
    )
    def test_reference_months(self, raw, expected):
        assert to_month(raw) == expected

    def test_unknown_month_name(self):
        assert to_month("xyz/2025") is None


class TestToDatetime:
    def test_brazilian_timestamp(self):
        assert to_datetime("25/12/2024 14:30") == "2024-12-25T14:30:00"

    def test_date_only_gets_midnight(self):
        assert to_datetime("25/12/2024") == "2024-12-25T00:00:00"

    def test_invalid_hour(self):
        assert to_datetime("25/12/2024 25:00") is None

    def test_blank(self):
        assert to_datetime("") is None


class TestTextTransforms:
    def test_to_text_drops_integral_decimal(self):
        assert to_text(12.0) == "12"
        assert to_text("  ABC  ") == "ABC"
        assert to_text(None) == ""

    def test_normalize_label(self):
        assert normalize_label("  Manutenção   Preventiva ") == "manutencao preventiva"

    @pytest.mark.parametrize("raw", ["Sim", "S", "x", "TRUE", 1])
    def test_truthy_values(self, raw):
        assert to_bool(raw) is True

    @pytest.mark.parametrize("raw", ["Não", "", None, 0, "talvez"])
    def test_falsy_values(self, raw):
        assert to_bool(raw) is False


class TestStatusMap:
    """Portuguese labels normalised to canonical status values."""

    def setup_method(self):
        self.to_status = status_map(
            {"ativo": "active", "inativo": "inactive", "em manutenção": "maintenance"},
            "active",
        )

    def test_label_lookup_ignores_case_and_accents(self):
        assert self.to_status("INATIVO") == "inactive"
        assert self.to_status("Em Manutencao") == "maintenance"

    def test_canonical_value_is_kept(self):
        assert self.to_status("maintenance") == "maintenance"

    def test_unknown_falls_back_to_default(self):
        assert self.to_status("???") == "active"
        assert self.to_status(None) == "active"
