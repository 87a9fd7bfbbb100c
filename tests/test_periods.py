"""Tests for the period resolver."""

from datetime import date, datetime, time, timedelta

import pytest

from barber_dashboard.domain.periods import Period, PeriodKind
from barber_dashboard.services.periods import (
    CUSTOM_RANGE_LABEL,
    normalize_period_text,
    parse_period,
    quick_periods,
    resolve_custom_range,
    resolve_period,
)
from tests.conftest import TODAY


def _dates(text: str, today: date = TODAY) -> tuple[str, str, str]:
    result = resolve_period(text, today)
    assert result is not None
    date_range = result.to_date_range()
    return date_range.start_date, date_range.end_date, date_range.label


def test_today_is_a_single_day_labelled_hoy() -> None:
    result = resolve_period("hoy", TODAY)

    assert result is not None
    assert result.start == datetime.combine(TODAY, time.min)
    assert result.end == datetime.combine(TODAY, time.max)
    assert result.label == "Hoy"


def test_input_is_trimmed_and_case_insensitive() -> None:
    assert _dates("  HOY ") == ("2026-01-14", "2026-01-14", "Hoy")


def test_yesterday() -> None:
    assert _dates("ayer") == ("2026-01-13", "2026-01-13", "Ayer")


@pytest.mark.parametrize(
    "text", ["esta semana", "semana actual", "semana", "la semana"]
)
def test_this_week_runs_monday_to_sunday(text: str) -> None:
    assert _dates(text) == ("2026-01-12", "2026-01-18", "Esta semana")


@pytest.mark.parametrize("text", ["semana pasada", "ultima semana", "Última semana"])
def test_last_week_is_the_seven_days_before_this_monday(text: str) -> None:
    result = resolve_period(text, TODAY)

    assert result is not None
    start, end = result.start.date(), result.end.date()
    assert start.weekday() == 0
    assert (end - start).days == 6
    assert end == date(2026, 1, 12) - timedelta(days=1)
    assert result.label == "Semana pasada"


def test_last_week_on_a_monday() -> None:
    assert _dates("semana pasada", date(2026, 1, 12)) == (
        "2026-01-05",
        "2026-01-11",
        "Semana pasada",
    )


@pytest.mark.parametrize("text", ["este mes", "mes actual", "el mes", "mes"])
def test_this_month(text: str) -> None:
    assert _dates(text) == ("2026-01-01", "2026-01-31", "Este mes")


@pytest.mark.parametrize("text", ["mes pasado", "ultimo mes", "último mes"])
def test_last_month_crosses_the_year(text: str) -> None:
    assert _dates(text) == ("2025-12-01", "2025-12-31", "Mes pasado")


def test_last_month_ends_on_its_own_last_day() -> None:
    assert _dates("mes pasado", date(2026, 3, 31)) == (
        "2026-02-01",
        "2026-02-28",
        "Mes pasado",
    )


@pytest.mark.parametrize(
    "text", ["este año", "este ano", "año actual", "ano actual", "el año", "el ano"]
)
def test_this_year(text: str) -> None:
    assert _dates(text) == ("2026-01-01", "2026-12-31", "Este año")


def test_month_name_with_year() -> None:
    assert _dates("enero 2026") == ("2026-01-01", "2026-01-31", "Enero 2026")


def test_month_abbreviation_in_a_leap_year() -> None:
    assert _dates("feb 2024") == ("2024-02-01", "2024-02-29", "Febrero 2024")


def test_april_abbreviation() -> None:
    assert _dates("abr 2025") == ("2025-04-01", "2025-04-30", "Abril 2025")


def test_month_with_de_and_capitals() -> None:
    assert _dates("Septiembre de 2025") == (
        "2025-09-01",
        "2025-09-30",
        "Septiembre 2025",
    )


def test_bare_year() -> None:
    assert _dates("2025") == ("2025-01-01", "2025-12-31", "Año 2025")


def test_day_month_uses_the_current_year() -> None:
    assert _dates("15/01") == ("2026-01-15", "2026-01-15", "15 ene 2026")
    assert _dates("5-3") == ("2026-03-05", "2026-03-05", "5 mar 2026")


@pytest.mark.parametrize("text", ["31/02", "29/02", "0/5", "5/13", "32-1"])
def test_impossible_day_month_is_unrecognized(text: str) -> None:
    assert resolve_period(text, TODAY) is None


def test_leap_day_is_valid_in_a_leap_year() -> None:
    assert _dates("29/02", date(2024, 6, 1))[:2] == ("2024-02-29", "2024-02-29")


@pytest.mark.parametrize(
    "text", ["mañana", "enerito 2026", "", "15/01/2026", "hace dos semanas", "20266"]
)
def test_unrecognized_expressions(text: str) -> None:
    assert resolve_period(text, TODAY) is None


def test_parse_period_returns_tagged_variants() -> None:
    assert parse_period("hoy", TODAY) == Period(PeriodKind.TODAY)
    assert parse_period("marzo 2026", TODAY) == Period(
        PeriodKind.MONTH_YEAR, month=3, year=2026
    )
    assert parse_period("2024", TODAY) == Period(PeriodKind.YEAR_ONLY, year=2024)
    assert parse_period("7/4", TODAY) == Period(
        PeriodKind.DAY_MONTH, day=7, month=4, year=2026
    )
    assert parse_period("pronto", TODAY).kind is PeriodKind.UNRECOGNIZED


def test_normalize_period_text() -> None:
    assert normalize_period_text("  Última   Semana ") == "ultima semana"
    assert normalize_period_text("AÑO") == "ano"


def test_custom_range() -> None:
    result = resolve_custom_range(date(2026, 1, 1), date(2026, 1, 10))

    assert result.label == CUSTOM_RANGE_LABEL
    assert result.start == datetime(2026, 1, 1)
    assert result.end.date() == date(2026, 1, 10)
    assert result.end.time() == time.max


def test_custom_range_rejects_inverted_dates() -> None:
    with pytest.raises(ValueError):
        resolve_custom_range(date(2026, 1, 10), date(2026, 1, 1))


def test_quick_periods_all_resolve() -> None:
    periods = quick_periods()

    assert [period.label for period in periods] == [
        "Hoy",
        "Ayer",
        "Esta semana",
        "Semana pasada",
        "Este mes",
        "Mes pasado",
    ]
    for period in periods:
        result = resolve_period(period.value, TODAY)
        assert result is not None
        assert result.label == period.label
