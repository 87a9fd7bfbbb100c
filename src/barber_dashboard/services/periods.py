"""Resolve period expressions into concrete date intervals."""

import calendar
import re
import unicodedata
from datetime import date, datetime, time, timedelta

from barber_dashboard.domain.history import DateRangeResult
from barber_dashboard.domain.periods import (
    UNRECOGNIZED,
    Period,
    PeriodKind,
    QuickPeriod,
)

CUSTOM_RANGE_LABEL = "Rango personalizado"

# Keys are accent-free; input is normalized the same way before lookup.
_KEYWORDS: dict[str, PeriodKind] = {
    "hoy": PeriodKind.TODAY,
    "ayer": PeriodKind.YESTERDAY,
    "esta semana": PeriodKind.THIS_WEEK,
    "semana actual": PeriodKind.THIS_WEEK,
    "semana": PeriodKind.THIS_WEEK,
    "la semana": PeriodKind.THIS_WEEK,
    "ultima semana": PeriodKind.LAST_WEEK,
    "semana pasada": PeriodKind.LAST_WEEK,
    "este mes": PeriodKind.THIS_MONTH,
    "mes actual": PeriodKind.THIS_MONTH,
    "el mes": PeriodKind.THIS_MONTH,
    "mes": PeriodKind.THIS_MONTH,
    "ultimo mes": PeriodKind.LAST_MONTH,
    "mes pasado": PeriodKind.LAST_MONTH,
    "este ano": PeriodKind.THIS_YEAR,
    "ano actual": PeriodKind.THIS_YEAR,
    "el ano": PeriodKind.THIS_YEAR,
    "ano": PeriodKind.THIS_YEAR,
}

_MONTHS: dict[str, int] = {
    "enero": 1,
    "febrero": 2,
    "marzo": 3,
    "abril": 4,
    "mayo": 5,
    "junio": 6,
    "julio": 7,
    "agosto": 8,
    "septiembre": 9,
    "setiembre": 9,
    "octubre": 10,
    "noviembre": 11,
    "diciembre": 12,
    "ene": 1,
    "feb": 2,
    "mar": 3,
    "abr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "ago": 8,
    "sep": 9,
    "set": 9,
    "sept": 9,
    "oct": 10,
    "nov": 11,
    "dic": 12,
}

MONTH_NAMES = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)
MONTH_ABBREVIATIONS = tuple(name[:3] for name in MONTH_NAMES)

_FIXED_LABELS: dict[PeriodKind, str] = {
    PeriodKind.TODAY: "Hoy",
    PeriodKind.YESTERDAY: "Ayer",
    PeriodKind.THIS_WEEK: "Esta semana",
    PeriodKind.LAST_WEEK: "Semana pasada",
    PeriodKind.THIS_MONTH: "Este mes",
    PeriodKind.LAST_MONTH: "Mes pasado",
    PeriodKind.THIS_YEAR: "Este año",
}

_MONTH_YEAR_PATTERN = re.compile(r"^([a-z]+)\s*(?:de\s+)?(\d{4})$")
_YEAR_PATTERN = re.compile(r"^(\d{4})$")
_DAY_MONTH_PATTERN = re.compile(r"^(\d{1,2})[/-](\d{1,2})$")

_QUICK_PERIODS = (
    QuickPeriod(label="Hoy", value="hoy"),
    QuickPeriod(label="Ayer", value="ayer"),
    QuickPeriod(label="Esta semana", value="esta semana"),
    QuickPeriod(label="Semana pasada", value="ultima semana"),
    QuickPeriod(label="Este mes", value="este mes"),
    QuickPeriod(label="Mes pasado", value="ultimo mes"),
)


def normalize_period_text(text: str) -> str:
    """Lower-case, trim, collapse whitespace and drop accents."""
    decomposed = unicodedata.normalize("NFKD", text.lower().strip())
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return " ".join(stripped.split())


def parse_period(text: str, today: date) -> Period:
    """Parse a period expression into a tagged period.

    Day/month expressions take their year from ``today`` and must name a
    real calendar day; "31/02" is unrecognized rather than clamped.
    """
    normalized = normalize_period_text(text)

    kind = _KEYWORDS.get(normalized)
    if kind is not None:
        return Period(kind)

    match = _MONTH_YEAR_PATTERN.match(normalized)
    if match:
        month = _MONTHS.get(match.group(1))
        year = int(match.group(2))
        if month is not None and year >= 1:
            return Period(PeriodKind.MONTH_YEAR, month=month, year=year)

    match = _YEAR_PATTERN.match(normalized)
    if match:
        year = int(match.group(1))
        if year >= 1:
            return Period(PeriodKind.YEAR_ONLY, year=year)

    match = _DAY_MONTH_PATTERN.match(normalized)
    if match:
        day, month = int(match.group(1)), int(match.group(2))
        try:
            date(today.year, month, day)
        except ValueError:
            return UNRECOGNIZED
        return Period(PeriodKind.DAY_MONTH, day=day, month=month, year=today.year)

    return UNRECOGNIZED


def resolve_period(text: str, today: date) -> DateRangeResult | None:
    """Resolve a period expression, or return None when it is unrecognized."""
    period = parse_period(text, today)
    if period.kind is PeriodKind.UNRECOGNIZED:
        return None
    start, end = period_bounds(period, today)
    return _to_result(start, end, period_label(period))


def resolve_custom_range(start: date, end: date) -> DateRangeResult:
    """Build the range for an explicit, already validated date pair."""
    if start > end:
        raise ValueError("start date must not be after end date")
    return _to_result(start, end, CUSTOM_RANGE_LABEL)


def period_bounds(period: Period, today: date) -> tuple[date, date]:  # noqa: PLR0911
    """Return the inclusive first and last day covered by a period."""
    kind = period.kind
    if kind is PeriodKind.TODAY:
        return today, today
    if kind is PeriodKind.YESTERDAY:
        yesterday = today - timedelta(days=1)
        return yesterday, yesterday
    if kind is PeriodKind.THIS_WEEK:
        monday = today - timedelta(days=today.weekday())
        return monday, monday + timedelta(days=6)
    if kind is PeriodKind.LAST_WEEK:
        monday = today - timedelta(days=today.weekday() + 7)
        return monday, monday + timedelta(days=6)
    if kind is PeriodKind.THIS_MONTH:
        return _month_bounds(today.year, today.month)
    if kind is PeriodKind.LAST_MONTH:
        last_of_previous = today.replace(day=1) - timedelta(days=1)
        return _month_bounds(last_of_previous.year, last_of_previous.month)
    if kind is PeriodKind.THIS_YEAR:
        return date(today.year, 1, 1), date(today.year, 12, 31)
    if kind is PeriodKind.MONTH_YEAR and period.year and period.month:
        return _month_bounds(period.year, period.month)
    if kind is PeriodKind.YEAR_ONLY and period.year:
        return date(period.year, 1, 1), date(period.year, 12, 31)
    if kind is PeriodKind.DAY_MONTH and period.year and period.month and period.day:
        day = date(period.year, period.month, period.day)
        return day, day
    raise ValueError(f"Cannot compute bounds for {period}")


def period_label(period: Period) -> str:
    """Return the display label for a parsed period."""
    fixed = _FIXED_LABELS.get(period.kind)
    if fixed is not None:
        return fixed
    if period.kind is PeriodKind.MONTH_YEAR and period.month:
        return f"{MONTH_NAMES[period.month - 1].capitalize()} {period.year}"
    if period.kind is PeriodKind.YEAR_ONLY:
        return f"Año {period.year}"
    if period.kind is PeriodKind.DAY_MONTH and period.month:
        return f"{period.day} {MONTH_ABBREVIATIONS[period.month - 1]} {period.year}"
    raise ValueError(f"No label for {period}")


def quick_periods() -> list[QuickPeriod]:
    """Return the shortcut periods offered next to the search box."""
    return list(_QUICK_PERIODS)


def _month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def _to_result(start: date, end: date, label: str) -> DateRangeResult:
    return DateRangeResult(
        start=datetime.combine(start, time.min),
        end=datetime.combine(end, time.max),
        label=label,
    )
