"""Input validation for date searches."""

import re
from datetime import date

MAX_QUERY_LENGTH = 50
MAX_DATE_INPUT_LENGTH = 20
MAX_RANGE_DAYS = 365
MAX_RANGE_AGE_YEARS = 5

_ALLOWED_QUERY = re.compile(r"^[a-zA-ZáéíóúüñÁÉÍÓÚÜÑ\s0-9/\-,.]+$")
_STRIPPED_CHARACTERS = re.compile(r"[<>\"'&]")


def validate_natural_date_input(text: str | None) -> str | None:
    """Return an error message for a free-text period query, or None."""
    if not text or not text.strip():
        return "Ingrese una fecha o período de tiempo"
    if len(text) > MAX_QUERY_LENGTH:
        return (
            "El texto ingresado es demasiado largo "
            f"(máximo {MAX_QUERY_LENGTH} caracteres)"
        )
    if not _ALLOWED_QUERY.match(text):
        return "El texto contiene caracteres no válidos"
    return None


def validate_date_range(  # noqa: PLR0911
    start: str | None, end: str | None, today: date
) -> str | None:
    """Return an error message for an explicit YYYY-MM-DD pair, or None."""
    if not start or not end:
        return "Debe seleccionar ambas fechas"
    start_date = parse_iso_date(start)
    end_date = parse_iso_date(end)
    if start_date is None or end_date is None:
        return "Formato de fecha no válido"
    if start_date > end_date:
        return "La fecha de inicio no puede ser posterior a la fecha de fin"
    if start_date > today or end_date > today:
        return "No puede seleccionar fechas futuras"
    if (end_date - start_date).days > MAX_RANGE_DAYS:
        return f"El rango de fechas no puede exceder {MAX_RANGE_DAYS} días"
    if start_date < _years_before(today, MAX_RANGE_AGE_YEARS):
        return (
            "La fecha de inicio es demasiado antigua "
            f"(máximo {MAX_RANGE_AGE_YEARS} años)"
        )
    return None


def validate_date_input(text: str | None, today: date) -> str | None:
    """Return an error message for a single date field, or None."""
    if not text or not text.strip():
        return "Ingrese una fecha"
    if len(text) > MAX_DATE_INPUT_LENGTH:
        return "La fecha ingresada es demasiado larga"
    value = parse_iso_date(text)
    if value is None:
        return "Formato de fecha no válido"
    if value > today:
        return "No puede seleccionar fechas futuras"
    return None


def sanitize_input(text: str) -> str:
    """Trim, collapse whitespace, strip markup characters and truncate."""
    collapsed = " ".join(text.split())
    return _STRIPPED_CHARACTERS.sub("", collapsed)[:MAX_QUERY_LENGTH]


def parse_iso_date(text: str) -> date | None:
    """Parse a YYYY-MM-DD string, returning None when it is not a real date."""
    try:
        return date.fromisoformat(text.strip())
    except ValueError:
        return None


def _years_before(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        # 29 February in a non-leap target year.
        return day.replace(year=day.year - years, day=28)
