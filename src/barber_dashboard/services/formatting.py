"""Spanish (Argentina) display formatting."""

import math
from datetime import date, timedelta

from barber_dashboard.services.periods import MONTH_ABBREVIATIONS

WEEKDAY_ABBREVIATIONS = ("lun", "mar", "mié", "jue", "vie", "sáb", "dom")
SHORT_DAY_NAMES = ("Lun", "Mar", "Mié", "Jue", "Vie", "Sáb", "Dom")


def format_currency(amount: float | None) -> str:
    """Format an amount as whole pesos, e.g. ``$ 13.000``."""
    if amount is None or math.isnan(amount):
        return "$ 0"
    rounded = round(amount)
    digits = f"{abs(rounded):,}".replace(",", ".")
    sign = "-" if rounded < 0 else ""
    return f"{sign}$ {digits}"


def format_date(value: date) -> str:
    """Format a date as DD/MM/YYYY."""
    return value.strftime("%d/%m/%Y")


def format_display_date(value: date, today: date) -> str:
    """Return "Hoy", "Ayer" or a short Spanish date such as "lun 5 de ene"."""
    if value == today:
        return "Hoy"
    if value == today - timedelta(days=1):
        return "Ayer"
    weekday = WEEKDAY_ABBREVIATIONS[value.weekday()]
    month = MONTH_ABBREVIATIONS[value.month - 1]
    return f"{weekday} {value.day} de {month}"


def day_name(value: date) -> str:
    """Return the capitalised three-letter Spanish weekday name."""
    return SHORT_DAY_NAMES[value.weekday()]
