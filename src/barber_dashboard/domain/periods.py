"""Domain models for parsed period expressions."""

from dataclasses import dataclass
from enum import Enum


class PeriodKind(Enum):
    """Kinds of period expressions understood by the resolver."""

    TODAY = "today"
    YESTERDAY = "yesterday"
    THIS_WEEK = "this_week"
    LAST_WEEK = "last_week"
    THIS_MONTH = "this_month"
    LAST_MONTH = "last_month"
    THIS_YEAR = "this_year"
    MONTH_YEAR = "month_year"
    YEAR_ONLY = "year_only"
    DAY_MONTH = "day_month"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class Period:
    """A parsed period expression.

    ``month`` and ``year`` are set for MONTH_YEAR, ``year`` for YEAR_ONLY and
    ``day``/``month`` for DAY_MONTH. Relative kinds carry no components.
    """

    kind: PeriodKind
    day: int | None = None
    month: int | None = None
    year: int | None = None


UNRECOGNIZED = Period(PeriodKind.UNRECOGNIZED)


@dataclass(frozen=True)
class QuickPeriod:
    """Shortcut shown next to the search box."""

    label: str
    value: str
