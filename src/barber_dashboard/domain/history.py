"""Domain models for daily history and date ranges."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class DailyHistoryItem:
    """One calendar day's rollup as reported by the haircuts API."""

    date: str
    total: float
    count: int
    clients: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DateRange:
    """Resolved interval with canonical YYYY-MM-DD boundaries."""

    start_date: str
    end_date: str
    label: str


@dataclass(frozen=True)
class DateRangeResult:
    """Resolved interval with start-of-day and end-of-day boundaries."""

    start: datetime
    end: datetime
    label: str

    def to_date_range(self) -> DateRange:
        """Return the calendar-date form of this interval."""
        return DateRange(
            start_date=self.start.date().isoformat(),
            end_date=self.end.date().isoformat(),
            label=self.label,
        )


@dataclass(frozen=True)
class HistoryStats:
    """Rollup statistics over a daily history collection."""

    total_days: int
    total_amount: float
    average_daily: float
    max_amount: float
    max_date: str | None
    total_count: int
