"""Filter daily history to a range and compute rollup statistics."""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from barber_dashboard.domain.history import (
    DailyHistoryItem,
    DateRange,
    DateRangeResult,
    HistoryStats,
)
from barber_dashboard.services.periods import resolve_custom_range, resolve_period
from barber_dashboard.services.validation import (
    parse_iso_date,
    sanitize_input,
    validate_date_range,
    validate_natural_date_input,
)

UNRECOGNIZED_PERIOD_MESSAGE = (
    'No se pudo interpretar la fecha. Intente con "hoy", "esta semana", '
    '"este mes", o una fecha específica.'
)

_CANONICAL_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DATE_SEPARATORS = re.compile(r"[/\-.]")
_MIN_DATE_PARTS = 3
_SHORT_YEAR_LENGTH = 2
_FULL_YEAR_LENGTH = 4

_logger = logging.getLogger(__name__)


@dataclass
class HistorySearchResult:
    """Outcome of a history search.

    On failure ``error`` is set, ``date_range`` is None and ``history`` is the
    unfiltered collection.
    """

    history: list[DailyHistoryItem]
    stats: HistoryStats
    date_range: DateRange | None = None
    error: str | None = None


def normalize_date(text: str) -> str:
    """Return a history date in canonical YYYY-MM-DD form.

    Accepts DD/MM/YYYY-style dates with ``/``, ``-`` or ``.`` separators,
    1- or 2-digit day and month and 2- or 4-digit years. Values that cannot
    be reordered are returned unchanged; no calendar check is made.
    """
    value = text.strip()
    if _CANONICAL_DATE.match(value):
        return value
    parts = _DATE_SEPARATORS.split(value)
    if len(parts) < _MIN_DATE_PARTS:
        return value
    if len(parts[0]) == _FULL_YEAR_LENGTH:
        year, month, day = parts[0], parts[1], parts[2]
    else:
        day, month, year = parts[0], parts[1], parts[2]
    if len(year) == _SHORT_YEAR_LENGTH:
        year = f"20{year}"
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def filter_history_by_range(
    history: Sequence[DailyHistoryItem], start: date, end: date
) -> list[DailyHistoryItem]:
    """Return items whose date lies within [start, end], keeping their order."""
    start_key = start.isoformat()
    end_key = end.isoformat()
    filtered = []
    for item in history:
        key = normalize_date(item.date)
        if not _CANONICAL_DATE.match(key):
            _logger.debug("Skipping history item with unreadable date: %s", item.date)
            continue
        if start_key <= key <= end_key:
            filtered.append(item)
    return filtered


def filter_history_by_result(
    history: Sequence[DailyHistoryItem], date_range: DateRangeResult
) -> list[DailyHistoryItem]:
    """Filter history to a resolved range."""
    return filter_history_by_range(
        history, date_range.start.date(), date_range.end.date()
    )


def get_history_stats(history: Sequence[DailyHistoryItem]) -> HistoryStats:
    """Compute totals, averages and the peak day of a history collection."""
    total_days = len(history)
    total_amount = sum(item.total for item in history)
    total_count = sum(item.count for item in history)
    ranked = sorted(history, key=lambda item: item.total, reverse=True)
    peak = ranked[0] if ranked else None
    return HistoryStats(
        total_days=total_days,
        total_amount=total_amount,
        average_daily=total_amount / total_days if total_days > 0 else 0,
        max_amount=peak.total if peak else 0,
        max_date=peak.date if peak else None,
        total_count=total_count,
    )


def visible_history(history: Sequence[DailyHistoryItem]) -> list[DailyHistoryItem]:
    """Drop zero-total days and order the rest newest first."""
    non_zero = [item for item in history if item.total != 0]
    return sorted(non_zero, key=lambda item: normalize_date(item.date), reverse=True)


def search_history(
    history: Sequence[DailyHistoryItem], query: str, today: date
) -> HistorySearchResult:
    """Filter history by a free-text period expression."""
    cleaned = sanitize_input(query)
    error = validate_natural_date_input(cleaned)
    if error is not None:
        return _failed(history, error)
    resolved = resolve_period(cleaned, today)
    if resolved is None:
        _logger.info("Unrecognized period expression: %s", cleaned)
        return _failed(history, UNRECOGNIZED_PERIOD_MESSAGE)
    filtered = filter_history_by_result(history, resolved)
    return HistorySearchResult(
        history=filtered,
        stats=get_history_stats(filtered),
        date_range=resolved.to_date_range(),
    )


def search_history_range(
    history: Sequence[DailyHistoryItem],
    start: str | None,
    end: str | None,
    today: date,
) -> HistorySearchResult:
    """Filter history by an explicit YYYY-MM-DD pair."""
    error = validate_date_range(start, end, today)
    start_date = parse_iso_date(start) if start else None
    end_date = parse_iso_date(end) if end else None
    if error is not None or start_date is None or end_date is None:
        return _failed(history, error or "Formato de fecha no válido")
    resolved = resolve_custom_range(start_date, end_date)
    filtered = filter_history_by_result(history, resolved)
    return HistorySearchResult(
        history=filtered,
        stats=get_history_stats(filtered),
        date_range=resolved.to_date_range(),
    )


def apply_date_range(
    history: Sequence[DailyHistoryItem], date_range: DateRange | None
) -> list[DailyHistoryItem]:
    """Re-apply a previously resolved range to a refreshed collection."""
    if date_range is None:
        return list(history)
    start = parse_iso_date(date_range.start_date)
    end = parse_iso_date(date_range.end_date)
    if start is None or end is None:
        return list(history)
    return filter_history_by_range(history, start, end)


def _failed(history: Sequence[DailyHistoryItem], error: str) -> HistorySearchResult:
    unfiltered = list(history)
    return HistorySearchResult(
        history=unfiltered,
        stats=get_history_stats(unfiltered),
        error=error,
    )
