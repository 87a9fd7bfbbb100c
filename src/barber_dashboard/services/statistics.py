"""Statistics view: per-day and per-service breakdowns of sales."""

import asyncio
import calendar
import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from barber_dashboard.adapters.haircut_client import HaircutClient
from barber_dashboard.domain.haircuts import Haircut, ServicePrice
from barber_dashboard.domain.statistics import (
    DailyStats,
    ServiceStats,
    StatisticsReport,
)
from barber_dashboard.services.formatting import day_name
from barber_dashboard.services.haircuts import base_price_for
from barber_dashboard.services.history import normalize_date
from barber_dashboard.services.validation import parse_iso_date

DEFAULT_BASE_PRICE = 8000.0

STATISTICS_RANGES: dict[str, str] = {
    "all": "Todo",
    "today": "Hoy",
    "week": "Esta semana",
    "15days": "Últimos 15 días",
    "30days": "Últimos 30 días",
    "3months": "Últimos 3 meses",
    "year": "Último año",
}

_DAY_OFFSETS = {"today": 0, "week": 7, "15days": 15, "30days": 30}


@dataclass
class _DayAccumulator:
    revenue: float = 0.0
    count: int = 0
    tip: float = 0.0


@dataclass
class _ServiceAccumulator:
    count: int = 0
    revenue: float = 0.0


@dataclass
class StatisticsService:
    """Service computing the statistics view for a date range."""

    client: HaircutClient
    default_base_price: float = DEFAULT_BASE_PRICE

    async def report(
        self,
        range_key: str,
        today: date,
        start: str | None = None,
        end: str | None = None,
    ) -> StatisticsReport:
        """Return the report for a preset range or an explicit start/end pair."""
        haircuts, prices = await asyncio.gather(
            self.client.list_haircuts(), self.client.list_service_prices()
        )
        if start and end:
            start_date = parse_iso_date(start)
            end_date = parse_iso_date(end)
            if start_date is None or end_date is None:
                raise ValueError("Formato de fecha no válido")
        else:
            start_date, end_date = statistics_range(range_key, haircuts, today)
        return build_report(
            haircuts, prices, start_date, end_date, self.default_base_price
        )


def statistics_range(
    range_key: str, haircuts: Sequence[Haircut], today: date
) -> tuple[date, date]:
    """Return the first and last day of a preset statistics range.

    "all" spans the recorded sales; without sales it falls back to the last
    month.
    """
    if range_key not in STATISTICS_RANGES:
        raise ValueError(f"Unknown statistics range: {range_key}")
    if range_key == "all":
        days = [day for day in (_sale_day(haircut) for haircut in haircuts) if day]
        if days:
            return min(days), max(days)
        return _months_before(today, 1), today
    if range_key in _DAY_OFFSETS:
        return today - timedelta(days=_DAY_OFFSETS[range_key]), today
    if range_key == "3months":
        return _months_before(today, 3), today
    return _months_before(today, 12), today


def legacy_count(
    haircut: Haircut,
    prices: Sequence[ServicePrice],
    default_base_price: float = DEFAULT_BASE_PRICE,
) -> int:
    """Return the service count, inferring it from the price when unset."""
    if haircut.count > 0:
        return haircut.count
    base_price = base_price_for(prices, haircut.service_name) or default_base_price
    return round_half_up(haircut.price / base_price)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def build_report(
    haircuts: Sequence[Haircut],
    prices: Sequence[ServicePrice],
    start: date,
    end: date,
    default_base_price: float = DEFAULT_BASE_PRICE,
) -> StatisticsReport:
    """Aggregate sales within [start, end] by day and by service."""
    start_key, end_key = start.isoformat(), end.isoformat()
    in_range = [
        haircut
        for haircut in haircuts
        if start_key <= normalize_date(haircut.date) <= end_key
    ]

    days: dict[str, _DayAccumulator] = {}
    current = start
    while current <= end:
        days[current.isoformat()] = _DayAccumulator()
        current += timedelta(days=1)

    services: dict[str, _ServiceAccumulator] = {}
    for haircut in in_range:
        key = normalize_date(haircut.date)
        count = legacy_count(haircut, prices, default_base_price)
        day = days.get(key)
        if day is not None:
            day.count += count
            day.revenue += haircut.price
            day.tip += haircut.tip
        service = services.setdefault(haircut.service_name, _ServiceAccumulator())
        service.count += count
        service.revenue += haircut.price

    daily = [
        DailyStats(
            date=key,
            day_name=day_name(date.fromisoformat(key)),
            revenue=totals.revenue,
            count=totals.count,
            tip=totals.tip,
            avg_price=totals.revenue / totals.count if totals.count > 0 else 0,
        )
        for key, totals in days.items()
    ]

    service_total = sum(service.count for service in services.values())
    service_stats = sorted(
        (
            ServiceStats(
                name=name,
                count=totals.count,
                revenue=totals.revenue,
                percentage=totals.count / service_total * 100 if service_total else 0,
            )
            for name, totals in services.items()
        ),
        key=lambda stats: stats.count,
        reverse=True,
    )

    total_revenue = sum(haircut.price for haircut in in_range)
    distinct_days = len({normalize_date(haircut.date) for haircut in in_range})
    return StatisticsReport(
        start_date=start_key,
        end_date=end_key,
        record_count=len(in_range),
        daily=daily,
        services=service_stats,
        total_revenue=total_revenue,
        total_tip=sum(haircut.tip for haircut in in_range),
        total_count=sum(day.count for day in daily),
        average_daily=total_revenue / distinct_days if distinct_days else 0,
        top_service=service_stats[0] if service_stats else None,
    )


def _sale_day(haircut: Haircut) -> date | None:
    return parse_iso_date(normalize_date(haircut.date))


def _months_before(day: date, months: int) -> date:
    month_index = day.year * 12 + day.month - 1 - months
    year, month = divmod(month_index, 12)
    last_day = calendar.monthrange(year, month + 1)[1]
    return date(year, month + 1, min(day.day, last_day))
