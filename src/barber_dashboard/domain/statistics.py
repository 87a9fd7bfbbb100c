"""Domain models for the statistics view."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DailyStats:
    """Per-day totals for charts."""

    date: str
    day_name: str
    revenue: float
    count: int
    tip: float
    avg_price: float


@dataclass(frozen=True)
class ServiceStats:
    """Per-service totals."""

    name: str
    count: int
    revenue: float
    percentage: float


@dataclass
class StatisticsReport:
    """Everything the statistics view renders for a range."""

    start_date: str
    end_date: str
    record_count: int
    daily: list[DailyStats]
    services: list[ServiceStats]
    total_revenue: float
    total_tip: float
    total_count: int
    average_daily: float
    top_service: ServiceStats | None
