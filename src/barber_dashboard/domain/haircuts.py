"""Domain models for haircut sales and service prices."""

from dataclasses import dataclass


@dataclass(frozen=True)
class HaircutCreate:
    """Payload for recording a new sale."""

    client_name: str
    service_name: str
    price: float
    date: str
    count: int
    tip: float = 0.0
    time: str | None = None


@dataclass(frozen=True)
class Haircut:
    """A recorded sale."""

    id: str
    client_name: str
    service_name: str
    price: float
    date: str
    count: int
    tip: float = 0.0
    time: str | None = None


@dataclass(frozen=True)
class ServicePrice:
    """Configured base price for a service."""

    service_name: str
    base_price: float


@dataclass(frozen=True)
class DailySummary:
    """Totals for a single day."""

    date: str
    count: int
    total: float
    tip: float


@dataclass(frozen=True)
class GlobalStats:
    """All-time totals across every recorded sale."""

    total_cuts: int
    total_revenue: float
    average_ticket: float
    first_cut_date: str | None


@dataclass(frozen=True)
class SaleEntry:
    """One service line of the sale form."""

    service_name: str
    count: int
