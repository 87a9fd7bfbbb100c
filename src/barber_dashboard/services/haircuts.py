"""Haircut sales service."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from barber_dashboard.adapters.haircut_client import HaircutClient
from barber_dashboard.domain.haircuts import (
    DailySummary,
    GlobalStats,
    Haircut,
    HaircutCreate,
    SaleEntry,
    ServicePrice,
)
from barber_dashboard.domain.history import DailyHistoryItem
from barber_dashboard.services.history import normalize_date

_logger = logging.getLogger(__name__)


@dataclass
class HaircutService:
    """Service for recording and querying sales."""

    client: HaircutClient

    async def list_haircuts(self) -> list[Haircut]:
        """Return every recorded sale."""
        return await self.client.list_haircuts()

    async def get(self, haircut_id: str) -> Haircut:
        """Return one sale."""
        return await self.client.get_haircut(haircut_id)

    async def list_by_date(self, day: str) -> list[Haircut]:
        """Return the sales recorded on a day."""
        return await self.client.list_by_date(day)

    async def create(self, haircut: HaircutCreate) -> Haircut:
        """Record a sale."""
        created = await self.client.create_haircut(haircut)
        _logger.info(
            "Recorded sale: service=%s count=%s price=%s",
            created.service_name,
            created.count,
            created.price,
        )
        return created

    async def update(self, haircut: Haircut) -> Haircut:
        """Replace a sale."""
        return await self.client.update_haircut(haircut)

    async def update_price(self, haircut_id: str, price: float) -> Haircut:
        """Change the price of a sale."""
        return await self.client.update_price(haircut_id, price)

    async def delete(self, haircut_id: str) -> None:
        """Delete a sale."""
        await self.client.delete_haircut(haircut_id)
        _logger.info("Deleted sale: id=%s", haircut_id)

    async def today_summary(self) -> DailySummary:
        """Return today's totals."""
        return await self.client.get_today_summary()

    async def delete_today(self) -> str:
        """Delete every sale recorded today."""
        summary = await self.client.get_today_summary()
        message = await self.client.delete_by_date(summary.date)
        _logger.info("Deleted sales for %s", summary.date)
        return message

    async def daily_history(self) -> list[DailyHistoryItem]:
        """Return the per-day history."""
        return await self.client.get_daily_history()

    async def global_stats(self) -> GlobalStats:
        """Return all-time totals."""
        return compute_global_stats(await self.client.list_haircuts())

    async def record_sale(  # noqa: PLR0913
        self,
        *,
        client_name: str,
        date: str,
        entries: Sequence[SaleEntry],
        tip: float = 0.0,
        time: str | None = None,
    ) -> list[Haircut]:
        """Record one sale per valid form entry using current base prices."""
        prices = await self.client.list_service_prices()
        payloads = build_sale_payloads(
            client_name=client_name,
            date=date,
            entries=entries,
            prices=prices,
            tip=tip,
            time=time,
        )
        return [await self.create(payload) for payload in payloads]


def compute_global_stats(haircuts: Sequence[Haircut]) -> GlobalStats:
    """Compute all-time totals over every sale."""
    total_cuts = len(haircuts)
    total_revenue = sum(haircut.price for haircut in haircuts)
    earliest = min(
        haircuts, key=lambda haircut: normalize_date(haircut.date), default=None
    )
    return GlobalStats(
        total_cuts=total_cuts,
        total_revenue=total_revenue,
        average_ticket=total_revenue / total_cuts if total_cuts > 0 else 0,
        first_cut_date=earliest.date if earliest else None,
    )


def base_price_for(prices: Sequence[ServicePrice], service_name: str) -> float:
    """Return the configured base price of a service, or 0 when unknown."""
    for price in prices:
        if price.service_name == service_name:
            return price.base_price
    return 0.0


def entry_price(entry: SaleEntry, prices: Sequence[ServicePrice]) -> float:
    """Return the price of a form entry."""
    return entry.count * base_price_for(prices, entry.service_name)


def build_sale_payloads(  # noqa: PLR0913
    *,
    client_name: str,
    date: str,
    entries: Sequence[SaleEntry],
    prices: Sequence[ServicePrice],
    tip: float = 0.0,
    time: str | None = None,
) -> list[HaircutCreate]:
    """Turn form entries into sale payloads.

    Entries without a service or with a zero count are skipped. The tip is
    attached to the first recorded entry only.
    """
    payloads = []
    for entry in entries:
        if not entry.service_name or entry.count <= 0:
            continue
        payloads.append(
            HaircutCreate(
                client_name=client_name,
                service_name=entry.service_name,
                price=entry_price(entry, prices),
                date=date,
                count=entry.count,
                tip=tip if not payloads else 0.0,
                time=time or None,
            )
        )
    return payloads
