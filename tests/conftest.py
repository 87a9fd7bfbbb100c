"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date

import httpx
import pytest

from barber_dashboard.adapters.haircut_client import HaircutClient
from barber_dashboard.config import Settings
from barber_dashboard.containers import AppContainer
from barber_dashboard.domain.haircuts import (
    DailySummary,
    Haircut,
    HaircutCreate,
    ServicePrice,
)
from barber_dashboard.domain.history import DailyHistoryItem
from barber_dashboard.services.haircuts import HaircutService
from barber_dashboard.services.imports import ImportService
from barber_dashboard.services.prices import PriceService
from barber_dashboard.services.statistics import StatisticsService

# A Wednesday; its week runs Monday 12 to Sunday 18 January 2026.
TODAY = date(2026, 1, 14)


def sample_history() -> list[DailyHistoryItem]:
    return [
        DailyHistoryItem(date="03/01/2026", total=5000, count=1, clients=("Juan",)),
        DailyHistoryItem(
            date="08/01/2026", total=13000, count=2, clients=("Pedro", "Pedro")
        ),
        DailyHistoryItem(
            date="09/01/2026", total=60000, count=8, clients=("Maria", "Luis")
        ),
        DailyHistoryItem(date="2025-12-20", total=8000, count=1, clients=("Ana",)),
        DailyHistoryItem(date="2026-01-13", total=0, count=0),
    ]


def status_error(status_code: int, detail: str) -> httpx.HTTPStatusError:
    request = httpx.Request("POST", "http://api.test/haircuts/create")
    response = httpx.Response(status_code, json={"detail": detail}, request=request)
    return httpx.HTTPStatusError(detail, request=request, response=response)


@dataclass
class FakeHaircutClient(HaircutClient):
    """In-memory stand-in for the haircuts API."""

    haircuts: list[Haircut] = field(default_factory=list)
    history: list[DailyHistoryItem] = field(default_factory=sample_history)
    prices: list[ServicePrice] = field(
        default_factory=lambda: [
            ServicePrice(service_name="Corte", base_price=8000),
            ServicePrice(service_name="Barba", base_price=5000),
        ]
    )
    summary: DailySummary = field(
        default_factory=lambda: DailySummary(
            date="2026-01-14", count=3, total=24000, tip=500
        )
    )
    created: list[HaircutCreate] = field(default_factory=list)
    deleted_dates: list[str] = field(default_factory=list)
    fail_create_after: int | None = None
    unavailable: bool = False

    def _check_available(self) -> None:
        if self.unavailable:
            raise httpx.ConnectError("connection refused")

    async def list_haircuts(self) -> list[Haircut]:
        self._check_available()
        return list(self.haircuts)

    async def get_haircut(self, haircut_id: str) -> Haircut:
        for haircut in self.haircuts:
            if haircut.id == haircut_id:
                return haircut
        raise status_error(404, "Corte no encontrado")

    async def create_haircut(self, haircut: HaircutCreate) -> Haircut:
        if (
            self.fail_create_after is not None
            and len(self.created) >= self.fail_create_after
        ):
            raise status_error(400, "Fecha inválida")
        self.created.append(haircut)
        created = Haircut(id=f"h-{len(self.created)}", **vars(haircut))
        self.haircuts.append(created)
        return created

    async def update_haircut(self, haircut: Haircut) -> Haircut:
        self.haircuts = [
            haircut if existing.id == haircut.id else existing
            for existing in self.haircuts
        ]
        return haircut

    async def update_price(self, haircut_id: str, price: float) -> Haircut:
        current = await self.get_haircut(haircut_id)
        updated = Haircut(**{**vars(current), "price": price})
        return await self.update_haircut(updated)

    async def delete_haircut(self, haircut_id: str) -> None:
        self.haircuts = [h for h in self.haircuts if h.id != haircut_id]

    async def delete_by_date(self, day: str) -> str:
        self.deleted_dates.append(day)
        return f"Eliminados los cortes del {day}"

    async def get_today_summary(self) -> DailySummary:
        return self.summary

    async def get_daily_history(self) -> list[DailyHistoryItem]:
        self._check_available()
        return list(self.history)

    async def list_by_date(self, day: str) -> list[Haircut]:
        return [haircut for haircut in self.haircuts if haircut.date == day]

    async def list_service_prices(self) -> list[ServicePrice]:
        return list(self.prices)

    async def get_service_price(self, service_name: str) -> ServicePrice:
        for price in self.prices:
            if price.service_name == service_name:
                return price
        raise status_error(404, "Servicio no encontrado")

    async def update_service_price(
        self, service_name: str, base_price: float
    ) -> ServicePrice:
        updated = ServicePrice(service_name=service_name, base_price=base_price)
        self.prices = [
            updated if price.service_name == service_name else price
            for price in self.prices
        ]
        return updated

    async def create_service_price(
        self, service_name: str, base_price: float
    ) -> ServicePrice:
        created = ServicePrice(service_name=service_name, base_price=base_price)
        self.prices.append(created)
        return created

    async def delete_service_price(self, service_name: str) -> str:
        self.prices = [p for p in self.prices if p.service_name != service_name]
        return f"Servicio {service_name} eliminado"


@pytest.fixture
def settings() -> Settings:
    return Settings(haircuts_api_url="http://api.test", timezone="UTC")


@pytest.fixture
def haircut_client() -> FakeHaircutClient:
    return FakeHaircutClient()


@pytest.fixture
def container(settings: Settings, haircut_client: FakeHaircutClient) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        haircut_client=haircut_client,
        haircut_service=HaircutService(haircut_client),
        price_service=PriceService(haircut_client),
        statistics_service=StatisticsService(haircut_client),
        import_service=ImportService(haircut_client),
        today=lambda: TODAY,
        close_resources=close_resources,
    )
