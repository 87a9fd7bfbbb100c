"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import date

from barber_dashboard.adapters.haircut_client import HaircutClient, HttpxHaircutClient
from barber_dashboard.config import Settings, local_today
from barber_dashboard.services.haircuts import HaircutService
from barber_dashboard.services.imports import ImportService
from barber_dashboard.services.prices import PriceService
from barber_dashboard.services.statistics import StatisticsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    haircut_client: HaircutClient
    haircut_service: HaircutService
    price_service: PriceService
    statistics_service: StatisticsService
    import_service: ImportService
    today: Callable[[], date]
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    haircut_client = HttpxHaircutClient.create(
        resolved_settings.haircuts_api_url,
        timeout=resolved_settings.http_timeout_seconds,
    )

    def today() -> date:
        return local_today(resolved_settings.timezone)

    async def close_resources() -> None:
        await haircut_client.close()

    return AppContainer(
        settings=resolved_settings,
        haircut_client=haircut_client,
        haircut_service=HaircutService(haircut_client),
        price_service=PriceService(haircut_client),
        statistics_service=StatisticsService(
            haircut_client,
            default_base_price=resolved_settings.default_base_price,
        ),
        import_service=ImportService(haircut_client),
        today=today,
        close_resources=close_resources,
    )
