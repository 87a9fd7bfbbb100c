"""Service price configuration."""

import logging
from dataclasses import dataclass

from barber_dashboard.adapters.haircut_client import HaircutClient
from barber_dashboard.domain.haircuts import ServicePrice

_logger = logging.getLogger(__name__)


@dataclass
class PriceService:
    """Service for per-service base prices."""

    client: HaircutClient

    async def list_prices(self) -> list[ServicePrice]:
        """Return configured prices in the order the API keeps them."""
        return await self.client.list_service_prices()

    async def get_price(self, service_name: str) -> ServicePrice:
        """Return the configured price of one service."""
        return await self.client.get_service_price(service_name)

    async def create_price(self, service_name: str, base_price: float) -> ServicePrice:
        """Add a new service with its base price."""
        name = service_name.strip()
        _validate(name, base_price)
        created = await self.client.create_service_price(name, base_price)
        _logger.info("Created service price: %s=%s", name, base_price)
        return created

    async def update_price(self, service_name: str, base_price: float) -> ServicePrice:
        """Change the base price of an existing service."""
        _validate(service_name, base_price)
        updated = await self.client.update_service_price(service_name, base_price)
        _logger.info("Updated service price: %s=%s", service_name, base_price)
        return updated

    async def delete_price(self, service_name: str) -> str:
        """Remove a service."""
        message = await self.client.delete_service_price(service_name)
        _logger.info("Deleted service price: %s", service_name)
        return message


def _validate(service_name: str, base_price: float) -> None:
    if not service_name.strip():
        raise ValueError("El nombre del servicio es obligatorio")
    if base_price <= 0:
        raise ValueError("El precio base debe ser mayor a cero")
