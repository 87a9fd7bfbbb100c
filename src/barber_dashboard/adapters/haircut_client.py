"""Haircuts API client adapter."""

from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote

import httpx

from barber_dashboard.domain.haircuts import (
    DailySummary,
    Haircut,
    HaircutCreate,
    ServicePrice,
)
from barber_dashboard.domain.history import DailyHistoryItem


class HaircutClient(Protocol):
    """Interface for the remote haircuts API."""

    async def list_haircuts(self) -> list[Haircut]:
        """Return every recorded sale."""

    async def get_haircut(self, haircut_id: str) -> Haircut:
        """Return a single sale."""

    async def create_haircut(self, haircut: HaircutCreate) -> Haircut:
        """Record a new sale."""

    async def update_haircut(self, haircut: Haircut) -> Haircut:
        """Replace an existing sale."""

    async def update_price(self, haircut_id: str, price: float) -> Haircut:
        """Change the price of a sale."""

    async def delete_haircut(self, haircut_id: str) -> None:
        """Delete a sale."""

    async def delete_by_date(self, day: str) -> str:
        """Delete every sale of a day and return the server message."""

    async def get_today_summary(self) -> DailySummary:
        """Return today's totals."""

    async def get_daily_history(self) -> list[DailyHistoryItem]:
        """Return the per-day history."""

    async def list_by_date(self, day: str) -> list[Haircut]:
        """Return the sales of a day."""

    async def list_service_prices(self) -> list[ServicePrice]:
        """Return configured service prices."""

    async def get_service_price(self, service_name: str) -> ServicePrice:
        """Return the price of one service."""

    async def update_service_price(
        self, service_name: str, base_price: float
    ) -> ServicePrice:
        """Change the base price of a service."""

    async def create_service_price(
        self, service_name: str, base_price: float
    ) -> ServicePrice:
        """Add a service with its base price."""

    async def delete_service_price(self, service_name: str) -> str:
        """Remove a service and return the server message."""


@dataclass
class HttpxHaircutClient(HaircutClient):
    """HTTPX-backed haircuts API client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 10

    @classmethod
    def create(cls, api_url: str, timeout: float = 10) -> "HttpxHaircutClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=f"{api_url.rstrip('/')}/haircuts",
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def list_haircuts(self) -> list[Haircut]:
        """Fetch every recorded sale."""
        payload = await self._request("GET", "/")
        return [_parse_haircut(row) for row in payload or []]

    async def get_haircut(self, haircut_id: str) -> Haircut:
        """Fetch a sale by id."""
        return _parse_haircut(await self._request("GET", f"/{quote(haircut_id)}"))

    async def create_haircut(self, haircut: HaircutCreate) -> Haircut:
        """Create a sale."""
        payload = await self._request(
            "POST", "/create", json=_serialize_haircut(haircut)
        )
        return _parse_haircut(payload)

    async def update_haircut(self, haircut: Haircut) -> Haircut:
        """Update a sale."""
        body = {"id": haircut.id, **_serialize_haircut(haircut)}
        return _parse_haircut(await self._request("PUT", "/update", json=body))

    async def update_price(self, haircut_id: str, price: float) -> Haircut:
        """Patch the price of a sale."""
        payload = await self._request(
            "PATCH", f"/{quote(haircut_id)}/price", json={"price": price}
        )
        return _parse_haircut(payload)

    async def delete_haircut(self, haircut_id: str) -> None:
        """Delete a sale."""
        await self._request("DELETE", f"/{quote(haircut_id)}")

    async def delete_by_date(self, day: str) -> str:
        """Delete the sales of a day."""
        payload = await self._request("DELETE", f"/history/date/{quote(day, safe='')}")
        return str((payload or {}).get("message", ""))

    async def get_today_summary(self) -> DailySummary:
        """Fetch today's totals."""
        return _parse_summary(await self._request("GET", "/history/today"))

    async def get_daily_history(self) -> list[DailyHistoryItem]:
        """Fetch the per-day history."""
        payload = await self._request("GET", "/history/daily")
        return [_parse_history_item(row) for row in payload or []]

    async def list_by_date(self, day: str) -> list[Haircut]:
        """Fetch the sales of a day."""
        payload = await self._request("GET", f"/history/date/{quote(day, safe='')}")
        return [_parse_haircut(row) for row in payload or []]

    async def list_service_prices(self) -> list[ServicePrice]:
        """Fetch configured service prices."""
        payload = await self._request("GET", "/services/prices")
        return [_parse_service_price(row) for row in payload or []]

    async def get_service_price(self, service_name: str) -> ServicePrice:
        """Fetch the price of one service."""
        payload = await self._request(
            "GET", f"/services/price/{quote(service_name, safe='')}"
        )
        return _parse_service_price(payload)

    async def update_service_price(
        self, service_name: str, base_price: float
    ) -> ServicePrice:
        """Update the base price of a service."""
        payload = await self._request(
            "PUT",
            f"/services/prices/{quote(service_name, safe='')}",
            json={"basePrice": base_price},
        )
        return _parse_service_price(payload)

    async def create_service_price(
        self, service_name: str, base_price: float
    ) -> ServicePrice:
        """Create a service price."""
        payload = await self._request(
            "POST",
            "/services/prices",
            json={"serviceName": service_name, "basePrice": base_price},
        )
        return _parse_service_price(payload)

    async def delete_service_price(self, service_name: str) -> str:
        """Delete a service price."""
        payload = await self._request(
            "DELETE", f"/services/prices/{quote(service_name, safe='')}"
        )
        return str((payload or {}).get("message", ""))

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(
        self, method: str, path: str, json: dict[str, object] | None = None
    ) -> object:
        response = await self.http_client.request(
            method, f"{self.base_url}{path}", json=json, timeout=self.timeout
        )
        response.raise_for_status()
        if not response.content:
            return None
        return response.json()


def _serialize_haircut(haircut: Haircut | HaircutCreate) -> dict[str, object]:
    body: dict[str, object] = {
        "clientName": haircut.client_name,
        "serviceName": haircut.service_name,
        "price": haircut.price,
        "date": haircut.date,
        "count": haircut.count,
        "tip": haircut.tip,
    }
    if haircut.time:
        body["time"] = haircut.time
    return body


def _parse_haircut(row: dict[str, object]) -> Haircut:
    return Haircut(
        id=str(row.get("id", "")),
        client_name=str(row.get("clientName") or ""),
        service_name=str(row.get("serviceName") or ""),
        price=float(row.get("price") or 0),
        date=str(row.get("date") or ""),
        count=int(row.get("count") or 0),
        tip=float(row.get("tip") or 0),
        time=str(row["time"]) if row.get("time") else None,
    )


def _parse_history_item(row: dict[str, object]) -> DailyHistoryItem:
    clients = row.get("clients") or []
    return DailyHistoryItem(
        date=str(row.get("date") or ""),
        total=float(row.get("total") or 0),
        count=int(row.get("count") or 0),
        clients=tuple(str(client) for client in clients),
    )


def _parse_summary(row: dict[str, object]) -> DailySummary:
    return DailySummary(
        date=str(row.get("date") or ""),
        count=int(row.get("count") or 0),
        total=float(row.get("total") or 0),
        tip=float(row.get("tip") or 0),
    )


def _parse_service_price(row: dict[str, object]) -> ServicePrice:
    return ServicePrice(
        service_name=str(row.get("serviceName") or ""),
        base_price=float(row.get("basePrice") or 0),
    )
