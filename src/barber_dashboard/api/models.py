"""Pydantic models for dashboard request payloads."""

from typing import Any

from pydantic import BaseModel, Field


class HaircutIn(BaseModel):
    """Sale payload."""

    client_name: str = ""
    service_name: str
    price: float = Field(ge=0)
    date: str
    count: int = Field(default=0, ge=0)
    tip: float = Field(default=0, ge=0)
    time: str | None = None


class PriceUpdate(BaseModel):
    """New price for a recorded sale."""

    price: float = Field(ge=0)


class SaleEntryIn(BaseModel):
    """One service line of the sale form."""

    service_name: str = ""
    count: int = Field(default=0, ge=0)


class SaleIn(BaseModel):
    """Sale form submission with one or more service lines."""

    client_name: str = ""
    date: str
    time: str | None = None
    tip: float = Field(default=0, ge=0)
    entries: list[SaleEntryIn]


class ServicePriceIn(BaseModel):
    """New service with its base price."""

    service_name: str
    base_price: float


class BasePriceUpdate(BaseModel):
    """New base price for an existing service."""

    base_price: float


class ImportItemIn(BaseModel):
    """Import preview row as shown to the user."""

    id: str
    date: str
    price: float = Field(gt=0)
    service_name: str
    service_index: int = 0
    count: int = Field(default=0, ge=0)
    client_name: str = "Sin nombre"
    tip: float = Field(default=0, ge=0)


class ImportPreviewRequest(BaseModel):
    """Spreadsheet rows keyed by column header."""

    rows: list[dict[str, Any]]


class ApplyServiceRequest(BaseModel):
    """Assign a service to preview rows."""

    items: list[ImportItemIn]
    service_index: int
    positions: list[int] | None = None


class ImportRequest(BaseModel):
    """Confirmed preview rows to import."""

    items: list[ImportItemIn]
