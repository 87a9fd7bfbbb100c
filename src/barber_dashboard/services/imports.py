"""Bulk import of sales from spreadsheet rows."""

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from datetime import date, timedelta

import httpx

from barber_dashboard.adapters.haircut_client import HaircutClient
from barber_dashboard.domain.haircuts import HaircutCreate, ServicePrice
from barber_dashboard.domain.imports import ImportPreview, ImportPreviewItem
from barber_dashboard.services.statistics import round_half_up

DATE_COLUMN = "FECHA"
AMOUNT_COLUMN = "CORTE"

_EXCEL_EPOCH = date(1899, 12, 30)
_DATE_SEPARATORS = re.compile(r"[/\-.]")
_PRICE_NOISE = re.compile(r"[$\s]")

_logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    """Outcome of an import run."""

    imported: int
    error: str | None = None


def parse_price(value: object) -> float:
    """Parse an amount such as ``$ 13.000,50``; unreadable values give 0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        return float(value)
    cleaned = _PRICE_NOISE.sub("", str(value or "")).replace(".", "").replace(",", ".")
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def parse_import_date(value: object) -> str:
    """Return a spreadsheet date cell as DD/MM/YYYY.

    Handles date objects, Excel serial day numbers and D/M/YY[YY] text.
    Other text is returned trimmed and unchanged; empty cells give "".
    """
    if isinstance(value, date):
        return value.strftime("%d/%m/%Y")
    if isinstance(value, int | float) and not isinstance(value, bool):
        return (_EXCEL_EPOCH + timedelta(days=int(value))).strftime("%d/%m/%Y")
    if not value:
        return ""
    text = str(value).strip()
    parts = _DATE_SEPARATORS.split(text)
    if len(parts) >= 3:  # noqa: PLR2004
        day, month, year = parts[0], parts[1], parts[2]
        if len(year) == 2:  # noqa: PLR2004
            year = f"20{year}"
        return f"{day.zfill(2)}/{month.zfill(2)}/{year}"
    return text


def calculate_count(price: float, service: ServicePrice | None) -> int:
    """Return how many services a price represents at the base price."""
    if service is None or service.base_price <= 0:
        return 0
    return round_half_up(price / service.base_price)


def build_preview(
    rows: Sequence[Mapping[str, object]], prices: Sequence[ServicePrice]
) -> ImportPreview:
    """Parse FECHA/CORTE rows into preview items assigned to the first service."""
    normalized = [
        {str(key).strip().upper(): cell for key, cell in row.items()} for row in rows
    ]
    columns = {key for row in normalized for key in row}
    if DATE_COLUMN not in columns or AMOUNT_COLUMN not in columns:
        return ImportPreview(
            items=[], error="El archivo debe tener columnas FECHA y CORTE"
        )

    default_service = prices[0] if prices else None
    items = []
    for index, row in enumerate(normalized):
        day = parse_import_date(row.get(DATE_COLUMN))
        price = parse_price(row.get(AMOUNT_COLUMN))
        if not day or price <= 0:
            continue
        items.append(
            ImportPreviewItem(
                id=f"temp-{index}",
                date=day,
                price=price,
                service_name=default_service.service_name if default_service else "",
                service_index=0,
                count=calculate_count(price, default_service),
            )
        )
    if not items:
        return ImportPreview(items=[], error="No se encontraron datos válidos")
    return ImportPreview(items=items)


def apply_service(
    items: Sequence[ImportPreviewItem],
    prices: Sequence[ServicePrice],
    service_index: int,
    positions: Sequence[int] | None = None,
) -> list[ImportPreviewItem]:
    """Assign a service to some (or all) items and recompute their counts."""
    if not 0 <= service_index < len(prices):
        raise IndexError(f"No service at index {service_index}")
    service = prices[service_index]
    selected = set(range(len(items)) if positions is None else positions)
    return [
        replace(
            item,
            service_name=service.service_name,
            service_index=service_index,
            count=calculate_count(item.price, service),
        )
        if position in selected
        else item
        for position, item in enumerate(items)
    ]


@dataclass
class ImportService:
    """Service that previews and imports spreadsheet rows."""

    client: HaircutClient

    async def preview(self, rows: Sequence[Mapping[str, object]]) -> ImportPreview:
        """Parse rows using the currently configured service prices."""
        prices = await self.client.list_service_prices()
        return build_preview(rows, prices)

    async def apply(
        self,
        items: Sequence[ImportPreviewItem],
        service_index: int,
        positions: Sequence[int] | None = None,
    ) -> list[ImportPreviewItem]:
        """Assign a configured service to preview items."""
        prices = await self.client.list_service_prices()
        return apply_service(items, prices, service_index, positions)

    async def import_items(self, items: Sequence[ImportPreviewItem]) -> ImportResult:
        """Create one sale per item, stopping at the first failure."""
        imported = 0
        for item in items:
            payload = HaircutCreate(
                client_name=item.client_name,
                service_name=item.service_name,
                price=item.price,
                date=item.date,
                count=item.count,
                tip=item.tip,
            )
            try:
                await self.client.create_haircut(payload)
            except httpx.HTTPError as exc:
                _logger.exception(
                    "Import failed", extra={"item_id": item.id, "imported": imported}
                )
                return ImportResult(
                    imported=imported, error=f"Error al importar: {_error_detail(exc)}"
                )
            imported += 1
        _logger.info("Imported %s sales", imported)
        return ImportResult(imported=imported)


def _error_detail(exc: httpx.HTTPError) -> str:
    """Return the API's ``detail`` message when present."""
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            body = exc.response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("detail"):
            return str(body["detail"])
    return str(exc)
