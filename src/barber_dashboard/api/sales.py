"""Sales, service price and import endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from barber_dashboard.api.models import (
    ApplyServiceRequest,
    BasePriceUpdate,
    HaircutIn,
    ImportItemIn,
    ImportPreviewRequest,
    ImportRequest,
    PriceUpdate,
    SaleIn,
    ServicePriceIn,
)
from barber_dashboard.domain.haircuts import Haircut, HaircutCreate, SaleEntry
from barber_dashboard.domain.imports import ImportPreviewItem

if TYPE_CHECKING:
    from barber_dashboard.containers import AppContainer

router = APIRouter()


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _bad_request(exc: Exception) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.get("/haircuts", tags=["haircuts"])
async def list_haircuts(request: Request, day: str | None = None) -> dict[str, object]:
    """Return every sale, or the sales of one day."""
    service = _container(request).haircut_service
    haircuts = await (service.list_by_date(day) if day else service.list_haircuts())
    return {"haircuts": [asdict(haircut) for haircut in haircuts]}


@router.post("/haircuts", tags=["haircuts"], status_code=status.HTTP_201_CREATED)
async def create_haircut(payload: HaircutIn, request: Request) -> dict[str, object]:
    """Record a single sale."""
    created = await _container(request).haircut_service.create(
        HaircutCreate(**payload.model_dump())
    )
    return asdict(created)


@router.post("/haircuts/batch", tags=["haircuts"], status_code=status.HTTP_201_CREATED)
async def record_sale(payload: SaleIn, request: Request) -> dict[str, object]:
    """Record one sale per service line of the sale form."""
    entries = [
        SaleEntry(service_name=entry.service_name, count=entry.count)
        for entry in payload.entries
    ]
    created = await _container(request).haircut_service.record_sale(
        client_name=payload.client_name,
        date=payload.date,
        entries=entries,
        tip=payload.tip,
        time=payload.time,
    )
    if not created:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Seleccione al menos un servicio con cantidad mayor a cero",
        )
    return {"haircuts": [asdict(haircut) for haircut in created]}


@router.get("/haircuts/{haircut_id}", tags=["haircuts"])
async def get_haircut(haircut_id: str, request: Request) -> dict[str, object]:
    """Return one sale."""
    return asdict(await _container(request).haircut_service.get(haircut_id))


@router.put("/haircuts/{haircut_id}", tags=["haircuts"])
async def update_haircut(
    haircut_id: str, payload: HaircutIn, request: Request
) -> dict[str, object]:
    """Replace a sale."""
    updated = await _container(request).haircut_service.update(
        Haircut(id=haircut_id, **payload.model_dump())
    )
    return asdict(updated)


@router.patch("/haircuts/{haircut_id}/price", tags=["haircuts"])
async def update_haircut_price(
    haircut_id: str, payload: PriceUpdate, request: Request
) -> dict[str, object]:
    """Change the price of a sale."""
    updated = await _container(request).haircut_service.update_price(
        haircut_id, payload.price
    )
    return asdict(updated)


@router.delete("/haircuts/{haircut_id}", tags=["haircuts"])
async def delete_haircut(haircut_id: str, request: Request) -> dict[str, str]:
    """Delete a sale."""
    await _container(request).haircut_service.delete(haircut_id)
    return {"status": "ok"}


@router.get("/services/prices", tags=["prices"])
async def list_prices(request: Request) -> dict[str, object]:
    """Return configured service prices."""
    prices = await _container(request).price_service.list_prices()
    return {"prices": [asdict(price) for price in prices]}


@router.post("/services/prices", tags=["prices"], status_code=status.HTTP_201_CREATED)
async def create_price(payload: ServicePriceIn, request: Request) -> dict[str, object]:
    """Add a service with its base price."""
    try:
        created = await _container(request).price_service.create_price(
            payload.service_name, payload.base_price
        )
    except ValueError as exc:
        raise _bad_request(exc) from exc
    return asdict(created)


@router.get("/services/prices/{service_name}", tags=["prices"])
async def get_price(service_name: str, request: Request) -> dict[str, object]:
    """Return the configured price of one service."""
    return asdict(await _container(request).price_service.get_price(service_name))


@router.put("/services/prices/{service_name}", tags=["prices"])
async def update_price(
    service_name: str, payload: BasePriceUpdate, request: Request
) -> dict[str, object]:
    """Change the base price of a service."""
    try:
        updated = await _container(request).price_service.update_price(
            service_name, payload.base_price
        )
    except ValueError as exc:
        raise _bad_request(exc) from exc
    return asdict(updated)


@router.delete("/services/prices/{service_name}", tags=["prices"])
async def delete_price(service_name: str, request: Request) -> dict[str, str]:
    """Remove a service."""
    message = await _container(request).price_service.delete_price(service_name)
    return {"message": message}


@router.post("/import/preview", tags=["import"])
async def import_preview(
    payload: ImportPreviewRequest, request: Request
) -> dict[str, object]:
    """Parse spreadsheet rows into a preview."""
    preview = await _container(request).import_service.preview(payload.rows)
    return asdict(preview)


@router.post("/import/apply-service", tags=["import"])
async def import_apply_service(
    payload: ApplyServiceRequest, request: Request
) -> dict[str, object]:
    """Assign a service to some or all preview rows."""
    try:
        items = await _container(request).import_service.apply(
            [_preview_item(item) for item in payload.items],
            payload.service_index,
            payload.positions,
        )
    except IndexError as exc:
        raise _bad_request(exc) from exc
    return {"items": [asdict(item) for item in items]}


@router.post("/import", tags=["import"])
async def import_items(payload: ImportRequest, request: Request) -> dict[str, object]:
    """Create the confirmed preview rows as sales."""
    result = await _container(request).import_service.import_items(
        [_preview_item(item) for item in payload.items]
    )
    return asdict(result)


def _preview_item(item: ImportItemIn) -> ImportPreviewItem:
    return ImportPreviewItem(**item.model_dump())
