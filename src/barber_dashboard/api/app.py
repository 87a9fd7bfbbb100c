"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import date

import httpx
from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from barber_dashboard.api.sales import router as sales_router
from barber_dashboard.app_logging import configure_logging
from barber_dashboard.config import parse_cors_origins
from barber_dashboard.containers import AppContainer
from barber_dashboard.domain.history import DailyHistoryItem
from barber_dashboard.services.formatting import format_currency, format_display_date
from barber_dashboard.services.history import (
    HistorySearchResult,
    get_history_stats,
    normalize_date,
    search_history,
    search_history_range,
    visible_history,
)
from barber_dashboard.services.periods import quick_periods
from barber_dashboard.services.statistics import STATISTICS_RANGES
from barber_dashboard.services.validation import parse_iso_date

DATA_SERVICE_ERROR = "No se pudo contactar el servicio de datos"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Barber Dashboard", lifespan=lifespan)
    app.state.container = container

    origins = parse_cors_origins(container.settings.cors_origins)
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(sales_router)

    @app.exception_handler(httpx.HTTPError)
    async def data_service_error(
        request: Request, exc: httpx.HTTPError
    ) -> JSONResponse:
        logger.error(
            "Haircuts API request failed: %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": DATA_SERVICE_ERROR},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/history")
    async def history(
        request: Request,
        q: str | None = None,
        start: str | None = None,
        end: str | None = None,
    ) -> dict[str, object]:
        """Return the daily history, optionally filtered by a period."""
        state_container: AppContainer = request.app.state.container
        items = await state_container.haircut_service.daily_history()
        today = state_container.today()
        if q is not None:
            result = search_history(items, q, today)
        elif start is not None or end is not None:
            result = search_history_range(items, start, end, today)
        else:
            result = HistorySearchResult(history=items, stats=get_history_stats(items))
        if result.error:
            logger.info("History search rejected: %s", result.error)
        return _serialize_search(result, state_container)

    @app.get("/history/periods")
    async def history_periods() -> dict[str, object]:
        """Return the quick period shortcuts."""
        return {"periods": [asdict(period) for period in quick_periods()]}

    @app.get("/summary/today")
    async def today_summary(request: Request) -> dict[str, object]:
        """Return today's totals."""
        state_container: AppContainer = request.app.state.container
        summary = await state_container.haircut_service.today_summary()
        return asdict(summary)

    @app.delete("/summary/today")
    async def delete_today(request: Request) -> dict[str, str]:
        """Delete every sale recorded today."""
        state_container: AppContainer = request.app.state.container
        message = await state_container.haircut_service.delete_today()
        return {"message": message}

    @app.get("/stats/global")
    async def global_stats(request: Request) -> dict[str, object]:
        """Return all-time totals."""
        state_container: AppContainer = request.app.state.container
        stats = await state_container.haircut_service.global_stats()
        return asdict(stats)

    @app.get("/stats")
    async def statistics(
        request: Request,
        range_key: str = Query(default="all", alias="range"),
        start: str | None = None,
        end: str | None = None,
    ) -> dict[str, object]:
        """Return per-day and per-service statistics."""
        state_container: AppContainer = request.app.state.container
        if range_key not in STATISTICS_RANGES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Rango desconocido: {range_key}",
            )
        try:
            report = await state_container.statistics_service.report(
                range_key, state_container.today(), start=start, end=end
            )
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        return {"ranges": STATISTICS_RANGES, **asdict(report)}

    return app


def _serialize_search(
    result: HistorySearchResult, container: AppContainer
) -> dict[str, object]:
    today = container.today()
    return {
        "date_range": asdict(result.date_range) if result.date_range else None,
        "error": result.error,
        "history": [
            _serialize_history_item(item, today)
            for item in visible_history(result.history)
        ],
        "stats": asdict(result.stats),
    }


def _serialize_history_item(item: DailyHistoryItem, today: date) -> dict[str, object]:
    day = parse_iso_date(normalize_date(item.date))
    return {
        "date": item.date,
        "total": item.total,
        "count": item.count,
        "clients": list(item.clients),
        "display_date": format_display_date(day, today) if day else item.date,
        "display_total": format_currency(item.total),
    }
