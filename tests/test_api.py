"""Tests for the dashboard HTTP endpoints."""

from fastapi.testclient import TestClient

from barber_dashboard.api.app import create_app
from barber_dashboard.domain.haircuts import Haircut
from tests.conftest import FakeHaircutClient


def _haircut(haircut_id: str, day: str, price: float, service: str) -> Haircut:
    return Haircut(
        id=haircut_id,
        client_name="Juan",
        service_name=service,
        price=price,
        date=day,
        count=1,
    )


def test_health(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_history_without_filter(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/history")

    assert response.status_code == 200
    data = response.json()
    assert data["date_range"] is None
    assert data["error"] is None
    assert [item["date"] for item in data["history"]] == [
        "09/01/2026",
        "08/01/2026",
        "03/01/2026",
        "2025-12-20",
    ]
    first = data["history"][0]
    assert first["display_date"] == "vie 9 de ene"
    assert first["display_total"] == "$ 60.000"
    assert data["stats"]["total_amount"] == 86000


def test_history_search(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/history", params={"q": "enero 2026"})

    data = response.json()
    assert data["date_range"] == {
        "start_date": "2026-01-01",
        "end_date": "2026-01-31",
        "label": "Enero 2026",
    }
    assert len(data["history"]) == 3
    assert data["stats"]["total_amount"] == 78000
    assert data["stats"]["max_date"] == "09/01/2026"


def test_history_search_unrecognized(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/history", params={"q": "pasado mañana"})

    data = response.json()
    assert response.status_code == 200
    assert data["error"].startswith("No se pudo interpretar la fecha")
    assert data["date_range"] is None
    assert len(data["history"]) == 4


def test_history_custom_range(container) -> None:
    client = TestClient(create_app(container))

    response = client.get(
        "/history", params={"start": "2025-12-01", "end": "2025-12-31"}
    )

    data = response.json()
    assert data["date_range"]["label"] == "Rango personalizado"
    assert [item["date"] for item in data["history"]] == ["2025-12-20"]


def test_history_periods(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/history/periods")

    periods = response.json()["periods"]
    assert periods[0] == {"label": "Hoy", "value": "hoy"}
    assert len(periods) == 6


def test_history_when_data_service_is_down(
    container, haircut_client: FakeHaircutClient
) -> None:
    haircut_client.unavailable = True
    client = TestClient(create_app(container))

    response = client.get("/history")

    assert response.status_code == 502
    assert response.json() == {"detail": "No se pudo contactar el servicio de datos"}


def test_today_summary_and_delete(
    container, haircut_client: FakeHaircutClient
) -> None:
    client = TestClient(create_app(container))

    summary = client.get("/summary/today")
    deleted = client.delete("/summary/today")

    assert summary.json() == {
        "date": "2026-01-14",
        "count": 3,
        "total": 24000,
        "tip": 500,
    }
    assert deleted.json() == {"message": "Eliminados los cortes del 2026-01-14"}
    assert haircut_client.deleted_dates == ["2026-01-14"]


def test_global_stats(container, haircut_client: FakeHaircutClient) -> None:
    haircut_client.haircuts = [
        _haircut("1", "2026-01-09", 8000, "Corte"),
        _haircut("2", "03/01/2026", 4000, "Barba"),
    ]
    client = TestClient(create_app(container))

    response = client.get("/stats/global")

    assert response.json() == {
        "total_cuts": 2,
        "total_revenue": 12000,
        "average_ticket": 6000,
        "first_cut_date": "03/01/2026",
    }


def test_statistics_report(container, haircut_client: FakeHaircutClient) -> None:
    haircut_client.haircuts = [
        _haircut("1", "2026-01-13", 8000, "Corte"),
        _haircut("2", "2026-01-14", 5000, "Barba"),
    ]
    client = TestClient(create_app(container))

    response = client.get("/stats", params={"range": "week"})

    data = response.json()
    assert response.status_code == 200
    assert data["start_date"] == "2026-01-07"
    assert data["end_date"] == "2026-01-14"
    assert len(data["daily"]) == 8
    assert data["total_revenue"] == 13000
    assert data["top_service"]["name"] in {"Corte", "Barba"}
    assert data["ranges"]["week"] == "Esta semana"


def test_statistics_unknown_range(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/stats", params={"range": "decade"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Rango desconocido: decade"


def test_statistics_invalid_dates(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/stats", params={"start": "ayer", "end": "2026-01-14"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Formato de fecha no válido"


def test_record_sale_batch(container, haircut_client: FakeHaircutClient) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/haircuts/batch",
        json={
            "client_name": "Juan",
            "date": "2026-01-14",
            "tip": 1000,
            "entries": [
                {"service_name": "Corte", "count": 2},
                {"service_name": "Barba", "count": 1},
            ],
        },
    )

    assert response.status_code == 201
    haircuts = response.json()["haircuts"]
    assert [(h["service_name"], h["price"], h["tip"]) for h in haircuts] == [
        ("Corte", 16000, 1000),
        ("Barba", 5000, 0),
    ]


def test_record_sale_without_entries(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/haircuts/batch",
        json={"date": "2026-01-14", "entries": [{"service_name": "", "count": 0}]},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == (
        "Seleccione al menos un servicio con cantidad mayor a cero"
    )


def test_haircut_crud(container, haircut_client: FakeHaircutClient) -> None:
    client = TestClient(create_app(container))

    created = client.post(
        "/haircuts",
        json={
            "client_name": "Ana",
            "service_name": "Corte",
            "price": 8000,
            "date": "2026-01-14",
            "count": 1,
        },
    ).json()
    patched = client.patch(f"/haircuts/{created['id']}/price", json={"price": 9000})
    listed = client.get("/haircuts", params={"day": "2026-01-14"})
    deleted = client.delete(f"/haircuts/{created['id']}")

    assert patched.json()["price"] == 9000
    assert [h["id"] for h in listed.json()["haircuts"]] == [created["id"]]
    assert deleted.json() == {"status": "ok"}
    assert haircut_client.haircuts == []


def test_service_prices(container) -> None:
    client = TestClient(create_app(container))

    created = client.post(
        "/services/prices", json={"service_name": "Tintura", "base_price": 15000}
    )
    rejected = client.post(
        "/services/prices", json={"service_name": "Lavado", "base_price": 0}
    )
    updated = client.put("/services/prices/Corte", json={"base_price": 9000})
    listed = client.get("/services/prices")

    assert created.status_code == 201
    assert rejected.status_code == 400
    assert rejected.json()["detail"] == "El precio base debe ser mayor a cero"
    assert updated.json() == {"service_name": "Corte", "base_price": 9000}
    assert [p["service_name"] for p in listed.json()["prices"]] == [
        "Corte",
        "Barba",
        "Tintura",
    ]


def test_import_flow(container, haircut_client: FakeHaircutClient) -> None:
    client = TestClient(create_app(container))

    preview = client.post(
        "/import/preview",
        json={"rows": [{"FECHA": "09/01/2026", "CORTE": "$ 10.000"}]},
    ).json()
    applied = client.post(
        "/import/apply-service",
        json={"items": preview["items"], "service_index": 1},
    ).json()
    result = client.post("/import", json={"items": applied["items"]}).json()

    assert preview["error"] is None
    assert applied["items"][0]["service_name"] == "Barba"
    assert applied["items"][0]["count"] == 2
    assert result == {"imported": 1, "error": None}
    assert haircut_client.created[0].service_name == "Barba"


def test_import_apply_unknown_service(container) -> None:
    client = TestClient(create_app(container))
    item = {
        "id": "temp-0",
        "date": "09/01/2026",
        "price": 8000,
        "service_name": "Corte",
    }

    response = client.post(
        "/import/apply-service", json={"items": [item], "service_index": 9}
    )

    assert response.status_code == 400
