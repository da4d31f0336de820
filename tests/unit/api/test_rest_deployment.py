import pytest
from fastapi.testclient import TestClient
from app.core.database import get_db
from app.domain.exceptions import NotFound, Conflict, ValidationFailed, NaturalKeyFrozen, Violation
from tests.helper import rest_deployment


@pytest.fixture
def client(mocker):
    app = rest_deployment()
    db = mocker.Mock()

    async def _db():
        yield db

    app.dependency_overrides[get_db] = _db
    with TestClient(app) as test_client:
        test_client.db = db
        yield test_client


def test_every_resource_is_routed(client):
    paths = {route.path for route in client.app.routes}

    for prefix in (
        "/venues", "/sections/{section_id}", "/events", "/event-categories", "/media-items", "/shows",
        "/performances/{performance_id}", "/ticket-prices/{ticket_price_id}", "/ticket-categories", "/bookings",
    ):
        assert any(path.startswith(prefix) for path in paths), prefix


def test_not_found_renders_problem_json(client, mocker):
    mocker.patch(
        "app.services.venue_service.get_venue",
        new=mocker.AsyncMock(side_effect=NotFound("Venue not found", ctx={"venue_id": 42}))
    )

    response = client.get("/venues/42", headers={"X-Request-ID": "req-1"})

    assert response.status_code == 404
    assert response.headers["content-type"].startswith("application/problem+json")
    assert response.headers["X-Request-ID"] == "req-1"
    body = response.json()
    assert body["title"] == "Not Found"
    assert body["detail"] == "Venue not found"
    assert body["context"] == {"venue_id": 42}
    assert body["trace_id"] == "req-1"


def test_conflict_renders_409(client, mocker):
    mocker.patch(
        "app.services.show_service.delete_show",
        new=mocker.AsyncMock(side_effect=Conflict("Show has bookings", ctx={"show_id": 1}))
    )

    response = client.delete("/shows/1")

    assert response.status_code == 409
    assert response.json()["detail"] == "Show has bookings"


def test_natural_key_rekey_renders_409(client, mocker):
    mocker.patch(
        "app.services.venue_service.update_venue",
        new=mocker.AsyncMock(side_effect=NaturalKeyFrozen("Venue.name is part of a natural key already in use"))
    )

    response = client.put("/venues/1", json={"name": "Massey Hall"})

    assert response.status_code == 409
    assert response.json()["title"] == "Conflict"


def test_validation_failure_renders_violations(client, mocker):
    violations = [Violation("Section", "name", "may not be empty")]
    mocker.patch(
        "app.services.venue_service.create_section",
        new=mocker.AsyncMock(side_effect=ValidationFailed(violations))
    )

    response = client.post(
        "/venues/1/sections",
        json={"name": "A1", "description": "Balcony", "number_of_rows": 1, "row_capacity": 1}
    )

    assert response.status_code == 422
    body = response.json()
    assert body["detail"] == "Validation failed: Section.name"
    assert body["violations"] == [{"entity": "Section", "field": "name", "message": "may not be empty"}]


def test_invalid_body_is_rejected_before_service(client, mocker):
    create = mocker.patch("app.services.booking_service.create_booking", new=mocker.AsyncMock())

    response = client.post("/bookings", json={"performance_id": 1, "email": "nope", "ticket_requests": []})

    assert response.status_code == 422
    create.assert_not_awaited()


def test_create_ticket_category_returns_location(client, mocker):
    mocker.patch(
        "app.services.ticket_category_service.create_ticket_category",
        new=mocker.AsyncMock(return_value=mocker.Mock(id=3, description="Adult"))
    )

    response = client.post("/ticket-categories", json={"description": "Adult"})

    assert response.status_code == 201
    assert response.headers["Location"] == "/ticket-categories/3"
    assert response.json() == {"id": 3, "description": "Adult"}


def test_request_id_is_generated_when_missing(client, mocker):
    mocker.patch("app.services.booking_service.cancel_booking", new=mocker.AsyncMock())

    response = client.delete("/bookings/1")

    assert response.status_code == 204
    assert response.headers["X-Request-ID"]
