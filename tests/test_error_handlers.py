"""
Tests for the JSON error responses
"""
import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from app.core.error_handlers import register_exception_handlers
from app.services.exceptions import ConflictError, ForbiddenError, NotFoundError


@pytest.fixture
def client():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/conflict")
    def conflict():
        raise ConflictError("Selected time slot is not available or already booked.")

    @app.get("/missing")
    def missing():
        raise NotFoundError()

    @app.get("/forbidden")
    def forbidden():
        raise ForbiddenError("Not authorized to cancel this booking")

    @app.get("/http")
    def http_error():
        raise HTTPException(status_code=418, detail={"detail": "teapot"})

    @app.get("/crash")
    def crash():
        raise RuntimeError("unexpected")

    @app.get("/items/{item_id}")
    def item(item_id: int):
        return {"id": item_id}

    return TestClient(app, raise_server_exceptions=False)


def test_domain_errors_map_to_status_codes(client):
    response = client.get("/conflict")
    assert response.status_code == 400
    assert response.json() == {
        "detail": "Selected time slot is not available or already booked."
    }
    assert client.get("/missing").json() == {"detail": "Not found"}
    assert client.get("/forbidden").status_code == 403


def test_http_exception_detail_is_flattened(client):
    response = client.get("/http")
    assert response.status_code == 418
    assert response.json() == {"detail": "teapot"}


def test_validation_errors_are_422(client):
    response = client.get("/items/abc")
    assert response.status_code == 422
    assert response.json()["detail"].startswith("path.item_id")


def test_unexpected_errors_are_500(client):
    response = client.get("/crash")
    assert response.status_code == 500
    assert response.json()["detail"] == "Internal Server Error"
