"""Tests for error formatting and the exception handlers."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from worldbuilder.api.exceptions import NotFoundError, format_validation_error


class TestFormatValidationError:
    """Test flattening of pydantic errors."""

    def test_missing_body_field(self) -> None:
        error = {"type": "missing", "loc": ("body", "firstName"), "msg": "Field required"}
        assert format_validation_error(error) == {
            "type": "missing",
            "msg": "firstName field is required.",
            "path": "firstName",
            "location": "body",
        }

    def test_missing_updated_data(self) -> None:
        error = {"type": "missing", "loc": ("body", "updatedData"), "msg": "Field required"}
        assert format_validation_error(error)["msg"] == "updatedData field is required with data."

    def test_value_error_prefix_is_stripped(self) -> None:
        error = {
            "type": "value_error",
            "loc": ("body", "updatedData"),
            "msg": "Value error, firstName cannot be null.",
        }
        assert format_validation_error(error)["msg"] == "firstName cannot be null."

    def test_nested_field_keeps_message(self) -> None:
        error = {
            "type": "string_too_long",
            "loc": ("body", "updatedData", "name"),
            "msg": "String should have at most 50 characters",
        }
        formatted = format_validation_error(error)
        assert formatted["path"] == "updatedData.name"
        assert formatted["msg"] == "String should have at most 50 characters"


class TestHandlers:
    """Test handlers registered on the app."""

    def test_unhandled_error_is_opaque(self, app: FastAPI) -> None:
        @app.get("/api/boom")
        async def boom() -> None:
            raise RuntimeError("connection string with secrets")

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/boom")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error."}

    def test_api_error(self, app: FastAPI) -> None:
        @app.get("/api/missing")
        async def missing() -> None:
            raise NotFoundError("User")

        with TestClient(app) as client:
            response = client.get("/api/missing")

        assert response.status_code == 404
        assert response.json() == {"message": "User not found."}

    def test_unknown_route(self, client: TestClient) -> None:
        response = client.get("/api/unknown")
        assert response.status_code == 404
        assert response.json() == {"message": "Not Found"}


class TestHealth:
    """Test health endpoints."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["database"] == "healthy"

    def test_probes(self, client: TestClient) -> None:
        assert client.get("/api/ready").json() == {"ready": True}
        assert client.get("/api/live").json() == {"alive": True}
