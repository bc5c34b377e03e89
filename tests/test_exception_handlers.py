"""Tests for global exception handlers.

Validates that domain errors map to consistent JSON responses and that
unexpected exceptions never leak implementation details.
"""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from admission.core.errors import AppError, InvalidConfigurationError, ValidationAppError
from admission.core.exception_handlers import general_exception_handler, setup_exception_handlers


@pytest.fixture
def app_with_handlers() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)
    return app


@pytest.fixture
def client(app_with_handlers: FastAPI) -> TestClient:
    return TestClient(app_with_handlers, raise_server_exceptions=False)


class TestAppErrorHandler:
    """Test handler for AppError and subclasses."""

    def test_validation_error_returns_400(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-validation")
        async def endpoint():
            raise ValidationAppError(code="bad_input", message="Bad input")

        response = client.get("/test-validation")

        assert response.status_code == 400
        data = response.json()
        assert data["error"]["code"] == "bad_input"
        assert data["error"]["message"] == "Bad input"
        assert "request_id" in data["error"]
        assert "details" not in data["error"]

    def test_invalid_configuration_returns_500_with_details(
        self, client: TestClient, app_with_handlers: FastAPI
    ):
        @app_with_handlers.get("/test-config")
        async def endpoint():
            raise InvalidConfigurationError(
                code="invalid_rate_limit_config",
                message="capacity must be a positive integer",
                details={"field": "capacity", "actual_value": 0},
            )

        response = client.get("/test-config")

        assert response.status_code == 500
        data = response.json()
        assert data["error"]["code"] == "invalid_rate_limit_config"
        assert data["error"]["details"] == {"field": "capacity", "actual_value": 0}


class TestGeneralExceptionHandler:
    """Test fallback handler for unexpected exceptions."""

    def test_unexpected_exception_returns_generic_500(
        self, client: TestClient, app_with_handlers: FastAPI
    ):
        @app_with_handlers.get("/test-boom")
        async def endpoint():
            raise RuntimeError("bucket store exploded")

        response = client.get("/test-boom")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "internal_server_error"
        assert "exploded" not in response.text

    def test_general_exception_handler_never_leaks_stack_trace(self):
        request = AsyncMock()
        request.url.path = "/test"
        request.method = "GET"

        response = asyncio.run(general_exception_handler(request, ValueError("secret detail")))

        data = json.loads(bytes(response.body).decode())
        assert response.status_code == 500
        assert "secret detail" not in data["error"]["message"]
        assert "Traceback" not in bytes(response.body).decode()


def test_setup_registers_handlers(app_with_handlers: FastAPI):
    assert AppError in app_with_handlers.exception_handlers
    assert Exception in app_with_handlers.exception_handlers
