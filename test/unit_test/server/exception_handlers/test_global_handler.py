"""Unit tests for the exception handlers."""

from __future__ import annotations

import json

import pytest
from fastapi import FastAPI
from sqlalchemy.exc import IntegrityError
from starlette.requests import Request

from tesvik_portal.core.errors import (
    NotFoundError,
    PortalError,
    RateLimitedError,
    ValidationFailedError,
)
from tesvik_portal.server.exception_handlers.global_handler import (
    global_exception_handler,
    integrity_error_handler,
    portal_error_handler,
    setup_exception_handlers,
)


def make_request(path: str = "/api/v1/test") -> Request:
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": path,
            "query_string": b"q=1",
            "headers": [],
            "client": ("127.0.0.1", 5000),
            "server": ("localhost", 80),
            "scheme": "http",
        }
    )


class TestPortalErrorHandler:
    async def test_maps_status_and_body(self):
        response = await portal_error_handler(make_request(), NotFoundError("Program 3 not found"))
        assert response.status_code == 404
        assert json.loads(response.body) == {"detail": "Program 3 not found", "error_type": "NotFoundError"}

    async def test_includes_details(self):
        exc = ValidationFailedError("Invalid user id", details="invalid_user_id")
        response = await portal_error_handler(make_request(), exc)
        assert response.status_code == 400
        assert json.loads(response.body)["details"] == "invalid_user_id"

    async def test_upstream_errors(self):
        response = await portal_error_handler(make_request(), RateLimitedError("Çok fazla istek"))
        assert response.status_code == 429

    async def test_explicit_status_code(self):
        response = await portal_error_handler(make_request(), PortalError("teapot", status_code=418))
        assert response.status_code == 418


async def test_global_handler_returns_error_id():
    exc = RuntimeError("boom")
    response = await global_exception_handler(make_request(), exc)

    body = json.loads(response.body)
    assert response.status_code == 500
    assert body == {"detail": "Internal server error", "error_id": id(exc), "error_type": "RuntimeError"}


async def test_integrity_error_is_a_conflict():
    exc = IntegrityError("INSERT INTO support_program_tags", {}, Exception("FOREIGN KEY constraint failed"))
    response = await integrity_error_handler(make_request(), exc)

    assert response.status_code == 409
    assert json.loads(response.body)["error_type"] == "IntegrityError"


def test_setup_registers_handlers():
    app = FastAPI()
    setup_exception_handlers(app)
    assert app.exception_handlers[PortalError] is portal_error_handler
    assert app.exception_handlers[IntegrityError] is integrity_error_handler
    assert app.exception_handlers[Exception] is global_exception_handler
