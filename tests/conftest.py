from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from fastapi import FastAPI, HTTPException, Query
from httpx import ASGITransport, AsyncClient

from apierrors.config import Settings
from apierrors.exceptions import ErrorBuilder, new_validation_error
from apierrors.handlers import register_error_handlers
from tests.factories import make_error


def build_app(settings: Settings) -> FastAPI:
    """Small app whose routes fail in every way the handlers cover."""
    app = FastAPI()
    register_error_handlers(app, settings)

    @app.get("/classified")
    async def classified() -> None:
        raise make_error()

    @app.get("/validation")
    async def validation() -> None:
        raise ErrorBuilder.validation("name is required").set_param_name("name").build()

    @app.get("/conflict")
    async def conflict() -> None:
        raise ErrorBuilder("already exists").set_category("Conflict").set_status_code(409).build()

    @app.get("/bad-request")
    async def bad_request() -> None:
        raise new_validation_error("bad input")

    @app.get("/boom")
    async def boom() -> None:
        raise ValueError("boom")

    @app.get("/forbidden")
    async def forbidden() -> None:
        raise HTTPException(status_code=403, detail="not yours")

    @app.get("/items")
    async def items(limit: int = Query(20, ge=1, le=100)) -> dict[str, int]:
        return {"limit": limit}

    return app


@pytest.fixture
def settings() -> Settings:
    return Settings(log_level="WARNING", hide_internal_errors=False)


@pytest_asyncio.fixture
async def client(settings: Settings) -> AsyncIterator[AsyncClient]:
    """HTTP client bound to a fresh app.

    Starlette re-raises unhandled exceptions after the 500 handler has
    responded, so the transport must not propagate them.
    """
    async with AsyncClient(
        transport=ASGITransport(app=build_app(settings), raise_app_exceptions=False),
        base_url="http://test",
    ) as client:
        yield client
