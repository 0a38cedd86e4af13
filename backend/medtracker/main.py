from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from medtracker.api.v1.api import api_router
from medtracker.core.config import get_settings
from medtracker.core.logging import configure_logging
from medtracker.core.startup_guardrails import validate_startup_guardrails

settings = get_settings()
configure_logging(settings)


@asynccontextmanager
async def lifespan(_: FastAPI):
    validate_startup_guardrails(settings)
    yield


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
)


@app.get("/healthz")
def healthz() -> dict:
    return {"status": "ok", "app": settings.app_name, "version": settings.app_version}


app.include_router(api_router)
