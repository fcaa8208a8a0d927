"""
PayU Notification Receiver - Application Entry Point

A small FastAPI application that accepts PayU payment notifications,
checks their source address and signature, and exposes health and
Prometheus endpoints. The PayU client itself lives in the ``payu`` package
and can be used without this app.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import Depends, FastAPI
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from api import webhooks
from api.middleware import log_api_entry
from core.dependencies import clear_settings, get_settings, init_settings
from core.logging import configure_logging
from core.metrics import init_metrics
from core.settings import Settings
from core.tracing import init_tracer

log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI application startup and shutdown events."""
    init_settings()
    settings = get_settings()
    configure_logging(environment=settings.ENVIRONMENT)

    init_tracer(settings.OTEL_SERVICE_NAME)
    log.info(
        "app.startup",
        environment=settings.ENVIRONMENT,
        sandbox=settings.PAYU_SANDBOX,
        merchant_pos_id=settings.PAYU_MERCHANT_POS_ID,
    )

    yield
    clear_settings()


app = FastAPI(
    title="PayU Notification Receiver",
    description="Receives and verifies PayU payment notifications.",
    version="1.0.0",
    lifespan=lifespan,
)

FastAPIInstrumentor.instrument_app(app)

init_metrics(app)

app.middleware("http")(log_api_entry)


@app.get("/healthz")
async def health_check(settings: Settings = Depends(get_settings)):
    """Health check endpoint to verify API status."""
    return {
        "status": "ok",
        "app_name": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "sandbox": settings.PAYU_SANDBOX,
    }


app.include_router(webhooks.router, tags=["webhooks"])


def main():
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
