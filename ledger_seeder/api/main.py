"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from ledger_seeder.api.middleware import RequestIDMiddleware, MetricsMiddleware
from ledger_seeder.api.v1 import preview, runs, validate
from ledger_seeder.infrastructure.observability.logging import setup_logging
from ledger_seeder.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Ledger Seeder",
        description="Demo accounts, categories and recurring transactions for a ledger test account",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(validate.router, prefix="/v1", tags=["accounts"])
    app.include_router(preview.router, prefix="/v1", tags=["preview"])
    app.include_router(runs.router, prefix="/v1", tags=["runs"])

    return app


app = create_app()
