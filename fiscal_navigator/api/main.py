"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from fiscal_navigator.api.middleware import RequestIDMiddleware, MetricsMiddleware
from fiscal_navigator.api.v1 import simulation, feedback
from fiscal_navigator.infrastructure.observability.logging import setup_logging
from fiscal_navigator.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Fiscal Navigator",
        description="Micro vs Réel tax regime simulator for French micro-entrepreneurs (indicative only)",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(simulation.router, prefix="/v1", tags=["simulation"])
    app.include_router(feedback.router, prefix="/v1", tags=["feedback"])

    return app


app = create_app()
