"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from delivery_quote.api.middleware import RequestIDMiddleware, MetricsMiddleware
from delivery_quote.api.v1 import quote
from delivery_quote.infrastructure.observability.logging import setup_logging
from delivery_quote.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Delivery Quote Service",
        description="Delivery fee, small order surcharge and total price for a venue and customer location",
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

    app.include_router(quote.router, prefix="/v1", tags=["quotes"])

    return app


app = create_app()
