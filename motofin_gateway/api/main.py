"""Motofin gateway ASGI app: catalog, financing, lender and quote routes"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from motofin_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from motofin_gateway.api.v1 import affordability, classify, eligibility, lenders, quotes, simulation
from motofin_gateway.infrastructure.observability.logging import setup_logging
from motofin_gateway.config import settings

setup_logging(settings.log_level, settings.service_name)

# (router module, OpenAPI tag), all mounted under /v1
V1_ROUTERS = [
    (classify, "catalog"),
    (affordability, "financing"),
    (eligibility, "financing"),
    (simulation, "financing"),
    (lenders, "lenders"),
    (quotes, "quotes"),
]


def create_app() -> FastAPI:
    """Build a fresh gateway app, so each test client gets its own dependency overrides"""
    app = FastAPI(
        title="Motofin Gateway",
        description="Financing decision engine for the dealership storefront and back-office",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Registered last runs first: the request id exists before timing starts
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        """Liveness check for the load balancer"""
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        """Prometheus scrape target"""
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    for module, tag in V1_ROUTERS:
        app.include_router(module.router, prefix="/v1", tags=[tag])

    return app


app = create_app()
