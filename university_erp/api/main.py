"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from university_erp.api.errors import register_exception_handlers
from university_erp.api.middleware import RequestIDMiddleware, MetricsMiddleware
from university_erp.api.v1 import (
    academics,
    admissions,
    attendance,
    auth,
    certification,
    dashboard,
    examinations,
    finance,
    hr,
    learning,
    library,
    multicampus,
    payroll,
    students,
)
from university_erp.infrastructure.observability.logging import setup_logging
from university_erp.config import settings

# Setup structured logging
setup_logging(settings.log_level)

API_PREFIX = "/api/v1"


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="University ERP",
        description="Academic, administrative and financial operations of a university",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(auth.router, prefix=API_PREFIX, tags=["auth"])
    app.include_router(academics.router, prefix=API_PREFIX, tags=["academics"])
    app.include_router(students.router, prefix=API_PREFIX, tags=["students"])
    app.include_router(admissions.router, prefix=API_PREFIX, tags=["admissions"])
    app.include_router(attendance.router, prefix=API_PREFIX, tags=["attendance"])
    app.include_router(examinations.router, prefix=API_PREFIX, tags=["examinations"])
    app.include_router(finance.router, prefix=API_PREFIX, tags=["finance"])
    app.include_router(payroll.router, prefix=API_PREFIX, tags=["payroll"])
    app.include_router(hr.router, prefix=API_PREFIX, tags=["hr"])
    app.include_router(library.router, prefix=API_PREFIX, tags=["library"])
    app.include_router(learning.router, prefix=API_PREFIX, tags=["learning"])
    app.include_router(certification.router, prefix=API_PREFIX, tags=["certification"])
    app.include_router(multicampus.router, prefix=API_PREFIX, tags=["multicampus"])
    app.include_router(dashboard.router, prefix=API_PREFIX, tags=["dashboard"])

    return app


app = create_app()
