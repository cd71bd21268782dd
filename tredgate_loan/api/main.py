"""FastAPI application factory"""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from tredgate_loan.api.dependencies import get_request_id
from tredgate_loan.api.middleware import RequestIDMiddleware, MetricsMiddleware
from tredgate_loan.api.v1 import loans, summary
from tredgate_loan.domain.exceptions import (
    InvalidTransitionError,
    LoanNotFoundError,
    PersistenceError,
    ValidationError,
)
from tredgate_loan.infrastructure.observability.logging import setup_logging
from tredgate_loan.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors raised by the loan service onto HTTP responses"""

    @app.exception_handler(ValidationError)
    async def validation_failed(request: Request, exc: ValidationError):
        # One rule message at a time, as shown by the loan form
        return JSONResponse(status_code=422, content={"detail": exc.message})

    @app.exception_handler(LoanNotFoundError)
    async def loan_not_found(request: Request, exc: LoanNotFoundError):
        return JSONResponse(status_code=404, content={"detail": "Loan not found"})

    @app.exception_handler(InvalidTransitionError)
    async def loan_already_decided(request: Request, exc: InvalidTransitionError):
        return JSONResponse(
            status_code=409,
            content={"detail": str(exc), "status": exc.current_status},
        )

    @app.exception_handler(PersistenceError)
    async def storage_unavailable(request: Request, exc: PersistenceError):
        logging.error(f"Store write failed: {exc}", extra={"request_id": get_request_id(request)})
        return JSONResponse(status_code=503, content={"detail": "Loan storage unavailable"})


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Tredgate Loan",
        description="Loan application tracking: submission, decisions and summary",
        version="0.1.0",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name, "storage_key": settings.storage_key}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(loans.router, prefix="/v1", tags=["loans"])
    app.include_router(summary.router, prefix="/v1", tags=["summary"])

    return app


app = create_app()
