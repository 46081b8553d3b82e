"""
Subscription Service - Main Application
=======================================

FastAPI application holding simulation subscriptions.

Version: 0.1.0
"""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from shared.config import settings
from shared.logging import get_logger, setup_logging
from shared.models.common import ErrorResponse, HealthResponse

from services.subscriptions.routes import subscriptions
from services.subscriptions.store import SubscriptionStore

# Setup logging
setup_logging(
    log_level=settings.log_level.value,
    json_logs=settings.is_production,
    service_name="subscriptions",
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> Any:
    """Application lifespan manager."""
    logger.info(
        "subscriptions_starting",
        environment=settings.environment.value,
        port=settings.ports.subscriptions,
    )

    yield

    logger.info(
        "subscriptions_shutting_down",
        subscriptions=len(app.state.subscriptions),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> PlainTextResponse:
    """Reject malformed subscription payloads."""
    logger.warning("invalid_payload", path=request.url.path, errors=len(exc.errors()))
    return PlainTextResponse(
        "Invalid request payload",
        status_code=status.HTTP_400_BAD_REQUEST,
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        "unhandled_exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        ).model_dump(mode="json"),
    )


def create_app(store: SubscriptionStore | None = None) -> FastAPI:
    """
    Build a subscription service application.

    Args:
        store: Subscription store to serve (a new one when omitted)

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="DCR Subscription Service",
        description="Subscriptions to DCR graph simulations",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.subscriptions = store if store is not None else SubscriptionStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Service health check."""
        return HealthResponse(
            status="healthy",
            service="subscriptions",
            version="0.1.0",
            components={
                "store": {
                    "status": "healthy",
                    "subscriptions": len(app.state.subscriptions),
                },
            },
        )

    app.include_router(subscriptions.router, tags=["Subscriptions"])

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    return app


app = create_app()


# ============================================================================
# Run with Uvicorn
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.subscriptions.main:app",
        host="0.0.0.0",
        port=settings.ports.subscriptions,
        reload=settings.debug,
        log_level=settings.log_level.value.lower(),
    )
