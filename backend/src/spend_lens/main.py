"""
FastAPI application entry point.

Ties together:
- API routes for check URL validation and verification
- Logging configuration
- Error handling
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from spend_lens import __version__
from spend_lens.api.routes import checks, health
from spend_lens.config import get_settings

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure root logging for the service."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup settings and shutdown."""
    settings = get_settings()

    logger.info(f"Starting Spend Lens v{__version__}")
    logger.info(f"Environment: {settings.env}")
    logger.info(f"Verification endpoint: {settings.verification_url}")

    yield  # Application runs here

    logger.info("Shutting down Spend Lens")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance ready to serve requests.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Spend Lens API",
        description=(
            "Fiscal receipt check URL verification.\n\n"
            "Validates check URLs printed on fiscalized receipts and forwards "
            "their parameters to the tax authority for verification."
        ),
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.include_router(health.router)
    app.include_router(checks.router, prefix="/api/v1")

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Catch-all exception handler for unhandled errors."""
        logger.exception(f"Unhandled error: {exc}")

        # Don't expose internal errors in production
        if settings.debug:
            detail = str(exc)
        else:
            detail = "An internal error occurred"

        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "detail": detail,
            },
        )

    return app


app = create_app()


# Development server entry point
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "spend_lens.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
