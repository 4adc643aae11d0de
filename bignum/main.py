"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from bignum.config import get_settings
from bignum.errors import BignumError
from bignum.logging_config import configure_logging
from bignum.models import ErrorResponse
from bignum.numeric import NumericContext, init
from bignum.routers import (
    health_router,
    commands_router,
    keys_router,
    arithmetic_router,
)

logger = logging.getLogger(__name__)

ERROR_STATUS: dict[str, int] = {
    "arity": status.HTTP_400_BAD_REQUEST,
    "unknown_command": status.HTTP_400_BAD_REQUEST,
    "wrong_type": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "division_by_zero": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "overflow": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "store": status.HTTP_502_BAD_GATEWAY,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting bignum API...")
    settings = get_settings()
    logger.info(f"Environment: {'DEBUG' if settings.debug else 'PRODUCTION'}")
    yield
    logger.info("Shutting down bignum API...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    The numeric context is installed here, before any request can reach the
    engine.
    """
    settings = get_settings()
    configure_logging(settings)
    init(NumericContext.from_settings(settings))

    app = FastAPI(
        title=settings.app_name,
        description="""
        ## bignum API

        Exact decimal arithmetic over Redis values.

        ### Features:
        - GET/INCR/DECR/INCRBY/DECRBY on flat keys
        - HGET/HINCR/HDECR/HINCRBY/HDECRBY on hash fields
        - Stateless ADD/SUB/MUL/DIV and TO_FIXED
        - 34 significant digits, truncating rounding
        """,
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )

    app.include_router(health_router)
    app.include_router(commands_router)
    app.include_router(keys_router)
    app.include_router(arithmetic_router)

    @app.exception_handler(BignumError)
    async def bignum_exception_handler(request: Request, exc: BignumError):
        status_code = ERROR_STATUS.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        logger.warning(f"{request.method} {request.url.path} failed: {exc.reply}")
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                detail=exc.message,
                error_code=exc.code,
                reply=exc.reply,
            ).model_dump()
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error", "error": str(exc)}
        )

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("bignum.main:app", host="0.0.0.0", port=8000, reload=True)
