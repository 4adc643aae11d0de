"""Health check endpoint."""
from datetime import datetime, timezone
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from bignum.config import get_settings
from bignum.models import HealthResponse
from bignum.numeric import is_initialized
from bignum.services import get_redis_store

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Check health status of the API, the numeric context and Redis."
)
async def health_check():
    """
    Check health of all dependencies.

    Returns 200 if all healthy, 503 if any unhealthy.
    """
    settings = get_settings()
    dependencies: dict[str, str] = {}

    dependencies["numeric_context"] = "healthy" if is_initialized() else "unhealthy: not initialized"

    # Check Redis
    try:
        redis = get_redis_store()
        redis_healthy, redis_error = await redis.health_check()
        dependencies["redis"] = "healthy" if redis_healthy else f"unhealthy: {redis_error}"
    except Exception as e:
        dependencies["redis"] = f"unhealthy: {str(e)}"

    all_healthy = all(v == "healthy" for v in dependencies.values())
    overall_status = "healthy" if all_healthy else "degraded"

    response = HealthResponse(
        status=overall_status,
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.app_version,
        dependencies=dependencies
    )

    # Return 503 if degraded
    if not all_healthy:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump()
        )

    return response
