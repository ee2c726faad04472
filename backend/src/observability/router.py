"""Observability API endpoints.

Provides metrics and health checks for monitoring.
"""

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from catalog.store import CatalogPort
from dependencies import get_catalog, get_extractor_registry
from infrastructure.extractors.extractor_registry import ExtractorRegistry
from .health import (
    check_catalog_health,
    check_extractors_health,
    get_overall_health,
    HealthStatus,
)
from .logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Observability"])


@router.get(
    "/metrics",
    summary="Prometheus metrics endpoint",
    description="Exposes Prometheus metrics for monitoring and alerting",
    include_in_schema=False,  # Hide from OpenAPI docs
)
def metrics():
    """Expose Prometheus metrics.

    Returns:
        Response: Metrics in Prometheus text format
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


@router.get(
    "/health",
    summary="Health check endpoint",
    description="Returns health status of system components (catalog, extractors)",
    status_code=200,
)
def health_check(
    catalog: CatalogPort = Depends(get_catalog),
    registry: ExtractorRegistry = Depends(get_extractor_registry),
):
    """Check health of all system components.

    Returns 200 OK if all components are healthy or degraded, 503 if any
    are unhealthy.

    Returns:
        dict: Health status of each component and overall status
    """
    components = {
        "catalog": check_catalog_health(catalog),
        "extractors": check_extractors_health(registry),
    }

    overall_status = get_overall_health(components)

    response_data = {
        "status": overall_status.value,
        "components": {
            name: {
                "status": comp.status.value,
                "message": comp.message,
                "latency_ms": comp.latency_ms,
            }
            for name, comp in components.items()
        }
    }

    # Return 503 if unhealthy
    status_code = 200 if overall_status != HealthStatus.UNHEALTHY else 503
    if status_code != 200:
        logger.warning(f"Health check failed: {overall_status.value}")

    return JSONResponse(
        content=response_data,
        status_code=status_code
    )
