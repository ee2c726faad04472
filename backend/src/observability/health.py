"""Health check utilities for Furnili BOQ.

Reports the state of the components the matching API depends on: the
product catalog and the document extractor registry.
"""

import time
from enum import Enum
from typing import Dict, Optional
from dataclasses import dataclass

from .logging_config import get_logger

logger = get_logger(__name__)


class HealthStatus(str, Enum):
    """Health check status enum."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


@dataclass
class ComponentHealth:
    """Health status for a single component."""
    status: HealthStatus
    message: Optional[str] = None
    latency_ms: Optional[float] = None


def check_catalog_health(catalog) -> ComponentHealth:
    """Check the product catalog can be read.

    An empty catalog is DEGRADED: the API works but nothing can be matched
    unless products are sent with each request.

    Args:
        catalog: CatalogPort implementation

    Returns:
        ComponentHealth: Catalog health status
    """
    try:
        start = time.perf_counter()
        count = len(catalog.list_products())
        latency_ms = (time.perf_counter() - start) * 1000
    except Exception as e:
        logger.error(f"Catalog health check failed: {e}", exc_info=True)
        return ComponentHealth(
            status=HealthStatus.UNHEALTHY,
            message=f"Catalog error: {str(e)}"
        )

    if count == 0:
        return ComponentHealth(
            status=HealthStatus.DEGRADED,
            message="Catalog is empty",
            latency_ms=round(latency_ms, 2)
        )

    return ComponentHealth(
        status=HealthStatus.HEALTHY,
        message=f"{count} products loaded",
        latency_ms=round(latency_ms, 2)
    )


def check_extractors_health(registry) -> ComponentHealth:
    """Check at least one BOQ extractor is registered.

    Args:
        registry: ExtractorRegistry

    Returns:
        ComponentHealth: Extractor registry health status
    """
    count = len(registry)
    if count == 0:
        return ComponentHealth(
            status=HealthStatus.UNHEALTHY,
            message="No extractors registered"
        )

    return ComponentHealth(
        status=HealthStatus.HEALTHY,
        message=f"{count} extractors registered"
    )


def get_overall_health(components: Dict[str, ComponentHealth]) -> HealthStatus:
    """Determine overall health from component statuses.

    Args:
        components: Dictionary of component health statuses

    Returns:
        HealthStatus: Overall system health
    """
    if all(c.status == HealthStatus.HEALTHY for c in components.values()):
        return HealthStatus.HEALTHY

    if any(c.status == HealthStatus.UNHEALTHY for c in components.values()):
        return HealthStatus.UNHEALTHY

    return HealthStatus.DEGRADED
