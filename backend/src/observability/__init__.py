"""Observability module for Furnili BOQ.

Provides structured logging, metrics, request IDs and health checks.
"""

from .logging_config import configure_logging, get_logger
from .metrics import (
    boq_items_matched_total,
    matching_duration_seconds,
    boq_documents_extracted_total,
    catalog_products,
)
from .request_id import REQUEST_ID_HEADER, request_id_var, get_request_id, bind_request_id
from .health import HealthStatus, ComponentHealth
from .middleware import RequestIDMiddleware

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Metrics
    "boq_items_matched_total",
    "matching_duration_seconds",
    "boq_documents_extracted_total",
    "catalog_products",
    # Request ID
    "REQUEST_ID_HEADER",
    "request_id_var",
    "get_request_id",
    "bind_request_id",
    # Health
    "HealthStatus",
    "ComponentHealth",
    # Middleware
    "RequestIDMiddleware",
]
