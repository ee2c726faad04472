"""Prometheus metrics for the BOQ matching service.

Defines and exposes operational metrics for monitoring and alerting.
"""

from prometheus_client import Counter, Histogram, Gauge

# Matching metrics
boq_items_matched_total = Counter(
    "furnili_boq_items_matched_total",
    "BOQ line items processed by auto-match",
    ["outcome"]  # outcome: matched|unmatched
)

matching_duration_seconds = Histogram(
    "furnili_matching_duration_seconds",
    "Time spent matching BOQ items against the catalog in seconds",
    ["operation"],  # operation: find_matches|auto_match
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0]
)

# Extraction metrics
boq_documents_extracted_total = Counter(
    "furnili_boq_documents_extracted_total",
    "BOQ documents run through an extractor",
    ["source", "status"]  # source: excel|pdf|text, status: success|error
)

# Catalog metrics
catalog_products = Gauge(
    "furnili_catalog_products",
    "Products currently loaded in the matching catalog"
)
