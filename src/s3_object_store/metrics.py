"""Prometheus metrics for the S3 object store client."""

from prometheus_client import Counter, Histogram

# Operation metrics
operations_total = Counter(
    "s3_object_store_operations_total",
    "Total number of object store operations",
    ["operation", "result"],
)

operation_duration_seconds = Histogram(
    "s3_object_store_operation_duration_seconds",
    "Duration of object store operations in seconds",
    ["operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

# Data metrics
objects_deleted_total = Counter(
    "s3_object_store_objects_deleted_total",
    "Total number of objects removed by recursive bucket deletion",
)

bytes_transferred_total = Counter(
    "s3_object_store_bytes_transferred_total",
    "Total number of bytes uploaded or downloaded",
    ["direction"],
)
