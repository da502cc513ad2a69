"""Thin client for bucket and object operations on S3-compatible storage.

Every client operation runs inside an OpenTelemetry span. Library callers
export them by calling ``s3_object_store.tracing.initialize_tracing()``
once at start-up; the ``s3-object-store`` command does so when
``OTEL_EXPORTER_OTLP_ENDPOINT`` is set.
"""

from .config import ConnectionConfig
from .errors import (
    AlreadyExistsError,
    InvalidArgumentError,
    NotFoundError,
    ObjectStoreError,
    PermissionDeniedError,
    TransportError,
)
from .services.aws.client import ObjectStoreClient
from .services.aws.models import ObjectEntry

__all__ = [
    "ObjectStoreClient",
    "ConnectionConfig",
    "ObjectEntry",
    "ObjectStoreError",
    "NotFoundError",
    "AlreadyExistsError",
    "InvalidArgumentError",
    "TransportError",
    "PermissionDeniedError",
]
