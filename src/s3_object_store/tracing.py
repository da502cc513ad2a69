"""OpenTelemetry tracing support for the S3 object store client."""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Any, Iterator

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Span, Tracer

logger = logging.getLogger(__name__)

INSTRUMENTATION_NAME = "s3_object_store"

# Global tracer instance, set by initialize_tracing
_tracer: Tracer | None = None


def initialize_tracing(service_name: str = "s3-object-store") -> None:
    """Initialize OpenTelemetry tracing with an OTLP exporter.

    Args:
        service_name: Name of the service for tracing

    Environment Variables:
        OTEL_EXPORTER_OTLP_ENDPOINT: OTLP endpoint URL (default: http://localhost:4317)
        OTEL_SERVICE_NAME: Service name (default: s3-object-store)
        OTEL_TRACES_ENABLED: Enable/disable tracing (default: true)
    """
    global _tracer

    if os.getenv("OTEL_TRACES_ENABLED", "true").lower() == "false":
        return

    try:
        service_name = os.getenv("OTEL_SERVICE_NAME", service_name)
        endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4317")

        resource = Resource.create({
            "service.name": service_name,
            "service.version": os.getenv("OTEL_SERVICE_VERSION", "unknown"),
        })

        provider = TracerProvider(resource=resource)
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))
        trace.set_tracer_provider(provider)

        _tracer = trace.get_tracer(INSTRUMENTATION_NAME)
    except Exception as e:
        # A broken exporter must not take the client down with it
        logger.warning(f"Failed to initialize tracing: {e}")


def get_tracer() -> Tracer:
    """Get the tracer, falling back to the globally registered provider."""
    return _tracer or trace.get_tracer(INSTRUMENTATION_NAME)


@contextmanager
def trace_span(name: str, attributes: dict[str, Any] | None = None) -> Iterator[Span]:
    """Context manager for creating a trace span.

    Exceptions raised inside the block are recorded on the span and re-raised.

    Args:
        name: Name of the span
        attributes: Additional span attributes

    Yields:
        The active span (a non-recording span when no provider is configured)
    """
    attrs = {k: v for k, v in (attributes or {}).items() if v is not None}
    with get_tracer().start_as_current_span(
        name, attributes=attrs, record_exception=False, set_status_on_exception=False
    ) as span:
        try:
            yield span
        except Exception as e:
            if span.is_recording():
                span.record_exception(e)
                span.set_status(trace.Status(trace.StatusCode.ERROR, str(e)))
            raise
