"""Utility functions for the S3 object store client."""

from .errors import sanitize_error_message, sanitize_exception
from .names import validate_bucket_name, validate_object_key

__all__ = [
    "sanitize_error_message",
    "sanitize_exception",
    "validate_bucket_name",
    "validate_object_key",
]
