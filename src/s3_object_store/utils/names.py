"""Bucket name and object key validation.

Only structurally malformed names are rejected here. Provider-specific rules
(minimum length, lowercase-only) are left to the endpoint, since local and
self-hosted stores are more lenient than AWS.
"""

from __future__ import annotations

import re

from ..constants import MAX_KEY_BYTES
from ..errors import InvalidArgumentError

MAX_BUCKET_NAME_LENGTH = 63

_BUCKET_NAME_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9._\-]*[A-Za-z0-9])?$")


def validate_bucket_name(name: str) -> None:
    """Check that a bucket name is usable in a request path.

    Raises:
        InvalidArgumentError: If the name is empty, too long or contains
            characters outside letters, digits, '.', '_' and '-'
    """
    if not isinstance(name, str) or not name:
        raise InvalidArgumentError("Bucket name cannot be empty")
    if len(name) > MAX_BUCKET_NAME_LENGTH:
        raise InvalidArgumentError(f"Bucket name {name!r} exceeds {MAX_BUCKET_NAME_LENGTH} characters")
    if not _BUCKET_NAME_RE.match(name) or ".." in name:
        raise InvalidArgumentError(
            f"Invalid bucket name {name!r}: use letters, digits, '.', '_' or '-', "
            "starting and ending with a letter or digit"
        )


def validate_object_key(key: str) -> None:
    """Check that an object key is non-empty and within the S3 length limit.

    Raises:
        InvalidArgumentError: If the key is empty or too long
    """
    if not isinstance(key, str) or not key:
        raise InvalidArgumentError("Object key cannot be empty")
    if len(key.encode("utf-8")) > MAX_KEY_BYTES:
        raise InvalidArgumentError(f"Object key exceeds {MAX_KEY_BYTES} bytes")
