"""Models for S3 object store operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ObjectEntry:
    """One entry of an object listing.

    ``is_prefix`` marks a common prefix ("directory") returned by a
    delimited listing; those entries have no size, etag or timestamp.
    """

    key: str
    size: int = 0
    etag: str | None = None
    last_modified: datetime | None = None
    storage_class: str | None = None
    content_type: str | None = None
    is_prefix: bool = False

    @classmethod
    def from_listing(cls, item: dict[str, Any]) -> ObjectEntry:
        """Build an entry from a ``Contents`` item of ListObjectsV2."""
        return cls(
            key=item["Key"],
            size=item.get("Size", 0),
            etag=_strip_etag(item.get("ETag")),
            last_modified=item.get("LastModified"),
            storage_class=item.get("StorageClass"),
        )

    @classmethod
    def from_prefix(cls, item: dict[str, Any]) -> ObjectEntry:
        """Build an entry from a ``CommonPrefixes`` item of ListObjectsV2."""
        return cls(key=item["Prefix"], is_prefix=True)

    @classmethod
    def from_head(cls, key: str, response: dict[str, Any]) -> ObjectEntry:
        """Build an entry from a HeadObject response."""
        return cls(
            key=key,
            size=response.get("ContentLength", 0),
            etag=_strip_etag(response.get("ETag")),
            last_modified=response.get("LastModified"),
            storage_class=response.get("StorageClass"),
            content_type=response.get("ContentType"),
        )


def _strip_etag(etag: str | None) -> str | None:
    return etag.strip('"') if etag else etag
