"""Base object store interface."""

from __future__ import annotations

from typing import Iterator, Protocol

from ..aws.models import ObjectEntry


class ObjectStore(Protocol):
    """Protocol defining object store operations."""

    def list_buckets(self) -> list[str]:
        """List all buckets visible to the credentials."""
        ...

    def create_bucket(self, name: str) -> None:
        """Create a bucket; succeeds silently if the caller already owns it."""
        ...

    def delete_bucket(self, name: str) -> int:
        """Delete a bucket after removing every object in it.

        Returns:
            Number of objects removed before the bucket itself
        """
        ...

    def bucket_exists(self, name: str) -> bool:
        """Check if a bucket exists."""
        ...

    def upload_file(
        self, bucket: str, key: str, source_path: str, content_type: str | None = None
    ) -> int:
        """Stream a local file to an object, overwriting it. Returns bytes sent."""
        ...

    def download_file(self, bucket: str, key: str, dest_path: str) -> str:
        """Stream an object into a local file, truncating it."""
        ...

    def iter_objects(
        self, bucket: str, recursive: bool = False, prefix: str = ""
    ) -> Iterator[ObjectEntry]:
        """Yield listing entries page by page."""
        ...

    def list_objects(
        self, bucket: str, recursive: bool = False, prefix: str = ""
    ) -> list[ObjectEntry]:
        """List objects, one '/'-delimited level unless recursive."""
        ...

    def stat_object(self, bucket: str, key: str) -> ObjectEntry:
        """Fetch metadata of one object."""
        ...

    def object_exists(self, bucket: str, key: str) -> bool:
        """Check if an object exists."""
        ...

    def delete_object(self, bucket: str, key: str) -> None:
        """Delete one object; absent keys are not an error."""
        ...

    def rename_object(self, bucket: str, old_key: str, new_key: str) -> None:
        """Copy an object to a new key, then delete the old key. Not atomic."""
        ...

    def generate_presigned_url(self, bucket: str, key: str, expiry_seconds: int = 3600) -> str:
        """Return a time-limited GET URL for one object."""
        ...
