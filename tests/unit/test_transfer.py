"""Unit tests that drive object transfers through the real botocore client.

Responses are queued with ``botocore.stub.Stubber``, so requests are built,
validated and parsed by botocore and downloads run through the s3transfer
manager without any network access.
"""

from __future__ import annotations

import io
from datetime import datetime, timezone
from pathlib import Path

import pytest
from botocore.response import StreamingBody
from botocore.stub import Stubber

from s3_object_store.services.aws.client import ObjectStoreClient

PAYLOAD = bytes(range(256)) * 4


@pytest.fixture
def store() -> ObjectStoreClient:
    """Create a client whose boto3 client is real but never sends requests."""
    return ObjectStoreClient("http://localhost:9000", "test-access-key", "test-secret-key")


def _queue_download(stubber: Stubber, bucket: str, key: str, data: bytes) -> None:
    stubber.add_response(
        "head_object",
        {"ContentLength": len(data), "ETag": '"0123abcd"'},
        {"Bucket": bucket, "Key": key},
    )
    stubber.add_response(
        "get_object",
        {"Body": StreamingBody(io.BytesIO(data), len(data)), "ContentLength": len(data), "ETag": '"0123abcd"'},
    )


class TestDownloadContent:
    """Test that downloads write exactly the stored bytes."""

    def test_download_is_byte_identical(self, store: ObjectStoreClient, tmp_path: Path) -> None:
        """Test that binary content arrives unchanged."""
        dest = tmp_path / "out.bin"

        with Stubber(store.client) as stubber:
            _queue_download(stubber, "t1", "blob.bin", PAYLOAD)
            store.download_file("t1", "blob.bin", str(dest))
            stubber.assert_no_pending_responses()

        assert dest.read_bytes() == PAYLOAD

    def test_download_truncates_longer_file(self, store: ObjectStoreClient, tmp_path: Path) -> None:
        """Test that a shorter object replaces a longer existing file."""
        dest = tmp_path / "out.txt"
        dest.write_bytes(b"stale content that is much longer than the object")

        with Stubber(store.client) as stubber:
            _queue_download(stubber, "t1", "hello.txt", b"hi")
            store.download_file("t1", "hello.txt", str(dest))

        assert dest.read_bytes() == b"hi"

    def test_download_overwrites_previous_download(self, store: ObjectStoreClient, tmp_path: Path) -> None:
        """Test that downloading twice leaves only the second object's bytes."""
        dest = tmp_path / "out.bin"

        with Stubber(store.client) as stubber:
            _queue_download(stubber, "t1", "v1.bin", PAYLOAD)
            _queue_download(stubber, "t1", "v2.bin", PAYLOAD[:10][::-1])
            store.download_file("t1", "v1.bin", str(dest))
            store.download_file("t1", "v2.bin", str(dest))
            stubber.assert_no_pending_responses()

        assert dest.read_bytes() == PAYLOAD[:10][::-1]


class TestDeleteThenList:
    """Test that a deleted key disappears from listings."""

    def test_deleted_key_not_listed(self, store: ObjectStoreClient) -> None:
        """Test listing before and after deleting a key."""
        modified = datetime(2024, 1, 1, tzinfo=timezone.utc)
        listing = {"Bucket": "t1", "Prefix": "", "Delimiter": "/"}

        with Stubber(store.client) as stubber:
            stubber.add_response(
                "list_objects_v2",
                {
                    "Name": "t1",
                    "KeyCount": 2,
                    "IsTruncated": False,
                    "Contents": [
                        {"Key": "hello.txt", "Size": 2, "ETag": '"abc"', "LastModified": modified},
                        {"Key": "keep.txt", "Size": 4, "ETag": '"def"', "LastModified": modified},
                    ],
                },
                listing,
            )
            stubber.add_response("delete_object", {}, {"Bucket": "t1", "Key": "hello.txt"})
            stubber.add_response(
                "list_objects_v2",
                {
                    "Name": "t1",
                    "KeyCount": 1,
                    "IsTruncated": False,
                    "Contents": [{"Key": "keep.txt", "Size": 4, "ETag": '"def"', "LastModified": modified}],
                },
                listing,
            )

            before = store.list_objects("t1")
            store.delete_object("t1", "hello.txt")
            after = store.list_objects("t1")
            stubber.assert_no_pending_responses()

        assert [entry.key for entry in before] == ["hello.txt", "keep.txt"]
        assert [entry.key for entry in after] == ["keep.txt"]

    def test_empty_listing_after_last_delete(self, store: ObjectStoreClient) -> None:
        """Test that deleting the only key leaves an empty listing."""
        with Stubber(store.client) as stubber:
            stubber.add_response("delete_object", {}, {"Bucket": "t1", "Key": "hello.txt"})
            stubber.add_response(
                "list_objects_v2",
                {"Name": "t1", "KeyCount": 0, "IsTruncated": False},
                {"Bucket": "t1", "Prefix": "", "Delimiter": "/"},
            )

            store.delete_object("t1", "hello.txt")
            assert store.list_objects("t1") == []
