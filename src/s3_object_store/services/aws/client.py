"""S3-compatible object store client implementation."""

from __future__ import annotations

import logging
import mimetypes
import os
import time
from contextlib import contextmanager
from typing import Any, Iterator

import boto3
from boto3.exceptions import Boto3Error
from botocore.exceptions import BotoCoreError, ClientError

from ...config import ConnectionConfig
from ...constants import (
    DEFAULT_CONTENT_TYPE,
    DEFAULT_PRESIGN_EXPIRY_SECONDS,
    DEFAULT_REGION,
    DELIMITER,
    ERR_BUCKET_OWNED_BY_YOU,
    MAX_DELETE_BATCH,
    MAX_PRESIGN_EXPIRY_SECONDS,
    NOT_FOUND_CODES,
    RESULT_FAILED,
    RESULT_SUCCESS,
)
from ...errors import (
    InvalidArgumentError,
    NotFoundError,
    ObjectStoreError,
    error_code,
    error_for_code,
    translate_error,
)
from ... import metrics
from ...logging import log_operation_event
from ...tracing import trace_span
from ...utils.errors import sanitize_exception
from ...utils.names import validate_bucket_name, validate_object_key
from .models import ObjectEntry

logger = logging.getLogger(__name__)

_SDK_ERRORS = (ClientError, BotoCoreError, Boto3Error)


class ObjectStoreClient:
    """Object store client for AWS S3, MinIO and other S3-compatible endpoints.

    The client holds an immutable ``ConnectionConfig`` and one boto3 S3
    client. boto3 clients are thread-safe, so a single instance can serve
    concurrent callers.
    """

    def __init__(
        self,
        endpoint: str,
        access_key: str,
        secret_key: str,
        region: str = DEFAULT_REGION,
        secure: bool = False,
        path_style: bool = True,
        session_token: str | None = None,
    ) -> None:
        """Initialize the object store client.

        Args:
            endpoint: Endpoint URL (``http://localhost:9000``) or bare host (``localhost:9000``)
            access_key: Access key ID
            secret_key: Secret access key
            region: Signing region
            secure: Use HTTPS for a bare host endpoint
            path_style: Use path-style addressing
            session_token: Optional session token for temporary credentials

        Raises:
            InvalidArgumentError: If the endpoint cannot be used to build a client
        """
        self.config = ConnectionConfig(
            endpoint=endpoint,
            access_key=access_key,
            secret_key=secret_key,
            region=region,
            secure=secure,
            path_style=path_style,
            session_token=session_token,
        )
        self.endpoint = self.config.endpoint_url
        self.region = region
        self.path_style = path_style

        config = boto3.session.Config(
            signature_version="s3v4",
            s3={"addressing_style": "path" if path_style else "auto"},
        )

        try:
            self.client = boto3.client(
                "s3",
                endpoint_url=self.endpoint,
                region_name=region,
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_key,
                aws_session_token=session_token,
                config=config,
            )
        except ValueError as e:
            raise InvalidArgumentError(f"Invalid endpoint {endpoint!r}: {e}") from e

    @classmethod
    def from_config(cls, config: ConnectionConfig) -> ObjectStoreClient:
        """Create a client from a connection configuration."""
        return cls(
            endpoint=config.endpoint,
            access_key=config.access_key,
            secret_key=config.secret_key,
            region=config.region,
            secure=config.secure,
            path_style=config.path_style,
            session_token=config.session_token,
        )

    @contextmanager
    def _observe(self, operation: str, bucket: str | None = None, key: str | None = None) -> Iterator[None]:
        """Trace, time and count one operation, translating SDK errors."""
        start = time.time()
        with trace_span(f"s3.{operation}", attributes={"s3.bucket": bucket, "s3.key": key}):
            try:
                yield
            except ObjectStoreError:
                metrics.operations_total.labels(operation=operation, result=RESULT_FAILED).inc()
                raise
            except _SDK_ERRORS as e:
                metrics.operations_total.labels(operation=operation, result=RESULT_FAILED).inc()
                target = "/".join(part for part in (bucket, key) if part)
                logger.error(f"Failed to {operation} {target}: {sanitize_exception(e)}")
                raise translate_error(e, f"{operation} failed") from e
            else:
                metrics.operations_total.labels(operation=operation, result=RESULT_SUCCESS).inc()
            finally:
                metrics.operation_duration_seconds.labels(operation=operation).observe(time.time() - start)

    def list_buckets(self) -> list[str]:
        """List all buckets."""
        with self._observe("list_buckets"):
            response = self.client.list_buckets()
            return [bucket["Name"] for bucket in response.get("Buckets", [])]

    def create_bucket(self, name: str) -> None:
        """Create a bucket.

        Creating a bucket the caller already owns is not an error. A bucket
        name owned by someone else raises ``AlreadyExistsError``.
        """
        validate_bucket_name(name)
        create_params: dict[str, Any] = {"Bucket": name}
        if self.region and self.region != DEFAULT_REGION:
            create_params["CreateBucketConfiguration"] = {"LocationConstraint": self.region}

        with self._observe("create_bucket", name):
            try:
                self.client.create_bucket(**create_params)
            except ClientError as e:
                if error_code(e) != ERR_BUCKET_OWNED_BY_YOU:
                    raise
                logger.debug(f"Bucket {name} already exists and is owned by caller")
                return
            log_operation_event(logger, "create_bucket", name, RESULT_SUCCESS, "Created bucket")

    def bucket_exists(self, name: str) -> bool:
        """Check if bucket exists."""
        validate_bucket_name(name)
        with self._observe("bucket_exists", name):
            try:
                self.client.head_bucket(Bucket=name)
            except ClientError as e:
                if error_code(e) in NOT_FOUND_CODES:
                    return False
                raise
            return True

    def delete_bucket(self, name: str) -> int:
        """Delete a bucket together with every object in it.

        Objects are listed page by page and each page is removed with one
        batch request before the next page is fetched. The bucket itself is
        removed only once every page has been deleted. The first object that
        fails to delete aborts the sequence; objects in later pages and the
        bucket are left in place.

        Args:
            name: Bucket name

        Returns:
            Number of objects removed

        Raises:
            NotFoundError: If the bucket does not exist
        """
        validate_bucket_name(name)
        with self._observe("delete_bucket", name):
            removed = 0
            paginator = self.client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=name):
                keys = [{"Key": item["Key"]} for item in page.get("Contents", [])]
                for offset in range(0, len(keys), MAX_DELETE_BATCH):
                    removed += self._delete_batch(name, keys[offset:offset + MAX_DELETE_BATCH])

            self.client.delete_bucket(Bucket=name)
            log_operation_event(
                logger, "delete_bucket", name, RESULT_SUCCESS, "Deleted bucket", objects_removed=removed
            )
            return removed

    def _delete_batch(self, bucket: str, keys: list[dict[str, str]]) -> int:
        response = self.client.delete_objects(Bucket=bucket, Delete={"Objects": keys, "Quiet": True})
        errors = response.get("Errors", [])
        deleted = len(keys) - len(errors)
        metrics.objects_deleted_total.inc(deleted)
        if errors:
            first = errors[0]
            message = f"Failed to delete object {first.get('Key')} from bucket {bucket}: {first.get('Message', '')}"
            logger.error(f"{message} ({len(errors)} of {len(keys)} objects in batch failed)")
            raise error_for_code(first.get("Code", ""), message)
        logger.debug(f"Deleted {deleted} objects from bucket {bucket}")
        return deleted

    def upload_file(
        self, bucket: str, key: str, source_path: str, content_type: str | None = None
    ) -> int:
        """Upload a local file, overwriting any object at the key.

        Args:
            bucket: Bucket name
            key: Object key
            source_path: Path to local file
            content_type: MIME type (guessed from the file name if None)

        Returns:
            Number of bytes uploaded

        Raises:
            NotFoundError: If the source file or the bucket does not exist
        """
        validate_bucket_name(bucket)
        validate_object_key(key)
        with self._observe("upload_file", bucket, key):
            if not os.path.isfile(source_path):
                raise NotFoundError(f"Source file not found: {source_path}")

            size = os.path.getsize(source_path)
            if content_type is None:
                content_type = mimetypes.guess_type(source_path)[0] or DEFAULT_CONTENT_TYPE

            self.client.upload_file(source_path, bucket, key, ExtraArgs={"ContentType": content_type})
            metrics.bytes_transferred_total.labels(direction="upload").inc(size)
            log_operation_event(
                logger, "upload_file", bucket, RESULT_SUCCESS, "Uploaded file", key=key, source=source_path, size=size
            )
            return size

    def download_file(self, bucket: str, key: str, dest_path: str) -> str:
        """Download an object into a local file, replacing its content.

        Raises:
            NotFoundError: If the bucket, the object or the destination directory does not exist
            ObjectStoreError: If the destination cannot be written
        """
        validate_bucket_name(bucket)
        validate_object_key(key)
        with self._observe("download_file", bucket, key):
            try:
                self.client.download_file(bucket, key, dest_path)
                size = os.path.getsize(dest_path)
            except FileNotFoundError as e:
                raise NotFoundError(f"Destination directory not found: {dest_path}") from e
            except OSError as e:
                raise ObjectStoreError(f"Cannot write destination file {dest_path}: {e.strerror or e}") from e
            metrics.bytes_transferred_total.labels(direction="download").inc(size)
            log_operation_event(
                logger, "download_file", bucket, RESULT_SUCCESS, "Downloaded file", key=key, dest=dest_path, size=size
            )
            return dest_path

    def iter_objects(
        self, bucket: str, recursive: bool = False, prefix: str = ""
    ) -> Iterator[ObjectEntry]:
        """Yield listing entries lazily, one page at a time.

        The bucket name is checked when this is called; no request is sent
        until the first entry is consumed. Without ``recursive`` the listing
        stops at the next '/' and common prefixes are yielded as
        ``is_prefix`` entries after each page's objects.
        """
        validate_bucket_name(bucket)
        params: dict[str, Any] = {"Bucket": bucket, "Prefix": prefix}
        if not recursive:
            params["Delimiter"] = DELIMITER
        return self._iter_pages(bucket, params)

    def _iter_pages(self, bucket: str, params: dict[str, Any]) -> Iterator[ObjectEntry]:
        paginator = self.client.get_paginator("list_objects_v2")
        try:
            for page in paginator.paginate(**params):
                for item in page.get("Contents", []):
                    yield ObjectEntry.from_listing(item)
                for item in page.get("CommonPrefixes", []):
                    yield ObjectEntry.from_prefix(item)
        except _SDK_ERRORS as e:
            logger.error(f"Failed to list objects in bucket {bucket}: {sanitize_exception(e)}")
            raise translate_error(e, f"list objects in {bucket} failed") from e

    def list_objects(self, bucket: str, recursive: bool = False, prefix: str = "") -> list[ObjectEntry]:
        """List objects in a bucket."""
        with self._observe("list_objects", bucket):
            entries = list(self.iter_objects(bucket, recursive=recursive, prefix=prefix))
            logger.debug(f"Listed {len(entries)} entries in bucket {bucket} (recursive={recursive})")
            return entries

    def stat_object(self, bucket: str, key: str) -> ObjectEntry:
        """Get object metadata.

        Raises:
            NotFoundError: If the bucket or object does not exist
        """
        validate_bucket_name(bucket)
        validate_object_key(key)
        with self._observe("stat_object", bucket, key):
            response = self.client.head_object(Bucket=bucket, Key=key)
            return ObjectEntry.from_head(key, response)

    def object_exists(self, bucket: str, key: str) -> bool:
        """Check if an object exists."""
        try:
            self.stat_object(bucket, key)
        except NotFoundError:
            return False
        return True

    def delete_object(self, bucket: str, key: str) -> None:
        """Delete an object. Deleting a key that does not exist succeeds."""
        validate_bucket_name(bucket)
        validate_object_key(key)
        with self._observe("delete_object", bucket, key):
            self.client.delete_object(Bucket=bucket, Key=key)
            log_operation_event(logger, "delete_object", bucket, RESULT_SUCCESS, "Deleted object", key=key)

    def rename_object(self, bucket: str, old_key: str, new_key: str) -> None:
        """Rename an object by copying it and deleting the original.

        The two steps are separate requests. If the delete fails, both keys
        exist afterwards; nothing is rolled back.

        Raises:
            NotFoundError: If the source object does not exist
            InvalidArgumentError: If both keys are the same
        """
        validate_bucket_name(bucket)
        validate_object_key(old_key)
        validate_object_key(new_key)
        if old_key == new_key:
            raise InvalidArgumentError(f"Cannot rename {bucket}/{old_key} onto itself")

        with self._observe("rename_object", bucket, old_key):
            self.client.copy_object(
                Bucket=bucket,
                Key=new_key,
                CopySource={"Bucket": bucket, "Key": old_key},
            )
            try:
                self.client.delete_object(Bucket=bucket, Key=old_key)
            except ClientError:
                logger.warning(f"Copied {bucket}/{old_key} to {new_key} but could not delete the source")
                raise
            log_operation_event(
                logger, "rename_object", bucket, RESULT_SUCCESS, "Renamed object", key=old_key, new_key=new_key
            )

    def generate_presigned_url(
        self, bucket: str, key: str, expiry_seconds: int = DEFAULT_PRESIGN_EXPIRY_SECONDS
    ) -> str:
        """Generate a presigned GET URL.

        Args:
            bucket: Bucket name
            key: Object key
            expiry_seconds: Validity in seconds, from 1 up to 7 days

        Returns:
            URL carrying the SigV4 query signature and ``X-Amz-Expires``

        Raises:
            InvalidArgumentError: If the expiry is not a positive integer within 7 days
        """
        validate_bucket_name(bucket)
        validate_object_key(key)
        if isinstance(expiry_seconds, bool) or not isinstance(expiry_seconds, int):
            raise InvalidArgumentError(f"Expiry must be an integer number of seconds, got {expiry_seconds!r}")
        if expiry_seconds <= 0:
            raise InvalidArgumentError(f"Expiry must be positive, got {expiry_seconds}")
        if expiry_seconds > MAX_PRESIGN_EXPIRY_SECONDS:
            raise InvalidArgumentError(
                f"Expiry cannot exceed {MAX_PRESIGN_EXPIRY_SECONDS} seconds (7 days), got {expiry_seconds}"
            )

        with self._observe("generate_presigned_url", bucket, key):
            return self.client.generate_presigned_url(
                "get_object",
                Params={"Bucket": bucket, "Key": key},
                ExpiresIn=expiry_seconds,
            )
