"""Error taxonomy for object store operations."""

from __future__ import annotations

from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectionClosedError,
    ConnectTimeoutError,
    EndpointConnectionError,
    ParamValidationError,
    ReadTimeoutError,
)

from .constants import (
    ALREADY_EXISTS_CODES,
    INVALID_ARGUMENT_CODES,
    NOT_FOUND_CODES,
    PERMISSION_CODES,
)


class ObjectStoreError(Exception):
    """Base error for all object store failures."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class NotFoundError(ObjectStoreError):
    """Referenced bucket, object or local file does not exist."""


class AlreadyExistsError(ObjectStoreError):
    """Bucket name is taken by another owner."""


class InvalidArgumentError(ObjectStoreError, ValueError):
    """Caller supplied an argument the store cannot accept."""


class TransportError(ObjectStoreError):
    """Endpoint could not be reached."""


class PermissionDeniedError(ObjectStoreError):
    """Credentials or signature were rejected."""


_TRANSPORT_ERRORS = (
    EndpointConnectionError,
    ConnectTimeoutError,
    ReadTimeoutError,
    ConnectionClosedError,
)


def error_code(error: ClientError) -> str:
    """Return the provider error code carried by a ClientError."""
    return str(error.response.get("Error", {}).get("Code", ""))


def error_for_code(code: str, message: str) -> ObjectStoreError:
    """Build the taxonomy error matching a provider error code."""
    if code in NOT_FOUND_CODES:
        return NotFoundError(message, code)
    if code in ALREADY_EXISTS_CODES:
        return AlreadyExistsError(message, code)
    if code in PERMISSION_CODES:
        return PermissionDeniedError(message, code)
    if code in INVALID_ARGUMENT_CODES:
        return InvalidArgumentError(message, code)
    return ObjectStoreError(message, code)


def _unwrap(error: BaseException) -> BaseException:
    # boto3 transfer errors (S3UploadFailedError) raise inside the handler of
    # the underlying ClientError, so the real cause sits on __context__.
    seen = 0
    while not isinstance(error, (ClientError, BotoCoreError)) and seen < 5:
        inner = error.__cause__ or error.__context__
        if inner is None:
            break
        error = inner
        seen += 1
    return error


def translate_error(error: BaseException, context: str = "") -> ObjectStoreError:
    """Map an SDK exception onto the object store error taxonomy.

    Args:
        error: Exception raised by boto3/botocore
        context: Short description of the failed operation, used as message prefix

    Returns:
        Translated error; the caller raises it chained to the original
    """
    if isinstance(error, ObjectStoreError):
        return error

    cause = _unwrap(error)
    prefix = f"{context}: " if context else ""

    if isinstance(cause, ClientError):
        return error_for_code(error_code(cause), f"{prefix}{cause}")

    if isinstance(cause, ParamValidationError):
        return InvalidArgumentError(f"{prefix}{cause}")

    if isinstance(cause, _TRANSPORT_ERRORS):
        return TransportError(f"{prefix}{cause}")

    return ObjectStoreError(f"{prefix}{error}")
