"""Constants for the S3 object store client."""

# Environment variables
ENV_ENDPOINT = "S3_ENDPOINT"
ENV_ACCESS_KEY = "S3_ACCESS_KEY"
ENV_SECRET_KEY = "S3_SECRET_KEY"
ENV_REGION = "S3_REGION"
ENV_SECURE = "S3_SECURE"
ENV_PATH_STYLE = "S3_PATH_STYLE"
ENV_SESSION_TOKEN = "S3_SESSION_TOKEN"
ENV_OTLP_ENDPOINT = "OTEL_EXPORTER_OTLP_ENDPOINT"

# Defaults
DEFAULT_REGION = "us-east-1"
DEFAULT_PRESIGN_EXPIRY_SECONDS = 3600
DEFAULT_CONTENT_TYPE = "application/octet-stream"

# S3 limits
MAX_PRESIGN_EXPIRY_SECONDS = 7 * 24 * 3600
MAX_DELETE_BATCH = 1000
MAX_KEY_BYTES = 1024
DELIMITER = "/"

# Provider error codes
ERR_BUCKET_OWNED_BY_YOU = "BucketAlreadyOwnedByYou"
NOT_FOUND_CODES = frozenset({"NoSuchBucket", "NoSuchKey", "NotFound", "404"})
ALREADY_EXISTS_CODES = frozenset({"BucketAlreadyExists"})
PERMISSION_CODES = frozenset(
    {"AccessDenied", "InvalidAccessKeyId", "SignatureDoesNotMatch", "AllAccessDisabled", "403"}
)
INVALID_ARGUMENT_CODES = frozenset(
    {"InvalidArgument", "InvalidBucketName", "KeyTooLongError", "InvalidRequest", "400"}
)

# Metric labels
RESULT_SUCCESS = "success"
RESULT_FAILED = "failed"
