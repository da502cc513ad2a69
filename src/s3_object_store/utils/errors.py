"""Error message sanitization so credentials never reach logs."""

from __future__ import annotations

import re

# Patterns whose captured value is replaced
SENSITIVE_PATTERNS = [
    r"(X-Amz-Signature=)([0-9a-fA-F]+)",
    r"(X-Amz-Credential=)([^&\s]+)",
    r"(X-Amz-Security-Token=)([^&\s]+)",
    r"(access[_\s]?key(?:[_\s]?id)?\s*[=:]\s*)([^\s,;\)]+)",
    r"(secret[_\s]?(?:access[_\s]?)?key\s*[=:]\s*)([^\s,;\)]+)",
    r"(session[_\s]?token\s*[=:]\s*)([^\s,;\)]+)",
    r"(password\s*[=:]\s*)([^\s,;\)]+)",
]

REDACTED = "[REDACTED]"


def sanitize_error_message(message: str) -> str:
    """Redact signatures, credentials and tokens from an error message.

    Args:
        message: Original error message

    Returns:
        Message with sensitive values replaced by ``[REDACTED]``
    """
    sanitized = message
    for pattern in SENSITIVE_PATTERNS:
        sanitized = re.sub(pattern, rf"\1{REDACTED}", sanitized, flags=re.IGNORECASE)
    return sanitized


def sanitize_exception(error: BaseException) -> str:
    """Sanitized string form of an exception."""
    return sanitize_error_message(str(error))
