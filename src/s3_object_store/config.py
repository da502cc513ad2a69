"""Connection configuration for the object store client."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

from .constants import (
    DEFAULT_REGION,
    ENV_ACCESS_KEY,
    ENV_ENDPOINT,
    ENV_PATH_STYLE,
    ENV_REGION,
    ENV_SECRET_KEY,
    ENV_SECURE,
    ENV_SESSION_TOKEN,
)
from .errors import InvalidArgumentError


def parse_bool(value: str | None, default: bool) -> bool:
    """Read an on/off environment value; unset or empty gives ``default``."""
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ConnectionConfig:
    """Immutable settings for one S3-compatible endpoint."""

    endpoint: str
    access_key: str
    secret_key: str = field(repr=False)
    region: str = DEFAULT_REGION
    secure: bool = False
    path_style: bool = True
    session_token: str | None = field(default=None, repr=False)

    @property
    def endpoint_url(self) -> str:
        """Endpoint as a full URL.

        An endpoint that already names its scheme is kept as-is; a bare
        ``host:port`` gets ``https://`` when ``secure`` is set, ``http://`` otherwise.
        """
        if self.endpoint.startswith(("http://", "https://")):
            return self.endpoint
        scheme = "https" if self.secure else "http"
        return f"{scheme}://{self.endpoint}"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ConnectionConfig:
        """Build a configuration from environment variables.

        Environment Variables:
            S3_ENDPOINT: Endpoint host or URL (required)
            S3_ACCESS_KEY: Access key ID (required)
            S3_SECRET_KEY: Secret access key (required)
            S3_REGION: Signing region (default: us-east-1)
            S3_SECURE: Use TLS for bare host endpoints (default: false)
            S3_PATH_STYLE: Force path-style addressing (default: true)
            S3_SESSION_TOKEN: Optional session token
        """
        env = os.environ if environ is None else environ

        missing = [name for name in (ENV_ENDPOINT, ENV_ACCESS_KEY, ENV_SECRET_KEY) if not env.get(name)]
        if missing:
            raise InvalidArgumentError(f"Missing required environment variables: {', '.join(missing)}")

        return cls(
            endpoint=env[ENV_ENDPOINT],
            access_key=env[ENV_ACCESS_KEY],
            secret_key=env[ENV_SECRET_KEY],
            region=env.get(ENV_REGION) or DEFAULT_REGION,
            secure=parse_bool(env.get(ENV_SECURE), False),
            path_style=parse_bool(env.get(ENV_PATH_STYLE), True),
            session_token=env.get(ENV_SESSION_TOKEN) or None,
        )
