"""Command line front-end for the object store client."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Callable, Sequence

from .config import ConnectionConfig, parse_bool
from .constants import (
    DEFAULT_PRESIGN_EXPIRY_SECONDS,
    DEFAULT_REGION,
    ENV_ACCESS_KEY,
    ENV_ENDPOINT,
    ENV_OTLP_ENDPOINT,
    ENV_PATH_STYLE,
    ENV_REGION,
    ENV_SECRET_KEY,
    ENV_SECURE,
    ENV_SESSION_TOKEN,
)
from .errors import InvalidArgumentError, ObjectStoreError
from .logging import setup_structured_logging
from .services.aws.client import ObjectStoreClient
from .services.s3.base import ObjectStore
from .tracing import initialize_tracing
from .utils.errors import sanitize_exception

logger = logging.getLogger(__name__)


def _cmd_buckets(store: ObjectStore, args: argparse.Namespace) -> None:
    for name in store.list_buckets():
        print(name)


def _cmd_mb(store: ObjectStore, args: argparse.Namespace) -> None:
    store.create_bucket(args.bucket)
    print(f"Bucket created: {args.bucket}")


def _cmd_rb(store: ObjectStore, args: argparse.Namespace) -> None:
    removed = store.delete_bucket(args.bucket)
    print(f"Bucket removed: {args.bucket} ({removed} objects deleted)")


def _cmd_ls(store: ObjectStore, args: argparse.Namespace) -> None:
    for entry in store.iter_objects(args.bucket, recursive=args.recursive, prefix=args.prefix):
        if entry.is_prefix:
            print(f"{'PRE':>12}  {entry.key}")
        else:
            print(f"{entry.size:>12}  {entry.key}")


def _cmd_put(store: ObjectStore, args: argparse.Namespace) -> None:
    size = store.upload_file(args.bucket, args.key, args.file, content_type=args.content_type)
    print(f"Uploaded {args.file} -> {args.bucket}/{args.key} ({size} bytes)")


def _cmd_get(store: ObjectStore, args: argparse.Namespace) -> None:
    path = store.download_file(args.bucket, args.key, args.file)
    print(f"Downloaded {args.bucket}/{args.key} -> {path}")


def _cmd_stat(store: ObjectStore, args: argparse.Namespace) -> None:
    entry = store.stat_object(args.bucket, args.key)
    print(f"Key:           {entry.key}")
    print(f"Size:          {entry.size}")
    print(f"ETag:          {entry.etag}")
    print(f"Content-Type:  {entry.content_type}")
    print(f"Last-Modified: {entry.last_modified}")


def _cmd_rm(store: ObjectStore, args: argparse.Namespace) -> None:
    store.delete_object(args.bucket, args.key)
    print(f"Removed {args.bucket}/{args.key}")


def _cmd_mv(store: ObjectStore, args: argparse.Namespace) -> None:
    store.rename_object(args.bucket, args.old_key, args.new_key)
    print(f"Renamed {args.bucket}/{args.old_key} -> {args.bucket}/{args.new_key}")


def _cmd_share(store: ObjectStore, args: argparse.Namespace) -> None:
    print(store.generate_presigned_url(args.bucket, args.key, args.expire))


COMMANDS: dict[str, Callable[[ObjectStore, argparse.Namespace], None]] = {
    "buckets": _cmd_buckets,
    "mb": _cmd_mb,
    "rb": _cmd_rb,
    "ls": _cmd_ls,
    "put": _cmd_put,
    "get": _cmd_get,
    "stat": _cmd_stat,
    "rm": _cmd_rm,
    "mv": _cmd_mv,
    "share": _cmd_share,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="s3-object-store",
        description="Bucket and object operations against an S3-compatible endpoint",
    )
    parser.add_argument("--endpoint", default=os.getenv(ENV_ENDPOINT), help="Endpoint URL or host:port")
    parser.add_argument("--access-key", default=os.getenv(ENV_ACCESS_KEY))
    parser.add_argument("--secret-key", default=os.getenv(ENV_SECRET_KEY))
    parser.add_argument("--session-token", default=os.getenv(ENV_SESSION_TOKEN), help="Temporary credentials token")
    parser.add_argument("--region", default=os.getenv(ENV_REGION) or DEFAULT_REGION)
    parser.add_argument(
        "--secure",
        action="store_true",
        default=parse_bool(os.getenv(ENV_SECURE), False),
        help="Use HTTPS when the endpoint has no scheme",
    )
    parser.add_argument(
        "--virtual-host",
        dest="path_style",
        action="store_false",
        default=parse_bool(os.getenv(ENV_PATH_STYLE), True),
        help="Use virtual-host addressing instead of path-style",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every request")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("buckets", help="List buckets")

    for name, help_text in (("mb", "Create a bucket"), ("rb", "Remove a bucket and all its objects")):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("bucket")

    ls = sub.add_parser("ls", help="List objects")
    ls.add_argument("bucket")
    ls.add_argument("--prefix", default="")
    ls.add_argument("-r", "--recursive", action="store_true")

    put = sub.add_parser("put", help="Upload a local file")
    put.add_argument("bucket")
    put.add_argument("key")
    put.add_argument("file")
    put.add_argument("--content-type")

    get = sub.add_parser("get", help="Download an object to a local file")
    get.add_argument("bucket")
    get.add_argument("key")
    get.add_argument("file")

    for name, help_text in (("stat", "Show object metadata"), ("rm", "Remove an object")):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("bucket")
        cmd.add_argument("key")

    mv = sub.add_parser("mv", help="Rename an object (copy then delete)")
    mv.add_argument("bucket")
    mv.add_argument("old_key")
    mv.add_argument("new_key")

    share = sub.add_parser("share", help="Print a presigned download URL")
    share.add_argument("bucket")
    share.add_argument("key")
    share.add_argument("--expire", type=int, default=DEFAULT_PRESIGN_EXPIRY_SECONDS, help="Seconds")

    return parser


def config_from_args(args: argparse.Namespace) -> ConnectionConfig:
    missing = [
        flag
        for flag, value in (("--endpoint", args.endpoint), ("--access-key", args.access_key), ("--secret-key", args.secret_key))
        if not value
    ]
    if missing:
        raise InvalidArgumentError(f"Missing connection settings: {', '.join(missing)}")
    return ConnectionConfig(
        endpoint=args.endpoint,
        access_key=args.access_key,
        secret_key=args.secret_key,
        region=args.region,
        secure=args.secure,
        path_style=args.path_style,
        session_token=args.session_token or None,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_structured_logging(logging.INFO if args.verbose else logging.WARNING)

    # Export spans only when a collector is configured
    if os.getenv(ENV_OTLP_ENDPOINT):
        initialize_tracing()

    try:
        store = ObjectStoreClient.from_config(config_from_args(args))
        COMMANDS[args.command](store, args)
    except ObjectStoreError as e:
        print(f"error: {sanitize_exception(e)}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - manual entry point
    sys.exit(main())
