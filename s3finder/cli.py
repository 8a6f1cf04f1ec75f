"""
Command-line front end.

Usage examples.
  s3finder --bucket my-bucket --prefix logs/ --key-regex '\\.log$'
  s3finder -b my-bucket -e http://localhost:9000 -k '\\.json$' -c 'AKIA[0-9A-Z]{16}' --max-hits 10

Matching keys go to stdout one per line. Progress and diagnostics go to stderr.
"""

import argparse
import sys

from . import config
from .errors import ConfigurationError, SearchError
from .models import SearchRequest
from .s3 import build_s3_client, probe_bucket_access
from .search import find_keys
from .utils import log, require_env

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2


def parse_args(argv=None):
    ap = argparse.ArgumentParser(
        prog="s3finder",
        description="Search an S3 bucket for keys whose name and/or content match a regex.",
    )
    ap.add_argument("-b", "--bucket", type=str, required=True, help="S3 bucket to search.")
    ap.add_argument("-p", "--prefix", type=str, default=None, help="Only list keys under this prefix.")
    ap.add_argument("-k", "--key-regex", type=str, default=None, help="Regex the key name must match.")
    ap.add_argument("-c", "--content-regex", type=str, default=None, help="Regex the object content must match.")
    ap.add_argument("--max-keys", type=int, default=None, help="Stop after scanning this many keys.")
    ap.add_argument("--max-hits", type=int, default=None, help="Stop after finding this many matches.")
    ap.add_argument("--log-interval", type=int, default=config.DEFAULT_LOG_INTERVAL_ENV, help="Log progress every N scanned keys.")
    ap.add_argument("--log-hits", action="store_true", help="Log every match as it is found.")
    ap.add_argument("--tolerate-response-error", action="store_true", help="Skip malformed listing pages instead of failing.")
    ap.add_argument("--tolerate-key-error", action="store_true", help="Skip unreadable keys or objects instead of failing.")
    ap.add_argument("-e", "--endpoint", type=str, default=config.S3_ENDPOINT_URL, help="S3 endpoint URL (for MinIO, Ceph, ...).")
    ap.add_argument("--region", type=str, default=config.AWS_REGION, help="AWS region.")
    ap.add_argument("--page-size", type=int, default=config.DEFAULT_PAGE_SIZE, help="Keys requested per listing call.")
    ap.add_argument(
        "--access-key-id-env-param",
        type=str,
        default=config.ACCESS_KEY_ID_ENV,
        help="Environment variable containing the S3 access key ID.",
    )
    ap.add_argument(
        "--secret-access-key-env-param",
        type=str,
        default=config.SECRET_ACCESS_KEY_ENV,
        help="Environment variable containing the S3 secret access key.",
    )
    return ap.parse_args(argv)


def run(args) -> int:
    try:
        access_key_id = require_env(args.access_key_id_env_param, "Access Key ID")
        secret_access_key = require_env(args.secret_access_key_env_param, "Secret Access Key")
        if args.page_size is not None and args.page_size <= 0:
            raise ConfigurationError(f"page_size must be > 0, got {args.page_size}.")

        request = SearchRequest.create(
            bucket=args.bucket,
            prefix=args.prefix,
            key_regex=args.key_regex,
            content_regex=args.content_regex,
            max_keys=args.max_keys,
            max_hits=args.max_hits,
            log_interval=args.log_interval,
            log_hits=args.log_hits,
            tolerate_response_error=args.tolerate_response_error,
            tolerate_key_error=args.tolerate_key_error,
        )
        s3 = build_s3_client(
            region=args.region,
            endpoint=args.endpoint,
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
        )
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG

    try:
        probe_bucket_access(s3, request.bucket, args.endpoint)
        log(f"Starting search of s3://{request.bucket}/{request.prefix or ''}")
        keys = find_keys(s3, request, page_size=args.page_size)
    except SearchError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    for key in keys:
        print(key)
    return EXIT_OK


def main(argv=None):
    sys.exit(run(parse_args(argv)))


if __name__ == "__main__":
    main()
