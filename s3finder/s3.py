"""
S3 collaborators for the search engine.

  . build_s3_client      boto3 client for AWS or any S3-compatible endpoint.
  . S3PageFetcher        one list_objects_v2 call per Page.
  . iter_pages           lazy page-by-page walk over a listing.
  . S3ContentFetcher     full object body decoded as UTF-8.
  . probe_bucket_access  cheap "list at most 1 key" reachability check.
"""

from typing import Iterator, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from .errors import AccessError, ConfigurationError, ListingError, ObjectDecodeError, ObjectReadError
from .models import Page

# ---------------------------
# Client
# ---------------------------


def build_s3_client(
    region: Optional[str] = None,
    endpoint: Optional[str] = None,
    access_key_id: Optional[str] = None,
    secret_access_key: Optional[str] = None,
):
    session_kwargs = {}
    if region:
        session_kwargs["region_name"] = region
    if access_key_id and secret_access_key:
        session_kwargs["aws_access_key_id"] = access_key_id
        session_kwargs["aws_secret_access_key"] = secret_access_key
    session = boto3.session.Session(**session_kwargs)

    client_kwargs = {}
    config_kwargs = {"retries": {"max_attempts": 10, "mode": "standard"}}
    if endpoint:
        client_kwargs["endpoint_url"] = endpoint
        # MinIO, Ceph and friends generally want path-style addressing
        config_kwargs["s3"] = {"addressing_style": "path"}
    try:
        return session.client("s3", config=Config(**config_kwargs), **client_kwargs)
    except (ValueError, BotoCoreError) as e:
        raise ConfigurationError(f"Cannot build S3 client for endpoint {endpoint or 'default'}: {e}") from e


# ---------------------------
# Listing
# ---------------------------


class S3PageFetcher:
    def __init__(self, s3_client, page_size: Optional[int] = None):
        self.s3 = s3_client
        self.page_size = page_size

    def fetch(self, bucket: str, prefix: Optional[str], continuation_token: Optional[str]) -> Page:
        kwargs = {"Bucket": bucket}
        if prefix:
            kwargs["Prefix"] = prefix
        if continuation_token:
            kwargs["ContinuationToken"] = continuation_token
        if self.page_size:
            kwargs["MaxKeys"] = self.page_size

        try:
            resp = self.s3.list_objects_v2(**kwargs)
        except (ClientError, BotoCoreError) as e:
            raise ListingError(f"Failed to list s3://{bucket}/{prefix or ''}: {e}") from e

        return page_from_response(resp)


def page_from_response(resp: dict) -> Page:
    is_truncated = bool(resp.get("IsTruncated", False))
    next_token = resp.get("NextContinuationToken") if is_truncated else None

    contents = resp.get("Contents")
    if contents is None:
        # S3 omits Contents entirely for an empty listing; KeyCount tells the two apart
        if resp.get("KeyCount") == 0:
            contents = []
    elif not isinstance(contents, list):
        contents = None

    return Page(contents=contents, next_token=next_token, is_truncated=is_truncated)


def iter_pages(fetcher, bucket: str, prefix: Optional[str] = None) -> Iterator[Page]:
    """Yield pages in listing order until one comes back untruncated."""
    token: Optional[str] = None
    while True:
        page = fetcher.fetch(bucket, prefix, token)
        yield page
        if not (page.is_truncated and page.next_token):
            return
        token = page.next_token


# ---------------------------
# Object content
# ---------------------------


class S3ContentFetcher:
    def __init__(self, s3_client):
        self.s3 = s3_client

    def fetch_bytes(self, bucket: str, key: str) -> bytes:
        try:
            resp = self.s3.get_object(Bucket=bucket, Key=key)
            return resp["Body"].read()
        except (ClientError, BotoCoreError) as e:
            raise ObjectReadError(f"Failed to read s3://{bucket}/{key}: {e}", key=key) from e

    def fetch_text(self, bucket: str, key: str) -> str:
        data = self.fetch_bytes(bucket, key)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ObjectDecodeError(f"s3://{bucket}/{key} is not valid UTF-8: {e}", key=key) from e


# ---------------------------
# Access probe
# ---------------------------


def probe_bucket_access(s3_client, bucket: str, endpoint: Optional[str] = None) -> None:
    try:
        s3_client.list_objects_v2(Bucket=bucket, MaxKeys=1)
    except (ClientError, BotoCoreError) as e:
        raise AccessError(bucket, endpoint, e) from e
