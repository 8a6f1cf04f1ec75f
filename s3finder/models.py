from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Pattern

from .errors import ConfigurationError
from .patterns import compile_patterns

DEFAULT_LOG_INTERVAL = 1000


class ErrorPolicy(Enum):
    """What to do when an error occurs at one site (a listing page or a single key)."""

    ABORT = "abort"
    SKIP_AND_CONTINUE = "skip"

    @classmethod
    def from_flag(cls, tolerate: bool) -> "ErrorPolicy":
        return cls.SKIP_AND_CONTINUE if tolerate else cls.ABORT

    @property
    def tolerates(self) -> bool:
        return self is ErrorPolicy.SKIP_AND_CONTINUE


@dataclass(frozen=True)
class SearchRequest:
    bucket: str
    prefix: Optional[str] = None
    key_pattern: Optional[Pattern[str]] = None
    content_pattern: Optional[Pattern[str]] = None
    max_keys: Optional[int] = None
    max_hits: Optional[int] = None
    log_interval: int = DEFAULT_LOG_INTERVAL
    log_hits: bool = False
    on_listing_error: ErrorPolicy = ErrorPolicy.ABORT
    on_key_error: ErrorPolicy = ErrorPolicy.ABORT

    @classmethod
    def create(
        cls,
        bucket: str,
        prefix: Optional[str] = None,
        key_regex: Optional[str] = None,
        content_regex: Optional[str] = None,
        max_keys: Optional[int] = None,
        max_hits: Optional[int] = None,
        log_interval: int = DEFAULT_LOG_INTERVAL,
        log_hits: bool = False,
        tolerate_response_error: bool = False,
        tolerate_key_error: bool = False,
    ) -> "SearchRequest":
        """
        Validate raw options and compile both regexes.

        Raises ConfigurationError (PatternError for bad regexes) before
        anything touches the network.
        """
        if not bucket:
            raise ConfigurationError("A bucket name is required.")
        for name, value in (("max_keys", max_keys), ("max_hits", max_hits)):
            if value is not None and value < 0:
                raise ConfigurationError(f"{name} must be >= 0, got {value}.")
        if log_interval <= 0:
            raise ConfigurationError(f"log_interval must be > 0, got {log_interval}.")

        key_pattern, content_pattern = compile_patterns(key_regex, content_regex)
        return cls(
            bucket=bucket,
            prefix=prefix or None,
            key_pattern=key_pattern,
            content_pattern=content_pattern,
            max_keys=max_keys,
            max_hits=max_hits,
            log_interval=log_interval,
            log_hits=log_hits,
            on_listing_error=ErrorPolicy.from_flag(tolerate_response_error),
            on_key_error=ErrorPolicy.from_flag(tolerate_key_error),
        )


@dataclass
class Page:
    """
    One listing page.

    contents is None when the response was transported fine but its listing
    could not be read. next_token is only set on truncated pages.
    """

    contents: Optional[List[dict]]
    next_token: Optional[str] = None
    is_truncated: bool = False

    @property
    def is_malformed(self) -> bool:
        return self.contents is None

    @property
    def is_dead_end(self) -> bool:
        """Truncated, but with no token to fetch the next page."""
        return self.is_truncated and not self.next_token


@dataclass
class ScanState:
    keys_scanned: int = 0
    hits_found: int = 0

    def limit_reached(self, request: SearchRequest) -> Optional[str]:
        """Return a description of the limit that was hit, or None."""
        if request.max_keys is not None and self.keys_scanned >= request.max_keys:
            return f"Reached the max_keys limit of {request.max_keys} S3 keys."
        if request.max_hits is not None and self.hits_found >= request.max_hits:
            return f"Reached the max_hits limit of {request.max_hits} S3 keys."
        return None
