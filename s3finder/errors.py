"""
Error taxonomy for key searches.

  . ConfigurationError  bad patterns, limits or credentials. Raised before any network call.
  . AccessError         the up-front bucket probe failed.
  . ListingError        a listing page could not be fetched or was malformed.
  . KeyReadError        one key could not be read, fetched or decoded.

Whether a ListingError or KeyReadError aborts the search depends on the
request's ErrorPolicy for that site. Everything else is always fatal.
"""

from typing import Optional


class SearchError(Exception):
    """Base class for every error raised by s3finder."""


class ConfigurationError(SearchError):
    pass


class PatternError(ConfigurationError):
    """A key or content regex failed to compile."""

    def __init__(self, pattern: str, role: str, reason: str):
        self.pattern = pattern
        self.role = role
        self.reason = reason
        super().__init__(f"Invalid {role} regex {pattern!r}: {reason}")


class AccessError(SearchError):
    def __init__(self, bucket: str, endpoint: Optional[str], cause: Exception):
        self.bucket = bucket
        self.endpoint = endpoint
        self.cause = cause
        super().__init__(
            f"Unable to access bucket {bucket} at endpoint {endpoint or 'default'}. Error: {cause}"
        )


class ListingError(SearchError):
    pass


class KeyReadError(SearchError):
    def __init__(self, message: str, key: Optional[str] = None):
        self.key = key
        super().__init__(message)


class MissingKeyError(KeyReadError):
    """A listing entry carried no usable object key."""


class ObjectReadError(KeyReadError):
    """The object body could not be retrieved."""


class ObjectDecodeError(KeyReadError):
    """The object body is not valid UTF-8 text."""
