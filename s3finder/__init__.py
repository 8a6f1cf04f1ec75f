"""Find keys in an S3 bucket by key name and/or object content."""

from .errors import (
    AccessError,
    ConfigurationError,
    KeyReadError,
    ListingError,
    SearchError,
)
from .models import ErrorPolicy, Page, ScanState, SearchRequest
from .search import KeySearchEngine, find_keys

__version__ = "0.1.0"

__all__ = [
    "AccessError",
    "ConfigurationError",
    "ErrorPolicy",
    "KeyReadError",
    "KeySearchEngine",
    "ListingError",
    "Page",
    "ScanState",
    "SearchError",
    "SearchRequest",
    "find_keys",
]
