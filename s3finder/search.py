"""
Key search over a paginated bucket listing.

Each listed key goes through two filter stages:
  1. the key regex, which is free to evaluate, and
  2. the content regex, which needs a full object download.

Stage 2 only runs for keys that passed stage 1. The scan stops as soon as
max_keys or max_hits is reached, even in the middle of a page.
"""

from typing import List, Optional

from .errors import ConfigurationError, KeyReadError, ListingError, MissingKeyError
from .models import Page, ScanState, SearchRequest
from .patterns import matches
from .s3 import S3ContentFetcher, S3PageFetcher, iter_pages
from .utils import log


class KeySearchEngine:
    def __init__(self, page_fetcher, content_fetcher=None):
        self.pages = page_fetcher
        self.contents = content_fetcher

    def search(self, request: SearchRequest) -> List[str]:
        """Return matching keys in the order they were listed."""
        if request.content_pattern is not None and self.contents is None:
            raise ConfigurationError("A content regex needs a content fetcher.")

        state = ScanState()
        keys: List[str] = []

        if self._stop(request, state):
            return keys

        for page in iter_pages(self.pages, request.bucket, request.prefix):
            if page.is_malformed:
                self._bad_page(request, page)
                continue
            if page.is_dead_end:
                self._bad_page(request, page)

            for item in page.contents:
                key = self._key_of(request, item)
                if key is None:
                    continue

                if self._is_hit(request, key):
                    keys.append(key)
                    state.hits_found += 1
                    if request.log_hits:
                        log(f"Hit {state.hits_found}: {key}")

                state.keys_scanned += 1
                if state.keys_scanned % request.log_interval == 0:
                    log(f"Scanned {state.keys_scanned:>7} S3 keys, found {state.hits_found:>4} hits.")

                if self._stop(request, state):
                    return keys

        self._summary(state)
        return keys

    # ----- helpers -----

    def _stop(self, request: SearchRequest, state: ScanState) -> bool:
        reason = state.limit_reached(request)
        if reason is None:
            return False
        log(reason)
        self._summary(state)
        return True

    def _summary(self, state: ScanState) -> None:
        log(f"Processed {state.keys_scanned} S3 keys, found {state.hits_found} hits.")

    def _bad_page(self, request: SearchRequest, page: Page) -> None:
        if page.contents is None:
            msg = f"Listing response for s3://{request.bucket}/{request.prefix or ''} has no readable contents"
        else:
            msg = f"Listing response for s3://{request.bucket}/{request.prefix or ''} is truncated but has no continuation token"
        if not request.on_listing_error.tolerates:
            raise ListingError(msg)
        if page.contents is None:
            log(f"WARNING: {msg}. Skipping page.")
        else:
            log(f"WARNING: {msg}. Listing stops after this page.")

    def _key_of(self, request: SearchRequest, item) -> Optional[str]:
        key = item.get("Key") if isinstance(item, dict) else None
        if isinstance(key, str) and key:
            return key
        if request.on_key_error.tolerates:
            return None
        raise MissingKeyError(f"Listing entry without a key in s3://{request.bucket}: {item!r}")

    def _is_hit(self, request: SearchRequest, key: str) -> bool:
        if not matches(request.key_pattern, key):
            return False
        if request.content_pattern is None:
            return True

        try:
            text = self.contents.fetch_text(request.bucket, key)
        except KeyReadError as e:
            if not request.on_key_error.tolerates:
                raise
            log(f"WARNING: {e}. Treating {key} as a non-match.")
            return False
        return matches(request.content_pattern, text)


def find_keys(s3_client, request: SearchRequest, page_size: Optional[int] = None) -> List[str]:
    engine = KeySearchEngine(S3PageFetcher(s3_client, page_size=page_size), S3ContentFetcher(s3_client))
    return engine.search(request)
