"""In-memory stand-ins for the S3 page and content fetchers."""

from s3finder.models import Page


def make_pages(*pages):
    """
    Build a chain of pages from lists of keys.

    A list becomes a page of {"Key": ...} descriptors. A Page instance is used
    as is. Every page but the last is truncated and points at "t<index+1>".
    """
    out = []
    for i, p in enumerate(pages):
        last = i == len(pages) - 1
        if isinstance(p, Page):
            out.append(p)
            continue
        contents = [k if isinstance(k, dict) else {"Key": k} for k in p]
        out.append(Page(contents=contents, next_token=None if last else f"t{i + 1}", is_truncated=not last))
    return out


class FakePageFetcher:
    def __init__(self, pages):
        self.pages = pages
        self.calls = []

    def fetch(self, bucket, prefix, continuation_token):
        self.calls.append((bucket, prefix, continuation_token))
        index = 0 if continuation_token is None else int(continuation_token[1:])
        return self.pages[index]


class FakeContentFetcher:
    def __init__(self, bodies):
        self.bodies = bodies
        self.calls = []

    def fetch_text(self, bucket, key):
        self.calls.append(key)
        body = self.bodies[key]
        if isinstance(body, Exception):
            raise body
        return body
