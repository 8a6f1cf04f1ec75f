import re
from typing import Optional, Pattern, Tuple

from .errors import PatternError

KEY_ROLE = "key"
CONTENT_ROLE = "content"


def compile_pattern(pattern: Optional[str], role: str) -> Optional[Pattern[str]]:
    """Compile one regex. None means "no filter" and stays None."""
    if pattern is None:
        return None
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError(pattern, role, str(e)) from e


def compile_patterns(
    key_regex: Optional[str], content_regex: Optional[str]
) -> Tuple[Optional[Pattern[str]], Optional[Pattern[str]]]:
    return compile_pattern(key_regex, KEY_ROLE), compile_pattern(content_regex, CONTENT_ROLE)


def matches(pattern: Optional[Pattern[str]], text: str) -> bool:
    # an absent pattern matches everything
    if pattern is None:
        return True
    return pattern.search(text) is not None
