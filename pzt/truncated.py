"""Text truncation for issue titles."""

import re

_WHITESPACE = re.compile(r"\s+")


def truncated(text: str, limit: int, tail: str = "...") -> str:
    """Collapse whitespace and cut text to at most limit characters.

    When the text is cut, tail is appended and counted against the limit,
    so the result is never longer than limit.
    """
    clean = _WHITESPACE.sub(" ", text).strip()
    if len(clean) <= limit:
        return clean
    return clean[: max(limit - len(tail), 0)].rstrip() + tail
