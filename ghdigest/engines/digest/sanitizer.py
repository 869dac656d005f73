"""Title sanitizer — keep digest lines free of markup and line breaks."""

from __future__ import annotations

import re

# Anything but ASCII letters, digits, space and /():;.&+-
UNSAFE_CHARS = re.compile(r"[^0-9a-zA-Z /():;.&+-]")
WHITESPACE = re.compile(r"\s+")


def sanitize_title(title: str) -> str:
    """Drop unsafe characters, then collapse whitespace runs to one space.

    Newlines and tabs are unsafe characters too, so they disappear rather
    than turn into spaces.
    """
    title = UNSAFE_CHARS.sub("", title)
    return WHITESPACE.sub(" ", title)
