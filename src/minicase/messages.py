"""Cleanup of failure messages before they are reported."""

from __future__ import annotations

import re

ASSERT_MARKER = "ASSERT_"

# "some/dir/file.py:12: " as put in front of a message by a location-aware raiser
_LOCATION_TAG = re.compile(r"[^\s:]*\.py:\d+:\s")
# a directory separator followed by a python file name
_PATH_SEGMENT = re.compile(r"[\\/][\w\s\-]*\.py")


def normalize_message(raw: str) -> str:
    """Strip framework location noise from a failure message.

    Assertion messages already carry their own location suffix, so a leading
    ``file.py:line:`` tag is dropped from them entirely. Any other message that
    mentions a python file path loses the directory part. Everything else is
    returned unchanged.
    """
    tag = _LOCATION_TAG.search(raw)
    if tag and ASSERT_MARKER in raw:
        return raw[tag.end():]
    segment = _PATH_SEGMENT.search(raw)
    if segment:
        return raw[segment.start() + 1:]
    return raw
