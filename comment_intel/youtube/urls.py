"""Resolve user supplied YouTube URLs to video identifiers.

Pure functions, no I/O.  Only absolute http(s) URLs on the allow-listed hosts
are accepted:

    https://youtu.be/<id>
    https://www.youtube.com/watch?v=<id>
    https://www.youtube.com/embed/<id>
    https://www.youtube.com/v/<id>

For the canonical hosts the ``v`` query parameter wins over the path forms;
a present but malformed ``v`` is a rejection, not a cue to look elsewhere.
"""

from __future__ import annotations

import re
import urllib.parse
from typing import Any, Optional

from comment_intel.errors import ResolutionError

VIDEO_ID_LENGTH = 11
SHORT_LINK_HOST = "youtu.be"
CANONICAL_HOSTS = ("youtube.com", "www.youtube.com", "m.youtube.com")
SUPPORTED_HOSTS = CANONICAL_HOSTS + (SHORT_LINK_HOST,)

VALIDATION_MESSAGE = (
    "Please enter a valid YouTube video URL "
    "(e.g., https://www.youtube.com/watch?v=dQw4w9WgXcQ)"
)

_VIDEO_ID_RE = re.compile(r"[A-Za-z0-9_-]{%d}" % VIDEO_ID_LENGTH)
_EMBED_PATH_RE = re.compile(r"/embed/([A-Za-z0-9_-]{%d})" % VIDEO_ID_LENGTH)
_V_PATH_RE = re.compile(r"/v/([A-Za-z0-9_-]{%d})" % VIDEO_ID_LENGTH)


def is_valid_video_id(value: Any) -> bool:
    """Return True for an 11-char token made of letters, digits, ``-`` and ``_``."""
    return isinstance(value, str) and _VIDEO_ID_RE.fullmatch(value) is not None


def _validated(candidate: str, url: str) -> str:
    if not is_valid_video_id(candidate):
        raise ResolutionError(f"Invalid video id in URL: {url}", reason="invalid_id", candidate=candidate)
    return candidate


def resolve(url: Any) -> str:
    """Return the video id for *url* or raise :class:`ResolutionError`.

    No other exception escapes, whatever the input.
    """
    if not isinstance(url, str):
        raise ResolutionError("URL must be a string", reason="not_a_string")
    if not url.strip():
        raise ResolutionError("URL is required", reason="empty")

    try:
        parsed = urllib.parse.urlparse(url.strip())
        hostname = parsed.hostname
    except ValueError as exc:
        raise ResolutionError(f"Malformed URL: {url}", reason="malformed") from exc

    if parsed.scheme not in ("http", "https") or not hostname:
        raise ResolutionError(f"Not an absolute http(s) URL: {url}", reason="malformed")

    if hostname not in SUPPORTED_HOSTS:
        raise ResolutionError(f"Unsupported host: {hostname}", reason="unsupported_host", host=hostname)

    if hostname == SHORT_LINK_HOST:
        return _validated(parsed.path[1:], url)

    query = urllib.parse.parse_qs(parsed.query)
    if query.get("v"):
        return _validated(query["v"][0], url)

    for pattern in (_EMBED_PATH_RE, _V_PATH_RE):
        match = pattern.fullmatch(parsed.path)
        if match:
            return match.group(1)

    raise ResolutionError(f"No video id found in URL: {url}", reason="missing_id")


def extract_video_id(url: Any) -> Optional[str]:
    """Return the 11-char video ID for *url*, or None when it cannot be resolved."""
    try:
        return resolve(url)
    except ResolutionError:
        return None


def is_valid_youtube_url(url: Any) -> bool:
    return extract_video_id(url) is not None


def canonical_url(video_id: str) -> str:
    """Long-form watch URL for *video_id*."""
    if not is_valid_video_id(video_id):
        raise ResolutionError(f"Invalid video id: {video_id!r}", reason="invalid_id")
    return f"https://www.youtube.com/watch?v={video_id}"


def get_validation_message(url: Any) -> str:
    """Interactive feedback for *url*: empty when valid, a corrective hint otherwise."""
    return "" if is_valid_youtube_url(url) else VALIDATION_MESSAGE


__all__ = [
    "VIDEO_ID_LENGTH",
    "SUPPORTED_HOSTS",
    "VALIDATION_MESSAGE",
    "is_valid_video_id",
    "resolve",
    "extract_video_id",
    "is_valid_youtube_url",
    "canonical_url",
    "get_validation_message",
]
