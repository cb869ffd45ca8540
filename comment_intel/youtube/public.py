"""Public YouTube Data API v3 helpers.

No authentication required; works with an API key only.  Every request goes
through :func:`execute_request`, which applies the run's deadline as a socket
timeout and translates client library failures into
:mod:`comment_intel.errors` types.
"""

from __future__ import annotations

import json
import logging
import socket
from datetime import datetime, timedelta
from typing import Any, Dict, List, Mapping, Optional

import httplib2  # type: ignore
import isodate  # type: ignore
from googleapiclient.discovery import Resource, build  # type: ignore
from googleapiclient.errors import HttpError  # type: ignore

from comment_intel.errors import NotFoundError, ResolutionError, StageTimeoutError, TransportError
from comment_intel.helpers.retry import Deadline, RetryPolicy, call_with_retry
from comment_intel.youtube.models import VideoMetadata
from comment_intel.youtube.urls import is_valid_video_id

logger = logging.getLogger(__name__)

THUMBNAIL_PRIORITY = ("maxres", "high", "medium", "default")


def get_service(api_key: str | None) -> Resource:
    """Build YouTube Data API v3 service with API key."""
    if not api_key:
        raise ValueError("API key must be provided for public access")
    return build("youtube", "v3", developerKey=api_key, cache_discovery=False)


# ---------------------------------------------------------------------------
# Request execution
# ---------------------------------------------------------------------------


def error_reasons(exc: HttpError) -> List[str]:
    """Return the ``reason`` codes carried by an API error body."""
    content = getattr(exc, "content", b"") or b""
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    try:
        payload = json.loads(content)
    except ValueError:
        return []
    if not isinstance(payload, dict) or not isinstance(payload.get("error"), dict):
        return []
    errors = payload["error"].get("errors") or []
    return [e.get("reason", "") for e in errors if isinstance(e, dict)]


def _status_of(exc: HttpError) -> Optional[int]:
    status = getattr(getattr(exc, "resp", None), "status", None)
    try:
        return int(status) if status is not None else None
    except (TypeError, ValueError):
        return None


def execute_request(request: Any, *, deadline: Deadline | None = None, stage: str) -> Dict[str, Any]:
    """Execute one API request within *deadline*; return the decoded JSON mapping.

    ``HttpError`` is re-raised untouched so callers can inspect status and
    reasons; everything else becomes a :class:`TransportError`.
    """
    deadline = deadline or Deadline.none()
    remaining = deadline.check(stage)

    try:
        if remaining is None:
            response = request.execute()
        else:
            http = httplib2.Http(timeout=remaining)
            try:
                response = request.execute(http=http)
            finally:
                http.close()
    except HttpError:
        raise
    except (socket.timeout, TimeoutError) as exc:
        raise StageTimeoutError(stage, remaining, service="youtube") from exc
    except (httplib2.HttpLib2Error, OSError) as exc:
        raise TransportError("youtube", f"YouTube request failed during {stage}: {exc}") from exc

    if not isinstance(response, Mapping):
        raise TransportError("youtube", f"Unexpected response type during {stage}: {type(response).__name__}")
    return dict(response)


def translate_http_error(exc: HttpError, video_id: str, stage: str) -> Exception:
    """Map an ``HttpError`` to the pipeline's error taxonomy."""
    status = _status_of(exc)
    reasons = error_reasons(exc)
    if status == 404 or "videoNotFound" in reasons:
        return NotFoundError(video_id)
    return TransportError(
        "youtube",
        f"YouTube API error during {stage}",
        status=status,
        reasons=",".join(r for r in reasons if r) or None,
    )


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


def select_thumbnail(thumbnails: Mapping[str, Any] | None) -> str:
    """Return the URL of the highest resolution thumbnail available."""
    if not thumbnails:
        return ""
    for key in THUMBNAIL_PRIORITY:
        entry = thumbnails.get(key)
        if isinstance(entry, Mapping) and entry.get("url"):
            return entry["url"]
    return ""


def format_duration(duration: str | None) -> str:
    """Turn an ISO-8601 duration (``PT1H2M3S``) into ``1:02:03`` / ``4:13``.

    A zero, empty or unparseable duration gives an empty string.
    """
    if not duration:
        return ""
    try:
        parsed = isodate.parse_duration(duration)
    except (isodate.ISO8601Error, ValueError):
        logger.debug("Unparseable duration %r", duration)
        return ""

    if isinstance(parsed, isodate.Duration):
        # Calendar units (years, months) need an anchor date
        parsed = parsed.totimedelta(start=datetime(1970, 1, 1))
    if not isinstance(parsed, timedelta):
        return ""

    total = int(parsed.total_seconds())
    if total <= 0:
        return ""
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def _group(item: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = item.get(name)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TransportError("youtube", f"Unexpected metadata payload: '{name}' is {type(value).__name__}")
    return value


def parse_video_item(video_id: str, item: Mapping[str, Any]) -> VideoMetadata:
    if not isinstance(item, Mapping):
        raise TransportError("youtube", f"Unexpected metadata payload: item is {type(item).__name__}")
    snippet = _group(item, "snippet")
    stats = _group(item, "statistics")
    details = _group(item, "contentDetails")
    return VideoMetadata(
        video_id=video_id,
        title=snippet.get("title") or "",
        description=snippet.get("description") or "",
        view_count=str(stats.get("viewCount") or "0"),
        like_count=str(stats.get("likeCount") or "0"),
        comment_count=str(stats.get("commentCount") or "0"),
        published_at=snippet.get("publishedAt") or "",
        channel_title=snippet.get("channelTitle") or "",
        thumbnail=select_thumbnail(snippet.get("thumbnails")),
        duration=format_duration(details.get("duration")),
    )


def fetch_video_metadata(
    service: Resource,
    video_id: str,
    *,
    deadline: Deadline | None = None,
    retry: RetryPolicy | None = None,
) -> VideoMetadata:
    """Fetch title, channel, counts and duration for a single video."""
    if not is_valid_video_id(video_id):
        raise ResolutionError(f"Invalid video id: {video_id!r}", reason="invalid_id")

    logger.debug("Fetching metadata for video %s", video_id)

    def _once() -> Dict[str, Any]:
        request = service.videos().list(  # type: ignore[attr-defined]
            part="snippet,statistics,contentDetails",
            id=video_id,
        )
        try:
            return execute_request(request, deadline=deadline, stage="metadata")
        except HttpError as exc:
            raise translate_http_error(exc, video_id, "metadata") from exc

    response = call_with_retry(_once, policy=retry, deadline=deadline, stage="metadata")

    items = response.get("items")
    if items is None:
        items = []
    if not isinstance(items, list):
        raise TransportError("youtube", "Unexpected metadata payload: 'items' is not a list")
    if not items:
        raise NotFoundError(video_id)

    metadata = parse_video_item(video_id, items[0])
    logger.info("Fetched metadata for %s: %s", video_id, metadata.title)
    return metadata


__all__ = [
    "get_service",
    "execute_request",
    "error_reasons",
    "translate_http_error",
    "select_thumbnail",
    "format_duration",
    "parse_video_item",
    "fetch_video_metadata",
]
