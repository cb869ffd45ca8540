"""Comment harvesting.

Walks the ``commentThreads`` endpoint page by page in the platform's
relevance order and flattens every thread into a :class:`Comment` with its
replies attached.  Harvesting stops as soon as one of these holds:

* ``limit`` comments have been collected (an oversized page is truncated),
* the API returns no ``nextPageToken``,
* the API returns an empty page.

Pages are fetched strictly one after another, each request depending on the
previous page's token.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

from googleapiclient.discovery import Resource  # type: ignore
from googleapiclient.errors import HttpError  # type: ignore

from comment_intel.errors import ResolutionError, TransportError
from comment_intel.helpers.retry import Deadline, RetryPolicy, call_with_retry
from comment_intel.youtube.models import Comment
from comment_intel.youtube.public import error_reasons, execute_request, translate_http_error
from comment_intel.youtube.urls import is_valid_video_id

logger = logging.getLogger(__name__)

# Upstream maximum for commentThreads.list maxResults
MAX_PAGE_SIZE = 100
DEFAULT_LIMIT = 200


class _CommentsDisabled(Exception):
    pass


def _like_count(value: Any) -> int:
    try:
        count = int(value or 0)
    except (TypeError, ValueError):
        return 0
    return max(count, 0)


def _mapping(value: Any, what: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TransportError("youtube", f"Unexpected commentThreads payload: {what} is {type(value).__name__}")
    return value


def _text(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TransportError("youtube", f"Unexpected commentThreads payload: text is {type(value).__name__}")
    return value


def _comment_from_snippet(comment_id: str, snippet: Mapping[str, Any], replies: Tuple[Comment, ...] = ()) -> Comment:
    return Comment(
        id=comment_id or "",
        text=_text(snippet.get("textDisplay") or snippet.get("textOriginal")),
        author=snippet.get("authorDisplayName") or "",
        like_count=_like_count(snippet.get("likeCount")),
        published_at=snippet.get("publishedAt") or "",
        replies=replies,
    )


def _parse_replies(item: Mapping[str, Any]) -> Tuple[Comment, ...]:
    replies: List[Comment] = []
    entries = _mapping(item.get("replies"), "replies").get("comments") or []
    if not isinstance(entries, list):
        raise TransportError("youtube", "Unexpected commentThreads payload: replies.comments is not a list")
    for reply in entries:
        snippet = _mapping(_mapping(reply, "reply").get("snippet"), "reply snippet")
        if not snippet:
            continue
        replies.append(_comment_from_snippet(reply.get("id", ""), snippet))
    return tuple(replies)


def parse_thread(item: Mapping[str, Any]) -> Optional[Comment]:
    """Flatten one ``commentThread`` resource; None when it has no snippet.

    Raises :class:`TransportError` when a nested value has the wrong type.
    """
    item = _mapping(item, "thread")
    thread_snippet = _mapping(item.get("snippet"), "thread snippet")
    top_level = _mapping(thread_snippet.get("topLevelComment"), "topLevelComment")
    snippet = _mapping(top_level.get("snippet"), "comment snippet")
    if not snippet:
        return None
    return _comment_from_snippet(top_level.get("id") or item.get("id", ""), snippet, _parse_replies(item))


def _fetch_page(
    service: Resource,
    video_id: str,
    page_size: int,
    page_token: Optional[str],
    deadline: Deadline | None,
) -> Dict[str, Any]:
    request = service.commentThreads().list(  # type: ignore[attr-defined]
        part="snippet,replies",
        videoId=video_id,
        maxResults=page_size,
        order="relevance",
        textFormat="plainText",
        pageToken=page_token,
    )
    try:
        return execute_request(request, deadline=deadline, stage="harvest")
    except HttpError as exc:
        if "commentsDisabled" in error_reasons(exc):
            raise _CommentsDisabled() from exc
        raise translate_http_error(exc, video_id, "harvest") from exc


def fetch_comments(
    service: Resource,
    video_id: str,
    limit: int = DEFAULT_LIMIT,
    *,
    deadline: Deadline | None = None,
    retry: RetryPolicy | None = None,
) -> Tuple[Comment, ...]:
    """Harvest up to *limit* top-level comments (with replies) for *video_id*.

    Returns an empty tuple when the video has no comments or comments are
    disabled.  Upstream failures raise :class:`TransportError`; a missing video
    raises :class:`NotFoundError`.  Nothing is retried unless *retry* says so.
    """
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit!r}")
    if not is_valid_video_id(video_id):
        raise ResolutionError(f"Invalid video id: {video_id!r}", reason="invalid_id")

    comments: List[Comment] = []
    seen: Set[str] = set()
    next_token: Optional[str] = None
    pages = 0

    while len(comments) < limit:
        page_size = min(MAX_PAGE_SIZE, limit - len(comments))
        token = next_token
        try:
            resp = call_with_retry(
                lambda: _fetch_page(service, video_id, page_size, token, deadline),
                policy=retry,
                deadline=deadline,
                stage="harvest",
            )
        except _CommentsDisabled:
            logger.info("Comments are disabled for video %s", video_id)
            break
        pages += 1

        items = resp.get("items")
        if items is None:
            items = []
        if not isinstance(items, list):
            raise TransportError("youtube", "Unexpected commentThreads payload: 'items' is not a list")
        if not items:
            logger.debug("Empty page %d for %s, stopping", pages, video_id)
            break

        for item in items:
            comment = parse_thread(item)
            if comment is None:
                logger.debug("Skipping thread without snippet on page %d", pages)
                continue
            if comment.id and comment.id in seen:
                logger.debug("Skipping duplicate thread %s", comment.id)
                continue
            seen.add(comment.id)
            comments.append(comment)
            if len(comments) >= limit:
                break

        logger.debug("Page %d: %d comments so far", pages, len(comments))
        next_token = resp.get("nextPageToken")
        if not next_token:
            break

    logger.info("Fetched %d comments for %s in %d page(s)", len(comments), video_id, pages)
    return tuple(comments)


def count_with_replies(comments: Iterable[Comment]) -> int:
    """Total number of comments including replies."""
    return sum(1 + len(c.replies) for c in comments)


__all__ = [
    "MAX_PAGE_SIZE",
    "DEFAULT_LIMIT",
    "parse_thread",
    "fetch_comments",
    "count_with_replies",
]
