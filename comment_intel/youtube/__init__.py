"""YouTube Data API helpers.

    from comment_intel.youtube.urls import resolve, get_validation_message
    from comment_intel.youtube.public import get_service, fetch_video_metadata

URL handling is pure; everything that talks to the API lives in ``public``.
"""

from comment_intel.youtube.models import Comment, VideoMetadata
from comment_intel.youtube.urls import (
    canonical_url,
    extract_video_id,
    get_validation_message,
    is_valid_video_id,
    is_valid_youtube_url,
    resolve,
)

__all__ = [
    "Comment",
    "VideoMetadata",
    "canonical_url",
    "extract_video_id",
    "get_validation_message",
    "is_valid_video_id",
    "is_valid_youtube_url",
    "resolve",
]
