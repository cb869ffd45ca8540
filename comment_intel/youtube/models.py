"""Value objects returned by the YouTube stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Comment:
    """One harvested comment.  Replies are Comments without replies of their own."""

    id: str
    text: str
    author: str
    like_count: int = 0
    published_at: str = ""
    replies: Tuple["Comment", ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.like_count < 0:
            raise ValueError("like_count must be non-negative")
        if any(reply.replies for reply in self.replies):
            raise ValueError("replies cannot have nested replies")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "author": self.author,
            "likeCount": self.like_count,
            "publishedAt": self.published_at,
        }
        if self.replies:
            data["replies"] = [reply.to_dict() for reply in self.replies]
        return data


@dataclass(frozen=True)
class VideoMetadata:
    """Display attributes of one video.

    Counts are kept as the decimal strings the API returns; popular videos
    exceed what some consumers can represent exactly.
    """

    video_id: str
    title: str = ""
    description: str = ""
    view_count: str = "0"
    like_count: str = "0"
    comment_count: str = "0"
    published_at: str = ""
    channel_title: str = ""
    thumbnail: str = ""
    duration: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "videoId": self.video_id,
            "title": self.title,
            "description": self.description,
            "viewCount": self.view_count,
            "likeCount": self.like_count,
            "commentCount": self.comment_count,
            "publishedAt": self.published_at,
            "channelTitle": self.channel_title,
            "thumbnail": self.thumbnail,
            "duration": self.duration,
        }


__all__ = ["Comment", "VideoMetadata"]
