from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from googleapiclient.discovery import Resource  # type: ignore

from comment_intel.analysis.comments import count_with_replies, fetch_comments
from comment_intel.analysis.insights import synthesize
from comment_intel.analysis.report import AnalysisReport
from comment_intel.config.settings import PipelineSettings
from comment_intel.errors import EmptyResultError
from comment_intel.helpers.retry import Deadline
from comment_intel.llms.base import LLMClient, client_from_settings
from comment_intel.youtube.models import Comment, VideoMetadata
from comment_intel.youtube.public import fetch_video_metadata, get_service
from comment_intel.youtube.urls import resolve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisOutcome:
    """Everything one successful run produced."""

    video_id: str
    metadata: VideoMetadata
    report: AnalysisReport
    comments: Tuple[Comment, ...] = field(default_factory=tuple, repr=False)

    @property
    def comments_analyzed(self) -> int:
        return len(self.comments)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "videoId": self.video_id,
            "videoInfo": self.metadata.to_dict(),
            "analysis": self.report.to_dict(),
            "commentsAnalyzed": self.comments_analyzed,
            "commentsHarvested": count_with_replies(self.comments),
        }


def run_pipeline(
    url: str,
    *,
    settings: PipelineSettings,
    youtube_service: Resource | None = None,
    llm_client: LLMClient | None = None,
    progress_callback: Optional[Callable[[str], None]] = None,
) -> AnalysisOutcome:
    """Resolve *url*, fetch metadata and comments, then synthesize the report.

    Any stage failure propagates as that stage's typed error; nothing partial
    is returned.
    """

    def _update_status(message: str):
        logger.info(message)
        if progress_callback:
            progress_callback(message)

    video_id = resolve(url)

    deadline = Deadline.after(settings.request_timeout_sec)
    retry = settings.retry_policy

    service = youtube_service or get_service(settings.youtube_api_key)
    client = llm_client or client_from_settings(settings)

    _update_status(f"🎬 Fetching video metadata for {video_id}...")
    metadata = fetch_video_metadata(service, video_id, deadline=deadline, retry=retry)

    _update_status("💬 Harvesting comments...")
    comments = fetch_comments(service, video_id, settings.max_comments, deadline=deadline, retry=retry)
    if not comments:
        raise EmptyResultError(video_id)

    _update_status(f"🧠 Analyzing {len(comments)} comments...")
    report = synthesize(comments, client, settings=settings, deadline=deadline, retry=retry)

    _update_status("✅ Analysis complete!")
    return AnalysisOutcome(video_id=video_id, metadata=metadata, report=report, comments=comments)


__all__ = ["AnalysisOutcome", "run_pipeline"]
