"""Exception hierarchy for the comment intelligence pipeline.

Every stage raises its own typed failure:

ResolutionError      – the input is not a supported YouTube video URL
NotFoundError        – the identifier is valid but no such video exists
TransportError       – an upstream API call failed or answered with an unexpected shape
StageTimeoutError    – an upstream call did not finish before the run's deadline
EmptyResultError     – the video exists but has no harvestable comments
SynthesisError       – the model answer is empty or does not match the report schema

Callers that only need a user-facing message use :func:`describe_failure`.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Tuple


class FailureCause(str, Enum):
    """Coarse failure categories surfaced to the pipeline's caller."""

    BAD_URL = "bad_url"
    NOT_FOUND = "not_found"
    NO_COMMENTS = "no_comments"
    UPSTREAM = "upstream"
    TIMEOUT = "timeout"
    SYNTHESIS = "synthesis"
    INTERNAL = "internal"


class CommentIntelError(Exception):
    """Base class for every error raised by :mod:`comment_intel`."""

    cause: FailureCause = FailureCause.INTERNAL
    user_message: str = "Failed to analyze video"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = {k: v for k, v in (details or {}).items() if v is not None}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ResolutionError(CommentIntelError):
    """Raised when a URL cannot be resolved to a video identifier."""

    cause = FailureCause.BAD_URL
    user_message = "Invalid YouTube URL"

    def __init__(self, message: str, reason: str, **details: Any):
        super().__init__(message, {"reason": reason, **details})
        self.reason = reason


class NotFoundError(CommentIntelError):
    """The identifier is well-formed but the platform has no matching video."""

    cause = FailureCause.NOT_FOUND
    user_message = "Video not found"

    def __init__(self, video_id: str, message: str | None = None):
        super().__init__(message or f"Video {video_id} not found or not accessible", {"video_id": video_id})
        self.video_id = video_id


class TransportError(CommentIntelError):
    """An upstream call failed (network, quota, HTTP error or malformed payload)."""

    cause = FailureCause.UPSTREAM
    user_message = "Upstream service failed"

    def __init__(self, service: str, message: str, status: int | None = None, **details: Any):
        super().__init__(message, {"service": service, "status": status, **details})
        self.service = service
        self.status = status


class StageTimeoutError(TransportError):
    """An upstream call did not complete before the deadline."""

    cause = FailureCause.TIMEOUT
    user_message = "The analysis timed out"

    def __init__(self, stage: str, timeout_seconds: float | None = None, service: str = "deadline"):
        if timeout_seconds is None:
            message = f"Stage '{stage}' exceeded its deadline"
        else:
            message = f"Stage '{stage}' timed out after {timeout_seconds:.2f}s"
        super().__init__(service, message, stage=stage, timeout_seconds=timeout_seconds)
        self.stage = stage
        self.timeout_seconds = timeout_seconds


class EmptyResultError(CommentIntelError):
    """The video exists but there are no comments to analyze."""

    cause = FailureCause.NO_COMMENTS
    user_message = "No comments found for this video"

    def __init__(self, video_id: str | None = None, message: str | None = None):
        super().__init__(message or "No comments found for this video", {"video_id": video_id})
        self.video_id = video_id


class SynthesisError(CommentIntelError):
    """The model output could not be turned into an analysis report."""

    cause = FailureCause.SYNTHESIS
    user_message = "Failed to analyze comments"


class EmptyResponseError(SynthesisError):
    """The model answered with no content."""

    def __init__(self, message: str = "No response from the language model"):
        super().__init__(message)


class ReportParseError(SynthesisError):
    """The model answer is not valid JSON after fence-stripping."""

    def __init__(self, message: str, raw_text: str):
        super().__init__(message, {"raw_length": len(raw_text)})
        self.raw_text = raw_text


class ReportValidationError(SynthesisError):
    """The model answer is valid JSON but violates the report schema."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message, {"error_count": len(errors) if errors else None})
        self.errors = errors or []


def describe_failure(exc: BaseException) -> Tuple[FailureCause, str]:
    """Map *exc* to a ``(cause, user_message)`` pair for presentation."""

    if isinstance(exc, CommentIntelError):
        return exc.cause, exc.user_message
    return FailureCause.INTERNAL, CommentIntelError.user_message


__all__ = [
    "FailureCause",
    "CommentIntelError",
    "ResolutionError",
    "NotFoundError",
    "TransportError",
    "StageTimeoutError",
    "EmptyResultError",
    "SynthesisError",
    "EmptyResponseError",
    "ReportParseError",
    "ReportValidationError",
    "describe_failure",
]
