"""Synthesize a structured audience-insight report from harvested comments.

One model call per report.  The answer must be a single JSON object matching
:class:`~comment_intel.analysis.report.AnalysisReport`; the only clean-up
applied before parsing is removal of a surrounding markdown code fence.  Any
other deviation fails the synthesis: there is no partial report and no
placeholder data.

Progression of one call::

    Idle -> PromptBuilt -> ModelInvoked -> ResponseParsed
                                        -> ParseFailed  (SynthesisError)
                                        -> ModelFailed  (TransportError / StageTimeoutError)
"""

from __future__ import annotations

import json
import logging
from typing import Sequence

from pydantic import ValidationError

from comment_intel.analysis.report import AnalysisReport
from comment_intel.config.settings import PipelineSettings
from comment_intel.errors import (
    EmptyResponseError,
    EmptyResultError,
    ReportParseError,
    ReportValidationError,
)
from comment_intel.helpers.retry import Deadline, RetryPolicy, call_with_retry
from comment_intel.llms.base import LLMClient
from comment_intel.prompts.comments_analysis import build_messages
from comment_intel.youtube.models import Comment

logger = logging.getLogger(__name__)

COMMENT_SEPARATOR = "\n---\n"
CODE_FENCE = "```"


def build_comments_document(comments: Sequence[Comment]) -> str:
    """Join top-level comment texts in harvested order."""
    return COMMENT_SEPARATOR.join(c.text for c in comments)


def strip_code_fences(text: str) -> str:
    """Remove an optional leading ``` (with an optional json tag, any case) and trailing ```."""
    cleaned = text.strip()
    if cleaned.startswith(CODE_FENCE):
        cleaned = cleaned[len(CODE_FENCE):]
        if cleaned[:4].lower() == "json":
            cleaned = cleaned[4:]
    if cleaned.endswith(CODE_FENCE):
        cleaned = cleaned[: -len(CODE_FENCE)]
    return cleaned.strip()


def parse_report(text: str | None) -> AnalysisReport:
    """Parse the model's raw answer into a validated report."""
    if not text or not text.strip():
        raise EmptyResponseError()

    cleaned = strip_code_fences(text)
    if not cleaned:
        raise EmptyResponseError("Language model response contained only a code fence")

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.debug("Raw response: %s...", cleaned[:500])
        raise ReportParseError(f"Model response is not valid JSON: {exc.msg}", cleaned) from exc

    if not isinstance(data, dict):
        raise ReportValidationError(f"Expected a JSON object, got {type(data).__name__}")

    try:
        return AnalysisReport.model_validate(data)
    except ValidationError as exc:
        logger.debug("Report validation errors: %s", exc.errors())
        raise ReportValidationError(
            f"Model response does not match the report schema ({exc.error_count()} error(s))",
            exc.errors(include_url=False),
        ) from exc


def synthesize(
    comments: Sequence[Comment],
    client: LLMClient,
    *,
    settings: PipelineSettings,
    deadline: Deadline | None = None,
    retry: RetryPolicy | None = None,
) -> AnalysisReport:
    """Ask *client* for an insight report on *comments* and validate the answer."""
    if not comments:
        raise EmptyResultError(message="No comments to analyze")

    deadline = deadline or Deadline.none()
    messages = build_messages(build_comments_document(comments))
    logger.debug("Prompt built for %d comments (%d chars)", len(comments), len(messages[1]["content"]))

    def _invoke() -> str:
        kwargs = {
            "model": settings.chat_model,
            "temperature": settings.temperature,
            "max_tokens": settings.max_output_tokens,
        }
        remaining = deadline.check("synthesis")
        if remaining is not None:
            kwargs["timeout"] = remaining
        return client.chat(messages, **kwargs)

    logger.info("Requesting insight report from %s", settings.chat_model)
    raw = call_with_retry(_invoke, policy=retry, deadline=deadline, stage="synthesis")

    report = parse_report(raw)
    logger.info(
        "Parsed insight report: %d questions, %d video ideas",
        len(report.frequent_questions),
        len(report.video_ideas),
    )
    return report


__all__ = [
    "COMMENT_SEPARATOR",
    "build_comments_document",
    "strip_code_fences",
    "parse_report",
    "synthesize",
]
