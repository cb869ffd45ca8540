"""
Pytest configuration and fixtures for comment intelligence tests.

No test touches the network: the YouTube service and the LLM client are
replaced with in-memory fakes.
"""

import json
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import httplib2
import pytest
from googleapiclient.errors import HttpError

from comment_intel.config.settings import PipelineSettings
from comment_intel.llms.base import LLMClient

VIDEO_ID = "dQw4w9WgXcQ"


class FakeRequest:
    """Stand-in for ``googleapiclient.http.HttpRequest``."""

    def __init__(self, response: Any = None, error: Optional[BaseException] = None):
        self.response = response
        self.error = error
        self.execute_kwargs: List[Dict[str, Any]] = []

    def execute(self, **kwargs):
        self.execute_kwargs.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


def _as_request(page: Any) -> FakeRequest:
    if isinstance(page, FakeRequest):
        return page
    if isinstance(page, BaseException):
        return FakeRequest(error=page)
    return FakeRequest(page)


def make_service(comment_pages=(), video_response: Any = None) -> MagicMock:
    """Fake YouTube service returning *comment_pages* one request at a time."""
    service = MagicMock()
    service.commentThreads.return_value.list.side_effect = [_as_request(p) for p in comment_pages]
    if video_response is not None:
        service.videos.return_value.list.return_value = _as_request(video_response)
    return service


def comment_list_calls(service: MagicMock) -> List[Dict[str, Any]]:
    return [c.kwargs for c in service.commentThreads.return_value.list.call_args_list]


def make_thread(thread_id: str, text: str, likes: int = 0, replies: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    item: Dict[str, Any] = {
        "id": thread_id,
        "snippet": {
            "topLevelComment": {
                "id": thread_id,
                "snippet": {
                    "textDisplay": text,
                    "authorDisplayName": f"@author-{thread_id}",
                    "likeCount": likes,
                    "publishedAt": "2024-01-01T00:00:00Z",
                },
            }
        },
    }
    if replies is not None:
        item["replies"] = {"comments": replies}
    return item


def make_reply(reply_id: str, text: str) -> Dict[str, Any]:
    return {
        "id": reply_id,
        "snippet": {
            "textDisplay": text,
            "authorDisplayName": f"@author-{reply_id}",
            "likeCount": 1,
            "publishedAt": "2024-01-02T00:00:00Z",
        },
    }


def make_page(threads: List[Dict[str, Any]], next_token: Optional[str] = None) -> Dict[str, Any]:
    page: Dict[str, Any] = {"items": threads}
    if next_token:
        page["nextPageToken"] = next_token
    return page


def make_http_error(status: int, reason: str = "") -> HttpError:
    body = {"error": {"code": status, "message": reason or "error", "errors": [{"reason": reason}]}}
    return HttpError(httplib2.Response({"status": status}), json.dumps(body).encode("utf-8"))


class FakeLLMClient(LLMClient):
    """Returns canned replies in order and records every call."""

    def __init__(self, *replies: Any):
        self.replies = list(replies)
        self.calls: List[Dict[str, Any]] = []

    def chat(self, messages, **kwargs):
        self.calls.append({"messages": messages, **kwargs})
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return reply


@pytest.fixture
def settings():
    return PipelineSettings(
        youtube_api_key="yt-test-key",
        llm_api_key="llm-test-key",
        max_comments=50,
    )


@pytest.fixture
def report_data() -> Dict[str, Any]:
    return {
        "overview": {"totalComments": 3, "averageEngagement": 72, "topSentiment": "positive"},
        "frequentQuestions": [
            {"question": "Which camera do you use?", "count": 2, "examples": ["what camera is this?"]}
        ],
        "painPoints": [
            {"issue": "Audio is too quiet", "severity": "medium", "examples": ["can barely hear you"]}
        ],
        "contentRequests": [
            {"topic": "Lighting setup", "interest": 8, "examples": ["please show your lights"]}
        ],
        "emotions": [
            {"emotion": "excited", "percentage": 60, "examples": ["love this!"]},
            {"emotion": "confused", "percentage": 40, "examples": ["I don't get step 3"]},
        ],
        "learningTopics": [
            {"topic": "Color grading", "demand": 7, "examples": ["how do you grade?"]}
        ],
        "misconceptions": [
            {"misconception": "Expensive gear is required", "prevalence": 4, "examples": ["need a $3k camera"]}
        ],
        "videoIdeas": [
            {
                "title": "Budget Lighting Setup in 10 Minutes",
                "description": "Walk through a cheap three-point lighting setup.",
                "estimatedInterest": 9,
                "category": "Tutorial",
            }
        ],
    }


@pytest.fixture
def report_json(report_data) -> str:
    return json.dumps(report_data)
