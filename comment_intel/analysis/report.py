"""Fixed schema of the audience-insight report.

Field names follow the camelCase JSON the model is asked to produce; Python
attributes are snake_case.  Models are frozen and collections are tuples, so a
report cannot be mutated after validation.
"""

from __future__ import annotations

from typing import Any, Dict, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt

Sentiment = Literal["positive", "negative", "neutral"]
Severity = Literal["low", "medium", "high"]
VideoCategory = Literal["FAQ", "Tutorial", "Deep Dive", "Problem Solving"]

Examples = Tuple[str, ...]


class _ReportModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class Overview(_ReportModel):
    total_comments: NonNegativeInt = Field(alias="totalComments")
    average_engagement: float = Field(alias="averageEngagement", ge=0, le=100)
    top_sentiment: Sentiment = Field(alias="topSentiment")


class FrequentQuestion(_ReportModel):
    question: str
    count: NonNegativeInt
    examples: Examples = ()


class PainPoint(_ReportModel):
    issue: str
    severity: Severity
    examples: Examples = ()


class ContentRequest(_ReportModel):
    topic: str
    interest: float = Field(ge=1, le=10)
    examples: Examples = ()


class Emotion(_ReportModel):
    emotion: str
    percentage: float = Field(ge=0, le=100)
    examples: Examples = ()


class LearningTopic(_ReportModel):
    topic: str
    demand: float = Field(ge=1, le=10)
    examples: Examples = ()


class Misconception(_ReportModel):
    misconception: str
    prevalence: float = Field(ge=1, le=10)
    examples: Examples = ()


class VideoIdea(_ReportModel):
    title: str
    description: str
    estimated_interest: float = Field(alias="estimatedInterest", ge=1, le=10)
    category: VideoCategory


class AnalysisReport(_ReportModel):
    """Structured insights synthesized from a video's comments."""

    overview: Overview
    frequent_questions: Tuple[FrequentQuestion, ...] = Field(alias="frequentQuestions")
    pain_points: Tuple[PainPoint, ...] = Field(alias="painPoints")
    content_requests: Tuple[ContentRequest, ...] = Field(alias="contentRequests")
    emotions: Tuple[Emotion, ...]
    learning_topics: Tuple[LearningTopic, ...] = Field(alias="learningTopics")
    misconceptions: Tuple[Misconception, ...]
    video_ideas: Tuple[VideoIdea, ...] = Field(alias="videoIdeas")

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict using the camelCase field names."""
        return self.model_dump(mode="json", by_alias=True)


__all__ = [
    "Sentiment",
    "Severity",
    "VideoCategory",
    "Overview",
    "FrequentQuestion",
    "PainPoint",
    "ContentRequest",
    "Emotion",
    "LearningTopic",
    "Misconception",
    "VideoIdea",
    "AnalysisReport",
]
