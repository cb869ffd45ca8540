"""Comment insight prompts for LLM-based audience analysis."""

from __future__ import annotations

from typing import Dict, List

SYSTEM_PROMPT = (
    "You are an expert content strategist who helps YouTube creators understand "
    "their audience and generate content ideas. Return only valid JSON."
)

REPORT_SCHEMA_DESCRIPTION = """{
  "overview": {
    "totalComments": number,
    "averageEngagement": number (0-100),
    "topSentiment": "positive" | "negative" | "neutral"
  },
  "frequentQuestions": [
    {
      "question": "clear question format",
      "count": number,
      "examples": ["example comment 1", "example comment 2"]
    }
  ],
  "painPoints": [
    {
      "issue": "clear description of problem",
      "severity": "low" | "medium" | "high",
      "examples": ["example comment"]
    }
  ],
  "contentRequests": [
    {
      "topic": "requested topic",
      "interest": number (1-10),
      "examples": ["example comment"]
    }
  ],
  "emotions": [
    {
      "emotion": "frustrated" | "excited" | "confused" | "satisfied",
      "percentage": number (0-100),
      "examples": ["example comment"]
    }
  ],
  "learningTopics": [
    {
      "topic": "topic people want to learn",
      "demand": number (1-10),
      "examples": ["example comment"]
    }
  ],
  "misconceptions": [
    {
      "misconception": "what people misunderstand",
      "prevalence": number (1-10),
      "examples": ["example comment"]
    }
  ],
  "videoIdeas": [
    {
      "title": "specific, actionable video title",
      "description": "brief description of video content",
      "estimatedInterest": number (1-10),
      "category": "FAQ" | "Tutorial" | "Deep Dive" | "Problem Solving"
    }
  ]
}"""


def get_comment_insights_prompt(comments_text: str) -> str:
    """Generate the user prompt asking for the structured insight report.

    Args:
        comments_text: Comment texts joined with the separator line

    Returns:
        Prompt embedding the comments and the literal JSON shape to return
    """
    return f"""Analyze these YouTube comments and provide insights for content creators. Focus on actionable intelligence.

Comments:
{comments_text}

Please analyze and return a JSON response with the following structure:

{REPORT_SCHEMA_DESCRIPTION}

Focus on:
- Identifying patterns across comments
- Providing specific, actionable video ideas
- Using clear, jargon-free language
- Prioritizing insights that help creators make better content
- Ensuring all examples are brief but representative
"""


def build_messages(comments_text: str) -> List[Dict[str, str]]:
    """System + user chat messages for one synthesis request."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": get_comment_insights_prompt(comments_text)},
    ]


__all__ = [
    "SYSTEM_PROMPT",
    "REPORT_SCHEMA_DESCRIPTION",
    "get_comment_insights_prompt",
    "build_messages",
]
