#!/usr/bin/env python3
"""Analyze the comments of one YouTube video from the command line.

Usage examples:
    comment-insights --url https://youtu.be/dQw4w9WgXcQ --api-key $YT_API_KEY
    comment-insights --url https://www.youtube.com/watch?v=dQw4w9WgXcQ --provider openrouter --timeout 120
    comment-insights --url "https://youtube.com/watch?v=short" --check

Keys default to the environment (``.env`` is honoured); see
:mod:`comment_intel.config.settings`.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from comment_intel.config.settings import load_settings
from comment_intel.errors import CommentIntelError, FailureCause, describe_failure
from comment_intel.pipeline.core import run_pipeline
from comment_intel.youtube.urls import get_validation_message

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_URL = 2


def parse_cli(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Turn a YouTube video's comments into audience insights.")
    parser.add_argument("--url", required=True, help="YouTube video URL")
    parser.add_argument("--api-key", dest="api_key", help="YouTube Data API v3 key (default: YT_API_KEY)")
    parser.add_argument("--llm-api-key", dest="llm_api_key", help="API key for the LLM provider (default: LLM_API_KEY)")
    parser.add_argument("--provider", choices=["deepseek", "openai", "openrouter", "groq"], help="LLM provider")
    parser.add_argument("--model", help="Chat model name")
    parser.add_argument("--max-comments", dest="max_comments", type=int, help="Maximum comments to harvest")
    parser.add_argument("--timeout", type=float, help="Deadline in seconds for the whole run")
    parser.add_argument("--retries", type=int, help="Attempts per upstream request (1 = no retry)")
    parser.add_argument("--check", action="store_true", help="Only validate the URL, no network access")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai._base_client").setLevel(logging.WARNING)
    logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the analysis pipeline from the command line."""
    args = parse_cli(argv)
    _configure_logging(args.verbose)

    if args.check:
        message = get_validation_message(args.url)
        print(message or "OK")
        return EXIT_BAD_URL if message else EXIT_OK

    try:
        settings = load_settings(
            youtube_api_key=args.api_key,
            llm_api_key=args.llm_api_key,
            llm_provider=args.provider,
            chat_model=args.model,
            max_comments=args.max_comments,
            request_timeout_sec=args.timeout,
            retry_attempts=args.retries,
        )
        outcome = run_pipeline(args.url, settings=settings)
    except CommentIntelError as exc:
        cause, message = describe_failure(exc)
        logger.error("Analysis failed: %s", exc)
        print(f"Error: {message}", file=sys.stderr)
        return EXIT_BAD_URL if cause is FailureCause.BAD_URL else EXIT_FAILURE
    except ValueError as exc:
        # Missing keys or invalid configuration values
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    print(json.dumps(outcome.to_dict(), indent=2, ensure_ascii=False))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
