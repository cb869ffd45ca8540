"""Pipeline orchestration: URL in, metadata and insight report out."""

from comment_intel.pipeline.core import AnalysisOutcome, run_pipeline  # noqa: F401

__all__ = ["AnalysisOutcome", "run_pipeline"]
