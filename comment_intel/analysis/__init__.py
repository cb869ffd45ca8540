"""Comment harvesting and insight synthesis.

    from comment_intel.analysis.comments import fetch_comments
    from comment_intel.analysis.insights import synthesize
"""

from comment_intel.analysis.comments import fetch_comments  # noqa: F401
from comment_intel.analysis.insights import parse_report, synthesize  # noqa: F401
from comment_intel.analysis.report import AnalysisReport  # noqa: F401

__all__ = ["fetch_comments", "synthesize", "parse_report", "AnalysisReport"]
