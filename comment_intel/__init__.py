"""YouTube comment intelligence.

Resolve a video URL, harvest its comments and turn them into a structured
audience-insight report with a language model.
"""

__version__ = "0.1.0"
