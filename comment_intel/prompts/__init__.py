"""Centralized LLM prompts.

Available modules:
- comments_analysis: structured audience-insight prompt for harvested comments
"""
