"""
Blimari - personalized multi-source learning paths.

Turns a topic into a curated curriculum: AI onboarding questions, content
discovery across external sources, AI filtering and organization, and
per-user progress tracking.
"""

__version__ = "1.0.0"
