"""
Storyteller Agent Module

Turns the authored aggregate into a narrative draft.
"""

from autobiography.agents.storyteller.agent import StorytellerAgent, FALLBACK_STORY

__all__ = ["StorytellerAgent", "FALLBACK_STORY"]
