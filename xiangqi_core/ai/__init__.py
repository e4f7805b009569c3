"""
Move Suggestion Module

Pluggable move suggesters plus the referee that re-validates their output.
"""

from xiangqi_core.ai.base import Difficulty, MoveSuggester, SuggesterConfig, SuggesterRegistry
from xiangqi_core.ai.llm import LLMSuggester, build_prompt, build_system_instruction, parse_suggestion
from xiangqi_core.ai.random_ai import RandomSuggester
from xiangqi_core.ai.referee import play_suggested_move, resolve_suggestion

__all__ = [
    "Difficulty",
    "LLMSuggester",
    "MoveSuggester",
    "RandomSuggester",
    "SuggesterConfig",
    "SuggesterRegistry",
    "build_prompt",
    "build_system_instruction",
    "parse_suggestion",
    "play_suggested_move",
    "resolve_suggestion",
]
