"""Command interpretation for voxagent.

This package exposes the ``CommandRouter`` class which matches normalized
transcripts against an ordered table of ``IntentRule`` entries, plus the
built-in rule table and the transcript normalizer.
"""

from .command_router import CommandContext, CommandOutcome, CommandRouter, IntentRule  # noqa: F401
from .intents import CAPABILITIES, DEFAULT_RULES, FALLBACK_RULE, build_default_router  # noqa: F401
from .normalizer import (  # noqa: F401
    RecognitionEvent,
    RecognitionResult,
    final_transcript,
    interim_transcript,
    normalize_transcript,
)

__all__ = [
    "CAPABILITIES",
    "CommandContext",
    "CommandOutcome",
    "CommandRouter",
    "DEFAULT_RULES",
    "FALLBACK_RULE",
    "IntentRule",
    "RecognitionEvent",
    "RecognitionResult",
    "build_default_router",
    "final_transcript",
    "interim_transcript",
    "normalize_transcript",
]
