"""
voxagent package.

A voice-driven command dispatcher: continuous speech recognition results
are classified against an ordered keyword rule table, each command opens a
destination or speaks a fact, and a short history of recent commands is
kept for the web interface.
"""

__all__ = [
    "assistant_controller",
    "commands",
    "state",
    "tts",
    "voice_recognition",
    "web",
]
