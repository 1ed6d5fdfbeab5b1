"""
Web UI package for the voxagent assistant.

This package provides a small Flask application exposing a local web
interface: a microphone toggle, a mute toggle, one-click example commands
and the recent command history.

Use ``voxagent --web`` (the default) to launch it.
"""

from __future__ import annotations

__all__ = []  # Nothing exported at package level
