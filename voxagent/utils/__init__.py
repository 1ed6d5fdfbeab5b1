"""Utility functions for voxagent.

The ``logging_system`` module provides a configurable logging setup that
honours ``LOG_LEVEL`` and ``NO_COLOR`` and renders through Rich on a
terminal.
"""

from .logging_system import setup_log_system  # noqa: F401

__all__ = ["setup_log_system"]
