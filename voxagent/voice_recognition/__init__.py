"""Speech recognition for voxagent.

This package exposes the ``STTEngine`` class, a continuous speech‑to‑text
recognizer that reports interim and final transcripts through callbacks.
"""

from .stt_engine import STTEngine  # noqa: F401

__all__ = ["STTEngine"]
