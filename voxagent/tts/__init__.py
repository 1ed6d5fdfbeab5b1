"""Text‑to‑speech (TTS) support for voxagent.

This package exposes the :class:`~voxagent.tts.tts_engine.TTSPlayer` class
which wraps the Chatterbox TTS model for local speech synthesis.  Speech is
generated and played on a background thread; a new utterance or a call to
``cancel`` interrupts the current one.
"""

from .tts_engine import TTSPlayer  # noqa: F401

__all__ = ["TTSPlayer"]
