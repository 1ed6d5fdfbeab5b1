"""
Configuration for voxagent.

Runtime settings come from the environment (optionally via a ``.env`` file
loaded with python-dotenv).  Destination URLs, the history capacity and the
speech parameters are fixed constants.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# --- Navigation destinations ---

MAPS_SEARCH_URL = "https://www.google.com/maps/search/{query}"
VIDEO_SEARCH_URL = "https://www.youtube.com/results?search_query={query}"
WEB_SEARCH_URL = "https://www.google.com/search?q={query}"
NEWS_SEARCH_URL = "https://news.google.com/search?q={query}"
MAIL_URL = "https://mail.google.com"
CALENDAR_URL = "https://calendar.google.com"
NEWS_URL = "https://news.google.com"

# --- History ---

HISTORY_CAPACITY: int = 10

# --- Speech output ---

SPEECH_RATE: float = 1.0
SPEECH_PITCH: float = 1.0
SPEECH_VOLUME: float = 1.0

_TRUTHY = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """Environment driven settings for the speech engines and the web UI."""

    stt_model_size: str = "small"
    stt_device: str = "auto"
    stt_compute_type: Optional[str] = None
    stt_language: str = "en"
    tts_device: str = "auto"
    tts_audio_prompt_path: Optional[str] = None
    web_host: str = "127.0.0.1"
    web_port: int = 5000
    web_auto_open: bool = True

    @classmethod
    def from_env(cls, *, dotenv: bool = True) -> "Settings":
        """Build settings from the environment, loading ``.env`` first if present."""
        if dotenv:
            load_dotenv()
        return cls(
            stt_model_size=os.getenv("STT_MODEL_SIZE", "small"),
            stt_device=os.getenv("STT_DEVICE", "auto"),
            stt_compute_type=os.getenv("STT_COMPUTE_TYPE") or None,
            stt_language=os.getenv("STT_LANGUAGE", "en"),
            tts_device=os.getenv("TTS_DEVICE", "auto").lower(),
            tts_audio_prompt_path=os.getenv("TTS_AUDIO_PROMPT_PATH") or None,
            web_host=os.getenv("WEB_HOST", "127.0.0.1"),
            web_port=_env_int("WEB_PORT", 5000),
            web_auto_open=_env_bool("WEB_AUTO_OPEN", True),
        )
