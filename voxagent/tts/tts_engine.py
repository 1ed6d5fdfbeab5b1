"""
Text‑to‑speech (TTS) engine wrapper using the Chatterbox library.

Speech is generated with the open‑source Chatterbox model and streamed to
the default audio output through ``sounddevice``.  A short reference clip
(``TTS_AUDIO_PROMPT_PATH``) enables zero‑shot voice cloning; ``TTS_DEVICE``
selects ``cuda``, ``mps``, ``cpu`` or ``auto``.

``TTSPlayer.speak`` returns immediately: generation and playback happen on
a daemon thread.  Every call to ``speak`` or ``cancel`` supersedes earlier
utterances, so at most one of them is ever audible.
"""
from __future__ import annotations

import os
import threading
from typing import Optional

import numpy as np
import sounddevice as sd
import torch
from chatterbox.tts import ChatterboxTTS

from ..utils.logging_system import setup_log_system

logger = setup_log_system("tts_engine")


def _pick_device(device: str) -> str:
    if device != "auto":
        return device
    if torch.cuda.is_available():
        return "cuda"
    if hasattr(torch.backends, "mps") and torch.backends.mps.is_available():
        return "mps"
    return "cpu"


def shape_audio(wav: np.ndarray, *, pitch: float = 1.0, volume: float = 1.0) -> np.ndarray:
    """
    Return mono float32 samples with ``pitch`` and ``volume`` applied.

    Pitch is changed by resampling (which also shortens or lengthens the
    clip); volume is a linear gain clipped to [-1, 1].
    """
    audio = np.asarray(wav, dtype=np.float32)
    if audio.ndim > 1:
        audio = audio[0]
    if pitch != 1.0 and audio.size > 1:
        new_len = max(1, int(audio.size / pitch))
        positions = np.linspace(0, audio.size - 1, new_len)
        audio = np.interp(positions, np.arange(audio.size), audio).astype(np.float32)
    if volume != 1.0:
        audio = np.clip(audio * volume, -1.0, 1.0).astype(np.float32)
    return audio


class TTSPlayer:
    """
    Wrapper around the Chatterbox TTS model for asynchronous speech output.

    Parameters
    ----------
    device:
        Torch device for generation, or ``"auto"``.
    audio_prompt_path:
        Optional WAV file with a voice sample to clone.
    """

    def __init__(self, device: str = "auto", audio_prompt_path: Optional[str] = None) -> None:
        device = _pick_device(device)
        try:
            self.model: Optional[ChatterboxTTS] = ChatterboxTTS.from_pretrained(device=device)
            logger.info(f"Chatterbox TTS model loaded on {device}.")
        except Exception as e:
            logger.error(f"Failed to load Chatterbox TTS model: {e}", exc_info=True)
            self.model = None
        if audio_prompt_path and os.path.isfile(audio_prompt_path):
            self.audio_prompt_path: Optional[str] = audio_prompt_path
            logger.info(f"Using custom TTS audio prompt: {audio_prompt_path}")
        else:
            self.audio_prompt_path = None
        # Serialises generation; the model is not re-entrant.
        self._lock = threading.Lock()
        self._generation = 0

    def speak(self, text: str, *, rate: float = 1.0, pitch: float = 1.0, volume: float = 1.0) -> None:
        """Queue ``text`` for synthesis and playback and return immediately.

        If the TTS model is unavailable or ``text`` is empty, nothing happens.
        """
        if not text:
            return
        if self.model is None:
            logger.debug("TTS model not available; skipping speech.")
            return
        self._generation += 1
        ticket = self._generation
        threading.Thread(
            target=self._render,
            args=(ticket, text, rate, pitch, volume),
            name="TTSThread",
            daemon=True,
        ).start()

    def cancel(self) -> None:
        """Stop playback and drop any utterance still being generated."""
        self._generation += 1
        try:
            sd.stop()
        except Exception as e:
            logger.error(f"Failed to stop audio playback: {e}", exc_info=True)

    def _render(self, ticket: int, text: str, rate: float, pitch: float, volume: float) -> None:
        with self._lock:
            if ticket != self._generation:
                return
            try:
                wav = self.model.generate(text, audio_prompt_path=self.audio_prompt_path)  # type: ignore[union-attr]
                wav_np = wav.cpu().numpy() if hasattr(wav, "cpu") else np.asarray(wav, dtype=np.float32)
                if ticket != self._generation:
                    logger.debug("Utterance superseded before playback.")
                    return
                audio = shape_audio(wav_np, pitch=pitch, volume=volume)
                sd.play(audio, int(self.model.sr * rate))  # type: ignore[union-attr]
            except Exception as e:
                logger.error(f"Error during TTS generation/playback: {e}", exc_info=True)
