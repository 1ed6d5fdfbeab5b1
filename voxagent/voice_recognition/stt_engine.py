"""
Continuous speech‑to‑text engine using Faster Whisper and WebRTC VAD.

While started, a worker thread records one utterance at a time from the
microphone (an utterance ends after a period of silence), transcribes it
with Faster Whisper and reports the text through ``on_result`` as
:class:`~voxagent.commands.normalizer.RecognitionEvent` objects: every
decoded segment first as an interim result, then the whole utterance as a
single final result.  Capture or transcription failures stop the loop and
are reported through ``on_error`` with an error code.
"""
from __future__ import annotations

import threading
import time
import warnings
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

import numpy as np
import sounddevice as sd
import webrtcvad
from faster_whisper import WhisperModel

from ..commands.normalizer import RecognitionEvent, RecognitionResult
from ..ports import ErrorCallback, ResultCallback
from ..utils.logging_system import setup_log_system

logger = setup_log_system("stt_engine")

ERROR_AUDIO_CAPTURE = "audio-capture"
ERROR_TRANSCRIPTION = "transcription"


@dataclass
class STTConfig:
    sample_rate: int = 16_000
    channels: int = 1
    frame_ms: int = 30  # VAD supports 10, 20, or 30 ms
    vad_aggressiveness: int = 2  # 0..3
    max_record_seconds: int = 20
    min_silence_time: float = 0.8  # seconds of continuous silence ending an utterance
    pre_speech_padding_ms: int = 300  # keep a bit before first detected speech


class STTEngine:
    """
    Listens continuously and transcribes each utterance with Faster Whisper.

    - Uses WebRTC VAD to find the end of each utterance.
    - Feeds float32 numpy audio directly to Faster Whisper (no temp WAV files).
    - ``start``/``stop`` tolerate redundant calls.
    """

    def __init__(
        self,
        model_size: str = "small",
        device: str = "auto",  # 'auto' | 'cpu' | 'cuda'
        compute_type: str | None = None,  # None => smart fallback
        language: str | None = "en",
        cfg: STTConfig | None = None,
    ) -> None:
        # Suppress noisy warnings from dependencies
        warnings.filterwarnings("ignore", category=UserWarning)
        self.cfg = cfg or STTConfig()
        self.language = language
        self._frame_samples = int(self.cfg.sample_rate * self.cfg.frame_ms / 1000)
        self._pre_pad_frames = max(1, int(self.cfg.pre_speech_padding_ms / self.cfg.frame_ms))

        self.on_result: Optional[ResultCallback] = None
        self.on_error: Optional[ErrorCallback] = None
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

        # Smart compute_type fallback to avoid CPU float16 errors when 'auto' picks CPU
        if compute_type is not None:
            preferred: Iterable[str] = (compute_type,)
        elif device == "cpu":
            preferred = ("int8", "int16", "float32")
        else:
            preferred = ("float16", "int8", "int16", "float32")

        last_err: Exception | None = None
        for ct in preferred:
            try:
                self.model = WhisperModel(model_size, device=device, compute_type=ct)
                logger.debug(
                    f"Loaded Whisper model='{model_size}' (device={device}, compute_type={ct})."
                )
                break
            except Exception as e:  # try next compute type
                last_err = e
                logger.warning(f"Failed loading compute_type={ct}, trying next… ({e})")
        else:
            logger.error("Could not initialize Whisper model with any compute_type.")
            if last_err:
                raise last_err
            raise RuntimeError("Whisper model initialization failed with unknown error.")

    # ------------------- Lifecycle -------------------
    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stop_event.is_set()

    def start(self) -> None:
        """Begin continuous recognition on a worker thread.

        A worker still winding down from a previous ``stop`` is waited for by
        the new worker before it opens the microphone.
        """
        if self.running:
            logger.debug("Speech recognition already running.")
            return
        previous = self._thread if self._thread is not None and self._thread.is_alive() else None
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._listen_loop,
            args=(self._stop_event, previous),
            name="STTThread",
            daemon=True,
        )
        self._thread.start()
        logger.info("Speech recognition started.")

    def stop(self) -> None:
        """Stop the worker; anything it is still transcribing is discarded.  Does not block."""
        if not self.running:
            logger.debug("Speech recognition already stopped.")
            return
        self._stop_event.set()
        logger.info("Speech recognition stopped.")

    def _listen_loop(self, stop_event: threading.Event, previous: threading.Thread | None = None) -> None:
        if previous is not None:
            previous.join()
        while not stop_event.is_set():
            try:
                audio = self.record_until_silence(stop_event)
            except Exception as e:
                logger.error(f"Error during voice recording: {e}", exc_info=True)
                self._fail(stop_event, ERROR_AUDIO_CAPTURE)
                return
            if stop_event.is_set():
                break
            if audio.size == 0:
                continue
            try:
                self._emit_transcription(audio, stop_event)
            except Exception as e:
                logger.error(f"Speech transcription failed: {e}", exc_info=True)
                self._fail(stop_event, ERROR_TRANSCRIPTION)
                return

    def _fail(self, stop_event: threading.Event, code: str) -> None:
        if stop_event.is_set():
            # Stopped on purpose; the failure belongs to a finished session.
            return
        stop_event.set()
        if self.on_error is not None:
            self.on_error(code)

    def _emit(self, event: RecognitionEvent, stop_event: threading.Event) -> None:
        if stop_event.is_set():
            logger.debug("Dropping recognition result from a stopped session.")
            return
        if self.on_result is not None:
            self.on_result(event)

    # ------------------- Recording -------------------
    def _vad_is_speech(self, frame_int16: np.ndarray, vad: webrtcvad.Vad) -> bool:
        """Return True if the frame contains speech. Expects 1‑D int16 mono samples of length ``_frame_samples``."""
        assert frame_int16.ndim == 1 and frame_int16.dtype == np.int16
        return vad.is_speech(frame_int16.tobytes(), self.cfg.sample_rate)

    def record_until_silence(self, stop_event: threading.Event | None = None) -> np.ndarray:
        """
        Record from the default microphone until VAD registers ``min_silence_time`` after any speech.

        Returns a 1‑D int16 numpy array (mono, ``cfg.sample_rate``); empty if
        nothing was said before ``max_record_seconds`` or ``stop_event`` fired.
        """
        vad = webrtcvad.Vad(self.cfg.vad_aggressiveness)
        frame_len = self._frame_samples

        # Ring buffer to keep some audio before first speech (for non‑clipped start)
        pad_buffer: list[np.ndarray] = []
        audio_frames: list[np.ndarray] = []
        have_detected_speech = False
        silence_started_at: float | None = None
        start_time = time.time()

        def on_audio(indata, frames, time_info, status) -> None:
            nonlocal have_detected_speech, silence_started_at
            if status:
                if status.input_overflow:
                    logger.warning("Recording input overflow: some audio frames were lost.")
                if status.input_underflow:
                    logger.warning("Recording input underflow: no audio data available.")

            mono = indata[:, 0].copy()  # channels=1 in our stream config

            if not have_detected_speech:
                pad_buffer.append(mono)
                if len(pad_buffer) > self._pre_pad_frames:
                    pad_buffer.pop(0)

            if self._vad_is_speech(mono, vad):
                if not have_detected_speech:
                    audio_frames.extend(pad_buffer)
                    pad_buffer.clear()
                have_detected_speech = True
                silence_started_at = None
                audio_frames.append(mono)
            elif have_detected_speech:
                audio_frames.append(mono)
                if silence_started_at is None:
                    silence_started_at = time.time()

        with sd.InputStream(
            samplerate=self.cfg.sample_rate,
            channels=self.cfg.channels,
            dtype="int16",
            blocksize=frame_len,
            callback=on_audio,
        ):
            while True:
                if stop_event is not None and stop_event.is_set():
                    return np.array([], dtype=np.int16)
                now = time.time()
                if now - start_time > self.cfg.max_record_seconds:
                    logger.debug("Maximum utterance duration reached.")
                    break
                if have_detected_speech and silence_started_at is not None:
                    if now - silence_started_at >= self.cfg.min_silence_time:
                        break
                time.sleep(0.02)

        if not audio_frames:
            return np.array([], dtype=np.int16)

        audio = np.concatenate(audio_frames, axis=0).astype(np.int16)
        logger.debug(
            f"Captured {len(audio)} samples (~{len(audio)/self.cfg.sample_rate:.2f}s)."
        )
        return audio

    # ------------------- Transcription -------------------
    def _segments(self, audio_int16: np.ndarray, beam_size: int) -> Iterable[str]:
        audio_f32 = (audio_int16.astype(np.float32) / 32768.0).clip(-1.0, 1.0)
        segments, _info = self.model.transcribe(
            audio_f32, beam_size=beam_size, language=self.language
        )
        for seg in segments:
            text = seg.text.strip()
            if text:
                yield text

    def _emit_transcription(
        self, audio_int16: np.ndarray, stop_event: threading.Event, beam_size: int = 5
    ) -> None:
        """Report each decoded segment as interim text, then the utterance as final."""
        parts: list[str] = []
        for text in self._segments(audio_int16, beam_size):
            parts.append(text)
            self._emit(RecognitionEvent([RecognitionResult([" ".join(parts)], is_final=False)]), stop_event)
        if parts:
            final = " ".join(parts)
            logger.debug(f"Transcription result: '{final}'")
            self._emit(RecognitionEvent([RecognitionResult([final], is_final=True)]), stop_event)
