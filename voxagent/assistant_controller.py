"""
Central controller for the voxagent assistant.

This module wires the command pipeline together: recognition events are
gated by the listening state, the final transcript is classified by the
``CommandRouter``, the resulting outcome is carried out (spoken feedback and
at most one navigation) and the turn is appended to the command history.

The ``AssistantController`` class also exposes the user actions of the
presentation layer: toggling listening, toggling mute and submitting a
command as text.
"""
from __future__ import annotations

import threading
from datetime import datetime
from typing import Callable, Optional

from . import config
from .commands import CommandRouter, RecognitionEvent, build_default_router
from .commands.normalizer import final_transcript, interim_transcript
from .ports import Navigator, SpeechInput, SpeechOutput
from .state import AgentState, CommandRecord, CommandStatus
from .utils.logging_system import setup_log_system

logger = setup_log_system("assistant_controller")

LISTENING_STARTED = "I'm listening"
LISTENING_STOPPED = "Listening stopped"
ERROR_ACTION = "Error processing command"


class AssistantController:
    """Coordinates recognition, classification, feedback and history."""

    def __init__(
        self,
        speech_output: SpeechOutput,
        navigator: Navigator,
        speech_input: Optional[SpeechInput] = None,
        *,
        router: Optional[CommandRouter] = None,
        state: Optional[AgentState] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.tts = speech_output
        self.navigator = navigator
        self.router = router or build_default_router()
        self.state = state or AgentState()
        self._clock = clock
        # Turns may arrive from the recognizer thread and from web requests.
        self._lock = threading.RLock()

        self.recognizer = speech_input
        if speech_input is not None:
            speech_input.on_result = self.handle_recognition_event
            speech_input.on_error = self.handle_recognition_error

    # ------------------------------------------------------------------
    # Spoken feedback
    # ------------------------------------------------------------------
    def speak(self, text: str) -> None:
        """Speak ``text`` unless muted, interrupting whatever is being said."""
        if self.state.muted:
            logger.debug(f"Muted; not speaking: {text}")
            return
        self.tts.cancel()
        self.tts.speak(
            text,
            rate=config.SPEECH_RATE,
            pitch=config.SPEECH_PITCH,
            volume=config.SPEECH_VOLUME,
        )

    def toggle_mute(self) -> bool:
        """Flip the mute flag; muting cuts off the current utterance.  Returns the new flag."""
        with self._lock:
            muted = self.state.toggle_mute()
            if muted:
                self.tts.cancel()
            logger.info("Speech muted." if muted else "Speech unmuted.")
            return muted

    # ------------------------------------------------------------------
    # Listening lifecycle
    # ------------------------------------------------------------------
    def toggle_listening(self) -> bool:
        """Start or stop speech recognition.  Returns ``True`` if now listening."""
        with self._lock:
            if self.state.is_listening:
                if self.recognizer is not None:
                    self.recognizer.stop()
                self.state.stop_listening()
                logger.info("Voice recognition disabled.")
                self.speak(LISTENING_STOPPED)
            else:
                if self.recognizer is not None:
                    self.recognizer.start()
                else:
                    logger.warning("No speech recognizer configured; only typed commands will work.")
                self.state.toggle_listening()
                logger.info("Voice recognition enabled.")
                self.speak(LISTENING_STARTED)
            return self.state.is_listening

    def handle_recognition_error(self, code: str) -> None:
        """Recognizer failure: drop back to idle.  The user has to resume manually."""
        logger.error(f"Speech recognition error: {code}")
        with self._lock:
            self.state.stop_listening()

    def handle_recognition_event(self, event: RecognitionEvent) -> Optional[CommandRecord]:
        """
        Consume one batch of recognition results.

        Interim text is kept for display only.  The concatenated final text,
        if any, is processed as a command.
        """
        with self._lock:
            if not self.state.is_listening:
                logger.debug("Recognition result received while idle. Ignoring.")
                return None
            self.state.interim_transcript = interim_transcript(event)
            transcript = final_transcript(event)
            if not transcript:
                return None
            self.state.transcript = transcript
            return self.process_command(transcript)

    # ------------------------------------------------------------------
    # Command processing
    # ------------------------------------------------------------------
    def submit(self, text: str) -> CommandRecord:
        """Process typed or clicked text exactly as if it had been spoken."""
        with self._lock:
            self.state.transcript = text
            return self.process_command(text)

    def process_command(self, text: str) -> CommandRecord:
        """
        Run one turn: classify ``text``, speak, navigate and record.

        Any exception raised along the way is logged and recorded as an
        error entry instead of propagating.
        """
        with self._lock:
            now = self._clock()
            logger.info(f"User command: {text}")
            try:
                outcome = self.router.route(text, now)
                logger.debug(f"Matched intent '{outcome.intent}' (argument: '{outcome.argument}')")
                self.speak(outcome.speech)
                if outcome.url:
                    self.navigator.open(outcome.url)
                record = self.state.record(text, outcome.action, CommandStatus.SUCCESS, now)
                self.state.current_action = outcome.action
                logger.info(f"Action: {outcome.action}")
            except Exception as e:
                logger.error(f"Error processing command: {e}", exc_info=True)
                record = self.state.record(text, ERROR_ACTION, CommandStatus.ERROR, now)
            return record
