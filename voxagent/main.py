"""
Command line entry point for voxagent.

``voxagent`` (or ``voxagent --web``) starts the web interface with the
microphone recognizer, Chatterbox speech output and the system browser.
``voxagent --say "navigate to central park"`` runs a single command
without audio and prints the resulting action label.
"""
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .assistant_controller import AssistantController
from .config import Settings
from .navigation import WebBrowserNavigator
from .state import CommandStatus
from .utils.logging_system import setup_log_system

logger = setup_log_system("main")


class LoggedSpeech:
    """Speech output that writes utterances to the log instead of the speakers."""

    def speak(self, text: str, *, rate: float = 1.0, pitch: float = 1.0, volume: float = 1.0) -> None:
        logger.info(f"Speaking: {text}")

    def cancel(self) -> None:
        pass


def build_controller(settings: Settings) -> AssistantController:
    """Create the controller with the real speech engines."""
    # Heavy model dependencies are only imported when audio is actually used.
    from .tts import TTSPlayer
    from .voice_recognition import STTEngine

    stt = STTEngine(
        model_size=settings.stt_model_size,
        device=settings.stt_device,
        compute_type=settings.stt_compute_type,
        language=settings.stt_language,
    )
    tts = TTSPlayer(device=settings.tts_device, audio_prompt_path=settings.tts_audio_prompt_path)
    return AssistantController(tts, WebBrowserNavigator(), stt)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="voxagent", description="Voice-driven command dispatcher.")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--web", action="store_true", help="serve the web interface (default)")
    mode.add_argument("--say", metavar="TEXT", help="run a single command and print the action taken")
    parser.add_argument("--host", help="web server host (default: WEB_HOST or 127.0.0.1)")
    parser.add_argument("--port", type=int, help="web server port (default: WEB_PORT or 5000)")
    parser.add_argument("--no-browser", action="store_true", help="do not open the web page on startup")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = Settings.from_env()

    if args.say is not None:
        controller = AssistantController(LoggedSpeech(), WebBrowserNavigator())
        record = controller.submit(args.say)
        print(record.action)
        return 0 if record.status is CommandStatus.SUCCESS else 1

    from .web.flask_app import run_app

    controller = build_controller(settings)
    host = args.host or settings.web_host
    port = args.port or settings.web_port
    logger.info(f"Serving voxagent on http://{host}:{port}")
    try:
        run_app(controller, host=host, port=port, auto_open=settings.web_auto_open and not args.no_browser)
    except KeyboardInterrupt:
        logger.debug("Shutting down (KeyboardInterrupt received)…")
    finally:
        if controller.recognizer is not None:
            controller.recognizer.stop()
        logger.info("Application terminated.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
