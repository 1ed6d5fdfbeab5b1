"""
Flask application providing the web interface for the voxagent assistant.

This module serves a single page showing the listening/mute state, the
last transcript and action, the capability cards and the recent command
history.  The page talks to a small JSON API with ``fetch()``: toggling
listening and mute, submitting a command as text (capability cards use the
same endpoint), clearing the history and reading recent log lines.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, List

from flask import Flask, jsonify, render_template, request

from ..assistant_controller import AssistantController
from ..commands import CAPABILITIES

LOG_BUFFER_MAX = 200  # store up to 200 lines


class WebLogHandler(logging.Handler):
    """Logging handler keeping the most recent formatted records in memory."""

    def __init__(self, maxlen: int = LOG_BUFFER_MAX) -> None:
        super().__init__(level=logging.DEBUG)
        self.maxlen = maxlen
        self.lines: List[str] = []
        self.setFormatter(logging.Formatter("[%(asctime)s] [%(levelname)s] %(message)s", "%H:%M:%S"))

    def emit(self, record: logging.LogRecord) -> None:
        self.lines.append(self.format(record))
        if len(self.lines) > self.maxlen:
            del self.lines[: len(self.lines) - self.maxlen]


def create_app(controller: AssistantController, *, capture_logs: bool = True) -> Flask:
    """
    Build the Flask app around ``controller``.

    With ``capture_logs`` a :class:`WebLogHandler` is attached to the root
    logger so ``/api/logs`` can show what the assistant is doing.
    """
    app = Flask(__name__, template_folder="templates")
    app.config["controller"] = controller

    # Suppress default HTTP request logging from Werkzeug to keep the log view readable.
    logging.getLogger("werkzeug").setLevel(logging.WARNING)

    log_handler = WebLogHandler()
    if capture_logs:
        logging.getLogger().addHandler(log_handler)
    app.config["log_handler"] = log_handler

    @app.route("/")
    def index() -> str:
        """Serve the main web page."""
        return render_template("index.html", capabilities=CAPABILITIES)

    @app.route("/api/status", methods=["GET"])
    def api_status() -> Any:
        """Return listening/mute state, last transcript/action and the history."""
        return jsonify(controller.state.snapshot())

    @app.route("/api/listen/toggle", methods=["POST"])
    def api_toggle_listening() -> Any:
        listening = controller.toggle_listening()
        return jsonify(listening=listening)

    @app.route("/api/mute/toggle", methods=["POST"])
    def api_toggle_mute() -> Any:
        muted = controller.toggle_mute()
        return jsonify(muted=muted)

    @app.route("/api/command", methods=["POST"])
    def api_command() -> Any:
        """Run a typed or clicked command through the same pipeline as speech."""
        data = request.get_json(silent=True)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            return jsonify(error="Expected a JSON object"), 400
        text = data.get("text")
        if text is None:
            text = ""
        if not isinstance(text, str):
            return jsonify(error="Command text must be a string"), 400
        if not text.strip():
            return jsonify(error="Empty command"), 400
        record = controller.submit(text)
        return jsonify(record=record.to_dict(), current_action=controller.state.current_action)

    @app.route("/api/capabilities", methods=["GET"])
    def api_capabilities() -> Any:
        return jsonify(capabilities=[{"label": label, "example": example} for label, example in CAPABILITIES])

    @app.route("/api/history", methods=["GET"])
    def api_history() -> Any:
        return jsonify(history=[entry.to_dict() for entry in controller.state.history])

    @app.route("/api/history/clear", methods=["POST"])
    def api_clear_history() -> Any:
        controller.state.clear()
        return jsonify(success=True)

    @app.route("/api/logs", methods=["GET"])
    def api_logs() -> Any:
        """Return the recent log lines."""
        return jsonify(logs=list(log_handler.lines))

    return app


def run_app(
    controller: AssistantController,
    host: str = "127.0.0.1",
    port: int = 5000,
    debug: bool = False,
    *,
    auto_open: bool = True,
) -> None:
    """
    Run the Flask development server.  Intended to be called from main.

    Parameters
    ----------
    host, port: specify where the server should listen.
    debug: whether to enable Flask debugging (reloader disabled).
    auto_open: if True, open the default web browser to the application URL.
    """
    app = create_app(controller)
    if auto_open:
        import webbrowser

        # Use a timer so the call does not block the server startup
        threading.Timer(1.0, webbrowser.open, args=(f"http://{host}:{port}",)).start()
    app.run(host=host, port=port, debug=debug, use_reloader=False)
