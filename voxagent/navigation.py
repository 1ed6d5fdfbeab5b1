"""Navigation side effects: open destinations in the default web browser."""
from __future__ import annotations

import webbrowser

from .utils.logging_system import setup_log_system

logger = setup_log_system("navigation")


class WebBrowserNavigator:
    """Opens URLs in a new browser tab."""

    def open(self, url: str) -> None:
        logger.info(f"Opening {url}")
        if not webbrowser.open_new_tab(url):
            logger.warning(f"No browser accepted {url}")
