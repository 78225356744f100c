"""Keyboard handling and terminal setup for the dashboard."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from devdash.state import ActivePanel, App

POLL_TIMEOUT = 0.25
CTRL_C = "\x03"
TAB = "\t"
BACKTAB = "\x1b[Z"

_PANEL_KEYS = {
    "1": ActivePanel.GIT,
    "2": ActivePanel.CI_CD,
    "3": ActivePanel.TASKS,
    "4": ActivePanel.QUALITY,
}


def handle_key(app: App, key: str) -> None:
    """Apply one keystroke to the application state."""
    name = getattr(key, "name", None)
    text = str(key)
    if text in ("q", CTRL_C):
        app.quit()
    elif name == "KEY_BTAB" or text == BACKTAB:
        app.prev_panel()
    elif name == "KEY_TAB" or text == TAB:
        app.next_panel()
    elif text in _PANEL_KEYS:
        app.active_panel = _PANEL_KEYS[text]


def handle_events(app: App, term: Any) -> None:
    """Wait briefly for a key and apply it if one arrives."""
    key = term.inkey(timeout=POLL_TIMEOUT)
    if key:
        handle_key(app, key)


@contextmanager
def tui_session(term: Any = None) -> Iterator[Any]:
    """Run in the alternate screen with raw input, restoring the terminal on exit."""
    if term is None:
        from blessed import Terminal

        term = Terminal()
    with term.fullscreen(), term.raw():
        term.stream.write(term.clear)
        term.stream.flush()
        yield term