"""Main interactive event loop for the hex viewer.

Blocks on the next input event, dispatches it through the key bindings, and
repaints only when the viewport signals that a redraw is required.
"""

from __future__ import annotations

import logging
from typing import Protocol

from .formatting import total_lines
from .keys import ViewerKeyHandler
from .render import RenderTarget, render_screen
from .viewport import TerminalCapability, ViewportController

logger = logging.getLogger(__name__)


class LoopTerminal(TerminalCapability, RenderTarget, Protocol):
    """Everything ``run_main_loop`` needs from the terminal."""

    def read_event(self) -> str: ...


def run_main_loop(content: bytes, terminal: LoopTerminal) -> ViewportController:
    """Run the interactive loop until the quit key is pressed.

    The caller owns raw-mode setup; this only paints, reads, and dispatches.
    Returns the viewport so callers and tests can inspect the final state.
    """
    viewport = ViewportController(terminal, total_lines(content))
    keys = ViewerKeyHandler(viewport)
    logger.info("viewing %d bytes (%d lines)", len(content), viewport.total_lines)

    render_screen(terminal, content, viewport.start)
    viewport.home()

    while True:
        key = terminal.read_event()
        if key == "":
            # stdin closed; nothing more can arrive.
            logger.info("input closed, leaving viewer")
            break
        requires_redraw = keys.handle(key)
        if keys.should_quit:
            break
        if requires_redraw:
            render_screen(terminal, content, viewport.start)
    return viewport
