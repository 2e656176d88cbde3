"""Full-screen repaint of the hex dump and status line."""

from __future__ import annotations

import logging
from typing import Protocol

from .formatting import LINE_LENGTH, fit_width, format_line
from .viewport import visible_rows

logger = logging.getLogger(__name__)

STATUS_MESSAGE = "Press 'q' to quit"


class RenderTarget(Protocol):
    """Terminal operations used by ``render_screen``."""

    def get_size(self) -> tuple[int, int]: ...

    def move_cursor(self, col: int, row: int) -> None: ...

    def write_text(self, text: str) -> None: ...

    def save_cursor(self) -> None: ...

    def restore_cursor(self) -> None: ...


def render_screen(terminal: RenderTarget, content: bytes, start: int, status: str = STATUS_MESSAGE) -> None:
    """Repaint every visible row starting at line ``start``, then the status row.

    The user's cursor is saved before and restored after, so a repaint never
    moves it.
    """
    cols, rows = terminal.get_size()
    content_rows = visible_rows(rows)
    logger.debug("repaint start=%d cols=%d rows=%d", start, cols, rows)
    terminal.save_cursor()
    for row in range(content_rows):
        terminal.move_cursor(0, row)
        terminal.write_text(format_line(content, start + row, LINE_LENGTH, cols))
    terminal.move_cursor(0, rows - 1)
    terminal.write_text(fit_width(status, cols))
    terminal.restore_cursor()
