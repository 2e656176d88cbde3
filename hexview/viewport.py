"""Viewport scroll state machine and redraw decision policy.

``decide`` is the pure core: given an intent, the current scroll offset and a
fresh snapshot of terminal state, it returns the new offset, where the cursor
should go, and whether the screen needs a full repaint.

``ViewportController`` wraps it with an injected terminal capability. Cursor
position and terminal size are re-read before every decision and never
cached, since a resize can invalidate them between any two events.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Protocol

from .formatting import LINE_LENGTH

logger = logging.getLogger(__name__)

LEFT_MARGIN = 10
RIGHT_LIMIT = LEFT_MARGIN + LINE_LENGTH * 3


class Intent(enum.Enum):
    """Navigation requests understood by the viewport."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    LINE_START = "line_start"
    LINE_END = "line_end"
    GOTO_START = "goto_start"
    GOTO_END = "goto_end"
    RESIZE = "resize"


class TerminalCapability(Protocol):
    """Terminal operations the viewport needs; all positions are 0-based."""

    def get_cursor(self) -> tuple[int, int]:
        """Return current ``(col, row)``."""

    def get_size(self) -> tuple[int, int]:
        """Return current ``(cols, rows)``."""

    def move_cursor(self, col: int, row: int) -> None:
        """Place the cursor at ``(col, row)``."""


@dataclass(frozen=True)
class TerminalSnapshot:
    """Terminal state read immediately before one decision."""

    col: int
    row: int
    rows: int
    total_lines: int

    @property
    def visible_rows(self) -> int:
        return visible_rows(self.rows)

    @property
    def max_start(self) -> int:
        return max_start(self.total_lines, self.rows)


@dataclass(frozen=True)
class ViewportDecision:
    """Outcome of one navigation intent."""

    start: int
    cursor: tuple[int, int] | None
    requires_redraw: bool


def visible_rows(rows: int) -> int:
    """Rows available for content; the last terminal row holds the status line."""
    return max(0, rows - 1)


def max_start(total_lines: int, rows: int) -> int:
    """Largest valid scroll offset for ``total_lines`` on a ``rows``-high terminal."""
    return max(0, total_lines - visible_rows(rows))


def _clamp(value: int, lo: int, hi: int) -> int:
    return lo if value < lo else hi if value > hi else value


def decide(intent: Intent, start: int, snapshot: TerminalSnapshot) -> ViewportDecision:
    """Resolve ``intent`` against ``start`` and ``snapshot`` without side effects."""
    col, row = snapshot.col, snapshot.row
    bottom_row = snapshot.visible_rows - 1
    limit = snapshot.max_start

    if bottom_row < 0 and intent is not Intent.RESIZE:
        # Only the status row fits; there is no content to move through.
        return ViewportDecision(start, None, False)

    if intent is Intent.UP:
        if row > 0:
            return ViewportDecision(start, (col, row - 1), False)
        if start > 0:
            return ViewportDecision(start - 1, None, True)
        return ViewportDecision(start, None, False)

    if intent is Intent.DOWN:
        if row < bottom_row:
            return ViewportDecision(start, (col, row + 1), False)
        if start < limit:
            return ViewportDecision(start + 1, None, True)
        return ViewportDecision(start, None, False)

    if intent is Intent.LEFT:
        if col > LEFT_MARGIN:
            return ViewportDecision(start, (col - 1, row), False)
        return ViewportDecision(start, None, False)

    if intent is Intent.RIGHT:
        if col < RIGHT_LIMIT:
            return ViewportDecision(start, (col + 1, row), False)
        return ViewportDecision(start, None, False)

    if intent is Intent.LINE_START:
        return ViewportDecision(start, (LEFT_MARGIN, row), False)

    if intent is Intent.LINE_END:
        return ViewportDecision(start, (RIGHT_LIMIT, row), False)

    if intent is Intent.GOTO_START:
        return ViewportDecision(0, (LEFT_MARGIN, 0), start != 0)

    if intent is Intent.GOTO_END:
        cursor = (LEFT_MARGIN, bottom_row)
        if start < limit:
            return ViewportDecision(limit, cursor, True)
        return ViewportDecision(start, cursor, False)

    if intent is Intent.RESIZE:
        # Keep both the offset and the cursor inside the new layout.
        cursor = (_clamp(col, LEFT_MARGIN, RIGHT_LIMIT), _clamp(row, 0, max(0, bottom_row)))
        return ViewportDecision(
            _clamp(start, 0, limit),
            cursor if cursor != (col, row) else None,
            True,
        )

    raise ValueError(f"unknown viewport intent: {intent!r}")


class ViewportController:
    """Owns the scroll offset and applies intents through a live terminal."""

    def __init__(self, terminal: TerminalCapability, total_lines: int, start: int = 0) -> None:
        self.terminal = terminal
        self.total_lines = total_lines
        self.start = start

    def snapshot(self) -> TerminalSnapshot:
        """Read cursor and size fresh from the terminal."""
        col, row = self.terminal.get_cursor()
        _cols, rows = self.terminal.get_size()
        return TerminalSnapshot(col=col, row=row, rows=rows, total_lines=self.total_lines)

    def apply(self, intent: Intent) -> bool:
        """Apply ``intent`` and return whether a full redraw is required."""
        decision = decide(intent, self.start, self.snapshot())
        if decision.start != self.start:
            logger.debug("scroll %s: start %d -> %d", intent.value, self.start, decision.start)
        self.start = decision.start
        if decision.cursor is not None:
            self.terminal.move_cursor(*decision.cursor)
        return decision.requires_redraw

    def home(self) -> None:
        """Place the cursor at the first hex column of the top row."""
        self.terminal.move_cursor(LEFT_MARGIN, 0)
