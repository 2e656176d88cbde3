"""In-memory terminal used by viewport, render, and loop tests.

Implements the same cursor/size/write capability as
``hexview.terminal.TerminalController`` and records what was painted.
"""

from __future__ import annotations


class FakeTerminal:
    def __init__(self, cols: int = 80, rows: int = 6, events: list[str] | None = None) -> None:
        self.cols = cols
        self.rows = rows
        self.col = 0
        self.row = 0
        self.events = list(events or [])
        self.screen: dict[int, str] = {}
        self.moves: list[tuple[int, int]] = []
        self.cursor_queries = 0
        self.size_queries = 0
        self.repaints = 0
        self._saved: tuple[int, int] | None = None

    def get_cursor(self) -> tuple[int, int]:
        self.cursor_queries += 1
        return self.col, self.row

    def get_size(self) -> tuple[int, int]:
        self.size_queries += 1
        return self.cols, self.rows

    def move_cursor(self, col: int, row: int) -> None:
        self.moves.append((col, row))
        self.col, self.row = col, row

    def write_text(self, text: str) -> None:
        self.screen[self.row] = text
        self.col += len(text)

    def save_cursor(self) -> None:
        self.repaints += 1
        self._saved = (self.col, self.row)

    def restore_cursor(self) -> None:
        assert self._saved is not None
        self.col, self.row = self._saved
        self._saved = None

    def read_event(self) -> str:
        if not self.events:
            return ""
        event = self.events.pop(0)
        if event.startswith("RESIZE="):
            cols, rows = event.split("=", 1)[1].split("x")
            self.cols, self.rows = int(cols), int(rows)
            return "RESIZE"
        return event
