"""Terminal control helpers for the viewer session.

Owns raw-mode lifecycle, alternate-screen switching, mouse capture, and the
resize self-pipe. Also implements the cursor/size/write capability the
viewport and renderer are driven through.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import signal
import termios
import tty

from .input import TerminalQueryError, read_cursor_report, read_key

logger = logging.getLogger(__name__)


class TerminalController:
    """Manage terminal mode transitions and expose cursor and size queries."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._wake_r: int | None = None
        self._wake_w: int | None = None
        self._previous_winch_handler = None

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with mouse reporting enabled."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen and enable SGR mouse reporting; the cursor stays visible.
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?1000h\x1b[?1006h")

    def disable_tui_mode(self) -> None:
        """Restore normal terminal state and disable mouse reporting."""
        os.write(self.stdout_fd, b"\x1b[?1000l\x1b[?1006l\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def _on_winch(self, _signum, _frame) -> None:
        if self._wake_w is not None:
            try:
                os.write(self._wake_w, b"R")
            except BlockingIOError:
                # Pipe already full; a resize is pending anyway.
                pass

    def install_resize_watch(self) -> None:
        """Route ``SIGWINCH`` into a self-pipe so resizes wake ``read_event``."""
        self._wake_r, self._wake_w = os.pipe()
        os.set_blocking(self._wake_w, False)
        self._previous_winch_handler = signal.signal(signal.SIGWINCH, self._on_winch)

    def remove_resize_watch(self) -> None:
        """Restore the previous ``SIGWINCH`` handler and close the self-pipe."""
        if self._previous_winch_handler is not None:
            signal.signal(signal.SIGWINCH, self._previous_winch_handler)
            self._previous_winch_handler = None
        for fd in (self._wake_r, self._wake_w):
            if fd is not None:
                os.close(fd)
        self._wake_r = self._wake_w = None

    def read_event(self) -> str:
        """Block until the next key, mouse, or resize token arrives."""
        return read_key(self.stdin_fd, wake_fd=self._wake_r)

    def get_cursor(self) -> tuple[int, int]:
        """Ask the terminal where the cursor is; returns 0-based ``(col, row)``."""
        os.write(self.stdout_fd, b"\x1b[6n")
        try:
            return read_cursor_report(self.stdin_fd)
        except TerminalQueryError:
            logger.error("cursor position query failed")
            raise

    def get_size(self) -> tuple[int, int]:
        """Return current ``(cols, rows)``."""
        term = shutil.get_terminal_size((80, 24))
        return term.columns, term.lines

    def move_cursor(self, col: int, row: int) -> None:
        """Place the cursor at 0-based ``(col, row)``."""
        os.write(self.stdout_fd, f"\x1b[{row + 1};{col + 1}H".encode("ascii"))

    def write_text(self, text: str) -> None:
        """Write ``text`` at the current cursor position."""
        os.write(self.stdout_fd, text.encode("utf-8"))

    def save_cursor(self) -> None:
        os.write(self.stdout_fd, b"\x1b7")

    def restore_cursor(self) -> None:
        os.write(self.stdout_fd, b"\x1b8")

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            self.install_resize_watch()
            yield
        finally:
            self.remove_resize_watch()
            self.disable_tui_mode()
