"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized event tokens.
Handles ESC-sequence timing, SGR mouse wheel events, resize wake-ups, and
cursor position reports.
"""

from __future__ import annotations

import logging
import os
import re
import select

logger = logging.getLogger(__name__)

ESC_SEQUENCE_TIMEOUT_MS = 25
CURSOR_REPORT_TIMEOUT_MS = 1000
RESIZE_EVENT = "RESIZE"
_PENDING_BYTES: list[bytes] = []
_CURSOR_REPORT_RE = re.compile(rb"\x1b\[(\d+);(\d+)R")


class TerminalQueryError(RuntimeError):
    """Raised when the terminal does not answer a state query correctly."""


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    if _PENDING_BYTES:
        return _PENDING_BYTES.pop(0)
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _drain(fd: int) -> None:
    while True:
        ready, _, _ = select.select([fd], [], [], 0)
        if not ready or not os.read(fd, 64):
            return


def read_key(fd: int, timeout_ms: int | None = None, wake_fd: int | None = None) -> str:
    """Block until one event token is available and return it.

    ``wake_fd`` is a pipe written to on terminal resize; activity on it yields
    ``RESIZE``. An empty string means the timeout elapsed or stdin closed.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        watched = [fd] if wake_fd is None else [fd, wake_fd]
        timeout = None if timeout_ms is None else max(0.0, timeout_ms / 1000.0)
        ready, _, _ = select.select(watched, [], [], timeout)
        if not ready:
            return ""
        if wake_fd is not None and wake_fd in ready:
            _drain(wake_fd)
            return RESIZE_EVENT

        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch != b"\x1b":
        return ch.decode("utf-8", errors="replace")

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq != b"[":
        _PENDING_BYTES.insert(0, seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"A":
        return "UP"
    if seq == b"B":
        return "DOWN"
    if seq == b"C":
        return "RIGHT"
    if seq == b"D":
        return "LEFT"
    if seq == b"<":
        # SGR mouse: ESC [ < btn ; col ; row (M/m)
        payload = []
        while True:
            part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
            if part is None:
                return "ESC"
            if part in {b"M", b"m"}:
                break
            payload.append(part)
            if len(payload) > 64:
                return "ESC"
        try:
            btn_s, col_s, row_s = b"".join(payload).decode("ascii").split(";")
            btn = int(btn_s)
            col = int(col_s)
            row = int(row_s)
        except ValueError:
            return "ESC"
        button = btn & 0b11
        is_wheel = (btn & 0b0100_0000) != 0
        if is_wheel:
            if button == 0:
                return f"MOUSE_WHEEL_UP:{col}:{row}"
            if button == 1:
                return f"MOUSE_WHEEL_DOWN:{col}:{row}"
        return "MOUSE"
    return "ESC"


def read_cursor_report(fd: int, timeout_ms: int = CURSOR_REPORT_TIMEOUT_MS) -> tuple[int, int]:
    """Read a ``CSI row ; col R`` reply and return 0-based ``(col, row)``.

    Bytes that arrive ahead of the reply (keys typed while the query was in
    flight) are queued so ``read_key`` still sees them.
    """
    skipped: list[bytes] = []
    while True:
        ch = _read_ready_byte(fd, timeout_ms)
        if ch is None:
            _PENDING_BYTES[:0] = skipped
            raise TerminalQueryError("terminal did not answer cursor position query")
        if ch != b"\x1b":
            skipped.append(ch)
            continue
        reply = bytearray(ch)
        while True:
            part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
            if part is None:
                skipped.extend(bytes([value]) for value in reply)
                _PENDING_BYTES[:0] = skipped
                raise TerminalQueryError(f"truncated cursor position report: {bytes(reply)!r}")
            if part == b"\x1b":
                # A new sequence starts; re-read it on the next pass.
                _PENDING_BYTES.insert(0, part)
                break
            reply += part
            if part == b"R" or not (part.isdigit() or part in {b"[", b";"}):
                break
        match = _CURSOR_REPORT_RE.fullmatch(bytes(reply))
        if match is None:
            # Some other escape sequence (arrow key, mouse) raced the reply.
            logger.debug("deferring %r read while waiting for cursor report", bytes(reply))
            skipped.extend(bytes([value]) for value in reply)
            continue
        _PENDING_BYTES[:0] = skipped
        row = int(match.group(1)) - 1
        col = int(match.group(2)) - 1
        return col, row
