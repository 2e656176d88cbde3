"""Viewer bootstrap: pick interactive or plain output and wire the terminal."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from .formatting import LINE_LENGTH, format_line, natural_line_width, total_lines
from .highlight import colorize_dump
from .loop import run_main_loop
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def render_dump(content: bytes, max_cols: int | None = None) -> str:
    """Render every line of ``content`` as newline-terminated dump text."""
    width = natural_line_width(LINE_LENGTH) if max_cols is None else max_cols
    return "".join(
        format_line(content, index, LINE_LENGTH, width).rstrip() + "\n"
        for index in range(total_lines(content, LINE_LENGTH))
    )


def run_viewer(
    content: bytes,
    path: Path,
    style: str,
    no_color: bool,
    nopager: bool,
    max_cols: int | None = None,
) -> None:
    """Show ``content`` interactively, or print it when paging is not possible."""
    if nopager or not os.isatty(sys.stdin.fileno()):
        rendered = render_dump(content, max_cols)
        if not no_color and os.isatty(sys.stdout.fileno()):
            rendered = colorize_dump(rendered, style)
        sys.stdout.write(rendered)
        return

    logger.info("opening %s", path)
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(sys.stdin.fileno(), stdout_fd)
    with terminal.raw_mode():
        run_main_loop(content, terminal)
