"""Command-line front door for hexview.

Parses CLI options, loads the target file, and sets up optional debug
logging. Then dispatches into the interactive viewer or the plain dump.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from . import __version__
from .app import run_viewer
from .config import load_log_file, load_log_level, load_style_name
from .highlight import DEFAULT_STYLE


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def configure_logging(log_file: Path | None, level: int) -> None:
    """Attach a file handler to the package logger when a log file is set.

    The terminal is in raw mode while the viewer runs, so nothing is logged
    to stderr.
    """
    package_logger = logging.getLogger("hexview")
    if log_file is None:
        package_logger.addHandler(logging.NullHandler())
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


def read_content(path: Path) -> bytes:
    """Load the whole file, turning filesystem errors into a startup exit."""
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_file():
        raise SystemExit(f"Not a file: {path}")
    try:
        return path.read_bytes()
    except OSError as exc:
        raise SystemExit(f"Cannot read {path}: {exc.strerror or exc}") from exc


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the hex viewer on one file."""
    parser = argparse.ArgumentParser(
        description="View a file as a hex dump in an interactive terminal viewer."
    )
    parser.add_argument("path", help="Path to the file to view.")
    parser.add_argument("--style", default=None, help="Pygments style name for --nopager output.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--nopager", action="store_true", help="Print the dump directly without interactive paging.")
    parser.add_argument(
        "--max-cols",
        type=_positive_int,
        default=None,
        help="Truncate --nopager output lines to this many columns.",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug log records to this file.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    configure_logging(args.log_file or load_log_file(), load_log_level())

    path = Path(args.path)
    content = read_content(path)
    style = args.style or load_style_name() or DEFAULT_STYLE
    run_viewer(content, path, style, args.no_color, args.nopager, args.max_cols)


if __name__ == "__main__":
    main()
