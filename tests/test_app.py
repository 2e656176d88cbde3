"""Tests for the plain dump path and Pygments colorization."""

from __future__ import annotations

import io
import re
import unittest
from pathlib import Path
from unittest import mock

from hexview import app
from hexview.highlight import DEFAULT_STYLE, colorize_dump

ANSI_SGR_RE = re.compile(r"\x1b\[[0-9;]*m")


class RenderDumpTests(unittest.TestCase):
    def test_dump_lists_every_line_without_trailing_padding(self) -> None:
        dump = app.render_dump(b"A" * 16 + b"hi!")

        lines = dump.splitlines()
        self.assertEqual(len(lines), 2)
        self.assertEqual(lines[0], "00000000: " + " ".join(["41"] * 16) + "  " + "A" * 16)
        self.assertEqual(lines[1], "00000010: 68 69 21" + " " * 41 + "hi.")

    def test_dump_respects_max_cols(self) -> None:
        self.assertEqual(app.render_dump(b"\x10\x20", max_cols=12), "00000000: 10\n")

    def test_empty_content_prints_nothing(self) -> None:
        self.assertEqual(app.render_dump(b""), "")


class RunViewerTests(unittest.TestCase):
    def test_nopager_writes_plain_dump(self) -> None:
        stdout = io.StringIO()
        with mock.patch("hexview.app.sys.stdout", stdout), mock.patch(
            "hexview.app.run_main_loop"
        ) as loop_mock:
            app.run_viewer(b"ok", Path("x.bin"), "monokai", no_color=True, nopager=True)

        loop_mock.assert_not_called()
        self.assertEqual(stdout.getvalue(), app.render_dump(b"ok"))

    def test_non_tty_stdin_falls_back_to_plain_dump(self) -> None:
        stdout = io.StringIO()
        stdin = mock.Mock()
        stdin.fileno.return_value = 0
        with mock.patch("hexview.app.sys.stdout", stdout), mock.patch("hexview.app.sys.stdin", stdin), mock.patch(
            "hexview.app.os.isatty", return_value=False
        ), mock.patch("hexview.app.TerminalController") as controller_cls:
            app.run_viewer(b"ok", Path("x.bin"), "monokai", no_color=True, nopager=False)

        controller_cls.assert_not_called()
        self.assertTrue(stdout.getvalue().startswith("00000000: 6f 6b"))

    def test_tty_stdout_gets_colorized_dump(self) -> None:
        stdout = mock.Mock()
        stdout.fileno.return_value = 1
        with mock.patch("hexview.app.sys.stdout", stdout), mock.patch(
            "hexview.app.os.isatty", return_value=True
        ), mock.patch("hexview.app.colorize_dump", return_value="COLORED") as colorize_mock:
            app.run_viewer(b"ok", Path("x.bin"), "native", no_color=False, nopager=True)

        colorize_mock.assert_called_once_with(app.render_dump(b"ok"), "native")
        stdout.write.assert_called_once_with("COLORED")

    def test_interactive_mode_runs_loop_inside_raw_mode(self) -> None:
        stdin = mock.Mock()
        stdin.fileno.return_value = 0
        stdout = mock.Mock()
        stdout.fileno.return_value = 1
        with mock.patch("hexview.app.sys.stdin", stdin), mock.patch("hexview.app.sys.stdout", stdout), mock.patch(
            "hexview.app.os.isatty", return_value=True
        ), mock.patch("hexview.app.TerminalController") as controller_cls, mock.patch(
            "hexview.app.run_main_loop"
        ) as loop_mock:
            app.run_viewer(b"data", Path("x.bin"), "monokai", no_color=False, nopager=False)

        controller_cls.assert_called_once_with(0, 1)
        terminal = controller_cls.return_value
        terminal.raw_mode.assert_called_once()
        loop_mock.assert_called_once_with(b"data", terminal)


class ColorizeDumpTests(unittest.TestCase):
    def test_colorized_output_contains_ansi_and_original_text(self) -> None:
        dump = app.render_dump(b"Hello, world")

        colored = colorize_dump(dump)

        self.assertIn("\x1b[", colored)
        self.assertEqual(ANSI_SGR_RE.sub("", colored), dump)

    def test_unknown_style_falls_back_to_default(self) -> None:
        dump = app.render_dump(b"abc")

        colored = colorize_dump(dump, style="no-such-style")

        self.assertEqual(colored, colorize_dump(dump, style=DEFAULT_STYLE))

    def test_style_changes_colors(self) -> None:
        dump = app.render_dump(b"Hello, world")

        monokai = colorize_dump(dump, style="monokai")
        solarized = colorize_dump(dump, style="solarized-light")

        self.assertNotEqual(monokai, solarized)
        self.assertNotEqual(monokai, colorize_dump(dump, style="bw"))
        self.assertEqual(ANSI_SGR_RE.sub("", solarized), dump)


if __name__ == "__main__":
    unittest.main()
