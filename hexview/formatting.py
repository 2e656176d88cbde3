"""Pure hex-dump line formatting.

Maps one logical line of the content buffer to a fixed-width display row:
an address field, a padded hex byte group, and an ASCII gutter.
"""

from __future__ import annotations

LINE_LENGTH = 16
ADDRESS_DIGITS = 8


def total_lines(buffer: bytes, bytes_per_line: int = LINE_LENGTH) -> int:
    """Return how many logical lines ``buffer`` spans (last one may be short)."""
    return -(-len(buffer) // bytes_per_line)


def natural_line_width(bytes_per_line: int = LINE_LENGTH) -> int:
    """Width of a formatted line before any padding or truncation."""
    # "AAAAAAAA: " + hex group + " " + ascii gutter
    return ADDRESS_DIGITS + 2 + bytes_per_line * 3 + 1 + bytes_per_line


def fit_width(text: str, width: int) -> str:
    """Right-pad with spaces or truncate so ``text`` is exactly ``width`` long."""
    if width <= 0:
        return ""
    if len(text) < width:
        return text + " " * (width - len(text))
    return text[:width]


def _ascii_gutter_char(value: int) -> str:
    ch = chr(value)
    if ch.isascii() and ch.isalnum():
        return ch
    return "."


def format_line(buffer: bytes, line_index: int, bytes_per_line: int, output_width: int) -> str:
    """Render one buffer line as ``address: hex-bytes ascii`` at ``output_width``.

    Lines past the end of ``buffer`` still show their address with empty hex
    and ASCII fields. The hex field is always padded to ``bytes_per_line * 3``
    columns so the ASCII gutter lines up on short final lines.
    """
    offset = line_index * bytes_per_line
    chunk = buffer[offset : offset + bytes_per_line]
    hex_group = " ".join(f"{value:02x}" for value in chunk)
    gutter = "".join(_ascii_gutter_char(value) for value in chunk)
    line = f"{offset:0{ADDRESS_DIGITS}x}: {hex_group:<{bytes_per_line * 3}} {gutter}"
    return fit_width(line, output_width)
