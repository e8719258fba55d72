"""Hex view of artifact bytes around a cursor address.

Rows follow ``hexdump -C`` layout so Pygments' hexdump lexer can colour them.
The cursor row is flagged with a marker column added after colouring.
"""

from __future__ import annotations

from functools import lru_cache

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import HexdumpLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

BYTES_PER_ROW = 16
DEFAULT_STYLE = "monokai"
CURSOR_MARKER = "> "
NO_MARKER = "  "


def _printable(byte: int) -> str:
    return chr(byte) if 0x20 <= byte < 0x7F else "."


def format_row(address: int, chunk: bytes) -> str:
    """Format one ``hexdump -C`` row for up to 16 bytes at ``address``."""
    cells = [f"{byte:02x}" for byte in chunk]
    cells.extend("  " for _ in range(BYTES_PER_ROW - len(chunk)))
    left = " ".join(cells[:8])
    right = " ".join(cells[8:])
    text = "".join(_printable(byte) for byte in chunk)
    return f"{address:08x}  {left}  {right}  |{text}|"


def window_rows(data: bytes, base: int, cursor: int, rows: int) -> list[tuple[int, bytes]]:
    """Select up to ``rows`` aligned rows of ``data`` centred on ``cursor``.

    ``base`` is the address of ``data[0]``; ``cursor`` is an absolute address.
    Returns ``(row_address, chunk)`` pairs.
    """
    if not data or rows <= 0:
        return []
    cursor_index = min(max(cursor - base, 0), len(data) - 1)
    cursor_row = cursor_index // BYTES_PER_ROW
    total_rows = (len(data) + BYTES_PER_ROW - 1) // BYTES_PER_ROW
    first = max(0, min(cursor_row - rows // 2, total_rows - rows))
    out: list[tuple[int, bytes]] = []
    for row in range(first, min(total_rows, first + rows)):
        start = row * BYTES_PER_ROW
        out.append((base + start, data[start : start + BYTES_PER_ROW]))
    return out


@lru_cache(maxsize=8)
def _formatter(style: str) -> TerminalFormatter:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        style = DEFAULT_STYLE
    return TerminalFormatter(style=style)


def colorize(text: str, style: str = DEFAULT_STYLE) -> str:
    """Colour hexdump text for a terminal."""
    return highlight(text, HexdumpLexer(), _formatter(style))


def render_hex_view(
    data: bytes,
    base: int,
    cursor: int,
    rows: int = 16,
    *,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
) -> str:
    """Render the hex window around ``cursor`` with the cursor row marked."""
    selected = window_rows(data, base, cursor, rows)
    if not selected:
        return ""
    plain = [format_row(address, chunk) for address, chunk in selected]
    if no_color:
        lines = plain
    else:
        lines = colorize("\n".join(plain) + "\n", style).splitlines()
        if len(lines) != len(plain):
            lines = plain
    out: list[str] = []
    for (address, chunk), line in zip(selected, lines):
        marked = address <= cursor < address + len(chunk)
        out.append((CURSOR_MARKER if marked else NO_MARKER) + line)
    return "\n".join(out) + "\n"


__all__ = [
    "BYTES_PER_ROW",
    "format_row",
    "window_rows",
    "colorize",
    "render_hex_view",
]
