"""Drawing capability used by the menu renderer.

Provides a ``Terminal`` protocol describing the abstract drawing
operations the menu needs, and ``AnsiTerminal``, which renders them as
ANSI/VT100 escape sequences onto an outbound :class:`ByteChannel`.
"""

from __future__ import annotations

import os
from typing import Protocol, Union

from pi.menu.streams import ByteChannel

Color = Union[str, int]

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_CSI = "\x1b["
_POSITION_FMT = "\x1b[{y};{x}H"
_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_RESET_ATTRIBUTES = "\x1b[0m"
_BRIGHT = "\x1b[1m"
_FULL_RESET = "\x1bc"

COLORS: dict[str, int] = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
}


def color_code(color: Color, *, background: bool) -> str:
    """Return the SGR parameter string selecting *color*.

    Named colors map onto the 8-color palette (30-37 / 40-47); integers
    0-255 use the 256-color form (``38;5;n`` / ``48;5;n``).
    """
    if isinstance(color, bool):
        raise ValueError(f"invalid color: {color!r}")
    if isinstance(color, int):
        if not 0 <= color <= 255:
            raise ValueError(f"color index out of range: {color}")
        return f"{48 if background else 38};5;{color}"
    try:
        index = COLORS[color.lower()]
    except (KeyError, AttributeError):
        raise ValueError(f"unknown color: {color!r}") from None
    return str((40 if background else 30) + index)


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for the drawing operations a menu issues."""

    def move_cursor(self, x: int, y: int) -> None: ...

    def set_foreground(self, color: Color) -> None: ...

    def set_background(self, color: Color) -> None: ...

    def write(self, text: str) -> None: ...

    def set_cursor_visible(self, visible: bool) -> None: ...

    def reset_attributes(self) -> None: ...

    def set_bright(self) -> None: ...

    def full_reset(self) -> None: ...

    def end(self) -> None: ...


# ---------------------------------------------------------------------------
# AnsiTerminal implementation
# ---------------------------------------------------------------------------


class AnsiTerminal:
    """Terminal that encodes drawing operations as ANSI sequences.

    Output goes to *output* as UTF-8. When ``PI_MENU_WRITE_LOG`` names a
    file, every write is appended to it as well.
    """

    def __init__(self, output: ByteChannel | None = None) -> None:
        self.output: ByteChannel = output if output is not None else ByteChannel()
        self._write_log_path: str = os.environ.get("PI_MENU_WRITE_LOG", "")

    # -- cursor -------------------------------------------------------------

    def move_cursor(self, x: int, y: int) -> None:
        """Move the cursor to 1-based column *x*, row *y*."""
        self._raw_write(_POSITION_FMT.format(x=x, y=y))

    def set_cursor_visible(self, visible: bool) -> None:
        self._raw_write(_SHOW_CURSOR if visible else _HIDE_CURSOR)

    # -- attributes ---------------------------------------------------------

    def set_foreground(self, color: Color) -> None:
        self._raw_write(f"{_CSI}{color_code(color, background=False)}m")

    def set_background(self, color: Color) -> None:
        self._raw_write(f"{_CSI}{color_code(color, background=True)}m")

    def reset_attributes(self) -> None:
        self._raw_write(_RESET_ATTRIBUTES)

    def set_bright(self) -> None:
        self._raw_write(_BRIGHT)

    def full_reset(self) -> None:
        self._raw_write(_FULL_RESET)

    # -- output -------------------------------------------------------------

    def write(self, text: str) -> None:
        self._raw_write(text)

    def end(self) -> None:
        """End the drawing session by closing the output channel."""
        self.output.end()

    def _raw_write(self, data: str) -> None:
        self.output.write(data.encode("utf-8"))

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a") as f:
                    f.write(data)
            except OSError:
                pass
