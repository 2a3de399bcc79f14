"""Connect a menu to the process's own terminal.

``ProcessSession`` splices a :class:`~pi.menu.streams.DuplexStream` onto
``sys.stdin``/``sys.stdout``: it switches stdin to raw mode with
:mod:`tty`/:mod:`termios`, feeds stdin bytes to the stream from an asyncio
reader, and writes the stream's output to stdout. ``choose`` wraps the
whole thing into a single awaitable.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
import termios
import tty
from typing import Any, Callable, Sequence

from pi.menu.menu import Menu, MenuOptions
from pi.menu.streams import DuplexStream, StreamClosedError

logger = logging.getLogger(__name__)


class ProcessSession:
    """Raw-mode stdin/stdout transport for a duplex stream."""

    def __init__(self, stream: DuplexStream) -> None:
        self._stream = stream
        self._original_termios: list | None = None
        self._reader_active: bool = False
        self._unsubscribe_output: Callable[[], None] | None = None

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Enable raw mode and begin shuttling bytes. Needs a running loop."""
        fd = sys.stdin.fileno()
        self._original_termios = termios.tcgetattr(fd)
        tty.setraw(fd)

        self._unsubscribe_output = self._stream.on_data(self._write_stdout)

        loop = asyncio.get_running_loop()
        loop.add_reader(fd, self._on_stdin_readable)
        self._reader_active = True

    def stop(self) -> None:
        """Stop reading stdin and restore the saved terminal attributes."""
        fd = sys.stdin.fileno()
        if self._reader_active:
            try:
                asyncio.get_running_loop().remove_reader(fd)
            except (RuntimeError, ValueError):
                pass
            self._reader_active = False

        if self._unsubscribe_output is not None:
            self._unsubscribe_output()
            self._unsubscribe_output = None

        if self._original_termios is not None:
            termios.tcsetattr(fd, termios.TCSADRAIN, self._original_termios)
            self._original_termios = None

    def __enter__(self) -> ProcessSession:
        self.start()
        return self

    def __exit__(self, *exc: object) -> None:
        self.stop()

    # -- private ------------------------------------------------------------

    def _on_stdin_readable(self) -> None:
        try:
            data = os.read(sys.stdin.fileno(), 4096)
        except OSError:
            return

        if not data:
            self._stream.end()
            return

        try:
            self._stream.write(data)
        except StreamClosedError:
            logger.debug("dropping %d input bytes after stream end", len(data))

    @staticmethod
    def _write_stdout(data: bytes) -> None:
        sys.stdout.buffer.write(data)
        sys.stdout.flush()


async def choose(
    labels: Sequence[str],
    options: MenuOptions | None = None,
    **overrides: Any,
) -> tuple[str, int] | None:
    """Show *labels* in a menu on the process terminal and await a choice.

    Resolves to ``(label, index)`` when an item is confirmed, or ``None``
    when the menu is cancelled or input ends. The menu is closed either
    way.
    """
    menu = Menu(options, **overrides)
    for label in labels:
        menu.add(label)

    loop = asyncio.get_running_loop()
    result: asyncio.Future[tuple[str, int] | None] = loop.create_future()

    def _on_select(label: str, index: int) -> None:
        if not result.done():
            result.set_result((label, index))

    def _on_close() -> None:
        if not result.done():
            result.set_result(None)

    menu.on_select(_on_select)
    menu.on_close(_on_close)

    with ProcessSession(menu.create_stream()):
        try:
            return await result
        finally:
            menu.close()
