"""Tests for pi.menu.terminal -- ANSI rendering of drawing operations."""

from __future__ import annotations

import pytest

from pi.menu.menu import Menu
from pi.menu.streams import ByteChannel, StreamClosedError
from pi.menu.terminal import AnsiTerminal, color_code


def _make_terminal() -> tuple[AnsiTerminal, ByteChannel]:
    channel = ByteChannel()
    return AnsiTerminal(channel), channel


class TestColorCode:
    def test_named_colors(self) -> None:
        assert color_code("white", background=False) == "37"
        assert color_code("blue", background=True) == "44"
        assert color_code("Black", background=False) == "30"

    def test_palette_index(self) -> None:
        assert color_code(200, background=False) == "38;5;200"
        assert color_code(0, background=True) == "48;5;0"

    @pytest.mark.parametrize("color", ["purple", 256, -1, True, None])
    def test_invalid(self, color) -> None:
        with pytest.raises(ValueError):
            color_code(color, background=False)


class TestAnsiTerminal:
    def test_move_cursor(self) -> None:
        term, channel = _make_terminal()
        term.move_cursor(3, 2)
        assert channel.read() == b"\x1b[2;3H"

    def test_colors(self) -> None:
        term, channel = _make_terminal()
        term.set_foreground("white")
        term.set_background("blue")
        assert channel.read() == b"\x1b[37m\x1b[44m"

    def test_cursor_visibility(self) -> None:
        term, channel = _make_terminal()
        term.set_cursor_visible(False)
        term.set_cursor_visible(True)
        assert channel.read() == b"\x1b[?25l\x1b[?25h"

    def test_attributes_and_reset(self) -> None:
        term, channel = _make_terminal()
        term.reset_attributes()
        term.set_bright()
        term.full_reset()
        assert channel.read() == b"\x1b[0m\x1b[1m\x1bc"

    def test_text_is_utf8(self) -> None:
        term, channel = _make_terminal()
        term.write("日本")
        assert channel.read() == "日本".encode("utf-8")

    def test_end_closes_output(self) -> None:
        term, channel = _make_terminal()
        term.end()
        assert channel.ended
        with pytest.raises(StreamClosedError):
            term.write("x")

    def test_write_log(self, tmp_path, monkeypatch) -> None:
        log = tmp_path / "writes.log"
        monkeypatch.setenv("PI_MENU_WRITE_LOG", str(log))
        term, _ = _make_terminal()
        term.move_cursor(1, 1)
        term.write("hi")
        assert log.read_text() == "\x1b[1;1Hhi"


class TestMenuOverAnsi:
    """End-to-end: raw bytes in, escape sequences out."""

    def test_selection_round_trip(self) -> None:
        menu = Menu(width=5)
        stream = menu.create_stream()
        output: list[bytes] = []
        stream.on_data(output.append)
        chosen: list[tuple[str, int]] = []
        menu.on_select(lambda label, index: chosen.append((label, index)))

        menu.add("one")
        menu.add("two")
        menu.start()
        stream.write(b"\x1b[B\r")

        assert chosen == [("two", 1)]
        data = b"".join(output)
        assert data.startswith(b"\x1b[0m\x1b[1m")
        assert b"\x1b[?25l" in data
        # "two" repainted in inverse video: white background, blue text
        assert b"\x1b[3;3H\x1b[47m\x1b[34mtwo   " in data

    def test_cancel_ends_output(self) -> None:
        menu = Menu()
        stream = menu.create_stream()
        ended: list[bool] = []
        stream.on_end(lambda: ended.append(True))
        menu.add("one")
        stream.write(b"q")
        assert ended == [True]
        assert stream.read().endswith(b"\x1bc")
