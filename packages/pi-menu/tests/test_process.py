"""Tests for pi.menu.process -- driving a menu through a pseudo-terminal."""

from __future__ import annotations

import asyncio
import os
import sys

import pytest

pty = pytest.importorskip("pty")

from pi.menu.process import ProcessSession, choose  # noqa: E402


@pytest.fixture
def pty_pair():
    """Yield ``(master_fd, slave_file)`` for a fresh pseudo-terminal.

    Bytes written to *master_fd* can be read from *slave_file*.
    """
    master, slave = pty.openpty()
    slave_file = os.fdopen(slave, "r")
    try:
        yield master, slave_file
    finally:
        slave_file.close()
        os.close(master)


@pytest.fixture
def fake_tty(pty_pair, monkeypatch):
    """Route the menu's stdin to a pty slave and collect its stdout bytes.

    Returns a callable that installs the patches and yields
    ``(master_fd, output)``. The patches are applied from inside the test
    body so output capturing cannot swap ``sys.stdin`` back underneath.
    """
    master, slave_file = pty_pair
    output = bytearray()

    def install() -> tuple[int, bytearray]:
        monkeypatch.setattr(sys, "stdin", slave_file)
        monkeypatch.setattr(ProcessSession, "_write_stdout", staticmethod(output.extend))
        return master, output

    return install


async def _choose_with_input(master: int, keys: bytes, labels: list[str]):
    task = asyncio.create_task(choose(labels, width=5))
    await asyncio.sleep(0.05)
    os.write(master, keys)
    return await asyncio.wait_for(task, timeout=2)


class TestChoose:
    @pytest.mark.asyncio
    async def test_confirm_returns_label_and_index(self, fake_tty) -> None:
        master, output = fake_tty()
        result = await _choose_with_input(master, b"j\r", ["A", "B", "C"])
        assert result == ("B", 1)
        data = bytes(output)
        assert b"\x1b[?25l" in data  # cursor hidden while choosing
        assert data.endswith(b"\x1b[?25h\x1b[0m\x1b[6;1H")

    @pytest.mark.asyncio
    async def test_cancel_returns_none(self, fake_tty) -> None:
        master, output = fake_tty()
        result = await _choose_with_input(master, b"q", ["A", "B"])
        assert result is None
        assert bytes(output).endswith(b"\x1bc")

    @pytest.mark.asyncio
    async def test_terminal_mode_restored(self, fake_tty) -> None:
        import termios

        master, _ = fake_tty()
        before = termios.tcgetattr(sys.stdin.fileno())
        await _choose_with_input(master, b"\r", ["A"])
        assert termios.tcgetattr(sys.stdin.fileno()) == before


class TestProcessSession:
    def test_write_stdout_flushes_through_buffer(self, monkeypatch) -> None:
        import io

        raw = io.BytesIO()
        wrapper = io.TextIOWrapper(raw)
        monkeypatch.setattr(sys, "stdout", wrapper)
        ProcessSession._write_stdout(b"\x1b[0m")
        assert raw.getvalue() == b"\x1b[0m"
