"""In-process byte channels connecting a menu to a terminal transport.

A :class:`ByteChannel` carries bytes one way. Listeners receive each
chunk synchronously as it is written; with no listener attached the
bytes accumulate until :meth:`ByteChannel.read` collects them. A
:class:`DuplexStream` pairs the menu's inbound channel (terminal input)
with its outbound channel (drawing output) so a caller can splice both to
a real device through a single object.
"""

from __future__ import annotations

from typing import Callable


class StreamClosedError(RuntimeError):
    """Raised when writing to a channel that has already ended."""


class ByteChannel:
    """One-directional byte pipe with callback delivery and end-of-stream."""

    def __init__(self) -> None:
        self._pending = bytearray()
        self._data_listeners: list[Callable[[bytes], None]] = []
        self._end_listeners: list[Callable[[], None]] = []
        self._ended: bool = False

    @property
    def ended(self) -> bool:
        return self._ended

    def on_data(self, callback: Callable[[bytes], None]) -> Callable[[], None]:
        """Register *callback* for written chunks; returns an unsubscribe.

        Bytes buffered before the first listener arrived are delivered to
        it immediately.
        """
        self._data_listeners.append(callback)
        if self._pending:
            pending = bytes(self._pending)
            self._pending.clear()
            callback(pending)
        return lambda: self._remove(self._data_listeners, callback)

    def on_end(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register *callback* for end-of-stream.

        Fires immediately if the channel has already ended.
        """
        if self._ended:
            callback()
            return lambda: None
        self._end_listeners.append(callback)
        return lambda: self._remove(self._end_listeners, callback)

    def write(self, data: bytes | str) -> None:
        if self._ended:
            raise StreamClosedError("write after end")
        if isinstance(data, str):
            data = data.encode("utf-8")
        if not data:
            return
        if not self._data_listeners:
            self._pending += data
            return
        for listener in list(self._data_listeners):
            listener(bytes(data))

    def read(self) -> bytes:
        """Return and clear the bytes written while nobody was listening."""
        data = bytes(self._pending)
        self._pending.clear()
        return data

    def end(self) -> None:
        """End the channel. Later calls are no-ops."""
        if self._ended:
            return
        self._ended = True
        listeners = self._end_listeners
        self._end_listeners = []
        for listener in listeners:
            listener()

    @staticmethod
    def _remove(listeners: list, callback: Callable) -> None:
        if callback in listeners:
            listeners.remove(callback)


class DuplexStream:
    """Caller-facing view of a menu: write input in, receive output."""

    def __init__(self, inbound: ByteChannel, outbound: ByteChannel) -> None:
        self.inbound = inbound
        self.outbound = outbound

    def write(self, data: bytes | str) -> None:
        """Send terminal input to the menu."""
        self.inbound.write(data)

    def end(self) -> None:
        """Signal that no more terminal input will arrive."""
        self.inbound.end()

    def on_data(self, callback: Callable[[bytes], None]) -> Callable[[], None]:
        """Receive the menu's drawing output."""
        return self.outbound.on_data(callback)

    def on_end(self, callback: Callable[[], None]) -> Callable[[], None]:
        return self.outbound.on_end(callback)

    def read(self) -> bytes:
        return self.outbound.read()

    @property
    def ended(self) -> bool:
        return self.inbound.ended and self.outbound.ended
