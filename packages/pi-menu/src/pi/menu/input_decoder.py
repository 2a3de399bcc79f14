"""InputDecoder turns raw terminal bytes into menu keys.

Input arrives in arbitrary chunks. Every chunk is appended to an internal
buffer, and the buffer is drained from the front: a recognised key
consumes exactly its own bytes and is emitted before the next byte is
looked at, an unrecognised byte is dropped on its own. Nothing is ever
held back waiting for more input.
"""

from __future__ import annotations

import logging
from typing import Callable

from pi.menu.keys import MenuKey, match_key

logger = logging.getLogger(__name__)


def decode(data: bytes | str) -> list[MenuKey]:
    """Decode a complete chunk of input into the keys it contains."""
    keys: list[MenuKey] = []
    decoder = InputDecoder()
    decoder.on_key(keys.append)
    decoder.process(data)
    return keys


class InputDecoder:
    """Streaming decoder that emits one :class:`MenuKey` at a time.

    The key callback runs synchronously, so whatever it draws is finished
    before the following bytes are examined. Calling :meth:`clear` from
    inside the callback abandons the rest of the buffer.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._on_key: Callable[[MenuKey], None] | None = None

    def on_key(self, callback: Callable[[MenuKey], None]) -> None:
        """Set callback for decoded keys."""
        self._on_key = callback

    def process(self, data: bytes | str) -> None:
        """Feed input data into the buffer and drain it."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._buffer += data

        while self._buffer:
            matched = match_key(self._buffer)
            if matched is None:
                logger.debug("dropping unrecognised byte %d", self._buffer[0])
                del self._buffer[0]
                continue

            key, consumed = matched
            del self._buffer[:consumed]
            if self._on_key:
                self._on_key(key)

    def clear(self) -> None:
        self._buffer.clear()

    def get_buffer(self) -> bytes:
        return bytes(self._buffer)
