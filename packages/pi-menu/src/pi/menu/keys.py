"""Raw terminal byte patterns recognised by the menu.

The menu understands four logical keys. Each is bound to one or more
exact byte prefixes; :data:`KEY_PATTERNS` lists them in precedence order
(moves first, then cancel, then confirm) so that the first matching row
wins.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class MenuKey(Enum):
    UP = "up"
    DOWN = "down"
    CANCEL = "cancel"
    CONFIRM = "confirm"


class KeyPattern(NamedTuple):
    prefix: bytes
    key: MenuKey

    @property
    def length(self) -> int:
        return len(self.prefix)


KEY_PATTERNS: tuple[KeyPattern, ...] = (
    # Up arrow (CSI and SS3 forms), vi "k", Ctrl-P
    KeyPattern(b"\x1b[A", MenuKey.UP),
    KeyPattern(b"\x1bOA", MenuKey.UP),
    KeyPattern(b"k", MenuKey.UP),
    KeyPattern(b"\x10", MenuKey.UP),
    # Down arrow, vi "j", Ctrl-N
    KeyPattern(b"\x1b[B", MenuKey.DOWN),
    KeyPattern(b"\x1bOB", MenuKey.DOWN),
    KeyPattern(b"j", MenuKey.DOWN),
    KeyPattern(b"\x0e", MenuKey.DOWN),
    # Ctrl-C, "q"
    KeyPattern(b"\x03", MenuKey.CANCEL),
    KeyPattern(b"q", MenuKey.CANCEL),
    # CR, LF
    KeyPattern(b"\r", MenuKey.CONFIRM),
    KeyPattern(b"\n", MenuKey.CONFIRM),
)


def match_key(data: bytes | bytearray) -> tuple[MenuKey, int] | None:
    """Match the start of *data* against :data:`KEY_PATTERNS`.

    Returns ``(key, consumed)`` for the first pattern in precedence order
    that *data* starts with, or ``None`` when the leading byte begins no
    known key.
    """
    for pattern in KEY_PATTERNS:
        if data.startswith(pattern.prefix):
            return pattern.key, pattern.length
    return None
