"""Display-width measurement for menu labels."""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth

# CSI SGR/cursor sequences and OSC 8 hyperlinks
_STRIP_RE = re.compile(r"\x1b\[[0-9;]*[mGKHJ]|\x1b\]8;;[^\x07]*\x07")

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _grapheme_width(g: str) -> int:
    """Return the terminal columns taken by one grapheme cluster.

    Emoji clusters (VS16, ZWJ sequences, skin tones, flags) count as two
    columns, leading marks and format characters as zero, and everything
    else is delegated to wcwidth on the first codepoint.
    """
    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or 0x7F <= cp <= 0x9F:
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D) or 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first = g[0]
    if ord(first) >= 0x1F000 or 0x2600 <= ord(first) <= 0x27BF:
        return 2
    if unicodedata.category(first).startswith("M") or unicodedata.category(first) == "Cf":
        return 0
    return max(_wcwidth.wcwidth(first), 0)


def visible_width(text: str) -> int:
    """Calculate the number of terminal columns *text* occupies.

    ANSI escape sequences are ignored; wide (CJK, emoji) clusters count
    as two columns.
    """
    if not text:
        return 0

    stripped = _STRIP_RE.sub("", text)
    if stripped.isascii() and stripped.isprintable():
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = sum(_grapheme_width(g) for g in grapheme.graphemes(stripped))
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[stripped] = total
    return total
