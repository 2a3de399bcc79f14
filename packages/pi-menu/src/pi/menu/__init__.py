"""pi-menu: keyboard-navigable selection menu drawn in a terminal."""

# Geometry and render state
from pi.menu.geometry import MenuItem, MenuState, Padding, normalize_padding

# Input decoding
from pi.menu.input_decoder import InputDecoder, decode
from pi.menu.keys import KEY_PATTERNS, KeyPattern, MenuKey, match_key

# Menu controller
from pi.menu.menu import Menu, MenuClosedError, MenuOptions

# Rendering
from pi.menu.renderer import MenuRenderer

# Byte streams
from pi.menu.streams import ByteChannel, DuplexStream, StreamClosedError

# Terminal interface and implementation
from pi.menu.terminal import COLORS, AnsiTerminal, Color, Terminal, color_code

# Utilities
from pi.menu.utils import visible_width

__all__ = [
    # Geometry
    "MenuItem",
    "MenuState",
    "Padding",
    "normalize_padding",
    # Input decoding
    "InputDecoder",
    "KEY_PATTERNS",
    "KeyPattern",
    "MenuKey",
    "decode",
    "match_key",
    # Menu
    "Menu",
    "MenuClosedError",
    "MenuOptions",
    # Rendering
    "MenuRenderer",
    # Streams
    "ByteChannel",
    "DuplexStream",
    "StreamClosedError",
    # Terminal
    "AnsiTerminal",
    "COLORS",
    "Color",
    "Terminal",
    "color_code",
    # Utilities
    "visible_width",
]
