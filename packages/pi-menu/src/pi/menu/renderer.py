"""Incremental menu rendering.

The renderer never reads the screen back. It relies on two facts kept in
:class:`~pi.menu.geometry.MenuState`: every item sits at the cell it was
given when added, and ``painted_rows`` records which rows have already
been blanked across the full menu width in the current epoch. A
selection change therefore only needs the old and the new row redrawn.
"""

from __future__ import annotations

from pi.menu.geometry import MenuState
from pi.menu.terminal import Terminal
from pi.menu.utils import visible_width


class MenuRenderer:
    """Issues drawing operations for a menu state onto a terminal."""

    def __init__(self, terminal: Terminal) -> None:
        self.terminal = terminal

    def apply_colors(self, state: MenuState, *, inverse: bool = False) -> None:
        """Select the configured colors, swapped when *inverse* is set."""
        if inverse:
            self.terminal.set_background(state.fg)
            self.terminal.set_foreground(state.bg)
        else:
            self.terminal.set_background(state.bg)
            self.terminal.set_foreground(state.fg)

    def fill_row(self, state: MenuState, y: int) -> None:
        """Blank row *y* across the whole menu width, once per epoch."""
        if y in state.painted_rows:
            return
        self.terminal.move_cursor(state.origin_x, y)
        self.terminal.write(" " * state.total_width)
        state.painted_rows.add(y)

    def draw_row(self, state: MenuState, index: int) -> None:
        """Paint item *index*, wrapping negative or overflowing indices."""
        if not state.items:
            return
        index %= len(state.items)
        item = state.items[index]

        self.terminal.move_cursor(item.x, item.y)
        self.apply_colors(state, inverse=index == state.selected % len(state.items))

        pad = max(0, state.width - visible_width(item.label) + 1)
        self.terminal.write(item.label + " " * pad)

    def full_draw(self, state: MenuState) -> None:
        if state.items:
            state.selected %= len(state.items)

        self.apply_colors(state)
        for y in state.top_padding_rows():
            self.fill_row(state, y)

        for index in range(len(state.items)):
            self.draw_row(state, index)

        self.apply_colors(state)
        for y in state.bottom_padding_rows():
            self.fill_row(state, y)

    def write_text(self, state: MenuState, text: str) -> None:
        """Write free-form *text* at the append cursor.

        Each newline moves the append cursor to the next row at the left
        margin, so items added afterwards appear below the text.
        """
        self.apply_colors(state)
        self.fill_row(state, state.y)

        lines = text.split("\n")
        for i, line in enumerate(lines):
            if line:
                self.terminal.move_cursor(state.x, state.y)
                self.terminal.write(line)
            if i != len(lines) - 1:
                state.x = state.initial_x
                self.fill_row(state, state.y + 1)
                state.y += 1
