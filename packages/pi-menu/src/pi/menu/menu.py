"""Menu: a keyboard-driven chooser drawn directly onto a terminal.

``Menu`` owns the render state, the input decoder and the drawing
terminal. Terminal input written to the stream returned by
:meth:`Menu.create_stream` is decoded into keys; each key is fully
handled (state update plus redraw) before the next one is decoded.

Lifecycle::

    created --(first draw)--> started --(cancel / close / input end)--> closed

The first draw is deferred to the next event-loop tick so callers can add
items and observers right after construction. Without a running loop it
happens on :meth:`Menu.start` or when the first input arrives.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, TypedDict

from pi.menu.geometry import MenuItem, MenuState, PaddingSpec, normalize_padding
from pi.menu.input_decoder import InputDecoder
from pi.menu.keys import MenuKey
from pi.menu.renderer import MenuRenderer
from pi.menu.streams import ByteChannel, DuplexStream, StreamClosedError
from pi.menu.terminal import AnsiTerminal, Color, Terminal

logger = logging.getLogger(__name__)

SelectCallback = Callable[[str, int], None]


class MenuOptions(TypedDict, total=False):
    """Construction options. Missing or falsy values use the defaults."""

    width: int  # label column width, default 50
    x: int  # origin column before padding, default 1
    y: int  # origin row before padding, default 1
    selected: int  # initially selected index, default 0
    fg: Color  # default "white"
    bg: Color  # default "blue"
    padding: PaddingSpec  # int or per-side mapping, default 2/2/1/1
    terminal: Terminal  # default: AnsiTerminal on the menu's output


class MenuClosedError(RuntimeError):
    """Raised when a closed menu is asked to change."""


@dataclass
class _SelectObserver:
    callback: SelectCallback
    index: int | None = None  # None: notified for every item


class Menu:
    """Bordered list of labels with a movable, confirmable selection."""

    def __init__(self, options: MenuOptions | None = None, **overrides: Any) -> None:
        opts: dict[str, Any] = {**(options or {}), **overrides}

        self._state = MenuState(
            width=opts.get("width") or 50,
            origin_x=opts.get("x") or 1,
            origin_y=opts.get("y") or 1,
            padding=normalize_padding(opts.get("padding")),
            fg=opts.get("fg") or "white",
            bg=opts.get("bg") or "blue",
            selected=opts.get("selected") or 0,
        )

        self._input = ByteChannel()
        self._output = ByteChannel()
        self.terminal: Terminal = opts.get("terminal") or AnsiTerminal(self._output)
        self._renderer = MenuRenderer(self.terminal)

        self._decoder = InputDecoder()
        self._decoder.on_key(self._handle_key)

        self._select_observers: list[_SelectObserver] = []
        self._close_listeners: list[Callable[[], None]] = []

        # Lifecycle
        self._started: bool = False
        self._draw_pending: bool = True
        self._draw_handle: asyncio.Handle | None = None
        self._closed: bool = False
        self._session_ended: bool = False

        self._input.on_data(self._on_input)
        self._input.on_end(self._on_input_end)

        try:
            self.terminal.reset_attributes()
            self.terminal.set_bright()
        except (OSError, StreamClosedError, ValueError) as e:
            logger.debug("ignoring terminal attribute setup failure: %s", e)

        self._schedule_draw()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> MenuState:
        return self._state

    @property
    def items(self) -> tuple[MenuItem, ...]:
        return tuple(self._state.items)

    @property
    def selected(self) -> int:
        return self._state.selected

    @property
    def started(self) -> bool:
        """Whether the first draw of the current epoch has happened."""
        return self._started

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def on_select(self, callback: SelectCallback) -> Callable[[], None]:
        """Call ``callback(label, index)`` whenever a selection is confirmed.

        Returns a function that removes the observer.
        """
        return self._add_select_observer(_SelectObserver(callback))

    def on_close(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Call *callback* once the menu's input has ended."""
        self._close_listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._close_listeners:
                self._close_listeners.remove(callback)

        return unsubscribe

    def _add_select_observer(self, observer: _SelectObserver) -> Callable[[], None]:
        self._select_observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._select_observers:
                self._select_observers.remove(observer)

        return unsubscribe

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def create_stream(self) -> DuplexStream:
        """Return the menu's input and output as one duplex stream."""
        return DuplexStream(self._input, self._output)

    def start(self) -> None:
        """Perform the pending first draw now. No-op once drawn."""
        if not self._draw_pending or self._closed:
            return
        if self._draw_handle is not None:
            self._draw_handle.cancel()
            self._draw_handle = None
        self._draw_pending = False
        self._started = True
        self.terminal.set_cursor_visible(False)
        self._renderer.full_draw(self._state)

    def add(self, label: str, callback: SelectCallback | None = None) -> None:
        """Append an item; *callback* fires only when this item is confirmed.

        The row is blanked right away; the label itself is painted by the
        next full draw or when the selection passes over it.
        """
        self._check_open()
        index = self._state.add_item(label)
        if callback is not None:
            self._add_select_observer(_SelectObserver(callback, index))

        self._renderer.apply_colors(self._state)
        self._renderer.fill_row(self._state, self._state.items[index].y)

    def jump(self, target: str | int) -> None:
        """Select the item at index *target*, or the first labelled *target*.

        Unknown labels and out-of-range indices are ignored.
        """
        self._check_open()
        if isinstance(target, str):
            index = self._state.index_of_label(target)
        elif 0 <= target < len(self._state.items):
            index = target
        else:
            index = None
        if index is None:
            return

        previous = self._state.selected
        self._state.selected = index
        if self._started and not self._draw_pending:
            self._renderer.draw_row(self._state, previous)
            self._renderer.draw_row(self._state, index)

    def write(self, text: str) -> None:
        """Write free-form text at the append cursor."""
        self._check_open()
        self._renderer.write_text(self._state, text)

    def reset(self) -> None:
        """Clear the screen and all items, then redraw on the next tick."""
        self._check_open()
        self.terminal.full_reset()
        self.terminal.reset_attributes()
        self.terminal.set_bright()

        self._state.reset_geometry()
        self._state.painted_rows.clear()
        self._started = False
        self._select_observers = [
            observer for observer in self._select_observers if observer.index is None
        ]

        self._draw_pending = True
        self._schedule_draw()

    def close(self) -> None:
        """End input, restore the cursor and end the drawing session."""
        if self._session_ended:
            return
        self._input.end()
        self.terminal.set_cursor_visible(True)
        self.terminal.reset_attributes()
        self.terminal.move_cursor(1, self._state.y + 1)
        self.terminal.end()
        self._session_ended = True

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def _schedule_draw(self) -> None:
        """Schedule the pending draw on the next event-loop tick."""
        if self._draw_handle is not None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No running loop: start() or the first input will draw
            return
        self._draw_handle = loop.call_soon(self._on_draw_tick)

    def _on_draw_tick(self) -> None:
        self._draw_handle = None
        self.start()

    # ------------------------------------------------------------------
    # Input handling
    # ------------------------------------------------------------------

    def _on_input(self, data: bytes) -> None:
        if self._closed:
            return
        self.start()
        self._decoder.process(data)

    def _on_input_end(self) -> None:
        if self._draw_handle is not None:
            self._draw_handle.cancel()
            self._draw_handle = None
        self._decoder.clear()
        self._closed = True
        logger.debug("menu input ended")

        listeners = self._close_listeners
        self._close_listeners = []
        for listener in listeners:
            listener()

    def _handle_key(self, key: MenuKey) -> None:
        if key is MenuKey.UP:
            self._move(-1)
        elif key is MenuKey.DOWN:
            self._move(1)
        elif key is MenuKey.CANCEL:
            self._cancel()
        elif key is MenuKey.CONFIRM:
            self._confirm()

    def _move(self, delta: int) -> None:
        count = len(self._state.items)
        if not count:
            return
        previous = self._state.selected
        self._state.selected = (previous + delta) % count
        self._renderer.draw_row(self._state, previous)
        self._renderer.draw_row(self._state, self._state.selected)

    def _cancel(self) -> None:
        logger.debug("menu cancelled")
        self.terminal.full_reset()
        self._decoder.clear()
        self._session_ended = True
        self._input.end()
        self._output.end()

    def _confirm(self) -> None:
        items = self._state.items
        if not items:
            return
        last = items[-1]
        # first row below the bottom padding
        self.terminal.move_cursor(1, last.y + 1 + self._state.padding.bottom)
        self.terminal.reset_attributes()

        index = self._state.selected % len(items)
        label = items[index].label
        logger.debug("selected %r at index %d", label, index)
        for observer in list(self._select_observers):
            if observer.index is None or observer.index == index:
                observer.callback(label, index)

    def _check_open(self) -> None:
        if self._closed:
            raise MenuClosedError("menu is closed")
