"""Menu geometry: padding, item placement, and the shared render state.

All coordinates are 1-based terminal columns (``x``) and rows (``y``).
The *origin* is the nominal top-left corner passed by the caller; the
*initial* position is the origin shifted by the left/top padding and is
where the first item is drawn.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Union

PaddingSpec = Union[int, "Padding", Mapping[str, int]]

DEFAULT_PADDING: dict[str, int] = {"left": 2, "right": 2, "top": 1, "bottom": 1}


@dataclass(frozen=True)
class Padding:
    left: int = 0
    right: int = 0
    top: int = 0
    bottom: int = 0

    def __post_init__(self) -> None:
        for side in ("left", "right", "top", "bottom"):
            if getattr(self, side) < 0:
                raise ValueError(f"padding {side} must be >= 0")


def normalize_padding(padding: PaddingSpec | None) -> Padding:
    """Turn the ``padding`` option into a :class:`Padding`.

    ``None`` (or ``0``, matching the falsy-means-default option rule)
    yields the default 2/2/1/1 box. An int applies to all four sides; a
    mapping may name any subset of sides, the rest being zero.
    """
    if not padding:
        return Padding(**DEFAULT_PADDING)
    if isinstance(padding, Padding):
        return padding
    if isinstance(padding, int):
        return Padding(padding, padding, padding, padding)
    unknown = set(padding) - set(DEFAULT_PADDING)
    if unknown:
        raise ValueError(f"unknown padding sides: {', '.join(sorted(unknown))}")
    return Padding(**{side: int(value) for side, value in padding.items()})


@dataclass(frozen=True)
class MenuItem:
    """A label drawn at a fixed cell, assigned when the item was added."""

    x: int
    y: int
    label: str


@dataclass
class MenuState:
    """Everything the renderer reads and mutates for one menu.

    Owned by :class:`pi.menu.menu.Menu`; the renderer only receives it
    by reference. ``painted_rows`` holds the rows that already received
    a full-width blank fill in the current epoch.
    """

    width: int
    origin_x: int
    origin_y: int
    padding: Padding
    fg: str | int = "white"
    bg: str | int = "blue"
    selected: int = 0
    x: int = 0
    y: int = 0
    items: list[MenuItem] = field(default_factory=list)
    painted_rows: set[int] = field(default_factory=set)

    def __post_init__(self) -> None:
        self.x = self.initial_x
        self.y = self.initial_y

    # -- derived geometry ---------------------------------------------------

    @property
    def initial_x(self) -> int:
        return self.origin_x + self.padding.left

    @property
    def initial_y(self) -> int:
        return self.origin_y + self.padding.top

    @property
    def total_width(self) -> int:
        return self.width + self.padding.left + self.padding.right

    def top_padding_rows(self) -> range:
        return range(self.initial_y - self.padding.top, self.initial_y)

    def bottom_padding_rows(self) -> range:
        return range(self.y, self.y + self.padding.bottom)

    # -- items --------------------------------------------------------------

    def add_item(self, label: str) -> int:
        """Append *label* at the append cursor and advance one row."""
        index = len(self.items)
        self.items.append(MenuItem(x=self.x, y=self.y, label=label))
        self.y += 1
        return index

    def index_of_label(self, label: str) -> int | None:
        for index, item in enumerate(self.items):
            if item.label == label:
                return index
        return None

    def reset_geometry(self) -> None:
        """Rewind the append cursor and drop all items."""
        self.x = self.initial_x
        self.y = self.initial_y
        self.items = []
