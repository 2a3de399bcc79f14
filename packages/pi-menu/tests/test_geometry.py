"""Tests for pi.menu.geometry -- padding and item placement."""

from __future__ import annotations

import pytest

from pi.menu.geometry import MenuItem, MenuState, Padding, normalize_padding


def _make_state(**kwargs) -> MenuState:
    kwargs.setdefault("width", 10)
    kwargs.setdefault("origin_x", 1)
    kwargs.setdefault("origin_y", 1)
    kwargs.setdefault("padding", Padding(2, 2, 1, 1))
    return MenuState(**kwargs)


class TestNormalizePadding:
    def test_default(self) -> None:
        assert normalize_padding(None) == Padding(left=2, right=2, top=1, bottom=1)

    def test_int_applies_to_all_sides(self) -> None:
        assert normalize_padding(3) == Padding(3, 3, 3, 3)

    def test_zero_falls_back_to_default(self) -> None:
        assert normalize_padding(0) == Padding(2, 2, 1, 1)

    def test_partial_mapping(self) -> None:
        assert normalize_padding({"left": 4, "top": 2}) == Padding(left=4, top=2)

    def test_padding_instance_passes_through(self) -> None:
        padding = Padding(1, 1, 0, 0)
        assert normalize_padding(padding) is padding

    def test_unknown_side_rejected(self) -> None:
        with pytest.raises(ValueError, match="middle"):
            normalize_padding({"middle": 1})

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError):
            normalize_padding({"left": -1})


class TestMenuState:
    def test_initial_position_includes_padding(self) -> None:
        state = _make_state(origin_x=5, origin_y=3)
        assert (state.x, state.y) == (7, 4)
        assert (state.initial_x, state.initial_y) == (7, 4)

    def test_total_width(self) -> None:
        assert _make_state().total_width == 14

    def test_add_item_advances_row(self) -> None:
        state = _make_state()
        assert state.add_item("A") == 0
        assert state.add_item("B") == 1
        assert state.items == [MenuItem(3, 2, "A"), MenuItem(3, 3, "B")]
        assert state.y == 4

    def test_index_of_label_returns_first_match(self) -> None:
        state = _make_state()
        for label in ("A", "B", "A"):
            state.add_item(label)
        assert state.index_of_label("A") == 0
        assert state.index_of_label("B") == 1
        assert state.index_of_label("Z") is None

    def test_reset_geometry(self) -> None:
        state = _make_state(fg="red", bg="black")
        state.add_item("A")
        state.x = 9
        state.reset_geometry()
        assert state.items == []
        assert (state.x, state.y) == (3, 2)
        assert (state.fg, state.bg) == ("red", "black")
        assert state.padding == Padding(2, 2, 1, 1)

    def test_padding_rows(self) -> None:
        state = _make_state(padding=Padding(2, 2, 2, 3))
        state.add_item("A")
        state.add_item("B")
        assert list(state.top_padding_rows()) == [1, 2]
        assert list(state.bottom_padding_rows()) == [5, 6, 7]

    def test_no_top_padding(self) -> None:
        state = _make_state(padding=Padding(0, 0, 0, 0))
        assert list(state.top_padding_rows()) == []
