"""
Tests for GridController.

These tests verify:
- initialize() seeds without notifying
- every edit notifies with a full snapshot
- column and size bounds are enforced on edits
"""

import pytest

from dashboard.schemas.layout import GridItem, LayoutError, default_layout
from dashboard.services.grid_controller import GridController


@pytest.fixture
def grid():
    controller = GridController()
    controller.initialize(default_layout())
    return controller


@pytest.fixture
def changes(grid):
    seen = []
    grid.on_change(seen.append)
    return seen


class TestInitialize:
    """Tests for seeding the grid."""

    def test_initialize_does_not_notify(self):
        grid = GridController()
        seen = []
        grid.on_change(seen.append)

        grid.initialize(default_layout())

        assert seen == []
        assert grid.initialized is True
        assert len(grid.snapshot()) == 3

    def test_reset_clears_items(self, grid):
        grid.reset()

        assert grid.snapshot() == []
        assert grid.initialized is False

    def test_snapshot_is_a_copy(self, grid):
        snapshot = grid.snapshot()
        snapshot[0].x = 8

        assert grid.snapshot()[0].x == 0


class TestEdits:
    """Every edit fires one notification with ALL items."""

    def test_move_notifies_with_full_layout(self, grid, changes):
        grid.move_item(0, 6, 0)

        assert len(changes) == 1
        assert len(changes[0]) == 3
        assert (changes[0][0].x, changes[0][0].y) == (6, 0)

    def test_resize(self, grid, changes):
        grid.resize_item(2, 2, 6)

        assert (changes[0][2].w, changes[0][2].h) == (2, 6)

    def test_add_and_remove(self, grid, changes):
        grid.add_item(GridItem(x=0, y=4, w=12, h=1, content="<p>notes</p>"))
        grid.remove_item(0)

        assert [len(snapshot) for snapshot in changes] == [4, 3]
        assert changes[1][-1].content == "<p>notes</p>"

    def test_replace_items(self, grid, changes):
        grid.replace_items([GridItem(x=0, y=0, w=12, h=2)])

        assert len(changes) == 1
        assert len(grid.snapshot()) == 1

    def test_every_listener_is_called(self, grid):
        first, second = [], []
        grid.on_change(first.append)
        grid.on_change(second.append)

        grid.move_item(1, 0, 4)

        assert len(first) == len(second) == 1


class TestBounds:
    """Edits that would break the grid are refused."""

    def test_move_past_last_column(self, grid, changes):
        with pytest.raises(LayoutError):
            grid.move_item(0, 9, 0)

        assert changes == []
        assert grid.snapshot()[0].x == 0

    @pytest.mark.parametrize("w,h", [(0, 4), (4, 0), (13, 1)])
    def test_resize_out_of_range(self, grid, w, h):
        with pytest.raises(LayoutError):
            grid.resize_item(0, w, h)

    def test_negative_position(self, grid):
        with pytest.raises(LayoutError):
            grid.move_item(0, -1, 0)

    def test_unknown_index(self, grid, changes):
        with pytest.raises(LayoutError):
            grid.remove_item(5)

        assert changes == []

    def test_narrow_grid(self):
        grid = GridController(columns=6)

        with pytest.raises(LayoutError):
            grid.initialize(default_layout())
