"""
GridController - server-side mirror of the dashboard grid.

The browser's grid library does the dragging and resizing; it reports the
result here. Every edit fires the change notification with a snapshot of
ALL items, which is what the layout saver persists.

Seeding the grid with initialize() does not fire a notification, so loading
a layout never writes it straight back.
"""

import logging
from typing import Callable, List

from dashboard.schemas.layout import GRID_COLUMNS, GridItem, LayoutError


logger = logging.getLogger("dashboard.services.grid_controller")


ChangeListener = Callable[[List[GridItem]], None]


class GridController:
    """
    Ordered list of GridItems plus change listeners.

    Items are addressed by their index in the list, which is the order the
    grid reported (or was seeded with) them.
    """

    def __init__(self, columns: int = GRID_COLUMNS):
        self.columns = columns
        self._items: List[GridItem] = []
        self._listeners: List[ChangeListener] = []
        self.initialized = False

    # -------------------------------------------------------------------------
    # STATE
    # -------------------------------------------------------------------------

    def snapshot(self) -> List[GridItem]:
        """Copies of the current items, safe to hand to another task."""
        return [item.model_copy() for item in self._items]

    def initialize(self, items: List[GridItem]) -> None:
        """Seed the grid. No change notification."""
        self._items = [self._checked(item) for item in items]
        self.initialized = True
        logger.debug(f"Grid initialized with {len(self._items)} items")

    def reset(self) -> None:
        """Forget all items; the next page load seeds the grid again."""
        self._items = []
        self.initialized = False

    def on_change(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    # -------------------------------------------------------------------------
    # EDITS
    # -------------------------------------------------------------------------

    def add_item(self, item: GridItem) -> None:
        self._items.append(self._checked(item))
        self._notify()

    def move_item(self, index: int, x: int, y: int) -> None:
        item = self._get(index)
        self._items[index] = self._checked(item.model_copy(update={"x": x, "y": y}))
        self._notify()

    def resize_item(self, index: int, w: int, h: int) -> None:
        item = self._get(index)
        self._items[index] = self._checked(item.model_copy(update={"w": w, "h": h}))
        self._notify()

    def remove_item(self, index: int) -> None:
        self._get(index)
        del self._items[index]
        self._notify()

    def replace_items(self, items: List[GridItem]) -> None:
        """Take the grid's full item list as reported by the browser."""
        self._items = [self._checked(item) for item in items]
        self.initialized = True
        self._notify()

    # -------------------------------------------------------------------------
    # HELPERS
    # -------------------------------------------------------------------------

    def _get(self, index: int) -> GridItem:
        if not 0 <= index < len(self._items):
            raise LayoutError(f"No grid item at index {index}")
        return self._items[index]

    def _checked(self, item: GridItem) -> GridItem:
        # model_copy(update=...) skips validation, so bounds are rechecked here
        if item.w < 1 or item.h < 1:
            raise LayoutError(f"Item size must be at least 1x1, got {item.w}x{item.h}")
        if item.x < 0 or item.y < 0:
            raise LayoutError(f"Item position must not be negative, got ({item.x}, {item.y})")
        if item.x + item.w > self.columns:
            raise LayoutError(
                f"Item at x={item.x} with w={item.w} exceeds {self.columns} columns"
            )
        return item

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self.snapshot())
