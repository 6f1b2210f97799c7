"""
Layout schemas - the persisted dashboard arrangement.

A LayoutDocument is the only file format this application defines. It is
stored as JSON in the user's Drive appDataFolder and replaced wholesale on
every save:

    {
        "layout": [{"x": 0, "y": 0, "w": 4, "h": 4, "content": "<div>...</div>"}],
        "updated": "2026-10-19T16:02:00Z"
    }
"""

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, Field, model_validator

from dashboard.environments.google.drive.schemas import RemoteFileHandle


# Width of the grid in cells; every item must fit inside it
GRID_COLUMNS = 12


class LayoutError(ValueError):
    """Raised when a grid edit would break the item invariants."""
    pass


class GridItem(BaseModel):
    """
    One widget on the grid: cell position, span and inner markup.

    Overlap between items is not checked here; the grid library in the
    browser resolves collisions.
    """
    x: int = Field(..., ge=0, description="Column of the left edge")
    y: int = Field(..., ge=0, description="Row of the top edge")
    w: int = Field(..., ge=1, le=GRID_COLUMNS, description="Width in columns")
    h: int = Field(..., ge=1, description="Height in rows")
    content: str = Field("", description="Serialized inner HTML of the widget")

    @model_validator(mode="after")
    def _fits_columns(self) -> "GridItem":
        if self.x + self.w > GRID_COLUMNS:
            raise ValueError(
                f"item at x={self.x} with w={self.w} exceeds {GRID_COLUMNS} columns"
            )
        return self


class LayoutDocument(BaseModel):
    """The whole dashboard arrangement plus the time it was captured."""
    layout: List[GridItem] = Field(default_factory=list)
    updated: datetime

    @classmethod
    def from_items(cls, items: List[GridItem]) -> "LayoutDocument":
        """Snapshot the given items, stamped with the current UTC time."""
        return cls(
            layout=[item.model_copy() for item in items],
            updated=datetime.now(timezone.utc),
        )

    def to_json(self) -> str:
        return self.model_dump_json()


class LayoutUpdate(BaseModel):
    """Request body of PUT /layout: the grid's full current item list."""
    layout: List[GridItem]


# ---------------------------------------------------------------------------
# DEFAULT LAYOUT
# ---------------------------------------------------------------------------
# Used whenever no saved layout can be loaded. Each panel container id is
# where the matching widget loader's HTML is placed.

WIDGET_PANELS = {
    "classroom": ("Classroom To-Do", "classroom-widget"),
    "drive": ("Drive Recent", "drive-widget"),
    "github": ("GitHub", "github-widget"),
}


def _panel_content(title: str, element_id: str) -> str:
    return f'<div class="widget-header"><h3>{title}</h3></div><div id="{element_id}"></div>'


def default_layout() -> List[GridItem]:
    """Three 4x4 panels side by side on the first row."""
    return [
        GridItem(x=column, y=0, w=4, h=4, content=_panel_content(title, element_id))
        for column, (title, element_id) in zip((0, 4, 8), WIDGET_PANELS.values())
    ]


__all__ = [
    "GRID_COLUMNS",
    "GridItem",
    "LayoutDocument",
    "LayoutError",
    "LayoutUpdate",
    "RemoteFileHandle",
    "WIDGET_PANELS",
    "default_layout",
]
