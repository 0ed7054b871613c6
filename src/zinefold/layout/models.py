"""
Module: layout.models

Purpose:
    Immutable grid layout produced by the layout calculator.
    All lengths are in source pixels at the derived scale.

Key Classes:
    - Margins: Per-edge margins in pixels
    - Layout: Grid shape, scale, margins, gutter and offsets

Dependencies:
    - dataclasses (std)

Used By:
    - zinefold.layout.calculator: Creates Layouts
    - zinefold.planning.planner: Reads grid shape
    - zinefold.render.assembler: Reads canvas size and padding
"""

from __future__ import annotations

from dataclasses import dataclass

from .units import pixels_per_inch


@dataclass(frozen=True)
class Margins:
    """Per-edge margins in pixels."""

    left: float = 0.0
    right: float = 0.0
    top: float = 0.0
    bottom: float = 0.0


@dataclass(frozen=True)
class Layout:
    """
    Grid layout for every sheet side of a run (immutable).

    A grid cell holds one side-by-side page pair, so each row has
    ``2 * columns`` page slots.

    Attributes:
        columns: Page pairs per row (x)
        rows: Rows per sheet side (y)
        pixels_per_unit: Scale at which ``columns`` cells span the printable width
        paper_width_px: Paper width in pixels
        paper_height_px: Paper height in pixels
        cell_width_px: Width of one cell (page pair) in pixels
        cell_height_px: Height of one cell in pixels
        margins: Margins in pixels
        gutter_px: Binding gutter in pixels
        offset_x_px: Horizontal print offset in pixels
        offset_y_px: Vertical print offset in pixels
        unit: Unit the paper was measured in

    Example:
        >>> layout.grid_layout
        (2, 3)
        >>> layout.slots_per_side
        12
    """

    columns: int
    rows: int
    pixels_per_unit: float
    paper_width_px: float
    paper_height_px: float
    cell_width_px: int
    cell_height_px: int
    margins: Margins = Margins()
    gutter_px: float = 0.0
    offset_x_px: float = 0.0
    offset_y_px: float = 0.0
    unit: str = "in"

    @property
    def grid_layout(self) -> tuple[int, int]:
        """(columns, rows) grid shape."""
        return (self.columns, self.rows)

    @property
    def slots_per_row(self) -> int:
        return 2 * self.columns

    @property
    def slots_per_side(self) -> int:
        return self.slots_per_row * self.rows

    @property
    def pages_per_sheet(self) -> int:
        """Pages one sheet holds across both sides."""
        return 2 * self.slots_per_side

    @property
    def page_width_px(self) -> int:
        """Width of one page slot."""
        return self.cell_width_px // 2

    @property
    def dpi(self) -> float:
        """Effective print resolution in pixels per inch."""
        return pixels_per_inch(self.pixels_per_unit, self.unit)

    def to_dict(self) -> dict:
        """Serialize for the run manifest."""
        return {
            "columns": self.columns,
            "rows": self.rows,
            "pixels_per_unit": self.pixels_per_unit,
            "dpi": self.dpi,
            "unit": self.unit,
            "paper_px": [self.paper_width_px, self.paper_height_px],
            "cell_px": [self.cell_width_px, self.cell_height_px],
            "margins_px": {
                "left": self.margins.left,
                "right": self.margins.right,
                "top": self.margins.top,
                "bottom": self.margins.bottom,
            },
            "gutter_px": self.gutter_px,
            "offset_px": [self.offset_x_px, self.offset_y_px],
        }
