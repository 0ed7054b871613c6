"""
Module: layout.calculator

Purpose:
    Derive the grid layout for a run from paper measurements and the
    pixel size of one grid cell (a side-by-side page pair).

Key Functions:
    - compute_layout(): Pure layout calculation from raw values
    - compute_layout_for_paper(): Same, reading a PaperSpec

Algorithm:
    1. Printable area = paper minus margins
    2. Scale so that ``columns`` cells exactly span the printable width
    3. Rows = how many cell heights fit the printable height at that scale
    4. Margins, gutter and offsets are scaled to pixels

Dependencies:
    - math (std)
    - zinefold.layout.models: Layout, Margins

Used By:
    - zinefold.controller: Main pipeline
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from zinefold.core.errors import InfeasibleLayout

from .models import Layout, Margins
from .units import DEFAULT_UNIT, normalize_unit

if TYPE_CHECKING:
    from zinefold.config import PaperSpec

logger = logging.getLogger(__name__)


def compute_layout(
    paper_width: float,
    paper_height: float,
    margin_left: float,
    margin_right: float,
    margin_top: float,
    margin_bottom: float,
    gutter: float,
    offset_x: float,
    offset_y: float,
    columns: int,
    cell_width_px: int,
    cell_height_px: int,
    *,
    unit: str = DEFAULT_UNIT,
) -> Layout:
    """
    Compute the grid layout for a sheet side.

    Pure function: identical inputs always produce an identical Layout.

    Args:
        paper_width: Paper width in ``unit``
        paper_height: Paper height in ``unit``
        margin_left: Left margin in ``unit``
        margin_right: Right margin in ``unit``
        margin_top: Top margin in ``unit``
        margin_bottom: Bottom margin in ``unit``
        gutter: Binding gutter in ``unit``
        offset_x: Horizontal print offset in ``unit``
        offset_y: Vertical print offset in ``unit``
        columns: Page pairs per row
        cell_width_px: Width of one page pair in pixels (a full spread)
        cell_height_px: Height of one page in pixels
        unit: Unit shared by every length argument

    Returns:
        Layout with derived rows and pixel-scaled measurements

    Raises:
        InfeasibleLayout: If inputs are non-positive or not even one row fits

    Example:
        >>> layout = compute_layout(8.5, 11, 0, 0, 0, 0, 0, 0, 0, 1, 1700, 1100)
        >>> layout.grid_layout
        (1, 2)
    """
    if columns < 1:
        raise InfeasibleLayout(f"columns must be >= 1: {columns}")
    if cell_width_px <= 0 or cell_height_px <= 0:
        raise InfeasibleLayout(
            f"cell size must be positive: {cell_width_px}x{cell_height_px}"
        )

    available_width = paper_width - margin_left - margin_right
    available_height = paper_height - margin_top - margin_bottom
    if available_width <= 0:
        raise InfeasibleLayout(
            f"Margins exceed paper width: {margin_left} + {margin_right} >= {paper_width}"
        )
    if available_height <= 0:
        raise InfeasibleLayout(
            f"Margins exceed paper height: {margin_top} + {margin_bottom} >= {paper_height}"
        )

    pixels_per_unit = (columns * cell_width_px) / available_width
    rows = math.floor((available_height * pixels_per_unit) / cell_height_px)

    if rows < 1:
        raise InfeasibleLayout(
            f"{columns} column(s) of {cell_width_px}x{cell_height_px}px leave no room "
            f"for a row: printable area {available_width:g}x{available_height:g} {unit}"
        )

    logger.debug(
        f"Layout {columns}x{rows} at {pixels_per_unit:.3f} px/{unit} "
        f"(printable {available_width:g}x{available_height:g} {unit})"
    )

    return Layout(
        columns=columns,
        rows=rows,
        pixels_per_unit=pixels_per_unit,
        paper_width_px=paper_width * pixels_per_unit,
        paper_height_px=paper_height * pixels_per_unit,
        cell_width_px=cell_width_px,
        cell_height_px=cell_height_px,
        margins=Margins(
            left=margin_left * pixels_per_unit,
            right=margin_right * pixels_per_unit,
            top=margin_top * pixels_per_unit,
            bottom=margin_bottom * pixels_per_unit,
        ),
        gutter_px=gutter * pixels_per_unit,
        offset_x_px=offset_x * pixels_per_unit,
        offset_y_px=offset_y * pixels_per_unit,
        unit=normalize_unit(unit),
    )


def compute_layout_for_paper(
    paper: PaperSpec,
    columns: int,
    cell_width_px: int,
    cell_height_px: int,
) -> Layout:
    """Compute the layout for a PaperSpec."""
    return compute_layout(
        paper.width,
        paper.height,
        paper.margin_left,
        paper.margin_right,
        paper.margin_top,
        paper.margin_bottom,
        paper.gutter,
        paper.offset_x,
        paper.offset_y,
        columns,
        cell_width_px,
        cell_height_px,
        unit=paper.unit,
    )
