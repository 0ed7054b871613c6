"""
Module: render.assembler

Purpose:
    Describe what a Raster Compositor must do for every sheet side of an
    ImpositionPlan: which page regions to crop, where they sit on the
    grid, the canvas size, and the edge padding. Issues no I/O.

Key Functions:
    - assemble_render_commands(): Plan -> SheetRenderRequests
    - side_padding(): Edge padding for one side

Key Classes:
    - CropCommand: One page region to crop
    - Padding: Pixel padding at each sheet edge
    - SheetRenderRequest: Full composition request for one sheet side

Dependencies:
    - zinefold.core.models: ImpositionPlan, Side
    - zinefold.layout.models: Layout

Used By:
    - zinefold.render.dispatcher: Executes requests
    - zinefold.controller: Main pipeline
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from zinefold.config import DEFAULT_FILENAME_TEMPLATE
from zinefold.core.models import CropRegion, ImpositionPlan, LogicalPage, Side
from zinefold.layout.models import Layout
from zinefold.layout.units import scale_to_pixels

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CropCommand:
    """
    Crop one page out of its source image.

    Attributes:
        source: Source image path
        region: Pixel region of the page
        page_index: Reading-order index of the page
    """

    source: Path
    region: CropRegion
    page_index: int

    @classmethod
    def for_page(cls, page: LogicalPage) -> "CropCommand":
        return cls(source=page.source, region=page.crop_region, page_index=page.index)


@dataclass(frozen=True)
class Padding:
    """Padding in whole pixels at each sheet edge."""

    left: int = 0
    right: int = 0
    top: int = 0
    bottom: int = 0


CommandRow = Tuple[Optional[CropCommand], ...]


@dataclass(frozen=True)
class SheetRenderRequest:
    """
    Composition request for one sheet side.

    The compositor crops every command, appends each row's cells left to
    right, stacks the rows top to bottom, then pads the edges.

    Attributes:
        sheet_index: Sheet number (0-indexed)
        side: FRONT or BACK
        output_path: Deterministic output file
        rows: Row-major slots, None for fillers
        cell_size: (width, height) of one page slot in pixels
        canvas_size: (width, height) of the finished side in pixels
        padding: Edge padding in pixels
        align: "west" (front) or "east" (back); short rows hug this edge
        dpi: Print resolution for output metadata
    """

    sheet_index: int
    side: Side
    output_path: Path
    rows: Tuple[CommandRow, ...]
    cell_size: Tuple[int, int]
    canvas_size: Tuple[int, int]
    padding: Padding
    align: str
    dpi: float

    @property
    def label(self) -> str:
        return f"sheet {self.sheet_index} ({self.side.value})"

    @property
    def commands(self) -> List[CropCommand]:
        """Non-filler commands in row-major order."""
        return [cmd for row in self.rows for cmd in row if cmd is not None]


def side_padding(layout: Layout, side: Side) -> Padding:
    """
    Edge padding for a sheet side.

    The gutter shifts content away from the binding: right on the front,
    left on the back. Print offsets shift both sides the same way.

    Each axis keeps the sum of its two margins, so content always fits
    the paper-sized canvas. A shift larger than the margin it eats into
    is reduced until that edge is zero, with a warning.
    """
    shift = layout.gutter_px if side is Side.FRONT else -layout.gutter_px
    margins = layout.margins
    left, right = _balance(
        margins.left + layout.offset_x_px + shift,
        margins.right - layout.offset_x_px - shift,
        side,
        ("left", "right"),
    )
    top, bottom = _balance(
        margins.top + layout.offset_y_px,
        margins.bottom - layout.offset_y_px,
        side,
        ("top", "bottom"),
    )
    return Padding(left=left, right=right, top=top, bottom=bottom)


def _balance(
    near: float,
    far: float,
    side: Side,
    edges: Tuple[str, str],
) -> Tuple[int, int]:
    """Round an opposite edge pair to pixels; neither edge goes negative."""
    total = max(near + far, 0.0)
    if near < 0:
        logger.warning(
            f"{side.value} {edges[0]} padding of {near:.0f}px would cut off content; "
            f"reducing the shift by {-near:.0f}px"
        )
        near = 0.0
    elif far < 0:
        logger.warning(
            f"{side.value} {edges[1]} padding of {far:.0f}px would cut off content; "
            f"reducing the shift by {-far:.0f}px"
        )
        near = total
    near_px = scale_to_pixels(near)
    return near_px, max(scale_to_pixels(total) - near_px, 0)


def assemble_render_commands(
    plan: ImpositionPlan,
    output_dir: Path,
    *,
    filename_template: str = DEFAULT_FILENAME_TEMPLATE,
) -> Tuple[SheetRenderRequest, ...]:
    """
    Build render requests for every sheet side of a plan.

    Pure transformation: the same plan and output directory always give
    equal requests with equal output paths.

    Args:
        plan: Completed imposition plan
        output_dir: Directory the compositor writes into
        filename_template: Pattern with {sheet} and {side} fields

    Returns:
        Requests in print order (sheet 0 front, sheet 0 back, ...)

    Example:
        >>> requests = assemble_render_commands(plan, Path("out"))
        >>> requests[1].output_path
        PosixPath('out/sheet-000-back.png')
    """
    layout = plan.layout
    cell_size = (layout.page_width_px, layout.cell_height_px)
    canvas_size = (
        scale_to_pixels(layout.paper_width_px),
        scale_to_pixels(layout.paper_height_px),
    )
    paddings = {side: side_padding(layout, side) for side in Side}

    requests: List[SheetRenderRequest] = []
    for sheet, sheet_side in plan.iter_sides():
        side = sheet_side.side
        rows = tuple(
            tuple(
                CropCommand.for_page(slot) if slot is not None else None
                for slot in row
            )
            for row in sheet_side.rows
        )
        name = filename_template.format(sheet=sheet.index, side=side.value)
        requests.append(SheetRenderRequest(
            sheet_index=sheet.index,
            side=side,
            output_path=Path(output_dir) / name,
            rows=rows,
            cell_size=cell_size,
            canvas_size=canvas_size,
            padding=paddings[side],
            align="west" if side is Side.FRONT else "east",
            dpi=layout.dpi,
        ))

    logger.debug(f"Assembled {len(requests)} render request(s) into {output_dir}")
    return tuple(requests)
