"""
Module: render

Purpose:
    Turn an ImpositionPlan into files. The assembler describes each sheet
    side; a RasterCompositor renders it; the dispatcher runs sides
    concurrently and collects failures.

Key Functions:
    - assemble_render_commands(): Plan -> render requests
    - render_all(): Render requests on a thread pool

Key Classes:
    - SheetRenderRequest: Composition request for one side
    - RasterCompositor: Abstract compositor interface
    - PillowCompositor: Pillow-backed compositor
    - MagickCompositor: ImageMagick-backed compositor

Dependencies:
    - PIL: Image manipulation (PillowCompositor)

Used By:
    - zinefold.controller: Main pipeline
"""

from .assembler import (
    CropCommand,
    Padding,
    SheetRenderRequest,
    assemble_render_commands,
    side_padding,
)
from .compositor import RasterCompositor
from .pillow import PillowCompositor
from .magick import MagickCompositor
from .dispatcher import RenderQueue, RenderReport, render_all

__all__ = [
    "CropCommand",
    "Padding",
    "SheetRenderRequest",
    "assemble_render_commands",
    "side_padding",
    "RasterCompositor",
    "PillowCompositor",
    "MagickCompositor",
    "RenderQueue",
    "RenderReport",
    "render_all",
]
