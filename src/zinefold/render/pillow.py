"""
Module: render.pillow

Purpose:
    Pillow implementation of the RasterCompositor. Crops pages from
    source scans and pastes them onto a paper-sized canvas at their grid
    positions, then writes a PNG atomically with DPI metadata.

Key Classes:
    - PillowCompositor: In-process compositor

Key Functions:
    - crop_page(): Crop a validated region from an open image

Dependencies:
    - PIL: Image manipulation
    - zinefold.render.assembler: SheetRenderRequest

Used By:
    - zinefold.controller: Default compositor
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Dict, Optional, Tuple

from PIL import Image

from zinefold.core.errors import CompositorFailure
from zinefold.core.models import CropRegion

from .assembler import SheetRenderRequest
from .compositor import HandleGrid, RasterCompositor

logger = logging.getLogger(__name__)

# Transparent, like ImageMagick's "-background none"
TRANSPARENT = (0, 0, 0, 0)


def crop_page(image: Image.Image, region: CropRegion) -> Image.Image:
    """
    Crop a page region from an open image.

    Args:
        image: Source image
        region: Region to crop

    Returns:
        Cropped image (new copy, not a view)

    Raises:
        ValueError: If the region extends past the image

    Example:
        >>> page = crop_page(spread, CropRegion(600, 0, 600, 900))
        >>> page.size
        (600, 900)
    """
    if region.right > image.width:
        raise ValueError(
            f"Region right {region.right} exceeds image width {image.width}"
        )
    if region.bottom > image.height:
        raise ValueError(
            f"Region bottom {region.bottom} exceeds image height {image.height}"
        )
    return image.crop(region.box)


class PillowCompositor(RasterCompositor):
    """
    Compositor backed by Pillow.

    Crop handles are in-memory images. ``render`` opens each source once
    per request, since both panes of a spread usually share a side.

    Attributes:
        background: Canvas fill; None keeps the canvas transparent (RGBA)
        compress_level: PNG compression (1=fast, 9=small)

    Example:
        >>> compositor = PillowCompositor(background="white")
        >>> compositor.render(request)
        PosixPath('out/sheet-000-front.png')
    """

    name = "pillow"

    def __init__(
        self,
        background: Optional[str] = None,
        compress_level: int = 1,
    ) -> None:
        self.background = background
        self.compress_level = compress_level

    def measure(self, path: Path) -> Tuple[int, int]:
        try:
            with Image.open(path) as image:
                return image.size
        except (OSError, ValueError) as e:
            raise CompositorFailure(f"Cannot measure {path}: {e}", command="measure") from e

    def crop(self, path: Path, region: CropRegion) -> Image.Image:
        with Image.open(path) as image:
            return crop_page(image, region)

    def render(self, request: SheetRenderRequest) -> Path:
        """Crop every slot with each source opened once, then compose."""
        sources: Dict[Path, Image.Image] = {}
        try:
            handles = []
            for row in request.rows:
                cells = []
                for command in row:
                    if command is None:
                        cells.append(None)
                        continue
                    if command.source not in sources:
                        sources[command.source] = Image.open(command.source)
                    cells.append(crop_page(sources[command.source], command.region))
                handles.append(cells)
        finally:
            for image in sources.values():
                image.close()
        return self.compose(request, handles)

    def compose(self, request: SheetRenderRequest, handles: HandleGrid) -> Path:
        cell_width, cell_height = request.cell_size
        padding = request.padding

        if self.background is None:
            canvas = Image.new("RGBA", request.canvas_size, TRANSPARENT)
        else:
            canvas = Image.new("RGB", request.canvas_size, self.background)

        for row_index, row in enumerate(handles):
            top = padding.top + row_index * cell_height
            for slot_index, page in enumerate(row):
                if page is None:
                    continue
                if page.size != (cell_width, cell_height):
                    logger.debug(
                        f"{request.label}: resizing {page.size} to cell {cell_width}x{cell_height}"
                    )
                    page = page.resize((cell_width, cell_height), Image.Resampling.LANCZOS)
                left = padding.left + slot_index * cell_width
                canvas.paste(page, (left, top))

        _write_image_atomic(canvas, request.output_path, request.dpi, self.compress_level)
        logger.debug(f"Rendered {request.label} to {request.output_path}")
        return request.output_path


def _write_image_atomic(
    image: Image.Image,
    path: Path,
    dpi: float,
    compress_level: int = 1,
) -> None:
    """Synchronous atomic image write."""
    path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode="wb",
        prefix=f".{path.stem}.",
        suffix=".png",
        dir=path.parent,
        delete=False,
    ) as f:
        temp_path = Path(f.name)
        try:
            image.save(f, format="PNG", compress_level=compress_level, dpi=(dpi, dpi))
        except Exception:
            f.close()
            temp_path.unlink(missing_ok=True)
            raise

    temp_path.replace(path)
