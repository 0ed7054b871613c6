"""
Module: render.compositor

Purpose:
    Abstract interface for the raster tool that measures sources, crops
    pages and composes sheet sides. The engine only produces requests;
    any implementation of this interface can render them.

Key Classes:
    - RasterCompositor: Abstract base class (measure / crop / compose)

Dependencies:
    - abc (std)
    - zinefold.render.assembler: SheetRenderRequest

Used By:
    - zinefold.render.pillow: PillowCompositor
    - zinefold.render.magick: MagickCompositor
    - zinefold.render.dispatcher: Executes requests
    - zinefold.controller: Source measurement
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional, Sequence, Tuple

from zinefold.core.models import CropRegion

from .assembler import SheetRenderRequest

# Grid of crop handles mirroring SheetRenderRequest.rows (None = filler)
HandleGrid = Sequence[Sequence[Optional[Any]]]


class RasterCompositor(ABC):
    """
    Abstract interface to a raster imaging tool.

    Implementations decide what a crop "handle" is: an in-memory image,
    a command-line fragment, a file path.
    """

    name: str = "compositor"

    @abstractmethod
    def measure(self, path: Path) -> Tuple[int, int]:
        """
        Get the pixel size of an image.

        Args:
            path: Image file

        Returns:
            (width, height) in pixels

        Raises:
            CompositorFailure: If the image cannot be read
        """

    @abstractmethod
    def crop(self, path: Path, region: CropRegion) -> Any:
        """
        Crop a region out of an image.

        Args:
            path: Source image
            region: Pixel region

        Returns:
            Implementation-specific handle accepted by compose()
        """

    @abstractmethod
    def compose(self, request: SheetRenderRequest, handles: HandleGrid) -> Path:
        """
        Lay cropped handles out on a sheet side and write it.

        Args:
            request: Render request (grid, canvas, padding, output path)
            handles: Crop handles in the shape of ``request.rows``

        Returns:
            Path of the written file
        """

    def render(self, request: SheetRenderRequest) -> Path:
        """Crop every slot of a request, then compose the side."""
        handles = [
            [
                self.crop(command.source, command.region) if command is not None else None
                for command in row
            ]
            for row in request.rows
        ]
        return self.compose(request, handles)
