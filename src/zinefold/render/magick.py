"""
Module: render.magick

Purpose:
    ImageMagick implementation of the RasterCompositor. Each sheet side
    becomes one ``magick`` invocation: parenthesised crops appended into
    rows, rows appended into a side, then edge padding spliced on.
    Every crop is resized to the cell, as the Pillow compositor does.

Key Classes:
    - MagickCompositor: Subprocess-backed compositor

Key Functions:
    - build_compose_args(): Argument vector for one request

Dependencies:
    - subprocess (std)
    - ImageMagick 7 ``magick`` executable on PATH

Used By:
    - zinefold.controller: Optional compositor
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from zinefold.core.errors import CompositorFailure
from zinefold.core.models import CropRegion

from .assembler import SheetRenderRequest
from .compositor import HandleGrid, RasterCompositor

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = "magick"


def crop_args(path: Path, region: CropRegion) -> List[str]:
    """Argument fragment that loads ``path`` and crops ``region``."""
    return [str(path), "-crop", region.geometry(), "+repage"]


def filler_args(width: int, height: int) -> List[str]:
    """Argument fragment for a transparent blank cell."""
    return ["-size", f"{width}x{height}", "xc:none"]


def build_compose_args(
    request: SheetRenderRequest,
    handles: HandleGrid,
) -> List[str]:
    """
    Build the ImageMagick argument vector for a sheet side.

    Args:
        request: Render request
        handles: Crop fragments (see crop_args) shaped like request.rows

    Returns:
        Arguments for ``magick`` (without the executable)

    Example:
        >>> build_compose_args(request, handles)[:4]
        ['-background', 'none', '(', '(']
    """
    cell_width, cell_height = request.cell_size
    canvas_width, canvas_height = request.canvas_size
    padding = request.padding

    args: List[str] = ["-background", "none"]
    for row in handles:
        args.append("(")
        for fragment in row:
            if fragment is None:
                cell = filler_args(cell_width, cell_height)
            else:
                # Forced resize: a mismatched source still fills exactly one cell
                cell = [*fragment, "-resize", f"{cell_width}x{cell_height}!"]
            args.extend(["(", *cell, ")"])
        args.extend(["+append", ")"])

    args.extend([
        "-gravity", request.align,
        "-append",
        "-gravity", "northwest",
        "-splice", f"{padding.left}x{padding.top}",
        "-gravity", "southeast",
        "-splice", f"{padding.right}x{padding.bottom}",
        "-gravity", "northwest",
        "-extent", f"{canvas_width}x{canvas_height}",
        "-units", "PixelsPerInch",
        "-density", f"{request.dpi:.2f}",
        str(request.output_path),
    ])
    return args


class MagickCompositor(RasterCompositor):
    """
    Compositor that shells out to ImageMagick.

    Crop handles are argument fragments; nothing touches the pixels
    until compose() runs the single command for the side.

    Attributes:
        command: Executable name or path (default "magick")
        timeout: Seconds per invocation (None = no limit)
    """

    name = "magick"

    def __init__(
        self,
        command: str = DEFAULT_COMMAND,
        timeout: Optional[float] = None,
    ) -> None:
        self.command = command
        self.timeout = timeout

    def measure(self, path: Path) -> Tuple[int, int]:
        output = self._run(["identify", "-format", "%wx%h", str(path)], label=f"measure {path}")
        try:
            width_str, height_str = output.strip().split("x")
            return int(width_str), int(height_str)
        except ValueError as e:
            raise CompositorFailure(
                f"Unexpected identify output for {path}: {output!r}",
                command="measure",
            ) from e

    def crop(self, path: Path, region: CropRegion) -> List[str]:
        return crop_args(path, region)

    def compose(self, request: SheetRenderRequest, handles: HandleGrid) -> Path:
        request.output_path.parent.mkdir(parents=True, exist_ok=True)
        args = build_compose_args(request, handles)
        self._run(
            args,
            label=request.label,
            sheet_index=request.sheet_index,
            side=request.side.value,
        )
        logger.debug(f"Rendered {request.label} to {request.output_path}")
        return request.output_path

    def _run(
        self,
        args: Sequence[str],
        *,
        label: str,
        sheet_index: Optional[int] = None,
        side: Optional[str] = None,
    ) -> str:
        """Run one magick invocation and return its stdout."""
        argv = [self.command, *args]
        logger.debug(f"Running: {' '.join(argv)}")
        try:
            completed = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise CompositorFailure(
                f"{self.command} failed for {label}: {e}",
                sheet_index=sheet_index,
                side=side,
                command=args[0],
            ) from e

        if completed.returncode != 0:
            raise CompositorFailure(
                f"{self.command} exited with code {completed.returncode}: "
                f"{completed.stderr.strip()}",
                sheet_index=sheet_index,
                side=side,
                command=args[0],
            )
        return completed.stdout
