"""
Module: pages

Purpose:
    Descriptors for source scans and the logical pages cut from them.
    The engine never touches pixels; a LogicalPage is a source path plus
    a crop region.

Key Classes:
    - Pane: Which half of a spread a page comes from
    - CropRegion: Pixel rectangle within a source image
    - SourceSpread: One measured input image
    - LogicalPage: One page in final reading order

Dependencies:
    - dataclasses (std)
    - enum (std)
    - pathlib (std)

Used By:
    - zinefold.planning.splitter
    - zinefold.planning.planner
    - zinefold.render.assembler
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class Pane(str, Enum):
    """Half of a two-page spread."""

    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True, slots=True)
class CropRegion:
    """
    Pixel rectangle within a source image.

    Attributes:
        left: X offset of the left edge (inclusive)
        top: Y offset of the top edge (inclusive)
        width: Region width in pixels
        height: Region height in pixels

    Invariants:
        - left >= 0, top >= 0
        - width > 0, height > 0

    Example:
        >>> CropRegion(left=600, top=0, width=600, height=900).box
        (600, 0, 1200, 900)
    """

    left: int
    top: int
    width: int
    height: int

    def __post_init__(self) -> None:
        """Validate region on construction."""
        if self.left < 0:
            raise ValueError(f"left must be >= 0: {self.left}")
        if self.top < 0:
            raise ValueError(f"top must be >= 0: {self.top}")
        if self.width <= 0:
            raise ValueError(f"width must be positive: {self.width}")
        if self.height <= 0:
            raise ValueError(f"height must be positive: {self.height}")

    @property
    def right(self) -> int:
        """X coordinate of the right edge (exclusive)."""
        return self.left + self.width

    @property
    def bottom(self) -> int:
        """Y coordinate of the bottom edge (exclusive)."""
        return self.top + self.height

    @property
    def box(self) -> tuple[int, int, int, int]:
        """(left, top, right, bottom) tuple as Pillow expects."""
        return (self.left, self.top, self.right, self.bottom)

    def geometry(self) -> str:
        """ImageMagick geometry string, e.g. ``600x900+600+0``."""
        return f"{self.width}x{self.height}+{self.left}+{self.top}"


@dataclass(frozen=True, slots=True)
class SourceSpread:
    """
    One scanned input image, measured.

    Attributes:
        path: Image file on disk
        width: Pixel width
        height: Pixel height
        index: Position in the configured input order
    """

    path: Path
    width: int
    height: int
    index: int = 0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Spread {self.path} has non-positive size {self.width}x{self.height}"
            )

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)


@dataclass(frozen=True, slots=True)
class LogicalPage:
    """
    One page in final reading order.

    In spread format a page is one pane of its spread: half the spread
    width (integer division) and the full height. In single-page format
    ``pane`` is None and the page covers the whole image.

    Attributes:
        spread: Originating source image
        pane: LEFT, RIGHT or None for whole-image pages
        index: 0-based position in final reading order
    """

    spread: SourceSpread
    pane: Optional[Pane]
    index: int

    @property
    def width(self) -> int:
        if self.pane is None:
            return self.spread.width
        return self.spread.width // 2

    @property
    def height(self) -> int:
        return self.spread.height

    @property
    def crop_region(self) -> CropRegion:
        """Region of the spread holding this page."""
        left = self.width if self.pane is Pane.RIGHT else 0
        return CropRegion(left=left, top=0, width=self.width, height=self.height)

    @property
    def source(self) -> Path:
        return self.spread.path

    def __str__(self) -> str:
        pane = self.pane.value if self.pane is not None else "full"
        return f"page {self.index} ({self.spread.path.name}:{pane})"
