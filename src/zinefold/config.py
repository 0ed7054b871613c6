"""
Module: config

Purpose:
    Configuration dataclasses for an imposition run. Immutable
    configuration with validation on construction.

Key Classes:
    - PaperSpec: Paper size, margins, gutter and print offsets
    - ImposeConfig: Sources, grid columns and pipeline options

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - zinefold.loading.parser: Builds configs from JSON
    - zinefold.layout.calculator: Reads PaperSpec
    - zinefold.controller: Main pipeline
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

from zinefold.layout.units import DEFAULT_UNIT, normalize_unit

SOURCE_FORMATS = ("spread", "page")
DEFAULT_FILENAME_TEMPLATE = "sheet-{sheet:03d}-{side}.png"


@dataclass(frozen=True)
class PaperSpec:
    """
    Physical paper description (immutable).

    All lengths share ``unit``. Defaults to US Letter with no margins.

    Attributes:
        width: Paper width
        height: Paper height
        unit: Unit of every length ("in", "cm", "mm", "pt")
        margin_left: Left margin
        margin_right: Right margin
        margin_top: Top margin
        margin_bottom: Bottom margin
        gutter: Binding gutter, shifts content away from the fold edge
        offset_x: Horizontal printer offset
        offset_y: Vertical printer offset

    Example:
        >>> PaperSpec(margin_left=0.25, margin_right=0.25).available_width
        8.0
    """

    width: float = 8.5
    height: float = 11.0
    unit: str = DEFAULT_UNIT

    margin_left: float = 0.0
    margin_right: float = 0.0
    margin_top: float = 0.0
    margin_bottom: float = 0.0

    gutter: float = 0.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.width <= 0:
            raise ValueError(f"paper width must be positive: {self.width}")
        if self.height <= 0:
            raise ValueError(f"paper height must be positive: {self.height}")
        for name in ("margin_left", "margin_right", "margin_top", "margin_bottom", "gutter"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative: {getattr(self, name)}")
        # Raises UnitError (an ImpositionError and a ValueError) for unknown units
        object.__setattr__(self, "unit", normalize_unit(self.unit))

    @property
    def available_width(self) -> float:
        """Width available for content (excluding margins)."""
        return self.width - self.margin_left - self.margin_right

    @property
    def available_height(self) -> float:
        """Height available for content (excluding margins)."""
        return self.height - self.margin_top - self.margin_bottom


@dataclass(frozen=True)
class ImposeConfig:
    """
    Configuration for one imposition run (immutable).

    Attributes:
        images: Source images in scan order
        columns: Page pairs per row on each sheet side
        paper: Paper description
        source_format: "spread" (two pages per image) or "page" (one)
        back_is_first: First spread's left pane is the back cover
        skip_outer_panes: Drop first spread's left and last spread's right pane
        pad_multiple: Pad page count with blank slots to this multiple
            (4 = one folded sheet; 1 disables padding)
        max_workers: Concurrent compositor calls
        filename_template: Output name pattern with {sheet} and {side}

    Example:
        >>> config = ImposeConfig(
        ...     images=(Path("scan-01.png"), Path("scan-02.png")),
        ...     columns=1,
        ... )
    """

    images: Tuple[Path, ...]
    columns: int = 1
    paper: PaperSpec = field(default_factory=PaperSpec)

    source_format: str = "spread"
    back_is_first: bool = False
    skip_outer_panes: bool = False

    pad_multiple: int = 4
    max_workers: int = 4
    filename_template: str = DEFAULT_FILENAME_TEMPLATE

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        object.__setattr__(self, "images", tuple(Path(p) for p in self.images))
        if not self.images:
            raise ValueError("images must not be empty")
        if self.columns < 1:
            raise ValueError(f"columns must be >= 1: {self.columns}")
        if self.source_format not in SOURCE_FORMATS:
            raise ValueError(
                f"source_format must be one of {SOURCE_FORMATS}: {self.source_format!r}"
            )
        if self.pad_multiple < 1:
            raise ValueError(f"pad_multiple must be >= 1: {self.pad_multiple}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1: {self.max_workers}")
        if "{sheet" not in self.filename_template or "{side" not in self.filename_template:
            raise ValueError(
                f"filename_template must contain {{sheet}} and {{side}}: {self.filename_template!r}"
            )
