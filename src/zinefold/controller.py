"""
Module: controller

Purpose:
    Orchestrate a complete imposition run.
    Measure -> Split -> Pad -> Layout -> Plan -> Assemble -> Render -> Manifest

Key Functions:
    - impose(): Main entry point for an imposition run
    - measure_sources(): Measure every configured image

Key Classes:
    - ImposeResult: Complete run result

Dependencies:
    - zinefold.planning: Splitting and signature planning
    - zinefold.layout: Grid layout
    - zinefold.render: Request assembly, compositors, dispatch

Used By:
    - zinefold.__main__: Entry point
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from zinefold import __version__
from zinefold.config import ImposeConfig
from zinefold.core.errors import CompositorFailure, ImpositionError, MeasureError
from zinefold.core.models import ImpositionPlan, SourceSpread
from zinefold.layout import Layout, compute_layout_for_paper
from zinefold.loading.parser import config_summary
from zinefold.planning import pad_pages, plan_imposition, split_spreads
from zinefold.render import (
    PillowCompositor,
    RasterCompositor,
    RenderReport,
    assemble_render_commands,
    render_all,
)

logger = logging.getLogger(__name__)

MANIFEST_NAME = "imposition.json"


@dataclass(frozen=True)
class ImposeResult:
    """
    Complete run result (immutable).

    Attributes:
        outputs: Rendered sheet-side files in print order
        failures: Sheet sides that failed to render
        layout: Grid layout used
        plan: Slot assignment used
        manifest_path: Path of the JSON manifest
        warnings: Non-fatal issues found during the run

    Example:
        >>> result = impose(config, Path("out"))
        >>> print(f"{result.plan.sheet_count} sheets, ok={result.ok}")
    """

    outputs: Tuple[Path, ...]
    failures: Tuple[CompositorFailure, ...]
    layout: Layout
    plan: ImpositionPlan
    manifest_path: Path
    warnings: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def sheet_count(self) -> int:
        return self.plan.sheet_count


def measure_sources(
    images: Sequence[Path],
    compositor: RasterCompositor,
) -> List[SourceSpread]:
    """
    Measure every source image.

    Raises:
        MeasureError: If any image cannot be measured
    """
    spreads: List[SourceSpread] = []
    for index, path in enumerate(images):
        try:
            width, height = compositor.measure(path)
        except CompositorFailure as e:
            raise MeasureError(f"Failed to measure {path}: {e}") from e
        try:
            spreads.append(SourceSpread(path=path, width=width, height=height, index=index))
        except ValueError as e:
            raise MeasureError(str(e)) from e
        logger.debug(f"Measured {path}: {width}x{height}")
    return spreads


def impose(
    config: ImposeConfig,
    output_dir: Path,
    *,
    compositor: Optional[RasterCompositor] = None,
) -> ImposeResult:
    """
    Run an imposition from config to rendered sheet sides.

    Pipeline:
    1. Measure every source image
    2. Split sources into pages in reading order
    3. Pad the sequence with blank slots (config.pad_multiple)
    4. Compute the grid layout from the first page's size
    5. Plan slot assignments
    6. Assemble render requests
    7. Render sides concurrently, collecting per-side failures
    8. Write the run manifest

    Args:
        config: Run configuration
        output_dir: Directory for rendered files and the manifest
        compositor: Raster compositor (default PillowCompositor)

    Returns:
        ImposeResult with outputs, failures, layout and plan

    Raises:
        ImpositionError: If measuring, layout or planning fails, or the
            manifest cannot be written. Render failures do not raise.
    """
    compositor = compositor or PillowCompositor()
    output_dir = Path(output_dir)
    warnings: List[str] = []
    start_time = time.perf_counter()

    logger.info(f"Imposing {len(config.images)} image(s) with {config.columns} column(s)")

    # 1. Measure
    spreads = measure_sources(config.images, compositor)
    reference = spreads[0]
    for spread in spreads[1:]:
        if spread.size != reference.size:
            message = (
                f"{spread.path.name} is {spread.width}x{spread.height}, "
                f"first image is {reference.width}x{reference.height}; pages will be scaled"
            )
            logger.warning(message)
            warnings.append(message)

    # 2-3. Pages in reading order, padded
    pages = split_spreads(
        spreads,
        source_format=config.source_format,
        skip_outer_panes=config.skip_outer_panes,
        back_is_first=config.back_is_first,
    )
    padded = pad_pages(pages, config.pad_multiple)
    logger.info(f"Split into {len(pages)} pages ({len(padded)} slots after padding)")

    # 4. Layout: one cell holds a page pair
    first_page = pages[0]
    layout = compute_layout_for_paper(
        config.paper,
        config.columns,
        2 * first_page.width,
        first_page.height,
    )
    logger.info(
        f"Layout {layout.columns}x{layout.rows} cells per side at {layout.dpi:.1f} dpi"
    )

    # 5. Plan
    plan = plan_imposition(padded, layout)
    for page in plan.unplaced:
        warnings.append(f"{page} was not placed")

    # 6-7. Assemble and render
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ImpositionError(f"Cannot create output directory {output_dir}: {e}") from e
    requests = assemble_render_commands(
        plan,
        output_dir,
        filename_template=config.filename_template,
    )
    report = render_all(requests, compositor, max_workers=config.max_workers)

    elapsed = time.perf_counter() - start_time
    logger.info(f"Imposition completed in {elapsed:.2f}s")

    # 8. Manifest
    manifest_path = output_dir / MANIFEST_NAME
    manifest = _build_manifest(config, plan, report, warnings)
    _write_manifest(manifest_path, manifest)

    return ImposeResult(
        outputs=report.outputs,
        failures=report.failures,
        layout=layout,
        plan=plan,
        manifest_path=manifest_path,
        warnings=tuple(warnings),
    )


def _build_manifest(
    config: ImposeConfig,
    plan: ImpositionPlan,
    report: RenderReport,
    warnings: Sequence[str],
) -> dict:
    """
    Build the run manifest.

    Contains:
    - Config summary
    - Layout
    - Per-sheet slot assignments (reading-order indices, null = blank)
    - Outputs and failures
    """
    return {
        "generated_at": datetime.now().isoformat(),
        "zinefold_version": __version__,
        "config": config_summary(config),
        "layout": plan.layout.to_dict(),
        "plan": plan.to_dict(),
        "outputs": [str(path) for path in report.outputs],
        "failures": [
            {
                "sheet": failure.sheet_index,
                "side": failure.side,
                "command": failure.command,
                "message": str(failure),
            }
            for failure in report.failures
        ],
        "warnings": list(warnings),
    }


def _write_manifest(path: Path, manifest: dict) -> None:
    """
    Write the manifest JSON file.

    Raises:
        ImpositionError: If writing fails
    """
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(manifest, f, indent=2)
        logger.debug(f"Wrote manifest to {path}")
    except OSError as e:
        raise ImpositionError(f"Failed to write manifest: {e}") from e
