"""
Module: render.dispatcher

Purpose:
    Run compositor calls for independent sheet sides on a thread pool.
    A failed side is recorded and never stops the others.

Key Classes:
    - RenderQueue: Thread pool-based render queue
    - RenderReport: Outputs and failures of a batch

Key Functions:
    - render_all(): Render every request and collect the report

Dependencies:
    - concurrent.futures: Thread pool execution
    - zinefold.render.compositor: RasterCompositor

Used By:
    - zinefold.controller: Main pipeline
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from zinefold.core.errors import CompositorFailure

from .assembler import SheetRenderRequest
from .compositor import RasterCompositor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderReport:
    """
    Result of rendering a batch of requests.

    Attributes:
        outputs: Written files, in request order
        failures: One CompositorFailure per failed side, in request order
    """

    outputs: Tuple[Path, ...]
    failures: Tuple[CompositorFailure, ...]

    @property
    def ok(self) -> bool:
        return not self.failures


class RenderQueue:
    """
    Thread pool-based render queue.

    Usage:
        with RenderQueue(compositor, max_workers=4) as queue:
            for request in requests:
                queue.submit(request)
            report = queue.wait_all()

    Attributes:
        compositor: Compositor every request is rendered with
        max_workers: Maximum concurrent compositor calls
    """

    def __init__(self, compositor: RasterCompositor, max_workers: int = 4):
        self.compositor = compositor
        self._executor = ThreadPoolExecutor(max_workers=max_workers)
        self._pending: List[Tuple[SheetRenderRequest, Future]] = []

    def submit(self, request: SheetRenderRequest) -> Future:
        """Queue one sheet side for rendering."""
        future = self._executor.submit(self.compositor.render, request)
        self._pending.append((request, future))
        return future

    def wait_all(self, timeout: Optional[float] = None) -> RenderReport:
        """
        Wait for every queued render.

        Args:
            timeout: Max seconds to wait per request (None = indefinite)

        Returns:
            RenderReport for everything submitted since the last wait
        """
        outputs: List[Path] = []
        failures: List[CompositorFailure] = []
        for request, future in self._pending:
            try:
                outputs.append(future.result(timeout=timeout))
            except CompositorFailure as e:
                failures.append(_scoped(e, request))
                logger.error(f"Render failed for {request.label}: {e}")
            except Exception as e:
                failures.append(CompositorFailure(
                    str(e) or type(e).__name__,
                    sheet_index=request.sheet_index,
                    side=request.side.value,
                    command="render",
                ))
                logger.error(f"Render failed for {request.label}: {e}")
        self._pending.clear()
        return RenderReport(outputs=tuple(outputs), failures=tuple(failures))

    def shutdown(self) -> None:
        """Shutdown the thread pool."""
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "RenderQueue":
        return self

    def __exit__(self, *args) -> None:
        self.shutdown()


def render_all(
    requests: Sequence[SheetRenderRequest],
    compositor: RasterCompositor,
    *,
    max_workers: int = 4,
) -> RenderReport:
    """
    Render every request, collecting failures per sheet side.

    Args:
        requests: Render requests (any order; sides are independent)
        compositor: Compositor to render with
        max_workers: Maximum concurrent compositor calls

    Returns:
        RenderReport with outputs and failures in request order

    Example:
        >>> report = render_all(requests, PillowCompositor())
        >>> report.ok
        True
    """
    with RenderQueue(compositor, max_workers=max_workers) as queue:
        for request in requests:
            queue.submit(request)
        report = queue.wait_all()

    logger.info(
        f"Rendered {len(report.outputs)}/{len(requests)} sheet side(s) "
        f"with {compositor.name}"
    )
    return report


def _scoped(failure: CompositorFailure, request: SheetRenderRequest) -> CompositorFailure:
    """Attach the request's sheet and side to a failure that lacks them."""
    if failure.sheet_index is not None:
        return failure
    scoped = CompositorFailure(
        failure.args[0] if failure.args else "render failed",
        sheet_index=request.sheet_index,
        side=request.side.value,
        command=failure.command or "render",
    )
    scoped.__cause__ = failure
    return scoped
