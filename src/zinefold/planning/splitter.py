"""
Module: planning.splitter

Purpose:
    Turn measured source scans into logical pages in reading order, and
    pad the page sequence with blank slots before planning.

Key Functions:
    - split_spreads(): SourceSpreads -> LogicalPages
    - pad_pages(): Append fillers up to a multiple

Dependencies:
    - zinefold.core.models: SourceSpread, LogicalPage, Pane

Used By:
    - zinefold.controller: Main pipeline
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from zinefold.core.errors import EmptyInput
from zinefold.core.models import LogicalPage, Pane, SourceSpread

logger = logging.getLogger(__name__)


def split_spreads(
    spreads: Sequence[SourceSpread],
    *,
    source_format: str = "spread",
    skip_outer_panes: bool = False,
    back_is_first: bool = False,
) -> List[LogicalPage]:
    """
    Split source scans into logical pages in reading order.

    Spread format yields each scan's left pane then its right pane.
    Two options cover how book covers are usually scanned:

    - skip_outer_panes: the first scan's left pane and the last scan's
      right pane are blank (outside of the covers) and are dropped.
    - back_is_first: the first scan holds back cover | front cover. Its
      left pane becomes the last page; the last scan keeps both panes.
      Takes precedence over skip_outer_panes.

    Page format treats each scan as a single page and ignores both options.

    Args:
        spreads: Measured scans in input order
        source_format: "spread" or "page"
        skip_outer_panes: Drop the outermost panes
        back_is_first: First scan's left pane is the back cover

    Returns:
        LogicalPages with indices 0..N-1 in reading order

    Raises:
        EmptyInput: If no spreads are given or no page remains
        ValueError: If source_format is unknown

    Example:
        >>> pages = split_spreads([s0, s1], skip_outer_panes=True)
        >>> [(p.spread.index, p.pane.value) for p in pages]
        [(0, 'right'), (1, 'left')]
    """
    if not spreads:
        raise EmptyInput("No source images to split")

    if source_format == "page":
        panes: List[Tuple[SourceSpread, Optional[Pane]]] = [(s, None) for s in spreads]
    elif source_format == "spread":
        panes = _spread_panes(spreads, skip_outer_panes, back_is_first)
    else:
        raise ValueError(f"Unknown source format: {source_format!r}")

    if not panes:
        raise EmptyInput(f"No pages left after splitting {len(spreads)} source image(s)")

    pages = [
        LogicalPage(spread=spread, pane=pane, index=index)
        for index, (spread, pane) in enumerate(panes)
    ]
    logger.debug(f"Split {len(spreads)} source image(s) into {len(pages)} pages")
    return pages


def _spread_panes(
    spreads: Sequence[SourceSpread],
    skip_outer_panes: bool,
    back_is_first: bool,
) -> List[Tuple[SourceSpread, Optional[Pane]]]:
    """Ordered (spread, pane) pairs for spread-format sources."""
    last = len(spreads) - 1
    panes: List[Tuple[SourceSpread, Optional[Pane]]] = []

    for position, spread in enumerate(spreads):
        if position != 0 or not (skip_outer_panes or back_is_first):
            panes.append((spread, Pane.LEFT))
        if position != last or back_is_first or not skip_outer_panes:
            panes.append((spread, Pane.RIGHT))

    if back_is_first:
        # Back cover closes the booklet
        panes.append((spreads[0], Pane.LEFT))

    return panes


def pad_pages(
    pages: Sequence[Optional[LogicalPage]],
    multiple: int,
) -> List[Optional[LogicalPage]]:
    """
    Append fillers (None) until the count is a multiple of ``multiple``.

    A multiple of 4 fills both sides of every folded sheet, which keeps
    the booklet in reading order; ``multiple <= 1`` returns a copy.

    Example:
        >>> len(pad_pages(six_pages, 4))
        8
    """
    padded: List[Optional[LogicalPage]] = list(pages)
    if multiple <= 1:
        return padded
    remainder = len(padded) % multiple
    if remainder:
        fill = multiple - remainder
        padded.extend([None] * fill)
        logger.info(f"Padded {len(pages)} pages with {fill} blank slot(s)")
    return padded
