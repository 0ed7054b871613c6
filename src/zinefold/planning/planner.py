"""
Module: planning.planner

Purpose:
    Booklet signature placement. Assigns every logical page to a
    (sheet, side, row, slot) so that after duplex printing and folding
    the pages read in order.

Key Functions:
    - plan_imposition(): Main planning function
    - iter_placements(): Lazy stream of slot assignments
    - iter_states(): Lazy stream of planner states
    - advance(): Pure state transition

Key Classes:
    - PlannerState: Cursor/grid position between steps
    - SlotAssignment: One page placed into one slot

Algorithm:
    Two cursors walk the page sequence, ``i`` from the start and ``j``
    from the end. Each step fills one grid cell on both sides:
    1. Front cell (left, right) <- (page j, page i)
    2. Back cell, mirrored across the sheet so it lines up with the
       front after a long-edge flip: slot 2*(columns-column)-1 <- page
       j-1 and slot 2*(columns-column-1) <- page i+1
    3. i += 2, j -= 2, next cell; a full grid seals the sheet
    Back slots are only filled while i+1 < j-1 so no page lands twice.
    For an odd page count the middle page (N // 2) is never reached.

Dependencies:
    - zinefold.core.models: LogicalPage, SheetSide, Sheet, ImpositionPlan
    - zinefold.layout.models: Layout

Used By:
    - zinefold.controller: Main pipeline
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from zinefold.core.errors import EmptyInput, LayoutMismatch
from zinefold.core.models import (
    ImpositionPlan,
    LogicalPage,
    Sheet,
    SheetSide,
    Side,
    Slot,
)
from zinefold.layout.models import Layout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlannerState:
    """
    Planner position before a placement step.

    Attributes:
        i: Next unread page from the front
        j: Next unread page from the back
        sheet: Sheet being filled
        row: Row being filled on that sheet
        column: Cell (page pair) within the row
    """

    i: int
    j: int
    sheet: int = 0
    row: int = 0
    column: int = 0

    @property
    def done(self) -> bool:
        return self.i >= self.j


@dataclass(frozen=True)
class SlotAssignment:
    """One page placed into one slot."""

    sheet: int
    side: Side
    row: int
    slot: int
    page: LogicalPage


def initial_state(page_count: int) -> PlannerState:
    return PlannerState(i=0, j=page_count - 1)


def advance(state: PlannerState, layout: Layout) -> PlannerState:
    """
    Move to the next cell: next column, wrapping to the next row, and
    to a fresh sheet once every row is used.
    """
    sheet, row, column = state.sheet, state.row, state.column + 1
    if column == layout.columns:
        column = 0
        row += 1
        if row == layout.rows:
            row = 0
            sheet += 1
    return PlannerState(i=state.i + 2, j=state.j - 2, sheet=sheet, row=row, column=column)


def back_slots(column: int, columns: int) -> Tuple[int, int]:
    """
    Mirrored back-side slots for a front cell.

    Returns:
        (right-hand slot, left-hand slot) on the back row

    Example:
        >>> back_slots(0, 2)
        (3, 2)
    """
    return 2 * (columns - column) - 1, 2 * (columns - column - 1)


def _step_assignments(
    state: PlannerState,
    pages: Sequence[Optional[LogicalPage]],
    columns: int,
) -> List[Tuple[Side, int, Slot]]:
    """(side, slot, page) triples filled by one step."""
    i, j, column = state.i, state.j, state.column
    filled: List[Tuple[Side, int, Slot]] = [
        (Side.FRONT, 2 * column, pages[j]),
        (Side.FRONT, 2 * column + 1, pages[i]),
    ]
    if i + 1 < j - 1:
        right, left = back_slots(column, columns)
        filled.append((Side.BACK, right, pages[j - 1]))
        filled.append((Side.BACK, left, pages[i + 1]))
    return filled


def iter_states(page_count: int, layout: Layout) -> Iterator[PlannerState]:
    """Yield the state before every placement step."""
    state = initial_state(page_count)
    while not state.done:
        yield state
        state = advance(state, layout)


def iter_placements(
    pages: Sequence[Optional[LogicalPage]],
    layout: Layout,
) -> Iterator[SlotAssignment]:
    """
    Lazily yield slot assignments in placement order.

    Fillers (None) produce no assignment; their slots stay empty.

    Raises:
        EmptyInput: If pages is empty
        LayoutMismatch: If the layout grid has a non-positive dimension
    """
    _validate(pages, layout)
    for state in iter_states(len(pages), layout):
        for side, slot, page in _step_assignments(state, pages, layout.columns):
            if page is not None:
                yield SlotAssignment(state.sheet, side, state.row, slot, page)


def plan_imposition(
    pages: Sequence[Optional[LogicalPage]],
    layout: Layout,
) -> ImpositionPlan:
    """
    Assign pages to sheet slots.

    Args:
        pages: Pages in reading order; None entries are blank fillers
        layout: Grid layout for every sheet side

    Returns:
        ImpositionPlan with every sheet touched by the walk, including a
        partially filled last sheet

    Raises:
        EmptyInput: If pages is empty or holds only fillers
        LayoutMismatch: If the layout grid has a non-positive dimension

    Example:
        >>> plan = plan_imposition(pages, layout)  # 8 pages, 1x1 grid
        >>> plan.sheets[0].front.page_indices()
        [[7, 0]]
        >>> plan.sheets[0].back.page_indices()
        [[1, 6]]
    """
    _validate(pages, layout)

    grids: List[Tuple[List[List[Slot]], List[List[Slot]]]] = []
    for state in iter_states(len(pages), layout):
        if state.sheet == len(grids):
            grids.append((_empty_grid(layout), _empty_grid(layout)))
        front, back = grids[state.sheet]
        for side, slot, page in _step_assignments(state, pages, layout.columns):
            grid = front if side is Side.FRONT else back
            grid[state.row][slot] = page

    sheets = tuple(
        Sheet(
            index=index,
            front=SheetSide(Side.FRONT, _freeze(front)),
            back=SheetSide(Side.BACK, _freeze(back)),
        )
        for index, (front, back) in enumerate(grids)
    )

    unplaced: Tuple[LogicalPage, ...] = ()
    if len(pages) % 2 == 1:
        middle = pages[len(pages) // 2]
        if middle is not None:
            unplaced = (middle,)
            logger.warning(
                f"Odd page count ({len(pages)}): {middle} was not placed; "
                "pad the sequence to an even count to keep it"
            )

    plan = ImpositionPlan(sheets=sheets, layout=layout, unplaced=unplaced)
    logger.info(
        f"Planned {len(plan.placed_pages)} pages onto {plan.sheet_count} sheet(s) "
        f"({layout.columns}x{layout.rows} cells per side)"
    )
    return plan


def _validate(pages: Sequence[Optional[LogicalPage]], layout: Layout) -> None:
    if not pages or all(page is None for page in pages):
        raise EmptyInput("No pages to place")
    columns, rows = layout.grid_layout
    if columns <= 0 or rows <= 0:
        raise LayoutMismatch(f"Layout grid must be positive: {columns}x{rows}")


def _empty_grid(layout: Layout) -> List[List[Slot]]:
    return [[None] * layout.slots_per_row for _ in range(layout.rows)]


def _freeze(grid: List[List[Slot]]) -> Tuple[Tuple[Slot, ...], ...]:
    return tuple(tuple(row) for row in grid)
