"""
Module: plan

Purpose:
    Immutable imposition plan: physical sheets, each with a front and a
    back grid of page slots. Built by the signature planner, consumed
    read-only by the command assembler.

Key Classes:
    - Side: FRONT or BACK
    - SheetSide: One printable face as rows of slots
    - Sheet: Front and back of one physical sheet
    - ImpositionPlan: Ordered sheets plus any unplaced pages

Dependencies:
    - dataclasses (std)
    - zinefold.layout.models: Layout

Used By:
    - zinefold.planning.planner: Creates plans
    - zinefold.render.assembler: Reads plans
    - zinefold.controller: Manifest output
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from zinefold.layout.models import Layout

from .pages import LogicalPage

# A slot holds a page or None (filler)
Slot = Optional[LogicalPage]
SlotRow = Tuple[Slot, ...]


class Side(str, Enum):
    """Printable face of a sheet."""

    FRONT = "front"
    BACK = "back"


@dataclass(frozen=True)
class SheetSide:
    """
    One printable face of a sheet.

    Attributes:
        side: FRONT or BACK
        rows: Row-major slots; each row has ``2 * columns`` entries

    Example:
        >>> front.page_indices()
        [[7, 0]]
    """

    side: Side
    rows: Tuple[SlotRow, ...]

    @property
    def pages(self) -> List[LogicalPage]:
        """Placed pages in row-major order (fillers skipped)."""
        return [slot for row in self.rows for slot in row if slot is not None]

    @property
    def is_empty(self) -> bool:
        return not self.pages

    def slot(self, row: int, index: int) -> Slot:
        return self.rows[row][index]

    def page_indices(self) -> List[List[Optional[int]]]:
        """Slot contents as reading-order indices, None for fillers."""
        return [
            [slot.index if slot is not None else None for slot in row]
            for row in self.rows
        ]


@dataclass(frozen=True)
class Sheet:
    """
    One physical sheet.

    Attributes:
        index: Sheet number (0-indexed)
        front: Front face
        back: Back face (left-right mirror of the front)
    """

    index: int
    front: SheetSide
    back: SheetSide

    @property
    def sides(self) -> Tuple[SheetSide, SheetSide]:
        return (self.front, self.back)


@dataclass(frozen=True)
class ImpositionPlan:
    """
    Complete slot assignment for a run.

    Attributes:
        sheets: Sheets in print order
        layout: Grid layout the plan was built for
        unplaced: Pages the planner left out (odd page counts only)

    Example:
        >>> plan.sheet_count
        2
        >>> len(plan.placed_pages)
        8
    """

    sheets: Tuple[Sheet, ...]
    layout: Layout
    unplaced: Tuple[LogicalPage, ...] = ()

    @property
    def sheet_count(self) -> int:
        return len(self.sheets)

    @property
    def side_count(self) -> int:
        return 2 * len(self.sheets)

    def iter_sides(self) -> Iterator[Tuple[Sheet, SheetSide]]:
        """Yield (sheet, side) pairs, front before back."""
        for sheet in self.sheets:
            for side in sheet.sides:
                yield sheet, side

    @property
    def placed_pages(self) -> List[LogicalPage]:
        """Every placed page across the plan, in print order."""
        return [page for _, side in self.iter_sides() for page in side.pages]

    def to_dict(self) -> dict:
        """Serialize slot assignments for the run manifest."""
        return {
            "sheets": [
                {
                    "index": sheet.index,
                    "front": sheet.front.page_indices(),
                    "back": sheet.back.page_indices(),
                }
                for sheet in self.sheets
            ],
            "unplaced": [page.index for page in self.unplaced],
        }
