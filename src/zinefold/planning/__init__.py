"""
Module: planning

Purpose:
    Logical page sequencing and booklet signature placement.

Key Functions:
    - split_spreads(): Source scans -> pages in reading order
    - pad_pages(): Pad with blank slots
    - plan_imposition(): Pages -> ImpositionPlan
    - iter_placements(): Lazy slot assignment stream

Used By:
    - zinefold.controller: Main pipeline
"""

from .splitter import split_spreads, pad_pages
from .planner import (
    PlannerState,
    SlotAssignment,
    advance,
    back_slots,
    iter_placements,
    iter_states,
    plan_imposition,
)

__all__ = [
    "split_spreads",
    "pad_pages",
    "PlannerState",
    "SlotAssignment",
    "advance",
    "back_slots",
    "iter_placements",
    "iter_states",
    "plan_imposition",
]
