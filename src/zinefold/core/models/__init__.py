"""
Core Models Package

Immutable data models shared by the planner, the assembler and the
compositors.

All models are frozen dataclasses. This ensures:
1. No accidental mutation while a plan is being rendered
2. Safe to pass between render threads
3. Re-running a stage on the same input gives equal output
"""

from .pages import Pane, CropRegion, SourceSpread, LogicalPage
from .plan import Side, Slot, SheetSide, Sheet, ImpositionPlan

__all__ = [
    "Pane",
    "CropRegion",
    "SourceSpread",
    "LogicalPage",
    "Side",
    "Slot",
    "SheetSide",
    "Sheet",
    "ImpositionPlan",
]
