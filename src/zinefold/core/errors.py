"""
Module: core.errors

Purpose:
    Exception taxonomy for the imposition pipeline. Layout and planning
    errors are fatal for a run; CompositorFailure is scoped to one sheet
    side and is collected by the render dispatcher.

Key Classes:
    - ImpositionError: Base class for all pipeline errors
    - InfeasibleLayout: Requested columns cannot fit one row on the paper
    - EmptyInput: No pages to place
    - LayoutMismatch: Non-positive grid dimensions reached the planner
    - CompositorFailure: An external render call failed for one sheet side
    - MeasureError: A source image could not be measured
    - ConfigError: Configuration could not be parsed
    - UnitError: Unknown unit or paper preset (also a ValueError)

Used By:
    - zinefold.layout
    - zinefold.planning
    - zinefold.render
    - zinefold.loading.parser
    - zinefold.controller
"""

from __future__ import annotations

from typing import Optional


class ImpositionError(Exception):
    """Base error for the imposition pipeline."""
    pass


class InfeasibleLayout(ImpositionError):
    """Requested layout does not fit the paper at any positive row count."""
    pass


class EmptyInput(ImpositionError):
    """No pages (or no source images) to place."""
    pass


class LayoutMismatch(ImpositionError):
    """Layout grid with non-positive dimensions handed to the planner."""
    pass


class MeasureError(ImpositionError):
    """Source image dimensions could not be determined."""
    pass


class ConfigError(ImpositionError):
    """Error parsing or validating configuration."""
    pass


class UnitError(ImpositionError, ValueError):
    """Unknown unit or paper preset."""
    pass


class CompositorFailure(ImpositionError):
    """
    External render call failed for one sheet side.

    Not retried: image tools are deterministic, so a failure points at
    bad input such as an unreadable source file.

    Attributes:
        sheet_index: Sheet the failed request belonged to (None for measure)
        side: "front" or "back" (None for measure)
        command: Short description of the failed operation
    """

    def __init__(
        self,
        message: str,
        *,
        sheet_index: Optional[int] = None,
        side: Optional[str] = None,
        command: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.sheet_index = sheet_index
        self.side = side
        self.command = command

    def __str__(self) -> str:
        base = super().__str__()
        if self.sheet_index is None:
            return base
        return f"sheet {self.sheet_index} ({self.side}): {base}"
