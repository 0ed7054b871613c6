"""
Core Package

Shared error taxonomy and immutable data models used by every stage of
the imposition pipeline.
"""

from .errors import (
    ImpositionError,
    InfeasibleLayout,
    EmptyInput,
    LayoutMismatch,
    CompositorFailure,
    MeasureError,
    ConfigError,
    UnitError,
)

__all__ = [
    "ImpositionError",
    "InfeasibleLayout",
    "EmptyInput",
    "LayoutMismatch",
    "CompositorFailure",
    "MeasureError",
    "ConfigError",
    "UnitError",
]
