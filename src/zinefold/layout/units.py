"""
Module: layout.units

Purpose:
    Unit conversion and pixel scaling for paper measurements.
    Layout math is unit-agnostic (every paper value shares one unit);
    conversion is only needed for named presets and DPI metadata.

Key Functions:
    - normalize_unit(): Canonical unit name
    - convert(): Convert a length between units
    - to_inches(): Convert a length to inches
    - pixels_per_inch(): Effective DPI for a pixels-per-unit scale
    - scale_to_pixels(): Round a scaled length to whole pixels
    - paper_size(): Dimensions of a named paper preset

Dependencies:
    - zinefold.core.errors: UnitError

Used By:
    - zinefold.layout.calculator
    - zinefold.loading.parser
    - zinefold.render.pillow
"""

from __future__ import annotations

from typing import Dict, Tuple

from zinefold.core.errors import UnitError

# Length of one unit in inches
_INCHES_PER_UNIT: Dict[str, float] = {
    "in": 1.0,
    "cm": 1 / 2.54,
    "mm": 1 / 25.4,
    "pt": 1 / 72,
}

_ALIASES: Dict[str, str] = {
    "inch": "in",
    "inches": "in",
    "\"": "in",
    "centimeter": "cm",
    "centimeters": "cm",
    "millimeter": "mm",
    "millimeters": "mm",
    "point": "pt",
    "points": "pt",
}

# Paper presets in inches (width, height), portrait
PAPER_SIZES: Dict[str, Tuple[float, float]] = {
    "letter": (8.5, 11.0),
    "legal": (8.5, 14.0),
    "tabloid": (11.0, 17.0),
    "a3": (297 / 25.4, 420 / 25.4),
    "a4": (210 / 25.4, 297 / 25.4),
    "a5": (148 / 25.4, 210 / 25.4),
}

DEFAULT_UNIT = "in"


def normalize_unit(unit: str) -> str:
    """
    Return the canonical name for a unit.

    Raises:
        UnitError: If the unit is not recognised

    Example:
        >>> normalize_unit("Inches")
        'in'
    """
    key = unit.strip().lower()
    key = _ALIASES.get(key, key)
    if key not in _INCHES_PER_UNIT:
        raise UnitError(f"Unknown unit: {unit!r}")
    return key


def convert(value: float, from_unit: str, to_unit: str) -> float:
    """Convert a length from one unit to another."""
    src = normalize_unit(from_unit)
    dst = normalize_unit(to_unit)
    if src == dst:
        return value
    return value * _INCHES_PER_UNIT[src] / _INCHES_PER_UNIT[dst]


def to_inches(value: float, unit: str) -> float:
    """Convert a length to inches."""
    return convert(value, unit, "in")


def pixels_per_inch(pixels_per_unit: float, unit: str) -> float:
    """
    Effective DPI for a scale expressed in pixels per ``unit``.

    Example:
        >>> round(pixels_per_inch(100.0, "cm"), 1)
        254.0
    """
    return pixels_per_unit / _INCHES_PER_UNIT[normalize_unit(unit)]


def scale_to_pixels(value: float, pixels_per_unit: float = 1.0) -> int:
    """Scale a length and round it to whole pixels for compositors."""
    return int(round(value * pixels_per_unit))


def paper_size(name: str, unit: str = DEFAULT_UNIT) -> Tuple[float, float]:
    """
    Dimensions of a named paper preset in ``unit``.

    Raises:
        UnitError: If the preset name is unknown
    """
    key = name.strip().lower()
    if key not in PAPER_SIZES:
        raise UnitError(
            f"Unknown paper size {name!r} (known: {', '.join(sorted(PAPER_SIZES))})"
        )
    width, height = PAPER_SIZES[key]
    return convert(width, "in", unit), convert(height, "in", unit)
