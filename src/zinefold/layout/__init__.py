"""
Module: layout

Purpose:
    Grid layout for sheet sides: unit conversion and the calculation of
    columns x rows, scale, margins, gutter and offsets in pixels.

Key Functions:
    - compute_layout(): Main layout calculation
    - compute_layout_for_paper(): Layout from a PaperSpec

Key Classes:
    - Layout: Immutable grid layout
    - Margins: Per-edge margins in pixels

Used By:
    - zinefold.controller: Main pipeline
    - zinefold.planning: Reads grid shape
"""

from .models import Layout, Margins
from .calculator import compute_layout, compute_layout_for_paper
from .units import UnitError, convert, paper_size

__all__ = [
    "Layout",
    "Margins",
    "compute_layout",
    "compute_layout_for_paper",
    "UnitError",
    "convert",
    "paper_size",
]
