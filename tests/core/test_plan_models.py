"""
Unit Tests for plan models

Tests for SheetSide, Sheet and ImpositionPlan.
"""

import pytest

from zinefold.core.models import ImpositionPlan, Sheet, SheetSide, Side


@pytest.fixture
def two_sheet_plan(make_pages, make_layout):
    """Hand-built 8-page plan on a 1x1 grid."""
    p = make_pages(8)
    sheets = (
        Sheet(0, SheetSide(Side.FRONT, ((p[7], p[0]),)), SheetSide(Side.BACK, ((p[1], p[6]),))),
        Sheet(1, SheetSide(Side.FRONT, ((p[5], p[2]),)), SheetSide(Side.BACK, ((p[3], p[4]),))),
    )
    return ImpositionPlan(sheets=sheets, layout=make_layout(1, 1))


class TestSheetSide:
    """Tests for SheetSide."""

    def test_pages_skip_fillers(self, make_pages):
        p = make_pages(2)
        side = SheetSide(Side.BACK, ((None, p[1]), (p[0], None)))
        assert [page.index for page in side.pages] == [1, 0]

    def test_is_empty_when_only_fillers(self):
        assert SheetSide(Side.BACK, ((None, None),)).is_empty

    def test_page_indices_keep_fillers_as_none(self, make_pages):
        p = make_pages(4)
        side = SheetSide(Side.BACK, ((None, None, p[1], p[3]),))
        assert side.page_indices() == [[None, None, 1, 3]]

    def test_slot_returns_row_entry(self, make_pages):
        p = make_pages(2)
        side = SheetSide(Side.FRONT, ((p[1], p[0]),))
        assert side.slot(0, 1) is p[0]


class TestImpositionPlan:
    """Tests for ImpositionPlan."""

    def test_counts(self, two_sheet_plan):
        assert two_sheet_plan.sheet_count == 2
        assert two_sheet_plan.side_count == 4

    def test_iter_sides_front_before_back(self, two_sheet_plan):
        order = [(sheet.index, side.side) for sheet, side in two_sheet_plan.iter_sides()]
        assert order == [
            (0, Side.FRONT), (0, Side.BACK),
            (1, Side.FRONT), (1, Side.BACK),
        ]

    def test_placed_pages_in_print_order(self, two_sheet_plan):
        assert [p.index for p in two_sheet_plan.placed_pages] == [7, 0, 1, 6, 5, 2, 3, 4]

    def test_to_dict(self, two_sheet_plan):
        # Act
        data = two_sheet_plan.to_dict()

        # Assert
        assert data["sheets"][0] == {"index": 0, "front": [[7, 0]], "back": [[1, 6]]}
        assert data["sheets"][1]["back"] == [[3, 4]]
        assert data["unplaced"] == []
