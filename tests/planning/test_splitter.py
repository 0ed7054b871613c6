"""
Tests for zinefold.planning.splitter

Test Coverage:
- split_spreads(): Reading order for spread and page formats
- Cover options: skip_outer_panes, back_is_first
- pad_pages(): Filler padding
"""
from pathlib import Path

import pytest

from zinefold.core.errors import EmptyInput
from zinefold.core.models import Pane, SourceSpread
from zinefold.planning import pad_pages, split_spreads


@pytest.fixture
def spreads():
    """Three 200x100 spreads."""
    return [SourceSpread(Path(f"scan-{i}.png"), 200, 100, index=i) for i in range(3)]


def _order(pages):
    return [(p.spread.index, p.pane) for p in pages]


class TestSplitSpreads:
    """Tests for split_spreads()."""

    def test_spread_format_yields_left_then_right(self, spreads):
        # Act
        pages = split_spreads(spreads)

        # Assert
        assert _order(pages) == [
            (0, Pane.LEFT), (0, Pane.RIGHT),
            (1, Pane.LEFT), (1, Pane.RIGHT),
            (2, Pane.LEFT), (2, Pane.RIGHT),
        ]
        assert [p.index for p in pages] == list(range(6))

    def test_pages_are_half_spread_wide(self, spreads):
        pages = split_spreads(spreads)
        assert all(p.width == 100 and p.height == 100 for p in pages)

    def test_skip_outer_panes_drops_first_left_and_last_right(self, spreads):
        pages = split_spreads(spreads, skip_outer_panes=True)
        assert _order(pages) == [
            (0, Pane.RIGHT),
            (1, Pane.LEFT), (1, Pane.RIGHT),
            (2, Pane.LEFT),
        ]

    def test_back_is_first_moves_first_left_pane_to_end(self, spreads):
        pages = split_spreads(spreads, back_is_first=True)
        assert _order(pages) == [
            (0, Pane.RIGHT),
            (1, Pane.LEFT), (1, Pane.RIGHT),
            (2, Pane.LEFT), (2, Pane.RIGHT),
            (0, Pane.LEFT),
        ]
        assert pages[-1].index == 5

    def test_back_is_first_takes_precedence_over_skip(self, spreads):
        both = split_spreads(spreads, back_is_first=True, skip_outer_panes=True)
        assert _order(both) == _order(split_spreads(spreads, back_is_first=True))

    def test_page_format_yields_whole_images(self, spreads):
        # Act
        pages = split_spreads(spreads, source_format="page", skip_outer_panes=True)

        # Assert
        assert _order(pages) == [(0, None), (1, None), (2, None)]
        assert pages[0].width == 200

    def test_when_no_spreads_then_raises_empty_input(self):
        with pytest.raises(EmptyInput):
            split_spreads([])

    def test_when_single_spread_skips_both_panes_then_raises_empty_input(self, spreads):
        with pytest.raises(EmptyInput, match="No pages left"):
            split_spreads(spreads[:1], skip_outer_panes=True)

    def test_when_unknown_format_then_raises_value_error(self, spreads):
        with pytest.raises(ValueError, match="Unknown source format"):
            split_spreads(spreads, source_format="quad")


class TestPadPages:
    """Tests for pad_pages()."""

    def test_pads_to_multiple_of_four(self, make_pages):
        # Act
        padded = pad_pages(make_pages(6), 4)

        # Assert
        assert len(padded) == 8
        assert padded[6:] == [None, None]
        assert [p.index for p in padded[:6]] == list(range(6))

    def test_exact_multiple_is_unchanged(self, make_pages):
        pages = make_pages(8)
        assert pad_pages(pages, 4) == pages

    def test_odd_count_becomes_even(self, make_pages):
        assert len(pad_pages(make_pages(5), 2)) == 6

    def test_multiple_of_one_returns_copy(self, make_pages):
        pages = make_pages(3)
        padded = pad_pages(pages, 1)
        assert padded == pages
        assert padded is not pages
