"""
Unit Tests for page descriptors

Tests for CropRegion, SourceSpread and LogicalPage.
"""

from pathlib import Path

import pytest

from zinefold.core.models import CropRegion, LogicalPage, Pane, SourceSpread


class TestCropRegion:
    """Tests for CropRegion dataclass."""

    # ─────────────────────────────────────────────────────────────────────────
    # Constructor Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_init_when_valid_then_creates_region(self):
        r = CropRegion(left=600, top=0, width=600, height=900)
        assert r.right == 1200
        assert r.bottom == 900

    def test_init_when_negative_left_then_raises_error(self):
        with pytest.raises(ValueError, match="left must be >= 0"):
            CropRegion(left=-1, top=0, width=10, height=10)

    def test_init_when_zero_width_then_raises_error(self):
        with pytest.raises(ValueError, match="width must be positive"):
            CropRegion(left=0, top=0, width=0, height=10)

    def test_init_when_zero_height_then_raises_error(self):
        with pytest.raises(ValueError, match="height must be positive"):
            CropRegion(left=0, top=0, width=10, height=0)

    # ─────────────────────────────────────────────────────────────────────────
    # Property Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_box_is_pillow_order(self):
        assert CropRegion(600, 10, 600, 900).box == (600, 10, 1200, 910)

    def test_geometry_is_imagemagick_format(self):
        assert CropRegion(600, 10, 600, 900).geometry() == "600x900+600+10"

    def test_is_immutable(self):
        r = CropRegion(0, 0, 10, 10)
        with pytest.raises(AttributeError):
            r.left = 5


class TestSourceSpread:
    """Tests for SourceSpread dataclass."""

    def test_size_returns_width_height(self):
        assert SourceSpread(Path("a.png"), 1200, 900).size == (1200, 900)

    def test_init_when_non_positive_size_then_raises_error(self):
        with pytest.raises(ValueError, match="non-positive size"):
            SourceSpread(Path("a.png"), 0, 900)


class TestLogicalPage:
    """Tests for LogicalPage dataclass."""

    @pytest.fixture
    def spread(self):
        return SourceSpread(Path("scan-01.png"), 1201, 900, index=3)

    def test_left_pane_covers_left_half(self, spread):
        page = LogicalPage(spread=spread, pane=Pane.LEFT, index=0)
        assert page.crop_region == CropRegion(0, 0, 600, 900)

    def test_right_pane_starts_at_half_width(self, spread):
        """Odd spread widths lose the last column to integer division."""
        page = LogicalPage(spread=spread, pane=Pane.RIGHT, index=1)
        assert page.crop_region == CropRegion(600, 0, 600, 900)

    def test_whole_image_page_covers_full_spread(self, spread):
        page = LogicalPage(spread=spread, pane=None, index=0)
        assert page.width == 1201
        assert page.crop_region == CropRegion(0, 0, 1201, 900)

    def test_source_is_spread_path(self, spread):
        assert LogicalPage(spread, Pane.LEFT, 0).source == Path("scan-01.png")

    def test_str_names_index_file_and_pane(self, spread):
        assert str(LogicalPage(spread, Pane.RIGHT, 5)) == "page 5 (scan-01.png:right)"
        assert str(LogicalPage(spread, None, 2)) == "page 2 (scan-01.png:full)"
