"""
Tests for zinefold.render.pillow

Test Coverage:
- crop_page(): Region cropping and bounds checks
- PillowCompositor.measure(): Size and failures
- PillowCompositor.compose(): Canvas size, placement, padding, fillers
- PillowCompositor.render(): End to end from a plan
- Atomic write leaves no temp files
"""
from pathlib import Path

import pytest
from PIL import Image

from zinefold.core.errors import CompositorFailure
from zinefold.core.models import CropRegion, Side, SourceSpread
from zinefold.layout.models import Layout
from zinefold.planning import plan_imposition, split_spreads
from zinefold.render import Padding, PillowCompositor, SheetRenderRequest, assemble_render_commands
from zinefold.render.pillow import TRANSPARENT, crop_page

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


def _request(tmp_path, *, rows=((None, None),), padding=Padding(), canvas=(200, 100), dpi=300.0):
    return SheetRenderRequest(
        sheet_index=0,
        side=Side.FRONT,
        output_path=tmp_path / "out" / "sheet-000-front.png",
        rows=rows,
        cell_size=(100, 100),
        canvas_size=canvas,
        padding=padding,
        align="west",
        dpi=dpi,
    )


class TestCropPage:
    """Tests for crop_page()."""

    def test_crop_page_returns_region(self):
        img = Image.new("RGB", (200, 100), color="white")
        assert crop_page(img, CropRegion(100, 0, 100, 100)).size == (100, 100)

    def test_crop_page_when_region_too_wide_then_raises(self):
        img = Image.new("RGB", (200, 100))
        with pytest.raises(ValueError, match="exceeds image width"):
            crop_page(img, CropRegion(150, 0, 100, 100))

    def test_crop_page_when_region_too_tall_then_raises(self):
        img = Image.new("RGB", (200, 100))
        with pytest.raises(ValueError, match="exceeds image height"):
            crop_page(img, CropRegion(0, 50, 100, 100))


class TestMeasure:
    """Tests for PillowCompositor.measure()."""

    def test_measure_returns_pixel_size(self, make_spread_image):
        path = make_spread_image("scan.png", size=(320, 240))
        assert PillowCompositor().measure(path) == (320, 240)

    def test_measure_when_missing_then_raises_compositor_failure(self, tmp_path):
        with pytest.raises(CompositorFailure) as exc_info:
            PillowCompositor().measure(tmp_path / "missing.png")
        assert exc_info.value.command == "measure"

    def test_measure_when_not_an_image_then_raises_compositor_failure(self, tmp_path):
        path = tmp_path / "notes.png"
        path.write_text("not an image")
        with pytest.raises(CompositorFailure):
            PillowCompositor().measure(path)


class TestCompose:
    """Tests for PillowCompositor.compose()."""

    def test_compose_writes_canvas_sized_png(self, tmp_path):
        # Arrange
        request = _request(tmp_path, canvas=(240, 130))

        # Act
        path = PillowCompositor().compose(request, [[None, None]])

        # Assert
        assert path == request.output_path
        with Image.open(path) as img:
            assert img.size == (240, 130)
            assert img.mode == "RGBA"

    def test_compose_places_cells_after_padding(self, tmp_path):
        # Arrange
        request = _request(tmp_path, canvas=(240, 130), padding=Padding(left=27, right=13, top=13, bottom=17))
        red = Image.new("RGB", (100, 100), color="red")
        blue = Image.new("RGB", (100, 100), color="blue")

        # Act
        path = PillowCompositor().compose(request, [[red, blue]])

        # Assert
        with Image.open(path) as img:
            assert img.getpixel((27, 13)) == RED
            assert img.getpixel((126, 112)) == RED
            assert img.getpixel((127, 13)) == BLUE
            assert img.getpixel((26, 13)) == TRANSPARENT
            assert img.getpixel((27, 12)) == TRANSPARENT

    def test_compose_leaves_fillers_transparent(self, tmp_path):
        request = _request(tmp_path)
        red = Image.new("RGB", (100, 100), color="red")

        path = PillowCompositor().compose(request, [[None, red]])

        with Image.open(path) as img:
            assert img.getpixel((50, 50)) == TRANSPARENT
            assert img.getpixel((150, 50)) == RED

    def test_compose_resizes_mismatched_cells(self, tmp_path):
        request = _request(tmp_path)
        small = Image.new("RGB", (50, 50), color="blue")

        path = PillowCompositor().compose(request, [[small, None]])

        with Image.open(path) as img:
            assert img.getpixel((95, 95)) == BLUE

    def test_compose_with_background_writes_rgb(self, tmp_path):
        path = PillowCompositor(background="white").compose(_request(tmp_path), [[None, None]])
        with Image.open(path) as img:
            assert img.mode == "RGB"
            assert img.getpixel((0, 0)) == (255, 255, 255)

    def test_compose_records_dpi(self, tmp_path):
        path = PillowCompositor().compose(_request(tmp_path, dpi=300.0), [[None, None]])
        with Image.open(path) as img:
            dpi_x, dpi_y = img.info["dpi"]
        assert dpi_x == pytest.approx(300.0, abs=1.0)
        assert dpi_y == pytest.approx(300.0, abs=1.0)

    def test_compose_leaves_no_temp_files(self, tmp_path):
        request = _request(tmp_path)
        PillowCompositor().compose(request, [[None, None]])
        assert sorted(p.name for p in request.output_path.parent.iterdir()) == [
            "sheet-000-front.png"
        ]


class TestRender:
    """Tests for PillowCompositor.render() from a real plan."""

    def test_render_front_and_back_of_folded_sheet(self, make_spread_image, tmp_path):
        # Arrange: two red|blue spreads -> pages 0 red, 1 blue, 2 red, 3 blue
        paths = [make_spread_image(f"scan-{i}.png") for i in range(2)]
        spreads = [SourceSpread(p, 200, 100, index=i) for i, p in enumerate(paths)]
        layout = Layout(
            columns=1, rows=1, pixels_per_unit=1.0,
            paper_width_px=200.0, paper_height_px=100.0,
            cell_width_px=200, cell_height_px=100,
        )
        plan = plan_imposition(split_spreads(spreads), layout)
        front, back = assemble_render_commands(plan, tmp_path / "out")
        compositor = PillowCompositor()

        # Act
        front_path = compositor.render(front)
        back_path = compositor.render(back)

        # Assert: front [3, 0] = blue | red, back [1, 2] = blue | red
        with Image.open(front_path) as img:
            assert img.size == (200, 100)
            assert img.getpixel((50, 50)) == BLUE
            assert img.getpixel((150, 50)) == RED
        with Image.open(back_path) as img:
            assert img.getpixel((50, 50)) == BLUE
            assert img.getpixel((150, 50)) == RED

    def test_render_when_source_missing_then_raises(self, tmp_path, make_pages, make_layout):
        plan = plan_imposition(make_pages(4), make_layout(1, 1))
        request = assemble_render_commands(plan, tmp_path)[0]
        with pytest.raises(OSError):
            PillowCompositor().render(request)
