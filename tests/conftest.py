import pytest
import sys
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple
from PIL import Image

# Add src to sys.path so we can import zinefold
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from zinefold.core.errors import CompositorFailure
from zinefold.core.models import LogicalPage, SourceSpread
from zinefold.layout.models import Layout
from zinefold.render.compositor import RasterCompositor


class RecordingCompositor(RasterCompositor):
    """
    Compositor that records requests instead of touching pixels.

    Measures every path as ``size``; fails compose for any
    (sheet_index, side) listed in ``fail_on``.
    """

    name = "recording"

    def __init__(
        self,
        size: Tuple[int, int] = (200, 100),
        fail_on: Optional[Set[Tuple[int, str]]] = None,
        sizes: Optional[Dict[Path, Tuple[int, int]]] = None,
    ):
        self.size = size
        self.sizes = sizes or {}
        self.fail_on = fail_on or set()
        self.measured: List[Path] = []
        self.composed = []

    def measure(self, path):
        self.measured.append(Path(path))
        return self.sizes.get(Path(path), self.size)

    def crop(self, path, region):
        return (Path(path), region)

    def compose(self, request, handles):
        if (request.sheet_index, request.side.value) in self.fail_on:
            raise CompositorFailure("simulated failure")
        self.composed.append((request, handles))
        return request.output_path


# Common test fixtures
@pytest.fixture
def recording_compositor():
    """Compositor that records compose calls."""
    return RecordingCompositor()


@pytest.fixture
def make_compositor():
    """Factory for RecordingCompositors: make_compositor(fail_on={(0, "back")})."""
    return RecordingCompositor


@pytest.fixture
def make_spread_image(tmp_path: Path):
    """
    Factory writing a spread PNG: left half red, right half blue.

    Returns a callable (name, size=(200, 100)) -> Path.
    """
    def _make(name: str, size: Tuple[int, int] = (200, 100)) -> Path:
        width, height = size
        img = Image.new("RGB", size, color="blue")
        img.paste(Image.new("RGB", (width // 2, height), color="red"), (0, 0))
        path = tmp_path / name
        img.save(path)
        return path

    return _make


@pytest.fixture
def make_pages():
    """
    Factory for whole-image LogicalPages with fake paths.

    Returns a callable (count, size=(100, 100)) -> list of pages.
    """
    def _make(count: int, size: Tuple[int, int] = (100, 100)) -> List[LogicalPage]:
        width, height = size
        return [
            LogicalPage(
                spread=SourceSpread(Path(f"page-{i:02d}.png"), width, height, index=i),
                pane=None,
                index=i,
            )
            for i in range(count)
        ]

    return _make


@pytest.fixture
def make_layout():
    """
    Factory for Layouts with a 1 px/unit scale.

    Returns a callable (columns, rows, cell=(200, 100)) -> Layout.
    """
    def _make(columns: int, rows: int, cell: Tuple[int, int] = (200, 100)) -> Layout:
        cell_width, cell_height = cell
        return Layout(
            columns=columns,
            rows=rows,
            pixels_per_unit=1.0,
            paper_width_px=float(columns * cell_width),
            paper_height_px=float(rows * cell_height),
            cell_width_px=cell_width,
            cell_height_px=cell_height,
        )

    return _make
