"""
Module: loading.parser

Purpose:
    Parse and validate JSON configuration files into ImposeConfig.
    Accepts the camelCase keys of zf JSON config files.

Key Functions:
    - load_config(): Parse a config file
    - parse_config(): Parse an already-decoded JSON object
    - parse_paper(): Parse the ``paperSize`` section

Config format:
    {
      "images": ["scans/01.png", "scans/02.png"],
      "columns": 2,
      "format": "spread",
      "backIsFirst": false,
      "paperSize": {
        "size": "letter", "unit": "in",
        "margin": 0.25, "marginX": 0.5, "marginTop": 0.3,
        "gutter": 0.1, "offsetX": 0.02, "offsetY": 0
      }
    }

Dependencies:
    - json (std)
    - pathlib (std)
    - zinefold.config: ImposeConfig, PaperSpec

Used By:
    - zinefold.__main__: Entry point
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from zinefold.config import DEFAULT_FILENAME_TEMPLATE, ImposeConfig, PaperSpec
from zinefold.core.errors import ConfigError
from zinefold.layout.units import DEFAULT_UNIT, UnitError, normalize_unit, paper_size

logger = logging.getLogger(__name__)

DEFAULT_PAPER_WIDTH = 8.5
DEFAULT_PAPER_HEIGHT = 11.0


def load_config(path: Union[str, Path]) -> ImposeConfig:
    """
    Parse a JSON config file.

    Relative image paths resolve against the config file's directory.

    Args:
        path: Path to the config file

    Returns:
        Validated ImposeConfig

    Raises:
        ConfigError: If the file is missing, not JSON, or invalid

    Example:
        >>> config = load_config(Path("zine.json"))
        >>> config.columns
        2
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    config = parse_config(data, base_dir=path.resolve().parent)
    logger.debug(f"Loaded config from {path}: {len(config.images)} image(s)")
    return config


def parse_config(data: Any, base_dir: Optional[Path] = None) -> ImposeConfig:
    """
    Build an ImposeConfig from decoded JSON.

    Args:
        data: Decoded JSON object
        base_dir: Directory relative image paths resolve against

    Raises:
        ConfigError: If required fields are missing or have the wrong type
    """
    if not isinstance(data, Mapping):
        raise ConfigError(f"Config must be a JSON object, got {type(data).__name__}")

    images = data.get("images")
    if not isinstance(images, list) or not images:
        raise ConfigError("'images' must be a non-empty list of paths")
    if not all(isinstance(image, str) and image for image in images):
        raise ConfigError("'images' entries must be non-empty strings")

    resolved = tuple(_resolve(Path(image), base_dir) for image in images)

    columns = data.get("columns", 1)
    if not isinstance(columns, int) or isinstance(columns, bool):
        raise ConfigError(f"'columns' must be an integer: {columns!r}")

    paper_data = data.get("paperSize", {})
    if not isinstance(paper_data, Mapping):
        raise ConfigError("'paperSize' must be an object")

    try:
        return ImposeConfig(
            images=resolved,
            columns=columns,
            paper=parse_paper(paper_data),
            source_format=_string(data, "format", "spread"),
            back_is_first=_flag(data, "backIsFirst"),
            skip_outer_panes=_flag(data, "skipOuterPanes"),
            pad_multiple=_integer(data, "padTo", 4),
            max_workers=_integer(data, "maxWorkers", 4),
            filename_template=_string(data, "filenameTemplate", DEFAULT_FILENAME_TEMPLATE),
        )
    except ValueError as e:
        raise ConfigError(str(e)) from e


def parse_paper(data: Mapping[str, Any]) -> PaperSpec:
    """
    Parse the ``paperSize`` section.

    Margin precedence per edge: marginLeft > marginX > margin > 0 (and
    likewise for the other edges with marginY). A named ``size`` preset
    supplies width/height unless they are given explicitly.

    Raises:
        ConfigError: If a value has the wrong type or a unit/preset is unknown
    """
    try:
        unit = normalize_unit(_string(data, "unit", DEFAULT_UNIT))
        width, height = DEFAULT_PAPER_WIDTH, DEFAULT_PAPER_HEIGHT
        if unit != DEFAULT_UNIT:
            width, height = paper_size("letter", unit)
        if "size" in data:
            width, height = paper_size(_string(data, "size", "letter"), unit)
    except UnitError as e:
        raise ConfigError(str(e)) from e

    margin = _number(data, "margin")
    margin_x = _number(data, "marginX")
    margin_y = _number(data, "marginY")
    # Misspelled "marginBotton" is accepted as an alias
    margin_bottom = _number(data, "marginBottom")
    if margin_bottom is None:
        margin_bottom = _number(data, "marginBotton")

    try:
        return PaperSpec(
            width=_first(_number(data, "width"), width),
            height=_first(_number(data, "height"), height),
            unit=unit,
            margin_left=_first(_number(data, "marginLeft"), margin_x, margin, 0.0),
            margin_right=_first(_number(data, "marginRight"), margin_x, margin, 0.0),
            margin_top=_first(_number(data, "marginTop"), margin_y, margin, 0.0),
            margin_bottom=_first(margin_bottom, margin_y, margin, 0.0),
            gutter=_first(_number(data, "gutter"), 0.0),
            offset_x=_first(_number(data, "offsetX"), 0.0),
            offset_y=_first(_number(data, "offsetY"), 0.0),
        )
    except ValueError as e:
        raise ConfigError(str(e)) from e


def _resolve(path: Path, base_dir: Optional[Path]) -> Path:
    if base_dir is None or path.is_absolute():
        return path
    return base_dir / path


def _first(*values: Optional[float]) -> float:
    """First value that is not None."""
    for value in values:
        if value is not None:
            return float(value)
    return 0.0


def _number(data: Mapping[str, Any], key: str) -> Optional[float]:
    if key not in data or data[key] is None:
        return None
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"'{key}' must be a number: {value!r}")
    return float(value)


def _integer(data: Mapping[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"'{key}' must be an integer: {value!r}")
    return value


def _flag(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false: {value!r}")
    return value


def _string(data: Mapping[str, Any], key: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string: {value!r}")
    return value


def config_summary(config: ImposeConfig) -> Dict[str, Any]:
    """JSON-ready summary of a config for the run manifest."""
    paper = config.paper
    return {
        "images": [str(image) for image in config.images],
        "columns": config.columns,
        "format": config.source_format,
        "back_is_first": config.back_is_first,
        "skip_outer_panes": config.skip_outer_panes,
        "pad_multiple": config.pad_multiple,
        "paper": {
            "width": paper.width,
            "height": paper.height,
            "unit": paper.unit,
            "margins": [paper.margin_left, paper.margin_right, paper.margin_top, paper.margin_bottom],
            "gutter": paper.gutter,
            "offset": [paper.offset_x, paper.offset_y],
        },
    }
