"""
Configuration management for ThresholdCharts package.

This module provides configuration options for chart rendering (figure
sizing, DPI, plot padding, colors, output directory) and the loader for
decoration files holding threshold lines and ranges.
"""

import json
import yaml
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Any, Dict, List, Tuple

from .exceptions import InvalidConfigurationError
from .models import LineSpec, RangeSpec, line_to_dict, parse_lines, parse_ranges, range_to_dict


def _read_structured_file(path: Path) -> Any:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, 'r') as f:
        if path.suffix in ['.yaml', '.yml']:
            return yaml.safe_load(f)
        elif path.suffix == '.json':
            return json.load(f)
        else:
            raise ValueError(f"Unsupported file format: {path.suffix}. Use .yaml, .yml, or .json")


@dataclass
class Config:
    """Configuration for chart rendering.

    Attributes:
        default_dpi: Resolution for output images (dots per inch).
        figure_width: Width of rendered figures in inches.
        figure_height: Height of rendered figures in inches.
        inset_padding: Gap between the figure edge and the plot box, in pixels.
        background_color: Figure background color (any Matplotlib color spec).
        output_dir: Directory for saving rendered charts.
        series_color: Color of the chart's first series; later series take
            colors from the 'tab10' colormap.
    """

    default_dpi: int = 100
    figure_width: float = 8.0
    figure_height: float = 6.0
    inset_padding: float = 20.0
    background_color: str = "#fff"
    output_dir: Path = field(default_factory=lambda: Path("./output"))
    series_color: str = "#115fa6"

    def __post_init__(self):
        """Convert string paths to Path objects if necessary."""
        if isinstance(self.output_dir, str):
            self.output_dir = Path(self.output_dir)

    @property
    def width_px(self) -> int:
        return int(round(self.figure_width * self.default_dpi))

    @property
    def height_px(self) -> int:
        return int(round(self.figure_height * self.default_dpi))

    @classmethod
    def load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a YAML or JSON file.

        Args:
            path: Path to configuration file (.yaml, .yml, or .json).

        Returns:
            Config instance with loaded settings.

        Raises:
            ValueError: If file format is not supported.
            FileNotFoundError: If file does not exist.
        """
        data = _read_structured_file(path) or {}

        if 'output_dir' in data:
            data['output_dir'] = Path(data['output_dir'])

        return cls(**data)

    def save_to_file(self, path: Path) -> None:
        """Save configuration to a YAML or JSON file.

        Args:
            path: Path where configuration should be saved.

        Raises:
            ValueError: If file format is not supported.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = asdict(self)
        data['output_dir'] = str(data['output_dir'])

        with open(path, 'w') as f:
            if path.suffix in ['.yaml', '.yml']:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False)
            elif path.suffix == '.json':
                json.dump(data, f, indent=2)
            else:
                raise ValueError(f"Unsupported file format: {path.suffix}. Use .yaml, .yml, or .json")

    def validate(self) -> bool:
        """Validate configuration parameters.

        Returns:
            True if configuration is valid.

        Raises:
            ValueError: If any configuration parameter is invalid.
        """
        if self.default_dpi <= 0:
            raise ValueError("default_dpi must be positive")

        if self.figure_width <= 0 or self.figure_height <= 0:
            raise ValueError("Figure dimensions must be positive")

        if self.inset_padding < 0:
            raise ValueError("inset_padding must be non-negative")

        if 2 * self.inset_padding >= min(self.width_px, self.height_px):
            raise ValueError("inset_padding leaves no room for the plot area")

        if not isinstance(self.background_color, str) or not self.background_color:
            raise ValueError("background_color must be a non-empty string")

        if not isinstance(self.series_color, str) or not self.series_color:
            raise ValueError("series_color must be a non-empty string")

        return True

    def ensure_directories(self) -> None:
        """Create the output directory if it doesn't exist."""
        self.output_dir.mkdir(parents=True, exist_ok=True)


def get_default_config() -> Config:
    """Get a Config instance with default settings.

    Returns:
        Config instance initialized with default values.
    """
    return Config()


def load_decorations(path: Path) -> Tuple[List[LineSpec], List[RangeSpec]]:
    """Load threshold lines and ranges from a YAML or JSON file.

    The file holds two optional top-level sequences::

        lines:
          - {position: left, value: 30, color: "#000", width: 3,
             label: {text: Goal, show_value: false}}
        ranges:
          - {from: 0, to: 70, color: "#FF0000", opacity: 0.1}

    Args:
        path: Path to the decorations file (.yaml, .yml, or .json).

    Returns:
        Tuple of (lines, ranges) in file order.

    Raises:
        InvalidConfigurationError: If the file content is malformed.
        ValueError: If file format is not supported.
        FileNotFoundError: If file does not exist.
    """
    data = _read_structured_file(path) or {}
    if not isinstance(data, dict):
        raise InvalidConfigurationError(f"Decorations file must hold a mapping: {path}")

    unknown = set(data) - {'lines', 'ranges'}
    if unknown:
        raise InvalidConfigurationError(f"Unknown decoration sections: {', '.join(sorted(unknown))}")

    return parse_lines(data.get('lines')), parse_ranges(data.get('ranges'))


def decorations_to_dict(lines: List[LineSpec], ranges: List[RangeSpec]) -> Dict[str, Any]:
    """Serializable form of a decoration set, the inverse of load_decorations."""
    return {
        'lines': [line_to_dict(line) for line in lines],
        'ranges': [range_to_dict(band) for band in ranges],
    }


def save_decorations(path: Path, lines: List[LineSpec], ranges: List[RangeSpec]) -> None:
    """Write a decoration set to a YAML or JSON file readable by load_decorations.

    Raises:
        ValueError: If file format is not supported.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = decorations_to_dict(lines, ranges)

    with open(path, 'w') as f:
        if path.suffix in ['.yaml', '.yml']:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
        elif path.suffix == '.json':
            json.dump(data, f, indent=2)
        else:
            raise ValueError(f"Unsupported file format: {path.suffix}. Use .yaml, .yml, or .json")
