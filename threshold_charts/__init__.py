"""
ThresholdCharts - Threshold lines, labels and shaded ranges for rendered charts.

This package overlays decorations onto cartesian (line, column) and radial
(radar) charts: horizontal or vertical threshold lines with text labels,
concentric threshold rings, and translucent value bands. Decorations are
recomputed from the series' laid-out geometry after every render, resize
or data reload.

Quick Start:
    >>> from threshold_charts import create_chart
    >>>
    >>> # Demo column chart with its default thresholds
    >>> create_chart("column", output_path="column.png", seed=7)

    >>> # Custom thresholds on a radar chart
    >>> create_chart(
    ...     "radar",
    ...     lines=[{"value": 50, "dash": "4,4", "label": {"text": "Goal"}}],
    ...     ranges=[{"from": 0, "to": 50, "color": "#FF0000"}],
    ...     output_path="radar.png",
    ... )

Advanced Usage:
    >>> # Direct access to components
    >>> from threshold_charts import Axis, Chart, ChartRenderer, ThresholdLineRange, Config
    >>>
    >>> chart = Chart(
    ...     series=[{"type": "line", "x_field": "name", "y_field": "data1"}],
    ...     axes=[Axis("left", fields=["data1"], minimum=0, maximum=100),
    ...           Axis("bottom", type="category", fields=["name"])],
    ...     records=records,
    ... )
    >>> chart.add_plugin(ThresholdLineRange(lines=[{"value": 30}]))
    >>> renderer = ChartRenderer(chart, Config(default_dpi=150))
    >>> renderer.render()
    >>> renderer.resize(640, 480)
"""

__version__ = "0.1.0"

# Initialize logging with default settings
from .logging_config import setup_logging
setup_logging()

# Core constants and configuration
from .constants import CHART_KINDS, LINE_POSITIONS
from .config import Config, load_decorations, save_decorations

# Decoration configuration
from .models import LabelSpec, LineSpec, RangeSpec

# Host chart model
from .host import Axis, Chart, Series, LineSeries, BarSeries, RadarSeries, SeriesKind

# Decorations
from .decorations import ControllerState, ThresholdLineRange

# Rendering components
from .rendering import ChartRenderer, MatplotlibSurface

# Geometry
from . import geometry

# User-facing API
from .api import create_chart, sample_records, build_demo_chart

# Exceptions
from .exceptions import (
    ThresholdChartsError,
    InvalidConfigurationError,
    RenderError,
    SurfaceError,
)

__all__ = [
    # Version info
    "__version__",

    # Constants and config
    "CHART_KINDS",
    "LINE_POSITIONS",
    "Config",
    "load_decorations",
    "save_decorations",

    # Decoration configuration
    "LabelSpec",
    "LineSpec",
    "RangeSpec",

    # Host chart model
    "Axis",
    "Chart",
    "Series",
    "LineSeries",
    "BarSeries",
    "RadarSeries",
    "SeriesKind",

    # Core components
    "ControllerState",
    "ThresholdLineRange",
    "ChartRenderer",
    "MatplotlibSurface",
    "geometry",

    # User-facing API
    "create_chart",
    "sample_records",
    "build_demo_chart",

    # Exceptions
    "ThresholdChartsError",
    "InvalidConfigurationError",
    "RenderError",
    "SurfaceError",
]
