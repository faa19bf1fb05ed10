"""
Main API module for ThresholdCharts package.

This module provides simplified user-facing functions that abstract away the
wiring of chart model, decorations and renderer. The primary function
`create_chart()` handles the complete workflow from data to a rendered,
decorated chart in a single call.

Example:
    >>> from threshold_charts import create_chart
    >>>
    >>> # Render the demo column chart with its default decorations
    >>> create_chart("column", output_path="column.png", seed=7)

    >>> # Interactive use (returns the renderer)
    >>> renderer = create_chart(
    ...     "radar",
    ...     lines=[{"value": 60, "label": {"text": "Target"}}],
    ...     ranges=[],
    ... )
    >>> renderer.resize(400, 400)
"""

import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np

from .config import Config
from .constants import CHART_KINDS, DEMO_FIELDS, DEMO_LINES, DEMO_RANGES, MONTHS
from .decorations import ThresholdLineRange
from .exceptions import InvalidConfigurationError, RenderError, ThresholdChartsError
from .host import Axis, Chart
from .rendering import ChartRenderer

logger = logging.getLogger(__name__)

DEMO_MINIMUM = 0
DEMO_MAXIMUM = 100
DEMO_FLOOR = 20


def sample_records(seed: Optional[int] = None, count: int = len(MONTHS)) -> List[Dict[str, Any]]:
    """
    Generate the demo data store.

    One record per month with integer fields ``data1``..``data3`` drawn
    uniformly from [0, 100) and floored at 20.

    Args:
        seed: Seed for numpy's random generator (None for a random store)
        count: Number of records; month names repeat past December

    Returns:
        List of record dictionaries

    Example:
        >>> records = sample_records(seed=1)
        >>> records[0]["name"], len(records)
        ('Jan', 12)
    """
    if count < 0:
        raise InvalidConfigurationError(f"Record count must be non-negative, got {count}")

    rng = np.random.default_rng(seed)
    draws = np.maximum(rng.random((count, len(DEMO_FIELDS))) * DEMO_MAXIMUM, DEMO_FLOOR)

    records = []
    for index in range(count):
        record = {"name": MONTHS[index % len(MONTHS)]}
        for column, name in enumerate(DEMO_FIELDS):
            record[name] = int(math.floor(draws[index, column]))
        records.append(record)

    logger.debug(f"Generated {count} sample records (seed={seed})")
    return records


def demo_group(kind: str) -> str:
    """Key of the demo decorations for a chart kind ('radar' or 'cartesian')."""
    return "radar" if kind == "radar" else "cartesian"


def build_demo_chart(
    kind: str,
    records: Sequence[Dict[str, Any]],
    title: str = "",
    inset_padding: float = 20.0,
) -> Chart:
    """
    Build an unrendered demo chart plotting ``data1`` against the month name.

    Args:
        kind: 'line', 'column' or 'radar'
        records: Data store
        title: Chart title
        inset_padding: Gap between canvas edge and plot box in pixels

    Returns:
        Chart whose series are still raw configurations

    Raises:
        InvalidConfigurationError: If kind is not recognized
    """
    if kind not in CHART_KINDS:
        raise InvalidConfigurationError(
            f"Unknown chart kind '{kind}'. Available kinds: {', '.join(CHART_KINDS)}"
        )

    if kind == "radar":
        series = [{"type": "radar", "x_field": "name", "y_field": "data1"}]
        axes = [
            Axis("radial", type="radial", fields=["data1"], minimum=DEMO_MINIMUM, maximum=DEMO_MAXIMUM),
        ]
    else:
        series = [{"type": kind, "x_field": "name", "y_field": "data1", "axis": "left"}]
        axes = [
            Axis("left", fields=["data1"], minimum=DEMO_MINIMUM, maximum=DEMO_MAXIMUM),
            Axis("bottom", type="category", fields=["name"]),
        ]

    return Chart(series=series, axes=axes, records=records, title=title, inset_padding=inset_padding)


def create_chart(
    kind: str = "column",
    records: Optional[Sequence[Dict[str, Any]]] = None,
    lines: Optional[Sequence[Any]] = None,
    ranges: Optional[Sequence[Any]] = None,
    output_path: Optional[Union[str, Path]] = None,
    config: Optional[Config] = None,
    seed: Optional[int] = None,
    title: str = "",
) -> Union[str, ChartRenderer]:
    """
    Create a decorated chart.

    This is the primary API function that handles the complete workflow:
    1. Generate the sample store if no records are given
    2. Build the chart model
    3. Attach the threshold decorations
    4. Render the chart (which draws the decorations)
    5. Save to file or return the renderer for further use

    Args:
        kind: Chart kind, 'line', 'column' or 'radar' (default: 'column')
        records: Data store; if None, sample_records(seed) is used
        lines: Threshold lines; if None, the demo lines for the kind are used
        ranges: Ranges; if None, the demo ranges for the kind are used
        output_path: Output file path; if None, returns the renderer
        config: Optional Config object; if None, uses default configuration
        seed: Seed for the sample store
        title: Chart title

    Returns:
        If output_path provided: path to saved chart file
        If output_path is None: the ChartRenderer, already rendered

    Raises:
        InvalidConfigurationError: If kind or a decoration is invalid
        RenderError: If chart rendering or saving fails

    Example:
        >>> path = create_chart(
        ...     "line",
        ...     lines=[{"position": "left", "value": 30, "label": {"text": "Goal"}}],
        ...     ranges=[{"from": 0, "to": 30, "color": "#FF0000"}],
        ...     output_path="line.png",
        ... )
    """
    logger.info(f"Creating {kind} chart")

    if config is None:
        config = Config()
        logger.debug("Using default configuration")

    if records is None:
        records = sample_records(seed)

    group = demo_group(kind)
    if lines is None:
        lines = DEMO_LINES[group]
    if ranges is None:
        ranges = DEMO_RANGES[group]

    chart = build_demo_chart(kind, records, title=title, inset_padding=config.inset_padding)
    decorations = chart.add_plugin(ThresholdLineRange(lines=lines, ranges=ranges))
    logger.info(f"Attached {len(decorations.lines)} lines and {len(decorations.ranges)} ranges")

    try:
        renderer = ChartRenderer(chart, config=config)
        renderer.render()
    except ThresholdChartsError:
        raise
    except Exception as e:
        raise RenderError(f"Failed to render chart: {e}") from e

    if output_path is None:
        logger.info("Returning renderer for interactive use")
        return renderer

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    saved_path = renderer.save_chart(str(output_path))
    logger.info(f"Chart saved successfully to {saved_path}")
    return saved_path
