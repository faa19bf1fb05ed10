"""
Threshold line and range decorations for rendered charts.

``ThresholdLineRange`` is a chart plugin. Once attached it waits for the
chart's first series to become a live series, then recomputes every
decoration each time that series finishes rendering (first render, resize,
data reload):

    UNINITIALIZED --attach()--> WAITING_FOR_SERIES --series instantiated--> READY
    UNINITIALIZED --attach() on a live series-----------------------------> READY

Each pass resolves the series bounds from scratch, then draws lines (with
their labels) in configuration order, then ranges in configuration order.
The index of a line or range is the index of its primitive on the surface,
so later passes move the existing primitives instead of adding new ones.

Example:
    >>> from threshold_charts import Chart, ChartRenderer, ThresholdLineRange
    >>>
    >>> decorations = ThresholdLineRange(
    ...     lines=[{"position": "left", "value": 30, "color": "#000", "width": 3,
    ...             "label": {"text": "Goal", "show_value": False}}],
    ...     ranges=[{"from": 0, "to": 70, "color": "#FF0000", "opacity": 0.1}],
    ... )
    >>> chart.add_plugin(decorations)
    >>> ChartRenderer(chart).render()
"""

import logging
from enum import Enum
from typing import Any, Optional, Sequence

from .constants import RANGE_GROUP, THRESHOLD_LABEL_GROUP, THRESHOLD_LINE_GROUP
from .exceptions import InvalidConfigurationError, ThresholdChartsError
from .geometry.bounds import resolve_bounds
from .geometry.descriptors import BoundsDescriptor, BoundsKind
from .geometry.paths import cartesian_line_path, radar_line_path, radial_range_path, range_path
from .host import Chart, Series, SeriesKind
from .models import LineSpec, RangeSpec, parse_lines, parse_ranges, validate_position
from .rendering.primitives import sync_label, sync_range, sync_threshold_circle, sync_threshold_line

logger = logging.getLogger("threshold_charts.decorations")

DECORATED_SERIES = (SeriesKind.LINE, SeriesKind.BAR, SeriesKind.RADAR)


class ControllerState(Enum):
    UNINITIALIZED = "uninitialized"
    WAITING_FOR_SERIES = "waiting_for_series"
    READY = "ready"


class ThresholdLineRange:
    """
    Plugin drawing threshold lines, their labels and shaded ranges.

    Attributes:
        lines: Threshold line specs, in drawing order
        ranges: Range specs, in drawing order
        state: Current ControllerState
        passes: Number of completed recompute passes
    """

    def __init__(
        self,
        lines: Optional[Sequence[Any]] = None,
        ranges: Optional[Sequence[Any]] = None,
    ):
        self.lines = tuple(parse_lines(lines))
        self.ranges = tuple(parse_ranges(ranges))
        self.state = ControllerState.UNINITIALIZED
        self.passes = 0

    def validate(self) -> None:
        """
        Check every line and range before anything is drawn.

        Raises:
            InvalidConfigurationError: If a spec is malformed
        """
        for index, line in enumerate(self.lines):
            if not isinstance(line, LineSpec):
                raise InvalidConfigurationError(f"Line #{index} is not a LineSpec")
            line.validate()
        for index, band in enumerate(self.ranges):
            if not isinstance(band, RangeSpec):
                raise InvalidConfigurationError(f"Range #{index} is not a RangeSpec")
            band.validate()

    def add_line(self, line: Any) -> LineSpec:
        """Append a line; it is drawn from the next render onwards."""
        (spec,) = parse_lines([line])
        self.lines = self.lines + (spec,)
        return spec

    def add_range(self, band: Any) -> RangeSpec:
        """Append a range; it is drawn from the next render onwards."""
        (spec,) = parse_ranges([band])
        self.ranges = self.ranges + (spec,)
        return spec

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def attach(self, chart: Chart) -> None:
        """
        Hook the plugin into a chart.

        If the chart's first series is already live, its after-render event
        is subscribed right away. Otherwise the plugin waits, once, for the
        chart to replace the series configuration with a live series.

        Raises:
            InvalidConfigurationError: If the configuration is malformed
            ThresholdChartsError: If the plugin is already attached
        """
        if self.state is not ControllerState.UNINITIALIZED:
            raise ThresholdChartsError("ThresholdLineRange is already attached to a chart")
        self.validate()

        first = chart.series.first()
        if isinstance(first, Series):
            self._setup_series_listener(first)
        else:
            chart.series.on_replace.connect(self._on_series_replace, once=True)
            self.state = ControllerState.WAITING_FOR_SERIES
            logger.info("Waiting for the chart's first series to be instantiated")

    def _on_series_replace(self, index: int, old: Any, new: Any) -> None:
        self._setup_series_listener(new)

    def _setup_series_listener(self, series: Any) -> None:
        if isinstance(series, Series) and series.kind in DECORATED_SERIES:
            series.after_render.connect(self.recompute)
            logger.info(f"Listening for renders of {series!r}")
        else:
            logger.warning(f"Series {series!r} cannot be decorated; no thresholds will be drawn")
        self.state = ControllerState.READY

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def recompute(self, series: Series) -> BoundsDescriptor:
        """
        Recompute and draw every decoration for a rendered series.

        Args:
            series: Series that just finished rendering

        Returns:
            The bounds descriptor used for this pass
        """
        chart = series.chart
        if chart is None or chart.surface is None:
            raise ThresholdChartsError(f"{series!r} is not bound to a rendered chart")
        surface = chart.surface

        bounds = resolve_bounds(series, chart)
        radial = bounds.kind is BoundsKind.RADIAL

        if self.lines:
            line_group = surface.get_group(THRESHOLD_LINE_GROUP)
            label_group = surface.get_group(THRESHOLD_LABEL_GROUP)
            for index, line in enumerate(self.lines):
                if radial:
                    self._draw_ring(surface, line_group, label_group, index, bounds, line)
                else:
                    self._draw_line(surface, line_group, label_group, index, bounds, line)

        if self.ranges:
            range_group = surface.get_group(RANGE_GROUP)
            position = None if radial else validate_position(series.axis)
            for index, band in enumerate(self.ranges):
                if radial:
                    path = radial_range_path(bounds, band)
                else:
                    path = range_path(position, bounds, band)
                sync_range(surface, range_group, index, path, band)

        self.passes += 1
        logger.debug(
            f"Decoration pass {self.passes}: {len(self.lines)} lines, "
            f"{len(self.ranges)} ranges, bounds={bounds.kind.value}"
        )
        return bounds

    @staticmethod
    def _draw_line(surface, line_group, label_group, index, bounds, line):
        result = cartesian_line_path(bounds, line)
        sync_threshold_line(surface, line_group, index, result, line)
        sync_label(surface, label_group, index, result.x, result.y, line)

    @staticmethod
    def _draw_ring(surface, line_group, label_group, index, bounds, line):
        circle = radar_line_path(bounds, line)
        sync_threshold_circle(surface, line_group, index, circle, line)
        # Label sits at the ring's rightmost point
        sync_label(surface, label_group, index, circle.x + circle.radius, circle.y, line)
