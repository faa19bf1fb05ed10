"""
Orchestration module for complete chart rendering.

This module provides the ChartRenderer class that turns a host ``Chart``
into pixels: it instantiates series from their configuration, lays out the
plot box, draws the series on a matplotlib surface and then notifies every
series' ``after_render`` listeners so plugins (threshold decorations) can
draw on top.
"""

import logging
import math
import os
from typing import Any, Dict, List, Optional, Sequence, Tuple

import matplotlib
from matplotlib.colors import to_hex

from ..config import Config
from ..constants import SERIES_ZORDER
from ..exceptions import RenderError
from ..geometry.bounds import resolve_linear_bounds, resolve_radial_max_value
from ..geometry.descriptors import BoundingBox, BoundsKind
from ..host import Chart, RadarSeries, Series, SeriesKind, create_series
from .primitives import sync_primitive
from .surface import MatplotlibSurface

logger = logging.getLogger("threshold_charts.rendering.chart")

FRAME_GROUP = "frame"
AXIS_LABEL_GROUP = "axislabels"
TITLE_GROUP = "title"

FRAME_COLOR = "#bbbbbb"
GRID_COLOR = "#dddddd"
AXIS_LABEL_FONT = "10px Helvetica, sans-serif"
TITLE_FONT = "bold 14px Helvetica, sans-serif"
TITLE_HEIGHT = 24
BAR_FILL_RATIO = 0.6


class ChartRenderer:
    """
    Render a host chart and drive its after-render notifications.

    The rendering workflow:
    1. Replace raw series configurations with live series (fires the
       collection's ``on_replace`` hook)
    2. Lay out the plot box and radar geometry
    3. Draw frame, series and labels (series at zorder=2)
    4. Fire ``after_render`` on every live series

    Steps 2-4 run again on every ``render()``, ``resize()`` and ``reload()``.
    Series primitives are kept per index and moved on later passes.

    Attributes:
        chart: Host chart being rendered
        config: Configuration object with display settings
        surface: MatplotlibSurface the chart is drawn on
        render_count: Number of completed render passes

    Example:
        >>> from threshold_charts import Chart, Axis, ChartRenderer
        >>>
        >>> chart = Chart(
        ...     series=[{"type": "line", "x_field": "name", "y_field": "data1"}],
        ...     axes=[Axis("left", fields=["data1"]), Axis("bottom", type="category", fields=["name"])],
        ...     records=[{"name": "Jan", "data1": 20}, {"name": "Feb", "data1": 45}],
        ... )
        >>> renderer = ChartRenderer(chart)
        >>> renderer.render()
        >>> renderer.save_chart("line.png")
        'line.png'
    """

    def __init__(
        self,
        chart: Chart,
        config: Optional[Config] = None,
        width_px: Optional[int] = None,
        height_px: Optional[int] = None,
    ):
        """
        Initialize ChartRenderer.

        Args:
            chart: Chart to render
            config: Configuration object (default: creates new Config instance)
            width_px: Canvas width in pixels (default: from config figure size)
            height_px: Canvas height in pixels (default: from config figure size)
        """
        self.chart = chart
        self.config = config if config is not None else Config()
        self.config.validate()

        width = width_px if width_px is not None else self.config.width_px
        height = height_px if height_px is not None else self.config.height_px
        self.surface = MatplotlibSurface(
            width,
            height,
            dpi=self.config.default_dpi,
            background_color=self.config.background_color,
        )
        chart.surface = self.surface
        self.render_count = 0

        logger.info(f"Initialized ChartRenderer ({width}x{height}px, {len(chart.series)} series)")

    @property
    def rendered(self) -> bool:
        return self.render_count > 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def instantiate_series(self) -> List[Series]:
        """
        Replace every raw series configuration with a live series.

        Returns:
            Live series in chart order
        """
        live = []
        for index, item in enumerate(self.chart.series):
            if isinstance(item, Series):
                item.chart = self.chart
                live.append(item)
                continue
            series = create_series(item)
            series.chart = self.chart
            self.chart.series.replace(index, series)
            logger.debug(f"Instantiated series #{index}: {series!r}")
            live.append(series)
        return live

    def render(self) -> MatplotlibSurface:
        """
        Lay out and draw the chart, then notify after-render listeners.

        Returns:
            The surface the chart was drawn on

        Raises:
            RenderError: If the chart has no series
        """
        if not len(self.chart.series):
            raise RenderError("Chart has no series to render")

        series_list = self.instantiate_series()
        logger.info(f"Rendering chart pass {self.render_count + 1} ({self.chart.record_count} records)")

        try:
            bbox = self.layout(series_list)
            self._draw_title()
            if self.chart.is_radial:
                self._draw_radar_grid(series_list[0])
            else:
                self._draw_frame(bbox)
                self._draw_category_labels(series_list[0])

            for index, series in enumerate(series_list):
                self._draw_series(index, series)

            for series in series_list:
                series.after_render.emit(series)
        except Exception as e:
            logger.error(f"Error during chart rendering: {e}", exc_info=True)
            raise

        self.surface.draw()
        self.render_count += 1
        logger.info("Chart rendering complete")
        return self.surface

    def resize(self, width_px: int, height_px: int) -> MatplotlibSurface:
        """Resize the canvas and render again."""
        logger.info(f"Resizing chart to {width_px}x{height_px}px")
        self.surface.resize(width_px, height_px)
        return self.render()

    def reload(self, records: Sequence[Dict[str, Any]]) -> MatplotlibSurface:
        """Replace the chart data and render again."""
        self.chart.load_data(records)
        return self.render()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def layout(self, series_list: Sequence[Series]) -> BoundingBox:
        """
        Compute the plot box and assign it (and radar geometry) to the series.

        Returns:
            The plot bounding box in device pixels
        """
        pad = self.chart.inset_padding
        top = pad + (TITLE_HEIGHT if self.chart.title else 0)
        width = self.surface.width - 2 * pad
        height = self.surface.height - top - pad
        if width <= 0 or height <= 0:
            raise RenderError(
                f"Canvas {self.surface.width}x{self.surface.height}px is too small for padding {pad}"
            )
        bbox = BoundingBox(x=pad, y=top, width=width, height=height)

        for series in series_list:
            series.bbox = bbox
            if isinstance(series, RadarSeries):
                series.center_x = bbox.x + bbox.width / 2
                series.center_y = bbox.y + bbox.height / 2
                series.radius = min(bbox.width, bbox.height) / 2

        logger.debug(f"Layout: bbox={bbox}")
        return bbox

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def _series_color(self, index: int, series: Series) -> str:
        if series.color:
            return series.color
        if index == 0:
            return self.config.series_color
        return to_hex(matplotlib.colormaps["tab10"](index % 10))

    def _sync_group(self, group_name: str, shapes: Sequence[Tuple[str, Dict[str, Any], Dict[str, Any]]]) -> None:
        """Sync ``(kind, creation, mutable)`` shapes by index and hide leftovers."""
        group = self.surface.get_group(group_name)
        for index, (kind, creation, mutable) in enumerate(shapes):
            sync_primitive(self.surface, kind, group, index, creation, mutable)
        for index in range(len(shapes), len(group)):
            self.surface.set_attributes(group.get_at(index), {"hidden": True}, True)

    def _text(self, x: float, y: float, text: str, font: str = AXIS_LABEL_FONT, color: str = "#333"):
        return "text", {"font": font, "color": color, "zindex": SERIES_ZORDER}, {"x": x, "y": y, "text": text}

    def _draw_title(self) -> None:
        if not self.chart.title:
            self._sync_group(TITLE_GROUP, [])
            return
        self._sync_group(TITLE_GROUP, [
            self._text(self.chart.inset_padding, self.chart.inset_padding + TITLE_HEIGHT / 2 - 4,
                       self.chart.title, font=TITLE_FONT, color="#000"),
        ])

    def _draw_frame(self, bbox: BoundingBox) -> None:
        path = (
            ("M", bbox.x, bbox.y),
            ("L", bbox.right, bbox.y),
            ("L", bbox.right, bbox.bottom),
            ("L", bbox.x, bbox.bottom),
            ("Z",),
        )
        style = {"stroke": FRAME_COLOR, "stroke_width": 1, "zindex": 1}
        self._sync_group(FRAME_GROUP, [("path", style, {"path": path})])

    def _draw_category_labels(self, series: Series) -> None:
        """Write the x-field value of each record under its slot."""
        bbox = series.bbox
        count = self.chart.record_count
        shapes = []
        for index, record in enumerate(self.chart.records):
            shapes.append(self._text(
                self._slot_center(series, index, count),
                bbox.bottom + self.chart.inset_padding / 2,
                str(record.get(series.x_field, "")),
            ))
        self._sync_group(AXIS_LABEL_GROUP, shapes)

        # Center each label under its slot now that it can be measured
        group = self.surface.get_group(AXIS_LABEL_GROUP)
        for index in range(len(shapes)):
            handle = group.get_at(index)
            size = self.surface.measure_text(handle)
            self.surface.set_attributes(handle, {"x": shapes[index][2]["x"] - size.width / 2})

    def _slot_center(self, series: Series, index: int, count: int) -> float:
        bbox = series.bbox
        if series.kind is SeriesKind.BAR:
            return bbox.x + (index + 0.5) * bbox.width / max(count, 1)
        return bbox.x + index * bbox.width / (max(count - 1, 0) or 1)

    def _draw_series(self, index: int, series: Series) -> None:
        group_name = f"series{index}"
        color = self._series_color(index, series)
        values = [self._value(record, series.y_field) for record in self.chart.records]

        if series.kind is SeriesKind.RADAR:
            shapes = self._radar_shapes(series, values, color)
        elif series.kind is SeriesKind.BAR:
            shapes = self._bar_shapes(series, values, color)
        else:
            shapes = self._line_shapes(series, values, color)
        self._sync_group(group_name, shapes)
        logger.debug(f"Drew {series!r} as {len(shapes)} primitives in group '{group_name}'")

    @staticmethod
    def _value(record: Dict[str, Any], name: str) -> float:
        value = record.get(name)
        try:
            value = float(value)
        except (TypeError, ValueError):
            return 0.0
        return 0.0 if math.isnan(value) else value

    def _line_shapes(self, series: Series, values: List[float], color: str):
        if not values:
            return []
        bounds = resolve_linear_bounds(series, self.chart)
        bbox = bounds.bbox
        if bounds.kind is BoundsKind.PER_AXIS:
            min_y, y_scale = bounds.min_y, bounds.y_scale
        else:
            min_y, y_scale = 0, bounds.scale

        tokens = []
        for i, value in enumerate(values):
            x = self._slot_center(series, i, len(values))
            y = bbox.bottom - (value - min_y) * y_scale
            tokens.append(("M" if i == 0 else "L", x, y))
        style = {"stroke": color, "stroke_width": 2, "zindex": SERIES_ZORDER}
        return [("path", style, {"path": tuple(tokens)})]

    def _bar_shapes(self, series: Series, values: List[float], color: str):
        bounds = resolve_linear_bounds(series, self.chart)
        bbox = bounds.bbox
        scale = bounds.scale if bounds.kind is BoundsKind.UNIFORM else bounds.y_scale
        slot = bbox.width / max(len(values), 1)
        style = {"fill": color, "stroke": "none", "stroke_width": 0, "zindex": SERIES_ZORDER}

        shapes = []
        for i, value in enumerate(values):
            x = bbox.x + i * slot + slot * (1 - BAR_FILL_RATIO) / 2
            height = value * scale
            path = (
                ("M", x, bbox.bottom),
                ("l", 0, -height),
                ("l", slot * BAR_FILL_RATIO, 0),
                ("l", 0, height),
                ("Z",),
            )
            shapes.append(("path", style, {"path": path}))
        return shapes

    def _radar_point(self, series: RadarSeries, index: int, count: int, rho: float) -> Tuple[float, float]:
        angle = -math.pi / 2 + 2 * math.pi * index / max(count, 1)
        return series.center_x + rho * math.cos(angle), series.center_y + rho * math.sin(angle)

    def _radar_shapes(self, series: RadarSeries, values: List[float], color: str):
        if not values:
            return []
        max_value = resolve_radial_max_value(self.chart)
        tokens = []
        for i, value in enumerate(values):
            x, y = self._radar_point(series, i, len(values), series.radius * value / max_value)
            tokens.append(("M" if i == 0 else "L", x, y))
        tokens.append(("Z",))
        style = {"stroke": color, "stroke_width": 2, "fill": color, "opacity": 0.8, "zindex": SERIES_ZORDER}
        return [("path", style, {"path": tuple(tokens)})]

    def _draw_radar_grid(self, series: RadarSeries) -> None:
        """Outer ring, one spoke per record and the category names around the rim."""
        count = self.chart.record_count
        grid_style = {"stroke": GRID_COLOR, "stroke_width": 1, "zindex": 1}
        shapes = [("circle", grid_style, {"x": series.center_x, "y": series.center_y, "radius": series.radius})]
        labels = []
        for index, record in enumerate(self.chart.records):
            x, y = self._radar_point(series, index, count, series.radius)
            spoke = (("M", series.center_x, series.center_y), ("L", x, y))
            shapes.append(("path", grid_style, {"path": spoke}))
            lx, ly = self._radar_point(series, index, count, series.radius + self.chart.inset_padding / 2)
            labels.append(self._text(lx, ly, str(record.get(series.x_field, ""))))
        self._sync_group(FRAME_GROUP, shapes)
        self._sync_group(AXIS_LABEL_GROUP, labels)

        group = self.surface.get_group(AXIS_LABEL_GROUP)
        for index in range(len(labels)):
            handle = group.get_at(index)
            size = self.surface.measure_text(handle)
            self.surface.set_attributes(handle, {"x": labels[index][2]["x"] - size.width / 2})

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def save_chart(self, output_path: str, dpi: Optional[int] = None) -> str:
        """
        Save rendered chart to file.

        Args:
            output_path: Path or string for output file
            dpi: Optional DPI override (uses config.default_dpi if None)

        Returns:
            Path to saved file

        Raises:
            RenderError: If chart has not been rendered yet or cannot be written

        Example:
            >>> renderer.save_chart("thresholds.png", dpi=200)
            'thresholds.png'
        """
        if not self.rendered:
            raise RenderError("Chart has not been rendered yet. Call render() first.")

        if dpi is None:
            dpi = self.config.default_dpi

        logger.info(f"Saving chart to {output_path} (dpi={dpi})")
        self.surface.save(output_path, dpi=dpi)

        try:
            file_size = os.path.getsize(output_path)
            logger.info(f"Chart saved: {output_path} ({file_size / 1024:.1f} KB)")
        except OSError:
            logger.info(f"Chart saved: {output_path}")

        return str(output_path)
