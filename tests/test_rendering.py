from __future__ import annotations

import pytest

from threshold_charts.config import Config
from threshold_charts.constants import LABEL_PAD, RANGE_GROUP, THRESHOLD_LABEL_GROUP, THRESHOLD_LINE_GROUP
from threshold_charts.decorations import ControllerState, ThresholdLineRange
from threshold_charts.exceptions import RenderError
from threshold_charts.host import RadarSeries, Series
from threshold_charts.rendering import ChartRenderer

from conftest import cartesian_chart, month_records, radar_chart

SMALL = Config(default_dpi=100, figure_width=4.0, figure_height=3.0)


def _render(chart, **plugin_kwargs) -> tuple[ChartRenderer, ThresholdLineRange]:
    plugin = chart.add_plugin(ThresholdLineRange(**plugin_kwargs))
    renderer = ChartRenderer(chart, config=SMALL)
    renderer.render()
    return renderer, plugin


def test_render_instantiates_series_and_fires_decorations() -> None:
    chart = cartesian_chart("line")
    renderer, plugin = _render(
        chart,
        lines=[{"value": 30, "label": {"text": "Goal"}}],
        ranges=[{"from": 0, "to": 70, "color": "#FF0000"}],
    )

    assert isinstance(chart.series[0], Series)
    assert plugin.state is ControllerState.READY
    assert plugin.passes == 1
    surface = renderer.surface
    assert len(surface.get_group(THRESHOLD_LINE_GROUP)) == 1
    assert len(surface.get_group(THRESHOLD_LABEL_GROUP)) == 1
    assert len(surface.get_group(RANGE_GROUP)) == 1


def test_layout_applies_inset_padding() -> None:
    chart = cartesian_chart("column")
    _render(chart, lines=[{"value": 50}])

    bbox = chart.series[0].bbox
    assert (bbox.x, bbox.y) == (20, 20)
    assert (bbox.width, bbox.height) == (360, 260)


def test_threshold_line_tracks_axis_value_on_canvas() -> None:
    chart = cartesian_chart("line")
    renderer, _ = _render(chart, lines=[{"value": 50}])

    handle = renderer.surface.get_group(THRESHOLD_LINE_GROUP).get_at(0)
    start = handle.artist.get_path().vertices[0]
    # left edge of the box, halfway up a 0..100 axis
    assert start.tolist() == pytest.approx([20, 20 + 260 / 2])


def test_resize_and_reload_recompute_without_new_primitives() -> None:
    chart = cartesian_chart("column")
    renderer, plugin = _render(chart, lines=[{"value": 30}, {"value": 70, "position": "right"}])
    handles = list(renderer.surface.get_group(THRESHOLD_LINE_GROUP))

    renderer.resize(500, 300)
    renderer.reload(month_records([10, 95, 40]))

    assert plugin.passes == 3
    assert list(renderer.surface.get_group(THRESHOLD_LINE_GROUP)) == handles
    assert chart.series[0].bbox.width == 460


def test_reload_with_fewer_records_hides_surplus_bars() -> None:
    chart = cartesian_chart("column", values=[10, 20, 30, 40])
    renderer, _ = _render(chart)

    renderer.reload(month_records([50, 60]))

    bars = list(renderer.surface.get_group("series0"))
    assert len(bars) == 4
    assert [bar.artist.get_visible() for bar in bars] == [True, True, False, False]


def test_radar_layout_and_rings() -> None:
    chart = radar_chart(maximum=100)
    renderer, _ = _render(chart, lines=[{"value": 50}], ranges=[{"from": 50, "to": 75}])

    series = chart.series[0]
    assert isinstance(series, RadarSeries)
    assert series.radius == pytest.approx(130)
    assert (series.center_x, series.center_y) == (200, 150)

    ring = renderer.surface.get_group(THRESHOLD_LINE_GROUP).get_at(0)
    assert ring.artist.get_radius() == pytest.approx(65)


def test_save_requires_render(tmp_path) -> None:
    renderer = ChartRenderer(cartesian_chart(), config=SMALL)

    with pytest.raises(RenderError):
        renderer.save_chart(str(tmp_path / "chart.png"))


def test_save_writes_png(tmp_path) -> None:
    chart = cartesian_chart("column")
    renderer, _ = _render(chart, lines=[{"value": 30, "label": {"text": "Goal"}}])

    output = renderer.save_chart(str(tmp_path / "chart.png"))

    data = (tmp_path / "chart.png").read_bytes()
    assert output.endswith("chart.png")
    assert data[:8] == b"\x89PNG\r\n\x1a\n"


def test_render_without_series_fails() -> None:
    chart = cartesian_chart()
    chart.series = type(chart.series)([])

    with pytest.raises(RenderError):
        ChartRenderer(chart, config=SMALL).render()


def _label_extent(renderer: ChartRenderer, index: int) -> tuple[float, float, float, float]:
    """(left, right, top, bottom) of a rendered threshold label in device pixels."""
    surface = renderer.surface
    artist = surface.get_group(THRESHOLD_LABEL_GROUP).get_at(index).artist
    bbox = artist.get_window_extent(renderer=surface.fig.canvas.get_renderer())
    (x0, y0), (x1, y1) = surface.ax.transData.inverted().transform([[bbox.x0, bbox.y0], [bbox.x1, bbox.y1]])
    return min(x0, x1), max(x0, x1), min(y0, y1), max(y0, y1)


def _line_start(renderer: ChartRenderer, index: int) -> tuple[float, float]:
    handle = renderer.surface.get_group(THRESHOLD_LINE_GROUP).get_at(index)
    x, y = handle.artist.get_path().vertices[0]
    return float(x), float(y)


def test_vertical_line_labels_hug_their_line_whatever_their_length() -> None:
    short, long = "A", "A much longer threshold label"
    chart = cartesian_chart("line")
    renderer, _ = _render(chart, lines=[
        {"value": 2, "position": "top", "label": {"text": short, "showValue": False}},
        {"value": 2, "position": "top", "label": {"text": long, "showValue": False}},
        {"value": 2, "position": "bottom", "label": {"text": short, "showValue": False}},
        {"value": 2, "position": "bottom", "label": {"text": long, "showValue": False}},
    ])

    line_x, top_y = _line_start(renderer, 0)
    _, bottom_y = _line_start(renderer, 2)

    # top labels run down the right side of the line, starting below the box edge
    top_gaps = []
    for index in (0, 1):
        left, right, top, bottom = _label_extent(renderer, index)
        assert -LABEL_PAD < left - line_x < LABEL_PAD
        assert top == pytest.approx(top_y + LABEL_PAD, abs=1)
        top_gaps.append(left - line_x)
    assert top_gaps[1] == pytest.approx(top_gaps[0], abs=1)

    # bottom labels end at the line, on its left, above the box edge
    for index in (2, 3):
        left, right, top, bottom = _label_extent(renderer, index)
        assert right == pytest.approx(line_x, abs=1)
        assert bottom == pytest.approx(bottom_y - LABEL_PAD, abs=1)
