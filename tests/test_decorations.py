from __future__ import annotations

import pytest

from threshold_charts.constants import RANGE_GROUP, THRESHOLD_LABEL_GROUP, THRESHOLD_LINE_GROUP
from threshold_charts.decorations import ControllerState, ThresholdLineRange
from threshold_charts.exceptions import InvalidConfigurationError, ThresholdChartsError
from threshold_charts.geometry.descriptors import BoundingBox
from threshold_charts.host import Chart, Series, create_series

from conftest import cartesian_chart, radar_chart

LINES = [
    {"position": "left", "value": 30, "width": 3, "dash": "4,4", "label": {"text": "Goal", "show_value": False}},
    {"position": "right", "value": 70, "color": "#ff0000", "label": {"text": "Threshold 2"}},
]
RANGES = [
    {"from": 0, "to": 70, "color": "#FF0000"},
    {"from": 70, "to": 90, "color": "#FFFF00"},
]


def _instantiate(chart: Chart, bbox: BoundingBox = BoundingBox(0, 0, 200, 100)) -> Series:
    """Do what the renderer does: replace the configuration with a laid-out live series."""
    series = create_series(chart.series[0])
    series.chart = chart
    series.bbox = bbox
    chart.series.replace(0, series)
    return series


def test_attach_before_instantiation_waits_for_series() -> None:
    chart = cartesian_chart()
    plugin = chart.add_plugin(ThresholdLineRange(lines=LINES))

    assert plugin.state is ControllerState.WAITING_FOR_SERIES
    assert len(chart.series.on_replace) == 1

    series = _instantiate(chart)

    assert plugin.state is ControllerState.READY
    assert len(series.after_render) == 1
    assert len(chart.series.on_replace) == 0


def test_replace_hook_fires_only_once() -> None:
    chart = cartesian_chart()
    plugin = chart.add_plugin(ThresholdLineRange(lines=LINES))
    first = _instantiate(chart)

    second = create_series({"type": "line", "x_field": "name", "y_field": "data1"})
    chart.series.replace(0, second)

    assert plugin.state is ControllerState.READY
    assert len(first.after_render) == 1
    assert len(second.after_render) == 0


def test_attach_to_live_series_goes_straight_to_ready() -> None:
    chart = cartesian_chart()
    series = _instantiate(chart)

    plugin = chart.add_plugin(ThresholdLineRange(lines=LINES))

    assert plugin.state is ControllerState.READY
    assert len(series.after_render) == 1
    assert len(chart.series.on_replace) == 0


def test_attach_twice_is_rejected() -> None:
    plugin = ThresholdLineRange(lines=LINES)
    plugin.attach(cartesian_chart())

    with pytest.raises(ThresholdChartsError):
        plugin.attach(cartesian_chart())


def test_invalid_configuration_fails_before_rendering() -> None:
    with pytest.raises(InvalidConfigurationError):
        ThresholdLineRange(lines=[{"position": "diagonal", "value": 1}])


def test_non_series_replacement_is_not_decorated() -> None:
    chart = cartesian_chart()
    plugin = chart.add_plugin(ThresholdLineRange(lines=LINES))

    chart.series.replace(0, {"type": "line", "x_field": "name", "y_field": "data2"})

    assert plugin.state is ControllerState.READY
    assert plugin.passes == 0


def test_after_render_draws_lines_labels_and_ranges(fake_surface) -> None:
    chart = cartesian_chart()
    chart.surface = fake_surface
    plugin = chart.add_plugin(ThresholdLineRange(lines=LINES, ranges=RANGES))
    series = _instantiate(chart)

    series.after_render.emit(series)

    lines = fake_surface.groups[THRESHOLD_LINE_GROUP]
    labels = fake_surface.groups[THRESHOLD_LABEL_GROUP]
    ranges = fake_surface.groups[RANGE_GROUP]
    assert [p.kind for p in lines] == ["path", "path"]
    assert [p.kind for p in labels] == ["text", "text"]
    assert [p.kind for p in ranges] == ["path", "path"]

    assert lines[0].attributes["path"] == (("M", 0, 70), ("l", 200, 0))
    assert lines[0].attributes["stroke_width"] == 3
    assert lines[0].attributes["stroke_dasharray"] == "4,4"
    assert lines[0].attributes["hidden"] is False

    assert labels[0].attributes["text"] == "Goal"
    assert labels[1].attributes["text"] == "Threshold 2 (70)"
    assert (labels[0].attributes["x"], labels[0].attributes["y"]) == (5, 64)

    assert ranges[0].attributes["zindex"] == -1
    assert ranges[0].attributes["fill"] == "#FF0000"
    assert plugin.passes == 1


def test_recompute_twice_reuses_primitives(fake_surface) -> None:
    chart = cartesian_chart()
    chart.surface = fake_surface
    plugin = chart.add_plugin(ThresholdLineRange(lines=LINES, ranges=RANGES))
    series = _instantiate(chart)

    series.after_render.emit(series)
    adds_after_first = len(fake_surface.add_calls)
    paths_first = [p.attributes["path"] for p in fake_surface.groups[THRESHOLD_LINE_GROUP]]

    series.after_render.emit(series)

    assert len(fake_surface.add_calls) == adds_after_first
    assert [p.attributes["path"] for p in fake_surface.groups[THRESHOLD_LINE_GROUP]] == paths_first
    assert len(fake_surface.groups[THRESHOLD_LINE_GROUP]) == 2
    assert plugin.passes == 2


def test_appended_line_keeps_existing_handles(fake_surface) -> None:
    chart = cartesian_chart()
    chart.surface = fake_surface
    plugin = chart.add_plugin(ThresholdLineRange(lines=LINES))
    series = _instantiate(chart)
    series.after_render.emit(series)
    first_handles = list(fake_surface.groups[THRESHOLD_LINE_GROUP])
    first_labels = list(fake_surface.groups[THRESHOLD_LABEL_GROUP])

    plugin.add_line({"position": "left", "value": 90, "label": {"text": "Stretch"}})
    series.after_render.emit(series)

    handles = fake_surface.groups[THRESHOLD_LINE_GROUP]
    assert len(handles) == 3
    assert handles[0] is first_handles[0]
    assert handles[1] is first_handles[1]
    assert fake_surface.groups[THRESHOLD_LABEL_GROUP][:2] == first_labels
    assert handles[2].attributes["path"] == (("M", 0, 10), ("l", 200, 0))
    assert fake_surface.add_calls.count(("path", THRESHOLD_LINE_GROUP)) == 3


def test_style_is_only_applied_at_creation(fake_surface) -> None:
    chart = cartesian_chart()
    chart.surface = fake_surface
    chart.add_plugin(ThresholdLineRange(lines=LINES))
    series = _instantiate(chart)

    series.after_render.emit(series)
    series.after_render.emit(series)

    updates = [attrs for handle, attrs, _redraw in fake_surface.set_calls if handle.kind == "path"]
    assert all(set(attrs) == {"hidden", "path"} for attrs in updates)
    assert all(redraw for _handle, _attrs, redraw in fake_surface.set_calls)


def test_resize_moves_lines_with_new_bbox(fake_surface) -> None:
    chart = cartesian_chart()
    chart.surface = fake_surface
    chart.add_plugin(ThresholdLineRange(lines=LINES[:1]))
    series = _instantiate(chart)
    series.after_render.emit(series)

    series.bbox = BoundingBox(0, 0, 400, 200)
    series.after_render.emit(series)

    (line,) = fake_surface.groups[THRESHOLD_LINE_GROUP]
    assert line.attributes["path"] == (("M", 0, 140), ("l", 400, 0))


def test_radar_draws_rings_and_annuli(fake_surface) -> None:
    chart = radar_chart(maximum=100)
    chart.surface = fake_surface
    chart.add_plugin(ThresholdLineRange(
        lines=[{"value": 50, "label": {"text": "Goal"}}],
        ranges=[{"from": 0, "to": 50, "color": "#FF0000"}, {"from": 50, "to": 75}],
    ))
    series = _instantiate(chart, BoundingBox(70, 70, 160, 160))
    series.center_x, series.center_y, series.radius = 150, 150, 80

    series.after_render.emit(series)

    (ring,) = fake_surface.groups[THRESHOLD_LINE_GROUP]
    assert ring.kind == "circle"
    assert (ring.attributes["x"], ring.attributes["y"], ring.attributes["radius"]) == (150, 150, 40)

    (label,) = fake_surface.groups[THRESHOLD_LABEL_GROUP]
    assert label.attributes["x"] == 150 + 40 + 5
    assert label.attributes["text"] == "Goal (50)"

    inner_free, annulus = fake_surface.groups[RANGE_GROUP]
    assert len(inner_free.attributes["path"]) == 2
    assert len(annulus.attributes["path"]) == 4


def test_recompute_requires_a_surface() -> None:
    chart = cartesian_chart()
    plugin = chart.add_plugin(ThresholdLineRange(lines=LINES))
    series = _instantiate(chart)

    with pytest.raises(ThresholdChartsError):
        plugin.recompute(series)
