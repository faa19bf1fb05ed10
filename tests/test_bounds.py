from __future__ import annotations

import pytest

from threshold_charts.geometry.bounds import (
    aggregate_max_value,
    resolve_bounds,
    resolve_linear_bounds,
    resolve_radial_max_value,
)
from threshold_charts.geometry.descriptors import BoundingBox, BoundsKind
from threshold_charts.host import Axis, Chart, create_series

from conftest import cartesian_chart, month_records, radar_chart


def _live(chart: Chart, bbox: BoundingBox = BoundingBox(0, 0, 200, 100)):
    series = create_series(chart.series[0])
    series.chart = chart
    chart.series.replace(0, series)
    series.bbox = bbox
    return series


def test_line_series_get_per_axis_bounds() -> None:
    chart = cartesian_chart("line", values=[10, 20, 30, 40, 50])
    series = _live(chart)

    bounds = resolve_linear_bounds(series, chart)

    assert bounds.kind is BoundsKind.PER_AXIS
    assert bounds.min_y == 0
    assert bounds.y_scale == pytest.approx(1.0)
    # category x axis: records spread evenly from 0
    assert bounds.min_x == 0
    assert bounds.x_scale == pytest.approx(200 / 4)


def test_single_record_category_axis_does_not_divide_by_zero() -> None:
    chart = cartesian_chart("line", values=[42])
    series = _live(chart)

    bounds = resolve_linear_bounds(series, chart)

    assert bounds.x_scale == pytest.approx(200)


def test_empty_store_does_not_divide_by_zero() -> None:
    chart = cartesian_chart("line", values=[])
    series = _live(chart)

    bounds = resolve_linear_bounds(series, chart)

    assert bounds.x_scale == pytest.approx(200)
    assert bounds.y_scale == pytest.approx(1.0)


def test_flat_numeric_axis_falls_back_to_record_spread() -> None:
    chart = Chart(
        series=[{"type": "line", "x_field": "name", "y_field": "data1"}],
        axes=[Axis("left", fields=["data1"])],
        records=month_records([50, 50, 50]),
    )
    series = _live(chart)

    bounds = resolve_linear_bounds(series, chart)

    assert bounds.min_y == 50
    assert bounds.y_scale == pytest.approx(100 / 2)


def test_column_series_report_uniform_bounds() -> None:
    chart = cartesian_chart("column")
    series = _live(chart)

    bounds = resolve_bounds(series, chart)

    assert bounds.kind is BoundsKind.UNIFORM
    assert bounds.scale == pytest.approx(1.0)


def test_radar_uses_explicit_radial_maximum() -> None:
    chart = radar_chart(values=[20, 45, 80], maximum=100)
    series = _live(chart)
    series.center_x, series.center_y, series.radius = 100, 50, 50

    bounds = resolve_bounds(series, chart)

    assert bounds.kind is BoundsKind.RADIAL
    assert bounds.max_value == 100
    assert (bounds.center_x, bounds.center_y, bounds.radius) == (100, 50, 50)


def test_radar_aggregates_max_value_without_maximum() -> None:
    chart = radar_chart(values=[20, 45, 80])

    assert aggregate_max_value(chart) == 80
    assert resolve_radial_max_value(chart) == 80


def test_radial_max_value_never_decreases_when_records_grow() -> None:
    chart = radar_chart(values=[5, 12])
    previous = resolve_radial_max_value(chart)

    for value in (3, 12, 40, 39, 95, 0):
        chart.load_data(chart.records + [{"name": "x", "data1": value}])
        current = resolve_radial_max_value(chart)
        assert current >= previous
        previous = current


def test_radial_max_value_has_floor_of_one() -> None:
    chart = radar_chart(values=[0, 0])

    assert resolve_radial_max_value(chart) == 1.0


def test_fractional_radial_max_value_is_raised_to_one() -> None:
    assert resolve_radial_max_value(radar_chart(values=[0.2, 0.5, 0.4])) == 1.0
    assert resolve_radial_max_value(radar_chart(values=[20, 45], maximum=0.5)) == 1.0
    assert resolve_radial_max_value(radar_chart(values=[0.2, 1.5])) == 1.5
