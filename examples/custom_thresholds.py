"""
Custom Thresholds Example

This example wires the components by hand: a line chart over two years of
made-up monthly values, a decorations file written and read back, and a
renderer that is resized and reloaded. Every render pass moves the existing
threshold primitives instead of adding new ones.

Output: Three PNG files in ./output (initial, resized, reloaded) and the
decorations file used to draw them.
"""

from pathlib import Path

from threshold_charts import (
    Axis,
    Chart,
    ChartRenderer,
    Config,
    LabelSpec,
    LineSpec,
    RangeSpec,
    ThresholdLineRange,
    load_decorations,
    sample_records,
    save_decorations,
)


def main() -> int:
    output = Path(__file__).resolve().parents[1] / "output"
    output.mkdir(parents=True, exist_ok=True)

    # Decorations round-trip through YAML
    decorations_file = output / "custom_thresholds.yaml"
    save_decorations(
        decorations_file,
        lines=[
            LineSpec(value=25, color="#1a7f37", width=2, label=LabelSpec(text="Floor")),
            LineSpec(value=85, color="#cf222e", width=2, dash="6,3", label=LabelSpec(text="Ceiling")),
            LineSpec(value=6, position="bottom", label=LabelSpec(text="Mid-year", show_value=False)),
        ],
        ranges=[
            RangeSpec(from_=25, to=85, color="#2da44e", opacity=0.08),
        ],
    )
    lines, ranges = load_decorations(decorations_file)

    chart = Chart(
        series=[{"type": "line", "x_field": "name", "y_field": "data2", "axis": "left"}],
        axes=[
            Axis("left", fields=["data2"], minimum=0, maximum=100),
            Axis("bottom", type="category", fields=["name"]),
        ],
        records=sample_records(seed=7, count=24),
        title="Custom thresholds",
    )
    decorations = chart.add_plugin(ThresholdLineRange(lines=lines, ranges=ranges))

    renderer = ChartRenderer(chart, Config(default_dpi=100, figure_width=7.0, figure_height=4.0))
    renderer.render()
    renderer.save_chart(str(output / "custom_initial.png"))

    renderer.resize(900, 400)
    renderer.save_chart(str(output / "custom_resized.png"))

    renderer.reload(sample_records(seed=8, count=24))
    renderer.save_chart(str(output / "custom_reloaded.png"))

    print(f"Decoration passes: {decorations.passes} (state: {decorations.state.value})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
