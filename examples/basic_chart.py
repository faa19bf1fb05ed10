"""
Basic Chart Generation Example

This example demonstrates the simplest ThresholdCharts workflow: render the
demo column and radar charts with their default threshold lines and ranges.

Output: Two PNG files in ./output showing a column chart with a "Goal" line,
a red "Threshold 2" line and three shaded bands, and a radar chart with a
concentric goal ring and three annular bands.
"""

import logging
from pathlib import Path

from threshold_charts import Config, RenderError, ThresholdChartsError, create_chart


def main() -> int:
    logging.getLogger("threshold_charts").setLevel(logging.INFO)

    output = Path(__file__).resolve().parents[1] / "output"
    config = Config(default_dpi=100, figure_width=6.0, figure_height=4.5)

    print("Rendering ThresholdCharts demo charts")
    print("=" * 60)

    for kind in ("column", "radar"):
        try:
            path = create_chart(
                kind,
                output_path=output / f"basic_{kind}.png",
                config=config,
                seed=42,
                title=f"Monthly data1 ({kind})",
            )
        except RenderError as e:
            print(f"  FAILED to render {kind}: {e}")
            return 1
        except ThresholdChartsError as e:
            print(f"  Invalid configuration for {kind}: {e}")
            return 1
        print(f"  OK: {path}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
