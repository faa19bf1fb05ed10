"""
Constants and fixed parameters for ThresholdCharts package.

This module defines axis positions, default decoration styling, surface group
names, z-ordering and the demo chart definitions used throughout the package.
"""

# ============================================================================
# Axis Positions
# ============================================================================

POSITION_LEFT = "left"
POSITION_RIGHT = "right"
POSITION_TOP = "top"
POSITION_BOTTOM = "bottom"

LINE_POSITIONS = (POSITION_LEFT, POSITION_RIGHT, POSITION_TOP, POSITION_BOTTOM)

# ============================================================================
# Decoration Defaults
# ============================================================================

DEFAULT_LINE_COLOR = "#000"
DEFAULT_LINE_WIDTH = 1
DEFAULT_LINE_OPACITY = 1.0
# Dash length 4, gap 0: a solid stroke
DEFAULT_LINE_DASH = "4, 0"

DEFAULT_LABEL_TEXT = ""
DEFAULT_LABEL_COLOR = "#000"
DEFAULT_LABEL_FONT = "11px Helvetica, sans-serif"
DEFAULT_LABEL_SHOW_VALUE = True

DEFAULT_RANGE_OPACITY = 0.1
DEFAULT_RANGE_LINE_WIDTH = 1

# Device units between a line and its label
LABEL_PAD = 5

LABEL_ROTATION = {
    POSITION_TOP: 90,
    POSITION_BOTTOM: 270,
}

# ============================================================================
# Surface Groups and Layering
# ============================================================================

THRESHOLD_LINE_GROUP = "thresholdlines"
THRESHOLD_LABEL_GROUP = "thresholdlabels"
RANGE_GROUP = "rangegroup"

# Ranges sit behind the series, lines and labels above it
RANGE_ZORDER = -1
SERIES_ZORDER = 2
THRESHOLD_LINE_ZORDER = 4
THRESHOLD_LABEL_ZORDER = 5

# Offset used to keep a full-circle SVG arc from collapsing to a point
FULL_CIRCLE_ARC_EPSILON = 0.001

# ============================================================================
# Demo Charts
# ============================================================================

MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

DEMO_FIELDS = ("data1", "data2", "data3")

CHART_KINDS = ("line", "column", "radar")

DEMO_LINES = {
    "radar": [
        {
            "position": POSITION_LEFT,
            "color": "#000",
            "dash": "4,4",
            "value": 50,
            "width": 3,
            "label": {"text": "Goal", "show_value": True},
        },
    ],
    "cartesian": [
        {
            "position": POSITION_LEFT,
            "color": "#000",
            "value": 30,
            "width": 3,
            "dash": "4,4",
            "label": {"text": "Goal", "show_value": False},
        },
        {
            "position": POSITION_RIGHT,
            "value": 70,
            "color": "#ff0000",
            "width": 3,
            "label": {"text": "Threshold 2"},
        },
    ],
}

DEMO_RANGES = {
    "radar": [
        {"opacity": 0.1, "from": 0, "to": 50, "color": "#FF0000"},
        {"opacity": 0.1, "from": 50, "to": 75, "color": "#FFFF00"},
        {"opacity": 0.1, "from": 75, "to": 100, "color": "#00FF00"},
    ],
    "cartesian": [
        {"opacity": 0.1, "from": 0, "to": 70, "color": "#FF0000"},
        {"opacity": 0.1, "from": 70, "to": 90, "color": "#FFFF00"},
        {"opacity": 0.1, "from": 90, "to": 100, "color": "#00FF00"},
    ],
}
