"""
Path token sequences and their conversion to drawable paths.

Decoration geometry is expressed as an ordered tuple of commands, each
command a tuple ``(op, *operands)`` using the SVG path vocabulary:

    M x y                       absolute moveto
    L x y                       absolute lineto
    l dx dy                     relative lineto
    A rx ry rot large sweep x y absolute elliptical arc (circular only)
    Z                           close the current sub-path

Tokens are what the path calculators return and what tests assert on. They
convert to an SVG path string for debugging and to a ``matplotlib.path.Path``
for the Agg-backed drawing surface.
"""

import math
from typing import List, Sequence, Tuple

import numpy as np
from matplotlib.path import Path
from matplotlib.transforms import Affine2D

PathCommand = Tuple
PathTokens = Tuple[PathCommand, ...]

_OPERAND_COUNT = {"M": 2, "L": 2, "l": 2, "A": 7, "Z": 0}


def _check_command(command: Sequence) -> str:
    op = command[0]
    if op not in _OPERAND_COUNT:
        raise ValueError(f"Unsupported path command: {op!r}")
    if len(command) - 1 != _OPERAND_COUNT[op]:
        raise ValueError(
            f"Path command {op!r} takes {_OPERAND_COUNT[op]} operands, got {len(command) - 1}"
        )
    return op


def _fmt(value: float) -> str:
    return f"{value:.6g}"


def to_svg(tokens: Sequence[PathCommand]) -> str:
    """Render tokens as an SVG ``d`` attribute string."""
    parts = []
    for command in tokens:
        _check_command(command)
        parts.append(" ".join([command[0]] + [_fmt(v) for v in command[1:]]))
    return " ".join(parts)


def absolute_vertices(tokens: Sequence[PathCommand]) -> List[Tuple[float, float]]:
    """
    Resolve the end point of every drawing command to absolute coordinates.

    Relative ``l`` commands are accumulated onto the current point; ``Z``
    contributes no vertex. Arcs contribute only their end point.
    """
    points = []
    cur_x = cur_y = 0.0
    for command in tokens:
        op = _check_command(command)
        if op in ("M", "L"):
            cur_x, cur_y = float(command[1]), float(command[2])
        elif op == "l":
            cur_x, cur_y = cur_x + command[1], cur_y + command[2]
        elif op == "A":
            cur_x, cur_y = float(command[6]), float(command[7])
        else:
            continue
        points.append((cur_x, cur_y))
    return points


def polygon_area(tokens: Sequence[PathCommand]) -> float:
    """Unsigned shoelace area of a straight-edged closed path."""
    pts = np.asarray(absolute_vertices(tokens), dtype=float)
    if len(pts) < 3:
        return 0.0
    x, y = pts[:, 0], pts[:, 1]
    return float(abs(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))) / 2.0)


def _arc_segment(
    x1: float,
    y1: float,
    radius: float,
    large_arc: int,
    sweep: int,
    x2: float,
    y2: float,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Convert a circular SVG arc into cubic Bezier vertices and codes.

    Uses the SVG endpoint to center parameterization (rotation is ignored for
    circles). The leading MOVETO of matplotlib's unit arc is dropped because
    the arc continues the current sub-path.
    """
    hx, hy = (x1 - x2) / 2.0, (y1 - y2) / 2.0
    r = abs(radius)
    lam = (hx * hx + hy * hy) / (r * r)
    if lam > 1:
        r *= math.sqrt(lam)

    denom = hx * hx + hy * hy
    num = r * r * r * r - r * r * denom
    coef = math.sqrt(max(0.0, num / (r * r * denom)))
    if bool(large_arc) == bool(sweep):
        coef = -coef
    cxp, cyp = coef * hy, -coef * hx
    cx, cy = cxp + (x1 + x2) / 2.0, cyp + (y1 + y2) / 2.0

    theta1 = math.atan2(hy - cyp, hx - cxp)
    theta2 = math.atan2(-hy - cyp, -hx - cxp)
    delta = theta2 - theta1
    if sweep and delta < 0:
        delta += 2 * math.pi
    elif not sweep and delta > 0:
        delta -= 2 * math.pi

    start, end = math.degrees(theta1), math.degrees(theta1 + delta)
    if delta >= 0:
        unit = Path.arc(start, end)
        vertices = unit.vertices
    else:
        unit = Path.arc(end, start)
        vertices = unit.vertices[::-1]

    transform = Affine2D().scale(r).translate(cx, cy)
    vertices = transform.transform(vertices)
    return vertices[1:], unit.codes[1:]


def to_mpl_path(tokens: Sequence[PathCommand]) -> Path:
    """
    Convert tokens into a ``matplotlib.path.Path``.

    Arcs become cubic Bezier curves, so full-circle bands (two opposite
    sweeping sub-paths) keep their hole under matplotlib's nonzero fill rule.
    """
    vertices = []
    codes = []
    cur_x = cur_y = 0.0
    start_x = start_y = 0.0
    for command in tokens:
        op = _check_command(command)
        if op == "M":
            cur_x, cur_y = float(command[1]), float(command[2])
            start_x, start_y = cur_x, cur_y
            vertices.append((cur_x, cur_y))
            codes.append(Path.MOVETO)
        elif op == "L":
            cur_x, cur_y = float(command[1]), float(command[2])
            vertices.append((cur_x, cur_y))
            codes.append(Path.LINETO)
        elif op == "l":
            cur_x, cur_y = cur_x + command[1], cur_y + command[2]
            vertices.append((cur_x, cur_y))
            codes.append(Path.LINETO)
        elif op == "A":
            rx, _ry, _rot, large_arc, sweep, x2, y2 = command[1:]
            if rx == 0 or (x2 == cur_x and y2 == cur_y):
                vertices.append((x2, y2))
                codes.append(Path.LINETO)
            else:
                arc_vertices, arc_codes = _arc_segment(cur_x, cur_y, rx, large_arc, sweep, x2, y2)
                vertices.extend(map(tuple, arc_vertices))
                codes.extend(arc_codes)
            cur_x, cur_y = float(x2), float(y2)
        else:
            vertices.append((start_x, start_y))
            codes.append(Path.CLOSEPOLY)
            cur_x, cur_y = start_x, start_y

    if not vertices:
        return Path(np.empty((0, 2)))
    return Path(np.asarray(vertices, dtype=float), codes)
