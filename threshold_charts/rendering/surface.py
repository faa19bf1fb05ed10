"""
Drawing surfaces for decorations and series.

A surface owns persistent drawing primitives (paths, circles and text)
organised in named groups. Callers only ever hold a group and an index into
it; the primitive itself is created once and then mutated in place:

    group = surface.get_group("thresholdlines")
    handle = surface.get_at(group, 0)
    if handle is None:
        handle = surface.add("path", group, path=tokens, stroke="#000")
    surface.set_attributes(handle, {"path": tokens, "hidden": False}, redraw=True)

``MatplotlibSurface`` implements this on an Agg canvas whose data
coordinates are device pixels with y growing downwards, so geometry computed
for any SVG-like surface can be drawn unchanged.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path as FilePath
from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple, Union, runtime_checkable

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.font_manager import FontProperties
from matplotlib.patches import Circle, PathPatch
from matplotlib.text import Text

from ..constants import DEFAULT_LABEL_FONT
from ..exceptions import RenderError, SurfaceError
from ..geometry.descriptors import TextSize
from ..geometry.tokens import to_mpl_path

logger = logging.getLogger("threshold_charts.rendering.surface")

PRIMITIVE_KINDS = ("path", "circle", "text")

_CSS_FONT = re.compile(
    r"^\s*(?:(?P<style>italic|oblique|normal)\s+)?"
    r"(?:(?P<weight>bold|bolder|lighter|normal|[1-9]00)\s+)?"
    r"(?P<size>\d+(?:\.\d+)?)(?P<unit>px|pt)\s+"
    r"(?P<family>.+?)\s*$"
)


@runtime_checkable
class Surface(Protocol):
    """What decorations need from a drawing surface."""

    def get_group(self, name: str) -> Any: ...

    def add(self, kind: str, group: Any, **attributes: Any) -> Any: ...

    def get_at(self, group: Any, index: int) -> Optional[Any]: ...

    def set_attributes(self, handle: Any, attributes: Mapping[str, Any], redraw: bool = False) -> None: ...

    def measure_text(self, handle: Any) -> TextSize: ...


@dataclass
class Primitive:
    """A primitive owned by a surface: its kind, group, artist and last attributes."""

    kind: str
    group: "PrimitiveGroup"
    artist: Any
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def hidden(self) -> bool:
        return bool(self.attributes.get("hidden", False))


class PrimitiveGroup:
    """Ordered primitives of one group; the index of a primitive never changes."""

    def __init__(self, name: str):
        self.name = name
        self._items: List[Primitive] = []

    def get_at(self, index: int) -> Optional[Primitive]:
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def append(self, primitive: Primitive) -> int:
        self._items.append(primitive)
        return len(self._items) - 1

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items))

    def __repr__(self) -> str:
        return f"PrimitiveGroup({self.name!r}, size={len(self._items)})"


def parse_css_font(font: str, dpi: float) -> FontProperties:
    """
    Convert a CSS font shorthand such as ``"11px Helvetica, sans-serif"``.

    Pixel sizes are converted to points for the surface's DPI.

    Raises:
        SurfaceError: If the font string cannot be parsed
    """
    match = _CSS_FONT.match(font or "")
    if match is None:
        raise SurfaceError(f"Unsupported font specification: {font!r}")
    size = float(match.group("size"))
    if match.group("unit") == "px":
        size = size * 72.0 / dpi
    families = [name.strip().strip("'\"") for name in match.group("family").split(",") if name.strip()]
    return FontProperties(
        family=families,
        style=match.group("style") or "normal",
        weight=match.group("weight") or "normal",
        size=size,
    )


def _is_quarter_turn(rotation: Optional[float]) -> bool:
    return bool(rotation) and rotation % 180 == 90


def parse_dash_array(dash: Optional[str]) -> Tuple[float, ...]:
    """Parse ``"4, 4"`` into ``(4.0, 4.0)``; an empty value gives an empty tuple."""
    if not dash:
        return ()
    try:
        return tuple(float(part) for part in str(dash).replace(" ", ",").split(",") if part)
    except ValueError as e:
        raise SurfaceError(f"Invalid dash pattern: {dash!r}") from e


class MatplotlibSurface:
    """
    Agg-backed surface in device pixel coordinates.

    Attributes:
        fig: Matplotlib Figure the primitives are drawn on
        ax: Full-figure axes spanning ``(0, width) x (height, 0)``
        dpi: Figure resolution; 1 device unit is 1 pixel

    Example:
        >>> surface = MatplotlibSurface(800, 600)
        >>> group = surface.get_group("demo")
        >>> handle = surface.add("circle", group, x=400, y=300, radius=50, stroke="#f00")
        >>> surface.save("demo.png")
    """

    def __init__(
        self,
        width: float,
        height: float,
        dpi: float = 100,
        background_color: str = "#fff",
    ):
        if width <= 0 or height <= 0:
            raise RenderError(f"Surface dimensions must be positive, got {width}x{height}")
        self.dpi = dpi
        self.fig = Figure(figsize=(width / dpi, height / dpi), dpi=dpi, facecolor=background_color)
        FigureCanvasAgg(self.fig)
        self.ax = self.fig.add_axes([0, 0, 1, 1])
        self.ax.set_axis_off()
        self.ax.set_autoscale_on(False)
        self.ax.set_facecolor(background_color)
        self._groups: Dict[str, PrimitiveGroup] = {}
        self.width = width
        self.height = height
        self._apply_limits()
        logger.debug(f"Created MatplotlibSurface {width}x{height}px at {dpi} dpi")

    def _apply_limits(self) -> None:
        self.ax.set_xlim(0, self.width)
        self.ax.set_ylim(self.height, 0)

    def resize(self, width: float, height: float) -> None:
        """Resize the canvas; existing primitives keep their device coordinates."""
        if width <= 0 or height <= 0:
            raise RenderError(f"Surface dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.fig.set_size_inches(width / self.dpi, height / self.dpi)
        self._apply_limits()
        logger.debug(f"Surface resized to {width}x{height}px")

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------

    def get_group(self, name: str) -> PrimitiveGroup:
        """Return the named group, creating it on first use."""
        group = self._groups.get(name)
        if group is None:
            group = self._groups[name] = PrimitiveGroup(name)
        return group

    def get_at(self, group: PrimitiveGroup, index: int) -> Optional[Primitive]:
        return group.get_at(index)

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def _px_to_pt(self, value: float) -> float:
        return value * 72.0 / self.dpi

    def _stroke_kwargs(self, attributes: Mapping[str, Any]) -> Dict[str, Any]:
        linewidth = self._px_to_pt(attributes.get("stroke_width", 1))
        kwargs = {
            "edgecolor": attributes.get("stroke", "none"),
            "linewidth": linewidth,
        }
        dashes = parse_dash_array(attributes.get("stroke_dasharray"))
        if dashes and any(dashes[1::2]) and linewidth > 0:
            # matplotlib scales dash lengths by the line width
            kwargs["linestyle"] = (0, tuple(self._px_to_pt(d) / linewidth for d in dashes))
        return kwargs

    def _create_artist(self, kind: str, attributes: Mapping[str, Any]) -> Any:
        zorder = attributes.get("zindex", 1)
        alpha = attributes.get("opacity")
        if kind == "path":
            fill = attributes.get("fill")
            return self.ax.add_patch(PathPatch(
                to_mpl_path(attributes.get("path", ())),
                facecolor=fill if fill else "none",
                alpha=alpha,
                zorder=zorder,
                capstyle="butt",
                **self._stroke_kwargs(attributes),
            ))
        if kind == "circle":
            fill = attributes.get("fill")
            return self.ax.add_patch(Circle(
                (attributes.get("x", 0), attributes.get("y", 0)),
                attributes.get("radius", 0),
                facecolor=fill if fill else "none",
                alpha=alpha,
                zorder=zorder,
                **self._stroke_kwargs(attributes),
            ))
        if kind == "text":
            rotation = attributes.get("rotation")
            text = Text(
                attributes.get("x", 0),
                attributes.get("y", 0),
                attributes.get("text", ""),
                color=attributes.get("color", "#000"),
                fontproperties=parse_css_font(attributes.get("font", DEFAULT_LABEL_FONT), self.dpi),
                rotation=-rotation if rotation else 0,
                rotation_mode="anchor",
                ha="center",
                va="center",
                alpha=alpha,
                zorder=zorder,
            )
            self.ax.add_artist(text)
            return text
        raise SurfaceError(f"Unknown primitive kind: {kind!r}. Available kinds: {', '.join(PRIMITIVE_KINDS)}")

    def add(self, kind: str, group: PrimitiveGroup, **attributes: Any) -> Primitive:
        """
        Create a primitive and append it to ``group``.

        Args:
            kind: 'path', 'circle' or 'text'
            group: Group returned by get_group()
            **attributes: Creation attributes (path, x, y, radius, text, font,
                color, stroke, stroke_width, stroke_dasharray, fill, opacity,
                zindex, rotation, hidden)

        Returns:
            Handle of the new primitive
        """
        if kind not in PRIMITIVE_KINDS:
            raise SurfaceError(f"Unknown primitive kind: {kind!r}. Available kinds: {', '.join(PRIMITIVE_KINDS)}")
        artist = self._create_artist(kind, attributes)
        primitive = Primitive(kind=kind, group=group, artist=artist, attributes=dict(attributes))
        if kind == "text":
            self._place_text(primitive)
        if primitive.hidden:
            artist.set_visible(False)
        index = group.append(primitive)
        logger.debug(f"Added {kind} primitive #{index} to group '{group.name}'")
        return primitive

    def set_attributes(self, handle: Primitive, attributes: Mapping[str, Any], redraw: bool = False) -> None:
        """
        Update the mutable attributes of a primitive.

        Supported: ``hidden`` for every kind, ``path`` for paths, ``x``/``y``/
        ``radius`` for circles and ``x``/``y``/``text``/``rotation`` for text.

        Raises:
            SurfaceError: If an attribute does not apply to the primitive
        """
        artist = handle.artist
        moved = False
        for name, value in attributes.items():
            if name == "hidden":
                artist.set_visible(not value)
            elif handle.kind == "path" and name == "path":
                artist.set_path(to_mpl_path(value))
            elif handle.kind == "circle" and name in ("x", "y"):
                cx, cy = artist.get_center()
                artist.set_center((value, cy) if name == "x" else (cx, value))
            elif handle.kind == "circle" and name == "radius":
                artist.set_radius(value)
            elif handle.kind == "text" and name in ("x", "y"):
                moved = True
            elif handle.kind == "text" and name == "text":
                artist.set_text(value)
                moved = True
            elif handle.kind == "text" and name == "rotation":
                artist.set_rotation(-value if value else 0)
                moved = True
            else:
                raise SurfaceError(f"Attribute '{name}' cannot be set on a {handle.kind} primitive")
            handle.attributes[name] = value
        if moved:
            self._place_text(handle)
        if redraw:
            artist.stale = True

    def _text_extent(self, artist: Text) -> Tuple[float, float]:
        """Rendered width and height of a text artist in device pixels, rotation included."""
        if not artist.get_text():
            return 0.0, 0.0
        # matplotlib reports a unit box for invisible artists
        visible = artist.get_visible()
        artist.set_visible(True)
        try:
            bbox = artist.get_window_extent(renderer=self.fig.canvas.get_renderer())
        finally:
            artist.set_visible(visible)
        return float(bbox.width), float(bbox.height)

    def _place_text(self, handle: Primitive) -> None:
        """
        Move a text artist to its ``x``/``y`` attributes.

        ``x`` is the left edge and ``y`` the vertical middle of the unrotated
        text. A rotated text turns about its own center, so the artist is
        anchored there.
        """
        width, height = self._text_extent(handle.artist)
        if _is_quarter_turn(handle.attributes.get("rotation")):
            width = height
        x = handle.attributes.get("x", 0)
        y = handle.attributes.get("y", 0)
        handle.artist.set_position((x + width / 2, y))

    def measure_text(self, handle: Primitive) -> TextSize:
        """
        Measure the rendered extent of a text primitive in device pixels.

        The extent is taken after rotation: a label turned by 90 or 270
        degrees reports its text height as width and its text length as
        height.
        """
        if handle.kind != "text":
            raise SurfaceError(f"Cannot measure a {handle.kind} primitive")
        width, height = self._text_extent(handle.artist)
        return TextSize(width=width, height=height)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def draw(self) -> None:
        self.fig.canvas.draw()

    def save(self, output_path: Union[str, FilePath], dpi: Optional[float] = None) -> str:
        """Write the surface to an image file; the format follows the extension."""
        try:
            self.fig.savefig(output_path, dpi=dpi or self.dpi, facecolor=self.fig.get_facecolor())
        except (OSError, ValueError) as e:
            raise RenderError(f"Failed to save surface to {output_path}: {e}") from e
        return str(output_path)
