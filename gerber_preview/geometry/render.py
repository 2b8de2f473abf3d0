# gerber_preview/geometry/render.py

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Mapping, Optional, Sequence, Union
from xml.sax.saxutils import escape, quoteattr

from .gerber_parser import ApertureDefinition, Draw, Flash, ParsedGerberData
from .layer_model import LayerInfo
from .primitives import Bounds, Point2D
from .queries import get_drawable_layers

DEFAULT_VIEWBOX_SIZE = 180.0

ZOOM_STEP = 0.25
MIN_ZOOM = 0.5
MAX_ZOOM = 3.0


@dataclass(frozen=True)
class PointMarker:
    x: float
    y: float
    size: Optional[float] = None
    aperture: Optional[str] = None


@dataclass(frozen=True)
class LineSegment:
    x1: float
    y1: float
    x2: float
    y2: float
    width: Optional[float] = None
    aperture: Optional[str] = None


Primitive = Union[PointMarker, LineSegment]


@dataclass(frozen=True)
class Projection:
    """
    Board mm -> square viewbox mapping derived from the combined bounds.

    One Projection is shared by every layer so that layers overlay in
    registration. Y is flipped (board Y-up, screen Y-down) and the larger
    of width/height fills the side length.
    """
    bounds: Bounds
    size: float = DEFAULT_VIEWBOX_SIZE

    @property
    def scale(self) -> float:
        extent = max(self.bounds.width, self.bounds.height)
        if extent <= 0:
            return 1.0
        return self.size / extent

    def point(self, x: float, y: float) -> Point2D:
        s = self.scale
        return Point2D(
            x=(x - self.bounds.min_x) * s,
            y=(self.bounds.max_y - y) * s,
        )

    def length(self, mm: float) -> float:
        return mm * self.scale


def _aperture_size(apertures: Mapping[str, ApertureDefinition], ref: Optional[str]) -> Optional[float]:
    if ref is None:
        return None
    ap = apertures.get(ref)
    if ap is None:
        return None
    return ap.stroke_width


def project_layer(
    parsed: Optional[ParsedGerberData],
    bounds: Bounds,
    size: float = DEFAULT_VIEWBOX_SIZE,
) -> List[Primitive]:
    """
    Project one layer's draws and flashes into the viewbox.

    Moves, arcs and regions produce nothing. A layer without parse data
    yields an empty list.
    """
    if parsed is None:
        return []
    return project_commands(parsed, Projection(bounds=bounds, size=size))


def project_commands(parsed: ParsedGerberData, projection: Projection) -> List[Primitive]:
    out: List[Primitive] = []
    for cmd in parsed.commands:
        if isinstance(cmd, Flash):
            p = projection.point(cmd.x, cmd.y)
            size = _aperture_size(parsed.apertures, cmd.aperture)
            out.append(
                PointMarker(
                    x=p.x,
                    y=p.y,
                    size=None if size is None else projection.length(size),
                    aperture=cmd.aperture,
                )
            )
        elif isinstance(cmd, Draw):
            a = projection.point(cmd.x, cmd.y)
            b = projection.point(cmd.x2, cmd.y2)
            width = _aperture_size(parsed.apertures, cmd.aperture)
            out.append(
                LineSegment(
                    x1=a.x,
                    y1=a.y,
                    x2=b.x,
                    y2=b.y,
                    width=None if width is None else projection.length(width),
                    aperture=cmd.aperture,
                )
            )
    return out


def project_layers(
    layers: Sequence[LayerInfo],
    bounds: Bounds,
    visibility: Optional[Mapping[str, bool]] = None,
    size: float = DEFAULT_VIEWBOX_SIZE,
) -> Dict[str, List[Primitive]]:
    """
    Project every visible, parsed layer with one shared Projection.

    Keys are layer names, in layer order.
    """
    projection = Projection(bounds=bounds, size=size)
    return {
        layer.name: project_commands(layer.parsed, projection)  # type: ignore[arg-type]
        for layer in get_drawable_layers(layers, visibility)
    }


@dataclass(frozen=True)
class ViewTransform:
    """
    Zoom and rotation of the preview viewport.

    Applied on top of the projection; it never changes layer registration.
    """
    zoom: float = 1.0
    rotation: int = 0

    def zoom_in(self) -> "ViewTransform":
        return replace(self, zoom=min(MAX_ZOOM, self.zoom + ZOOM_STEP))

    def zoom_out(self) -> "ViewTransform":
        return replace(self, zoom=max(MIN_ZOOM, self.zoom - ZOOM_STEP))

    def rotate(self) -> "ViewTransform":
        return replace(self, rotation=(self.rotation + 90) % 360)

    @property
    def zoom_percent(self) -> int:
        return int(round(self.zoom * 100))

    def svg_transform(self, size: float) -> str:
        c = size / 2.0
        return (
            f"translate({_fmt(c)} {_fmt(c)}) "
            f"rotate({self.rotation}) "
            f"scale({_fmt(self.zoom)}) "
            f"translate({_fmt(-c)} {_fmt(-c)})"
        )


def _fmt(v: float) -> str:
    return f"{v:.4f}".rstrip("0").rstrip(".") or "0"


def render_svg(
    layers: Sequence[LayerInfo],
    bounds: Bounds,
    visibility: Optional[Mapping[str, bool]] = None,
    size: float = DEFAULT_VIEWBOX_SIZE,
    view: Optional[ViewTransform] = None,
    background: Optional[str] = None,
) -> str:
    """
    Compose the visible layers into a single SVG document.

    background, when given, fills the projected board silhouette (the
    solder mask colour in the quote preview).
    """
    view = view or ViewTransform()
    projection = Projection(bounds=bounds, size=size)
    s = _fmt(size)

    lines: List[str] = []
    lines.append(
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {s} {s}" width="{s}" height="{s}">'
    )
    lines.append(f'  <g transform="{view.svg_transform(size)}">')

    if background:
        w = _fmt(projection.length(bounds.width))
        h = _fmt(projection.length(bounds.height))
        lines.append(f'    <rect class="board" x="0" y="0" width="{w}" height="{h}" fill={quoteattr(background)}/>')

    for layer in get_drawable_layers(layers, visibility):
        color = quoteattr(layer.color)
        lines.append(f"    <g data-layer={quoteattr(layer.name)} data-role={quoteattr(layer.role)}>")
        lines.append(f"      <title>{escape(layer.name)}</title>")
        for prim in project_commands(layer.parsed, projection):  # type: ignore[arg-type]
            if isinstance(prim, LineSegment):
                width = _fmt(prim.width) if prim.width else "0.5"
                lines.append(
                    f'      <line x1="{_fmt(prim.x1)}" y1="{_fmt(prim.y1)}" '
                    f'x2="{_fmt(prim.x2)}" y2="{_fmt(prim.y2)}" '
                    f'stroke={color} stroke-width="{width}" stroke-linecap="round"/>'
                )
            else:
                r = _fmt(prim.size / 2.0) if prim.size else "1"
                lines.append(
                    f'      <circle cx="{_fmt(prim.x)}" cy="{_fmt(prim.y)}" r="{r}" fill={color}/>'
                )
        lines.append("    </g>")

    lines.append("  </g>")
    lines.append("</svg>")
    return "\n".join(lines)
