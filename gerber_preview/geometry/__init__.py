# gerber_preview/geometry/__init__.py

from .primitives import Point2D, Bounds
from .gerber_parser import (
    ApertureDefinition,
    Arc,
    Draw,
    Flash,
    GerberCommand,
    Move,
    ParsedGerberData,
    Region,
    parse_gerber,
)
from .layer_model import LayerInfo, build_layer, build_layer_set
from .queries import aggregate_bounds
from .render import (
    LineSegment,
    PointMarker,
    Projection,
    ViewTransform,
    project_layer,
    project_layers,
    render_svg,
)

__all__ = [
    "Point2D",
    "Bounds",
    "ApertureDefinition",
    "Arc",
    "Draw",
    "Flash",
    "GerberCommand",
    "Move",
    "ParsedGerberData",
    "Region",
    "parse_gerber",
    "LayerInfo",
    "build_layer",
    "build_layer_set",
    "aggregate_bounds",
    "LineSegment",
    "PointMarker",
    "Projection",
    "ViewTransform",
    "project_layer",
    "project_layers",
    "render_svg",
]
