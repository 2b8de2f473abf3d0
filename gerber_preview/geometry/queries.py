# gerber_preview/geometry/queries.py

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Sequence

from .layer_model import LayerInfo
from .primitives import Bounds


def is_visible(layer: LayerInfo, visibility: Optional[Mapping[str, bool]] = None) -> bool:
    """
    The visibility map, when it names the layer, overrides the layer's own flag.
    """
    if visibility is not None and layer.name in visibility:
        return bool(visibility[layer.name])
    return layer.visible


def get_drawable_layers(
    layers: Iterable[LayerInfo],
    visibility: Optional[Mapping[str, bool]] = None,
) -> List[LayerInfo]:
    """
    Return layers that are visible and carry parsed geometry.
    """
    return [l for l in layers if l.parsed is not None and is_visible(l, visibility)]


def aggregate_bounds(
    layers: Sequence[LayerInfo],
    visibility: Optional[Mapping[str, bool]],
    declared_width: float,
    declared_height: float,
) -> Bounds:
    """
    Combined extent of every visible, parsed layer in mm.

    Falls back to the declared board size, anchored at the origin, when no
    visible layer has geometry.
    """
    combined: Optional[Bounds] = None
    for layer in get_drawable_layers(layers, visibility):
        lb = layer.parsed.bounds  # type: ignore[union-attr]
        if combined is None:
            combined = lb.copy()
        else:
            combined.include_bounds(lb)

    if combined is None:
        return Bounds.from_size(declared_width, declared_height)
    return combined
