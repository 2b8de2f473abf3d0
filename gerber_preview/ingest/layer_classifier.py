# gerber_preview/ingest/layer_classifier.py

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Callable, Dict, List, Literal, Optional, Tuple
import re


LayerRole = Literal[
    "Top Copper",
    "Bottom Copper",
    "Top Solder Mask",
    "Bottom Solder Mask",
    "Top Silkscreen",
    "Bottom Silkscreen",
    "Drill",
    "Board Outline",
    "Solder Paste",
    "Inner Layer",
    "Unknown",
]
ColorSource = Literal["fixed", "solder_mask"]

COPPER_ROLES: Tuple[LayerRole, ...] = ("Top Copper", "Bottom Copper", "Inner Layer")

SOLDER_MASK_COLORS: Dict[str, str] = {
    "Green": "#1a5f1a",
    "Black": "#1a1a1a",
    "White": "#e5e5e5",
    "Blue": "#1a3d5c",
    "Red": "#8b1a1a",
    "Yellow": "#b5a020",
    "Matte Black": "#0d0d0d",
    "Matte Green": "#145214",
    "Purple": "#4a1a6b",
}
DEFAULT_SOLDER_MASK_COLOR = "#1a5f1a"

ROLE_COLORS: Dict[LayerRole, str] = {
    "Top Copper": "#ff6b6b",
    "Bottom Copper": "#4dabf7",
    "Top Silkscreen": "#ffffff",
    "Bottom Silkscreen": "#f1f3f5",
    "Drill": "#ffd43b",
    "Board Outline": "#20c997",
    "Solder Paste": "#adb5bd",
    "Inner Layer": "#e599f7",
    "Unknown": "#888888",
}

# Tokens that mean "this is not a copper image" even when a side token matches.
_NON_COPPER_TOKENS = (
    "mask", "silk", "paste", "overlay", "legend", "solder",
    "drill", "drl", "outline", "edge", "courtyard", "fab",
)
# Side words must start a word so "robot" or "desktop" do not pick a side.
_TOP_RE = re.compile(r"(?<![a-z])(?:top|front)")
_BOTTOM_RE = re.compile(r"(?<![a-z])(?:bottom|bot|back)")
_FCU_RE = re.compile(r"(?<![a-z0-9])f[._-]?cu(?![a-z])")
_BCU_RE = re.compile(r"(?<![a-z0-9])b[._-]?cu(?![a-z])")

MAX_INNER_LAYERS = 32

TOP_COPPER_EXTENSIONS = (".gtl", ".cmp")
BOTTOM_COPPER_EXTENSIONS = (".gbl", ".sol")
TOP_MASK_EXTENSIONS = (".gts", ".stc")
BOTTOM_MASK_EXTENSIONS = (".gbs", ".sts")
TOP_SILK_EXTENSIONS = (".gto", ".plc")
BOTTOM_SILK_EXTENSIONS = (".gbo", ".pls")
DRILL_EXTENSIONS = (".drl", ".xln", ".exc", ".drd", ".tap")
OUTLINE_EXTENSIONS = (".gko", ".gm1", ".gml", ".gm")
PASTE_EXTENSIONS = (".gtp", ".gbp", ".crc", ".crs")
INNER_EXTENSIONS = tuple(
    f".{prefix}{n}" for prefix in ("g", "gp") for n in range(1, MAX_INNER_LAYERS + 1)
)

# Every extension a rule recognises on its own, in rule order.
LAYER_EXTENSIONS: Tuple[str, ...] = (
    TOP_COPPER_EXTENSIONS + BOTTOM_COPPER_EXTENSIONS
    + TOP_MASK_EXTENSIONS + BOTTOM_MASK_EXTENSIONS
    + TOP_SILK_EXTENSIONS + BOTTOM_SILK_EXTENSIONS
    + DRILL_EXTENSIONS + OUTLINE_EXTENSIONS + PASTE_EXTENSIONS
    + INNER_EXTENSIONS
)


@dataclass(frozen=True)
class FileName:
    """Pre-computed views of a file name used by the rule predicates."""
    lower: str
    norm: str
    ext: str

    @classmethod
    def of(cls, file_name: str) -> "FileName":
        lower = (file_name or "").strip().lower()
        return cls(
            lower=lower,
            norm=_norm(lower),
            ext=PurePosixPath(lower).suffix,
        )

    def has(self, *tokens: str) -> bool:
        return any(t in self.lower or t in self.norm for t in tokens)

    def ext_in(self, *exts: str) -> bool:
        return self.ext in exts


@dataclass(frozen=True)
class LayerClassification:
    role: LayerRole
    color: str


@dataclass(frozen=True)
class ClassificationRule:
    """
    One row of the classification table.

    New export-tool dialects are supported by adding rows or widening a
    predicate, never by reordering roles.
    """
    role: LayerRole
    predicate: Callable[[FileName], bool]
    color_source: ColorSource = "fixed"


def _norm(s: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", s)


def _top_side(f: FileName) -> bool:
    return bool(_TOP_RE.search(f.lower))


def _bottom_side(f: FileName) -> bool:
    return bool(_BOTTOM_RE.search(f.lower)) or bool(re.search(r"(^|[^a-z])b[._-]", f.lower))


def _not_copper(f: FileName) -> bool:
    return f.has(*_NON_COPPER_TOKENS) or _is_drill(f)


def _is_top_copper(f: FileName) -> bool:
    if f.ext_in(*TOP_COPPER_EXTENSIONS):
        return True
    if _FCU_RE.search(f.lower) or f.has("topcu", "topcopper", "coppertop", "toplayer"):
        return True
    return _top_side(f) and not _not_copper(f)


def _is_bottom_copper(f: FileName) -> bool:
    if f.ext_in(*BOTTOM_COPPER_EXTENSIONS):
        return True
    if _BCU_RE.search(f.lower) or f.has(
        "bottomcu", "botcu", "bottomcopper", "copperbottom", "bottomlayer"
    ):
        return True
    return bool(_BOTTOM_RE.search(f.lower)) and not _not_copper(f)


def _is_top_mask(f: FileName) -> bool:
    if f.ext_in(*TOP_MASK_EXTENSIONS):
        return True
    if f.has("fmask", "topmask", "masktop", "topsoldermask", "soldermasktop"):
        return True
    return f.has("mask") and not _bottom_side(f)


def _is_bottom_mask(f: FileName) -> bool:
    if f.ext_in(*BOTTOM_MASK_EXTENSIONS):
        return True
    if f.has("bmask", "bottommask", "maskbottom", "botmask", "bottomsoldermask"):
        return True
    return f.has("mask") and _bottom_side(f)


def _is_top_silk(f: FileName) -> bool:
    if f.ext_in(*TOP_SILK_EXTENSIONS):
        return True
    if f.has("fsilk", "topsilk", "silktop", "topoverlay", "toplegend"):
        return True
    return f.has("silk", "legend", "overlay") and not _bottom_side(f)


def _is_bottom_silk(f: FileName) -> bool:
    if f.ext_in(*BOTTOM_SILK_EXTENSIONS):
        return True
    if f.has("bsilk", "bottomsilk", "botsilk", "silkbottom", "bottomoverlay", "bottomlegend"):
        return True
    return f.has("silk", "legend", "overlay") and _bottom_side(f)


def _is_drill(f: FileName) -> bool:
    if f.ext_in(*DRILL_EXTENSIONS):
        return True
    return f.has("drill", "drl", "xln", "npth")


def _is_outline(f: FileName) -> bool:
    if f.ext_in(*OUTLINE_EXTENSIONS):
        return True
    return f.has("outline", "edgecuts", "edge", "profile", "boardshape")


def _is_paste(f: FileName) -> bool:
    if f.ext_in(*PASTE_EXTENSIONS):
        return True
    return f.has("paste", "stencil")


def _is_inner(f: FileName) -> bool:
    if f.ext_in(*INNER_EXTENSIONS):
        return True
    if re.search(r"in\d+cu", f.norm):
        return True
    return f.has("inner", "internal", "plane")


# Order is the classification priority; first match wins.
CLASSIFICATION_RULES: List[ClassificationRule] = [
    ClassificationRule("Top Copper", _is_top_copper),
    ClassificationRule("Bottom Copper", _is_bottom_copper),
    ClassificationRule("Top Solder Mask", _is_top_mask, "solder_mask"),
    ClassificationRule("Bottom Solder Mask", _is_bottom_mask, "solder_mask"),
    ClassificationRule("Top Silkscreen", _is_top_silk),
    ClassificationRule("Bottom Silkscreen", _is_bottom_silk),
    ClassificationRule("Drill", _is_drill),
    ClassificationRule("Board Outline", _is_outline),
    ClassificationRule("Solder Paste", _is_paste),
    ClassificationRule("Inner Layer", _is_inner),
]


def solder_mask_hex(solder_mask_color: Optional[str]) -> str:
    return SOLDER_MASK_COLORS.get(solder_mask_color or "", DEFAULT_SOLDER_MASK_COLOR)


def classify(
    file_name: str,
    solder_mask_color: str = "Green",
    rules: Optional[List[ClassificationRule]] = None,
) -> LayerClassification:
    """
    Map a CAM export file name to a canonical layer role and display color.

    Pure function of its arguments.
    """
    f = FileName.of(file_name)
    for rule in rules if rules is not None else CLASSIFICATION_RULES:
        if rule.predicate(f):
            if rule.color_source == "solder_mask":
                color = solder_mask_hex(solder_mask_color)
            else:
                color = ROLE_COLORS[rule.role]
            return LayerClassification(role=rule.role, color=color)

    return LayerClassification(role="Unknown", color=ROLE_COLORS["Unknown"])


def is_copper_role(role: str) -> bool:
    return role in COPPER_ROLES
