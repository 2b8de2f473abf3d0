# gerber_preview/geometry/gerber_parser.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Tuple, Union
import logging
import re

from .primitives import Bounds, Point2D

log = logging.getLogger("gerber_preview.geometry.parser")

# Integer coordinate units per mm. Format statements (%FS / %MO) are not read.
DEFAULT_COORDINATE_DIVISOR = 10000

ApertureShape = Literal["circle", "rectangle", "obround"]

_SHAPE_CODES: Dict[str, ApertureShape] = {
    "C": "circle",
    "R": "rectangle",
    "O": "obround",
}

_APERTURE_RE = re.compile(
    r"^%ADD(\d{1,9})([CRO]),([0-9]*\.?[0-9]+)(?:X([0-9]*\.?[0-9]+))?.*%$",
    re.IGNORECASE,
)
# Digit runs are capped so oversized numbers fall through as skipped lines.
_TOOL_SELECT_RE = re.compile(r"^(?:G54)?D(\d{1,9})\*$", re.IGNORECASE)
_COORD_RE = re.compile(
    r"^(?:G0?1)?X([+-]?\d{1,12})Y([+-]?\d{1,12})D0*([123])\*$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ApertureDefinition:
    """
    A named tool shape from an %ADD line.

    Circles carry their diameter in both width and height.
    """
    id: str
    shape: ApertureShape
    width: float
    height: float

    @property
    def diameter(self) -> float:
        return self.width

    @property
    def stroke_width(self) -> float:
        return min(self.width, self.height)


@dataclass(frozen=True)
class Move:
    x: float
    y: float
    kind: Literal["move"] = "move"


@dataclass(frozen=True)
class Draw:
    x: float
    y: float
    x2: float
    y2: float
    aperture: Optional[str] = None
    kind: Literal["draw"] = "draw"


@dataclass(frozen=True)
class Flash:
    x: float
    y: float
    aperture: Optional[str] = None
    kind: Literal["flash"] = "flash"


@dataclass(frozen=True)
class Arc:
    """Circular interpolation. Recognised as a command kind, never rendered."""
    x: float
    y: float
    x2: float
    y2: float
    i: float = 0.0
    j: float = 0.0
    aperture: Optional[str] = None
    kind: Literal["arc"] = "arc"


@dataclass(frozen=True)
class Region:
    """Filled contour. Recognised as a command kind, never rendered."""
    points: Tuple[Point2D, ...] = ()
    kind: Literal["region"] = "region"


GerberCommand = Union[Move, Draw, Flash, Arc, Region]


@dataclass
class ParsedGerberData:
    """
    Geometry recovered from one Gerber file.

    Owned by exactly one LayerInfo. bounds is always populated.
    """
    commands: List[GerberCommand] = field(default_factory=list)
    apertures: Dict[str, ApertureDefinition] = field(default_factory=dict)
    bounds: Bounds = field(default_factory=Bounds.default)

    def draws(self) -> List[Draw]:
        return [c for c in self.commands if isinstance(c, Draw)]

    def flashes(self) -> List[Flash]:
        return [c for c in self.commands if isinstance(c, Flash)]


@dataclass
class _ParseState:
    """Cursor, current aperture and running extent for a single parse."""
    divisor: float
    current_aperture: Optional[str] = None
    cursor: Point2D = Point2D(0.0, 0.0)
    bounds: Optional[Bounds] = None
    commands: List[GerberCommand] = field(default_factory=list)
    apertures: Dict[str, ApertureDefinition] = field(default_factory=dict)
    skipped: int = 0

    def observe(self, pt: Point2D) -> None:
        self.cursor = pt
        if self.bounds is None:
            self.bounds = Bounds(pt.x, pt.x, pt.y, pt.y)
        else:
            self.bounds.expand_to_include(pt)


def parse_gerber(content: str, divisor: float = DEFAULT_COORDINATE_DIVISOR) -> ParsedGerberData:
    """
    Parse the supported RS-274X subset of one file.

    Recognised lines:
    - %ADD<id><C|R|O>,<w>[X<h>]...%  aperture definitions
    - [G54]D<id>*                     tool select, only for ids >= 10
    - [G01]X<int>Y<int>D<op>*         D01 draw, D02 move, D03 flash

    Everything else (arcs, regions, macros, G-code mode switches) is
    skipped without contributing geometry. Never raises.
    """
    state = _ParseState(divisor=float(divisor) if divisor else float(DEFAULT_COORDINATE_DIVISOR))

    for raw_line in (content or "").splitlines():
        line = raw_line.strip()
        if not line:
            continue
        if _parse_aperture(line, state):
            continue
        if _parse_tool_select(line, state):
            continue
        if _parse_coordinate(line, state):
            continue
        state.skipped += 1

    log.debug(
        "parsed %d commands, %d apertures, skipped %d lines",
        len(state.commands),
        len(state.apertures),
        state.skipped,
    )

    return ParsedGerberData(
        commands=state.commands,
        apertures=state.apertures,
        bounds=state.bounds if state.bounds is not None else Bounds.default(),
    )


def _parse_aperture(line: str, state: _ParseState) -> bool:
    m = _APERTURE_RE.match(line)
    if not m:
        return False

    ap_id = f"D{int(m.group(1))}"
    shape = _SHAPE_CODES[m.group(2).upper()]
    width = float(m.group(3))
    if shape == "circle" or m.group(4) is None:
        height = width
    else:
        height = float(m.group(4))

    state.apertures[ap_id] = ApertureDefinition(id=ap_id, shape=shape, width=width, height=height)
    return True


def _parse_tool_select(line: str, state: _ParseState) -> bool:
    m = _TOOL_SELECT_RE.match(line)
    if not m:
        return False

    code = int(m.group(1))
    # D01..D09 are operation codes, not tools
    if code >= 10:
        state.current_aperture = f"D{code}"
    return True


def _parse_coordinate(line: str, state: _ParseState) -> bool:
    m = _COORD_RE.match(line)
    if not m:
        return False

    pt = Point2D(
        x=int(m.group(1)) / state.divisor,
        y=int(m.group(2)) / state.divisor,
    )
    op = m.group(3)

    if op == "1":
        start = state.cursor
        state.commands.append(
            Draw(x=start.x, y=start.y, x2=pt.x, y2=pt.y, aperture=state.current_aperture)
        )
    elif op == "2":
        state.commands.append(Move(x=pt.x, y=pt.y))
    else:
        state.commands.append(Flash(x=pt.x, y=pt.y, aperture=state.current_aperture))

    state.observe(pt)
    return True
