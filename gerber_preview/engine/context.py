# gerber_preview/engine/context.py

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..config import DrcLimits
from ..geometry import LayerInfo


@dataclass(frozen=True)
class DrcContext:
    """
    Inputs passed into each DRC check.

    Carries:
      - the declared board specs
      - the number of uploaded files
      - the classified layer set
      - the limits in force
    """
    declared_width: float
    declared_height: float
    declared_layers: int
    file_count: int
    layers: List[LayerInfo]
    limits: DrcLimits

    def has_role(self, role: str) -> bool:
        return any(l.role == role for l in self.layers)
