"""Support point dataclass (outrigger pad or track contact)."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .units import Dimension, Quantity


@dataclass(frozen=True)
class SupportPoint:
    """A ground contact point in crane-local coordinates."""

    name: str
    x: float  # lateral, right positive (ft)
    y: float  # vertical, up positive (ft)
    z: float  # longitudinal, front positive (ft)
    contact_area_sq_in: float  # pad or mat area (in²)

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])

    @property
    def contact_area(self) -> Quantity:
        return Quantity(self.contact_area_sq_in, Dimension.AREA)
