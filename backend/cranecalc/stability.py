"""Overturning stability about a tipping edge.

A crane tips about the line through its outermost supports on the side the
load is swung to.  Each gravity force either holds the crane down about that
line (restoring) or pulls it over (overturning); the stability factor is the
ratio of the two.

Usage:
    s = calculate_stability(mass(100_000), (0, 8, 0), mass(10_000), (50, 10, 0),
                            tipping_point=(10, 0, 0), tipping_axis=TippingEdge.RIGHT.axis)
    s.stability_factor          # 2.5
    edge_stability(analysis)    # worst of the four outrigger edges
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Sequence

from .errors import InvalidConfiguration
from .statics import ForceVector, moment_about_axis
from .units import Dimension, Quantity, Scalar, to_canonical

if TYPE_CHECKING:
    from .ground_bearing import GroundBearingAnalysis

_LOG = logging.getLogger(__name__)


class TippingEdge(Enum):
    FRONT = "Front"
    REAR = "Rear"
    LEFT = "Left"
    RIGHT = "Right"

    @property
    def axis(self) -> tuple[float, float, float]:
        """Unit vector along the edge (crane-local)."""
        if self in (TippingEdge.FRONT, TippingEdge.REAR):
            return (1.0, 0.0, 0.0)
        return (0.0, 0.0, 1.0)


@dataclass(frozen=True)
class StabilityAnalysis:
    """Moments about one tipping edge (ft-lb)."""

    overturning_moment: float
    restoring_moment: float
    stability_factor: float  # inf when nothing overturns
    tipping_edge: TippingEdge

    @property
    def is_stable(self) -> bool:
        return self.stability_factor > 1.0

    def meets(self, required_factor: float) -> bool:
        return self.stability_factor >= required_factor

    @property
    def overturning(self) -> Quantity:
        return Quantity(self.overturning_moment, Dimension.TORQUE)

    @property
    def restoring(self) -> Quantity:
        return Quantity(self.restoring_moment, Dimension.TORQUE)


def calculate_stability(
    crane_weight: Scalar,
    crane_cog: Sequence[Scalar],
    load_weight: Scalar,
    load_position: Sequence[Scalar],
    tipping_point: Sequence[Scalar],
    tipping_axis: Sequence[float],
    tipping_edge: TippingEdge = TippingEdge.FRONT,
) -> StabilityAnalysis:
    """Restoring and overturning moments of crane and load about an edge.

    The crane's own weight sets the restoring sense.  The load adds to
    whichever side of the edge it hangs over, so a load inboard of the edge
    contributes to the restoring moment.
    """
    crane_lb = to_canonical(crane_weight, Dimension.MASS)
    load_lb = to_canonical(load_weight, Dimension.MASS)
    if crane_lb < 0 or load_lb < 0:
        raise InvalidConfiguration("crane and load weights must be >= 0")
    crane = ForceVector.from_weight(crane_lb, _ft_point(crane_cog))
    load = ForceVector.from_weight(load_lb, _ft_point(load_position))
    pivot = _ft_point(tipping_point)

    crane_m = moment_about_axis(crane, pivot, tipping_axis)
    load_m = moment_about_axis(load, pivot, tipping_axis)

    # With the crane COG on the edge, positive moments count as restoring.
    sense = 1.0 if crane_m >= 0.0 else -1.0
    restoring = 0.0
    overturning = 0.0
    for m in (crane_m, load_m):
        if m * sense >= 0.0:
            restoring += abs(m)
        else:
            overturning += abs(m)

    factor = restoring / overturning if overturning > 0.0 else math.inf
    _LOG.debug(
        "stability about %s edge: restoring=%.0f overturning=%.0f factor=%.3f",
        tipping_edge.value,
        restoring,
        overturning,
        factor,
    )
    return StabilityAnalysis(overturning, restoring, factor, tipping_edge)


def _ft_point(p: Sequence[Scalar]) -> tuple[float, float, float]:
    if len(p) != 3:
        raise InvalidConfiguration(f"expected a 3D point, got {len(p)} coordinates")
    return tuple(to_canonical(c, Dimension.LENGTH) for c in p)


def edge_point(analysis: GroundBearingAnalysis, edge: TippingEdge) -> tuple[float, float, float]:
    """A point on ``edge`` of the support footprint."""
    supports = analysis.supports
    if not supports:
        raise InvalidConfiguration("no supports to tip about")
    if edge is TippingEdge.FRONT:
        return (0.0, 0.0, max(s.z for s in supports))
    if edge is TippingEdge.REAR:
        return (0.0, 0.0, min(s.z for s in supports))
    if edge is TippingEdge.LEFT:
        return (min(s.x for s in supports), 0.0, 0.0)
    return (max(s.x for s in supports), 0.0, 0.0)


def stability_about(analysis: GroundBearingAnalysis, edge: TippingEdge) -> StabilityAnalysis:
    """Stability of a ground-bearing setup about one edge of its footprint."""
    return calculate_stability(
        analysis.crane_weight,
        analysis.crane_cog,
        analysis.load_weight,
        analysis.load_position,
        edge_point(analysis, edge),
        edge.axis,
        edge,
    )


def edge_stability(analysis: GroundBearingAnalysis) -> StabilityAnalysis:
    """The least stable of the four footprint edges."""
    results = [stability_about(analysis, edge) for edge in TippingEdge]
    return min(results, key=lambda s: s.stability_factor)

