"""Ground bearing pressure analysis for crane stability.

Coordinate system (crane-local, right-handed, origin at ground level under
the crane centreline):

    X  lateral       left (-) / right (+)
    Y  vertical      down (-) / up (+)
    Z  longitudinal  rear (-) / front (+)

Internally all positions are feet, weights pounds, areas square inches and
pressures psi.  Public methods accept ``Quantity`` values and convert at the
boundary; plain numbers are taken to be in those internal units already.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from .errors import (
    ExceedsAllowable,
    InsufficientSupports,
    InvalidConfiguration,
    UnstableConfiguration,
)
from .results import GroundBearingResult, SupportReaction
from .statics import center_of_gravity
from .support import SupportPoint
from .units import Dimension, Quantity, Scalar, to_canonical

_LOG = logging.getLogger(__name__)

MIN_SUPPORTS = 3

Position = Sequence[Scalar]


def _point(p: Position, what: str) -> np.ndarray:
    if len(p) != 3:
        raise InvalidConfiguration(f"{what} must have x, y and z components")
    return np.array([to_canonical(c, Dimension.LENGTH) for c in p], dtype=float)


class GroundBearingAnalysis:
    """Support reactions and ground pressures for a crane holding a load.

    Usage:
        a = GroundBearingAnalysis(mass(100_000), (0, 8, 0), mass(50_000), (0, 60, 0))
        pad = area(4, "ft^2")
        a.add_support("Front-Left", -10, 0, 10, pad)
        a.add_support("Front-Right", 10, 0, 10, pad)
        a.add_support("Rear-Left", -10, 0, -10, pad)
        a.add_support("Rear-Right", 10, 0, -10, pad)
        result = a.calculate_reactions()
        result.print_reactions()

    One instance models one lift; build a new one for a different
    configuration.
    """

    def __init__(
        self,
        crane_weight: Scalar,
        crane_cog: Position,
        load_weight: Scalar,
        load_position: Position,
    ) -> None:
        self._crane_weight = to_canonical(crane_weight, Dimension.MASS)
        self._load_weight = to_canonical(load_weight, Dimension.MASS)
        if self._crane_weight < 0 or self._load_weight < 0:
            raise InvalidConfiguration("crane and load weights must be >= 0")

        self._crane_cog = _point(crane_cog, "crane COG")
        self._load_position = _point(load_position, "load position")
        self._supports: list[SupportPoint] = []

    # ── Inputs ───────────────────────────────────────────────────────

    def add_support(
        self,
        name: str,
        x: Scalar,
        y: Scalar,
        z: Scalar,
        contact_area: Scalar,
    ) -> SupportPoint:
        """Register an outrigger pad or track contact and return it."""
        area_sq_in = to_canonical(contact_area, Dimension.AREA)
        if area_sq_in <= 0:
            raise InvalidConfiguration(f"support {name!r} contact area must be > 0")
        sup = SupportPoint(
            name=name,
            x=to_canonical(x, Dimension.LENGTH),
            y=to_canonical(y, Dimension.LENGTH),
            z=to_canonical(z, Dimension.LENGTH),
            contact_area_sq_in=area_sq_in,
        )
        self._supports.append(sup)
        return sup

    @property
    def supports(self) -> tuple[SupportPoint, ...]:
        return tuple(self._supports)

    @property
    def crane_weight(self) -> Quantity:
        return Quantity(self._crane_weight, Dimension.MASS)

    @property
    def load_weight(self) -> Quantity:
        return Quantity(self._load_weight, Dimension.MASS)

    @property
    def total_weight_lb(self) -> float:
        return self._crane_weight + self._load_weight

    @property
    def crane_cog(self) -> tuple[float, float, float]:
        return tuple(float(c) for c in self._crane_cog)

    @property
    def load_position(self) -> tuple[float, float, float]:
        return tuple(float(c) for c in self._load_position)

    @property
    def combined_cog(self) -> tuple[float, float, float]:
        """Centre of gravity of crane plus load (ft)."""
        cog = center_of_gravity(
            [
                (self._crane_weight, self._crane_cog),
                (self._load_weight, self._load_position),
            ]
        )
        return tuple(float(c) for c in cog)

    def resized(self, contact_area: Scalar) -> GroundBearingAnalysis:
        """Copy of this analysis with every support given ``contact_area``."""
        other = GroundBearingAnalysis(
            self._crane_weight, self._crane_cog, self._load_weight, self._load_position
        )
        for s in self._supports:
            other.add_support(s.name, s.x, s.y, s.z, contact_area)
        return other

    # ── Analysis ─────────────────────────────────────────────────────

    def calculate_reactions(self) -> GroundBearingResult:
        """Solve the support reactions.

        Exactly four supports use the closed-form rectangular-pattern
        solution.  Any other count of three or more falls back to the
        conservative placeholder in ``_conservative_reactions``.
        """
        n = len(self._supports)
        if n < MIN_SUPPORTS:
            raise InsufficientSupports(n, MIN_SUPPORTS)
        if self.total_weight_lb <= 0:
            raise InvalidConfiguration("total weight (crane + load) must be > 0")

        if n == 4:
            return self._four_point_reactions()
        return self._conservative_reactions()

    def _four_point_reactions(self) -> GroundBearingResult:
        total = self.total_weight_lb
        cog = self.combined_cog
        _LOG.debug("four-point solve: total=%.1f lb, combined COG=%s", total, cog)

        reactions_lb = self._reactions_from_moments(cog, total)

        out: list[SupportReaction] = []
        max_reaction = 0.0
        max_pressure = 0.0
        critical = 0
        for i, (sup, r) in enumerate(zip(self._supports, reactions_lb)):
            p = r / sup.contact_area_sq_in
            if r > max_reaction:
                max_reaction = r
                max_pressure = p
                critical = i
            out.append(
                SupportReaction(
                    name=sup.name,
                    force_lbf=r,
                    pressure_psi=p,
                    contact_area_sq_in=sup.contact_area_sq_in,
                )
            )

        return GroundBearingResult(
            reactions=out,
            max_reaction_lbf=max_reaction,
            max_pressure_psi=max_pressure,
            critical_support_index=critical,
            method="four_point",
            total_load_lb=total,
            combined_cog=cog,
        )

    def _reactions_from_moments(
        self, cog: tuple[float, float, float], total: float
    ) -> list[float]:
        xs = [s.x for s in self._supports]
        zs = [s.z for s in self._supports]

        avg_x = sum(xs) / 4.0
        avg_z = sum(zs) / 4.0
        dx = cog[0] - avg_x
        dz = cog[2] - avg_z

        x_span = max(xs) - min(xs)
        z_span = max(zs) - min(zs)
        if x_span == 0.0 or z_span == 0.0:
            raise InvalidConfiguration(
                f"degenerate support layout (x span {x_span:.3f} ft, "
                f"z span {z_span:.3f} ft)"
            )

        base = total / 4.0
        x_shift = (dx / x_span) * total / 2.0
        z_shift = (dz / z_span) * total / 2.0

        reactions: list[float] = []
        for sup in self._supports:
            r = base
            r += x_shift if sup.x > avg_x else -x_shift
            r += z_shift if sup.z > avg_z else -z_shift
            if r < 0.0:
                _LOG.warning(
                    "unstable configuration: support %s needs %.0f lbf (uplift)",
                    sup.name,
                    r,
                )
                raise UnstableConfiguration(sup.name, r)
            reactions.append(r)
        return reactions

    def _conservative_reactions(self) -> GroundBearingResult:
        """Whole weight on the support nearest the hook, all others unloaded.

        This is a deliberately pessimistic bound, not an equilibrium solve.
        It over-predicts the critical reaction for any real layout and says
        nothing about tipping.  A proper N-point solution needs a redundant
        support formulation (e.g. least-squares reactions subject to force and
        moment equilibrium).
        """
        total = self.total_weight_lb
        distances = [
            float(np.linalg.norm(s.position - self._load_position))
            for s in self._supports
        ]
        critical = int(np.argmin(distances))
        _LOG.debug(
            "conservative solve over %d supports: critical=%s",
            len(self._supports),
            self._supports[critical].name,
        )

        out: list[SupportReaction] = []
        for i, sup in enumerate(self._supports):
            r = total if i == critical else 0.0
            out.append(
                SupportReaction(
                    name=sup.name,
                    force_lbf=r,
                    pressure_psi=r / sup.contact_area_sq_in,
                    contact_area_sq_in=sup.contact_area_sq_in,
                )
            )

        return GroundBearingResult(
            reactions=out,
            max_reaction_lbf=total,
            max_pressure_psi=total / self._supports[critical].contact_area_sq_in,
            critical_support_index=critical,
            method="conservative",
            total_load_lb=total,
            combined_cog=self.combined_cog,
        )

    # ── Soil checks ──────────────────────────────────────────────────

    def validate_soil_capacity(self, allowable_pressure: Scalar) -> GroundBearingResult:
        """Raise ``ExceedsAllowable`` if peak pressure is above ``allowable_pressure``.

        No safety factor is applied here; derate the allowable beforehand or
        use ``required_mat_area``.
        """
        allowable = to_canonical(allowable_pressure, Dimension.PRESSURE)
        result = self.calculate_reactions()
        if not result.within_allowable(allowable):
            raise ExceedsAllowable(result.max_pressure_psi, allowable)
        return result

    def required_mat_area(
        self, allowable_pressure: Scalar, safety_factor: float = 1.0
    ) -> Quantity:
        """Contact area keeping the peak reaction at or under allowable / safety_factor."""
        return self.calculate_reactions().required_contact_area(allowable_pressure, safety_factor)

    def __repr__(self) -> str:
        return (
            f"GroundBearingAnalysis(crane={self._crane_weight:.0f} lb, "
            f"load={self._load_weight:.0f} lb, supports={len(self._supports)})"
        )
