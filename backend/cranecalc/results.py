"""Ground bearing results container."""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import InvalidConfiguration
from .units import Dimension, Quantity, Scalar, to_canonical

# Relative slack on the soil comparison so that a pad sized exactly to the
# allowable pressure is not rejected by floating-point rounding.
PRESSURE_ROUNDING_TOLERANCE = 1e-9


@dataclass(frozen=True)
class SupportReaction:
    """Reaction at one support, produced fresh by each solve."""

    name: str
    force_lbf: float
    pressure_psi: float
    contact_area_sq_in: float

    @property
    def force(self) -> Quantity:
        return Quantity(self.force_lbf, Dimension.FORCE)

    @property
    def pressure(self) -> Quantity:
        return Quantity(self.pressure_psi, Dimension.PRESSURE)

    @property
    def contact_area(self) -> Quantity:
        return Quantity(self.contact_area_sq_in, Dimension.AREA)


@dataclass(frozen=True)
class GroundBearingResult:
    """Stores solver output: one reaction per support plus the worst case.

    ``critical_support_index`` points at the largest reaction *force*.  When
    pad areas differ, the support with the highest *pressure* can be another
    one; see ``critical_pressure_index``.
    """

    reactions: list[SupportReaction]
    max_reaction_lbf: float
    max_pressure_psi: float
    critical_support_index: int
    method: str = "four_point"  # "four_point" or "conservative"
    total_load_lb: float = 0.0
    combined_cog: tuple[float, float, float] = field(default=(0.0, 0.0, 0.0))

    @property
    def max_reaction(self) -> Quantity:
        return Quantity(self.max_reaction_lbf, Dimension.FORCE)

    @property
    def max_pressure(self) -> Quantity:
        return Quantity(self.max_pressure_psi, Dimension.PRESSURE)

    @property
    def critical_support(self) -> SupportReaction:
        return self.reactions[self.critical_support_index]

    @property
    def critical_pressure_index(self) -> int:
        """Index of the support with the highest ground pressure."""
        best = 0
        for i, r in enumerate(self.reactions):
            if r.pressure_psi > self.reactions[best].pressure_psi:
                best = i
        return best

    @property
    def total_reaction_lbf(self) -> float:
        return sum(r.force_lbf for r in self.reactions)

    def margin(self, allowable_pressure: Scalar) -> Quantity:
        """Allowable minus peak pressure; negative means overstressed."""
        allowable = to_canonical(allowable_pressure, Dimension.PRESSURE)
        return Quantity(allowable - self.max_pressure_psi, Dimension.PRESSURE)

    def within_allowable(self, allowable_pressure: Scalar) -> bool:
        """True when peak pressure is at or under ``allowable_pressure``."""
        allowable = to_canonical(allowable_pressure, Dimension.PRESSURE)
        return self.max_pressure_psi <= allowable * (1.0 + PRESSURE_ROUNDING_TOLERANCE)

    def required_contact_area(
        self, allowable_pressure: Scalar, safety_factor: float = 1.0
    ) -> Quantity:
        """Pad area that brings the peak reaction down to allowable / safety_factor."""
        if safety_factor <= 0:
            raise InvalidConfiguration("safety factor must be > 0")
        allowable = to_canonical(allowable_pressure, Dimension.PRESSURE)
        if allowable <= 0:
            raise InvalidConfiguration("allowable pressure must be > 0")
        return Quantity(self.max_reaction_lbf / (allowable / safety_factor), Dimension.AREA)

    def summary(self) -> str:
        lines = ["Ground Bearing Analysis:", ""]
        lines.append(f"Critical Support: {self.critical_support.name}")
        lines.append(f" Max Reaction: {self.max_reaction_lbf:.0f} lbs")
        lines.append(f" Max Pressure: {self.max_pressure_psi:.1f} PSI")
        if self.method == "conservative":
            lines.append(" (conservative: whole load on the support nearest the hook)")
        lines.append("")
        lines.append("All Supports:")
        for r in self.reactions:
            lines.append(
                f" {r.name}: {r.force_lbf:.0f} lbs "
                f"({r.pressure_psi:.1f} PSI over {r.contact_area.to('ft^2'):.1f} sq ft)"
            )
        return "\n".join(lines) + "\n"

    def print_reactions(self) -> None:
        """Print reaction forces and pressures at each support."""
        print("\n=== Support Reactions ===")
        print(f"{'Support':<14} {'Force (lbf)':>14} {'Pressure (psi)':>16} {'Area (ft²)':>12}")
        print("-" * 60)
        for i, r in enumerate(self.reactions):
            flag = " *" if i == self.critical_support_index else ""
            print(
                f"{r.name:<14} {r.force_lbf:>14.0f} {r.pressure_psi:>16.1f}"
                f" {r.contact_area.to('ft^2'):>12.2f}{flag}"
            )
        print("-" * 60)
        print(f"{'Total':<14} {self.total_reaction_lbf:>14.0f}")
