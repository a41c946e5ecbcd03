"""Presumptive allowable bearing pressures for common ground conditions."""

from __future__ import annotations

from .errors import InvalidConfiguration
from .units import Quantity, pressure

SOFT_CLAY: Quantity = pressure(10.0, "psi")
MEDIUM_CLAY: Quantity = pressure(25.0, "psi")
STIFF_CLAY: Quantity = pressure(40.0, "psi")
LOOSE_SAND: Quantity = pressure(20.0, "psi")
DENSE_SAND: Quantity = pressure(50.0, "psi")
GRAVEL: Quantity = pressure(80.0, "psi")
SOFT_ROCK: Quantity = pressure(150.0, "psi")
HARD_ROCK: Quantity = pressure(300.0, "psi")
PAVED: Quantity = pressure(100.0, "psi")

SOIL_CAPACITIES: dict[str, Quantity] = {
    "soft_clay": SOFT_CLAY,
    "medium_clay": MEDIUM_CLAY,
    "stiff_clay": STIFF_CLAY,
    "loose_sand": LOOSE_SAND,
    "dense_sand": DENSE_SAND,
    "gravel": GRAVEL,
    "soft_rock": SOFT_ROCK,
    "hard_rock": HARD_ROCK,
    "paved": PAVED,
}


def soil_capacity(name: str) -> Quantity:
    """Look up a soil by name (e.g. ``"dense_sand"`` or ``"Dense Sand"``)."""
    key = name.strip().lower().replace(" ", "_").replace("-", "_")
    try:
        return SOIL_CAPACITIES[key]
    except KeyError:
        raise InvalidConfiguration(
            f"Unknown soil {name!r}. Known soils: {', '.join(SOIL_CAPACITIES)}"
        ) from None
