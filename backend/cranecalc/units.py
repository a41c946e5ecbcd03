"""Unit-safe quantity layer.

Every number that crosses an API boundary carries a physical dimension.
Internally each dimension has one fixed unit, so the solvers only ever see
feet, pounds, pounds-force, psi, square inches and radians:

    LENGTH   ft        MASS     lb        FORCE    lbf
    PRESSURE psi       AREA     in²       ANGLE    rad
    VELOCITY ft/s      TORQUE   ft·lb

Unit strings are resolved through one registry built at import time, keyed by
the normalised (lower-cased, whitespace-collapsed) spelling.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .errors import DimensionError, UnitError


class Dimension(Enum):
    LENGTH = "length"
    MASS = "mass"
    FORCE = "force"
    PRESSURE = "pressure"
    ANGLE = "angle"
    AREA = "area"
    VELOCITY = "velocity"
    TORQUE = "torque"


CANONICAL_UNITS: dict[Dimension, str] = {
    Dimension.LENGTH: "ft",
    Dimension.MASS: "lb",
    Dimension.FORCE: "lbf",
    Dimension.PRESSURE: "psi",
    Dimension.ANGLE: "rad",
    Dimension.AREA: "in^2",
    Dimension.VELOCITY: "ft/s",
    Dimension.TORQUE: "ft-lb",
}

# ── Exact conversion constants ───────────────────────────────────
FT_PER_M = 1.0 / 0.3048
LB_PER_KG = 1.0 / 0.45359237
LBF_PER_N = 1.0 / 4.4482216152605
PSI_PER_PA = 1.0 / 6894.757293168
SQ_IN_PER_SQ_FT = 144.0
SQ_IN_PER_SQ_M = 1.0 / 0.00064516
FT_LB_PER_N_M = 1.0 / 1.3558179483314


@dataclass(frozen=True)
class UnitDef:
    """One registered unit: its dimension and factor to the canonical unit."""

    name: str
    dimension: Dimension
    factor: float


_REGISTRY: dict[str, UnitDef] = {}


def normalize_unit(name: str) -> str:
    return " ".join(name.strip().lower().split())


def _register(dimension: Dimension, factor: float, *names: str) -> None:
    for name in names:
        key = normalize_unit(name)
        _REGISTRY[key] = UnitDef(name=names[0], dimension=dimension, factor=factor)


_register(Dimension.LENGTH, 1.0, "ft", "foot", "feet")
_register(Dimension.LENGTH, 1.0 / 12.0, "in", "inch", "inches")
_register(Dimension.LENGTH, FT_PER_M, "m", "meter", "meters", "metre", "metres")
_register(
    Dimension.LENGTH, FT_PER_M / 100.0,
    "cm", "centimeter", "centimeters", "centimetre", "centimetres",
)
_register(
    Dimension.LENGTH, FT_PER_M / 1000.0,
    "mm", "millimeter", "millimeters", "millimetre", "millimetres",
)
_register(Dimension.LENGTH, 3.0, "yd", "yard", "yards")

_register(Dimension.MASS, 1.0, "lb", "lbs", "pound", "pounds")
_register(Dimension.MASS, LB_PER_KG, "kg", "kgs", "kilogram", "kilograms")
_register(Dimension.MASS, LB_PER_KG / 1000.0, "g", "gram", "grams")
_register(Dimension.MASS, 2000.0, "short ton", "short tons", "ton", "tons")
_register(
    Dimension.MASS, 1000.0 * LB_PER_KG,
    "metric ton", "metric tons", "t", "tonne", "tonnes",
)
_register(Dimension.MASS, 2240.0, "long ton", "long tons")

_register(Dimension.FORCE, 1.0, "lbf", "pound force", "pounds force")
_register(Dimension.FORCE, LBF_PER_N, "n", "newton", "newtons")
_register(Dimension.FORCE, 1000.0 * LBF_PER_N, "kn", "kilonewton", "kilonewtons")
_register(Dimension.FORCE, 1000.0, "kip", "kips")

_register(
    Dimension.PRESSURE, 1.0,
    "psi", "lbf/in^2", "lbf/in²", "lb/in^2", "lb/in²",
    "pound per square inch", "pounds per square inch",
)
_register(
    Dimension.PRESSURE, PSI_PER_PA,
    "pa", "pascal", "pascals", "n/m^2", "n/m²",
)
_register(
    Dimension.PRESSURE, 1000.0 * PSI_PER_PA,
    "kpa", "kpas", "kilopascal", "kilopascals",
)
_register(Dimension.PRESSURE, 1.0e6 * PSI_PER_PA, "mpa", "megapascal", "megapascals")
_register(Dimension.PRESSURE, 1.0e5 * PSI_PER_PA, "bar")
_register(Dimension.PRESSURE, 1.0 / SQ_IN_PER_SQ_FT, "psf", "lb/ft^2", "lbf/ft^2")
_register(Dimension.PRESSURE, 1000.0 / SQ_IN_PER_SQ_FT, "ksf")

_register(Dimension.ANGLE, 1.0, "rad", "rads", "radian", "radians")
_register(Dimension.ANGLE, math.pi / 180.0, "deg", "degree", "degrees", "°")

_register(Dimension.AREA, 1.0, "in^2", "in²", "sq in", "square inch", "square inches")
_register(
    Dimension.AREA, SQ_IN_PER_SQ_FT,
    "ft^2", "ft²", "sq ft", "square foot", "square feet",
)
_register(Dimension.AREA, SQ_IN_PER_SQ_M, "m^2", "m²", "sq m", "square meter", "square metre")
_register(Dimension.AREA, SQ_IN_PER_SQ_M / 1.0e4, "cm^2", "cm²")
_register(Dimension.AREA, SQ_IN_PER_SQ_M / 1.0e6, "mm^2", "mm²")

_register(Dimension.VELOCITY, 1.0, "ft/s", "fps")
_register(Dimension.VELOCITY, 1.0 / 60.0, "ft/min", "fpm")
_register(Dimension.VELOCITY, FT_PER_M, "m/s")
_register(Dimension.VELOCITY, 5280.0 / 3600.0, "mph")
_register(Dimension.VELOCITY, 1000.0 * FT_PER_M / 3600.0, "km/h", "kph")
_register(Dimension.VELOCITY, 1852.0 * FT_PER_M / 3600.0, "knot", "knots", "kn/h")

_register(Dimension.TORQUE, 1.0, "ft-lb", "ft·lb", "ft lb", "lb-ft", "ft-lbf", "lbf-ft")
_register(Dimension.TORQUE, FT_LB_PER_N_M, "n·m", "n-m", "nm", "n m")
_register(Dimension.TORQUE, 1000.0 * FT_LB_PER_N_M, "kn·m", "kn-m", "knm")


def lookup_unit(name: str, dimension: Dimension | None = None) -> UnitDef:
    """Resolve a unit string, optionally requiring a particular dimension."""
    unit = _REGISTRY.get(normalize_unit(name))
    if unit is None:
        expected = f" {dimension.value}" if dimension is not None else ""
        raise UnitError(name, f"Unknown{expected} unit: {name!r}")
    if dimension is not None and unit.dimension is not dimension:
        raise DimensionError(dimension.value, unit.dimension.value, unit=name)
    return unit


def known_units(dimension: Dimension | None = None) -> list[str]:
    return sorted(
        key for key, u in _REGISTRY.items()
        if dimension is None or u.dimension is dimension
    )


# ── Quantity ─────────────────────────────────────────────────────

_PRODUCTS: dict[tuple[Dimension, Dimension], tuple[Dimension, float]] = {
    (Dimension.LENGTH, Dimension.LENGTH): (Dimension.AREA, SQ_IN_PER_SQ_FT),
    (Dimension.FORCE, Dimension.LENGTH): (Dimension.TORQUE, 1.0),
    (Dimension.LENGTH, Dimension.FORCE): (Dimension.TORQUE, 1.0),
    (Dimension.PRESSURE, Dimension.AREA): (Dimension.FORCE, 1.0),
    (Dimension.AREA, Dimension.PRESSURE): (Dimension.FORCE, 1.0),
}

_QUOTIENTS: dict[tuple[Dimension, Dimension], tuple[Dimension, float]] = {
    (Dimension.FORCE, Dimension.AREA): (Dimension.PRESSURE, 1.0),
    (Dimension.FORCE, Dimension.PRESSURE): (Dimension.AREA, 1.0),
    (Dimension.TORQUE, Dimension.LENGTH): (Dimension.FORCE, 1.0),
    (Dimension.TORQUE, Dimension.FORCE): (Dimension.LENGTH, 1.0),
    (Dimension.AREA, Dimension.LENGTH): (Dimension.LENGTH, 1.0 / SQ_IN_PER_SQ_FT),
}


@dataclass(frozen=True, eq=False)
class Quantity:
    """A scalar tagged with a dimension, stored in the canonical unit."""

    value: float
    dimension: Dimension

    @classmethod
    def of(cls, value: float, unit: str, dimension: Dimension | None = None) -> Quantity:
        u = lookup_unit(unit, dimension)
        return cls(float(value) * u.factor, u.dimension)

    def to(self, unit: str) -> float:
        u = lookup_unit(unit, self.dimension)
        return self.value / u.factor

    @property
    def unit(self) -> str:
        return CANONICAL_UNITS[self.dimension]

    def _check(self, other: object) -> Quantity:
        if not isinstance(other, Quantity):
            raise TypeError(f"Expected a Quantity, got {type(other).__name__}")
        if other.dimension is not self.dimension:
            raise DimensionError(self.dimension.value, other.dimension.value)
        return other

    def __add__(self, other: Quantity) -> Quantity:
        return Quantity(self.value + self._check(other).value, self.dimension)

    def __sub__(self, other: Quantity) -> Quantity:
        return Quantity(self.value - self._check(other).value, self.dimension)

    def __neg__(self) -> Quantity:
        return Quantity(-self.value, self.dimension)

    def __abs__(self) -> Quantity:
        return Quantity(abs(self.value), self.dimension)

    def __mul__(self, other: Union[float, Quantity]) -> Quantity:
        if isinstance(other, Quantity):
            key = (self.dimension, other.dimension)
            if key not in _PRODUCTS:
                raise DimensionError(
                    "a supported product", f"{key[0].value} × {key[1].value}"
                )
            dim, factor = _PRODUCTS[key]
            return Quantity(self.value * other.value * factor, dim)
        return Quantity(self.value * float(other), self.dimension)

    __rmul__ = __mul__

    def __truediv__(self, other: Union[float, Quantity]) -> Union[float, Quantity]:
        if isinstance(other, Quantity):
            if other.dimension is self.dimension:
                return self.value / other.value
            key = (self.dimension, other.dimension)
            if key not in _QUOTIENTS:
                raise DimensionError(
                    "a supported quotient", f"{key[0].value} / {key[1].value}"
                )
            dim, factor = _QUOTIENTS[key]
            return Quantity(self.value / other.value * factor, dim)
        return Quantity(self.value / float(other), self.dimension)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.dimension is other.dimension and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.value, self.dimension))

    def __lt__(self, other: Quantity) -> bool:
        return self.value < self._check(other).value

    def __le__(self, other: Quantity) -> bool:
        return self.value <= self._check(other).value

    def __gt__(self, other: Quantity) -> bool:
        return self.value > self._check(other).value

    def __ge__(self, other: Quantity) -> bool:
        return self.value >= self._check(other).value

    def __repr__(self) -> str:
        return f"Quantity({self.value!r} {self.unit})"


Scalar = Union[float, int, Quantity]


def to_canonical(x: Scalar, dimension: Dimension) -> float:
    """Canonical value of ``x``; plain numbers are taken as canonical already."""
    if isinstance(x, Quantity):
        if x.dimension is not dimension:
            raise DimensionError(dimension.value, x.dimension.value)
        return x.value
    return float(x)


def length(value: float, unit: str = "ft") -> Quantity:
    return Quantity.of(value, unit, Dimension.LENGTH)


def mass(value: float, unit: str = "lb") -> Quantity:
    return Quantity.of(value, unit, Dimension.MASS)


def force(value: float, unit: str = "lbf") -> Quantity:
    return Quantity.of(value, unit, Dimension.FORCE)


def pressure(value: float, unit: str = "psi") -> Quantity:
    return Quantity.of(value, unit, Dimension.PRESSURE)


def area(value: float, unit: str = "in^2") -> Quantity:
    return Quantity.of(value, unit, Dimension.AREA)


def angle(value: float, unit: str = "rad") -> Quantity:
    return Quantity.of(value, unit, Dimension.ANGLE)


def torque(value: float, unit: str = "ft-lb") -> Quantity:
    return Quantity.of(value, unit, Dimension.TORQUE)


def weight_force(weight: Scalar) -> Quantity:
    """Gravity force of a mass under standard gravity (1 lb → 1 lbf)."""
    return Quantity(to_canonical(weight, Dimension.MASS), Dimension.FORCE)


# ── Persisted value + unit pairs ─────────────────────────────────


@dataclass
class UnitValue:
    """A raw number with the unit string it was authored in."""

    value: float
    unit: str

    def to_quantity(self, dimension: Dimension) -> Quantity:
        return Quantity.of(self.value, self.unit, dimension)

    def to_length(self) -> Quantity:
        return self.to_quantity(Dimension.LENGTH)

    def to_mass(self) -> Quantity:
        return self.to_quantity(Dimension.MASS)

    def to_angle(self) -> Quantity:
        return self.to_quantity(Dimension.ANGLE)

    def to_pressure(self) -> Quantity:
        return self.to_quantity(Dimension.PRESSURE)

    @classmethod
    def from_quantity(cls, quantity: Quantity, unit: str) -> UnitValue:
        return cls(value=quantity.to(unit), unit=unit)

    def to_dict(self) -> dict[str, float | str]:
        return {"value": self.value, "unit": self.unit}


# ── Display helpers ──────────────────────────────────────────────


def fmt_length(q: Quantity) -> str:
    return f"{q.to('ft'):.2f} ft ({q.to('m'):.2f} m)"


def fmt_mass(q: Quantity) -> str:
    return f"{q.to('lb'):.0f} lbs ({q.to('kg'):.0f} kg)"


def fmt_force(q: Quantity) -> str:
    return f"{q.to('lbf'):.0f} lbf ({q.to('kN'):.2f} kN)"


def fmt_pressure(q: Quantity) -> str:
    return f"{q.to('psi'):.1f} psi ({q.to('kPa'):.1f} kPa)"
