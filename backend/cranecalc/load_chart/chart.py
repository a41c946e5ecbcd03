"""Capacity lookup on a single load chart.

Queries accept ``Quantity`` lengths (or plain feet) and return capacities
as mass ``Quantity`` values.  Both sides are converted to canonical units
before comparing, so a chart authored in metres answers queries in feet.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..errors import BoomLengthNotFound, InvalidConfiguration, NoData, RadiusOutOfRange
from ..units import Dimension, Quantity, Scalar, to_canonical
from .matching import configuration_matches
from .types import CapacityData, ChartConfiguration

_LOG = logging.getLogger(__name__)

# Exact lookups read a plotted chart value; 0.01 ft is about 1/8 in.
EXACT_MATCH_TOLERANCE_FT = 0.01

# Boom lengths or radii closer than this are the same chart row or column.
INTERPOLATION_EPSILON_FT = 0.1


def _mass(lb: float) -> Quantity:
    return Quantity(lb, Dimension.MASS)


def _length(ft: float) -> Quantity:
    return Quantity(ft, Dimension.LENGTH)


@dataclass
class LoadChart:
    """One manufacturer chart for one support/boom/counterweight set-up."""

    id: str
    description: str
    configuration: ChartConfiguration
    capacity_data: CapacityData
    notes: list[str] = field(default_factory=list)

    # ── Internal canonical views ─────────────────────────────────

    def _booms_ft(self) -> list[float]:
        return [b.to_length().value for b in self.capacity_data.boom_lengths]

    def _points(self, boom_idx: int) -> list[tuple[float, float]]:
        return [
            (r.value, w.value) for r, w in self.capacity_data.capacity_points(boom_idx)
        ]

    # ── Lookup ───────────────────────────────────────────────────

    def capacity_exact(self, boom_length: Scalar, radius: Scalar) -> Quantity:
        """Stored capacity at a plotted (boom, radius) point, no interpolation."""
        boom_ft = to_canonical(boom_length, Dimension.LENGTH)
        radius_ft = to_canonical(radius, Dimension.LENGTH)

        booms = self._booms_ft()
        for idx, b in enumerate(booms):
            if abs(b - boom_ft) < EXACT_MATCH_TOLERANCE_FT:
                break
        else:
            raise BoomLengthNotFound(boom_ft)

        for r, w in self._points(idx):
            if abs(r - radius_ft) < EXACT_MATCH_TOLERANCE_FT:
                return _mass(w)
        raise RadiusOutOfRange(radius_ft)

    def capacity_interpolated(self, boom_length: Scalar, radius: Scalar) -> Quantity:
        """Bilinear capacity: along radius within each bounding row, then across boom."""
        boom_ft = to_canonical(boom_length, Dimension.LENGTH)
        lo, hi = self.find_boom_bounds(boom_ft)

        cap_lo = self.interpolate_radius(lo, radius).value
        cap_hi = self.interpolate_radius(hi, radius).value
        if lo == hi:
            return _mass(cap_lo)

        booms = self._booms_ft()
        span = booms[hi] - booms[lo]
        if abs(span) < INTERPOLATION_EPSILON_FT:
            return _mass(cap_lo)

        ratio = (boom_ft - booms[lo]) / span
        cap = cap_lo + ratio * (cap_hi - cap_lo)
        _LOG.debug(
            "%s: boom %.2f ft between rows %d/%d (ratio %.3f) -> %.0f lb",
            self.id, boom_ft, lo, hi, ratio, cap,
        )
        return _mass(cap)

    def find_boom_bounds(self, boom_length: Scalar) -> tuple[int, int]:
        """Indices of the largest row <= and the smallest row >= ``boom_length``."""
        boom_ft = to_canonical(boom_length, Dimension.LENGTH)
        booms = self._booms_ft()
        if not booms:
            raise NoData(f"chart {self.id} has no boom lengths")

        eps = INTERPOLATION_EPSILON_FT
        below = [i for i, b in enumerate(booms) if b <= boom_ft + eps]
        above = [i for i, b in enumerate(booms) if b >= boom_ft - eps]
        if not below or not above:
            raise BoomLengthNotFound(boom_ft)

        lo = max(below, key=lambda i: booms[i])
        hi = min(above, key=lambda i: booms[i])
        return lo, hi

    def interpolate_radius(self, boom_idx: int, radius: Scalar) -> Quantity:
        """Linear capacity along one boom-length row."""
        radius_ft = to_canonical(radius, Dimension.LENGTH)
        points = self._points(boom_idx)
        if not points:
            raise NoData(f"chart {self.id} row {boom_idx} is empty")

        eps = INTERPOLATION_EPSILON_FT
        below = [p for p in points if p[0] <= radius_ft + eps]
        above = [p for p in points if p[0] >= radius_ft - eps]
        if not below or not above:
            raise RadiusOutOfRange(radius_ft)

        lower = max(below, key=lambda p: p[0])
        upper = min(above, key=lambda p: p[0])
        if abs(lower[0] - upper[0]) < eps:
            return _mass(lower[1])

        ratio = (radius_ft - lower[0]) / (upper[0] - lower[0])
        return _mass(lower[1] + ratio * (upper[1] - lower[1]))

    def matches_configuration(self, config: ChartConfiguration) -> bool:
        return configuration_matches(self.configuration, config)

    def boom_lengths(self) -> list[Quantity]:
        booms = self.capacity_data.boom_length_quantities()
        if not booms:
            raise NoData(f"chart {self.id} has no boom lengths")
        return booms

    def capacity_points(self, boom_idx: int) -> list[tuple[Quantity, Quantity]]:
        points = self.capacity_data.capacity_points(boom_idx)
        if not points:
            raise NoData(f"chart {self.id} row {boom_idx} is empty")
        return points

    # ── Bounds ───────────────────────────────────────────────────

    def is_boom_valid(self, boom_length: Scalar) -> bool:
        boom_ft = to_canonical(boom_length, Dimension.LENGTH)
        booms = self._booms_ft()
        if not booms:
            return False
        return min(booms) <= boom_ft <= max(booms)

    def is_radius_valid(self, boom_length: Scalar, radius: Scalar) -> bool:
        """True if ``radius`` lies inside either bounding row's radius span."""
        radius_ft = to_canonical(radius, Dimension.LENGTH)
        lo, hi = self.find_boom_bounds(boom_length)
        for idx in (lo, hi):
            radii = [r for r, _ in self._points(idx)]
            if radii and min(radii) <= radius_ft <= max(radii):
                return True
        return False

    def radius_range(self, boom_length: Scalar) -> tuple[Quantity, Quantity]:
        lo, hi = self.find_boom_bounds(boom_length)
        radii = [r for idx in (lo, hi) for r, _ in self._points(idx)]
        if not radii:
            raise NoData(f"chart {self.id} has no radii near that boom length")
        return _length(min(radii)), _length(max(radii))

    def boom_range(self) -> tuple[Quantity, Quantity]:
        booms = self._booms_ft()
        if not booms:
            raise NoData(f"chart {self.id} has no boom lengths")
        return _length(min(booms)), _length(max(booms))

    def _all_points(self) -> list[tuple[float, float]]:
        return [
            p
            for idx in range(len(self.capacity_data.boom_lengths))
            for p in self._points(idx)
        ]

    def max_capacity(self) -> Quantity:
        caps = [w for _, w in self._all_points()]
        if not caps or max(caps) == 0.0:
            raise NoData(f"chart {self.id} has no capacities")
        return _mass(max(caps))

    def min_radius(self) -> Quantity:
        radii = [r for r, _ in self._all_points()]
        if not radii:
            raise NoData(f"chart {self.id} has no radii")
        return _length(min(radii))

    def max_radius(self) -> Quantity:
        radii = [r for r, _ in self._all_points()]
        if not radii or max(radii) == 0.0:
            raise NoData(f"chart {self.id} has no radii")
        return _length(max(radii))

    def validate_bounds(self, boom_length: Scalar, radius: Scalar) -> None:
        """Raise if (boom, radius) falls outside the charted envelope."""
        if not self.is_boom_valid(boom_length):
            raise BoomLengthNotFound(to_canonical(boom_length, Dimension.LENGTH))
        if not self.is_radius_valid(boom_length, radius):
            raise RadiusOutOfRange(to_canonical(radius, Dimension.LENGTH))

    def derated_capacity(
        self, boom_length: Scalar, radius: Scalar, factor: float
    ) -> Quantity:
        """Interpolated capacity scaled by ``factor`` (wind, side load, ...)."""
        if factor < 0:
            raise InvalidConfiguration("derating factor must be >= 0")
        cap = self.capacity_interpolated(boom_length, radius)
        return _mass(cap.value * factor)
