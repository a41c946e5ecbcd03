"""Rigid-body statics primitives.

Coordinates are crane-local feet (X right, Y up, Z forward), forces are
pounds-force.  Gravity acts along -Y.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

from .errors import InvalidConfiguration

Vec3 = NDArray[np.float64]

ORIGIN: Vec3 = np.zeros(3)


def as_point(p: Sequence[float] | Vec3) -> Vec3:
    arr = np.asarray(p, dtype=float)
    if arr.shape != (3,):
        raise InvalidConfiguration(f"expected a 3D point, got shape {arr.shape}")
    return arr


@dataclass(frozen=True, eq=False)
class ForceVector:
    """A force applied at a point."""

    point: Vec3
    force: Vec3

    @classmethod
    def new(cls, point: Sequence[float], force: Sequence[float]) -> ForceVector:
        return cls(point=as_point(point), force=as_point(force))

    @classmethod
    def from_weight(cls, weight_lb: float, point: Sequence[float]) -> ForceVector:
        """Gravity force of ``weight_lb`` pounds acting at ``point``."""
        return cls(point=as_point(point), force=np.array([0.0, -float(weight_lb), 0.0]))

    @property
    def magnitude(self) -> float:
        return float(np.linalg.norm(self.force))


def moment_about_point(force: ForceVector, pivot: Sequence[float] = ORIGIN) -> Vec3:
    """M = r × F with r from ``pivot`` to the point of application."""
    r = force.point - as_point(pivot)
    return np.cross(r, force.force)


def moment_about_axis(
    force: ForceVector,
    pivot: Sequence[float],
    axis: Sequence[float],
) -> float:
    """Scalar moment of ``force`` about the axis through ``pivot``."""
    a = as_point(axis)
    norm = np.linalg.norm(a)
    if norm == 0.0:
        raise InvalidConfiguration("moment axis must be non-zero")
    return float(np.dot(moment_about_point(force, pivot), a / norm))


def sum_forces(forces: Iterable[ForceVector]) -> Vec3:
    total = np.zeros(3)
    for f in forces:
        total = total + f.force
    return total


def sum_moments(forces: Iterable[ForceVector], pivot: Sequence[float] = ORIGIN) -> Vec3:
    total = np.zeros(3)
    for f in forces:
        total = total + moment_about_point(f, pivot)
    return total


def is_in_equilibrium(
    forces: Sequence[ForceVector],
    pivot: Sequence[float] = ORIGIN,
    force_tolerance: float = 1e-6,
    moment_tolerance: float = 1e-6,
) -> bool:
    """True when both the net force and the net moment about ``pivot`` vanish."""
    net_force = sum_forces(forces)
    net_moment = sum_moments(forces, pivot)
    return bool(
        np.linalg.norm(net_force) < force_tolerance
        and np.linalg.norm(net_moment) < moment_tolerance
    )


def center_of_gravity(masses: Sequence[tuple[float, Sequence[float]]]) -> Vec3:
    """Weight-averaged position of point masses given as ``(weight_lb, point)``.

    Returns the origin when the total weight is zero.
    """
    total = sum(float(w) for w, _ in masses)
    if total == 0.0:
        return np.zeros(3)
    weighted = np.zeros(3)
    for w, p in masses:
        weighted = weighted + as_point(p) * float(w)
    return weighted / total
