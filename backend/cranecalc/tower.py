"""Moment-rated capacity model for tower cranes.

Tower cranes are limited by load moment (load x radius) rather than by a
load-at-radius chart, so capacity at any trolley radius is simply
``max_moment / radius`` inside the jib's working range.

Usage:
    crane = TowerCrane(
        "Liebherr", "280 EC-H 12", TowerCraneType.FLAT_TOP,
        tower_height=length(200), jib=TowerJib.of(length(200), length(20)),
        max_moment=TowerMoment(1_000_000),
    )
    crane.check_moment_limiter(mass(9_000), length(100))   # LimiterStatus.WARNING
    crane.validate_lift(mass(8_000), length(100)).utilization   # 0.8
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto

from .errors import (
    InvalidConfiguration,
    MomentExceeded,
    MomentLimiterShutdown,
    RadiusTooLarge,
    RadiusTooSmall,
)
from .units import Dimension, Quantity, Scalar, to_canonical

_LOG = logging.getLogger(__name__)

FT_LB_PER_TON_METER = 6720.0

# Boundary moments count as already triggered.
LIMITER_EPSILON_FT_LB = 0.01

DEFAULT_MIN_RADIUS_FT = 20.0


class TowerCraneType(Enum):
    HAMMERHEAD = auto()
    FLAT_TOP = auto()
    LUFFING_JIB = auto()
    SELF_ERECTING = auto()


class LimiterStatus(Enum):
    NORMAL = "Normal"
    WARNING = "Warning"
    SHUTDOWN = "Shutdown"
    DISABLED = "Disabled"


# ── Moment ───────────────────────────────────────────────────────


@dataclass(frozen=True, order=True)
class TowerMoment:
    """A load moment in ft-lb."""

    ft_lb: float

    @classmethod
    def from_ton_meters(cls, ton_m: float) -> TowerMoment:
        return cls(ton_m * FT_LB_PER_TON_METER)

    @classmethod
    def from_load(cls, load: Scalar, radius: Scalar) -> TowerMoment:
        """Moment of ``load`` (mass) hanging at ``radius`` (length)."""
        return cls(
            to_canonical(load, Dimension.MASS) * to_canonical(radius, Dimension.LENGTH)
        )

    @property
    def ton_meters(self) -> float:
        return self.ft_lb / FT_LB_PER_TON_METER

    @property
    def torque(self) -> Quantity:
        return Quantity(self.ft_lb, Dimension.TORQUE)

    def __str__(self) -> str:
        return f"{self.ft_lb:.2f} ft-lb ({self.ton_meters:.3f} ton-m)"


# ── Limiter ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class SafetyMargins:
    """Fractions of the rated moment at which the limiter warns and cuts out.

    ``safety_factor`` scales both thresholds.  Every factor must lie in
    (0, 1] and the warning factor must sit strictly below the shutdown one.
    """

    warning_factor: float = 0.9
    shutdown_factor: float = 1.0
    safety_factor: float = 1.0

    def __post_init__(self) -> None:
        for label, v in (
            ("warning factor", self.warning_factor),
            ("shutdown factor", self.shutdown_factor),
            ("safety factor", self.safety_factor),
        ):
            if not 0.0 < v <= 1.0:
                raise InvalidConfiguration(f"{label} must be 0.0 < x <= 1.0, got {v}")
        if self.warning_factor >= self.shutdown_factor:
            raise InvalidConfiguration(
                f"warning threshold ({self.warning_factor}) must be less than "
                f"shutdown threshold ({self.shutdown_factor})"
            )

    @classmethod
    def standard(cls) -> SafetyMargins:
        return cls(0.9, 1.0, 1.0)

    @classmethod
    def conservative(cls) -> SafetyMargins:
        return cls(0.85, 0.95, 1.0)

    @classmethod
    def very_conservative(cls) -> SafetyMargins:
        return cls(0.80, 0.90, 1.0)

    @classmethod
    def with_safety_factor(cls, factor: float) -> SafetyMargins:
        return cls(0.9, 1.0, factor)

    @classmethod
    def custom(cls, warning: float, shutdown: float) -> SafetyMargins:
        return cls(warning, shutdown, 1.0)

    def effective_warning(self, rated: TowerMoment) -> TowerMoment:
        return TowerMoment(rated.ft_lb * self.warning_factor * self.safety_factor)

    def effective_shutdown(self, rated: TowerMoment) -> TowerMoment:
        return TowerMoment(rated.ft_lb * self.shutdown_factor * self.safety_factor)


@dataclass(frozen=True)
class MomentLimiter:
    """Classifies a load moment against the rated moment."""

    rated_moment: TowerMoment
    margins: SafetyMargins = field(default_factory=SafetyMargins.standard)
    enabled: bool = True

    @classmethod
    def standard(cls, rated_moment: TowerMoment) -> MomentLimiter:
        return cls(rated_moment, SafetyMargins.standard())

    def check(self, moment: TowerMoment) -> LimiterStatus:
        if not self.enabled:
            return LimiterStatus.DISABLED

        shutdown = self.margins.effective_shutdown(self.rated_moment)
        warning = self.margins.effective_warning(self.rated_moment)

        if moment.ft_lb > shutdown.ft_lb - LIMITER_EPSILON_FT_LB:
            return LimiterStatus.SHUTDOWN
        if moment.ft_lb > warning.ft_lb - LIMITER_EPSILON_FT_LB:
            return LimiterStatus.WARNING
        return LimiterStatus.NORMAL

    def effective_capacity(self) -> TowerMoment:
        return self.margins.effective_shutdown(self.rated_moment)


# ── Crane ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TowerJib:
    """Working range of the trolley along the jib (ft)."""

    length_ft: float
    min_radius_ft: float
    max_radius_ft: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.min_radius_ft < self.max_radius_ft:
            raise InvalidConfiguration(
                f"jib radius range must satisfy 0 <= min < max, got "
                f"[{self.min_radius_ft}, {self.max_radius_ft}] ft"
            )

    @classmethod
    def of(
        cls,
        length: Scalar,
        min_radius: Scalar = DEFAULT_MIN_RADIUS_FT,
        max_radius: Scalar | None = None,
    ) -> TowerJib:
        """Jib whose working range defaults to [20 ft, tip]."""
        length_ft = to_canonical(length, Dimension.LENGTH)
        hi = length_ft if max_radius is None else to_canonical(max_radius, Dimension.LENGTH)
        return cls(length_ft, to_canonical(min_radius, Dimension.LENGTH), hi)


@dataclass(frozen=True)
class CounterweightConfig:
    weight_lb: float
    radius_ft: float

    @classmethod
    def of(cls, weight: Scalar, radius: Scalar) -> CounterweightConfig:
        return cls(
            to_canonical(weight, Dimension.MASS), to_canonical(radius, Dimension.LENGTH)
        )

    @property
    def moment(self) -> TowerMoment:
        return TowerMoment(self.weight_lb * self.radius_ft)


@dataclass(frozen=True)
class TowerLiftAnalysis:
    load_lb: float
    radius_ft: float
    load_moment: TowerMoment
    max_moment: TowerMoment
    capacity_lb: float
    utilization: float
    limiter_status: LimiterStatus
    is_safe: bool

    @property
    def load(self) -> Quantity:
        return Quantity(self.load_lb, Dimension.MASS)

    @property
    def radius(self) -> Quantity:
        return Quantity(self.radius_ft, Dimension.LENGTH)

    @property
    def capacity(self) -> Quantity:
        return Quantity(self.capacity_lb, Dimension.MASS)


class TowerCrane:
    """Moment rating side of a tower crane.  Geometry of the hook is not modelled."""

    def __init__(
        self,
        manufacturer: str,
        model: str,
        crane_type: TowerCraneType,
        tower_height: Scalar,
        jib: TowerJib,
        max_moment: TowerMoment,
        margins: SafetyMargins | None = None,
        counterweight: CounterweightConfig | None = None,
    ) -> None:
        if max_moment.ft_lb <= 0:
            raise InvalidConfiguration("max moment must be > 0")
        self.manufacturer = manufacturer
        self.model = model
        self.crane_type = crane_type
        self.tower_height_ft = to_canonical(tower_height, Dimension.LENGTH)
        self.jib = jib
        self.max_moment = max_moment
        self.moment_limiter = MomentLimiter(max_moment, margins or SafetyMargins.standard())
        self.counterweight = counterweight

    def load_moment(self, load: Scalar, radius: Scalar) -> TowerMoment:
        return TowerMoment.from_load(load, radius)

    def capacity_at_radius(self, radius: Scalar) -> Quantity:
        """Rated load at ``radius``; zero outside the jib's working range."""
        r = to_canonical(radius, Dimension.LENGTH)
        if r < self.jib.min_radius_ft or r > self.jib.max_radius_ft or r <= 0.0:
            return Quantity(0.0, Dimension.MASS)
        return Quantity(self.max_moment.ft_lb / r, Dimension.MASS)

    def check_moment_limiter(self, load: Scalar, radius: Scalar) -> LimiterStatus:
        return self.moment_limiter.check(self.load_moment(load, radius))

    def validate_lift(self, load: Scalar, radius: Scalar) -> TowerLiftAnalysis:
        """Check moment, trolley range and limiter in that order."""
        load_lb = to_canonical(load, Dimension.MASS)
        r = to_canonical(radius, Dimension.LENGTH)
        moment = TowerMoment(load_lb * r)

        if moment > self.max_moment:
            raise MomentExceeded(moment.ft_lb, self.max_moment.ft_lb)
        if r < self.jib.min_radius_ft or r <= 0.0:
            raise RadiusTooSmall(r, self.jib.min_radius_ft)
        if r > self.jib.max_radius_ft:
            raise RadiusTooLarge(r, self.jib.max_radius_ft)

        status = self.moment_limiter.check(moment)
        if status is LimiterStatus.SHUTDOWN:
            _LOG.warning("%s %s: limiter shutdown at %s", self.manufacturer, self.model, moment)
            raise MomentLimiterShutdown(moment.ft_lb)

        capacity_lb = self.max_moment.ft_lb / r
        _LOG.debug("tower lift %.0f lb @ %.1f ft -> %s", load_lb, r, status.value)
        return TowerLiftAnalysis(
            load_lb=load_lb,
            radius_ft=r,
            load_moment=moment,
            max_moment=self.max_moment,
            capacity_lb=capacity_lb,
            utilization=load_lb / capacity_lb,
            limiter_status=status,
            is_safe=status is not LimiterStatus.SHUTDOWN,
        )

    def __repr__(self) -> str:
        return f"TowerCrane({self.manufacturer} {self.model}, max={self.max_moment})"
