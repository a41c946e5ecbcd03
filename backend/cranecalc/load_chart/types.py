"""Data model for manufacturer load charts.

Every stored number keeps the unit string it was authored in (``UnitValue``);
conversion to canonical feet/pounds happens when a chart is queried, so
metric and imperial charts can sit side by side in one library.

Support configuration is a tagged union of plain records::

    OnRubber(speed_restriction)
    OnOutriggers(extension, swing_restriction)
    OnCrawlers(track_config)

and the outrigger extension is one of ``Full``, ``Intermediate(percent)``,
``Minimum`` or ``Custom(distance)``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from ..errors import NoData
from ..units import Dimension, Quantity, Scalar, UnitValue, to_canonical


class CraneType(Enum):
    MOBILE_TELESCOPIC = "MobileTelescopic"
    MOBILE_LATTICE = "MobileLattice"
    ALL_TERRAIN = "AllTerrain"
    ROUGH_TERRAIN = "RoughTerrain"
    CRAWLER = "Crawler"
    TOWER = "Tower"
    TRUCK_MOUNTED = "TruckMounted"


class SwingRestriction(Enum):
    FULL_360 = "Full360"
    OVER_FRONT = "OverFront"
    OVER_REAR = "OverRear"
    OVER_SIDE = "OverSide"


@dataclass
class CraneInfo:
    manufacturer: str
    model: str
    crane_type: CraneType = CraneType.MOBILE_TELESCOPIC
    serial_number: Optional[str] = None
    year: Optional[int] = None
    chart_revision: Optional[str] = None

    @property
    def key(self) -> str:
        """Library key, ``"Manufacturer:Model"``."""
        return f"{self.manufacturer}:{self.model}"


# ── Outrigger extension ──────────────────────────────────────────


@dataclass(frozen=True)
class Full:
    pass


@dataclass(frozen=True)
class Intermediate:
    percent: float


@dataclass(frozen=True)
class Minimum:
    pass


@dataclass(frozen=True)
class Custom:
    distance: UnitValue


OutriggerExtension = Union[Full, Intermediate, Minimum, Custom]


# ── Support configuration ────────────────────────────────────────


@dataclass(frozen=True)
class OnRubber:
    speed_restriction: Optional[str] = None


@dataclass(frozen=True)
class OnOutriggers:
    extension: OutriggerExtension = field(default_factory=Full)
    swing_restriction: Optional[SwingRestriction] = None


@dataclass(frozen=True)
class OnCrawlers:
    track_config: str = ""


SupportConfiguration = Union[OnRubber, OnOutriggers, OnCrawlers]


# ── Boom / counterweight ─────────────────────────────────────────


@dataclass(frozen=True)
class AngleRange:
    min: UnitValue
    max: UnitValue


@dataclass(frozen=True)
class JibConfiguration:
    length: UnitValue
    angle: UnitValue
    offset: Optional[UnitValue] = None

    def length_distance(self) -> Quantity:
        return self.length.to_length()

    def angle_value(self) -> Quantity:
        return self.angle.to_angle()


@dataclass(frozen=True)
class BoomConfiguration:
    length: UnitValue
    angle_range: Optional[AngleRange] = None
    jib: Optional[JibConfiguration] = None

    def length_distance(self) -> Quantity:
        return self.length.to_length()


@dataclass(frozen=True)
class CounterweightConfiguration:
    weight: UnitValue
    configuration: str = ""

    def to_mass(self) -> Quantity:
        return self.weight.to_mass()


@dataclass(frozen=True)
class ChartConfiguration:
    """The discrete crane set-up one chart applies to."""

    support: SupportConfiguration
    boom: BoomConfiguration
    counterweight: Optional[CounterweightConfiguration] = None
    additional: dict[str, str] = field(default_factory=dict)


# ── Capacity grid ────────────────────────────────────────────────

CapacityPoint = tuple[UnitValue, UnitValue]  # (radius, capacity)


@dataclass
class CapacityData:
    """Ragged grid: one row of (radius, capacity) points per boom length.

    Rows are expected sorted by radius and ``len(boom_lengths) == len(data)``;
    neither is enforced here (see ``validate_chart``).
    """

    boom_lengths: list[UnitValue] = field(default_factory=list)
    data: list[list[CapacityPoint]] = field(default_factory=list)

    def _row(self, boom_idx: int) -> list[CapacityPoint]:
        if not 0 <= boom_idx < len(self.data):
            raise NoData(f"no capacity row for boom index {boom_idx}")
        return self.data[boom_idx]

    def capacity_at(
        self, boom_idx: int, radius: Scalar, epsilon: float = 0.1
    ) -> Optional[Quantity]:
        """Capacity stored at ``radius`` (within ``epsilon`` ft), or None."""
        r_ft = to_canonical(radius, Dimension.LENGTH)
        for r_val, w_val in self._row(boom_idx):
            if abs(r_val.to_length().value - r_ft) < epsilon:
                return w_val.to_mass()
        return None

    def boom_length_quantities(self) -> list[Quantity]:
        return [b.to_length() for b in self.boom_lengths]

    def capacity_points(self, boom_idx: int) -> list[tuple[Quantity, Quantity]]:
        return [(r.to_length(), w.to_mass()) for r, w in self._row(boom_idx)]

    def radii_for_boom(self, boom_idx: int) -> list[Quantity]:
        return [r.to_length() for r, _ in self._row(boom_idx)]
