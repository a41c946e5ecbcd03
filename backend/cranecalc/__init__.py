"""cranecalc: lift-planning physics for mobile and tower cranes."""

from .errors import (
    BoomLengthNotFound,
    ChartFormatError,
    ChartLibraryError,
    ConfigurationError,
    CraneCalcError,
    DimensionError,
    ExceedsAllowable,
    InsufficientSupports,
    InvalidConfiguration,
    MomentExceeded,
    MomentLimiterShutdown,
    NoData,
    NoMatchingChart,
    PackageNotFound,
    PhysicalLimitError,
    RadiusOutOfRange,
    RadiusTooLarge,
    RadiusTooSmall,
    UnitError,
    UnstableConfiguration,
)
from .ground_bearing import GroundBearingAnalysis
from .load_chart import ChartLibrary, LoadChart, LoadChartPackage, default_library
from .report import generate_ground_bearing_report, render_ground_bearing_tex
from .results import GroundBearingResult, SupportReaction
from .soil import SOIL_CAPACITIES, soil_capacity
from .stability import StabilityAnalysis, TippingEdge, calculate_stability, edge_stability
from .support import SupportPoint
from .tower import (
    LimiterStatus,
    MomentLimiter,
    SafetyMargins,
    TowerCrane,
    TowerCraneType,
    TowerJib,
    TowerLiftAnalysis,
    TowerMoment,
)
from .units import Dimension, Quantity, UnitValue, angle, area, force, length, mass, pressure, torque

__all__ = [
    "BoomLengthNotFound",
    "ChartFormatError",
    "ChartLibrary",
    "ChartLibraryError",
    "ConfigurationError",
    "CraneCalcError",
    "Dimension",
    "DimensionError",
    "ExceedsAllowable",
    "GroundBearingAnalysis",
    "GroundBearingResult",
    "InsufficientSupports",
    "InvalidConfiguration",
    "LimiterStatus",
    "LoadChart",
    "LoadChartPackage",
    "MomentExceeded",
    "MomentLimiter",
    "MomentLimiterShutdown",
    "NoData",
    "NoMatchingChart",
    "PackageNotFound",
    "PhysicalLimitError",
    "Quantity",
    "RadiusOutOfRange",
    "RadiusTooLarge",
    "RadiusTooSmall",
    "SOIL_CAPACITIES",
    "SafetyMargins",
    "StabilityAnalysis",
    "SupportPoint",
    "SupportReaction",
    "TippingEdge",
    "TowerCrane",
    "TowerCraneType",
    "TowerJib",
    "TowerLiftAnalysis",
    "TowerMoment",
    "UnitError",
    "UnitValue",
    "UnstableConfiguration",
    "angle",
    "area",
    "calculate_stability",
    "default_library",
    "edge_stability",
    "force",
    "generate_ground_bearing_report",
    "length",
    "mass",
    "pressure",
    "render_ground_bearing_tex",
    "soil_capacity",
    "torque",
]
