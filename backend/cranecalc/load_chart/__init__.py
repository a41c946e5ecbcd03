"""Manufacturer load charts: storage, lookup, matching and linting."""

from .chart import EXACT_MATCH_TOLERANCE_FT, INTERPOLATION_EPSILON_FT, LoadChart
from .library import (
    ChartError,
    ChartLibrary,
    ValidationReport,
    default_library,
    reset_default_library,
    validate_chart,
)
from .matching import (
    BOOM_MATCH_TOLERANCE_FT,
    COUNTERWEIGHT_MATCH_TOLERANCE_LB,
    boom_matches,
    configuration_matches,
    counterweight_matches,
    extension_matches,
    support_matches,
)
from .package import LoadChartPackage
from .types import (
    AngleRange,
    BoomConfiguration,
    CapacityData,
    ChartConfiguration,
    CounterweightConfiguration,
    CraneInfo,
    CraneType,
    Custom,
    Full,
    Intermediate,
    JibConfiguration,
    Minimum,
    OnCrawlers,
    OnOutriggers,
    OnRubber,
    OutriggerExtension,
    SupportConfiguration,
    SwingRestriction,
)

__all__ = [
    "AngleRange",
    "BOOM_MATCH_TOLERANCE_FT",
    "BoomConfiguration",
    "COUNTERWEIGHT_MATCH_TOLERANCE_LB",
    "CapacityData",
    "ChartConfiguration",
    "ChartError",
    "ChartLibrary",
    "CounterweightConfiguration",
    "CraneInfo",
    "CraneType",
    "Custom",
    "EXACT_MATCH_TOLERANCE_FT",
    "Full",
    "INTERPOLATION_EPSILON_FT",
    "Intermediate",
    "JibConfiguration",
    "LoadChart",
    "LoadChartPackage",
    "Minimum",
    "OnCrawlers",
    "OnOutriggers",
    "OnRubber",
    "OutriggerExtension",
    "SupportConfiguration",
    "SwingRestriction",
    "ValidationReport",
    "boom_matches",
    "configuration_matches",
    "counterweight_matches",
    "default_library",
    "extension_matches",
    "reset_default_library",
    "support_matches",
    "validate_chart",
]
