"""Rules deciding whether a stored chart applies to a requested configuration.

Each comparator is written out per field rather than relying on dataclass
equality, so adding a field to a variant never changes what matches.
"""

from __future__ import annotations

from typing import Optional

from ..errors import UnitError
from .types import (
    BoomConfiguration,
    ChartConfiguration,
    CounterweightConfiguration,
    OnOutriggers,
    OutriggerExtension,
    SupportConfiguration,
)

# About 1/8 in, the precision boom lengths are surveyed to.
BOOM_MATCH_TOLERANCE_FT = 0.01

# Counterweight slabs are rated to the pound.
COUNTERWEIGHT_MATCH_TOLERANCE_LB = 1.0


def extension_matches(a: OutriggerExtension, b: OutriggerExtension) -> bool:
    """Same extension level; the percent or distance it carries is ignored."""
    return type(a) is type(b)


def support_matches(a: SupportConfiguration, b: SupportConfiguration) -> bool:
    """Same support variant.  Outriggers also need the same extension level.

    Swing restriction, speed restriction and track configuration are not
    compared.
    """
    if isinstance(a, OnOutriggers) and isinstance(b, OnOutriggers):
        return extension_matches(a.extension, b.extension)
    return type(a) is type(b)


def boom_matches(a: BoomConfiguration, b: BoomConfiguration) -> bool:
    try:
        la = a.length_distance()
        lb = b.length_distance()
    except UnitError:
        return False
    return abs(la.value - lb.value) < BOOM_MATCH_TOLERANCE_FT


def counterweight_matches(
    a: CounterweightConfiguration, b: CounterweightConfiguration
) -> bool:
    try:
        wa = a.to_mass()
        wb = b.to_mass()
    except UnitError:
        return False
    return abs(wa.value - wb.value) < COUNTERWEIGHT_MATCH_TOLERANCE_LB


def _optional_counterweight_matches(
    a: Optional[CounterweightConfiguration], b: Optional[CounterweightConfiguration]
) -> bool:
    # Only compared when both sides specify one.
    if a is None or b is None:
        return True
    return counterweight_matches(a, b)


def configuration_matches(chart: ChartConfiguration, query: ChartConfiguration) -> bool:
    return (
        support_matches(chart.support, query.support)
        and boom_matches(chart.boom, query.boom)
        and _optional_counterweight_matches(chart.counterweight, query.counterweight)
    )
