from __future__ import annotations

from pathlib import Path

import pytest

from cranecalc import GroundBearingAnalysis, area, mass
from cranecalc.load_chart import (
    BoomConfiguration,
    CapacityData,
    ChartConfiguration,
    ChartLibrary,
    CounterweightConfiguration,
    Full,
    LoadChart,
    OnOutriggers,
)
from cranecalc.units import UnitValue

CHARTS_DIR = Path(__file__).parent.parent / "backend" / "data" / "charts"

PAD_SQ_IN = 576.0  # 24 in x 24 in


def _row(points, length_unit, mass_unit):
    return [(UnitValue(r, length_unit), UnitValue(w, mass_unit)) for r, w in points]


@pytest.fixture
def symmetric_analysis() -> GroundBearingAnalysis:
    """150,000 lb total with the combined COG over the centre of a 20 x 20 ft pattern."""
    a = GroundBearingAnalysis(
        crane_weight=mass(100_000),
        crane_cog=(0, 5, 0),
        load_weight=mass(50_000),
        load_position=(0, 20, 0),
    )
    pad = area(PAD_SQ_IN)
    a.add_support("Front-Left", -10, 0, 10, pad)
    a.add_support("Front-Right", 10, 0, 10, pad)
    a.add_support("Rear-Left", -10, 0, -10, pad)
    a.add_support("Rear-Right", 10, 0, -10, pad)
    return a


@pytest.fixture
def us_chart() -> LoadChart:
    """Two boom lengths in feet, capacities in pounds."""
    return LoadChart(
        id="test_us",
        description="Test chart (ft / lbs)",
        configuration=ChartConfiguration(
            support=OnOutriggers(Full()),
            boom=BoomConfiguration(UnitValue(100.0, "ft")),
            counterweight=CounterweightConfiguration(UnitValue(50_000.0, "lbs")),
        ),
        capacity_data=CapacityData(
            boom_lengths=[UnitValue(100.0, "ft"), UnitValue(150.0, "ft")],
            data=[
                _row([(20, 100_000), (40, 60_000), (60, 30_000)], "ft", "lbs"),
                _row([(20, 80_000), (40, 50_000), (60, 25_000), (80, 15_000)], "ft", "lbs"),
            ],
        ),
    )


@pytest.fixture
def metric_chart() -> LoadChart:
    """Two boom lengths in metres, capacities in kilograms."""
    return LoadChart(
        id="test_metric",
        description="Test chart (m / kg)",
        configuration=ChartConfiguration(
            support=OnOutriggers(Full()),
            boom=BoomConfiguration(UnitValue(30.0, "m")),
        ),
        capacity_data=CapacityData(
            boom_lengths=[UnitValue(30.0, "m"), UnitValue(40.0, "m")],
            data=[
                _row([(5, 40_000), (10, 20_000), (15, 12_000)], "m", "kg"),
                _row([(5, 30_000), (10, 16_000), (20, 7_000)], "m", "kg"),
            ],
        ),
    )


@pytest.fixture
def bundled_library() -> ChartLibrary:
    return ChartLibrary.from_directory(CHARTS_DIR)


@pytest.fixture
def client(bundled_library):
    from fastapi.testclient import TestClient

    from api.main import app, get_library

    app.dependency_overrides[get_library] = lambda: bundled_library
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
