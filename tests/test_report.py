import logging

import pytest

from cranecalc import InvalidConfiguration, area, mass, pressure, render_ground_bearing_tex
from cranecalc.ground_bearing import GroundBearingAnalysis
from cranecalc.load_chart import (
    BoomConfiguration,
    CapacityData,
    ChartConfiguration,
    Full,
    LoadChart,
    OnOutriggers,
)
from cranecalc.plotting import plot_load_chart, plot_support_layout
from cranecalc.units import UnitValue


class TestRenderTex:
    def test_reaction_table(self, symmetric_analysis) -> None:
        result = symmetric_analysis.calculate_reactions()
        tex = render_ground_bearing_tex(result, project_title="Hospital Lift", job_no="J-42")

        assert r"\documentclass" in tex
        assert "Hospital Lift" in tex
        assert r"\textbf{Front-Left}" in tex
        assert "37,500" in tex
        assert "65.1" in tex
        assert "LIFT REJECTED" not in tex

    def test_soil_check_passes(self, symmetric_analysis) -> None:
        result = symmetric_analysis.calculate_reactions()
        tex = render_ground_bearing_tex(result, allowable_pressure=pressure(100), safety_factor=1.5)
        assert r"\textbf{OK}" in tex
        assert "66.7" in tex  # derated allowable

    def test_soil_check_fails(self, symmetric_analysis) -> None:
        result = symmetric_analysis.calculate_reactions()
        tex = render_ground_bearing_tex(result, allowable_pressure=pressure(25))
        assert "LIFT REJECTED" in tex

    def test_names_are_escaped(self) -> None:
        a = GroundBearingAnalysis(mass(10_000), (0, 0, 0), mass(0), (0, 0, 0))
        for name, x, z in [("Pad_1", -5, 5), ("Pad_2", 5, 5), ("Pad_3", -5, -5), ("Pad_4", 5, -5)]:
            a.add_support(name, x, 0, z, area(1, "ft^2"))
        tex = render_ground_bearing_tex(a.calculate_reactions(), project_title="50% & up")
        assert r"Pad\_1" in tex
        assert r"50\% \& up" in tex

    def test_conservative_note(self) -> None:
        a = GroundBearingAnalysis(mass(10_000), (0, 0, 0), mass(0), (0, 0, 10))
        a.add_support("Front", 0, 0, 8, area(100))
        a.add_support("Rear-Left", -6, 0, -6, area(100))
        a.add_support("Rear-Right", 6, 0, -6, area(100))
        tex = render_ground_bearing_tex(a.calculate_reactions())
        assert "Conservative bound" in tex

    def test_bad_safety_factor(self, symmetric_analysis) -> None:
        result = symmetric_analysis.calculate_reactions()
        with pytest.raises(InvalidConfiguration):
            render_ground_bearing_tex(result, allowable_pressure=pressure(25), safety_factor=0)

    def test_zero_allowable_rejected(self, symmetric_analysis) -> None:
        result = symmetric_analysis.calculate_reactions()
        with pytest.raises(InvalidConfiguration):
            render_ground_bearing_tex(result, allowable_pressure=pressure(0))

    def test_mat_sized_to_the_limit_is_reported_ok(self, symmetric_analysis) -> None:
        allowable = pressure(40)
        required = symmetric_analysis.required_mat_area(allowable, safety_factor=1.5)
        result = symmetric_analysis.resized(required).calculate_reactions()

        tex = render_ground_bearing_tex(result, allowable_pressure=allowable, safety_factor=1.5)

        assert r"\textbf{OK}" in tex
        assert "LIFT REJECTED" not in tex
        assert f"{required.to('ft^2'):.2f}" in tex


class TestPlots:
    def test_support_layout(self, symmetric_analysis, tmp_path) -> None:
        result = symmetric_analysis.calculate_reactions()
        path = plot_support_layout(symmetric_analysis, result, output_dir=tmp_path, name="Test Lift")
        assert path == tmp_path / "test_lift_supports.png"
        assert path.stat().st_size > 0

    def test_load_chart(self, metric_chart, tmp_path) -> None:
        path = plot_load_chart(metric_chart, output_dir=tmp_path)
        assert path.name == "test_metric_chart.png"
        assert path.exists()

    def test_load_chart_with_missing_row(self, tmp_path, caplog) -> None:
        chart = LoadChart(
            id="short_rows",
            description="",
            configuration=ChartConfiguration(
                support=OnOutriggers(Full()), boom=BoomConfiguration(UnitValue(100.0, "ft"))
            ),
            capacity_data=CapacityData(
                boom_lengths=[UnitValue(100.0, "ft"), UnitValue(150.0, "ft")],
                data=[[(UnitValue(20.0, "ft"), UnitValue(1000.0, "lbs"))]],
            ),
        )
        with caplog.at_level(logging.WARNING):
            path = plot_load_chart(chart, output_dir=tmp_path)
        assert path.exists()
        assert "short_rows" in caplog.text
