import logging

import pytest

from cranecalc import (
    ExceedsAllowable,
    GroundBearingAnalysis,
    InsufficientSupports,
    InvalidConfiguration,
    UnstableConfiguration,
    area,
    length,
    mass,
    pressure,
)

PAD_SQ_IN = 576.0  # 24 in x 24 in


def _four_point(load_position, crane_cog=(0, 8, 0), load=50_000):
    a = GroundBearingAnalysis(mass(100_000), crane_cog, mass(load), load_position)
    pad = area(PAD_SQ_IN)
    a.add_support("Front-Left", -10, 0, 10, pad)
    a.add_support("Front-Right", 10, 0, 10, pad)
    a.add_support("Rear-Left", -10, 0, -10, pad)
    a.add_support("Rear-Right", 10, 0, -10, pad)
    return a


class TestFourPointReactions:
    def test_symmetric_load_splits_evenly(self, symmetric_analysis) -> None:
        result = symmetric_analysis.calculate_reactions()

        assert result.method == "four_point"
        for r in result.reactions:
            assert r.force_lbf == pytest.approx(37_500.0)
            assert r.pressure_psi == pytest.approx(37_500.0 / 576.0)
        assert result.max_pressure_psi == pytest.approx(65.104, rel=1e-4)

    def test_first_support_is_critical_on_ties(self, symmetric_analysis) -> None:
        result = symmetric_analysis.calculate_reactions()
        assert result.critical_support_index == 0
        assert result.critical_support.name == "Front-Left"

    @pytest.mark.parametrize(
        "load_position",
        [(0, 20, 0), (0, 40, 6), (-4, 30, -3), (5, 60, 5)],
    )
    def test_reactions_sum_to_total_weight(self, load_position) -> None:
        result = _four_point(load_position).calculate_reactions()
        assert result.total_reaction_lbf == pytest.approx(150_000.0)
        assert result.total_load_lb == pytest.approx(150_000.0)

    def test_moving_load_forward_loads_front_supports(self) -> None:
        centred = _four_point((0, 20, 0)).calculate_reactions()
        forward = _four_point((0, 20, 24)).calculate_reactions()

        by_name = lambda res: {r.name: r.force_lbf for r in res.reactions}
        c, f = by_name(centred), by_name(forward)
        assert f["Front-Left"] > c["Front-Left"]
        assert f["Front-Right"] > c["Front-Right"]
        assert f["Rear-Left"] < c["Rear-Left"]
        assert forward.critical_support.name.startswith("Front")

    def test_known_offset_values(self) -> None:
        # Combined COG 8 ft forward: z shift = (8 / 20) * 150,000 / 2 = 30,000
        result = _four_point((0, 20, 24)).calculate_reactions()
        forces = {r.name: r.force_lbf for r in result.reactions}
        assert forces["Front-Left"] == pytest.approx(67_500.0)
        assert forces["Rear-Left"] == pytest.approx(7_500.0)

    def test_tipping_raises_unstable(self, caplog) -> None:
        a = _four_point((80, 50, 0))
        with caplog.at_level(logging.WARNING, logger="cranecalc.ground_bearing"):
            with pytest.raises(UnstableConfiguration) as exc:
                a.calculate_reactions()
        assert exc.value.support_name == "Front-Left"
        assert exc.value.reaction_lb < 0
        assert "unstable configuration" in caplog.text

    def test_unstable_is_physical_limit(self) -> None:
        from cranecalc import PhysicalLimitError

        with pytest.raises(PhysicalLimitError):
            _four_point((80, 50, 0)).calculate_reactions()

    def test_accepts_metric_quantities(self) -> None:
        a = GroundBearingAnalysis(
            mass(45_359.237, "kg"),
            (length(0), length(2, "m"), length(0)),
            mass(0),
            (0, 0, 0),
        )
        pad = area(1, "m^2")
        for name, x, z in [("FL", -3, 3), ("FR", 3, 3), ("RL", -3, -3), ("RR", 3, -3)]:
            a.add_support(name, length(x, "m"), 0, length(z, "m"), pad)
        result = a.calculate_reactions()
        assert result.max_reaction_lbf == pytest.approx(25_000.0)
        assert result.max_pressure.to("kPa") == pytest.approx(
            pressure(25_000.0 / 1550.0031).to("kPa"), rel=1e-6
        )

    def test_degenerate_layout_rejected(self) -> None:
        a = GroundBearingAnalysis(mass(10_000), (0, 0, 0), mass(0), (0, 0, 0))
        for i, z in enumerate([-10, -5, 5, 10]):
            a.add_support(f"S{i}", 0, 0, z, area(100))
        with pytest.raises(InvalidConfiguration):
            a.calculate_reactions()


class TestConservativeReactions:
    def _three_point(self, load_position):
        a = GroundBearingAnalysis(mass(60_000), (0, 5, 0), mass(20_000), load_position)
        a.add_support("Front", 0, 0, 12, area(400))
        a.add_support("Rear-Left", -8, 0, -8, area(400))
        a.add_support("Rear-Right", 8, 0, -8, area(800))
        return a

    def test_nearest_support_takes_everything(self) -> None:
        result = self._three_point((7, 10, -20)).calculate_reactions()

        assert result.method == "conservative"
        assert result.critical_support.name == "Rear-Right"
        assert result.max_reaction_lbf == pytest.approx(80_000.0)
        assert result.max_pressure_psi == pytest.approx(100.0)
        others = [r.force_lbf for r in result.reactions if r.name != "Rear-Right"]
        assert others == [0.0, 0.0]

    def test_summary_mentions_conservative(self) -> None:
        result = self._three_point((0, 10, 30)).calculate_reactions()
        assert result.critical_support.name == "Front"
        assert "conservative" in result.summary()

    def test_five_supports_use_conservative_bound(self) -> None:
        a = _four_point((0, 20, 0))
        a.add_support("Front-Jack", 0, 0, 14, area(PAD_SQ_IN))
        result = a.calculate_reactions()
        assert result.method == "conservative"
        assert result.max_reaction_lbf == pytest.approx(150_000.0)


class TestInputValidation:
    def test_too_few_supports(self) -> None:
        a = GroundBearingAnalysis(mass(1000), (0, 0, 0), mass(0), (0, 0, 0))
        a.add_support("A", 0, 0, 0, area(100))
        a.add_support("B", 1, 0, 0, area(100))
        with pytest.raises(InsufficientSupports) as exc:
            a.calculate_reactions()
        assert exc.value.count == 2

    def test_zero_total_weight(self) -> None:
        a = GroundBearingAnalysis(mass(0), (0, 0, 0), mass(0), (0, 0, 0))
        for i in range(4):
            a.add_support(f"S{i}", (-1) ** i, 0, (-1) ** (i // 2), area(100))
        with pytest.raises(InvalidConfiguration):
            a.calculate_reactions()

    def test_negative_weight(self) -> None:
        with pytest.raises(InvalidConfiguration):
            GroundBearingAnalysis(mass(-1), (0, 0, 0), mass(0), (0, 0, 0))

    def test_zero_contact_area(self) -> None:
        a = GroundBearingAnalysis(mass(1000), (0, 0, 0), mass(0), (0, 0, 0))
        with pytest.raises(InvalidConfiguration):
            a.add_support("A", 0, 0, 0, area(0))

    def test_position_needs_three_components(self) -> None:
        with pytest.raises(InvalidConfiguration):
            GroundBearingAnalysis(mass(1000), (0, 0), mass(0), (0, 0, 0))

    def test_wrong_dimension_for_area(self) -> None:
        a = GroundBearingAnalysis(mass(1000), (0, 0, 0), mass(0), (0, 0, 0))
        with pytest.raises(ValueError):
            a.add_support("A", 0, 0, 0, length(2))


class TestSoilChecks:
    def test_allowable_equal_to_peak_passes(self, symmetric_analysis) -> None:
        peak = 37_500.0 / 576.0
        result = symmetric_analysis.validate_soil_capacity(pressure(peak))
        assert result.max_pressure_psi == pytest.approx(peak)

    def test_allowable_below_peak_rejected(self, symmetric_analysis) -> None:
        with pytest.raises(ExceedsAllowable) as exc:
            symmetric_analysis.validate_soil_capacity(pressure(25, "psi"))
        assert exc.value.allowable_psi == pytest.approx(25.0)
        assert exc.value.actual_psi == pytest.approx(37_500.0 / 576.0)

    def test_margin(self, symmetric_analysis) -> None:
        result = symmetric_analysis.calculate_reactions()
        assert result.margin(pressure(100)).to("psi") == pytest.approx(100 - 37_500.0 / 576.0)
        assert result.margin(pressure(25)).value < 0

    def test_required_mat_area(self, symmetric_analysis) -> None:
        required = symmetric_analysis.required_mat_area(pressure(25), safety_factor=1.5)
        assert required.to("in^2") == pytest.approx(37_500.0 / (25.0 / 1.5))

    def test_mat_sized_to_required_area_passes(self, symmetric_analysis) -> None:
        allowable = pressure(25)
        required = symmetric_analysis.required_mat_area(allowable, safety_factor=1.5)
        resized = symmetric_analysis.resized(required)

        result = resized.validate_soil_capacity(pressure(25 / 1.5))
        assert result.max_pressure_psi == pytest.approx(25 / 1.5)

    @pytest.mark.parametrize("sf", [0.0, -1.0])
    def test_required_mat_area_rejects_bad_safety_factor(self, symmetric_analysis, sf) -> None:
        with pytest.raises(InvalidConfiguration):
            symmetric_analysis.required_mat_area(pressure(25), safety_factor=sf)

    def test_required_mat_area_rejects_zero_allowable(self, symmetric_analysis) -> None:
        with pytest.raises(InvalidConfiguration):
            symmetric_analysis.required_mat_area(pressure(0))

    def test_result_helpers_agree_with_analysis(self, symmetric_analysis) -> None:
        result = symmetric_analysis.calculate_reactions()
        peak = 37_500.0 / 576.0
        assert result.within_allowable(pressure(peak))
        assert not result.within_allowable(pressure(peak * 0.99))
        assert result.required_contact_area(pressure(25), 1.5).value == pytest.approx(
            symmetric_analysis.required_mat_area(pressure(25), 1.5).value
        )


def test_combined_cog(symmetric_analysis) -> None:
    x, y, z = symmetric_analysis.combined_cog
    assert (x, z) == (pytest.approx(0.0), pytest.approx(0.0))
    assert y == pytest.approx((100_000 * 5 + 50_000 * 20) / 150_000)


def test_resized_keeps_geometry(symmetric_analysis) -> None:
    other = symmetric_analysis.resized(area(4, "ft^2"))
    assert [s.name for s in other.supports] == [s.name for s in symmetric_analysis.supports]
    assert all(s.contact_area_sq_in == pytest.approx(576.0) for s in other.supports)
    assert other.total_weight_lb == symmetric_analysis.total_weight_lb


def test_worked_example_four_sq_ft_pads() -> None:
    a = GroundBearingAnalysis(mass(100_000), (0, 8, 0), mass(50_000), (0, 60, 0))
    pad = area(4, "ft^2")
    for name, x, z in [("FL", -10, 10), ("FR", 10, 10), ("RL", -10, -10), ("RR", 10, -10)]:
        a.add_support(name, x, 0, z, pad)

    result = a.calculate_reactions()

    assert [r.force_lbf for r in result.reactions] == [pytest.approx(37_500.0)] * 4
    assert result.max_pressure.to("psi") == pytest.approx(37_500.0 / 576.0)


def test_moving_toward_a_corner_unloads_the_opposite_corner() -> None:
    before = {r.name: r.force_lbf for r in _four_point((0, 20, 0)).calculate_reactions().reactions}
    after = {r.name: r.force_lbf for r in _four_point((6, 20, 6)).calculate_reactions().reactions}
    assert after["Front-Right"] > before["Front-Right"]
    assert after["Rear-Left"] <= before["Rear-Left"]


def test_mat_round_trip_at_unit_safety_factor(symmetric_analysis) -> None:
    allowable = pressure(40)
    required = symmetric_analysis.required_mat_area(allowable, safety_factor=1.0)
    result = symmetric_analysis.resized(required).validate_soil_capacity(allowable)
    assert result.margin(allowable).to("psi") == pytest.approx(0.0, abs=1e-9)


def test_critical_pressure_can_differ_from_critical_force() -> None:
    a = GroundBearingAnalysis(mass(100_000), (0, 0, 4), mass(0), (0, 0, 0))
    a.add_support("Big-Front", -10, 0, 10, area(10, "ft^2"))
    a.add_support("Small-Front", 10, 0, 10, area(1, "ft^2"))
    a.add_support("Rear-Left", -10, 0, -10, area(2, "ft^2"))
    a.add_support("Rear-Right", 10, 0, -10, area(2, "ft^2"))

    result = a.calculate_reactions()
    assert result.critical_support.name == "Big-Front"
    assert result.reactions[result.critical_pressure_index].name == "Small-Front"
