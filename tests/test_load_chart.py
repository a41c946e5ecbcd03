import pytest

from cranecalc import BoomLengthNotFound, InvalidConfiguration, NoData, RadiusOutOfRange, length
from cranecalc.load_chart import (
    BoomConfiguration,
    CapacityData,
    ChartConfiguration,
    Full,
    Intermediate,
    LoadChart,
    OnOutriggers,
)
from cranecalc.units import UnitValue


def _empty_chart(boom_lengths, data) -> LoadChart:
    return LoadChart(
        id="sparse",
        description="",
        configuration=ChartConfiguration(
            support=OnOutriggers(Full()), boom=BoomConfiguration(UnitValue(100.0, "ft"))
        ),
        capacity_data=CapacityData(boom_lengths=boom_lengths, data=data),
    )


class TestExactLookup:
    def test_plotted_point(self, us_chart) -> None:
        assert us_chart.capacity_exact(length(100), length(40)).to("lb") == pytest.approx(60_000)
        assert us_chart.capacity_exact(150, 80).to("lb") == pytest.approx(15_000)

    def test_boom_not_plotted(self, us_chart) -> None:
        with pytest.raises(BoomLengthNotFound):
            us_chart.capacity_exact(length(125), length(40))

    def test_radius_not_plotted(self, us_chart) -> None:
        with pytest.raises(RadiusOutOfRange):
            us_chart.capacity_exact(length(100), length(50))

    def test_metric_chart(self, metric_chart) -> None:
        cap = metric_chart.capacity_exact(length(30, "m"), length(10, "m"))
        assert cap.to("kg") == pytest.approx(20_000)

    def test_metric_chart_queried_in_feet(self, metric_chart) -> None:
        boom_ft = length(30, "m").to("ft")
        radius_ft = length(10, "m").to("ft")
        cap = metric_chart.capacity_exact(length(boom_ft, "ft"), length(radius_ft, "ft"))
        assert cap.to("lb") == pytest.approx(20_000 / 0.45359237)


class TestInterpolation:
    def test_on_a_row(self, us_chart) -> None:
        assert us_chart.capacity_interpolated(length(100), length(30)).to("lb") == pytest.approx(80_000)

    def test_bilinear(self, us_chart) -> None:
        # Row 100 ft gives 80,000 at 30 ft, row 150 ft gives 65,000; halfway -> 72,500
        cap = us_chart.capacity_interpolated(length(125), length(30))
        assert cap.to("lb") == pytest.approx(72_500)

    def test_at_plotted_point_matches_exact(self, us_chart) -> None:
        exact = us_chart.capacity_exact(length(150), length(60))
        interp = us_chart.capacity_interpolated(length(150), length(60))
        assert interp.value == pytest.approx(exact.value)

    def test_radius_beyond_shorter_row(self, us_chart) -> None:
        # Row 150 ft reaches 80 ft but row 100 ft stops at 60 ft
        assert us_chart.capacity_interpolated(length(150), length(70)).to("lb") == pytest.approx(20_000)
        with pytest.raises(RadiusOutOfRange):
            us_chart.capacity_interpolated(length(125), length(70))

    @pytest.mark.parametrize("boom", [90.0, 200.0])
    def test_boom_outside_chart(self, us_chart, boom) -> None:
        with pytest.raises(BoomLengthNotFound):
            us_chart.capacity_interpolated(length(boom), length(30))

    def test_radius_below_chart(self, us_chart) -> None:
        with pytest.raises(RadiusOutOfRange):
            us_chart.capacity_interpolated(length(100), length(10))

    def test_metric_bilinear(self, metric_chart) -> None:
        cap = metric_chart.capacity_interpolated(length(35, "m"), length(10, "m"))
        assert cap.to("kg") == pytest.approx(18_000)

    def test_boom_bounds(self, us_chart) -> None:
        assert us_chart.find_boom_bounds(length(125)) == (0, 1)
        assert us_chart.find_boom_bounds(length(100)) == (0, 0)
        assert us_chart.find_boom_bounds(length(100.05)) == (0, 0)

    def test_derated_capacity(self, us_chart) -> None:
        cap = us_chart.derated_capacity(length(100), length(30), 0.8)
        assert cap.to("lb") == pytest.approx(64_000)

    def test_negative_derating_rejected(self, us_chart) -> None:
        with pytest.raises(InvalidConfiguration):
            us_chart.derated_capacity(length(100), length(30), -0.1)


class TestBounds:
    def test_boom_valid(self, us_chart) -> None:
        assert us_chart.is_boom_valid(length(125))
        assert not us_chart.is_boom_valid(length(160))

    def test_radius_valid_in_either_bounding_row(self, us_chart) -> None:
        assert us_chart.is_radius_valid(length(125), length(70))
        assert not us_chart.is_radius_valid(length(125), length(85))

    def test_ranges(self, us_chart) -> None:
        lo, hi = us_chart.radius_range(length(125))
        assert (lo.to("ft"), hi.to("ft")) == (pytest.approx(20), pytest.approx(80))
        lo, hi = us_chart.boom_range()
        assert (lo.to("ft"), hi.to("ft")) == (pytest.approx(100), pytest.approx(150))

    def test_envelope(self, us_chart) -> None:
        assert us_chart.max_capacity().to("lb") == pytest.approx(100_000)
        assert us_chart.min_radius().to("ft") == pytest.approx(20)
        assert us_chart.max_radius().to("ft") == pytest.approx(80)

    def test_validate_bounds(self, us_chart) -> None:
        us_chart.validate_bounds(length(125), length(30))
        with pytest.raises(BoomLengthNotFound):
            us_chart.validate_bounds(length(160), length(30))
        with pytest.raises(RadiusOutOfRange):
            us_chart.validate_bounds(length(125), length(90))

    def test_metric_boom_lengths(self, metric_chart) -> None:
        booms = [b.to("m") for b in metric_chart.boom_lengths()]
        assert booms == [pytest.approx(30.0), pytest.approx(40.0)]


class TestSparseData:
    def test_no_boom_lengths(self) -> None:
        chart = _empty_chart([], [])
        with pytest.raises(NoData):
            chart.capacity_interpolated(length(100), length(30))
        with pytest.raises(NoData):
            chart.boom_range()
        assert not chart.is_boom_valid(length(100))

    def test_empty_row(self) -> None:
        chart = _empty_chart([UnitValue(100.0, "ft")], [[]])
        with pytest.raises(NoData):
            chart.interpolate_radius(0, length(30))
        with pytest.raises(NoData):
            chart.max_capacity()

    def test_missing_row(self) -> None:
        chart = _empty_chart(
            [UnitValue(100.0, "ft"), UnitValue(150.0, "ft")],
            [[(UnitValue(20.0, "ft"), UnitValue(1000.0, "lbs"))]],
        )
        with pytest.raises(NoData):
            chart.capacity_interpolated(length(150), length(20))


class TestCapacityData:
    def test_capacity_at(self, us_chart) -> None:
        cd = us_chart.capacity_data
        assert cd.capacity_at(0, length(40)).to("lb") == pytest.approx(60_000)
        assert cd.capacity_at(0, length(40.05)) is not None
        assert cd.capacity_at(0, length(45)) is None

    def test_radii_for_boom(self, metric_chart) -> None:
        radii = [r.to("m") for r in metric_chart.capacity_data.radii_for_boom(1)]
        assert radii == [pytest.approx(5.0), pytest.approx(10.0), pytest.approx(20.0)]


def test_matches_configuration(us_chart) -> None:
    same = ChartConfiguration(
        support=OnOutriggers(Full()), boom=BoomConfiguration(UnitValue(100.0, "ft"))
    )
    other = ChartConfiguration(
        support=OnOutriggers(Intermediate(50.0)), boom=BoomConfiguration(UnitValue(100.0, "ft"))
    )
    assert us_chart.matches_configuration(same)
    assert not us_chart.matches_configuration(other)


class TestBundledCharts:
    def test_grove_exact(self, bundled_library) -> None:
        pkg = bundled_library.get_package("Grove", "GMK5250L")
        chart = pkg.charts[0]
        assert chart.capacity_exact(length(154.2), length(40)).to("lb") == pytest.approx(152_000)

    def test_grove_interpolated(self, bundled_library) -> None:
        chart = bundled_library.get_package("Grove", "GMK5250L").charts[0]
        cap = chart.capacity_interpolated(length(154.2), length(30))
        assert cap.to("lb") == pytest.approx(197_250)

    def test_liebherr_metric(self, bundled_library) -> None:
        chart = bundled_library.get_package("Liebherr", "LTM 1100-5.2").charts[0]
        assert chart.capacity_exact(length(47, "m"), length(12, "m")).to("kg") == pytest.approx(69_000)

    def test_feet_and_metre_queries_agree(self, bundled_library) -> None:
        chart = bundled_library.get_package("Grove", "GMK5250L").charts[0]
        imperial = chart.capacity_exact(length(154.2), length(40))
        metric = chart.capacity_exact(length(47.0, "m"), length(12.192, "m"))
        assert metric.to("lb") == pytest.approx(imperial.to("lb"))
