"""Demo: four-outrigger ground bearing check, chart lookup and tower limiter."""

from cranecalc import (
    GroundBearingAnalysis,
    MomentLimiter,
    PhysicalLimitError,
    TowerMoment,
    area,
    default_library,
    edge_stability,
    generate_ground_bearing_report,
    length,
    mass,
    soil_capacity,
)
from cranecalc.config import Settings, init_logging
from cranecalc.load_chart import BoomConfiguration, ChartConfiguration, Full, OnOutriggers
from cranecalc.plotting import plot_load_chart, plot_support_layout
from cranecalc.units import UnitValue


def main():
    init_logging(Settings.from_env())

    # ── Ground bearing ────────────────────────────────────────────
    a = GroundBearingAnalysis(
        crane_weight=mass(100_000),
        crane_cog=(0, 8, 0),
        load_weight=mass(50_000),
        load_position=(0, 60, 0),
    )
    pad = area(4, "ft^2")  # 2 ft x 2 ft outrigger pads
    a.add_support("Front-Left", -10, 0, 10, pad)
    a.add_support("Front-Right", 10, 0, 10, pad)
    a.add_support("Rear-Left", -10, 0, -10, pad)
    a.add_support("Rear-Right", 10, 0, -10, pad)

    result = a.calculate_reactions()
    result.print_reactions()
    print(result.summary())

    worst = edge_stability(a)
    print(f"Stability factor {worst.stability_factor:.2f} about the {worst.tipping_edge.value} edge")

    allowable = soil_capacity("medium_clay")
    try:
        a.validate_soil_capacity(allowable)
        print(f"Soil OK on medium clay ({allowable.to('psi'):.0f} psi)")
    except PhysicalLimitError as e:
        print(f"LIFT REJECTED: {e}")
    mat = a.required_mat_area(allowable, safety_factor=1.5)
    print(f"Required mat area (SF 1.5): {mat.to('ft^2'):.2f} sq ft per support")

    plot_support_layout(a, result)

    # ── Load chart ────────────────────────────────────────────────
    library = default_library()
    config = ChartConfiguration(
        support=OnOutriggers(Full()),
        boom=BoomConfiguration(UnitValue(154.2, "ft")),
    )
    chart = library.find_chart("Grove", "GMK5250L", config)
    cap = chart.capacity_interpolated(length(154.2), length(30))
    print(f"\n{chart.description}: {cap.to('lb'):,.0f} lbs at 30 ft")
    plot_load_chart(chart)

    # ── Tower crane limiter ───────────────────────────────────────
    limiter = MomentLimiter.standard(TowerMoment(1_000_000))
    for moment in (500_000, 900_000, 1_100_000):
        print(f"  {moment:>9,} ft-lb -> {limiter.check(TowerMoment(moment)).value}")

    # ── PDF Report ────────────────────────────────────────────────
    generate_ground_bearing_report(
        result,
        "output/ground_bearing_report.pdf",
        allowable_pressure=allowable,
        safety_factor=1.5,
        project_title="Example Lift",
        job_no="J-2024-001",
        calcs_by="DM",
    )


if __name__ == "__main__":
    main()
