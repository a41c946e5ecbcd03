"""Converts JSON input into cranecalc calls.

Configuration errors propagate to the caller (HTTP 422).  Physical-limit
errors are the analysis answering "no" and come back as outputs with
``accepted=False``.
"""

from __future__ import annotations

from cranecalc import (
    ChartLibrary,
    GroundBearingAnalysis,
    GroundBearingResult,
    PhysicalLimitError,
    SafetyMargins,
    TowerCrane,
    TowerCraneType,
    TowerJib,
    TowerMoment,
    soil_capacity,
)
from cranecalc.errors import ExceedsAllowable, InvalidConfiguration
from cranecalc.load_chart.schema import configuration_from_model
from cranecalc.units import Dimension, Quantity, length

from .schemas import (
    CapacityOutput,
    CapacityRequest,
    GroundBearingInput,
    GroundBearingOutput,
    ReactionOutput,
    SoilCheckOutput,
    TowerCheckInput,
    TowerCheckOutput,
    UnitValueInput,
)

_MARGIN_PRESETS = {
    "standard": SafetyMargins.standard,
    "conservative": SafetyMargins.conservative,
    "very_conservative": SafetyMargins.very_conservative,
}


def _q(v: UnitValueInput, dimension: Dimension) -> Quantity:
    return Quantity.of(v.value, v.unit, dimension)


def _rejected(out_cls, e: PhysicalLimitError, **fields):
    return out_cls(accepted=False, reason=str(e), error_type=type(e).__name__, **fields)


# ── Ground bearing ────────────────────────────────────────────


def build_ground_bearing(data: GroundBearingInput) -> GroundBearingAnalysis:
    unit = data.length_unit
    analysis = GroundBearingAnalysis(
        crane_weight=_q(data.crane_weight, Dimension.MASS),
        crane_cog=[length(c, unit) for c in data.crane_cog],
        load_weight=_q(data.load_weight, Dimension.MASS),
        load_position=[length(c, unit) for c in data.load_position],
    )
    for s in data.supports:
        analysis.add_support(
            s.name,
            length(s.x, unit),
            length(s.y, unit),
            length(s.z, unit),
            _q(s.contact_area, Dimension.AREA),
        )
    return analysis


def _reaction_fields(result: GroundBearingResult) -> dict:
    return dict(
        method=result.method,
        reactions=[
            ReactionOutput(
                name=r.name,
                force_lbf=round(r.force_lbf, 2),
                pressure_psi=round(r.pressure_psi, 3),
                contact_area_sq_ft=round(r.contact_area.to("ft^2"), 4),
            )
            for r in result.reactions
        ],
        max_reaction_lbf=round(result.max_reaction_lbf, 2),
        max_pressure_psi=round(result.max_pressure_psi, 3),
        critical_support=result.critical_support.name,
        combined_cog_ft=tuple(round(c, 4) for c in result.combined_cog),
    )


def allowable_psi_for(data: GroundBearingInput) -> float | None:
    if data.allowable_psi is not None:
        return data.allowable_psi
    if data.soil is not None:
        return soil_capacity(data.soil).to("psi")
    return None


def run_ground_bearing(data: GroundBearingInput) -> GroundBearingOutput:
    if data.safety_factor <= 0:
        raise InvalidConfiguration("safety factor must be > 0")
    analysis = build_ground_bearing(data)

    try:
        result = analysis.calculate_reactions()
    except PhysicalLimitError as e:
        return _rejected(GroundBearingOutput, e)

    fields = _reaction_fields(result)
    allowable = allowable_psi_for(data)
    if allowable is None:
        return GroundBearingOutput(**fields)

    derated = allowable / data.safety_factor
    soil = SoilCheckOutput(
        allowable_psi=allowable,
        safety_factor=data.safety_factor,
        derated_allowable_psi=round(derated, 3),
        passed=True,
        margin_psi=round(result.margin(derated).to("psi"), 3),
        required_mat_area_sq_ft=round(
            analysis.required_mat_area(allowable, data.safety_factor).to("ft^2"), 4
        ),
    )
    try:
        analysis.validate_soil_capacity(derated)
    except ExceedsAllowable as e:
        return _rejected(
            GroundBearingOutput, e, soil_check=soil.model_copy(update={"passed": False}), **fields
        )
    return GroundBearingOutput(soil_check=soil, **fields)


# ── Load charts ───────────────────────────────────────────────


def lookup_capacity(data: CapacityRequest, library: ChartLibrary) -> CapacityOutput:
    """Chart lookup; ``ChartLibraryError`` propagates to the caller (HTTP 404)."""
    config = configuration_from_model(data.configuration)
    chart = library.find_chart(data.manufacturer, data.model, config)

    # The configured boom selects the chart; the lookup may use another row.
    if data.boom_length is not None:
        boom_length = _q(data.boom_length, Dimension.LENGTH)
    else:
        boom_length = config.boom.length_distance()
    radius = _q(data.radius, Dimension.LENGTH)

    try:
        if data.exact:
            capacity = chart.capacity_exact(boom_length, radius)
        else:
            capacity = chart.capacity_interpolated(boom_length, radius)
    except PhysicalLimitError as e:
        return _rejected(CapacityOutput, e, chart_id=chart.id)

    out = CapacityOutput(
        chart_id=chart.id,
        capacity_lb=round(capacity.to("lb"), 2),
        capacity_kg=round(capacity.to("kg"), 2),
    )
    if data.load is not None:
        load = _q(data.load, Dimension.MASS)
        out.utilisation = round(load.value / capacity.value, 4) if capacity.value > 0 else None
        if capacity.value <= 0 or load.value > capacity.value:
            out.accepted = False
            out.reason = (
                f"Load {load.to('lb'):,.0f} lbs exceeds chart capacity "
                f"{capacity.to('lb'):,.0f} lbs"
            )
            out.error_type = "OverCapacity"
    return out


# ── Tower crane ───────────────────────────────────────────────


def check_tower(data: TowerCheckInput) -> TowerCheckOutput:
    preset = _MARGIN_PRESETS[data.margins]()
    margins = SafetyMargins(preset.warning_factor, preset.shutdown_factor, data.safety_factor)
    crane = TowerCrane(
        manufacturer="",
        model="",
        crane_type=TowerCraneType.FLAT_TOP,
        tower_height=0.0,
        jib=TowerJib.of(data.jib_length_ft, data.min_radius_ft, data.max_radius_ft),
        max_moment=TowerMoment(data.max_moment_ft_lb),
        margins=margins,
    )
    load = _q(data.load, Dimension.MASS)
    radius = _q(data.radius, Dimension.LENGTH)

    fields = dict(
        limiter_status=crane.check_moment_limiter(load, radius).value,
        load_moment_ft_lb=round(crane.load_moment(load, radius).ft_lb, 2),
        capacity_lb=round(crane.capacity_at_radius(radius).to("lb"), 2),
    )
    try:
        analysis = crane.validate_lift(load, radius)
    except PhysicalLimitError as e:
        return _rejected(TowerCheckOutput, e, **fields)
    return TowerCheckOutput(utilisation=round(analysis.utilization, 4), **fields)
