"""Pydantic request/response models for the API."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from cranecalc.load_chart.schema import ChartConfigurationModel


# ── Shared ────────────────────────────────────────────────────


class UnitValueInput(BaseModel):
    value: float
    unit: str  # e.g. "lbs", "kg", "ft^2", "m"


class RejectionMixin(BaseModel):
    accepted: bool = True
    reason: str | None = None  # human-readable "lift rejected" cause
    error_type: str | None = None  # exception class name


# ── Ground bearing ────────────────────────────────────────────


class SupportInput(BaseModel):
    name: str
    x: float  # lateral, right positive
    y: float = 0.0  # vertical, up positive
    z: float  # longitudinal, front positive
    contact_area: UnitValueInput


class GroundBearingInput(BaseModel):
    crane_weight: UnitValueInput
    crane_cog: tuple[float, float, float]
    load_weight: UnitValueInput
    load_position: tuple[float, float, float]
    length_unit: str = "ft"  # applies to every coordinate above
    supports: list[SupportInput]
    allowable_psi: float | None = None
    soil: str | None = None  # named soil, used when allowable_psi is absent
    safety_factor: float = 1.0


class ReactionOutput(BaseModel):
    name: str
    force_lbf: float
    pressure_psi: float
    contact_area_sq_ft: float


class SoilCheckOutput(BaseModel):
    allowable_psi: float
    safety_factor: float
    derated_allowable_psi: float
    passed: bool
    margin_psi: float
    required_mat_area_sq_ft: float


class GroundBearingOutput(RejectionMixin):
    method: str | None = None
    reactions: list[ReactionOutput] = []
    max_reaction_lbf: float | None = None
    max_pressure_psi: float | None = None
    critical_support: str | None = None
    combined_cog_ft: tuple[float, float, float] | None = None
    soil_check: SoilCheckOutput | None = None


class SoilOutput(BaseModel):
    name: str
    allowable_psi: float


# ── Load charts ───────────────────────────────────────────────


class ChartSummary(BaseModel):
    id: str
    description: str


class ChartPackageInfo(BaseModel):
    manufacturer: str
    model: str
    crane_type: str
    chart_revision: str | None = None
    charts: list[ChartSummary]


class ChartErrorOutput(BaseModel):
    chart_id: str
    error: str


class ValidationOutput(BaseModel):
    valid: bool
    error_count: int
    errors: dict[str, list[ChartErrorOutput]]


class CapacityRequest(BaseModel):
    manufacturer: str
    model: str
    configuration: ChartConfigurationModel
    radius: UnitValueInput
    boom_length: UnitValueInput | None = None  # row to read; defaults to the configured boom
    exact: bool = False
    load: UnitValueInput | None = None


class CapacityOutput(RejectionMixin):
    chart_id: str | None = None
    capacity_lb: float | None = None
    capacity_kg: float | None = None
    utilisation: float | None = None


# ── Tower crane ───────────────────────────────────────────────


class TowerCheckInput(BaseModel):
    max_moment_ft_lb: float
    jib_length_ft: float
    min_radius_ft: float = 20.0
    max_radius_ft: float | None = None
    margins: Literal["standard", "conservative", "very_conservative"] = "standard"
    safety_factor: float = 1.0
    load: UnitValueInput
    radius: UnitValueInput


class TowerCheckOutput(RejectionMixin):
    limiter_status: str
    load_moment_ft_lb: float
    capacity_lb: float
    utilisation: float | None = None
