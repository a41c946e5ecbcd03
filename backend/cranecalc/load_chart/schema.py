"""Pydantic models for the persisted chart-package JSON.

The layout is field-for-field the one chart files are written in.  Enum
variants are externally tagged: unit variants are bare strings (``"Full"``),
variants with data are single-key objects
(``{"Intermediate": {"percent": 50}}``, ``{"OnOutriggers": {...}}``).
"""

from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from ..errors import ChartFormatError
from ..units import UnitValue
from .chart import LoadChart
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


class _Tagged(BaseModel):
    model_config = ConfigDict(extra="forbid")


class UnitValueModel(BaseModel):
    value: float
    unit: str


# ── Support ──────────────────────────────────────────────────────


class IntermediateBody(BaseModel):
    percent: float


class IntermediateModel(_Tagged):
    Intermediate: IntermediateBody


class CustomBody(BaseModel):
    distance: UnitValueModel


class CustomModel(_Tagged):
    Custom: CustomBody


ExtensionModel = Union[Literal["Full", "Minimum"], IntermediateModel, CustomModel]


class OnRubberBody(BaseModel):
    speed_restriction: str | None = None


class OnRubberModel(_Tagged):
    OnRubber: OnRubberBody


class OnOutriggersBody(BaseModel):
    extension: ExtensionModel
    swing_restriction: SwingRestriction | None = None


class OnOutriggersModel(_Tagged):
    OnOutriggers: OnOutriggersBody


class OnCrawlersBody(BaseModel):
    track_config: str


class OnCrawlersModel(_Tagged):
    OnCrawlers: OnCrawlersBody


SupportModel = Union[OnRubberModel, OnOutriggersModel, OnCrawlersModel]


# ── Boom / counterweight ─────────────────────────────────────────


class AngleRangeModel(BaseModel):
    min: UnitValueModel
    max: UnitValueModel


class JibModel(BaseModel):
    length: UnitValueModel
    angle: UnitValueModel
    offset: UnitValueModel | None = None


class BoomModel(BaseModel):
    length: UnitValueModel
    angle_range: AngleRangeModel | None = None
    jib: JibModel | None = None


class CounterweightModel(BaseModel):
    weight: UnitValueModel
    configuration: str = ""


class ChartConfigurationModel(BaseModel):
    support: SupportModel
    boom: BoomModel
    counterweight: CounterweightModel | None = None
    additional: dict[str, str] = {}


class CapacityDataModel(BaseModel):
    boom_lengths: list[UnitValueModel]
    data: list[list[tuple[UnitValueModel, UnitValueModel]]]


class LoadChartModel(BaseModel):
    id: str
    description: str = ""
    configuration: ChartConfigurationModel
    capacity_data: CapacityDataModel
    notes: list[str] = []


class CraneInfoModel(BaseModel):
    manufacturer: str
    model: str
    serial_number: str | None = None
    crane_type: CraneType
    year: int | None = None
    chart_revision: str | None = None


class LoadChartPackageModel(BaseModel):
    crane_info: CraneInfoModel
    charts: list[LoadChartModel] = []


# ── Model -> domain ──────────────────────────────────────────────


def _uv(m: UnitValueModel | None) -> UnitValue | None:
    return None if m is None else UnitValue(m.value, m.unit)


def _extension_from_model(m: ExtensionModel) -> OutriggerExtension:
    if m == "Full":
        return Full()
    if m == "Minimum":
        return Minimum()
    if isinstance(m, IntermediateModel):
        return Intermediate(m.Intermediate.percent)
    return Custom(_uv(m.Custom.distance))


def _support_from_model(m: SupportModel) -> SupportConfiguration:
    if isinstance(m, OnRubberModel):
        return OnRubber(m.OnRubber.speed_restriction)
    if isinstance(m, OnOutriggersModel):
        body = m.OnOutriggers
        return OnOutriggers(_extension_from_model(body.extension), body.swing_restriction)
    return OnCrawlers(m.OnCrawlers.track_config)


def configuration_from_model(m: ChartConfigurationModel) -> ChartConfiguration:
    boom = m.boom
    angle_range = None
    if boom.angle_range is not None:
        angle_range = AngleRange(_uv(boom.angle_range.min), _uv(boom.angle_range.max))
    jib = None
    if boom.jib is not None:
        jib = JibConfiguration(_uv(boom.jib.length), _uv(boom.jib.angle), _uv(boom.jib.offset))
    counterweight = None
    if m.counterweight is not None:
        counterweight = CounterweightConfiguration(
            _uv(m.counterweight.weight), m.counterweight.configuration
        )
    return ChartConfiguration(
        support=_support_from_model(m.support),
        boom=BoomConfiguration(_uv(boom.length), angle_range, jib),
        counterweight=counterweight,
        additional=dict(m.additional),
    )


def _chart_from_model(m: LoadChartModel) -> LoadChart:
    return LoadChart(
        id=m.id,
        description=m.description,
        configuration=configuration_from_model(m.configuration),
        capacity_data=CapacityData(
            boom_lengths=[_uv(b) for b in m.capacity_data.boom_lengths],
            data=[[(_uv(r), _uv(w)) for r, w in row] for row in m.capacity_data.data],
        ),
        notes=list(m.notes),
    )


def _crane_info_from_model(m: CraneInfoModel) -> CraneInfo:
    return CraneInfo(
        manufacturer=m.manufacturer,
        model=m.model,
        crane_type=m.crane_type,
        serial_number=m.serial_number,
        year=m.year,
        chart_revision=m.chart_revision,
    )


def parse_package(data: str | bytes | dict[str, Any]) -> tuple[CraneInfo, list[LoadChart]]:
    """Validate a package document (JSON text or decoded dict)."""
    try:
        if isinstance(data, (str, bytes)):
            m = LoadChartPackageModel.model_validate_json(data)
        else:
            m = LoadChartPackageModel.model_validate(data)
    except ValidationError as e:
        raise ChartFormatError(f"Invalid chart package: {e}") from e
    return _crane_info_from_model(m.crane_info), [_chart_from_model(c) for c in m.charts]


# ── Domain -> JSON ───────────────────────────────────────────────


def _uv_dict(v: UnitValue | None) -> dict[str, Any] | None:
    return None if v is None else v.to_dict()


def _extension_to_json(ext: OutriggerExtension) -> Any:
    if isinstance(ext, Full):
        return "Full"
    if isinstance(ext, Minimum):
        return "Minimum"
    if isinstance(ext, Intermediate):
        return {"Intermediate": {"percent": ext.percent}}
    return {"Custom": {"distance": _uv_dict(ext.distance)}}


def _support_to_json(s: SupportConfiguration) -> dict[str, Any]:
    if isinstance(s, OnRubber):
        return {"OnRubber": {"speed_restriction": s.speed_restriction}}
    if isinstance(s, OnOutriggers):
        swing = s.swing_restriction.value if s.swing_restriction is not None else None
        return {
            "OnOutriggers": {
                "extension": _extension_to_json(s.extension),
                "swing_restriction": swing,
            }
        }
    return {"OnCrawlers": {"track_config": s.track_config}}


def configuration_to_json(c: ChartConfiguration) -> dict[str, Any]:
    boom = c.boom
    angle_range = None
    if boom.angle_range is not None:
        angle_range = {
            "min": _uv_dict(boom.angle_range.min),
            "max": _uv_dict(boom.angle_range.max),
        }
    jib = None
    if boom.jib is not None:
        jib = {
            "length": _uv_dict(boom.jib.length),
            "angle": _uv_dict(boom.jib.angle),
            "offset": _uv_dict(boom.jib.offset),
        }
    counterweight = None
    if c.counterweight is not None:
        counterweight = {
            "weight": _uv_dict(c.counterweight.weight),
            "configuration": c.counterweight.configuration,
        }
    return {
        "support": _support_to_json(c.support),
        "boom": {"length": _uv_dict(boom.length), "angle_range": angle_range, "jib": jib},
        "counterweight": counterweight,
        "additional": dict(c.additional),
    }


def _chart_to_json(chart: LoadChart) -> dict[str, Any]:
    cd = chart.capacity_data
    return {
        "id": chart.id,
        "description": chart.description,
        "configuration": configuration_to_json(chart.configuration),
        "capacity_data": {
            "boom_lengths": [_uv_dict(b) for b in cd.boom_lengths],
            "data": [[[_uv_dict(r), _uv_dict(w)] for r, w in row] for row in cd.data],
        },
        "notes": list(chart.notes),
    }


def dump_package(info: CraneInfo, charts: list[LoadChart]) -> dict[str, Any]:
    return {
        "crane_info": {
            "manufacturer": info.manufacturer,
            "model": info.model,
            "serial_number": info.serial_number,
            "crane_type": info.crane_type.value,
            "year": info.year,
            "chart_revision": info.chart_revision,
        },
        "charts": [_chart_to_json(c) for c in charts],
    }
