"""FastAPI application for crane lift planning."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from starlette.background import BackgroundTask

from cranecalc import (
    SOIL_CAPACITIES,
    ChartLibrary,
    ChartLibraryError,
    ConfigurationError,
    PhysicalLimitError,
    default_library,
    generate_ground_bearing_report,
)
from cranecalc.config import Settings, init_logging

from .builder import (
    allowable_psi_for,
    build_ground_bearing,
    check_tower,
    lookup_capacity,
    run_ground_bearing,
)
from .schemas import (
    CapacityOutput,
    CapacityRequest,
    ChartErrorOutput,
    ChartPackageInfo,
    ChartSummary,
    GroundBearingInput,
    GroundBearingOutput,
    SoilOutput,
    TowerCheckInput,
    TowerCheckOutput,
    ValidationOutput,
)

settings = Settings.from_env()
init_logging(settings)
_LOG = logging.getLogger(__name__)

app = FastAPI(title="Crane Lift Planning API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_library() -> ChartLibrary:
    return default_library()


@app.get("/health")
def health() -> dict[str, str]:
    """Lightweight healthcheck for deployment platforms."""
    return {"status": "ok"}


# ── Ground bearing ────────────────────────────────────────────


@app.get("/api/soils", response_model=list[SoilOutput])
def get_soils() -> list[SoilOutput]:
    """Presumptive allowable bearing pressures."""
    return [
        SoilOutput(name=name, allowable_psi=q.to("psi"))
        for name, q in SOIL_CAPACITIES.items()
    ]


@app.post("/api/ground-bearing/analyze", response_model=GroundBearingOutput)
def analyze_ground_bearing(data: GroundBearingInput) -> GroundBearingOutput:
    """Support reactions, ground pressures and optional soil check."""
    try:
        return run_ground_bearing(data)
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/api/ground-bearing/report")
def ground_bearing_report(data: GroundBearingInput):
    """Generate the ground bearing PDF and return as file download."""
    if data.safety_factor <= 0:
        raise HTTPException(status_code=422, detail="safety factor must be > 0")
    try:
        allowable = allowable_psi_for(data)
        analysis = build_ground_bearing(data)
        result = analysis.calculate_reactions()
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except PhysicalLimitError as e:
        raise HTTPException(status_code=409, detail=f"LIFT REJECTED: {e}")

    with tempfile.TemporaryDirectory() as tmp_dir:
        output_path = Path(tmp_dir) / "report.pdf"
        try:
            generate_ground_bearing_report(
                result,
                output_path,
                allowable_pressure=allowable,
                safety_factor=data.safety_factor,
            )
        except (RuntimeError, OSError) as e:
            _LOG.error("Report generation failed: %s", e)
            raise HTTPException(
                status_code=500,
                detail=f"Report generation failed: {e}",
            )

        named_tmp = tempfile.NamedTemporaryFile(suffix=".pdf", delete=False)
        final_path = Path(named_tmp.name)
        named_tmp.close()
        final_path.write_bytes(output_path.read_bytes())

    return FileResponse(
        path=str(final_path),
        media_type="application/pdf",
        filename="ground_bearing_report.pdf",
        background=BackgroundTask(lambda: final_path.unlink(missing_ok=True)),
    )


# ── Load charts ───────────────────────────────────────────────


@app.get("/api/charts", response_model=list[ChartPackageInfo])
def list_charts(library: ChartLibrary = Depends(get_library)) -> list[ChartPackageInfo]:
    """Crane models and chart ids available in the library."""
    packages = sorted(library.packages(), key=lambda p: p.key)
    return [
        ChartPackageInfo(
            manufacturer=p.crane_info.manufacturer,
            model=p.crane_info.model,
            crane_type=p.crane_info.crane_type.value,
            chart_revision=p.crane_info.chart_revision,
            charts=[ChartSummary(id=c.id, description=c.description) for c in p.charts],
        )
        for p in packages
    ]


@app.get("/api/charts/validate", response_model=ValidationOutput)
def validate_charts(library: ChartLibrary = Depends(get_library)) -> ValidationOutput:
    """Lint every chart in the library."""
    report = library.validate_all()
    return ValidationOutput(
        valid=report.is_valid,
        error_count=report.error_count,
        errors={
            key: [ChartErrorOutput(chart_id=e.chart_id, error=e.error) for e in errs]
            for key, errs in report.errors.items()
        },
    )


@app.post("/api/charts/capacity", response_model=CapacityOutput)
def chart_capacity(
    data: CapacityRequest, library: ChartLibrary = Depends(get_library)
) -> CapacityOutput:
    """Rated capacity from the matching chart, optionally with utilisation."""
    try:
        return lookup_capacity(data, library)
    except ChartLibraryError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e))


# ── Tower crane ───────────────────────────────────────────────


@app.post("/api/tower/check", response_model=TowerCheckOutput)
def tower_check(data: TowerCheckInput) -> TowerCheckOutput:
    """Moment limiter status and capacity at radius."""
    try:
        return check_tower(data)
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e))
