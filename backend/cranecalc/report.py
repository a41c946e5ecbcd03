"""Generate a PDF ground bearing report from analysis results."""

from __future__ import annotations

import logging
import subprocess
import tempfile
from pathlib import Path

import jinja2

from .errors import InvalidConfiguration
from .results import GroundBearingResult
from .units import Dimension, Scalar, to_canonical

_LOG = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).parent / "templates"

_TEX_SPECIALS = {
    "\\": r"\textbackslash{}",
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}


def _tex_escape(text: str) -> str:
    return "".join(_TEX_SPECIALS.get(c, c) for c in str(text))


def _make_env() -> jinja2.Environment:
    """Jinja2 environment with LaTeX-safe delimiters."""
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
        block_start_string=r"\BLOCK{",
        block_end_string="}",
        variable_start_string=r"\VAR{",
        variable_end_string="}",
        comment_start_string=r"\#{",
        comment_end_string="}",
        line_statement_prefix="%%",
        line_comment_prefix="%#",
        trim_blocks=True,
        lstrip_blocks=True,
        autoescape=False,
    )
    env.filters["tex"] = _tex_escape
    return env


def _template_vars(
    result: GroundBearingResult,
    allowable_pressure: Scalar | None,
    safety_factor: float,
) -> dict:
    fmt0 = lambda v: f"{v:,.0f}"
    fmt1 = lambda v: f"{v:.1f}"
    fmt2 = lambda v: f"{v:.2f}"

    rows = [
        dict(
            name=r.name,
            force=fmt0(r.force_lbf),
            pressure=fmt1(r.pressure_psi),
            area=fmt2(r.contact_area.to("ft^2")),
            critical=(i == result.critical_support_index),
        )
        for i, r in enumerate(result.reactions)
    ]

    tvars = dict(
        method=result.method,
        conservative=(result.method == "conservative"),
        total_load=fmt0(result.total_load_lb),
        cog_x=fmt2(result.combined_cog[0]),
        cog_y=fmt2(result.combined_cog[1]),
        cog_z=fmt2(result.combined_cog[2]),
        rows=rows,
        total_reaction=fmt0(result.total_reaction_lbf),
        critical_name=result.critical_support.name,
        max_reaction=fmt0(result.max_reaction_lbf),
        max_pressure=fmt1(result.max_pressure_psi),
        has_soil_check=allowable_pressure is not None,
    )

    if allowable_pressure is not None:
        allowable = to_canonical(allowable_pressure, Dimension.PRESSURE)
        if allowable <= 0:
            raise InvalidConfiguration("allowable pressure must be > 0")
        derated = allowable / safety_factor
        tvars.update(
            allowable=fmt1(allowable),
            safety_factor=fmt2(safety_factor),
            derated=fmt1(derated),
            utilisation=fmt2(result.max_pressure_psi / derated),
            soil_ok=result.within_allowable(derated),
            required_area=fmt2(
                result.required_contact_area(allowable, safety_factor).to("ft^2")
            ),
        )
    return tvars


def render_ground_bearing_tex(
    result: GroundBearingResult,
    allowable_pressure: Scalar | None = None,
    safety_factor: float = 1.0,
    project_title: str = "",
    job_no: str = "",
    calcs_by: str = "",
    checked_by: str = "",
) -> str:
    """Return the LaTeX source of the report without compiling it."""
    if safety_factor <= 0:
        raise InvalidConfiguration("safety factor must be > 0")
    template = _make_env().get_template("ground_bearing_report.tex.j2")
    tvars = _template_vars(result, allowable_pressure, safety_factor)
    tvars.update(
        project_title=project_title,
        job_no=job_no,
        calcs_by=calcs_by,
        checked_by=checked_by,
    )
    return template.render(**tvars)


def generate_ground_bearing_report(
    result: GroundBearingResult,
    output_path: str | Path,
    allowable_pressure: Scalar | None = None,
    safety_factor: float = 1.0,
    project_title: str = "",
    job_no: str = "",
    calcs_by: str = "",
    checked_by: str = "",
) -> Path:
    """Render the LaTeX template and compile to PDF.

    Parameters
    ----------
    result : GroundBearingResult
        Output of ``GroundBearingAnalysis.calculate_reactions()``.
    output_path : str or Path
        Destination for the PDF (e.g. ``"output/ground_bearing.pdf"``).
    allowable_pressure : Quantity or float (psi), optional
        Adds the soil check section when given.
    safety_factor : float
        Divides the allowable pressure in the soil check.
    project_title, job_no, calcs_by, checked_by : str
        Project information fields displayed in the page header.

    Returns
    -------
    Path
        Absolute path to the generated PDF.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    tex_source = render_ground_bearing_tex(
        result,
        allowable_pressure=allowable_pressure,
        safety_factor=safety_factor,
        project_title=project_title,
        job_no=job_no,
        calcs_by=calcs_by,
        checked_by=checked_by,
    )

    with tempfile.TemporaryDirectory() as tmp:
        tex_file = Path(tmp) / "report.tex"
        tex_file.write_text(tex_source, encoding="utf-8")

        # Run pdflatex twice for cross-references
        for _ in range(2):
            proc = subprocess.run(
                ["pdflatex", "-interaction=nonstopmode", "-halt-on-error", "report.tex"],
                cwd=tmp,
                capture_output=True,
                text=True,
                timeout=60,
            )
            if proc.returncode != 0:
                debug_tex = output_path.with_suffix(".tex")
                debug_tex.write_text(tex_source, encoding="utf-8")
                raise RuntimeError(
                    f"pdflatex failed (see {debug_tex} for source).\n"
                    f"stderr: {proc.stderr[-500:]}\n"
                    f"stdout: {proc.stdout[-500:]}"
                )

        output_path.write_bytes((Path(tmp) / "report.pdf").read_bytes())

    _LOG.info("Saved: %s", output_path)
    return output_path.resolve()
