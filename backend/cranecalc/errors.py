"""Error taxonomy for lift-planning analyses.

Two families matter to callers:

* ``ConfigurationError``: the caller built something malformed (too few
  supports, degenerate geometry, an unknown unit string).  Fix the input.
* ``PhysicalLimitError``: the analysis ran and the lift is not safe as
  configured (tipping, soil overstressed, outside the load chart, moment
  exceeded).  This is a correct answer, not a bug.

``ConfigurationError`` also derives from ``ValueError`` so code that already
treats bad input as ``ValueError`` keeps working.
"""

from __future__ import annotations


class CraneCalcError(Exception):
    """Base class for every error raised by cranecalc."""


# ── Configuration errors ─────────────────────────────────────────


class ConfigurationError(CraneCalcError, ValueError):
    """Input is malformed; retrying with the same input cannot succeed."""


class InsufficientSupports(ConfigurationError):
    def __init__(self, count: int, required: int = 3) -> None:
        self.count = count
        self.required = required
        super().__init__(
            f"Insufficient support points (need at least {required}, got {count})"
        )


class InvalidConfiguration(ConfigurationError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid configuration: {reason}")


class UnitError(ConfigurationError):
    """Unknown or mismatched unit string."""

    def __init__(self, unit: str, message: str | None = None) -> None:
        self.unit = unit
        super().__init__(message or f"Unknown unit: {unit!r}")


class DimensionError(UnitError):
    """Arithmetic or conversion across incompatible physical dimensions."""

    def __init__(self, expected: str, actual: str, unit: str = "") -> None:
        self.expected = expected
        self.actual = actual
        if unit:
            msg = f"Unit {unit!r} is a {actual} unit, expected a {expected} unit"
        else:
            msg = f"Incompatible dimensions: expected {expected}, got {actual}"
        super().__init__(unit, msg)


class ChartFormatError(ConfigurationError):
    """A persisted chart package does not match the chart schema."""


# ── Physical-limit errors ────────────────────────────────────────


class PhysicalLimitError(CraneCalcError):
    """The lift as configured exceeds a physical or rated limit."""


class UnstableConfiguration(PhysicalLimitError):
    def __init__(self, support_name: str, reaction_lb: float | None = None) -> None:
        self.support_name = support_name
        self.reaction_lb = reaction_lb
        super().__init__(f"Unstable: negative reaction at support {support_name}")


class ExceedsAllowable(PhysicalLimitError):
    def __init__(self, actual_psi: float, allowable_psi: float) -> None:
        self.actual_psi = actual_psi
        self.allowable_psi = allowable_psi
        super().__init__(
            f"Ground pressure {actual_psi:.1f} psi exceeds allowable "
            f"{allowable_psi:.1f} psi"
        )


class BoomLengthNotFound(PhysicalLimitError):
    def __init__(self, boom_length_ft: float) -> None:
        self.boom_length_ft = boom_length_ft
        super().__init__(f"Boom length {boom_length_ft:.2f} ft not found")


class RadiusOutOfRange(PhysicalLimitError):
    def __init__(self, radius_ft: float) -> None:
        self.radius_ft = radius_ft
        super().__init__(f"Radius {radius_ft:.2f} ft out of range")


class NoData(PhysicalLimitError):
    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        msg = "No data available for interpolation"
        super().__init__(f"{msg}: {detail}" if detail else msg)


class MomentExceeded(PhysicalLimitError):
    def __init__(self, load_moment_ft_lb: float, max_moment_ft_lb: float) -> None:
        self.load_moment_ft_lb = load_moment_ft_lb
        self.max_moment_ft_lb = max_moment_ft_lb
        super().__init__(
            f"Load moment {load_moment_ft_lb:,.0f} ft-lb exceeds maximum moment "
            f"{max_moment_ft_lb:,.0f} ft-lb"
        )


class MomentLimiterShutdown(PhysicalLimitError):
    def __init__(self, current_moment_ft_lb: float) -> None:
        self.current_moment_ft_lb = current_moment_ft_lb
        super().__init__(
            f"Moment limiter shutdown: current moment {current_moment_ft_lb:,.0f} ft-lb"
        )


class RadiusTooSmall(PhysicalLimitError):
    def __init__(self, requested_ft: float, minimum_ft: float) -> None:
        self.requested_ft = requested_ft
        self.minimum_ft = minimum_ft
        super().__init__(
            f"Radius {requested_ft:.2f} ft is less than minimum {minimum_ft:.2f} ft"
        )


class RadiusTooLarge(PhysicalLimitError):
    def __init__(self, requested_ft: float, maximum_ft: float) -> None:
        self.requested_ft = requested_ft
        self.maximum_ft = maximum_ft
        super().__init__(
            f"Radius {requested_ft:.2f} ft exceeds maximum {maximum_ft:.2f} ft"
        )


# ── Chart library errors ─────────────────────────────────────────


class ChartLibraryError(CraneCalcError):
    """Lookup failures against the chart library."""


class PackageNotFound(ChartLibraryError):
    def __init__(self, manufacturer: str, model: str) -> None:
        self.manufacturer = manufacturer
        self.model = model
        super().__init__(f"Chart package not found for crane: {manufacturer} {model}")


class NoMatchingChart(ChartLibraryError):
    def __init__(self) -> None:
        super().__init__("No matching chart found for configuration")
