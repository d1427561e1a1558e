"""Logarithmic uncertainty codes (IETF RFC 6225 section 2.3).

An uncertainty code ``c`` stands for a radius of ``2**(m - c)`` where ``m`` is
the number of fractional bits of the field the uncertainty applies to. Larger
codes mean smaller uncertainty. Code 0 means the uncertainty is unknown.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..diagnostics import DiagnosticKind, DiagnosticLog

# Latitude, longitude and altitude codes are 6 bits; 35..63 are reserved.
MAX_LCI_UNCERTAINTY = 34
# Height above floor uncertainty is 8 bits; 25..255 are reserved.
MAX_Z_UNCERTAINTY = 24

# Compensates for float noise when the value is an exact power of two, so
# that decode followed by encode returns the original code.
_LOG2_EPSILON = 0.000001


def decode_uncertainty(
    code: int,
    binary_point: int,
    max_code: int = MAX_LCI_UNCERTAINTY,
    *,
    diagnostics: DiagnosticLog | None = None,
    field: str = "uncertainty",
) -> float:
    """Convert an uncertainty code to a physical uncertainty.

    Args:
        code: Wire code (0 = unknown)
        binary_point: Fractional bits ``m`` of the associated field
        max_code: Largest valid code; larger codes are clamped and reported
        diagnostics: Where to report clamping (optional)
        field: Field name used in diagnostics

    Returns:
        ``2**(m - code)``, or 0.0 for unknown
    """
    if code == 0:
        return 0.0
    if code > max_code:
        if diagnostics is not None:
            diagnostics.warn(
                DiagnosticKind.RANGE_VIOLATION,
                f"{field} code {code} > {max_code} (reserved), clamped to {max_code}",
                field=field,
                code=code,
            )
        code = max_code
    return math.ldexp(1.0, binary_point - code)


def encode_uncertainty(
    value: float,
    binary_point: int,
    max_code: int = MAX_LCI_UNCERTAINTY,
    *,
    zero_is_smallest: bool = False,
    diagnostics: DiagnosticLog | None = None,
    field: str = "uncertainty",
) -> int:
    """Convert a physical uncertainty to its code: ``m - ceil(log2(value))``.

    Args:
        value: Uncertainty (0 = unknown)
        binary_point: Fractional bits ``m`` of the associated field
        max_code: Largest valid code
        zero_is_smallest: Encode 0 as the smallest representable uncertainty
            (``max_code``) instead of "unknown" (0)
        diagnostics: Where to report clamping (optional)
        field: Field name used in diagnostics

    Returns:
        Code in ``0..max_code``
    """
    if math.isnan(value):
        if diagnostics is not None:
            diagnostics.report(
                DiagnosticKind.RANGE_VIOLATION,
                f"{field} is NaN, encoded as unknown",
                field=field,
                value=value,
            )
        return 0

    if value == 0:
        return max_code if zero_is_smallest else 0

    if value < 0:
        if diagnostics is not None:
            diagnostics.report(
                DiagnosticKind.RANGE_VIOLATION,
                f"{field} {value} is negative, encoded as unknown",
                field=field,
                value=value,
            )
        return 0

    if math.isinf(value):
        code = 0
    else:
        code = binary_point - math.ceil(math.log2(value) - _LOG2_EPSILON)
    if code <= 0:
        if diagnostics is not None:
            diagnostics.report(
                DiagnosticKind.RANGE_VIOLATION,
                f"{field} {value} too large (code {code} non-positive), using code 1",
                field=field,
                value=value,
            )
        return 1
    if code > max_code:
        if diagnostics is not None:
            diagnostics.report(
                DiagnosticKind.RANGE_VIOLATION,
                f"{field} {value} too small (code {code} > {max_code}), using code {max_code}",
                field=field,
                value=value,
            )
        return max_code
    return code


@dataclass(frozen=True)
class UncertaintyScale:
    """Binary point and code range of one uncertainty field."""

    name: str
    binary_point: int
    max_code: int = MAX_LCI_UNCERTAINTY

    def encode(
        self,
        value: float,
        *,
        zero_is_smallest: bool = False,
        diagnostics: DiagnosticLog | None = None,
    ) -> int:
        return encode_uncertainty(
            value,
            self.binary_point,
            self.max_code,
            zero_is_smallest=zero_is_smallest,
            diagnostics=diagnostics,
            field=self.name,
        )

    def decode(self, code: int, *, diagnostics: DiagnosticLog | None = None) -> float:
        return decode_uncertainty(
            code, self.binary_point, self.max_code, diagnostics=diagnostics, field=self.name
        )


LATITUDE_UNCERTAINTY = UncertaintyScale("latitude_uncertainty", 8)
LONGITUDE_UNCERTAINTY = UncertaintyScale("longitude_uncertainty", 8)
ALTITUDE_UNCERTAINTY = UncertaintyScale("altitude_uncertainty", 21)
HEIGHT_UNCERTAINTY = UncertaintyScale("height_uncertainty", 11, MAX_Z_UNCERTAINTY)
