"""Fixed-point conversion between physical values and two's-complement fields.

A fixed-point field stores ``round(value * 2**fractional_bits)`` as a signed
two's-complement integer of ``total_bits`` bits.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..diagnostics import DiagnosticKind, DiagnosticLog


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    Python's built-in round() rounds halves to even, which would make
    values such as 0.5/4096 encode differently from other implementations.
    """
    magnitude = math.floor(abs(value) + 0.5)
    return -magnitude if value < 0 else magnitude


def sign_extend(raw: int, num_bits: int) -> int:
    """Interpret the low ``num_bits`` of ``raw`` as a two's-complement integer."""
    raw &= (1 << num_bits) - 1
    if raw & (1 << (num_bits - 1)):
        return raw - (1 << num_bits)
    return raw


def to_twos_complement(value: int, num_bits: int) -> int:
    """Return the unsigned ``num_bits`` representation of a signed integer."""
    return value & ((1 << num_bits) - 1)


@dataclass(frozen=True)
class FixedPointFormat:
    """Layout of one signed fixed-point field.

    Attributes:
        name: Field name used in diagnostics
        total_bits: Width of the field on the wire
        fractional_bits: Number of bits after the binary point
        minimum: Lowest meaningful physical value (None = limited by width only)
        maximum: Highest meaningful physical value (None = limited by width only)
    """

    name: str
    total_bits: int
    fractional_bits: int
    minimum: float | None = None
    maximum: float | None = None

    @property
    def scale(self) -> int:
        return 1 << self.fractional_bits

    @property
    def raw_min(self) -> int:
        return -(1 << (self.total_bits - 1))

    @property
    def raw_max(self) -> int:
        return (1 << (self.total_bits - 1)) - 1

    @property
    def resolution(self) -> float:
        return 1.0 / self.scale

    def in_range(self, value: float) -> bool:
        """True if ``value`` lies within the physical bounds (if any)."""
        if self.minimum is not None and value < self.minimum:
            return False
        if self.maximum is not None and value > self.maximum:
            return False
        return True

    def encode(self, value: float, diagnostics: DiagnosticLog | None = None) -> int:
        """Convert a physical value to the unsigned field value.

        Values outside the physical bounds or the field width are clamped to
        the nearest boundary and reported as RANGE_VIOLATION. Infinities clamp
        like any other out-of-range value; NaN is reported and encoded as 0.

        Args:
            value: Physical value
            diagnostics: Where to report clamping (optional)

        Returns:
            Two's-complement field value in ``total_bits`` bits
        """
        if math.isnan(value):
            if diagnostics is not None:
                diagnostics.report(
                    DiagnosticKind.RANGE_VIOLATION,
                    f"{self.name} is NaN, encoded as 0",
                    field=self.name,
                    value=value,
                )
            value = 0.0

        if not self.in_range(value):
            clamped = value
            if self.minimum is not None:
                clamped = max(clamped, self.minimum)
            if self.maximum is not None:
                clamped = min(clamped, self.maximum)
            if diagnostics is not None:
                diagnostics.report(
                    DiagnosticKind.RANGE_VIOLATION,
                    f"{self.name} {value} outside [{self.minimum}, {self.maximum}], "
                    f"clamped to {clamped}",
                    field=self.name,
                    value=value,
                )
            value = clamped

        scaled = value * self.scale
        if math.isfinite(scaled):
            raw = round_half_away(scaled)
        else:
            # Past either end of the field, so the width check below clamps it
            raw = int(math.copysign(1 << self.total_bits, scaled))
        if raw < self.raw_min or raw > self.raw_max:
            clamped_raw = min(max(raw, self.raw_min), self.raw_max)
            if diagnostics is not None:
                diagnostics.report(
                    DiagnosticKind.RANGE_VIOLATION,
                    f"{self.name} {value} does not fit in {self.total_bits} bits, "
                    f"clamped to {clamped_raw / self.scale}",
                    field=self.name,
                    value=value,
                )
            raw = clamped_raw

        return to_twos_complement(raw, self.total_bits)

    def decode(self, raw: int) -> float:
        """Sign-extend a field value and convert it to a physical value."""
        return sign_extend(raw, self.total_bits) / self.scale


LATITUDE = FixedPointFormat("latitude", 34, 25, minimum=-90.0, maximum=90.0)
LONGITUDE = FixedPointFormat("longitude", 34, 25, minimum=-180.0, maximum=180.0)
ALTITUDE = FixedPointFormat("altitude", 30, 8)
FLOOR = FixedPointFormat("floor", 14, 4)
HEIGHT_ABOVE_FLOOR = FixedPointFormat("height_above_floor", 24, 12)
# 2-octet height above floor seen in buggy Z subelements
HEIGHT_ABOVE_FLOOR_SHORT = FixedPointFormat("height_above_floor", 16, 12)
