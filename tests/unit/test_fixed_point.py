"""Unit tests for fixed-point conversion."""

from __future__ import annotations

import pytest

from lcicodec.codec.fixed_point import (
    ALTITUDE,
    FLOOR,
    HEIGHT_ABOVE_FLOOR,
    HEIGHT_ABOVE_FLOOR_SHORT,
    LATITUDE,
    LONGITUDE,
    FixedPointFormat,
    round_half_away,
    sign_extend,
    to_twos_complement,
)
from lcicodec.diagnostics import DiagnosticKind, DiagnosticLog


class TestHelpers:
    """Test rounding and two's-complement helpers."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(2.5, 3), (-2.5, -3), (0.49, 0), (-0.5, -1), (1.5, 2), (0.0, 0)],
    )
    def test_round_half_away(self, value: float, expected: int) -> None:
        """Test that halves round away from zero, unlike round()."""
        assert round_half_away(value) == expected

    def test_sign_extend(self) -> None:
        """Test sign extension from the declared width."""
        assert sign_extend(0x3FFF, 14) == -1
        assert sign_extend(0x2000, 14) == -8192
        assert sign_extend(0x1FFF, 14) == 8191
        assert sign_extend(0xC000, 16) == -16384

    def test_sign_extend_ignores_high_bits(self) -> None:
        """Test that bits above the width are masked off."""
        assert sign_extend(0xF0001, 16) == 1

    def test_twos_complement(self) -> None:
        """Test the unsigned representation of negative values."""
        assert to_twos_complement(-1, 14) == 0x3FFF
        assert to_twos_complement(5, 14) == 5


class TestFixedPointFormat:
    """Test FixedPointFormat encoding and decoding."""

    def test_format_properties(self) -> None:
        """Test derived ranges."""
        assert LATITUDE.scale == 1 << 25
        assert FLOOR.raw_min == -8192
        assert FLOOR.raw_max == 8191
        assert FLOOR.resolution == 1 / 16

    def test_latitude(self) -> None:
        """Test the Sydney Opera House latitude."""
        raw = LATITUDE.encode(-33.8570095)

        assert raw == to_twos_complement(-1136052723, 34)
        assert LATITUDE.decode(raw) == pytest.approx(-33.8570095, abs=LATITUDE.resolution)

    def test_longitude(self) -> None:
        """Test the Sydney Opera House longitude."""
        raw = LONGITUDE.encode(151.2152005)
        assert LONGITUDE.decode(raw) == pytest.approx(151.2152005, abs=LONGITUDE.resolution)

    def test_altitude_quantization(self) -> None:
        """Test altitude rounding to 1/256."""
        assert ALTITUDE.encode(11.2) == 2867
        assert ALTITUDE.decode(2867) == 11.19921875

    def test_floor_negative(self) -> None:
        """Test negative floors (basements)."""
        raw = FLOOR.encode(-1.5)

        assert raw == to_twos_complement(-24, 14)
        assert FLOOR.decode(raw) == -1.5

    def test_floor_rounds_half_away(self) -> None:
        """Test rounding of a value halfway between two steps."""
        assert FLOOR.encode(2.03125) == 33
        assert FLOOR.encode(-2.03125) == to_twos_complement(-33, 14)

    def test_height_above_floor(self) -> None:
        """Test the smallest height steps in both directions."""
        assert HEIGHT_ABOVE_FLOOR.encode(0.5 / 4096) == 1
        assert HEIGHT_ABOVE_FLOOR.encode(-0.5 / 4096) == 0xFFFFFF
        assert HEIGHT_ABOVE_FLOOR.decode(0xFFC000) == -4.0

    def test_short_height_above_floor(self) -> None:
        """Test the 2-octet height of the tolerant Z form."""
        assert HEIGHT_ABOVE_FLOOR_SHORT.decode(0xC000) == -4.0
        assert HEIGHT_ABOVE_FLOOR_SHORT.decode(0x1000) == 1.0

    def test_physical_range_clamped(self) -> None:
        """Test that latitudes beyond 90 degrees are clamped and reported."""
        diagnostics = DiagnosticLog()
        raw = LATITUDE.encode(95.0, diagnostics)

        assert LATITUDE.decode(raw) == 90.0
        assert diagnostics.kinds() == {DiagnosticKind.RANGE_VIOLATION}

    def test_width_clamped(self) -> None:
        """Test that values too wide for the field are clamped and reported."""
        diagnostics = DiagnosticLog()
        raw = FLOOR.encode(600.0, diagnostics)

        assert raw == FLOOR.raw_max
        assert len(diagnostics.of_kind(DiagnosticKind.RANGE_VIOLATION)) == 1

        raw = ALTITUDE.encode(-3e6, diagnostics)
        assert ALTITUDE.decode(raw) == ALTITUDE.raw_min / 256
        assert len(diagnostics) == 2

    def test_clamp_without_diagnostics(self) -> None:
        """Test clamping when no log is given."""
        assert LONGITUDE.decode(LONGITUDE.encode(-200.0)) == -180.0

    def test_custom_format(self) -> None:
        """Test a format without physical bounds."""
        fmt = FixedPointFormat("test", 8, 2)

        assert fmt.in_range(1e9)
        assert fmt.encode(-1.25) == to_twos_complement(-5, 8)
        assert fmt.decode(0xFB) == -1.25

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), 1e308])
    def test_unbounded_overflow_clamped(self, value: float) -> None:
        """Test values beyond any float scaling on a format without bounds."""
        diagnostics = DiagnosticLog()
        raw = ALTITUDE.encode(value, diagnostics)

        expected = ALTITUDE.raw_max if value > 0 else ALTITUDE.raw_min
        assert ALTITUDE.decode(raw) == expected / ALTITUDE.scale
        assert diagnostics.kinds() == {DiagnosticKind.RANGE_VIOLATION}

    def test_infinite_latitude_clamped(self) -> None:
        """Test that an infinite latitude clamps to the physical bound."""
        diagnostics = DiagnosticLog()

        assert LATITUDE.decode(LATITUDE.encode(float("-inf"), diagnostics)) == -90.0
        assert len(diagnostics) == 1

    def test_nan_encoded_as_zero(self) -> None:
        """Test that NaN is reported and written as 0."""
        diagnostics = DiagnosticLog()

        assert HEIGHT_ABOVE_FLOOR.encode(float("nan"), diagnostics) == 0
        assert diagnostics.kinds() == {DiagnosticKind.RANGE_VIOLATION}
