"""Unit tests for logarithmic uncertainty codes."""

from __future__ import annotations

import pytest

from lcicodec.codec.uncertainty import (
    ALTITUDE_UNCERTAINTY,
    HEIGHT_UNCERTAINTY,
    LATITUDE_UNCERTAINTY,
    MAX_LCI_UNCERTAINTY,
    MAX_Z_UNCERTAINTY,
    decode_uncertainty,
    encode_uncertainty,
)
from lcicodec.diagnostics import DiagnosticKind, DiagnosticLog, Severity


class TestEncodeUncertainty:
    """Test physical value to code conversion."""

    def test_exact_powers_of_two(self) -> None:
        """Test values that are exact powers of two."""
        assert encode_uncertainty(2**-10, 8) == 18
        assert encode_uncertainty(64.0, 21) == 15
        assert encode_uncertainty(2**-7, 11, MAX_Z_UNCERTAINTY) == 18

    def test_rounds_towards_larger_uncertainty(self) -> None:
        """Test that a value maps to the smallest code covering it."""
        assert encode_uncertainty(0.0007105, 8) == 18
        assert encode_uncertainty(0.0007055, 8) == 18
        assert encode_uncertainty(33.7, 21) == 15
        assert encode_uncertainty(15.0, 21) == 17

    def test_zero_is_unknown(self) -> None:
        """Test the default meaning of 0."""
        assert encode_uncertainty(0.0, 8) == 0

    def test_zero_is_smallest(self) -> None:
        """Test the option that treats 0 as the smallest uncertainty."""
        assert encode_uncertainty(0.0, 8, zero_is_smallest=True) == MAX_LCI_UNCERTAINTY
        assert HEIGHT_UNCERTAINTY.encode(0.0, zero_is_smallest=True) == MAX_Z_UNCERTAINTY

    def test_too_large(self) -> None:
        """Test values whose code would be non-positive."""
        diagnostics = DiagnosticLog()

        assert encode_uncertainty(1000.0, 8, diagnostics=diagnostics) == 1
        assert diagnostics.kinds() == {DiagnosticKind.RANGE_VIOLATION}

    def test_too_small(self) -> None:
        """Test values whose code would exceed the maximum."""
        diagnostics = DiagnosticLog()

        assert encode_uncertainty(1e-12, 8, diagnostics=diagnostics) == MAX_LCI_UNCERTAINTY
        assert len(diagnostics) == 1

    def test_infinite(self) -> None:
        """Test that an infinite uncertainty becomes the largest one (code 1)."""
        diagnostics = DiagnosticLog()

        assert ALTITUDE_UNCERTAINTY.encode(float("inf"), diagnostics=diagnostics) == 1
        assert diagnostics.kinds() == {DiagnosticKind.RANGE_VIOLATION}

    def test_nan(self) -> None:
        """Test that NaN is reported and treated as unknown."""
        diagnostics = DiagnosticLog()

        assert encode_uncertainty(float("nan"), 8, diagnostics=diagnostics) == 0
        assert diagnostics.entries[0].severity is Severity.ERROR

    def test_negative(self) -> None:
        """Test that negative values are reported and treated as unknown."""
        diagnostics = DiagnosticLog()

        assert encode_uncertainty(-1.0, 8, diagnostics=diagnostics) == 0
        assert diagnostics.entries[0].context["value"] == -1.0


class TestDecodeUncertainty:
    """Test code to physical value conversion."""

    def test_decode(self) -> None:
        """Test known codes."""
        assert decode_uncertainty(18, 8) == 2**-10
        assert ALTITUDE_UNCERTAINTY.decode(15) == 64.0
        assert HEIGHT_UNCERTAINTY.decode(18) == 0.0078125

    def test_decode_unknown(self) -> None:
        """Test code 0."""
        assert decode_uncertainty(0, 8) == 0.0

    def test_decode_reserved_code(self) -> None:
        """Test that reserved codes are clamped and reported."""
        diagnostics = DiagnosticLog()

        assert decode_uncertainty(40, 8, diagnostics=diagnostics) == 2**-26
        assert HEIGHT_UNCERTAINTY.decode(30, diagnostics=diagnostics) == 2**-13
        assert len(diagnostics.of_kind(DiagnosticKind.RANGE_VIOLATION)) == 2
        assert {d.severity for d in diagnostics} == {Severity.WARNING}


class TestRoundTrip:
    """Test that every valid code survives decode then encode."""

    @pytest.mark.parametrize("binary_point", [8, 21])
    def test_lci_codes(self, binary_point: int) -> None:
        """Test latitude/longitude and altitude scales."""
        for code in range(1, MAX_LCI_UNCERTAINTY + 1):
            value = decode_uncertainty(code, binary_point)
            assert encode_uncertainty(value, binary_point) == code

    def test_height_codes(self) -> None:
        """Test the height above floor scale."""
        for code in range(1, MAX_Z_UNCERTAINTY + 1):
            value = HEIGHT_UNCERTAINTY.decode(code)
            assert HEIGHT_UNCERTAINTY.encode(value) == code

    def test_scale_names(self) -> None:
        """Test that scales report under their own field name."""
        diagnostics = DiagnosticLog()
        LATITUDE_UNCERTAINTY.encode(-1.0, diagnostics=diagnostics)

        assert diagnostics.entries[0].context["field"] == "latitude_uncertainty"
