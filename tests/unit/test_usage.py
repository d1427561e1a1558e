"""Unit tests for the Usage Rules/Policy subelement codec."""

from __future__ import annotations

import pytest

from lcicodec.codec.bitpack import OctetReader
from lcicodec.config import CodecOptions
from lcicodec.diagnostics import DiagnosticKind, DiagnosticLog, Severity
from lcicodec.models import UsagePolicyField
from lcicodec.subelements.usage import decode_usage, encode_usage


def _encode(field: UsagePolicyField, diagnostics: DiagnosticLog | None = None) -> str:
    if diagnostics is None:
        diagnostics = DiagnosticLog()
    return encode_usage(field, CodecOptions(), diagnostics).hex()


def _decode(payload_hex: str, diagnostics: DiagnosticLog) -> UsagePolicyField | None:
    return decode_usage(OctetReader(payload_hex), CodecOptions(), diagnostics)


class TestEncodeUsage:
    """Test packing the usage flags."""

    def test_default(self) -> None:
        """Test retransmission allowed, no expiration."""
        assert _encode(UsagePolicyField()) == "01"

    def test_flags(self) -> None:
        """Test each flag bit."""
        assert _encode(UsagePolicyField(retransmission_allowed=False)) == "00"
        assert _encode(UsagePolicyField(location_policy=True)) == "05"

    def test_expiration(self) -> None:
        """Test the 2-octet expiration."""
        field = UsagePolicyField(retention_expires_present=True, expiration_hours=24)
        assert _encode(field) == "030018"

    def test_retention_without_expiration_corrected(self) -> None:
        """Test that a retention flag without expiration is cleared."""
        field = UsagePolicyField(retention_expires_present=True)
        diagnostics = DiagnosticLog()

        assert _encode(field, diagnostics) == "01"
        assert field.retention_expires_present
        (entry,) = diagnostics
        assert entry.kind is DiagnosticKind.POLICY_INCONSISTENCY
        assert entry.severity is Severity.WARNING

    def test_expiration_without_retention_corrected(self) -> None:
        """Test that an expiration sets the retention flag."""
        diagnostics = DiagnosticLog()

        assert _encode(UsagePolicyField(expiration_hours=5), diagnostics) == "030005"
        assert diagnostics.kinds() == {DiagnosticKind.POLICY_INCONSISTENCY}


class TestDecodeUsage:
    """Test unpacking the usage flags."""

    def test_default(self) -> None:
        """Test the common 06 01 01 form."""
        diagnostics = DiagnosticLog()

        assert _decode("01", diagnostics) == UsagePolicyField()
        assert len(diagnostics) == 0

    def test_expiration(self) -> None:
        """Test a consistent 3-octet form."""
        diagnostics = DiagnosticLog()
        field = _decode("030018", diagnostics)

        assert field == UsagePolicyField(retention_expires_present=True, expiration_hours=24)
        assert len(diagnostics) == 0

    def test_long_form_without_expiration(self) -> None:
        """Test length 3 with a zero expiration, common in deployed configs."""
        diagnostics = DiagnosticLog()
        field = _decode("000000", diagnostics)

        assert field is not None
        assert not field.retransmission_allowed
        (entry,) = diagnostics
        assert entry.kind is DiagnosticKind.MALFORMED_INPUT
        assert entry.severity is Severity.WARNING

    def test_retention_flag_without_expiration(self) -> None:
        """Test retention present with length 1."""
        diagnostics = DiagnosticLog()
        field = _decode("03", diagnostics)

        assert field is not None
        assert field.retention_expires_present
        assert field.expiration_hours == 0
        assert diagnostics.kinds() == {DiagnosticKind.POLICY_INCONSISTENCY}

    def test_expiration_without_retention_flag(self) -> None:
        """Test retention absent with length 3 and a nonzero expiration."""
        diagnostics = DiagnosticLog()
        field = _decode("010005", diagnostics)

        assert field is not None
        assert field.expiration_hours == 5
        assert diagnostics.kinds() == {DiagnosticKind.POLICY_INCONSISTENCY}

    def test_reserved_bits(self) -> None:
        """Test that reserved flag bits are reported."""
        diagnostics = DiagnosticLog()
        field = _decode("09", diagnostics)

        assert field == UsagePolicyField()
        assert diagnostics.entries[0].context["flags"] == 0x09

    @pytest.mark.parametrize("payload", ["", "0100", "01000000"])
    def test_wrong_length(self, payload: str) -> None:
        """Test that lengths other than 1 and 3 are skipped."""
        diagnostics = DiagnosticLog()

        assert _decode(payload, diagnostics) is None
        assert diagnostics.entries[0].severity is Severity.ERROR
