"""Unit tests for the LCI subelement codec."""

from __future__ import annotations

import pytest

from lcicodec.codec.bitpack import BitPacker, OctetReader
from lcicodec.config import CodecOptions
from lcicodec.diagnostics import DiagnosticKind, DiagnosticLog, Severity
from lcicodec.models import AltitudeType, Datum, GeodeticField
from lcicodec.subelements.location import decode_location, encode_location

SYDNEY_LCI = "52834d12efd2b08b9b4bf1cc2c000041"


def _decode(payload_hex: str, diagnostics: DiagnosticLog | None = None) -> GeodeticField | None:
    if diagnostics is None:
        diagnostics = DiagnosticLog()
    return decode_location(OctetReader(payload_hex), CodecOptions(), diagnostics)


class TestDecodeLocation:
    """Test unpacking the 16-octet LCI field."""

    def test_sydney_opera_house(self) -> None:
        """Test every field of a known payload."""
        diagnostics = DiagnosticLog()
        field = _decode(SYDNEY_LCI, diagnostics)

        assert field is not None
        assert field.latitude == pytest.approx(-33.8570095, abs=1e-7)
        assert field.longitude == pytest.approx(151.2152005, abs=1e-7)
        assert field.altitude == 11.19921875
        assert field.latitude_uncertainty == 2**-10
        assert field.longitude_uncertainty == 2**-10
        assert field.altitude_uncertainty == 64.0
        assert field.altitude_type == AltitudeType.METERS
        assert field.datum == Datum.WGS84
        assert field.version == 1
        assert not field.regulatory_agreement
        assert not field.dynamic_enablement
        assert not field.dependent_station
        assert len(diagnostics) == 0

    def test_empty_payload_is_absent(self) -> None:
        """Test a zero-length LCI subelement."""
        diagnostics = DiagnosticLog()

        assert _decode("", diagnostics) is None
        assert len(diagnostics) == 0

    def test_wrong_length(self) -> None:
        """Test a truncated LCI field."""
        diagnostics = DiagnosticLog()

        assert _decode(SYDNEY_LCI[:-2], diagnostics) is None
        (entry,) = diagnostics
        assert entry.kind is DiagnosticKind.MALFORMED_INPUT
        assert entry.context["length"] == 15

    def test_wrong_version(self) -> None:
        """Test that a version other than 1 is reported but decoded."""
        diagnostics = DiagnosticLog()
        field = _decode(SYDNEY_LCI[:-2] + "81", diagnostics)

        assert field is not None
        assert field.version == 2
        assert diagnostics.entries[0].context["field"] == "version"

    def test_latitude_out_of_range(self) -> None:
        """Test that impossible latitudes are reported, not altered."""
        packer = BitPacker(16)
        packer.write_uint(0, 6)
        packer.write_uint(100 << 25, 34)
        packer.write_uint(0, 6)
        packer.write_uint(0, 34)
        packer.write_uint(AltitudeType.METERS, 4)
        packer.write_uint(0, 6)
        packer.write_uint(0, 30)
        packer.write_uint(Datum.WGS84, 3)
        packer.write_uint(0, 3)
        packer.write_uint(1, 2)
        diagnostics = DiagnosticLog()

        field = _decode(packer.to_bytes().hex(), diagnostics)

        assert field is not None
        assert field.latitude == 100.0
        (entry,) = diagnostics
        assert entry.kind is DiagnosticKind.RANGE_VIOLATION
        assert entry.severity is Severity.WARNING


class TestEncodeLocation:
    """Test packing the 16-octet LCI field."""

    def test_sydney_opera_house(self) -> None:
        """Test a known payload."""
        field = GeodeticField(
            latitude=-33.8570095,
            longitude=151.2152005,
            altitude=11.2,
            latitude_uncertainty=0.0007105,
            longitude_uncertainty=0.0007055,
            altitude_uncertainty=33.7,
        )

        assert encode_location(field, CodecOptions(), DiagnosticLog()).hex() == SYDNEY_LCI

    def test_flags(self) -> None:
        """Test the RegLoc and dependent STA bits."""
        field = GeodeticField(
            latitude=1.0, regulatory_agreement=True, dynamic_enablement=True,
            dependent_station=True,
        )
        payload = encode_location(field, CodecOptions(), DiagnosticLog())

        # datum(3) flags(3) version(2) in the last octet
        assert payload[-1] == 0b01_111_001

    def test_altitude_uncertainty_quantized_for_floors(self) -> None:
        """Test that altitude uncertainty is quantized for every altitude type."""
        field = GeodeticField(
            latitude=1.0,
            altitude=3.0,
            altitude_type=AltitudeType.FLOORS,
            altitude_uncertainty=0.3,
        )
        options = CodecOptions()
        payload = encode_location(field, options, DiagnosticLog())
        decoded = decode_location(OctetReader(payload.hex()), options, DiagnosticLog())

        assert decoded is not None
        assert decoded.altitude_type == AltitudeType.FLOORS
        assert decoded.altitude_uncertainty == 0.5

    def test_zero_uncertainty_is_smallest(self) -> None:
        """Test the option that encodes 0 as the maximum code."""
        options = CodecOptions(zero_uncertainty_is_smallest=True)
        payload = encode_location(GeodeticField(latitude=1.0), options, DiagnosticLog())

        assert payload[0] & 0x3F == 34
        decoded = decode_location(OctetReader(payload.hex()), options, DiagnosticLog())
        assert decoded is not None
        assert decoded.latitude_uncertainty == 2**-26
        assert decoded.altitude_uncertainty == 2**-13

    def test_version_warning(self) -> None:
        """Test that encoding a version other than 1 is reported."""
        diagnostics = DiagnosticLog()
        encode_location(GeodeticField(latitude=1.0, version=0), CodecOptions(), diagnostics)

        assert diagnostics.entries[0].severity is Severity.WARNING

    def test_clamped_latitude(self) -> None:
        """Test clamping of latitudes beyond the pole."""
        diagnostics = DiagnosticLog()
        payload = encode_location(GeodeticField(latitude=91.0), CodecOptions(), diagnostics)
        decoded = decode_location(OctetReader(payload.hex()), CodecOptions(), DiagnosticLog())

        assert decoded is not None
        assert decoded.latitude == 90.0
        assert diagnostics.kinds() == {DiagnosticKind.RANGE_VIOLATION}
