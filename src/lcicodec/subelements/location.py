"""LCI subelement (ID 0) codec.

The 16-octet LCI field is bit-packed least significant bit first within each
octet (IEEE 802.11-2016 Figure 9-215, RFC 6225):

    lat-unc(6) latitude(34) lon-unc(6) longitude(34) alt-type(4)
    alt-unc(6) altitude(30) datum(3) regloc-agreement(1) regloc-dse(1)
    dependent-sta(1) version(2)
"""

from __future__ import annotations

import logging

from ..codec import fixed_point, uncertainty
from ..codec.bitpack import BitPacker, BitUnpacker, OctetReader
from ..config import CodecOptions
from ..diagnostics import DiagnosticKind, DiagnosticLog
from ..models.lci import LCI_VERSION_1, GeodeticField

logger = logging.getLogger(__name__)

LCI_FIELD_LENGTH = 16
LCI_FIELD_BITS = LCI_FIELD_LENGTH * 8


def encode_location(
    field: GeodeticField, options: CodecOptions, diagnostics: DiagnosticLog
) -> bytes:
    """Pack a GeodeticField into the 16-octet LCI field."""
    zero_is_smallest = options.zero_uncertainty_is_smallest

    latitude_unc = uncertainty.LATITUDE_UNCERTAINTY.encode(
        field.latitude_uncertainty, zero_is_smallest=zero_is_smallest, diagnostics=diagnostics
    )
    longitude_unc = uncertainty.LONGITUDE_UNCERTAINTY.encode(
        field.longitude_uncertainty, zero_is_smallest=zero_is_smallest, diagnostics=diagnostics
    )
    # Quantized for every altitude type, not only meters.
    altitude_unc = uncertainty.ALTITUDE_UNCERTAINTY.encode(
        field.altitude_uncertainty, zero_is_smallest=zero_is_smallest, diagnostics=diagnostics
    )

    latitude = fixed_point.LATITUDE.encode(field.latitude, diagnostics)
    longitude = fixed_point.LONGITUDE.encode(field.longitude, diagnostics)
    altitude = fixed_point.ALTITUDE.encode(field.altitude, diagnostics)

    if field.version != LCI_VERSION_1:
        diagnostics.warn(
            DiagnosticKind.MALFORMED_INPUT,
            f"LCI version {field.version} is not {LCI_VERSION_1}",
            field="version",
            value=field.version,
        )

    logger.debug(
        "LCI field: latitude %r -> %d, longitude %r -> %d, altitude %r -> %d",
        field.latitude, latitude, field.longitude, longitude, field.altitude, altitude,
    )

    packer = BitPacker(LCI_FIELD_LENGTH)
    packer.write_uint(latitude_unc, 6)
    packer.write_uint(latitude, 34)
    packer.write_uint(longitude_unc, 6)
    packer.write_uint(longitude, 34)
    packer.write_uint(field.altitude_type, 4)
    packer.write_uint(altitude_unc, 6)
    packer.write_uint(altitude, 30)
    packer.write_uint(field.datum, 3)
    packer.write_bool(field.regulatory_agreement)
    packer.write_bool(field.dynamic_enablement)
    packer.write_bool(field.dependent_station)
    packer.write_uint(field.version, 2)
    return packer.to_bytes()


def decode_location(
    payload: OctetReader, options: CodecOptions, diagnostics: DiagnosticLog
) -> GeodeticField | None:
    """Unpack the LCI field.

    A zero-length payload means the field is absent and returns None. Any
    length other than 0 or 16 is reported and the payload skipped.
    """
    if len(payload) == 0:
        return None
    if len(payload) != LCI_FIELD_LENGTH:
        diagnostics.report(
            DiagnosticKind.MALFORMED_INPUT,
            f"Unexpected length {len(payload)} for LCI subelement (expected {LCI_FIELD_LENGTH})",
            subelement_id=GeodeticField.subelement_id,
            offset=payload.start,
            length=len(payload),
        )
        return None

    unpacker = BitUnpacker(payload.octets(0, LCI_FIELD_LENGTH))

    latitude_unc = uncertainty.LATITUDE_UNCERTAINTY.decode(
        unpacker.read_uint(6), diagnostics=diagnostics
    )
    latitude = fixed_point.LATITUDE.decode(unpacker.read_uint(34))
    longitude_unc = uncertainty.LONGITUDE_UNCERTAINTY.decode(
        unpacker.read_uint(6), diagnostics=diagnostics
    )
    longitude = fixed_point.LONGITUDE.decode(unpacker.read_uint(34))
    altitude_type = unpacker.read_uint(4)
    altitude_unc = uncertainty.ALTITUDE_UNCERTAINTY.decode(
        unpacker.read_uint(6), diagnostics=diagnostics
    )
    altitude = fixed_point.ALTITUDE.decode(unpacker.read_uint(30))
    datum = unpacker.read_uint(3)
    regulatory_agreement = unpacker.read_bool()
    dynamic_enablement = unpacker.read_bool()
    dependent_station = unpacker.read_bool()
    version = unpacker.read_uint(2)

    if unpacker.position() != LCI_FIELD_BITS:
        diagnostics.report(
            DiagnosticKind.MALFORMED_INPUT,
            f"LCI field consumed {unpacker.position()} bits (expected {LCI_FIELD_BITS})",
            subelement_id=GeodeticField.subelement_id,
            offset=payload.start,
        )
    if version != LCI_VERSION_1:
        diagnostics.report(
            DiagnosticKind.MALFORMED_INPUT,
            f"LCI version {version} is not {LCI_VERSION_1}",
            subelement_id=GeodeticField.subelement_id,
            field="version",
            value=version,
        )
    for fmt, value in ((fixed_point.LATITUDE, latitude), (fixed_point.LONGITUDE, longitude)):
        if not fmt.in_range(value):
            diagnostics.warn(
                DiagnosticKind.RANGE_VIOLATION,
                f"Decoded {fmt.name} {value} outside [{fmt.minimum}, {fmt.maximum}]",
                field=fmt.name,
                value=value,
            )

    logger.debug(
        "LCI field: latitude %.7f longitude %.7f altitude %.4f (type %d)",
        latitude, longitude, altitude, altitude_type,
    )

    return GeodeticField(
        latitude=latitude,
        longitude=longitude,
        altitude=altitude,
        latitude_uncertainty=latitude_unc,
        longitude_uncertainty=longitude_unc,
        altitude_uncertainty=altitude_unc,
        altitude_type=altitude_type,
        datum=datum,
        regulatory_agreement=regulatory_agreement,
        dynamic_enablement=dynamic_enablement,
        dependent_station=dependent_station,
        version=version,
    )
