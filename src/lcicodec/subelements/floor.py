"""Z subelement (ID 4) codec.

Layout (IEEE 802.11-2016 Figures 9-218 and 9-219), all big-endian:

    STA Floor Info (2 octets): expected-to-move in bits 0-1, floor in
        bits 2-15 as a signed 14-bit value in 1/16 floors
    STA Height Above Floor (3 octets): signed, 1/4096 m
    STA Height Above Floor Uncertainty (1 octet): code, 0 = unknown

Some deployed configurations send a 5-octet variant with a 2-octet height
above floor; it is accepted on decode.
"""

from __future__ import annotations

import logging

from ..codec import fixed_point
from ..codec.bitpack import BitPacker, OctetReader
from ..codec.uncertainty import HEIGHT_UNCERTAINTY
from ..config import CodecOptions
from ..diagnostics import DiagnosticKind, DiagnosticLog
from ..models.lci import FloorField, MovementType

logger = logging.getLogger(__name__)

Z_FIELD_LENGTH = 6
Z_FIELD_LENGTH_SHORT = 5


def encode_floor(field: FloorField, options: CodecOptions, diagnostics: DiagnosticLog) -> bytes:
    """Pack a FloorField into the 6-octet Z field."""
    floor = fixed_point.FLOOR.encode(field.floor, diagnostics)
    height = fixed_point.HEIGHT_ABOVE_FLOOR.encode(field.height_above_floor, diagnostics)
    height_unc = HEIGHT_UNCERTAINTY.encode(
        field.height_uncertainty,
        zero_is_smallest=options.zero_uncertainty_is_smallest,
        diagnostics=diagnostics,
    )
    floor_info = (floor << 2) | (int(field.movement) & 0x03)

    logger.debug(
        "Z field: movement %s floor %r -> %d, height %r -> %d, uncertainty %r -> %d",
        field.movement.name, field.floor, floor, field.height_above_floor, height,
        field.height_uncertainty, height_unc,
    )

    packer = BitPacker(Z_FIELD_LENGTH)
    packer.write_number(floor_info, 2)
    packer.write_number(height, 3)
    packer.write_octet(height_unc)
    return packer.to_bytes()


def decode_floor(
    payload: OctetReader, options: CodecOptions, diagnostics: DiagnosticLog
) -> FloorField | None:
    """Unpack the Z field, accepting the 5-octet variant."""
    length = len(payload)
    if length not in (Z_FIELD_LENGTH, Z_FIELD_LENGTH_SHORT):
        diagnostics.report(
            DiagnosticKind.MALFORMED_INPUT,
            f"Unexpected length {length} for Z subelement (expected {Z_FIELD_LENGTH})",
            subelement_id=FloorField.subelement_id,
            offset=payload.start,
            length=length,
        )
        return None

    floor_info = payload.number(0, 2)
    if length == Z_FIELD_LENGTH_SHORT:
        diagnostics.warn(
            DiagnosticKind.MALFORMED_INPUT,
            f"Z subelement length {length} != {Z_FIELD_LENGTH}, "
            "decoding 2-octet height above floor",
            subelement_id=FloorField.subelement_id,
            offset=payload.start,
            length=length,
        )
        height = fixed_point.HEIGHT_ABOVE_FLOOR_SHORT.decode(payload.number(2, 2))
    else:
        height = fixed_point.HEIGHT_ABOVE_FLOOR.decode(payload.number(2, 3))
    height_unc = HEIGHT_UNCERTAINTY.decode(payload.octet(length - 1), diagnostics=diagnostics)

    movement = MovementType(floor_info & 0x03)
    floor = fixed_point.FLOOR.decode(floor_info >> 2)

    logger.debug(
        "Z field: movement %s floor %r height %r uncertainty %r",
        movement.name, floor, height, height_unc,
    )

    return FloorField(
        movement=movement,
        floor=floor,
        height_above_floor=height,
        height_uncertainty=height_unc,
    )
