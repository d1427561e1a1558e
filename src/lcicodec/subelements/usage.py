"""Usage Rules/Policy subelement (ID 6) codec.

One flags octet (bit 0 retransmission allowed, bit 1 retention expires
relative present, bit 2 STA location policy), followed by a 2-octet
big-endian expiration in hours only when bit 1 is set.
"""

from __future__ import annotations

import logging

from ..codec.bitpack import BitPacker, OctetReader
from ..config import CodecOptions
from ..diagnostics import DiagnosticKind, DiagnosticLog
from ..models.lci import UsagePolicyField

logger = logging.getLogger(__name__)

RETRANSMISSION_ALLOWED = 0x01
RETENTION_EXPIRES_PRESENT = 0x02
LOCATION_POLICY = 0x04
_KNOWN_FLAGS = RETRANSMISSION_ALLOWED | RETENTION_EXPIRES_PRESENT | LOCATION_POLICY

USAGE_LENGTH = 1
USAGE_LENGTH_WITH_EXPIRATION = 3


def encode_usage(
    field: UsagePolicyField, options: CodecOptions, diagnostics: DiagnosticLog
) -> bytes:
    """Pack the usage flags, correcting a retention flag that contradicts the expiration.

    The record passed in is not modified.
    """
    retention_present = field.retention_expires_present
    if retention_present and field.expiration_hours == 0:
        diagnostics.warn(
            DiagnosticKind.POLICY_INCONSISTENCY,
            "retention_expires_present is true but expiration is 0; clearing the flag",
            field="retention_expires_present",
        )
        retention_present = False
    elif not retention_present and field.expiration_hours != 0:
        diagnostics.warn(
            DiagnosticKind.POLICY_INCONSISTENCY,
            f"retention_expires_present is false but expiration is {field.expiration_hours}; "
            "setting the flag",
            field="retention_expires_present",
        )
        retention_present = True

    flags = 0
    if field.retransmission_allowed:
        flags |= RETRANSMISSION_ALLOWED
    if retention_present:
        flags |= RETENTION_EXPIRES_PRESENT
    if field.location_policy:
        flags |= LOCATION_POLICY

    length = USAGE_LENGTH_WITH_EXPIRATION if retention_present else USAGE_LENGTH
    packer = BitPacker(length)
    packer.write_octet(flags)
    if retention_present:
        packer.write_number(field.expiration_hours, 2)
    logger.debug("Usage field: flags %#04x length %d", flags, length)
    return packer.to_bytes()


def decode_usage(
    payload: OctetReader, options: CodecOptions, diagnostics: DiagnosticLog
) -> UsagePolicyField | None:
    """Unpack the usage flags and optional expiration."""
    length = len(payload)
    if length not in (USAGE_LENGTH, USAGE_LENGTH_WITH_EXPIRATION):
        diagnostics.report(
            DiagnosticKind.MALFORMED_INPUT,
            f"Unexpected length {length} for Usage Rules/Policy subelement",
            subelement_id=UsagePolicyField.subelement_id,
            offset=payload.start,
            length=length,
        )
        return None

    flags = payload.octet(0)
    expiration = payload.number(1, 2) if length == USAGE_LENGTH_WITH_EXPIRATION else 0
    retention_present = bool(flags & RETENTION_EXPIRES_PRESENT)

    if flags & ~_KNOWN_FLAGS:
        diagnostics.warn(
            DiagnosticKind.MALFORMED_INPUT,
            f"Reserved usage flag bits set ({flags:#04x})",
            subelement_id=UsagePolicyField.subelement_id,
            flags=flags,
        )
    if retention_present and length != USAGE_LENGTH_WITH_EXPIRATION:
        diagnostics.warn(
            DiagnosticKind.POLICY_INCONSISTENCY,
            f"retention_expires_present is true with length {length} != "
            f"{USAGE_LENGTH_WITH_EXPIRATION}",
            subelement_id=UsagePolicyField.subelement_id,
        )
    if length == USAGE_LENGTH_WITH_EXPIRATION and expiration == 0:
        # Common in deployed configurations: should simply be 06 01 <flags>
        diagnostics.warn(
            DiagnosticKind.MALFORMED_INPUT,
            "Usage subelement has length 3 with expiration 0",
            subelement_id=UsagePolicyField.subelement_id,
            offset=payload.start,
        )
    elif not retention_present and length != USAGE_LENGTH:
        diagnostics.warn(
            DiagnosticKind.POLICY_INCONSISTENCY,
            f"retention_expires_present is false with length {length} != {USAGE_LENGTH}",
            subelement_id=UsagePolicyField.subelement_id,
        )

    return UsagePolicyField(
        retransmission_allowed=bool(flags & RETRANSMISSION_ALLOWED),
        retention_expires_present=retention_present,
        location_policy=bool(flags & LOCATION_POLICY),
        expiration_hours=expiration,
    )
