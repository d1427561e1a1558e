"""LCI record encoder.

This module provides the encode() function that converts a LocationRecord to
the hexadecimal LCI string used, for example, as ``lci=`` in hostapd.conf.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..config import DEFAULT_OPTIONS, CodecOptions
from ..diagnostics import Diagnostic, DiagnosticKind, DiagnosticLog
from ..framing.subelement import encode_subelement, frame_subelement
from ..models.fields import is_valid_mac
from ..models.lci import (
    BssidList,
    FloorField,
    GeodeticField,
    LocationRecord,
    Subelement,
    UnknownSubelement,
    UsagePolicyField,
)
from ..policy import check_consumer_compatibility
from ..subelements import subelement_name
from ..subelements.bssid import valid_addresses
from ..utils.sizing import encoded_size
from .bitpack import BitPacker
from .header import write_header

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EncodeResult:
    """Output of encode().

    Attributes:
        hex: Lowercase hexadecimal LCI string
        diagnostics: Anomalies reported while encoding
    """

    hex: str
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def data(self) -> bytes:
        return bytes.fromhex(self.hex)


# Option that must be set for each kind of subelement to be written
_INCLUDE_OPTIONS = {
    GeodeticField: "include_location",
    FloorField: "include_floor",
    UsagePolicyField: "include_usage",
    BssidList: "include_colocated",
    UnknownSubelement: "include_unknown",
}


def _content_omission(sub: Subelement, options: CodecOptions) -> str | None:
    """Why the content of a subelement keeps it out of the output, if it does."""
    if isinstance(sub, GeodeticField) and not (sub.has_position() or options.force_location):
        return "latitude, longitude and altitude are all 0 (set force_location to emit it)"
    # A decoded list is written back even when it holds no addresses
    if (
        isinstance(sub, BssidList)
        and sub.max_indicator is None
        and not any(is_valid_mac(a) for a in sub.addresses)
    ):
        return "it has no valid addresses"
    return None


def select_subelements(
    record: LocationRecord,
    options: CodecOptions,
    diagnostics: DiagnosticLog | None = None,
) -> list[Subelement]:
    """Subelements encode() will emit, in ascending ID order.

    Each present subelement that is left out is reported: as an advisory when
    an option excludes it, as a warning when its content rules it out.
    """
    selected = []
    for sub in record.subelements():
        name = subelement_name(sub.subelement_id)
        option = _INCLUDE_OPTIONS[type(sub)]
        if not getattr(options, option):
            if diagnostics is not None:
                diagnostics.advise(
                    DiagnosticKind.POLICY_INCONSISTENCY,
                    f"{name} subelement not encoded: {option} is off",
                    subelement_id=sub.subelement_id,
                )
            continue
        reason = _content_omission(sub, options)
        if reason is not None:
            if diagnostics is not None:
                diagnostics.warn(
                    DiagnosticKind.POLICY_INCONSISTENCY,
                    f"{name} subelement not encoded: {reason}",
                    subelement_id=sub.subelement_id,
                )
            continue
        selected.append(sub)
    return selected


def encode(record: LocationRecord, options: CodecOptions | None = None) -> EncodeResult:
    """Encode a LocationRecord to a hexadecimal LCI string.

    The header is followed by the present subelements in ascending ID order.
    The LCI subelement is only written when it carries a position (or with
    ``force_location``), and a caller-built colocated BSSID list only when it
    has valid addresses. Preserved unknown subelements are written back
    unchanged. Every present subelement that is left out is reported, as are
    out-of-range values (clamped) and inconsistent usage flags (corrected). The record itself is never modified.

    Args:
        record: Record to encode
        options: Per-call policy (defaults to CodecOptions())

    Returns:
        EncodeResult with the hex string and diagnostics

    Raises:
        EncodeError: If a subelement cannot be framed (payload over 255 octets)

    Examples:
        ```python
        from lcicodec import GeodeticField, LocationRecord, UsagePolicyField, encode

        record = LocationRecord(
            location=GeodeticField(latitude=-33.8570095, longitude=151.2152005, altitude=11.2),
            usage=UsagePolicyField(),
        )
        result = encode(record)
        print(f"lci={result.hex}")
        ```
    """
    if options is None:
        options = DEFAULT_OPTIONS
    diagnostics = DiagnosticLog()

    check_consumer_compatibility(record, diagnostics)

    selected = select_subelements(record, options, diagnostics)
    colocated = record.colocated
    if (
        options.include_colocated
        and colocated is not None
        and all(sub is not colocated for sub in selected)
    ):
        # Report the rejected addresses of a list that was left out
        valid_addresses(colocated, diagnostics)

    packer = BitPacker(encoded_size(record))
    write_header(packer)

    for sub in selected:
        payload = encode_subelement(sub, options, diagnostics)
        logger.debug(
            "Encoding subelement ID %d (%d octets) at octet %d",
            sub.subelement_id, len(payload), packer.bit_length() // 8,
        )
        frame_subelement(packer, sub.subelement_id, payload)

    return EncodeResult(hex=packer.to_bytes().hex(), diagnostics=diagnostics.entries)
