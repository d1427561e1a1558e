"""LCI record decoder.

This module provides the decode() function that parses a hexadecimal LCI
string into a LocationRecord. Decoding is tolerant: anything short of a
missing header is reported as a diagnostic and parsing carries on with what
can still be read.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..config import DEFAULT_OPTIONS, CodecOptions
from ..diagnostics import Diagnostic, DiagnosticKind, DiagnosticLog
from ..exceptions import FramingError
from ..framing.subelement import decode_subelement, iter_subelements
from ..models.lci import (
    BssidList,
    FloorField,
    GeodeticField,
    LocationRecord,
    UnknownSubelement,
    UsagePolicyField,
)
from ..policy import check_consumer_compatibility
from ..subelements import subelement_name
from .bitpack import OctetReader
from .header import HEADER_LENGTH, read_header

logger = logging.getLogger(__name__)

HOSTAPD_PREFIX = "lci="

_RECORD_SLOTS = {
    GeodeticField: "location",
    FloorField: "floor",
    UsagePolicyField: "usage",
    BssidList: "colocated",
}


@dataclass(frozen=True)
class DecodeResult:
    """Output of decode().

    Attributes:
        record: Decoded record (subelements that could not be decoded are absent)
        diagnostics: Anomalies reported while decoding
    """

    record: LocationRecord
    diagnostics: list[Diagnostic] = field(default_factory=list)


def normalize_hex(text: str, diagnostics: DiagnosticLog) -> str:
    """Strip whitespace and a ``lci=`` prefix, dropping a trailing odd nibble."""
    cleaned = "".join(text.split())
    if cleaned[: len(HOSTAPD_PREFIX)].lower() == HOSTAPD_PREFIX:
        cleaned = cleaned[len(HOSTAPD_PREFIX):]
    if len(cleaned) % 2:
        diagnostics.report(
            DiagnosticKind.MALFORMED_INPUT,
            f"Odd number of hex digits ({len(cleaned)}); trailing nibble "
            f"{cleaned[-1]!r} ignored",
            length=len(cleaned),
        )
        cleaned = cleaned[:-1]
    return cleaned


def decode(text: str, options: CodecOptions | None = None) -> DecodeResult:
    """Decode a hexadecimal LCI string to a LocationRecord.

    The three header octets (measurement token 1, report mode 0, type 8) are
    checked, then subelements are read until the input is exhausted. Each
    recognized subelement fills its slot on the record; unknown ones are
    preserved. A subelement whose declared length runs past the end of the
    input stops parsing. Finally the record is checked for field
    combinations consumers are known to reject (advisories).

    Args:
        text: Hex string, either case; whitespace and ``lci=`` are ignored
        options: Per-call policy (defaults to CodecOptions())

    Returns:
        DecodeResult with the record and diagnostics

    Raises:
        BoundsError: If the input is shorter than the 3-octet header

    Examples:
        ```python
        from lcicodec import decode

        result = decode("lci=010008001052834d12efd2b08b9b4bf1cc2c0000410406000000000012060101")
        print(result.record.location.latitude)   # -33.857009...
        for diagnostic in result.diagnostics:
            print(diagnostic)
        ```
    """
    if options is None:
        options = DEFAULT_OPTIONS
    diagnostics = DiagnosticLog()

    reader = OctetReader(normalize_hex(text, diagnostics))
    read_header(reader, diagnostics)
    logger.debug("Decoding %d-octet LCI report", len(reader))

    slots: dict[str, object] = {}
    unknown: list[UnknownSubelement] = []
    last_id = -1
    try:
        for raw in iter_subelements(reader, HEADER_LENGTH):
            if raw.subelement_id < last_id:
                diagnostics.warn(
                    DiagnosticKind.MALFORMED_INPUT,
                    f"{subelement_name(raw.subelement_id)} subelement (ID "
                    f"{raw.subelement_id}) at octet {raw.offset} follows ID {last_id}; "
                    "subelements should be in ascending order",
                    subelement_id=raw.subelement_id,
                    offset=raw.offset,
                )
            last_id = max(last_id, raw.subelement_id)

            decoded = decode_subelement(raw, options, diagnostics)
            if decoded is None:
                continue
            if isinstance(decoded, UnknownSubelement):
                unknown.append(decoded)
                continue

            slot = _RECORD_SLOTS[type(decoded)]
            if slot in slots:
                diagnostics.warn(
                    DiagnosticKind.MALFORMED_INPUT,
                    f"Duplicate {subelement_name(raw.subelement_id)} subelement at octet "
                    f"{raw.offset} replaces the earlier one",
                    subelement_id=raw.subelement_id,
                    offset=raw.offset,
                )
            slots[slot] = decoded
    except FramingError as e:
        diagnostics.report(DiagnosticKind.MALFORMED_INPUT, f"Parsing stopped: {e}")

    record = LocationRecord(unknown=unknown, **slots)
    check_consumer_compatibility(record, diagnostics)
    return DecodeResult(record=record, diagnostics=diagnostics.entries)
