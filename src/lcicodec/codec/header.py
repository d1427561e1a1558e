"""Measurement Report header of an LCI record.

Three octets precede the subelements: measurement token, measurement report
mode and measurement type (IEEE 802.11-2016 Table 9-107, 8 = LCI).
"""

from __future__ import annotations

from .bitpack import BitPacker, OctetReader
from ..diagnostics import DiagnosticKind, DiagnosticLog
from ..exceptions import BoundsError, MalformedHexError

MEASURE_TOKEN = 1
MEASURE_REPORT_MODE = 0
LCI_TYPE = 8
# Civic location reports share the framing but are not supported.
LOCATION_CIVIC_TYPE = 11

HEADER_LENGTH = 3


def write_header(packer: BitPacker) -> None:
    packer.write_octet(MEASURE_TOKEN)
    packer.write_octet(MEASURE_REPORT_MODE)
    packer.write_octet(LCI_TYPE)


def read_header(
    reader: OctetReader, diagnostics: DiagnosticLog
) -> tuple[int, int, int] | None:
    """Read and check the header.

    A header with unexpected values or bad hex digits is reported and
    decoding continues. Returns None when the header is unreadable.

    Raises:
        BoundsError: If the input is shorter than the header
    """
    if len(reader) < HEADER_LENGTH:
        raise BoundsError(
            f"Input of {len(reader)} octets is shorter than the {HEADER_LENGTH}-octet header"
        )
    try:
        token, mode, measurement_type = (reader.octet(i) for i in range(HEADER_LENGTH))
    except MalformedHexError as e:
        diagnostics.report(
            DiagnosticKind.MALFORMED_INPUT,
            f"Unreadable measurement report header: {e}",
            offset=e.octet_index,
        )
        return None
    if (token, mode, measurement_type) != (MEASURE_TOKEN, MEASURE_REPORT_MODE, LCI_TYPE):
        hint = " (civic location reports are not supported)" \
            if measurement_type == LOCATION_CIVIC_TYPE else ""
        diagnostics.report(
            DiagnosticKind.MALFORMED_INPUT,
            f"Bad measurement report header {token:02x} {mode:02x} {measurement_type:02x}"
            f"{hint}",
            offset=0,
        )
    return token, mode, measurement_type
