"""Subelement framing.

Subelements are formatted like elements: a 1-octet ID, a 1-octet length and
``length`` payload octets. Within an LCI report they appear in non-decreasing
ID order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from ..codec.bitpack import BitPacker, OctetReader
from ..config import CodecOptions
from ..diagnostics import DiagnosticKind, DiagnosticLog
from ..exceptions import EncodeError, FramingError, MalformedHexError
from ..models.lci import Subelement, UnknownSubelement
from ..subelements import codec_for, subelement_name

logger = logging.getLogger(__name__)

SUBELEMENT_HEADER_LENGTH = 2
MAX_PAYLOAD_LENGTH = 0xFF


@dataclass(frozen=True)
class RawSubelement:
    """One framed subelement before payload decoding.

    Attributes:
        subelement_id: ID octet
        offset: Octet offset of the ID octet within the input
        payload: Window over the payload octets
    """

    subelement_id: int
    offset: int
    payload: OctetReader


def iter_subelements(reader: OctetReader, start: int) -> Iterator[RawSubelement]:
    """Yield the subelements framed in ``reader`` from octet ``start`` on.

    Raises:
        FramingError: If a subelement header is truncated or unreadable, or a
            declared length runs past the end of the input. Subelements
            yielded before the error are complete.

    Example:
        >>> reader = OctetReader("06010107020000")
        >>> [(raw.subelement_id, len(raw.payload)) for raw in iter_subelements(reader, 0)]
        [(6, 1), (7, 2)]
    """
    position = start
    total = len(reader)
    while position < total:
        if position + SUBELEMENT_HEADER_LENGTH > total:
            raise FramingError(f"Truncated subelement header at octet {position}")
        try:
            subelement_id = reader.octet(position)
            length = reader.octet(position + 1)
        except MalformedHexError as e:
            raise FramingError(f"Unreadable subelement header at octet {position}: {e}") from e

        payload_start = position + SUBELEMENT_HEADER_LENGTH
        if payload_start + length > total:
            raise FramingError(
                f"Bad length for subelement ID {subelement_id}: {length} octets declared at "
                f"octet {position}, {total - payload_start} available"
            )

        logger.debug("Subelement ID %d length %d at octet %d", subelement_id, length, position)
        yield RawSubelement(subelement_id, position, reader.slice(payload_start, length))
        position = payload_start + length


def decode_subelement(
    raw: RawSubelement, options: CodecOptions, diagnostics: DiagnosticLog
) -> Subelement | None:
    """Decode one framed subelement through the codec registry.

    Unknown IDs are preserved as UnknownSubelement and reported. Malformed hex
    inside the payload is reported and the subelement skipped.
    """
    codec = codec_for(raw.subelement_id)
    try:
        if codec is None:
            diagnostics.report(
                DiagnosticKind.UNKNOWN_SUBELEMENT,
                f"Unrecognized subelement ID {raw.subelement_id} length {len(raw.payload)} "
                f"at octet {raw.offset}",
                subelement_id=raw.subelement_id,
                offset=raw.offset,
                length=len(raw.payload),
            )
            return UnknownSubelement(
                subelement_id=raw.subelement_id,
                payload=raw.payload.octets(0, len(raw.payload)),
            )
        return codec.decode(raw.payload, options, diagnostics)
    except MalformedHexError as e:
        diagnostics.report(
            DiagnosticKind.MALFORMED_INPUT,
            f"{subelement_name(raw.subelement_id)} subelement skipped: {e}",
            subelement_id=raw.subelement_id,
            offset=raw.offset,
        )
        return None


def encode_subelement(
    subelement: Subelement, options: CodecOptions, diagnostics: DiagnosticLog
) -> bytes:
    """Return the payload octets of one subelement."""
    if isinstance(subelement, UnknownSubelement):
        return subelement.payload
    codec = codec_for(subelement.subelement_id)
    if codec is None:
        raise EncodeError(f"No codec for subelement ID {subelement.subelement_id}")
    return codec.encode(subelement, options, diagnostics)


def frame_subelement(packer: BitPacker, subelement_id: int, payload: bytes) -> None:
    """Write ID, length and payload octets.

    Raises:
        EncodeError: If the payload does not fit a 1-octet length
    """
    if len(payload) > MAX_PAYLOAD_LENGTH:
        raise EncodeError(
            f"Subelement ID {subelement_id} payload of {len(payload)} octets exceeds "
            f"{MAX_PAYLOAD_LENGTH}"
        )
    packer.write_octet(subelement_id)
    packer.write_octet(len(payload))
    packer.write_bytes(payload)
