"""Per-subelement codecs and the registry the framer dispatches through.

Each codec pairs a payload encoder (model -> payload octets) with a payload
decoder (payload window -> model, or None when the payload is skipped).
"""

from __future__ import annotations

from typing import Any, Callable, NamedTuple

from ..codec.bitpack import OctetReader
from ..config import CodecOptions
from ..diagnostics import DiagnosticLog
from ..models.base import LciModel
from ..models.lci import BssidList, FloorField, GeodeticField, UsagePolicyField
from .bssid import decode_bssids, encode_bssids
from .floor import decode_floor, encode_floor
from .location import decode_location, encode_location
from .usage import decode_usage, encode_usage


class SubelementCodec(NamedTuple):
    """Encoder/decoder pair for one subelement ID."""

    name: str
    model: type[LciModel]
    encode: Callable[[Any, CodecOptions, DiagnosticLog], bytes]
    decode: Callable[[OctetReader, CodecOptions, DiagnosticLog], Any]


SUBELEMENT_CODECS: dict[int, SubelementCodec] = {
    GeodeticField.subelement_id: SubelementCodec(
        "LCI", GeodeticField, encode_location, decode_location
    ),
    FloorField.subelement_id: SubelementCodec("Z", FloorField, encode_floor, decode_floor),
    UsagePolicyField.subelement_id: SubelementCodec(
        "Usage Rules/Policy", UsagePolicyField, encode_usage, decode_usage
    ),
    BssidList.subelement_id: SubelementCodec(
        "Colocated BSSID", BssidList, encode_bssids, decode_bssids
    ),
}


def codec_for(subelement_id: int) -> SubelementCodec | None:
    """Return the codec registered for ``subelement_id``, if any."""
    return SUBELEMENT_CODECS.get(subelement_id)


def subelement_name(subelement_id: int) -> str:
    codec = codec_for(subelement_id)
    return codec.name if codec is not None else f"unknown ({subelement_id})"


__all__ = [
    "SubelementCodec",
    "SUBELEMENT_CODECS",
    "codec_for",
    "subelement_name",
]
