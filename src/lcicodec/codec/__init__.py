"""LCI report codec for lcicodec.

This module provides encoding and decoding of LCI measurement reports, along
with the bit-level, fixed-point and uncertainty primitives they are built on.
"""

from __future__ import annotations

from .bitpack import BitPacker, BitUnpacker, OctetReader
from .decoder import DecodeResult, decode
from .encoder import EncodeResult, encode
from .fixed_point import FixedPointFormat
from .uncertainty import UncertaintyScale, decode_uncertainty, encode_uncertainty

__all__ = [
    "encode",
    "decode",
    "EncodeResult",
    "DecodeResult",
    "BitPacker",
    "BitUnpacker",
    "OctetReader",
    "FixedPointFormat",
    "UncertaintyScale",
    "encode_uncertainty",
    "decode_uncertainty",
]
