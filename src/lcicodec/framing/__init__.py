"""Subelement framing utilities for lcicodec.

This module iterates and writes the ID/length/payload framing shared by all
LCI subelements, and dispatches payloads to the per-subelement codecs.
"""

from __future__ import annotations

from .subelement import (
    RawSubelement,
    decode_subelement,
    encode_subelement,
    frame_subelement,
    iter_subelements,
)

__all__ = [
    "RawSubelement",
    "iter_subelements",
    "decode_subelement",
    "encode_subelement",
    "frame_subelement",
]
