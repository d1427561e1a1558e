"""Pydantic record models for lcicodec.

This module provides the LocationRecord aggregate, the per-subelement models
and hardware address helpers.
"""

from __future__ import annotations

from .base import LciModel
from .fields import is_valid_mac, mac_to_bytes, normalize_mac
from .lci import (
    LCI_VERSION_1,
    AltitudeType,
    BssidList,
    Datum,
    FloorField,
    GeodeticField,
    LocationRecord,
    MovementType,
    Subelement,
    SubelementId,
    UnknownSubelement,
    UsagePolicyField,
)

__all__ = [
    "LciModel",
    "LocationRecord",
    "GeodeticField",
    "FloorField",
    "UsagePolicyField",
    "BssidList",
    "UnknownSubelement",
    "Subelement",
    "SubelementId",
    "AltitudeType",
    "Datum",
    "MovementType",
    "LCI_VERSION_1",
    "is_valid_mac",
    "normalize_mac",
    "mac_to_bytes",
]
