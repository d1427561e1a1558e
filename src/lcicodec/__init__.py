"""lcicodec: IEEE 802.11 Location Configuration Information codec

A Python library for encoding and decoding the LCI measurement reports that
Wi-Fi access points publish for fine timing measurement (802.11mc). A report
carries the geodetic position of the access point, its floor and height, the
usage rules for the location data and the BSSIDs colocated with it. The hex
form produced here is what hostapd expects in its ``lci=`` setting.

Key Features:
- Pydantic-based record models
- Tolerant decoding with structured diagnostics instead of exceptions
- Round-trip preservation of unrecognized subelements
- Advisories for field combinations Android will not pass on to applications

Quick Start:
    >>> from lcicodec import GeodeticField, LocationRecord, UsagePolicyField
    >>> from lcicodec import decode, encode
    >>>
    >>> record = LocationRecord(
    ...     location=GeodeticField(latitude=-33.8570095, longitude=151.2152005, altitude=11.2),
    ...     usage=UsagePolicyField(),
    ... )
    >>> result = encode(record)
    >>> decoded = decode(result.hex).record
"""

from __future__ import annotations

from .codec import DecodeResult, EncodeResult, decode, encode
from .config import CodecOptions
from .diagnostics import Diagnostic, DiagnosticKind, DiagnosticLog, Severity
from .exceptions import (
    BoundsError,
    DecodeError,
    EncodeError,
    FramingError,
    LciError,
    MalformedHexError,
)
from .models import (
    AltitudeType,
    BssidList,
    Datum,
    FloorField,
    GeodeticField,
    LocationRecord,
    MovementType,
    SubelementId,
    UnknownSubelement,
    UsagePolicyField,
)
from .policy import check_consumer_compatibility
from .utils import encoded_size, subelement_sizes

__version__ = "0.1.0"

__all__ = [
    # Core API
    "encode",
    "decode",
    "EncodeResult",
    "DecodeResult",
    "CodecOptions",
    # Models
    "LocationRecord",
    "GeodeticField",
    "FloorField",
    "UsagePolicyField",
    "BssidList",
    "UnknownSubelement",
    "SubelementId",
    "AltitudeType",
    "Datum",
    "MovementType",
    # Diagnostics
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticLog",
    "Severity",
    "check_consumer_compatibility",
    # Exceptions
    "LciError",
    "EncodeError",
    "DecodeError",
    "BoundsError",
    "MalformedHexError",
    "FramingError",
    # Sizing
    "encoded_size",
    "subelement_sizes",
    # Version
    "__version__",
]
