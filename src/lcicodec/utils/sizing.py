"""Encoded size calculation.

The encoder allocates its output buffer from these figures, so they must
never be smaller than what encoding actually writes.
"""

from __future__ import annotations

from ..codec.header import HEADER_LENGTH
from ..framing.subelement import SUBELEMENT_HEADER_LENGTH
from ..models.fields import MAC_OCTETS
from ..models.lci import (
    BssidList,
    FloorField,
    GeodeticField,
    LocationRecord,
    Subelement,
    UnknownSubelement,
    UsagePolicyField,
)
from ..subelements.floor import Z_FIELD_LENGTH
from ..subelements.location import LCI_FIELD_LENGTH
from ..subelements.usage import USAGE_LENGTH_WITH_EXPIRATION


def subelement_size(subelement: Subelement) -> int:
    """Worst-case octets for one subelement, ID and length octets included.

    Example:
        >>> subelement_size(FloorField())
        8
    """
    if isinstance(subelement, GeodeticField):
        payload = LCI_FIELD_LENGTH
    elif isinstance(subelement, FloorField):
        payload = Z_FIELD_LENGTH
    elif isinstance(subelement, UsagePolicyField):
        payload = USAGE_LENGTH_WITH_EXPIRATION
    elif isinstance(subelement, BssidList):
        payload = 1 + MAC_OCTETS * len(subelement.addresses)
    elif isinstance(subelement, UnknownSubelement):
        payload = len(subelement.payload)
    else:
        raise TypeError(f"Not a subelement: {type(subelement).__name__}")
    return SUBELEMENT_HEADER_LENGTH + payload


def encoded_size(record: LocationRecord) -> int:
    """Worst-case encoded size of a record in octets.

    Every present subelement is counted at its largest form, whether or not
    the encoder's options end up emitting it.

    Example:
        >>> encoded_size(LocationRecord(location=GeodeticField(latitude=1.0)))
        21
    """
    return HEADER_LENGTH + sum(subelement_size(sub) for sub in record.subelements())


def subelement_sizes(record: LocationRecord) -> dict[int, int]:
    """Worst-case octets of each present subelement, keyed by subelement ID."""
    sizes: dict[int, int] = {}
    for sub in record.subelements():
        sizes[sub.subelement_id] = sizes.get(sub.subelement_id, 0) + subelement_size(sub)
    return sizes
