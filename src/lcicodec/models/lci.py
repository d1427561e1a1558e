"""LCI record models.

A LocationRecord aggregates the optional subelements of one LCI measurement
report. Each subelement model maps to one wire subelement ID; anything the
codec does not understand is kept as an UnknownSubelement with its raw
payload so that it can be written back unchanged.
"""

from __future__ import annotations

import enum
from typing import ClassVar, Union

from pydantic import Field, field_serializer

from .base import LciModel

LCI_VERSION_1 = 1


class SubelementId(enum.IntEnum):
    """Subelement IDs of the LCI report handled by this package."""

    LCI = 0
    Z = 4
    USAGE = 6
    COLOCATED_BSSID = 7


class Datum(enum.IntEnum):
    """Geodetic datum (RFC 6225). Values 4..7 are unassigned."""

    UNDEFINED = 0
    WGS84 = 1
    NAD83_NAVD88 = 2
    NAD83_MLLW = 3


class AltitudeType(enum.IntEnum):
    """Unit of the altitude field. Values 4..15 are unassigned."""

    UNDEFINED = 0
    METERS = 1
    FLOORS = 2
    ABOVE_GROUND = 3


class MovementType(enum.IntEnum):
    """Expected-to-move field of the Z subelement."""

    FIXED = 0
    VARIABLE = 1
    UNKNOWN = 2
    RESERVED = 3


class GeodeticField(LciModel):
    """LCI subelement (ID 0): latitude, longitude and altitude.

    Uncertainties are physical values (degrees for latitude/longitude, the
    altitude unit for altitude); 0 means unknown.

    Attributes:
        latitude: Degrees, 25 fractional bits on the wire
        longitude: Degrees, 25 fractional bits on the wire
        altitude: Unit per altitude_type, 8 fractional bits on the wire
        altitude_type: AltitudeType code (4 bits)
        datum: Datum code (3 bits)
        regulatory_agreement: RegLoc Agreement flag
        dynamic_enablement: RegLoc DSE flag
        dependent_station: Dependent STA flag
        version: LCI version (2 bits, must be 1)
    """

    subelement_id: ClassVar[int] = SubelementId.LCI

    latitude: float = 0.0
    longitude: float = 0.0
    altitude: float = 0.0
    latitude_uncertainty: float = Field(default=0.0, ge=0)
    longitude_uncertainty: float = Field(default=0.0, ge=0)
    altitude_uncertainty: float = Field(default=0.0, ge=0)
    altitude_type: int = Field(default=AltitudeType.METERS, ge=0, le=15)
    datum: int = Field(default=Datum.WGS84, ge=0, le=7)
    regulatory_agreement: bool = False
    dynamic_enablement: bool = False
    dependent_station: bool = False
    version: int = Field(default=LCI_VERSION_1, ge=0, le=3)

    def has_position(self) -> bool:
        """True if any of latitude, longitude or altitude is nonzero."""
        return self.latitude != 0 or self.longitude != 0 or self.altitude != 0


class FloorField(LciModel):
    """Z subelement (ID 4): floor and height above floor."""

    subelement_id: ClassVar[int] = SubelementId.Z

    movement: MovementType = MovementType.FIXED
    floor: float = 0.0
    height_above_floor: float = 0.0
    height_uncertainty: float = Field(default=0.0, ge=0)

    def has_position(self) -> bool:
        return self.floor != 0 or self.height_above_floor != 0 or self.height_uncertainty != 0


class UsagePolicyField(LciModel):
    """Usage Rules/Policy subelement (ID 6)."""

    subelement_id: ClassVar[int] = SubelementId.USAGE

    retransmission_allowed: bool = True
    retention_expires_present: bool = False
    location_policy: bool = False
    expiration_hours: int = Field(default=0, ge=0, le=0xFFFF)


class BssidList(LciModel):
    """Colocated BSSID list subelement (ID 7).

    ``addresses`` keeps one slot per address on the wire. Slots that failed
    validation during decode hold the raw hex text so later entries keep
    their position.

    Attributes:
        addresses: Hardware addresses, in wire order
        max_indicator: Max BSSID Indicator octet as decoded; None lets the
            encoder choose according to its options
    """

    subelement_id: ClassVar[int] = SubelementId.COLOCATED_BSSID

    addresses: list[str] = Field(default_factory=list)
    max_indicator: int | None = Field(default=None, ge=0, le=0xFF)


class UnknownSubelement(LciModel):
    """A subelement without a codec, preserved as raw payload octets."""

    subelement_id: int = Field(ge=0, le=0xFF)
    payload: bytes = b""

    @field_serializer("payload")
    def _payload_hex(self, payload: bytes) -> str:
        return payload.hex()


Subelement = Union[GeodeticField, FloorField, UsagePolicyField, BssidList, UnknownSubelement]


class LocationRecord(LciModel):
    """One LCI measurement report: header plus optional subelements."""

    location: GeodeticField | None = None
    floor: FloorField | None = None
    usage: UsagePolicyField | None = None
    colocated: BssidList | None = None
    unknown: list[UnknownSubelement] = Field(default_factory=list)

    def subelements(self) -> list[Subelement]:
        """Present subelements in ascending subelement ID order."""
        present: list[Subelement] = [
            sub
            for sub in (self.location, self.floor, self.usage, self.colocated)
            if sub is not None
        ]
        present.extend(self.unknown)
        return sorted(present, key=lambda sub: sub.subelement_id)
