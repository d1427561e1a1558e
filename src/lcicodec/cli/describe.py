"""Human-readable description of LCI records."""

from __future__ import annotations

from typing import Sequence

from ..diagnostics import Diagnostic
from ..models.lci import AltitudeType, Datum, LocationRecord

_ALTITUDE_UNITS = {
    AltitudeType.UNDEFINED: "(undefined)",
    AltitudeType.METERS: "m",
    AltitudeType.FLOORS: "floors",
    AltitudeType.ABOVE_GROUND: "m above ground",
}

_DATUM_NAMES = {
    Datum.UNDEFINED: "undefined",
    Datum.WGS84: "WGS84",
    Datum.NAD83_NAVD88: "NAD83 + NAVD88",
    Datum.NAD83_MLLW: "NAD83 + MLLW",
}


def altitude_unit(altitude_type: int) -> str:
    """Label for the altitude unit of an altitude type code."""
    return _ALTITUDE_UNITS.get(altitude_type, f"(unassigned type {altitude_type})")


def datum_name(datum: int) -> str:
    return _DATUM_NAMES.get(datum, f"unassigned ({datum})")


def describe_record(record: LocationRecord) -> list[str]:
    """Describe each present subelement, one line per field.

    Args:
        record: Record to describe

    Returns:
        Lines of text, without trailing newlines
    """
    lines: list[str] = []

    location = record.location
    if location is not None:
        unit = altitude_unit(location.altitude_type)
        lines.append(f"LCI subelement (ID {location.subelement_id})")
        lines.append(f"  latitude      {location.latitude:12.7f} deg "
                     f"+/- {location.latitude_uncertainty:g}")
        lines.append(f"  longitude     {location.longitude:12.7f} deg "
                     f"+/- {location.longitude_uncertainty:g}")
        lines.append(f"  altitude      {location.altitude:12.4f} {unit} "
                     f"+/- {location.altitude_uncertainty:g}")
        lines.append(f"  datum         {location.datum} ({datum_name(location.datum)})")
        lines.append(f"  regloc        agreement {int(location.regulatory_agreement)} "
                     f"dse {int(location.dynamic_enablement)} "
                     f"dependent {int(location.dependent_station)}")
        lines.append(f"  version       {location.version}")

    floor = record.floor
    if floor is not None:
        lines.append(f"Z subelement (ID {floor.subelement_id})")
        lines.append(f"  movement      {floor.movement.name.lower()}")
        lines.append(f"  floor         {floor.floor:g}")
        lines.append(f"  height        {floor.height_above_floor:g} m "
                     f"+/- {floor.height_uncertainty:g}")

    usage = record.usage
    if usage is not None:
        lines.append(f"Usage Rules/Policy subelement (ID {usage.subelement_id})")
        lines.append(f"  retransmission allowed      {usage.retransmission_allowed}")
        lines.append(f"  retention expires present   {usage.retention_expires_present}")
        lines.append(f"  location policy             {usage.location_policy}")
        if usage.retention_expires_present:
            lines.append(f"  expiration                  {usage.expiration_hours} h")

    colocated = record.colocated
    if colocated is not None:
        indicator = "-" if colocated.max_indicator is None else colocated.max_indicator
        lines.append(f"Colocated BSSID subelement (ID {colocated.subelement_id}, "
                     f"max indicator {indicator})")
        for index, address in enumerate(colocated.addresses):
            lines.append(f"  {index}\t{address}")

    for unknown in record.unknown:
        lines.append(f"Unknown subelement (ID {unknown.subelement_id}, "
                     f"{len(unknown.payload)} octets): {unknown.payload.hex()}")

    return lines


def describe_diagnostics(diagnostics: Sequence[Diagnostic]) -> list[str]:
    return [str(diagnostic) for diagnostic in diagnostics]
