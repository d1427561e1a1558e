"""Advisory checks for what a consuming platform will accept.

Android's ResponderLocation withholds location data from applications when
the usage rules forbid retransmission or set an expiration, or when the
station is expected to move. It also has no name for the "height above
ground" altitude type. None of this blocks encoding or decoding; it is only
reported.
"""

from __future__ import annotations

from .diagnostics import Diagnostic, DiagnosticKind, DiagnosticLog
from .models.lci import AltitudeType, LocationRecord, MovementType


def check_consumer_compatibility(
    record: LocationRecord, diagnostics: DiagnosticLog | None = None
) -> list[Diagnostic]:
    """Report field combinations that make Android withhold location data.

    Args:
        record: Record to check (not modified)
        diagnostics: Log to add the advisories to (a new one if omitted)

    Returns:
        The advisories reported by this call
    """
    if diagnostics is None:
        diagnostics = DiagnosticLog()
    found: list[Diagnostic] = []
    kind = DiagnosticKind.CONSUMER_INCOMPATIBILITY

    usage = record.usage
    if usage is not None:
        if not usage.retransmission_allowed:
            found.append(diagnostics.advise(
                kind,
                "Android will not provide location information because "
                "retransmission_allowed is false",
                field="retransmission_allowed",
            ))
        if usage.retention_expires_present:
            found.append(diagnostics.advise(
                kind,
                "Android will not provide location information because "
                "retention_expires_present is true",
                field="retention_expires_present",
            ))
        if usage.expiration_hours != 0:
            found.append(diagnostics.advise(
                kind,
                "Android will not provide location information because expiration != 0",
                field="expiration_hours",
            ))

    if record.floor is not None and record.floor.movement != MovementType.FIXED:
        found.append(diagnostics.advise(
            kind,
            "Android will not provide location information because the station is not "
            f"fixed (movement {record.floor.movement.name.lower()})",
            field="movement",
        ))

    if record.location is not None and record.location.altitude_type == AltitudeType.ABOVE_GROUND:
        found.append(diagnostics.advise(
            kind,
            "Android's ResponderLocation does not define altitude type 3 "
            "(height above ground)",
            field="altitude_type",
        ))

    return found
