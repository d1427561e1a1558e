"""Per-call codec options.

Every encode and decode call takes its policy from a CodecOptions value
instead of module-level switches, so independent calls never influence each
other.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

BssidIndicatorPolicy = Literal["count", "zero"]


@dataclass(frozen=True)
class CodecOptions:
    """Options for encoding and decoding LCI records.

    Attributes:
        zero_uncertainty_is_smallest: Encode an uncertainty of 0 as the
            smallest representable uncertainty (maximum code) instead of the
            "unknown" code 0 (default False).

        include_location: Emit the LCI subelement (ID 0), default True.
            Even when True, it is only emitted if latitude, longitude or
            altitude is nonzero, unless force_location is set.

        force_location: Emit the LCI subelement even when latitude,
            longitude and altitude are all zero (default False).

        include_floor: Emit the Z subelement (ID 4), default True
        include_usage: Emit the Usage Rules/Policy subelement (ID 6), default True
        include_colocated: Emit the colocated BSSID subelement (ID 7), default True
        include_unknown: Write back preserved unknown subelements, default True

        bssid_indicator: Max BSSID Indicator written when the record does not
            carry one. "count" writes the number of addresses, which is what
            Android expects; "zero" writes 0 as IEEE 802.11 9.4.2.22.10
            specifies. Default "count".

    Examples:
        ```python
        from lcicodec import CodecOptions, encode

        # Treat 0 uncertainty as "as precise as the field allows"
        options = CodecOptions(zero_uncertainty_is_smallest=True)

        # Only the geodetic subelement, even at 0/0/0
        options = CodecOptions(
            include_floor=False,
            include_usage=False,
            include_colocated=False,
            force_location=True,
        )
        result = encode(record, options)
        ```
    """

    zero_uncertainty_is_smallest: bool = False

    include_location: bool = True
    force_location: bool = False
    include_floor: bool = True
    include_usage: bool = True
    include_colocated: bool = True
    include_unknown: bool = True

    bssid_indicator: BssidIndicatorPolicy = "count"

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.bssid_indicator not in ("count", "zero"):
            raise ValueError(
                f"bssid_indicator must be 'count' or 'zero', got {self.bssid_indicator!r}"
            )


DEFAULT_OPTIONS = CodecOptions()
