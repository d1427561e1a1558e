"""Colocated BSSID list subelement (ID 7) codec.

Payload: one Max BSSID Indicator octet followed by 6-octet addresses. The
standard (IEEE 802.11-2016 Figure 9-224) requires the indicator to be 0 here;
Android writes the number of addresses instead. Both are accepted, and the
address count is always derived from the subelement length.
"""

from __future__ import annotations

from ..codec.bitpack import BitPacker, OctetReader
from ..config import CodecOptions
from ..diagnostics import DiagnosticKind, DiagnosticLog
from ..exceptions import EncodeError
from ..models.fields import MAC_OCTETS, is_valid_mac, mac_to_bytes, normalize_mac
from ..models.lci import BssidList

# One length octet bounds the payload to 255 octets: indicator + 42 addresses.
MAX_BSSIDS = (0xFF - 1) // MAC_OCTETS


def valid_addresses(field: BssidList, diagnostics: DiagnosticLog | None = None) -> list[str]:
    """Return the addresses that will be encoded, reporting the rejected ones."""
    valid = []
    for index, address in enumerate(field.addresses):
        if is_valid_mac(address):
            valid.append(address)
        elif diagnostics is not None:
            diagnostics.report(
                DiagnosticKind.MALFORMED_INPUT,
                f"Invalid colocated BSSID {address!r} not encoded",
                subelement_id=BssidList.subelement_id,
                index=index,
                value=address,
            )
    return valid


def encode_bssids(field: BssidList, options: CodecOptions, diagnostics: DiagnosticLog) -> bytes:
    """Pack the valid addresses of a BssidList."""
    addresses = valid_addresses(field, diagnostics)
    if len(addresses) > MAX_BSSIDS:
        raise EncodeError(
            f"{len(addresses)} colocated BSSIDs exceed the {MAX_BSSIDS} that fit in a subelement"
        )

    if field.max_indicator is not None:
        indicator = field.max_indicator
    elif options.bssid_indicator == "zero":
        indicator = 0
    else:
        indicator = len(addresses)
    if indicator not in (0, len(addresses)):
        diagnostics.warn(
            DiagnosticKind.MALFORMED_INPUT,
            f"Max BSSID indicator {indicator} is neither 0 nor the address count "
            f"{len(addresses)}",
            subelement_id=BssidList.subelement_id,
            value=indicator,
        )

    packer = BitPacker(1 + MAC_OCTETS * len(addresses))
    packer.write_octet(indicator)
    for address in addresses:
        packer.write_bytes(mac_to_bytes(address))
    return packer.to_bytes()


def decode_bssids(
    payload: OctetReader, options: CodecOptions, diagnostics: DiagnosticLog
) -> BssidList | None:
    """Unpack the address list.

    Invalid addresses are reported but keep their slot (holding the raw hex
    text), so the entries after them stay in position.
    """
    length = len(payload)
    if length == 0:
        diagnostics.report(
            DiagnosticKind.MALFORMED_INPUT,
            "Colocated BSSID subelement has no Max BSSID Indicator octet",
            subelement_id=BssidList.subelement_id,
            offset=payload.start,
        )
        return None
    if (length - 1) % MAC_OCTETS != 0:
        diagnostics.report(
            DiagnosticKind.MALFORMED_INPUT,
            f"Colocated BSSID length {length} is not 1 + a multiple of {MAC_OCTETS}; "
            "trailing octets ignored",
            subelement_id=BssidList.subelement_id,
            offset=payload.start,
            length=length,
        )

    count = (length - 1) // MAC_OCTETS
    indicator = payload.octet(0)
    if indicator != 0:
        diagnostics.warn(
            DiagnosticKind.MALFORMED_INPUT,
            f"Max BSSID indicator {indicator} != 0",
            subelement_id=BssidList.subelement_id,
            value=indicator,
        )
        if indicator != count:
            diagnostics.warn(
                DiagnosticKind.MALFORMED_INPUT,
                f"Max BSSID indicator {indicator} != address count {count}",
                subelement_id=BssidList.subelement_id,
                value=indicator,
            )

    addresses = []
    for index in range(count):
        raw = payload.hex(1 + index * MAC_OCTETS, MAC_OCTETS)
        if is_valid_mac(raw):
            addresses.append(normalize_mac(raw))
        else:
            diagnostics.report(
                DiagnosticKind.MALFORMED_INPUT,
                f"Invalid colocated BSSID {raw!r}",
                subelement_id=BssidList.subelement_id,
                index=index,
                value=raw,
            )
            addresses.append(raw)

    return BssidList(addresses=addresses, max_indicator=indicator)
