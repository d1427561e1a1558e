"""Hardware address helpers.

Colocated BSSIDs are 48-bit IEEE 802 addresses. They are accepted in two
textual forms, ``00:11:22:33:44:55`` (``:``, ``-`` or ``_`` separators) and
bare ``001122334455``, and always written back as lowercase colon-separated
pairs.
"""

from __future__ import annotations

_SEPARATORS = ":-_"
_HEX = set("0123456789abcdefABCDEF")

MAC_OCTETS = 6


def _mac_pairs(text: str) -> list[str] | None:
    if len(text) == MAC_OCTETS * 3 - 1:
        for k in range(1, MAC_OCTETS):
            if text[3 * k - 1] not in _SEPARATORS:
                return None
        pairs = [text[3 * k:3 * k + 2] for k in range(MAC_OCTETS)]
    elif len(text) == MAC_OCTETS * 2:
        pairs = [text[2 * k:2 * k + 2] for k in range(MAC_OCTETS)]
    else:
        return None

    if not all(len(pair) == 2 and set(pair) <= _HEX for pair in pairs):
        return None
    return pairs


def is_valid_mac(text: str) -> bool:
    """Check whether ``text`` is a hardware address in an accepted form.

    Example:
        >>> is_valid_mac("00-11-22-33-44-55")
        True
        >>> is_valid_mac("00:11:22:33:44")
        False
    """
    return _mac_pairs(text) is not None


def normalize_mac(text: str) -> str:
    """Return the canonical lowercase colon-separated form of an address.

    Raises:
        ValueError: If ``text`` is not a valid address

    Example:
        >>> normalize_mac("AABBCCDDEEFF")
        'aa:bb:cc:dd:ee:ff'
    """
    pairs = _mac_pairs(text)
    if pairs is None:
        raise ValueError(f"Invalid hardware address {text!r}")
    return ":".join(pair.lower() for pair in pairs)


def mac_to_bytes(text: str) -> bytes:
    """Convert a valid address in either accepted form to its 6 octets."""
    pairs = _mac_pairs(text)
    if pairs is None:
        raise ValueError(f"Invalid hardware address {text!r}")
    return bytes(int(pair, 16) for pair in pairs)
