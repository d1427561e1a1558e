"""Exception hierarchy for lcicodec.

Only a few conditions are fatal for a call: reading past the end of the input
and writing past the capacity of the output buffer. Everything else found in
subelement content is reported through :mod:`lcicodec.diagnostics` instead.
All exceptions inherit from LciError for easy catching of any lcicodec error.
"""

from __future__ import annotations


class LciError(Exception):
    """Base exception for all lcicodec errors."""

    pass


class EncodeError(LciError):
    """Raised when encoding a record fails.

    Examples:
        - Subelement payload longer than the 255 octets a length octet can hold
        - Value does not fit the requested bit width
    """

    pass


class DecodeError(LciError):
    """Raised when decoding a hex record fails in a way that cannot be skipped."""

    pass


class BoundsError(LciError):
    """Raised when an access would fall outside the input or output buffer.

    Examples:
        - Input shorter than the 3-octet measurement report header
        - Reading an octet past the end of the hex text
        - Writing past the capacity of a BitPacker
    """

    pass


class MalformedHexError(DecodeError):
    """Raised when a character pair is not a valid hexadecimal octet.

    The decoder catches this in the header and per subelement, reports it
    and keeps going without the unreadable part.
    """

    def __init__(self, message: str, octet_index: int) -> None:
        super().__init__(message)
        self.octet_index = octet_index


class FramingError(DecodeError):
    """Raised when subelement framing cannot continue.

    Examples:
        - Declared length runs past the end of the input
        - Subelement header truncated after the ID octet
    """

    pass
