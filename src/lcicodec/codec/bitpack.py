"""Bit-level and octet-level access for LCI records.

Two conventions meet in an LCI record. Inside the bit-packed LCI field, bits
are numbered least significant first within each octet, so a field starting at
bit offset ``k`` takes bit ``k % 8`` of octet ``k // 8`` as its least
significant bit. Byte-granular fields (floor info, heights, expiration) are
plain big-endian integers. The wire form is hexadecimal text, two characters
per octet, most significant nibble first.
"""

from __future__ import annotations

from ..exceptions import BoundsError, MalformedHexError

HEX_DIGITS = "0123456789abcdef"

_HEX_VALUES = {digit: value for value, digit in enumerate(HEX_DIGITS)}
_HEX_VALUES.update({digit.upper(): value for digit, value in list(_HEX_VALUES.items())})


def _check_bit_count(bit_count: int) -> None:
    if bit_count < 1 or bit_count > 64:
        raise ValueError(f"bit_count must be 1-64, got {bit_count}")


def read_bits(data: bytes | bytearray, bit_offset: int, bit_count: int) -> int:
    """Read an unsigned field of ``bit_count`` bits, LSB first within octets.

    Args:
        data: Byte buffer to read from
        bit_offset: Offset of the field's least significant bit
        bit_count: Width of the field (1-64)

    Returns:
        Unsigned field value

    Raises:
        BoundsError: If the field extends past the end of ``data``
    """
    _check_bit_count(bit_count)
    if bit_offset < 0 or bit_offset + bit_count > len(data) * 8:
        raise BoundsError(
            f"Bit field [{bit_offset}, {bit_offset + bit_count}) outside "
            f"{len(data) * 8}-bit buffer"
        )

    value = 0
    for i in range(bit_count):
        index = bit_offset + i
        if data[index >> 3] & (1 << (index & 7)):
            value |= 1 << i
    return value


def write_bits(buffer: bytearray, bit_offset: int, bit_count: int, value: int) -> int:
    """Write an unsigned field of ``bit_count`` bits, LSB first within octets.

    Bits outside the field are left untouched.

    Args:
        buffer: Buffer to modify in place
        bit_offset: Offset of the field's least significant bit
        bit_count: Width of the field (1-64)
        value: Unsigned value (must fit in ``bit_count`` bits)

    Returns:
        Bit offset just past the written field

    Raises:
        ValueError: If value is negative or too wide
        BoundsError: If the field extends past the end of ``buffer``
    """
    _check_bit_count(bit_count)
    if value < 0:
        raise ValueError(f"write_bits requires non-negative value, got {value}")
    if value >> bit_count:
        raise ValueError(f"Value {value} requires more than {bit_count} bits")
    if bit_offset < 0 or bit_offset + bit_count > len(buffer) * 8:
        raise BoundsError(
            f"Bit field [{bit_offset}, {bit_offset + bit_count}) outside "
            f"{len(buffer) * 8}-bit buffer"
        )

    for i in range(bit_count):
        index = bit_offset + i
        mask = 1 << (index & 7)
        if (value >> i) & 1:
            buffer[index >> 3] |= mask
        else:
            buffer[index >> 3] &= ~mask & 0xFF
    return bit_offset + bit_count


def read_octet(text: str, octet_index: int) -> int:
    """Decode the octet at ``octet_index`` from hex text (either case).

    Raises:
        BoundsError: If the octet lies past the end of the text
        MalformedHexError: If either character is not a hex digit
    """
    start = octet_index * 2
    if octet_index < 0 or start + 2 > len(text):
        raise BoundsError(f"Octet {octet_index} past end of {len(text) // 2}-octet input")

    high = _HEX_VALUES.get(text[start])
    low = _HEX_VALUES.get(text[start + 1])
    if high is None or low is None:
        raise MalformedHexError(
            f"Invalid hex octet {text[start:start + 2]!r} at octet {octet_index}", octet_index
        )
    return (high << 4) | low


def format_octet(value: int) -> str:
    """Encode one octet as two lowercase hex digits."""
    if not 0 <= value <= 0xFF:
        raise ValueError(f"Octet value must be 0-255, got {value}")
    return HEX_DIGITS[value >> 4] + HEX_DIGITS[value & 0x0F]


def read_number(text: str, octet_offset: int, octet_count: int) -> int:
    """Read a big-endian unsigned integer spanning ``octet_count`` octets."""
    value = 0
    for index in range(octet_offset, octet_offset + octet_count):
        value = (value << 8) | read_octet(text, index)
    return value


def write_number(buffer: bytearray, octet_offset: int, octet_count: int, value: int) -> int:
    """Write a big-endian unsigned integer into ``octet_count`` octets.

    Returns:
        Octet offset just past the written number

    Raises:
        ValueError: If value is negative or does not fit
        BoundsError: If the number extends past the end of ``buffer``
    """
    if value < 0 or value >> (8 * octet_count):
        raise ValueError(f"Value {value} does not fit in {octet_count} octets")
    if octet_offset < 0 or octet_offset + octet_count > len(buffer):
        raise BoundsError(
            f"Octets [{octet_offset}, {octet_offset + octet_count}) outside "
            f"{len(buffer)}-octet buffer"
        )
    buffer[octet_offset:octet_offset + octet_count] = value.to_bytes(octet_count, "big")
    return octet_offset + octet_count


class OctetReader:
    """Bounds-checked view over a window of hex text.

    Indices passed to the accessors are relative to the start of the window,
    so a subelement codec can address its payload from octet 0.

    Example:
        >>> reader = OctetReader("01000806010")
        >>> len(reader)
        5
        >>> reader.number(0, 2)
        256
    """

    __slots__ = ("_text", "_start", "_length")

    def __init__(self, text: str, start: int = 0, length: int | None = None) -> None:
        total = len(text) // 2
        if length is None:
            length = total - start
        if start < 0 or length < 0 or start + length > total:
            raise BoundsError(f"Window [{start}, {start + length}) outside {total}-octet input")
        self._text = text
        self._start = start
        self._length = length

    def __len__(self) -> int:
        return self._length

    @property
    def start(self) -> int:
        """Octet offset of this window within the full input."""
        return self._start

    def _check(self, index: int, count: int) -> None:
        if index < 0 or count < 0 or index + count > self._length:
            raise BoundsError(
                f"Octets [{index}, {index + count}) outside {self._length}-octet window "
                f"at octet {self._start}"
            )

    def octet(self, index: int) -> int:
        self._check(index, 1)
        return read_octet(self._text, self._start + index)

    def number(self, index: int, count: int) -> int:
        """Big-endian unsigned integer of ``count`` octets."""
        self._check(index, count)
        return read_number(self._text, self._start + index, count)

    def octets(self, index: int, count: int) -> bytes:
        self._check(index, count)
        return bytes(read_octet(self._text, self._start + i) for i in range(index, index + count))

    def hex(self, index: int, count: int) -> str:
        """Raw hex text of ``count`` octets, without validating the digits."""
        self._check(index, count)
        first = (self._start + index) * 2
        return self._text[first:first + count * 2]

    def slice(self, index: int, count: int) -> OctetReader:
        self._check(index, count)
        return OctetReader(self._text, self._start + index, count)


class BitPacker:
    """Capacity-checked output buffer with a bit cursor.

    Bit writes follow the LCI convention (LSB first within each octet);
    octet and number writes are big-endian and require the cursor to be
    octet-aligned. Writing past the capacity raises BoundsError instead of
    overrunning.

    Example:
        >>> packer = BitPacker(2)
        >>> packer.write_uint(0x12, 6)
        >>> packer.write_uint(0, 2)
        >>> packer.write_octet(0xAB)
        >>> packer.to_bytes().hex()
        '12ab'
    """

    def __init__(self, capacity: int) -> None:
        """Initialize an empty packer holding at most ``capacity`` octets."""
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        self._buffer = bytearray(capacity)
        self._bit_position = 0

    @property
    def capacity(self) -> int:
        return len(self._buffer)

    def write_uint(self, value: int, num_bits: int) -> None:
        """Write an unsigned integer using the specified number of bits.

        Raises:
            ValueError: If value is negative or doesn't fit in num_bits
            BoundsError: If the write would exceed the capacity
        """
        self._bit_position = write_bits(self._buffer, self._bit_position, num_bits, value)

    def write_int(self, value: int, num_bits: int) -> None:
        """Write a signed integer using two's complement encoding."""
        if num_bits < 2 or num_bits > 64:
            raise ValueError(f"num_bits must be 2-64 for signed integers, got {num_bits}")

        min_value = -(1 << (num_bits - 1))
        max_value = (1 << (num_bits - 1)) - 1
        if value < min_value or value > max_value:
            raise ValueError(
                f"Value {value} doesn't fit in {num_bits} bits (range: {min_value} to {max_value})"
            )
        self.write_uint(value & ((1 << num_bits) - 1), num_bits)

    def write_bool(self, value: bool) -> None:
        self.write_uint(1 if value else 0, 1)

    def _octet_position(self) -> int:
        if self._bit_position & 7:
            raise ValueError(f"Cursor not octet-aligned (bit {self._bit_position})")
        return self._bit_position >> 3

    def write_number(self, value: int, num_octets: int) -> None:
        """Write a big-endian unsigned integer of ``num_octets`` octets."""
        end = write_number(self._buffer, self._octet_position(), num_octets, value)
        self._bit_position = end << 3

    def write_octet(self, value: int) -> None:
        self.write_number(value, 1)

    def write_bytes(self, data: bytes) -> None:
        """Write raw bytes (byte-aligned)."""
        position = self._octet_position()
        if position + len(data) > len(self._buffer):
            raise BoundsError(
                f"Writing {len(data)} octets at {position} exceeds capacity {len(self._buffer)}"
            )
        self._buffer[position:position + len(data)] = data
        self._bit_position = (position + len(data)) << 3

    def bit_length(self) -> int:
        """Return the current number of bits written."""
        return self._bit_position

    def to_bytes(self) -> bytes:
        """Return the octets written so far (a partial last octet is included)."""
        return bytes(self._buffer[: (self._bit_position + 7) >> 3])


class BitUnpacker:
    """Sequential LSB-first reader over a byte buffer.

    Example:
        >>> unpacker = BitUnpacker(bytes.fromhex("52"))
        >>> unpacker.read_uint(6)
        18
    """

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._position = 0

    def read_uint(self, num_bits: int) -> int:
        """Read an unsigned integer of the specified bit width.

        Raises:
            ValueError: If num_bits is out of range
            BoundsError: If not enough bits are available
        """
        value = read_bits(self._data, self._position, num_bits)
        self._position += num_bits
        return value

    def read_int(self, num_bits: int) -> int:
        """Read a signed integer using two's complement encoding."""
        if num_bits < 2 or num_bits > 64:
            raise ValueError(f"num_bits must be 2-64 for signed integers, got {num_bits}")

        unsigned_value = self.read_uint(num_bits)
        if unsigned_value & (1 << (num_bits - 1)):
            return unsigned_value - (1 << num_bits)
        return unsigned_value

    def read_bool(self) -> bool:
        return self.read_uint(1) == 1

    def bits_remaining(self) -> int:
        return len(self._data) * 8 - self._position

    def position(self) -> int:
        """Return the current bit position."""
        return self._position
