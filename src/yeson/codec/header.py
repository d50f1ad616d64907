"""Header byte layout and wire constants.

Every encoded value starts with one header byte: the high nibble is the
type tag, the low nibble is a tag-dependent info field.

    for bool:   0 = false, 1 = true
    for string: byte length (0-14), or 0b1111 followed by a length byte
    for int:    bit 3 = signed flag, bits 2-0 = width code
    for float:  0 = single precision, 1 = double precision
    for array:  element count, same short/long form as strings
    for object: key-value pair count, same short/long form as strings

All multi-byte payloads are little-endian.
"""

from __future__ import annotations

import enum
import struct


class TypeTag(enum.IntEnum):
    """Type tag stored in the high nibble of the header byte."""

    NULL = 0
    BOOL = 1
    STRING = 2
    INT = 3
    FLOAT = 4
    ARRAY = 5
    OBJECT = 6


class IntWidth(enum.IntEnum):
    """Integer width codes (bits 2-0 of the info field)."""

    BYTE = 0b001
    SHORT = 0b010
    INT = 0b011
    LONG = 0b100

    @property
    def byte_size(self) -> int:
        return 1 << (self.value - 1)


class FloatPrecision(enum.IntEnum):
    """Float precision codes (info field)."""

    SINGLE = 0
    DOUBLE = 1


INFO_MASK = 0b1111
SIGNED_FLAG = 0b1000
WIDTH_MASK = 0b0111

# Short-form lengths live in the info field; 0b1111 means a length byte follows.
MAX_SHORT_LENGTH = 0b1110
LONG_LENGTH = 0b1111
MAX_LENGTH = 0xFF

# (width, signed) -> payload layout
INT_STRUCTS: dict[tuple[IntWidth, bool], struct.Struct] = {
    (IntWidth.BYTE, False): struct.Struct("<B"),
    (IntWidth.SHORT, False): struct.Struct("<H"),
    (IntWidth.SHORT, True): struct.Struct("<h"),
    (IntWidth.INT, False): struct.Struct("<I"),
    (IntWidth.INT, True): struct.Struct("<i"),
    (IntWidth.LONG, False): struct.Struct("<Q"),
    (IntWidth.LONG, True): struct.Struct("<q"),
}

FLOAT_STRUCTS: dict[FloatPrecision, struct.Struct] = {
    FloatPrecision.SINGLE: struct.Struct("<f"),
    FloatPrecision.DOUBLE: struct.Struct("<d"),
}


def pack_header(tag: int, info: int = 0) -> int:
    """Combine a type tag and info field into a header byte.

    Args:
        tag: Type tag (0-15)
        info: Info field; only the low 4 bits are kept

    Returns:
        Header byte value (0-255)
    """
    return ((tag & INFO_MASK) << 4) | (info & INFO_MASK)


def unpack_header(header: int) -> tuple[int, int]:
    """Split a header byte into (tag, info).

    The tag is not validated here; dispatch sites reject unknown tags.
    """
    return header >> 4, header & INFO_MASK


def int_info(width: IntWidth, signed: bool) -> int:
    """Build the info field for an integer header."""
    return (SIGNED_FLAG if signed else 0) | int(width)


def split_int_info(info: int) -> tuple[bool, int]:
    """Split an integer info field into (signed, width code)."""
    return bool(info & SIGNED_FLAG), info & WIDTH_MASK


def length_prefix_size(length: int) -> int:
    """Return the number of header bytes used to frame ``length`` units.

    Args:
        length: String byte length, array element count or object pair count

    Returns:
        1 for short-form lengths, 2 for long-form lengths
    """
    return 1 if length <= MAX_SHORT_LENGTH else 2
