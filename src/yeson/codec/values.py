"""Fixed-width value types.

Python has a single unbounded ``int`` and a double-precision ``float``. These
subclasses pin the wire width and signedness of a value so it encodes exactly
as declared; the decoder returns them so decoded trees re-encode to the same
bytes. They compare equal to the plain numbers they wrap.

Example:
    >>> from yeson import UInt16, Float32, encode
    >>> encode(UInt16(7))
    b'2\\x07\\x00'
    >>> Float32(0.1) == 0.1
    False
"""

from __future__ import annotations

import struct
from typing import ClassVar, Optional

from .header import FLOAT_STRUCTS, FloatPrecision, IntWidth


class FixedInt(int):
    """Base class for integers with a declared wire width."""

    width: ClassVar[IntWidth]
    signed: ClassVar[bool]
    min_value: ClassVar[int]
    max_value: ClassVar[int]

    def __new__(cls, value: int = 0) -> FixedInt:
        if cls is FixedInt:
            raise TypeError("FixedInt is abstract; use UInt8, Int16, ... instead")
        if isinstance(value, float) and not value.is_integer():
            raise ValueError(f"{cls.__name__} requires an integral value, got {value}")
        number = int(value)
        if number < cls.min_value or number > cls.max_value:
            raise ValueError(
                f"{cls.__name__} value {number} out of range "
                f"[{cls.min_value}, {cls.max_value}]"
            )
        return super().__new__(cls, number)

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        bits = cls.width.byte_size * 8
        if cls.signed:
            cls.min_value = -(1 << (bits - 1))
            cls.max_value = (1 << (bits - 1)) - 1
        else:
            cls.min_value = 0
            cls.max_value = (1 << bits) - 1

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"


class UInt8(FixedInt):
    """Unsigned 8-bit integer. The format has no signed 8-bit type."""

    width = IntWidth.BYTE
    signed = False


class Int16(FixedInt):
    width = IntWidth.SHORT
    signed = True


class UInt16(FixedInt):
    width = IntWidth.SHORT
    signed = False


class Int32(FixedInt):
    width = IntWidth.INT
    signed = True


class UInt32(FixedInt):
    width = IntWidth.INT
    signed = False


class Int64(FixedInt):
    width = IntWidth.LONG
    signed = True


class UInt64(FixedInt):
    width = IntWidth.LONG
    signed = False


# Narrowest first; plain ints take the first type whose range fits.
_UNSIGNED_BY_SIZE: tuple[type[FixedInt], ...] = (UInt8, UInt16, UInt32, UInt64)
_SIGNED_BY_SIZE: tuple[type[FixedInt], ...] = (Int16, Int32, Int64)

_INT_TYPES: dict[tuple[IntWidth, bool], type[FixedInt]] = {
    (t.width, t.signed): t for t in _UNSIGNED_BY_SIZE + _SIGNED_BY_SIZE
}


def int_type_for(width: IntWidth, signed: bool) -> type[FixedInt]:
    """Return the value type for a wire width and signedness.

    The byte width is always unsigned, whatever ``signed`` says.
    """
    if width is IntWidth.BYTE:
        return UInt8
    return _INT_TYPES[(width, signed)]


def narrowest_int_type(value: int) -> Optional[type[FixedInt]]:
    """Pick the narrowest fixed-width type able to hold a plain int.

    Non-negative values use unsigned widths, negative values signed ones.

    Returns:
        The matching type, or None if the value needs more than 64 bits
    """
    candidates = _UNSIGNED_BY_SIZE if value >= 0 else _SIGNED_BY_SIZE
    for int_type in candidates:
        if int_type.min_value <= value <= int_type.max_value:
            return int_type
    return None


class FixedFloat(float):
    """Base class for floats with a declared wire precision."""

    precision: ClassVar[FloatPrecision]

    def __new__(cls, value: float = 0.0) -> FixedFloat:
        if cls is FixedFloat:
            raise TypeError("FixedFloat is abstract; use Float32 or Float64 instead")
        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({float(self)!r})"


class Float32(FixedFloat):
    """Single-precision float. The value is rounded to single precision.

    The four wire bytes are kept alongside the value: widening a signalling
    NaN to a Python float quiets it, so re-encoding must not repack.
    """

    precision = FloatPrecision.SINGLE

    def __new__(cls, value: float = 0.0) -> Float32:
        if isinstance(value, Float32):
            return cls.from_packed(value.packed)
        layout = FLOAT_STRUCTS[FloatPrecision.SINGLE]
        try:
            packed = layout.pack(value)
        except (OverflowError, struct.error) as e:
            raise ValueError(f"Float32 cannot represent {value}: {e}") from e
        return cls.from_packed(packed)

    @classmethod
    def from_packed(cls, packed: bytes) -> Float32:
        """Build a Float32 from its four little-endian wire bytes."""
        (rounded,) = FLOAT_STRUCTS[FloatPrecision.SINGLE].unpack(packed)
        instance = float.__new__(cls, rounded)
        instance._packed = bytes(packed)
        return instance

    @property
    def packed(self) -> bytes:
        """The four little-endian wire bytes of this value."""
        return self._packed


class Float64(FixedFloat):
    precision = FloatPrecision.DOUBLE


def float_type_for(precision: FloatPrecision) -> type[FixedFloat]:
    """Return the value type for a wire precision."""
    return Float32 if precision is FloatPrecision.SINGLE else Float64
