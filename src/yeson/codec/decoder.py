"""Binary decoder for dynamically typed value trees.

This module provides the Decoder class, which reads values from a byte buffer
through a forward-only cursor, and the decode()/decode_all() convenience
functions.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Optional

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import DecodeError, InvalidEncodingError, UnsupportedTypeError
from .bytepack import ByteUnpacker, BytesLike
from .header import (
    FLOAT_STRUCTS,
    INT_STRUCTS,
    LONG_LENGTH,
    FloatPrecision,
    IntWidth,
    TypeTag,
    split_int_info,
    unpack_header,
)
from .values import FixedFloat, FixedInt, Float32, float_type_for, int_type_for


class Decoder:
    """Decodes values from a byte buffer.

    Each call to decode() consumes exactly one value and leaves the cursor
    immediately after it, so a buffer holding several concatenated values
    can be read by calling decode() until at_end() is true (or by iterating
    over the decoder).

    After a decode() call raises, the cursor position is undefined and the
    decoder refuses further reads.

    Example:
        >>> decoder = Decoder(data)
        >>> first = decoder.decode()
        >>> rest = list(decoder)
    """

    def __init__(self, data: BytesLike, config: Optional[CodecConfig] = None) -> None:
        """Initialize a decoder over ``data``.

        Args:
            data: Encoded bytes; borrowed for the decoder's lifetime
            config: Codec options (defaults to CodecConfig())
        """
        self.config = config or DEFAULT_CONFIG
        self._unpacker = ByteUnpacker(data)
        self._failed = False

    @property
    def position(self) -> int:
        """Current read offset in bytes."""
        return self._unpacker.position()

    @property
    def remaining(self) -> int:
        """Number of unread bytes."""
        return self._unpacker.bytes_remaining()

    def at_end(self) -> bool:
        """Return True when every byte has been consumed."""
        return self._unpacker.bytes_remaining() == 0

    def __iter__(self) -> Iterator[Any]:
        while not self.at_end():
            yield self.decode()

    def decode(self) -> Any:
        """Decode the next value.

        Returns:
            None, bool, str, a FixedInt, a FixedFloat, list or dict

        Raises:
            UnexpectedEndOfInputError: If the input ends inside the value
            UnsupportedTypeError: On an unknown tag or width code
            InvalidEncodingError: If string bytes are not valid UTF-8
            DecodeError: On any other malformed input, or if a previous
                decode() on this decoder failed
        """
        if self._failed:
            raise DecodeError("Decoder is unusable after a failed decode")
        try:
            return self._decode_value(0)
        except Exception:
            self._failed = True
            raise

    def _decode_value(self, depth: int) -> Any:
        offset = self._unpacker.position()
        tag, info = unpack_header(self._unpacker.read_byte())

        if tag == TypeTag.NULL:
            return None
        if tag == TypeTag.BOOL:
            return (info & 1) == 1
        if tag == TypeTag.STRING:
            return self._decode_string(info)
        if tag == TypeTag.INT:
            return self._decode_int(info, offset)
        if tag == TypeTag.FLOAT:
            return self._decode_float(info)
        if tag == TypeTag.ARRAY:
            return self._decode_array(info, depth + 1, offset)
        if tag == TypeTag.OBJECT:
            return self._decode_object(info, depth + 1, offset)

        raise UnsupportedTypeError(f"Unsupported type tag {tag} at offset {offset}")

    def _read_length(self, info: int) -> int:
        if info == LONG_LENGTH:
            return self._unpacker.read_byte()
        return info

    def _decode_string(self, info: int) -> str:
        length = self._read_length(info)
        offset = self._unpacker.position()
        raw_bytes = self._unpacker.read_bytes(length)
        try:
            return raw_bytes.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidEncodingError(
                f"Invalid UTF-8 in string at offset {offset}: {e}"
            ) from e

    def _decode_int(self, info: int, offset: int) -> FixedInt:
        signed, width_code = split_int_info(info)
        try:
            width = IntWidth(width_code)
        except ValueError:
            raise UnsupportedTypeError(
                f"Unsupported integer width code {width_code:#05b} at offset {offset}"
            ) from None

        int_type = int_type_for(width, signed)
        value = self._unpacker.read_struct(INT_STRUCTS[(width, int_type.signed)])
        return int_type(value)

    def _decode_float(self, info: int) -> FixedFloat:
        # Only the low bit selects precision; the other info bits are ignored.
        precision = FloatPrecision(info & 1)
        if precision is FloatPrecision.SINGLE:
            return Float32.from_packed(self._unpacker.read_bytes(4))
        return float_type_for(precision)(self._unpacker.read_struct(FLOAT_STRUCTS[precision]))

    def _check_depth(self, depth: int, offset: int) -> None:
        if depth > self.config.max_depth:
            raise DecodeError(
                f"Nesting depth exceeds max_depth={self.config.max_depth} at offset {offset}"
            )

    def _decode_array(self, info: int, depth: int, offset: int) -> list[Any]:
        self._check_depth(depth, offset)
        count = self._read_length(info)
        return [self._decode_value(depth) for _ in range(count)]

    def _decode_object(self, info: int, depth: int, offset: int) -> dict[str, Any]:
        self._check_depth(depth, offset)
        count = self._read_length(info)
        result: dict[str, Any] = {}
        for _ in range(count):
            key_offset = self._unpacker.position()
            tag, key_info = unpack_header(self._unpacker.read_byte())
            if tag != TypeTag.STRING:
                raise DecodeError(
                    f"Object key at offset {key_offset} must be a string, got type tag {tag}"
                )
            key = self._decode_string(key_info)
            if self.config.reject_duplicate_keys and key in result:
                raise DecodeError(f"Duplicate object key {key!r} at offset {key_offset}")
            result[key] = self._decode_value(depth)
        return result


def decode(data: BytesLike, config: Optional[CodecConfig] = None) -> Any:
    """Decode a buffer holding exactly one value.

    Args:
        data: Encoded bytes
        config: Codec options

    Returns:
        Decoded value tree

    Raises:
        DecodeError: If the data is malformed or has bytes after the value
            (see Decoder.decode for the specific subclasses)

    Examples:
        ```python
        from yeson import decode, encode

        decode(encode({"a": 1}))   # {'a': UInt8(1)}
        ```
    """
    decoder = Decoder(data, config)
    value = decoder.decode()
    if not decoder.at_end():
        raise DecodeError(
            f"Trailing data: {decoder.remaining} bytes after value at offset {decoder.position}"
        )
    return value


def decode_all(data: BytesLike, config: Optional[CodecConfig] = None) -> list[Any]:
    """Decode every value in a buffer of concatenated values.

    Args:
        data: Encoded bytes (possibly empty)
        config: Codec options

    Returns:
        Decoded values in stream order
    """
    return list(Decoder(data, config))
