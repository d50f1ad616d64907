"""Binary encoder for dynamically typed value trees.

This module provides the Encoder class, which appends the encoding of values
to a growable buffer, and the encode() convenience function.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Optional

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import EncodeError, LengthOverflowError, UnsupportedTypeError
from .bytepack import BytePacker
from .header import (
    FLOAT_STRUCTS,
    INT_STRUCTS,
    LONG_LENGTH,
    MAX_LENGTH,
    MAX_SHORT_LENGTH,
    FloatPrecision,
    TypeTag,
    int_info,
    pack_header,
)
from .values import FixedFloat, FixedInt, Float32, narrowest_int_type

_NON_ARRAY_SEQUENCES = (str, bytes, bytearray, memoryview)


class Encoder:
    """Encodes values into a growable byte buffer.

    Values are appended back to back; the format has no outer envelope, so
    several top-level values may be written to one encoder and read back in
    order with a Decoder.

    Example:
        >>> encoder = Encoder()
        >>> encoder.encode({"a": 1, "b": [True, None, "x"]})
        >>> data = encoder.get_bytes()
    """

    def __init__(self, config: Optional[CodecConfig] = None) -> None:
        """Initialize an encoder with an empty buffer.

        Args:
            config: Codec options (defaults to CodecConfig())
        """
        self.config = config or DEFAULT_CONFIG
        self._packer = BytePacker()

    def __len__(self) -> int:
        return self._packer.byte_length()

    def get_bytes(self) -> bytes:
        """Return a copy of everything encoded so far."""
        return self._packer.to_bytes()

    def reset(self) -> None:
        """Discard the buffer contents."""
        self._packer = BytePacker()

    def encode(self, value: Any) -> None:
        """Append the encoding of ``value`` to the buffer.

        If encoding fails, the buffer is restored to its length before the
        call.

        Args:
            value: None, bool, str, int, float, a sequence or a str-keyed mapping,
                nested arbitrarily up to ``config.max_depth``

        Raises:
            UnsupportedTypeError: If a value has no wire representation
            LengthOverflowError: If a string, array or object exceeds 255 units
            EncodeError: If nesting exceeds ``config.max_depth``
        """
        start = self._packer.byte_length()
        try:
            self._encode_value(value, 0)
        except Exception:
            self._packer.truncate(start)
            raise

    def _encode_value(self, value: Any, depth: int) -> None:
        if value is None:
            self._packer.write_byte(pack_header(TypeTag.NULL))
        elif isinstance(value, bool):
            self._packer.write_byte(pack_header(TypeTag.BOOL, 1 if value else 0))
        elif isinstance(value, str):
            self._encode_string(value)
        elif isinstance(value, int):
            self._encode_int(value)
        elif isinstance(value, float):
            self._encode_float(value)
        elif isinstance(value, Sequence) and not isinstance(value, _NON_ARRAY_SEQUENCES):
            self._encode_array(value, depth + 1)
        elif isinstance(value, Mapping):
            self._encode_object(value, depth + 1)
        else:
            raise UnsupportedTypeError(f"Unsupported type: {type(value).__name__}")

    def _write_length_header(self, tag: TypeTag, length: int) -> None:
        if length > MAX_LENGTH:
            raise LengthOverflowError(
                f"{tag.name.lower()} length {length} exceeds the maximum of {MAX_LENGTH}"
            )
        if length <= MAX_SHORT_LENGTH:
            self._packer.write_byte(pack_header(tag, length))
        else:
            self._packer.write_byte(pack_header(tag, LONG_LENGTH))
            self._packer.write_byte(length)

    def _encode_string(self, value: str) -> None:
        try:
            data = value.encode("utf-8")
        except UnicodeEncodeError as e:
            # Lone surrogates have no UTF-8 form
            raise UnsupportedTypeError(f"String is not encodable as UTF-8: {e}") from e
        self._write_length_header(TypeTag.STRING, len(data))
        self._packer.write_bytes(data)

    def _encode_int(self, value: int) -> None:
        if isinstance(value, FixedInt):
            int_type: Optional[type[FixedInt]] = type(value)
        else:
            int_type = narrowest_int_type(value)
        if int_type is None:
            raise UnsupportedTypeError(f"Integer {value} does not fit in 64 bits")

        self._packer.write_byte(
            pack_header(TypeTag.INT, int_info(int_type.width, int_type.signed))
        )
        self._packer.write_struct(INT_STRUCTS[(int_type.width, int_type.signed)], int(value))

    def _encode_float(self, value: float) -> None:
        if isinstance(value, FixedFloat):
            precision = value.precision
        elif self.config.single_precision_floats:
            precision = FloatPrecision.SINGLE
        else:
            precision = FloatPrecision.DOUBLE

        if isinstance(value, Float32):
            payload = value.packed
        else:
            try:
                payload = FLOAT_STRUCTS[precision].pack(value)
            except OverflowError as e:
                raise EncodeError(f"Float {value} out of range for single precision") from e
        self._packer.write_byte(pack_header(TypeTag.FLOAT, precision))
        self._packer.write_bytes(payload)

    def _check_depth(self, depth: int) -> None:
        if depth > self.config.max_depth:
            raise EncodeError(
                f"Nesting depth exceeds max_depth={self.config.max_depth} "
                f"(cyclic structures are not supported)"
            )

    def _encode_array(self, value: Sequence[Any], depth: int) -> None:
        self._check_depth(depth)
        self._write_length_header(TypeTag.ARRAY, len(value))
        for item in value:
            self._encode_value(item, depth)

    def _encode_object(self, value: Mapping[Any, Any], depth: int) -> None:
        self._check_depth(depth)
        for key in value:
            if not isinstance(key, str):
                raise UnsupportedTypeError(
                    f"Object keys must be str, got {type(key).__name__}"
                )
        self._write_length_header(TypeTag.OBJECT, len(value))
        for key, item in value.items():
            self._encode_string(key)
            self._encode_value(item, depth)


def encode(value: Any, config: Optional[CodecConfig] = None) -> bytes:
    """Encode a single value to bytes.

    Args:
        value: Value tree to encode
        config: Codec options

    Returns:
        Encoded bytes

    Raises:
        UnsupportedTypeError: If a value has no wire representation
        LengthOverflowError: If a string, array or object exceeds 255 units
        EncodeError: If nesting exceeds ``config.max_depth``

    Examples:
        ```python
        from yeson import encode

        encode(None)          # b'\\x00'
        encode(True)          # b'\\x11'
        encode(200)           # b'1\\xc8'  (8-bit unsigned)
        encode(-200)          # b':8\\xff' (16-bit signed)
        ```
    """
    encoder = Encoder(config)
    encoder.encode(value)
    return encoder.get_bytes()
