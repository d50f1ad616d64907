"""Encoded size calculation.

This module computes how many bytes a value tree will occupy without
actually encoding it.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Optional

from ..codec.header import MAX_LENGTH, FloatPrecision, length_prefix_size
from ..codec.values import FixedFloat, FixedInt, narrowest_int_type
from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import EncodeError, LengthOverflowError, UnsupportedTypeError


def encoded_size(value: Any, config: Optional[CodecConfig] = None) -> int:
    """Calculate the encoded size of a value tree in bytes.

    Applies the same type selection and limits as the encoder, so the result
    always equals ``len(encode(value, config))``.

    Args:
        value: Value tree to measure
        config: Codec options

    Returns:
        Size in bytes

    Raises:
        UnsupportedTypeError: If a value has no wire representation
        LengthOverflowError: If a string, array or object exceeds 255 units
        EncodeError: If nesting exceeds ``config.max_depth``

    Example:
        >>> encoded_size({"a": 1, "b": [True, None, "x"]})
        12
    """
    return _size(value, config or DEFAULT_CONFIG, 0)


def _framed(length: int) -> int:
    if length > MAX_LENGTH:
        raise LengthOverflowError(f"length {length} exceeds the maximum of {MAX_LENGTH}")
    return length_prefix_size(length)


def _string_size(value: str) -> int:
    try:
        length = len(value.encode("utf-8"))
    except UnicodeEncodeError as e:
        raise UnsupportedTypeError(f"String is not encodable as UTF-8: {e}") from e
    return _framed(length) + length


def _size(value: Any, config: CodecConfig, depth: int) -> int:
    if value is None or isinstance(value, bool):
        return 1
    if isinstance(value, str):
        return _string_size(value)
    if isinstance(value, int):
        int_type = type(value) if isinstance(value, FixedInt) else narrowest_int_type(value)
        if int_type is None:
            raise UnsupportedTypeError(f"Integer {value} does not fit in 64 bits")
        return 1 + int_type.width.byte_size
    if isinstance(value, float):
        if isinstance(value, FixedFloat):
            precision = value.precision
        elif config.single_precision_floats:
            precision = FloatPrecision.SINGLE
        else:
            precision = FloatPrecision.DOUBLE
        return 5 if precision is FloatPrecision.SINGLE else 9

    if isinstance(value, (Sequence, Mapping)) and not isinstance(
        value, (bytes, bytearray, memoryview)
    ):
        depth += 1
        if depth > config.max_depth:
            raise EncodeError(f"Nesting depth exceeds max_depth={config.max_depth}")
        if isinstance(value, Sequence):
            return _framed(len(value)) + sum(_size(item, config, depth) for item in value)
        total = _framed(len(value))
        for key, item in value.items():
            if not isinstance(key, str):
                raise UnsupportedTypeError(
                    f"Object keys must be str, got {type(key).__name__}"
                )
            total += _string_size(key) + _size(item, config, depth)
        return total

    raise UnsupportedTypeError(f"Unsupported type: {type(value).__name__}")
