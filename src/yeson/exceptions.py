"""Exception hierarchy for yeson.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from YesonError for easy catching of any yeson-specific error.
"""

from __future__ import annotations


class YesonError(Exception):
    """Base exception for all yeson errors."""

    pass


class EncodeError(YesonError):
    """Raised when encoding a value fails.

    Examples:
        - Nesting deeper than the configured max_depth
        - Model exceeds yeson_max_bytes
    """

    pass


class DecodeError(YesonError):
    """Raised when decoding binary data fails.

    Examples:
        - Object key that is not encoded as a string
        - Trailing bytes after a single value
        - Decoded object does not validate against a model class
    """

    pass


class UnsupportedTypeError(EncodeError, DecodeError):
    """Raised when a type is outside the supported set.

    On encode: the value (or a nested value) has no wire representation.
    On decode: a header carries an unknown type tag or integer width code.
    """

    pass


class LengthOverflowError(EncodeError):
    """Raised when a string, array or object exceeds 255 bytes/elements."""

    pass


class UnexpectedEndOfInputError(DecodeError):
    """Raised when the input ends before a header or payload is complete."""

    pass


class InvalidEncodingError(DecodeError):
    """Raised when string payload bytes are not valid UTF-8."""

    pass
