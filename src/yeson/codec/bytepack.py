"""Byte-level packing and unpacking utilities.

This module provides the growable output buffer used by the encoder and the
forward-only read cursor used by the decoder.
"""

from __future__ import annotations

import struct
from typing import Any, Union

from ..exceptions import UnexpectedEndOfInputError

BytesLike = Union[bytes, bytearray, memoryview]


class BytePacker:
    """Appends bytes to a growable buffer.

    Example:
        >>> packer = BytePacker()
        >>> packer.write_byte(0x31)
        >>> packer.write_struct(struct.Struct("<H"), 513)
        >>> packer.to_bytes()
        b'1\\x01\\x02'
    """

    def __init__(self) -> None:
        """Initialize an empty byte packer."""
        self._buffer = bytearray()

    def write_byte(self, value: int) -> None:
        """Write a single unsigned byte.

        Args:
            value: Byte value (0-255)

        Raises:
            ValueError: If value doesn't fit in one byte
        """
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Byte value must be 0-255, got {value}")
        self._buffer.append(value)

    def write_bytes(self, data: BytesLike) -> None:
        """Write raw bytes."""
        self._buffer.extend(data)

    def write_struct(self, layout: struct.Struct, value: Any) -> None:
        """Write a value packed with a precompiled struct layout.

        Raises:
            struct.error: If value doesn't fit the layout
        """
        self._buffer.extend(layout.pack(value))

    def truncate(self, length: int) -> None:
        """Discard everything written after the first ``length`` bytes."""
        del self._buffer[length:]

    def byte_length(self) -> int:
        """Return the number of bytes written."""
        return len(self._buffer)

    def to_bytes(self) -> bytes:
        """Return a copy of the buffer contents."""
        return bytes(self._buffer)


class ByteUnpacker:
    """Reads bytes from a buffer through a forward-only cursor.

    The input is borrowed, not copied; callers must not mutate it while
    reading.

    Example:
        >>> unpacker = ByteUnpacker(b"\\x31\\x01\\x02")
        >>> unpacker.read_byte()
        49
        >>> unpacker.read_struct(struct.Struct("<H"))
        513
    """

    def __init__(self, data: BytesLike) -> None:
        """Initialize an unpacker over ``data``.

        Args:
            data: Byte buffer to read from
        """
        self._view = memoryview(data).cast("B")
        self._position = 0

    def _require(self, num_bytes: int) -> None:
        available = len(self._view) - self._position
        if num_bytes > available:
            raise UnexpectedEndOfInputError(
                f"Unexpected end of input at offset {self._position}: "
                f"need {num_bytes} bytes, have {available}"
            )

    def read_byte(self) -> int:
        """Read one unsigned byte.

        Raises:
            UnexpectedEndOfInputError: If the buffer is exhausted
        """
        self._require(1)
        value = self._view[self._position]
        self._position += 1
        return value

    def read_bytes(self, num_bytes: int) -> bytes:
        """Read ``num_bytes`` raw bytes.

        Raises:
            UnexpectedEndOfInputError: If not enough bytes are available
        """
        self._require(num_bytes)
        start = self._position
        self._position += num_bytes
        return bytes(self._view[start : self._position])

    def read_struct(self, layout: struct.Struct) -> Any:
        """Read one value with a precompiled struct layout.

        Raises:
            UnexpectedEndOfInputError: If not enough bytes are available
        """
        self._require(layout.size)
        (value,) = layout.unpack_from(self._view, self._position)
        self._position += layout.size
        return value

    def bytes_remaining(self) -> int:
        """Return the number of unread bytes."""
        return len(self._view) - self._position

    def position(self) -> int:
        """Return the current read offset in bytes."""
        return self._position
