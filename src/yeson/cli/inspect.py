"""Stream inspection CLI command."""

from __future__ import annotations

import logging
from pathlib import Path

from ..codec.bytepack import ByteUnpacker
from ..codec.decoder import Decoder
from ..codec.header import LONG_LENGTH, TypeTag, unpack_header
from ..config import DEFAULT_CONFIG
from ..exceptions import DecodeError, UnsupportedTypeError

logger = logging.getLogger(__name__)

_INDENT = "  "


def inspect_file(file_path: Path) -> None:
    """Print a per-value breakdown of every value in a yeson file.

    Args:
        file_path: Path to the yeson file
    """
    data = file_path.read_bytes()
    lines = describe_stream(data)

    print(f"{'=' * 19} {file_path.name} {'=' * 19}")
    print(f"Total size: {len(data)} bytes")
    print("offset  header  type    info  detail")
    for line in lines:
        print(line)
    print()


def describe_stream(data: bytes) -> list[str]:
    """Describe every value in a buffer, one line per value.

    Composite values are followed by their children, indented one level.
    Object entries show the key and the value on one line.

    Args:
        data: Encoded bytes holding one or more concatenated values

    Returns:
        Lines of the form ``offset  header  type  info  detail``

    Raises:
        DecodeError: If the data is malformed
    """
    view = memoryview(data)
    unpacker = ByteUnpacker(view)
    lines: list[str] = []
    count = 0
    while unpacker.bytes_remaining():
        _describe_value(view, unpacker, 0, "", lines)
        count += 1
    logger.debug("Described %d top-level values in %d bytes", count, len(data))
    return lines


def _format_line(
    depth: int, offset: int, header: int, tag: TypeTag, info: int, label: str, detail: str
) -> str:
    return (
        f"{offset:06x}  0x{header:02x}    {tag.name.lower():<6}  {info:04b}  "
        f"{_INDENT * depth}{label}{detail}"
    )


def _describe_value(
    view: memoryview, unpacker: ByteUnpacker, depth: int, label: str, lines: list[str]
) -> None:
    offset = unpacker.position()
    header = unpacker.read_byte()
    tag_value, info = unpack_header(header)
    try:
        tag = TypeTag(tag_value)
    except ValueError:
        raise UnsupportedTypeError(
            f"Unsupported type tag {tag_value} at offset {offset}"
        ) from None

    if tag not in (TypeTag.ARRAY, TypeTag.OBJECT):
        value = _finish_scalar(view, unpacker, offset)
        size = unpacker.position() - offset
        lines.append(
            _format_line(depth, offset, header, tag, info, label, f"{value!r} ({size} bytes)")
        )
        return

    if depth >= DEFAULT_CONFIG.max_depth:
        raise DecodeError(
            f"Nesting depth exceeds max_depth={DEFAULT_CONFIG.max_depth} at offset {offset}"
        )
    count = unpacker.read_byte() if info == LONG_LENGTH else info
    unit = "items" if tag is TypeTag.ARRAY else "pairs"
    lines.append(_format_line(depth, offset, header, tag, info, label, f"{count} {unit}"))
    for _ in range(count):
        if tag is TypeTag.ARRAY:
            _describe_value(view, unpacker, depth + 1, "", lines)
            continue
        key_offset = unpacker.position()
        key_tag, _ = unpack_header(unpacker.read_byte())
        if key_tag != TypeTag.STRING:
            raise DecodeError(
                f"Object key at offset {key_offset} must be a string, got type tag {key_tag}"
            )
        key = _finish_scalar(view, unpacker, key_offset)
        _describe_value(view, unpacker, depth + 1, f"{key!r}: ", lines)


def _finish_scalar(view: memoryview, unpacker: ByteUnpacker, offset: int) -> object:
    """Decode the scalar whose header was just read at ``offset``."""
    decoder = Decoder(view[offset:])
    value = decoder.decode()
    unpacker.read_bytes(decoder.position - (unpacker.position() - offset))
    return value
