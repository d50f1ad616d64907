"""Binary codec for yeson.

This module provides the encoder/decoder pair and the header layout they
share.
"""

from __future__ import annotations

from .decoder import Decoder, decode, decode_all
from .encoder import Encoder, encode
from .header import FloatPrecision, IntWidth, TypeTag, pack_header, unpack_header

__all__ = [
    "Encoder",
    "Decoder",
    "encode",
    "decode",
    "decode_all",
    "TypeTag",
    "IntWidth",
    "FloatPrecision",
    "pack_header",
    "unpack_header",
]
