"""yeson: compact binary serialization for dynamically typed values.

Every value is framed by a single header byte (4-bit type tag, 4-bit info
field) and values nest back to back with no separators. Supported types are
null, bool, UTF-8 strings, 8/16/32/64-bit integers, single/double floats,
arrays and string-keyed objects.

Quick Start:
    >>> from yeson import Decoder, Encoder
    >>>
    >>> encoder = Encoder()
    >>> encoder.encode({"a": 1, "b": [True, None, "x"]})
    >>> data = encoder.get_bytes()
    >>>
    >>> decoder = Decoder(data)
    >>> decoder.decode()
    {'a': UInt8(1), 'b': [True, None, 'x']}
"""

from __future__ import annotations

from .codec import (
    Decoder,
    Encoder,
    FloatPrecision,
    IntWidth,
    TypeTag,
    decode,
    decode_all,
    encode,
    pack_header,
    unpack_header,
)
from .codec.values import (
    FixedFloat,
    FixedInt,
    Float32,
    Float64,
    Int16,
    Int32,
    Int64,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
)
from .config import CodecConfig
from .exceptions import (
    DecodeError,
    EncodeError,
    InvalidEncodingError,
    LengthOverflowError,
    UnexpectedEndOfInputError,
    UnsupportedTypeError,
    YesonError,
)
from .models import YesonModel, decode_model, encode_model
from .utils import encoded_size

__version__ = "0.1.0"

__all__ = [
    # Core API
    "Encoder",
    "Decoder",
    "encode",
    "decode",
    "decode_all",
    "CodecConfig",
    # Wire layout
    "TypeTag",
    "IntWidth",
    "FloatPrecision",
    "pack_header",
    "unpack_header",
    # Fixed-width values
    "FixedInt",
    "FixedFloat",
    "UInt8",
    "Int16",
    "UInt16",
    "Int32",
    "UInt32",
    "Int64",
    "UInt64",
    "Float32",
    "Float64",
    # Exceptions
    "YesonError",
    "EncodeError",
    "DecodeError",
    "UnsupportedTypeError",
    "LengthOverflowError",
    "UnexpectedEndOfInputError",
    "InvalidEncodingError",
    # Models
    "YesonModel",
    "encode_model",
    "decode_model",
    # Sizing
    "encoded_size",
    # Version
    "__version__",
]
