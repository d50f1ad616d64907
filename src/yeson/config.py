"""Codec configuration.

This module provides the configuration dataclass shared by the encoder and
decoder.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CodecConfig:
    """Options for encoding and decoding.

    Attributes:
        max_depth: Maximum nesting depth of arrays/objects (default 64).
            A top-level scalar has depth 0, the elements of a top-level
            array depth 1, and so on. Encoding a cyclic structure hits this
            limit and fails with EncodeError.

        single_precision_floats: Encode plain ``float`` values as single
            precision (default False). ``Float32``/``Float64`` values always
            keep their declared precision.

        reject_duplicate_keys: Raise DecodeError when a decoded object
            repeats a key (default False, the last value wins).

    Examples:
        ```python
        from yeson import CodecConfig, Encoder

        encoder = Encoder(CodecConfig(single_precision_floats=True))
        encoder.encode({"depth": 12.5})
        ```
    """

    max_depth: int = 64
    single_precision_floats: bool = False
    reject_duplicate_keys: bool = False

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self.max_depth}")


DEFAULT_CONFIG = CodecConfig()
