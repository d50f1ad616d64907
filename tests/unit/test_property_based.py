"""Property-based tests using hypothesis."""

from __future__ import annotations

import struct
from typing import Any

from hypothesis import given
from hypothesis import strategies as st

from yeson import Decoder, Float32, decode, encode, encoded_size
from yeson.codec.header import pack_header, unpack_header

# Strings and composites stay within the 255-unit ceiling.
short_text = st.text(max_size=60)

scalars = st.one_of(
    st.none(),
    st.booleans(),
    short_text,
    st.integers(min_value=-(2**63), max_value=2**64 - 1),
    st.floats(allow_nan=False),
    st.floats(width=32, allow_nan=False).map(Float32),
)

values = st.recursive(
    scalars,
    lambda children: st.one_of(
        st.lists(children, max_size=6),
        st.dictionaries(short_text, children, max_size=6),
    ),
    max_leaves=40,
)


def nested(depth: int) -> st.SearchStrategy[Any]:
    """Values nested exactly ``depth`` composites deep."""
    strategy: st.SearchStrategy[Any] = scalars
    for _ in range(depth):
        strategy = st.one_of(
            st.lists(strategy, min_size=1, max_size=2),
            st.dictionaries(short_text, strategy, min_size=1, max_size=2),
        )
    return strategy


class TestCodecProperties:
    """Property-based tests for codec."""

    @given(value=values)
    def test_encode_decode_roundtrip(self, value: Any) -> None:
        """Test encode/decode is invertible."""
        assert decode(encode(value)) == value

    @given(value=nested(5))
    def test_roundtrip_depth_five(self, value: Any) -> None:
        """Test trees nested five composites deep."""
        assert decode(encode(value)) == value

    @given(value=values)
    def test_reencode_is_stable(self, value: Any) -> None:
        """Test decoded trees re-encode to identical bytes."""
        data = encode(value)
        assert encode(decode(data)) == data

    @given(value=values)
    def test_encoded_size_matches(self, value: Any) -> None:
        """Test size prediction equals the actual encoding length."""
        assert encoded_size(value) == len(encode(value))

    @given(first=values, second=values)
    def test_concatenation_splits(self, first: Any, second: Any) -> None:
        """Test back-to-back values decode one at a time."""
        decoder = Decoder(encode(first) + encode(second))

        assert decoder.decode() == first
        assert decoder.position == len(encode(first))
        assert decoder.decode() == second
        assert decoder.at_end()

    @given(value=st.floats(allow_nan=False))
    def test_double_bit_exact(self, value: float) -> None:
        """Test doubles (including signed zero) survive bit for bit."""
        decoded = decode(encode(value))
        assert struct.pack("<d", decoded) == struct.pack("<d", value)

    @given(bits=st.integers(min_value=0, max_value=2**32 - 1))
    def test_single_bit_exact(self, bits: int) -> None:
        """Test every single-precision bit pattern, NaN payloads included, re-encodes."""
        data = b"\x40" + struct.pack("<I", bits)
        assert encode(decode(data)) == data

    @given(bits=st.integers(min_value=0, max_value=2**64 - 1))
    def test_double_pattern_bit_exact(self, bits: int) -> None:
        """Test every double bit pattern, NaN payloads included, re-encodes."""
        data = b"\x41" + struct.pack("<Q", bits)
        assert encode(decode(data)) == data

    @given(value=st.integers(min_value=0, max_value=2**64 - 1))
    def test_unsigned_takes_narrowest_width(self, value: int) -> None:
        """Test non-negative ints use the smallest payload that fits."""
        payload = len(encode(value)) - 1
        assert payload in (1, 2, 4, 8)
        assert value < 2 ** (8 * payload)
        if payload > 1:
            assert value >= 2 ** (4 * payload)


class TestHeaderProperties:
    """Property-based tests for the header byte."""

    @given(header=st.integers(min_value=0, max_value=255))
    def test_header_roundtrip(self, header: int) -> None:
        """Test every byte splits and recombines losslessly."""
        tag, info = unpack_header(header)
        assert pack_header(tag, info) == header
