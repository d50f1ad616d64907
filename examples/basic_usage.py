#!/usr/bin/env python3
"""Basic usage example for yeson.

This example demonstrates:
1. Encoding a nested dictionary to a .yeson file
2. Decoding it back
3. Converting the decoded tree to indented JSON for inspection
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path

from yeson import Decoder, Encoder, Float32, encoded_size

document = {
    "null": None,
    "bool": True,
    "string": "Hello, world!",
    "int": 123,
    "float": Float32(123.456),
    "array": [1, 2, 3],
    "object": {
        "a": 1,
        "b": 2,
        "c": 3,
    },
}


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("yeson Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Encoding document...")
    encoder = Encoder()
    encoder.encode(document)
    data = encoder.get_bytes()
    print(f"   Encoded size: {len(data)} bytes (predicted {encoded_size(document)})")
    print(f"   JSON size:    {len(json.dumps(document))} bytes")
    print()

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "test.yeson"
        path.write_bytes(data)
        print(f"2. Wrote {path.name}, reading it back...")

        decoder = Decoder(path.read_bytes())
        decoded = decoder.decode()

    print("3. Decoded document as JSON:")
    print(json.dumps(decoded, indent=2))
    print()
    print(f"   Round trip equal: {decoded == document}")


if __name__ == "__main__":
    main()
