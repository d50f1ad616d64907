"""JSON conversion CLI commands."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from ..codec.decoder import decode
from ..codec.encoder import encode

logger = logging.getLogger(__name__)


def json_to_yeson(json_path: Path, output_path: Path) -> int:
    """Encode a JSON document to a yeson file.

    JSON integers use the narrowest integer width that fits and JSON
    numbers with a fraction or exponent are encoded as doubles.

    Args:
        json_path: Path to the JSON input
        output_path: Path of the yeson file to write

    Returns:
        Number of bytes written
    """
    with json_path.open("r", encoding="utf-8") as f:
        document = json.load(f)

    data = encode(document)
    output_path.write_bytes(data)

    json_size = json_path.stat().st_size
    logger.debug(
        "Encoded %s (%d bytes JSON) to %s (%d bytes)", json_path, json_size, output_path, len(data)
    )
    return len(data)


def yeson_to_json(yeson_path: Path, output_path: Optional[Path] = None) -> str:
    """Decode a yeson file holding one value to indented JSON.

    Args:
        yeson_path: Path to the yeson input
        output_path: Optional path to write the JSON text to

    Returns:
        The JSON text

    Raises:
        ValueError: If the value holds a NaN or infinite float
    """
    data = yeson_path.read_bytes()
    logger.debug("Decoding %d bytes from %s", len(data), yeson_path)

    # NaN and infinities have no JSON form; json raises ValueError for them.
    text = json.dumps(decode(data), indent=2, ensure_ascii=False, allow_nan=False)

    if output_path is not None:
        output_path.write_text(text + "\n", encoding="utf-8")
        logger.debug("Wrote JSON to %s", output_path)
    return text
