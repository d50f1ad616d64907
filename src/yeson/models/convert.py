"""Conversion between Pydantic models and yeson bytes.

Models are dumped in JSON mode (enums become their values, datetimes become
ISO strings, and so on) and encoded as objects. Decoding validates the
decoded object back into the model class, so Pydantic's usual coercions
apply.
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from ..codec.decoder import decode
from ..codec.encoder import encode
from ..config import CodecConfig
from ..exceptions import DecodeError, EncodeError

T = TypeVar("T", bound=BaseModel)


def encode_model(message: BaseModel, config: Optional[CodecConfig] = None) -> bytes:
    """Encode a Pydantic model instance as a yeson object.

    Args:
        message: Model instance to encode
        config: Codec options

    Returns:
        Encoded bytes

    Raises:
        EncodeError: If a field value cannot be encoded, or the result exceeds
            the class's ``yeson_max_bytes``

    Examples:
        ```python
        from pydantic import BaseModel
        from yeson import encode_model, decode_model

        class Status(BaseModel):
            vehicle_id: int
            active: bool

        data = encode_model(Status(vehicle_id=42, active=True))
        decoded = decode_model(Status, data)
        ```
    """
    tree = message.model_dump(mode="json")
    encoded = encode(tree, config)

    max_bytes = getattr(type(message), "yeson_max_bytes", None)
    if max_bytes is not None and len(encoded) > max_bytes:
        raise EncodeError(
            f"Encoded message size ({len(encoded)} bytes) exceeds yeson_max_bytes={max_bytes}"
        )

    return encoded


def decode_model(
    message_class: type[T], data: bytes, config: Optional[CodecConfig] = None
) -> T:
    """Decode a yeson object into a Pydantic model.

    Args:
        message_class: Model class to validate the decoded object against
        data: Encoded bytes holding exactly one object
        config: Codec options

    Returns:
        Validated model instance

    Raises:
        DecodeError: If the data is malformed, is not an object, or does not
            validate against ``message_class``
    """
    tree: Any = decode(data, config)
    if not isinstance(tree, dict):
        raise DecodeError(
            f"Expected an object for {message_class.__name__}, got {type(tree).__name__}"
        )

    try:
        return message_class.model_validate(tree)
    except ValidationError as e:
        raise DecodeError(f"Failed to construct {message_class.__name__}: {e}") from e
