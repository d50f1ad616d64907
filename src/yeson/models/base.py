"""Base model class for documents stored as yeson objects.

This module provides YesonModel, a Pydantic base class whose instances
encode as yeson objects keyed by field name.
"""

from __future__ import annotations

from typing import ClassVar, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

from ..config import CodecConfig
from .convert import decode_model, encode_model

M = TypeVar("M", bound="YesonModel")


class YesonModel(BaseModel):
    """Base class for yeson documents.

    Subclasses declare fields with ordinary Pydantic annotations. Fields are
    encoded in declaration order; nested models, lists and dicts become
    nested objects and arrays.

    Example:
        >>> from typing import ClassVar, Optional
        >>> class Reading(YesonModel):
        ...     sensor: str
        ...     depth_cm: int
        ...     samples: list[float] = []
        ...
        ...     yeson_max_bytes: ClassVar[Optional[int]] = 64
        >>> data = Reading(sensor="ctd", depth_cm=1500).to_yeson()
        >>> Reading.from_yeson(data).depth_cm
        1500

    Attributes:
        yeson_max_bytes: Maximum encoded size in bytes (optional, checked on encode)
    """

    model_config = ConfigDict(
        # Validate on assignment
        validate_assignment=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )

    yeson_max_bytes: ClassVar[Optional[int]] = None

    def to_yeson(self, config: Optional[CodecConfig] = None) -> bytes:
        """Encode this model as a yeson object."""
        return encode_model(self, config)

    @classmethod
    def from_yeson(cls: type[M], data: bytes, config: Optional[CodecConfig] = None) -> M:
        """Decode a yeson object into an instance of this class."""
        return decode_model(cls, data, config)
