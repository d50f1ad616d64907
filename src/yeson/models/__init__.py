"""Pydantic model support for yeson.

This module provides the YesonModel base class and helpers that encode any
Pydantic model as a yeson object.
"""

from __future__ import annotations

from .base import YesonModel
from .convert import decode_model, encode_model

__all__ = [
    "YesonModel",
    "encode_model",
    "decode_model",
]
