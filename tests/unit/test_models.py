"""Unit tests for Pydantic model support."""

from __future__ import annotations

import enum
from typing import ClassVar, Optional

import pytest
from pydantic import BaseModel, Field

from yeson import (
    DecodeError,
    EncodeError,
    YesonModel,
    decode,
    decode_model,
    encode,
    encode_model,
)


class Phase(enum.Enum):
    """Test enum."""

    TRANSIT = "transit"
    SURVEY = "survey"


class Position(BaseModel):
    """Nested model."""

    lat: float
    lon: float


class Report(YesonModel):
    """Test document."""

    vehicle_id: int = Field(ge=0, le=255)
    phase: Phase
    position: Position
    tags: list[str] = []
    note: Optional[str] = None


class TinyReport(YesonModel):
    """Document with an encoded size limit."""

    text: str

    yeson_max_bytes: ClassVar[Optional[int]] = 8


class TestModelEncoding:
    """Test model encode/decode."""

    def test_roundtrip(self) -> None:
        """Models survive encode/decode."""
        report = Report(
            vehicle_id=42,
            phase=Phase.SURVEY,
            position=Position(lat=42.5, lon=-71.25),
            tags=["a", "b"],
        )

        decoded = Report.from_yeson(report.to_yeson())

        assert decoded == report
        assert decoded.phase is Phase.SURVEY

    def test_encoded_as_object(self) -> None:
        """Fields become object keys in declaration order."""
        report = Report(vehicle_id=1, phase=Phase.TRANSIT, position=Position(lat=0.0, lon=0.0))
        tree = decode(encode_model(report))

        assert list(tree) == ["vehicle_id", "phase", "position", "tags", "note"]
        assert tree["phase"] == "transit"
        assert tree["position"] == {"lat": 0.0, "lon": 0.0}
        assert tree["note"] is None

    def test_plain_basemodel(self) -> None:
        """Any Pydantic model can be encoded."""
        data = encode_model(Position(lat=1.5, lon=2.5))
        assert decode_model(Position, data) == Position(lat=1.5, lon=2.5)

    def test_max_bytes_ok(self) -> None:
        """Small documents fit the limit."""
        assert len(TinyReport(text="a").to_yeson()) <= 8

    def test_max_bytes_exceeded(self) -> None:
        """Documents over yeson_max_bytes are rejected."""
        with pytest.raises(EncodeError, match="exceeds yeson_max_bytes=8"):
            TinyReport(text="too long for the limit").to_yeson()


class TestModelDecodeErrors:
    """Test model decoding error handling."""

    def test_not_an_object(self) -> None:
        """Only objects decode into models."""
        with pytest.raises(DecodeError, match="Expected an object for Position"):
            decode_model(Position, encode([1.0, 2.0]))

    def test_validation_failure(self) -> None:
        """Validation errors surface as DecodeError."""
        data = encode({"lat": "north", "lon": 0.0})
        with pytest.raises(DecodeError, match="Failed to construct Position"):
            decode_model(Position, data)

    def test_constraint_violation(self) -> None:
        """Field constraints are enforced on decode."""
        data = encode(
            {"vehicle_id": 300, "phase": "survey", "position": {"lat": 0.0, "lon": 0.0}}
        )
        with pytest.raises(DecodeError, match="Failed to construct Report"):
            decode_model(Report, data)

    def test_extra_fields_forbidden(self) -> None:
        """Unknown keys are rejected for YesonModel subclasses."""
        data = encode({"text": "a", "extra": 1})
        with pytest.raises(DecodeError):
            TinyReport.from_yeson(data)
