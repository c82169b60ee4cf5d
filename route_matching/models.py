"""Pydantic models for fixes, match results, and pipeline settings."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.constants import (
    DIRECTIONS_CONFIDENCE,
    DIRECTIONS_MAX_WAYPOINTS,
    MATCH_RADIUS_METERS,
    MAX_REQUEST_POINTS,
    MAX_SAMPLED_POINTS,
    SIMPLE_MAX_POINTS,
)
from date_utils import parse_timestamp
from geometry_service import GeometryService


class MatchMethod(str, Enum):
    """Strategy that produced a route geometry."""

    MATCHED = "matched"
    ROUTED = "routed"
    SIMPLE = "simple"


class Fix(BaseModel):
    """One timestamped GPS observation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    timestamp: datetime

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        if v is None or v == "":
            return uuid.uuid4().hex
        return str(v)

    @field_validator("timestamp", mode="before")
    @classmethod
    def parse_timestamp_field(cls, v: Any) -> datetime:
        """Parse timestamps using the centralized date_utils."""
        parsed = parse_timestamp(v)
        if parsed is None:
            raise ValueError(f"Invalid timestamp: {v!r}")
        return parsed

    @property
    def lon_lat(self) -> tuple[float, float]:
        return (self.longitude, self.latitude)


class MatchResult(BaseModel):
    """Geometry produced by a single strategy attempt (one batch or one call)."""

    model_config = ConfigDict(frozen=True)

    geometry: list[tuple[float, float]]
    method: MatchMethod
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    processed_point_count: int = Field(ge=0)
    original_point_count: int = Field(ge=0)
    distance: float | None = None
    duration: float | None = None


class AggregateResult(MatchResult):
    """Merged result spanning every batch of one matching request."""

    batch_count: int = Field(default=1, ge=0)
    matched_batch_count: int = Field(default=1, ge=0)
    strategies_attempted: list[str] = Field(default_factory=list)

    def to_response(self) -> dict[str, Any]:
        """Serialize with a GeoJSON geometry and the public field names."""
        return {
            "geometry": GeometryService.line_string(self.geometry),
            "method": self.method.value,
            "confidence": self.confidence,
            "distance": self.distance,
            "duration": self.duration,
            "processedPoints": self.processed_point_count,
            "originalPoints": self.original_point_count,
            "batchCount": self.batch_count,
            "matchedBatchCount": self.matched_batch_count,
            "strategiesAttempted": list(self.strategies_attempted),
        }


class MatchingSettings(BaseModel):
    """Tunables for sampling, batching, and the fallback strategies."""

    max_sampled_points: int = Field(default=MAX_SAMPLED_POINTS, ge=2)
    max_request_points: int = Field(default=MAX_REQUEST_POINTS, ge=2)
    match_radius_meters: int = Field(default=MATCH_RADIUS_METERS, gt=0)
    directions_max_waypoints: int = Field(default=DIRECTIONS_MAX_WAYPOINTS, ge=2)
    simple_max_points: int = Field(default=SIMPLE_MAX_POINTS, ge=2)
    directions_confidence: float = Field(default=DIRECTIONS_CONFIDENCE, ge=0.0, le=1.0)


class MatchRequest(BaseModel):
    coordinates: list[Fix] = Field(default_factory=list)
