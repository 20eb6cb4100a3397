"""Geofenced zone rings around the service city.

A deployment has exactly two rings: the inner ring (city core) and the
outer ring (suburbs). Drop-off points are classified against both.
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .distance import haversine_distance_km

logger = logging.getLogger(__name__)


class ZoneClassification(str, Enum):
    """Where a drop-off point falls relative to the two rings."""

    INSIDE_INNER = "inside_inner"
    BETWEEN_RINGS = "between_rings"
    BEYOND_OUTER = "beyond_outer"


class ZoneRing(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    center_lat: float = Field(ge=-90.0, le=90.0)
    center_lon: float = Field(ge=-180.0, le=180.0)
    radius_km: float = Field(gt=0.0)

    def distance_from_center_km(self, lat: float, lon: float) -> float:
        return haversine_distance_km(lat, lon, self.center_lat, self.center_lon)


class ZoneRings(BaseModel):
    """The inner/outer ring pair for a deployment."""

    model_config = ConfigDict(frozen=True)

    inner: ZoneRing
    outer: ZoneRing

    @model_validator(mode="after")
    def validate_ring_order(self) -> Self:
        if self.inner.radius_km >= self.outer.radius_km:
            raise ValueError(
                f"Inner ring radius ({self.inner.radius_km}km) must be smaller than "
                f"outer ring radius ({self.outer.radius_km}km)"
            )
        return self


def classify_dropoff(
    lat: float,
    lon: float,
    inner: ZoneRing,
    outer: ZoneRing,
) -> ZoneClassification:
    """Classify a coordinate into exactly one zone.

    Inner membership is checked first against the inner center, then the
    outer boundary against the outer center; whatever remains is the band
    between the rings.
    """
    if inner.distance_from_center_km(lat, lon) <= inner.radius_km:
        return ZoneClassification.INSIDE_INNER
    if outer.distance_from_center_km(lat, lon) > outer.radius_km:
        return ZoneClassification.BEYOND_OUTER
    return ZoneClassification.BETWEEN_RINGS


def load_zone_rings(path: Path | str) -> ZoneRings:
    """Load the ring pair from a JSON file with ``inner`` and ``outer`` keys."""
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    rings = ZoneRings.model_validate(data)
    logger.info(
        f"Loaded zone rings from {path}: inner={rings.inner.radius_km}km, "
        f"outer={rings.outer.radius_km}km"
    )
    return rings
