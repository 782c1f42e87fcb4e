"""
Geographic filtering for aircraft positions.

Upstream feeds are global; the dashboard only renders a continental
region, so every live position is checked here before it is mapped.
"""

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class BoundingBox:
    """
    Inclusive latitude/longitude rectangle.

    Does not handle boxes that cross the antimeridian.
    """
    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float

    def contains(self, lat: Any, lon: Any) -> bool:
        """True iff both coordinates are finite numbers inside the box."""
        if not (is_finite_number(lat) and is_finite_number(lon)):
            return False
        return (
            self.lat_min <= lat <= self.lat_max and
            self.lon_min <= lon <= self.lon_max
        )


# Continental scope for the live feed
US_BBOX = BoundingBox(lat_min=20, lat_max=55, lon_min=-130, lon_max=-60)


def is_finite_number(value: Any) -> bool:
    """Numeric (not bool) and neither NaN nor infinite."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # Integers too large for a float
        return False


def in_region(lat: Any, lon: Any, bbox: BoundingBox = US_BBOX) -> bool:
    return bbox.contains(lat, lon)
