"""
Synthetic flight generator.

Produces plausible cruising aircraft so the dashboard always has
something to render when the live feed is down or empty. Records are
only ever served tagged as 'simulated'.
"""

import random
from typing import List, Optional, Tuple

from skyguard.models.flight import FlightRecord

DEFAULT_COUNT = 120

AIRLINES = ['AA', 'DL', 'UA', 'AS', 'WN', 'B6', 'NK', 'F9', 'HA', 'G4']

# (lon_min, lat_min, lon_max, lat_max)
REGION_BOXES: List[Tuple[float, float, float, float]] = [
    (-125, 24.5, -66.9, 49.5),   # Contiguous US
    (-170, 51, -129, 71),        # Alaska
    (-161, 18.8, -154, 22.4),    # Hawaii
]

# Sampling window. Lies entirely inside the contiguous US box, so the
# Alaska and Hawaii boxes never accept a sample.
SAMPLE_LAT = (25, 49)
SAMPLE_LON = (-124, -67)

ALTITUDE_FT = (26000, 38000)
SPEED_KT = (380, 480)


def in_region_boxes(lat: float, lon: float) -> bool:
    return any(
        lon_min <= lon <= lon_max and lat_min <= lat <= lat_max
        for lon_min, lat_min, lon_max, lat_max in REGION_BOXES
    )


def _uniform(rng: random.Random, low: float, high: float) -> float:
    # Half-open [low, high); random.uniform may return high
    return rng.random() * (high - low) + low


def _sample_position(rng: random.Random) -> Tuple[float, float]:
    while True:
        lat = _uniform(rng, *SAMPLE_LAT)
        lon = _uniform(rng, *SAMPLE_LON)
        if in_region_boxes(lat, lon):
            return lat, lon


def generate_flights(n: int = DEFAULT_COUNT, rng: Optional[random.Random] = None) -> List[FlightRecord]:
    """
    Generate n randomized flight records, ids SIM000 upward.

    Args:
        n: number of records
        rng: random source, a fresh unseeded one if None
    """
    rng = rng or random.Random()
    flights = []
    for i in range(n):
        lat, lon = _sample_position(rng)
        flights.append(FlightRecord(
            id=f'SIM{i:03d}',
            airline=rng.choice(AIRLINES),
            lat=lat,
            lon=lon,
            alt_ft=_uniform(rng, *ALTITUDE_FT),
            vel_kt=_uniform(rng, *SPEED_KT),
            hdg=_uniform(rng, 0, 360),
        ))
    return flights
