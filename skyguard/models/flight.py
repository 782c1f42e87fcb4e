"""
Flight record - the normalized shape served to the dashboard.

Both live ADS-B states and simulated aircraft are mapped into this
record before they reach a cache or a client. Wire keys are kept short
because the dashboard polls the full list every few seconds.
"""

from dataclasses import dataclass
from enum import Enum


# Placeholder route, the feeds carry no origin/destination
DEFAULT_ORIGIN = 'KSEA'
DEFAULT_DESTINATION = 'KSFO'


class FlightSource(str, Enum):
    """Where a served flight list came from."""
    CACHE = 'cache'
    LIVE = 'live'
    SIMULATED = 'simulated'


@dataclass(frozen=True)
class FlightRecord:
    """
    One aircraft position report.

    Fields:
        id: transponder hex code, alternate code, or a synthesized
            placeholder. Unique per tick only.
        airline: 2-letter carrier prefix
        lat, lon: WGS84 degrees
        alt_ft: barometric altitude in feet (>= 0)
        vel_kt: ground speed in knots (>= 0)
        hdg: heading in degrees [0, 360)
        origin, dest: 4-letter airport codes (may be placeholders)
    """
    id: str
    airline: str
    lat: float
    lon: float
    alt_ft: float
    vel_kt: float
    hdg: float
    origin: str = DEFAULT_ORIGIN
    dest: str = DEFAULT_DESTINATION

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        return {
            'id': self.id,
            'airline': self.airline,
            'lat': self.lat,
            'lon': self.lon,
            'alt_ft': self.alt_ft,
            'vel_kt': self.vel_kt,
            'hdg': self.hdg,
            'origin': self.origin,
            'dest': self.dest,
        }
