"""Weather observation model."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class WeatherObservation:
    """
    Latest METAR for one airport.

    An empty `metar` string means the report was unavailable; the code
    is always echoed back so the dashboard can match the response.
    """
    icao: str
    metar: str = ''
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_available(self) -> bool:
        return bool(self.metar)

    def to_dict(self) -> dict:
        return {
            'icao': self.icao,
            'metar': self.metar,
            'fetchedAt': self.fetched_at.isoformat().replace('+00:00', 'Z'),
        }
