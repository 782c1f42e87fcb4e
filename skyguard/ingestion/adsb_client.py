"""
ADS-B aircraft-state feed client.

Fetches the global state list, keeps states inside the continental
bounding box and maps them into FlightRecords.

The feed is untrusted: any field may be missing, null, or non-finite.
Two element shapes are accepted in the `states` list:

Keyed objects (adsb.lol style):
    hex / icao24, callsign, lat / latitude, lon / longitude,
    baro_altitude (m), velocity (m/s), heading / true_track (deg)

OpenSky positional arrays (indices used here):
0: icao24          - ICAO24 hex address
1: callsign        - Callsign (8 chars max)
5: longitude       - WGS84 longitude
6: latitude        - WGS84 latitude
7: baro_altitude   - Barometric altitude (meters)
9: velocity        - Ground speed (m/s)
10: true_track     - Track angle (degrees, 0=north)
"""

import logging
from dataclasses import dataclass
from typing import Optional, List, Any

import requests

from skyguard.ingestion.errors import UpstreamError
from skyguard.ingestion.geofence import BoundingBox, US_BBOX, is_finite_number
from skyguard.models.flight import FlightRecord

logger = logging.getLogger(__name__)

METERS_TO_FEET = 3.28084
MPS_TO_KNOTS = 1.94384

DEFAULT_CARRIER = 'UA'


def _first_present(data: dict, *keys: str) -> Any:
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _converted(value: Any, factor: float) -> float:
    """Scale a non-negative reading by factor, 0 when absent or non-finite."""
    if not is_finite_number(value):
        return 0.0
    result = value * factor
    return max(0.0, result) if is_finite_number(result) else 0.0


@dataclass
class StateVector:
    """
    Parsed aircraft state from the feed.

    Normalizes either element shape into one typed record.
    All values may be None if not reported by the aircraft.
    """
    hex: Optional[str]
    icao24: Optional[str]
    callsign: Optional[str]
    latitude: Any
    longitude: Any
    baro_altitude: Any
    velocity: Any
    heading: Any

    @classmethod
    def from_dict(cls, data: dict) -> 'StateVector':
        return cls(
            hex=data.get('hex'),
            icao24=data.get('icao24'),
            callsign=data.get('callsign'),
            latitude=_first_present(data, 'lat', 'latitude'),
            longitude=_first_present(data, 'lon', 'longitude'),
            baro_altitude=data.get('baro_altitude'),
            velocity=data.get('velocity'),
            heading=_first_present(data, 'heading', 'true_track'),
        )

    @classmethod
    def from_array(cls, arr: List[Any]) -> Optional['StateVector']:
        """
        Parse an OpenSky positional state array.

        Returns None if the array is too short to carry a position.
        """
        if len(arr) < 11:
            return None
        return cls(
            hex=None,
            icao24=arr[0],
            callsign=arr[1],
            latitude=arr[6],
            longitude=arr[5],
            baro_altitude=arr[7],
            velocity=arr[9],
            heading=arr[10],
        )

    @classmethod
    def parse(cls, raw: Any) -> Optional['StateVector']:
        """Parse one element of the `states` list, None if unusable."""
        if isinstance(raw, dict):
            return cls.from_dict(raw)
        if isinstance(raw, (list, tuple)):
            return cls.from_array(list(raw))
        return None

    def carrier_code(self) -> str:
        """First two characters of the callsign, 'UA' when absent or blank."""
        callsign = self.callsign if isinstance(self.callsign, str) else ''
        return callsign.strip()[:2] or DEFAULT_CARRIER

    def to_flight_record(self, index: int) -> FlightRecord:
        """
        Map into a FlightRecord.

        Args:
            index: position in the filtered list, used for the placeholder id
        """
        ident = self.hex or self.icao24 or f'ADSB{index}'

        alt_ft = _converted(self.baro_altitude, METERS_TO_FEET)
        vel_kt = _converted(self.velocity, MPS_TO_KNOTS)

        hdg = 0.0
        if is_finite_number(self.heading):
            hdg = float(self.heading)

        return FlightRecord(
            id=str(ident),
            airline=self.carrier_code(),
            lat=float(self.latitude),
            lon=float(self.longitude),
            alt_ft=alt_ft,
            vel_kt=vel_kt,
            hdg=hdg,
        )


def map_states(
    states_raw: List[Any],
    bbox: BoundingBox = US_BBOX,
    limit: int = 150,
) -> List[FlightRecord]:
    """
    Filter raw states to the bounding box and map the first `limit` of them.

    States without a finite in-box position are dropped before mapping.
    """
    in_box = []
    for raw in states_raw:
        sv = StateVector.parse(raw)
        if sv is None or not bbox.contains(sv.latitude, sv.longitude):
            continue
        in_box.append(sv)
        if len(in_box) >= limit:
            break

    return [sv.to_flight_record(i) for i, sv in enumerate(in_box)]


class AdsbClient:
    """
    Client for the public ADS-B state feed.

    Handles:
    - GET requests to the state list endpoint with a bounded timeout
    - Conversion of transport/HTTP/body failures into UpstreamError
    - Geofencing and mapping into FlightRecords
    """

    def __init__(
        self,
        url: str = 'https://api.adsb.lol/v2/state/all',
        timeout: float = 8.0,
        max_flights: int = 150,
        bbox: BoundingBox = US_BBOX,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.max_flights = max_flights
        self.bbox = bbox
        self.session = session or requests.Session()

    def fetch_flights(self) -> List[FlightRecord]:
        """
        Fetch current flights inside the bounding box.

        Returns:
            Up to max_flights records; an empty list is a valid outcome.

        Raises:
            UpstreamError on network failure, non-success status, or an
            unparseable body
        """
        logger.debug(f'Fetching ADS-B states: {self.url}')

        try:
            response = self.session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()

        except requests.exceptions.Timeout as e:
            logger.warning('ADS-B feed timeout')
            raise UpstreamError(f'ADS-B feed timeout: {e}') from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.warning(f'ADS-B HTTP {status}')
            raise UpstreamError(f'ADS-B HTTP {status}', status_code=status) from e
        except requests.exceptions.RequestException as e:
            logger.warning(f'ADS-B fetch error: {e}')
            raise UpstreamError(f'ADS-B fetch error: {e}') from e
        except ValueError as e:
            logger.warning(f'ADS-B body is not JSON: {e}')
            raise UpstreamError('ADS-B body is not JSON') from e

        if not isinstance(data, dict):
            raise UpstreamError('ADS-B body is not an object')

        states_raw = data.get('states') or []
        if not isinstance(states_raw, list):
            raise UpstreamError('ADS-B states field is not a list')

        logger.info(f'Received {len(states_raw)} state vectors from ADS-B feed')

        flights = map_states(states_raw, bbox=self.bbox, limit=self.max_flights)

        logger.debug(f'Mapped {len(flights)} flights inside bounding box')

        return flights
