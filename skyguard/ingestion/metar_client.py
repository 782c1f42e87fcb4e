"""
METAR text client.

The NWS publishes one small text file per station at
`{base}/{ICAO}.TXT`. The first line is usually a date header and the
last non-empty line is the observation itself:

    2024/01/01 12:00
    KSEA 011200Z 10KT ...
"""

import logging
import re
from typing import Optional

import requests

from skyguard.ingestion.errors import UpstreamError, ValidationError
from skyguard.models.weather import WeatherObservation

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r'[^A-Z0-9]')

MIN_ICAO_LENGTH = 4


def normalize_icao(raw: Optional[str]) -> str:
    """
    Uppercase and strip everything outside [A-Z0-9].

    Raises:
        ValidationError if fewer than 4 characters remain
    """
    icao = _NON_ALNUM.sub('', (raw or '').upper())
    if len(icao) < MIN_ICAO_LENGTH:
        raise ValidationError('Bad ICAO')
    return icao


def extract_latest_report(text: Optional[str]) -> str:
    """Last non-empty line of the body, '' when there is none."""
    if not text:
        return ''
    lines = [line.strip() for line in text.splitlines()]
    reports = [line for line in lines if line]
    return reports[-1] if reports else ''


class MetarClient:
    """Client for per-station METAR text files."""

    def __init__(
        self,
        base_url: str = 'https://tgftp.nws.noaa.gov/data/observations/metar/stations',
        timeout: float = 8.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def station_url(self, icao: str) -> str:
        return f'{self.base_url}/{icao}.TXT'

    def fetch_metar(self, icao: str) -> WeatherObservation:
        """
        Fetch the latest observation for a station.

        The code is validated before any network call. An empty body is
        not an error and yields an empty report.

        Raises:
            ValidationError for a malformed code
            UpstreamError on network failure or non-success status
        """
        icao = normalize_icao(icao)
        url = self.station_url(icao)

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.warning(f'NOAA {status} for {icao}')
            raise UpstreamError(f'NOAA {status}', status_code=status) from e
        except requests.exceptions.RequestException as e:
            logger.warning(f'METAR fetch failed for {icao}: {e}')
            raise UpstreamError(f'METAR fetch failed: {e}') from e

        return WeatherObservation(icao=icao, metar=extract_latest_report(response.text))
