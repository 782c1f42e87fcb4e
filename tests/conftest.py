"""
Shared fixtures.

The event log database and upload directory are pointed at a temporary
directory before any skyguard module is imported, since the SQLAlchemy
engine is created at import time.
"""

import json
import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix='skyguard-tests-')
os.environ['DATABASE_URL'] = f'sqlite:///{os.path.join(_TMP_DIR, "events.db")}'
os.environ['UPLOAD_DIR'] = os.path.join(_TMP_DIR, 'uploads')
os.environ['STATIC_DIR'] = os.path.join(_TMP_DIR, 'frontend')

import pytest
import requests
from unittest.mock import MagicMock

from skyguard.app import create_app
from skyguard.config import load_config
from skyguard.ingestion.adsb_client import AdsbClient
from skyguard.ingestion.metar_client import MetarClient


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_response(status_code: int = 200, body=None, text: str = None) -> requests.Response:
    """Build a real requests.Response with the given status and body."""
    response = requests.Response()
    response.status_code = status_code
    response.url = 'http://upstream.test/'
    if body is not None:
        response._content = json.dumps(body).encode('utf-8')
    else:
        response._content = (text or '').encode('utf-8')
    response.encoding = 'utf-8'
    return response


def adsb_state(**overrides) -> dict:
    """A keyed ADS-B state inside the continental box."""
    state = {
        'hex': 'a1b2c3',
        'callsign': 'DAL123  ',
        'lat': 40.0,
        'lon': -100.0,
        'baro_altitude': 10000,
        'velocity': 200,
        'heading': 90,
    }
    state.update(overrides)
    return state


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def adsb_session():
    """Mock HTTP session for the ADS-B client; set .get.return_value per test."""
    session = MagicMock()
    session.get.return_value = make_response(200, {'states': [adsb_state()]})
    return session


@pytest.fixture
def metar_session():
    session = MagicMock()
    session.get.return_value = make_response(200, text='2024/01/01 12:00\nKSEA 011200Z 10KT\n')
    return session


@pytest.fixture
def app(clock, adsb_session, metar_session):
    flask_app = create_app(
        app_config=load_config(),
        flight_client=AdsbClient(url='http://adsb.test/v2/state/all', session=adsb_session),
        metar_client=MetarClient(base_url='http://metar.test/stations', session=metar_session),
        clock=clock,
    )
    flask_app.config['TESTING'] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()
