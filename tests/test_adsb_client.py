"""Tests for the ADS-B feed adapter."""

import math
from unittest.mock import MagicMock

import pytest
import requests

from skyguard.ingestion.adsb_client import AdsbClient, StateVector, map_states
from skyguard.ingestion.errors import UpstreamError

from .conftest import adsb_state, make_response


def client_returning(response) -> AdsbClient:
    session = MagicMock()
    session.get.return_value = response
    return AdsbClient(url='http://adsb.test/v2/state/all', session=session)


class TestStateMapping:
    """Field extraction and unit conversion."""

    def test_altitude_meters_to_feet(self):
        [flight] = map_states([adsb_state(baro_altitude=10000)])
        assert flight.alt_ft == pytest.approx(32808.4, abs=0.1)

    def test_velocity_mps_to_knots(self):
        [flight] = map_states([adsb_state(velocity=100)])
        assert flight.vel_kt == pytest.approx(194.384)

    @pytest.mark.parametrize('value', [None, math.nan, math.inf, 'fast'])
    def test_non_finite_velocity_maps_to_zero(self, value):
        [flight] = map_states([adsb_state(velocity=value)])
        assert flight.vel_kt == 0

    @pytest.mark.parametrize('value', [None, math.nan, -math.inf])
    def test_non_finite_altitude_maps_to_zero(self, value):
        [flight] = map_states([adsb_state(baro_altitude=value)])
        assert flight.alt_ft == 0

    def test_negative_altitude_clamped(self):
        [flight] = map_states([adsb_state(baro_altitude=-30)])
        assert flight.alt_ft == 0

    def test_heading_passthrough_and_default(self):
        [with_heading] = map_states([adsb_state(heading=271.5)])
        [without_heading] = map_states([adsb_state(heading=None)])

        assert with_heading.hdg == 271.5
        assert without_heading.hdg == 0

    @pytest.mark.parametrize('value', [0, 360, -15.0, 725.5])
    def test_finite_heading_passed_through_unchanged(self, value):
        [flight] = map_states([adsb_state(heading=value)])
        assert flight.hdg == value

    @pytest.mark.parametrize('field,attr', [
        ('baro_altitude', 'alt_ft'),
        ('velocity', 'vel_kt'),
        ('heading', 'hdg'),
    ])
    def test_oversized_integer_maps_to_zero(self, field, attr):
        [flight] = map_states([adsb_state(**{field: 10 ** 400})])
        assert getattr(flight, attr) == 0

    def test_conversion_overflow_maps_to_zero(self):
        [flight] = map_states([adsb_state(baro_altitude=1e308)])
        assert flight.alt_ft == 0

    def test_identifier_preference(self):
        states = [
            adsb_state(hex='aaa111', icao24='bbb222'),
            adsb_state(hex=None, icao24='bbb222'),
            adsb_state(hex=None, icao24=None),
        ]
        ids = [f.id for f in map_states(states)]
        assert ids == ['aaa111', 'bbb222', 'ADSB2']

    def test_placeholder_uses_filtered_index(self):
        states = [
            adsb_state(lat=0, lon=0),              # dropped
            adsb_state(hex=None, icao24=None),
        ]
        [flight] = map_states(states)
        assert flight.id == 'ADSB0'

    @pytest.mark.parametrize('callsign,expected', [
        ('DAL123  ', 'DA'),
        ('  UAL9', 'UA'),
        ('', 'UA'),
        ('    ', 'UA'),
        (None, 'UA'),
        (1234, 'UA'),
        ('N', 'N'),
    ])
    def test_carrier_prefix(self, callsign, expected):
        [flight] = map_states([adsb_state(callsign=callsign)])
        assert flight.airline == expected

    def test_placeholder_route(self):
        [flight] = map_states([adsb_state()])
        assert (flight.origin, flight.dest) == ('KSEA', 'KSFO')

    def test_latitude_longitude_aliases(self):
        state = adsb_state()
        del state['lat'], state['lon']
        state.update(latitude=33.9, longitude=-118.4)

        [flight] = map_states([state])
        assert (flight.lat, flight.lon) == (33.9, -118.4)

    def test_opensky_array_format(self):
        arr = ['abc123', 'SWA42   ', 'United States', 0, 0,
               -97.0, 32.9, 3000.0, False, 150.0, 45.0, 0, None, 3100.0, None, False, 0]
        [flight] = map_states([arr])

        assert flight.id == 'abc123'
        assert flight.airline == 'SW'
        assert (flight.lat, flight.lon) == (32.9, -97.0)
        assert flight.alt_ft == pytest.approx(9842.52)

    def test_unusable_elements_skipped(self):
        assert map_states([None, 42, 'x', ['too', 'short']]) == []


class TestFiltering:
    """Bounding box and payload cap."""

    def test_oversized_integer_position_dropped(self):
        states = [
            adsb_state(hex='huge-lat', lat=10 ** 400),
            adsb_state(hex='huge-lon', lon=-(10 ** 400)),
            adsb_state(hex='ok'),
        ]
        assert [f.id for f in map_states(states)] == ['ok']

    def test_out_of_box_dropped(self):
        states = [
            adsb_state(hex='in', lat=40.0, lon=-100.0),
            adsb_state(hex='london', lat=51.5, lon=-0.1),
            adsb_state(hex='nan', lat=math.nan, lon=-100.0),
            adsb_state(hex='missing', lat=None),
        ]
        assert [f.id for f in map_states(states)] == ['in']

    def test_cap_applies_after_filter(self):
        outside = [adsb_state(hex=f'out{i}', lat=0, lon=0) for i in range(50)]
        inside = [adsb_state(hex=f'in{i}') for i in range(200)]

        flights = map_states(outside + inside, limit=150)

        assert len(flights) == 150
        assert flights[0].id == 'in0'
        assert flights[-1].id == 'in149'

    def test_every_record_inside_box(self):
        states = [adsb_state(lat=lat, lon=lon) for lat, lon in
                  [(20, -130), (55, -60), (19, -100), (40, -131), (30, -90)]]
        for flight in map_states(states):
            assert 20 <= flight.lat <= 55
            assert -130 <= flight.lon <= -60


class TestAdsbClient:
    """HTTP behavior."""

    def test_fetch_flights_success(self):
        client = client_returning(make_response(200, {'states': [adsb_state(), adsb_state(hex='b')]}))

        flights = client.fetch_flights()

        assert [f.id for f in flights] == ['a1b2c3', 'b']
        client.session.get.assert_called_once_with('http://adsb.test/v2/state/all', timeout=8.0)

    def test_max_flights_from_client(self):
        client = client_returning(make_response(200, {'states': [adsb_state()] * 10}))
        client.max_flights = 3
        assert len(client.fetch_flights()) == 3

    def test_empty_states_is_valid(self):
        assert client_returning(make_response(200, {'states': None})).fetch_flights() == []
        assert client_returning(make_response(200, {})).fetch_flights() == []

    def test_http_error_raises_upstream_error(self):
        client = client_returning(make_response(500, text='oops'))

        with pytest.raises(UpstreamError) as exc_info:
            client.fetch_flights()

        assert exc_info.value.status_code == 500

    def test_network_error_raises_upstream_error(self):
        session = MagicMock()
        session.get.side_effect = requests.exceptions.ConnectionError('refused')
        client = AdsbClient(session=session)

        with pytest.raises(UpstreamError):
            client.fetch_flights()

    def test_timeout_raises_upstream_error(self):
        session = MagicMock()
        session.get.side_effect = requests.exceptions.Timeout('slow')
        client = AdsbClient(session=session)

        with pytest.raises(UpstreamError):
            client.fetch_flights()

    def test_malformed_body_raises_upstream_error(self):
        with pytest.raises(UpstreamError):
            client_returning(make_response(200, text='<html>')).fetch_flights()

    def test_non_list_states_raises_upstream_error(self):
        with pytest.raises(UpstreamError):
            client_returning(make_response(200, {'states': 'nope'})).fetch_flights()


class TestStateVectorParse:
    def test_dict_and_array_dispatch(self):
        assert StateVector.parse({'hex': 'x'}).hex == 'x'
        assert StateVector.parse(['y'] + [None] * 16).icao24 == 'y'
        assert StateVector.parse('garbage') is None
