"""Tests for the bounding-box filter."""

import math

import pytest

from skyguard.ingestion.geofence import BoundingBox, US_BBOX, in_region, is_finite_number


class TestBoundingBox:
    """Tests for BoundingBox.contains and in_region."""

    @pytest.mark.parametrize('lat,lon', [
        (40.0, -100.0),
        (20, -130),      # corner, inclusive
        (55, -60),       # opposite corner
        (47.45, -122.3),
    ])
    def test_accepts_inside(self, lat, lon):
        assert in_region(lat, lon)

    @pytest.mark.parametrize('lat,lon', [
        (19.99, -100.0),
        (55.01, -100.0),
        (40.0, -130.01),
        (40.0, -59.99),
        (51.5, -0.1),    # London
        (61.2, -149.9),  # Anchorage
    ])
    def test_rejects_outside(self, lat, lon):
        assert not in_region(lat, lon)

    @pytest.mark.parametrize('lat,lon', [
        (math.nan, -100.0),
        (40.0, math.inf),
        (-math.inf, -100.0),
        (None, -100.0),
        ('40', '-100'),
        (True, -100.0),
    ])
    def test_rejects_non_finite_or_non_numeric(self, lat, lon):
        assert not US_BBOX.contains(lat, lon)

    def test_custom_box(self):
        box = BoundingBox(lat_min=0, lat_max=10, lon_min=0, lon_max=10)
        assert box.contains(5, 5)
        assert not box.contains(40.0, -100.0)


class TestIsFiniteNumber:
    def test_ints_and_floats(self):
        assert is_finite_number(0)
        assert is_finite_number(-12.5)

    def test_rejects_bool_and_nan(self):
        assert not is_finite_number(False)
        assert not is_finite_number(float('nan'))

    def test_rejects_integers_beyond_float_range(self):
        assert not is_finite_number(10 ** 400)
        assert not is_finite_number(-(10 ** 400))
