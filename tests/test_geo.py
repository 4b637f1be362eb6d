"""Tests for coordinates, map regions and the Web-Mercator helpers."""
import math

import numpy as np
import pytest

from streetgallery.model.geo import (
    MAX_MERCATOR_LATITUDE, METERS_PER_DEGREE, Coordinate, MapRegion, coordinate_from_projected, mercator_scale,
    project, unproject,
)


class TestCoordinate:
    def test_valid_coordinate(self):
        c = Coordinate(latitude=-7.95, longitude=112.61)
        assert c.latitude == -7.95
        assert c.longitude == 112.61

    @pytest.mark.parametrize("lat, lon", [(91.0, 0.0), (-90.5, 0.0), (0.0, 180.5), (0.0, -181.0)])
    def test_out_of_range_rejected(self, lat, lon):
        with pytest.raises(ValueError):
            Coordinate(latitude=lat, longitude=lon)

    def test_equal_coordinates_compare_equal(self):
        assert Coordinate(1.0, 2.0) == Coordinate(1.0, 2.0)


class TestMapRegion:
    def test_around_builds_square_region(self, prague):
        region = MapRegion.around(prague, 2000.0)
        assert region.center == prague
        assert region.latitudinal_meters == 2000.0
        assert region.longitudinal_meters == 2000.0

    def test_lat_span_is_independent_of_latitude(self, prague, malang):
        assert MapRegion.around(prague, 1000.0).lat_span_degrees() == pytest.approx(1000.0 / METERS_PER_DEGREE)
        assert MapRegion.around(malang, 1000.0).lat_span_degrees() == pytest.approx(1000.0 / METERS_PER_DEGREE)

    def test_lon_span_widens_away_from_equator(self, prague):
        equator = MapRegion.around(Coordinate(0.0, 14.4), 1000.0)
        north = MapRegion.around(prague, 1000.0)
        assert north.lon_span_degrees() > equator.lon_span_degrees()
        expected = 1000.0 / (METERS_PER_DEGREE * math.cos(math.radians(prague.latitude)))
        assert north.lon_span_degrees() == pytest.approx(expected)

    def test_lon_span_capped_at_pole(self):
        region = MapRegion.around(Coordinate(90.0, 0.0), 1000.0)
        assert region.lon_span_degrees() == 360.0

    def test_projected_bounds_centered_and_scaled(self, prague):
        region = MapRegion.around(prague, 1000.0)
        x0, x1, y0, y1 = region.projected_bounds()
        cx, cy = project(prague.latitude, prague.longitude)
        assert (x0 + x1) / 2 == pytest.approx(float(cx))
        assert (y0 + y1) / 2 == pytest.approx(float(cy))
        assert x1 - x0 == pytest.approx(1000.0 * mercator_scale(prague.latitude))
        assert y1 - y0 == pytest.approx(x1 - x0)


class TestProjection:
    def test_origin_maps_to_origin(self):
        x, y = project(0.0, 0.0)
        assert float(x) == pytest.approx(0.0)
        assert float(y) == pytest.approx(0.0, abs=1e-6)

    def test_unproject_inverts_project(self, prague, malang):
        for c in (prague, malang):
            lat, lon = unproject(*project(c.latitude, c.longitude))
            assert float(lat) == pytest.approx(c.latitude)
            assert float(lon) == pytest.approx(c.longitude)

    def test_accepts_arrays(self):
        x, y = project(np.array([0.0, 10.0]), np.array([0.0, 20.0]))
        assert x.shape == (2,)
        assert y[1] > y[0]

    def test_coordinate_from_projected_wraps_longitude(self):
        x, _ = project(0.0, 179.0)
        c = coordinate_from_projected(float(x) * 1.02, 0.0)
        assert -180.0 <= c.longitude < 0.0

    def test_coordinate_from_projected_clamps_to_drawable_latitude(self):
        _, y_top = project(85.0, 0.0)
        c = coordinate_from_projected(0.0, float(y_top) * 3.0)
        assert c.latitude == pytest.approx(MAX_MERCATOR_LATITUDE)

        c = coordinate_from_projected(0.0, -float(y_top) * 3.0)
        assert c.latitude == pytest.approx(-MAX_MERCATOR_LATITUDE)

    def test_clamped_point_round_trips_through_projection(self):
        c = coordinate_from_projected(0.0, 60_000_000.0)
        _, y = project(c.latitude, c.longitude)
        again = coordinate_from_projected(0.0, float(y))
        assert again.latitude == pytest.approx(c.latitude)
