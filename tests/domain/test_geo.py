"""Tests for great-circle distance and the delivery zone."""

import pytest
from friendhome.shared.geo import DeliveryZone, GeoPoint, haversine_km
from protean.exceptions import ValidationError

RESTAURANT = (13.0878, 80.2085)
ANNA_NAGAR = (13.15, 80.25)
ADYAR = (13.0067, 80.2574)
TAMBARAM = (12.9249, 80.1000)


class TestHaversine:
    def test_distance_to_itself_is_zero(self):
        assert haversine_km(RESTAURANT, RESTAURANT) == 0.0

    def test_distance_is_symmetric(self):
        assert haversine_km(RESTAURANT, ADYAR) == pytest.approx(haversine_km(ADYAR, RESTAURANT))
        assert haversine_km(ANNA_NAGAR, TAMBARAM) == pytest.approx(haversine_km(TAMBARAM, ANNA_NAGAR))

    def test_nearby_neighbourhood_is_a_few_kilometres_away(self):
        distance = haversine_km(RESTAURANT, ANNA_NAGAR)
        assert 7.0 < distance < 8.5

    def test_one_degree_of_latitude(self):
        # 2 * pi * 6371 / 360
        assert haversine_km((0.0, 0.0), (1.0, 0.0)) == pytest.approx(111.195, abs=0.001)

    def test_antipodal_points(self):
        assert haversine_km((0.0, 0.0), (0.0, 180.0)) == pytest.approx(20015.087, abs=0.01)


class TestGeoPoint:
    def test_as_tuple(self):
        point = GeoPoint(latitude=13.0878, longitude=80.2085)
        assert point.as_tuple() == (13.0878, 80.2085)

    def test_latitude_out_of_range(self):
        with pytest.raises(ValidationError):
            GeoPoint(latitude=91.0, longitude=80.0)

    def test_longitude_out_of_range(self):
        with pytest.raises(ValidationError):
            GeoPoint(latitude=13.0, longitude=-181.0)

    def test_both_coordinates_required(self):
        with pytest.raises(ValidationError):
            GeoPoint(latitude=13.0)


class TestDeliveryZone:
    def test_from_settings_uses_restaurant_location(self):
        zone = DeliveryZone.from_settings()
        assert zone.origin == RESTAURANT
        assert zone.max_km == 10.0

    def test_covers_point_inside_radius(self):
        zone = DeliveryZone(RESTAURANT, 10.0)
        assert zone.covers(ANNA_NAGAR)

    def test_does_not_cover_point_outside_radius(self):
        zone = DeliveryZone(RESTAURANT, 10.0)
        assert not zone.covers(TAMBARAM)

    def test_point_exactly_on_the_boundary_is_deliverable(self):
        distance = haversine_km(RESTAURANT, ANNA_NAGAR)
        zone = DeliveryZone(RESTAURANT, distance)
        assert zone.ensure_deliverable(ANNA_NAGAR) == distance

    def test_ensure_deliverable_returns_distance(self):
        zone = DeliveryZone(RESTAURANT, 10.0)
        assert zone.ensure_deliverable(ANNA_NAGAR) == pytest.approx(haversine_km(RESTAURANT, ANNA_NAGAR))

    def test_ensure_deliverable_rejects_far_point_with_message(self):
        zone = DeliveryZone(RESTAURANT, 10.0)
        with pytest.raises(ValidationError) as exc:
            zone.ensure_deliverable(TAMBARAM)

        assert "Sorry, we only deliver within 10km." in str(exc.value)
        assert f"{haversine_km(RESTAURANT, TAMBARAM):.1f}km away" in str(exc.value)
