"""Geolocation primitives: coordinates, great-circle distance and the delivery zone.

The restaurant only delivers inside a fixed radius around its kitchen. The
radius check runs inside the checkout command handler, so a client that skips
its own pre-check still cannot place an out-of-range order.
"""

import math

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Float

from friendhome.domain import friendhome
from friendhome.settings import custom_settings

EARTH_RADIUS_KM = 6371.0


@friendhome.value_object
class GeoPoint:
    """Latitude/longitude pair in decimal degrees.

    Both coordinates are required. Latitude ranges from -90 to 90, longitude
    from -180 to 180.
    """

    latitude = Float(min_value=-90.0, max_value=90.0)
    longitude = Float(min_value=-180.0, max_value=180.0)

    @invariant.post
    def both_coordinates_required(self):
        if self.latitude is None or self.longitude is None:
            raise ValidationError({"location": ["Both latitude and longitude are required"]})

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


def haversine_km(origin: tuple[float, float], destination: tuple[float, float]) -> float:
    """Great-circle distance in kilometres between two ``(lat, lng)`` points."""
    lat1, lng1 = origin
    lat2, lng2 = destination

    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(a), math.sqrt(1 - a))


class DeliveryZone:
    """A circular delivery area centred on the restaurant."""

    def __init__(self, origin: tuple[float, float], max_km: float):
        self.origin = origin
        self.max_km = max_km

    @classmethod
    def from_settings(cls) -> "DeliveryZone":
        settings = custom_settings()
        return cls(
            origin=(float(settings["restaurant_lat"]), float(settings["restaurant_lng"])),
            max_km=float(settings["max_delivery_km"]),
        )

    def distance_to(self, point: tuple[float, float]) -> float:
        return haversine_km(self.origin, point)

    def covers(self, point: tuple[float, float]) -> bool:
        return self.distance_to(point) <= self.max_km

    def ensure_deliverable(self, point: tuple[float, float]) -> float:
        """Return the distance to ``point``, or reject it when it lies outside the zone."""
        distance = self.distance_to(point)
        if distance > self.max_km:
            raise ValidationError(
                {
                    "location": [
                        f"Sorry, we only deliver within {self.max_km:g}km. Your location is {distance:.1f}km away."
                    ]
                }
            )
        return distance
