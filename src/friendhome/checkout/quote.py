"""Checkout quote — price the cart and check a candidate delivery point.

Nothing is persisted. The storefront calls this while the customer moves the
map pin so it can show the distance and totals before submission.
"""

from protean.exceptions import ValidationError

from friendhome.cart.items import find_cart
from friendhome.checkout.pricing import FeeSchedule, price_lines
from friendhome.shared.geo import DeliveryZone, GeoPoint


def quote(customer_id, latitude=None, longitude=None) -> dict:
    cart = find_cart(customer_id)
    lines = cart.lines() if cart else []
    pricing = price_lines(lines, FeeSchedule.from_settings())
    zone = DeliveryZone.from_settings()

    result = {
        "item_count": sum(line["quantity"] for line in lines),
        "subtotal": pricing.subtotal,
        "tax": pricing.tax,
        "delivery_fee": pricing.delivery_fee,
        "total": pricing.total,
        "currency": pricing.currency,
        "max_delivery_km": zone.max_km,
        "distance_km": None,
        "deliverable": None,
    }

    if latitude is None and longitude is None:
        return result
    if latitude is None or longitude is None:
        raise ValidationError({"location": ["Both latitude and longitude are required"]})

    point = GeoPoint(latitude=latitude, longitude=longitude)
    distance = zone.distance_to(point.as_tuple())
    result["distance_km"] = round(distance, 2)
    result["deliverable"] = distance <= zone.max_km
    return result
