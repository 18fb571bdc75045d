"""Business settings read from the ``[custom]`` table of ``domain.toml``.

The reference deployment values double as fallbacks, so a domain configured
without a ``[custom]`` table still behaves like the FriendHome store.
"""

from protean.utils.globals import current_domain

DEFAULTS = {
    "restaurant_name": "FriendHome",
    "restaurant_lat": 13.0878,
    "restaurant_lng": 80.2085,
    "max_delivery_km": 10.0,
    "tax_rate": 0.05,
    "delivery_fee": 30.0,
    "currency": "INR",
    "menu_image_dir": "media/menu-images",
    "menu_image_base_url": "/media/menu-images",
    "max_image_bytes": 5 * 1024 * 1024,
}


def custom_settings() -> dict:
    """Return the active domain's custom settings merged over the defaults."""
    custom = current_domain.config.get("custom") or {}
    return {**DEFAULTS, **custom}


def setting(key: str):
    return custom_settings()[key]
