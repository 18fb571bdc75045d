"""Order pricing — subtotal, tax, delivery fee and total from cart lines.

The fee schedule is fixed per deployment (``tax_rate`` and ``delivery_fee`` in
the ``[custom]`` settings). Amounts are rounded to two decimals, matching the
precision orders are stored with.
"""

from dataclasses import dataclass

from friendhome.order.order import OrderPricing
from friendhome.settings import custom_settings


@dataclass(frozen=True)
class FeeSchedule:
    tax_rate: float
    delivery_fee: float
    currency: str = "INR"

    @classmethod
    def from_settings(cls) -> "FeeSchedule":
        settings = custom_settings()
        return cls(
            tax_rate=float(settings["tax_rate"]),
            delivery_fee=float(settings["delivery_fee"]),
            currency=settings["currency"],
        )


def price_lines(lines, schedule: FeeSchedule) -> OrderPricing:
    """Price a list of ``{"price", "quantity"}`` lines against ``schedule``."""
    subtotal = round(sum(float(line["price"]) * int(line["quantity"]) for line in lines), 2)
    tax = round(subtotal * schedule.tax_rate, 2)
    delivery_fee = round(schedule.delivery_fee, 2)
    total = round(subtotal + tax + delivery_fee, 2)

    return OrderPricing(
        subtotal=subtotal,
        tax=tax,
        delivery_fee=delivery_fee,
        total=total,
        currency=schedule.currency,
    )
