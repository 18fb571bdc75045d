"""Address aggregate — a delivery location captured at checkout.

An Address is created once, when an order is placed, and is never edited: the
order that references it must keep showing where it was delivered. Each
address belongs to the user who submitted it.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, String, Text, ValueObject

from friendhome.domain import friendhome
from friendhome.shared.geo import GeoPoint

MIN_LINE_LENGTH = 10


@friendhome.aggregate
class Address:
    customer_id = Identifier(required=True)
    label = String(required=True, max_length=50)
    line = Text(required=True)
    location = ValueObject(GeoPoint)
    is_default = Boolean(default=False)
    created_at = DateTime()

    @invariant.post
    def line_must_be_descriptive(self):
        if self.line is not None and len(self.line.strip()) < MIN_LINE_LENGTH:
            raise ValidationError({"line": [f"Address must be at least {MIN_LINE_LENGTH} characters"]})

    @invariant.post
    def label_must_not_be_blank(self):
        if self.label is not None and not self.label.strip():
            raise ValidationError({"label": ["Label is required"]})

    @classmethod
    def record(cls, customer_id, label, line, latitude, longitude):
        """Capture a new delivery address for ``customer_id``."""
        return cls(
            customer_id=customer_id,
            label=label,
            line=line,
            location=GeoPoint(latitude=latitude, longitude=longitude),
            created_at=datetime.now(UTC),
        )
