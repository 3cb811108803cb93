"""DeliveryArea aggregate: the flat charge and free-delivery threshold for a pincode."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, Decimal, String

from bazaar.domain import bazaar
from bazaar.shared.money import to_money

_PINCODE = re.compile(r"^\d{6}$")


@bazaar.aggregate
class DeliveryArea:
    area_name: String(required=True, max_length=100, sanitize=False)
    pincode: String(required=True, max_length=6)
    city: String(required=True, max_length=100, sanitize=False)
    delivery_charge: Decimal(default=0, min_value=0, precision=10, scale=2)
    free_delivery_above: Decimal(min_value=0, precision=10, scale=2)
    is_active: Boolean(default=True)

    @invariant.post
    def pincode_must_have_six_digits(self):
        if not _PINCODE.match(self.pincode or ""):
            raise ValidationError({"pincode": ["Pincode must be 6 digits"]})

    @classmethod
    def create(cls, area_name, pincode, city, delivery_charge, free_delivery_above=None):
        return cls(
            area_name=area_name,
            pincode=(pincode or "").strip(),
            city=city,
            delivery_charge=to_money(delivery_charge),
            free_delivery_above=to_money(free_delivery_above) if free_delivery_above is not None else None,
        )

    def charge_for(self, subtotal):
        """Flat charge, waived once ``subtotal`` is strictly above the free-delivery threshold."""
        if self.free_delivery_above is not None and to_money(subtotal) > self.free_delivery_above:
            return to_money(0)
        return to_money(self.delivery_charge)
