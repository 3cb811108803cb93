"""PromoCode aggregate: discounts redeemed at checkout."""

from datetime import UTC, datetime
from decimal import Decimal as D
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Decimal, Integer, String, Text

from bazaar.domain import bazaar
from bazaar.shared.money import ZERO, to_money


class DiscountType(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


@bazaar.aggregate
class PromoCode:
    code: String(required=True, max_length=30, unique=True)
    description: Text(required=True, sanitize=False)
    discount_type: String(required=True, choices=DiscountType)
    discount_value: Decimal(required=True, min_value=0, precision=10, scale=2)
    min_order_amount: Decimal(min_value=0, precision=10, scale=2)
    max_discount: Decimal(min_value=0, precision=10, scale=2)
    usage_limit: Integer(min_value=1)
    used_count: Integer(default=0, min_value=0)
    valid_from: DateTime(required=True)
    valid_until: DateTime(required=True)
    is_active: Boolean(default=True)
    created_at: DateTime()

    @invariant.post
    def validity_window_must_be_ordered(self):
        if self.valid_from and self.valid_until and self.valid_from >= self.valid_until:
            raise ValidationError({"valid_until": ["Promo code must end after it starts"]})

    @invariant.post
    def percentage_must_not_exceed_hundred(self):
        if self.discount_type == DiscountType.PERCENTAGE.value and self.discount_value > 100:
            raise ValidationError({"discount_value": ["Percentage discount cannot exceed 100"]})

    @classmethod
    def create(
        cls,
        code,
        description,
        discount_type,
        discount_value,
        valid_from,
        valid_until,
        min_order_amount=None,
        max_discount=None,
        usage_limit=None,
    ):
        return cls(
            code=code.strip().upper(),
            description=description,
            discount_type=discount_type,
            discount_value=to_money(discount_value),
            min_order_amount=to_money(min_order_amount) if min_order_amount is not None else None,
            max_discount=to_money(max_discount) if max_discount is not None else None,
            usage_limit=usage_limit,
            valid_from=valid_from,
            valid_until=valid_until,
            created_at=datetime.now(UTC),
        )

    # -------------------------------------------------------------------
    # Redemption
    # -------------------------------------------------------------------
    def discount_for(self, subtotal, now=None):
        """Discount this code grants on ``subtotal``, or ``ValidationError`` if it cannot be used."""
        now = now or datetime.now(UTC)
        subtotal = to_money(subtotal)

        if not self.is_active:
            raise ValidationError({"promo_code": [f"Promo code {self.code} is not active"]})
        if now < _aware(self.valid_from) or now > _aware(self.valid_until):
            raise ValidationError({"promo_code": [f"Promo code {self.code} has expired or is not yet valid"]})
        if self.usage_limit is not None and self.used_count >= self.usage_limit:
            raise ValidationError({"promo_code": [f"Promo code {self.code} has reached its usage limit"]})
        if self.min_order_amount is not None and subtotal < self.min_order_amount:
            raise ValidationError(
                {"promo_code": [f"Promo code {self.code} needs a minimum order of {self.min_order_amount}"]}
            )

        if DiscountType(self.discount_type) == DiscountType.PERCENTAGE:
            discount = to_money(subtotal * D(self.discount_value) / D(100))
            if self.max_discount is not None:
                discount = min(discount, self.max_discount)
        else:
            discount = to_money(self.discount_value)

        return max(ZERO, min(discount, subtotal))

    def redeem(self):
        self.used_count += 1


def _aware(moment: datetime) -> datetime:
    return moment if moment.tzinfo else moment.replace(tzinfo=UTC)
