"""Promo code administration and checkout redemption."""

from decimal import Decimal as D

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import DateTime, Decimal, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from bazaar.domain import bazaar
from bazaar.promotion.promo_code import PromoCode
from bazaar.shared.exceptions import ConflictError
from bazaar.shared.money import ZERO


@bazaar.command(part_of="PromoCode")
class CreatePromoCode:
    code: String(required=True, max_length=30)
    description: Text(required=True, sanitize=False)
    discount_type: String(required=True, max_length=20)
    discount_value: Decimal(required=True, min_value=0)
    min_order_amount: Decimal(min_value=0)
    max_discount: Decimal(min_value=0)
    usage_limit: Integer(min_value=1)
    valid_from: DateTime(required=True)
    valid_until: DateTime(required=True)


@bazaar.command(part_of="PromoCode")
class DeactivatePromoCode:
    promo_code_id: Identifier(required=True)


@bazaar.command_handler(part_of=PromoCode)
class ManagePromoCodeHandler:
    @handle(CreatePromoCode)
    def create_promo_code(self, command):
        repo = current_domain.repository_for(PromoCode)
        if repo.by_code(command.code) is not None:
            raise ConflictError(f"Promo code {command.code.upper()} already exists")

        promo = PromoCode.create(
            code=command.code,
            description=command.description,
            discount_type=command.discount_type,
            discount_value=command.discount_value,
            valid_from=command.valid_from,
            valid_until=command.valid_until,
            min_order_amount=command.min_order_amount,
            max_discount=command.max_discount,
            usage_limit=command.usage_limit,
        )
        try:
            repo.add(promo)
        except ValidationError as exc:
            if "code" in exc.messages:
                raise ConflictError(f"Promo code {promo.code} already exists") from exc
            raise
        return str(promo.id)

    @handle(DeactivatePromoCode)
    def deactivate_promo_code(self, command):
        repo = current_domain.repository_for(PromoCode)
        promo = repo.get(command.promo_code_id)
        promo.is_active = False
        repo.add(promo)


def redeem_promo_code(code: str | None, subtotal: D) -> D:
    """Apply ``code`` to ``subtotal`` and count the use.

    Runs inside the caller's unit of work, so the use is only recorded if the
    order that redeems it is persisted.
    """
    if not code:
        return ZERO

    repo = current_domain.repository_for(PromoCode)
    promo = repo.by_code(code)
    if promo is None:
        raise ValidationError({"promo_code": [f"Unknown promo code {code}"]})

    discount = promo.discount_for(subtotal)
    promo.redeem()
    repo.add(promo)
    return discount
