"""Delivery-charge lookup used at checkout."""

from dataclasses import dataclass
from decimal import Decimal

import structlog
from protean.utils.globals import current_domain

from bazaar.delivery.area import DeliveryArea
from bazaar.shared.money import ZERO

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DeliveryQuote:
    charge: Decimal
    area_name: str | None = None


def quote_delivery(pincode: str, subtotal: Decimal) -> DeliveryQuote:
    """Resolve the delivery charge for ``pincode``.

    When no active area covers the pincode the charge falls back to zero and a
    warning is logged, so checkout is never blocked by missing area data.
    """
    area = current_domain.repository_for(DeliveryArea).active_for_pincode(pincode)
    if area is None:
        logger.warning("delivery_area_not_found", pincode=pincode)
        return DeliveryQuote(charge=ZERO)

    return DeliveryQuote(charge=area.charge_for(subtotal), area_name=area.area_name)
