"""Bazaar: local-commerce marketplace domain.

A single Protean domain holds users, sellers, the catalog, carts, orders,
delivery and reviews, so checkout can read the cart, reserve stock, redeem a
promo code, write the order and clear the cart inside one unit of work.
"""

import structlog
from protean.domain import Domain

bazaar = Domain(name="bazaar")

logger = structlog.get_logger(__name__)
