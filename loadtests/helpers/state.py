"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own state; nothing is shared across
users. State tracks ids returned by earlier requests so later steps can
reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks a single simulated shopper from sign-in to checkout."""

    token: str | None = None
    user_id: str | None = None
    product_ids: list[str] = field(default_factory=list)
    cart_item_ids: list[str] = field(default_factory=list)
    order_id: str | None = None
    order_number: str | None = None


@dataclass
class BrowserState:
    """Tracks an anonymous catalog browser."""

    category_ids: list[str] = field(default_factory=list)
    product_ids: list[str] = field(default_factory=list)
