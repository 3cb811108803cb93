"""Catalog queries for products."""

from bazaar.domain import bazaar
from bazaar.product.product import Product


@bazaar.repository(part_of=Product)
class ProductRepository:
    def search(self, category_id: str | None = None, search: str | None = None) -> list[Product]:
        """Active products, newest first, optionally narrowed by category and name."""
        query = self.query.filter(is_active=True)
        if category_id:
            query = query.filter(category_id=category_id)
        if search:
            query = query.filter(name__icontains=search.strip())
        return query.order_by("-created_at").all().items

    def by_seller(self, seller_id: str) -> list[Product]:
        return self.query.filter(seller_id=seller_id).order_by("-created_at").all().items
