"""Lookups for promo codes."""

from bazaar.domain import bazaar
from bazaar.promotion.promo_code import PromoCode


@bazaar.repository(part_of=PromoCode)
class PromoCodeRepository:
    def by_code(self, code: str) -> PromoCode | None:
        return self.query.filter(code=code.strip().upper()).all().first
