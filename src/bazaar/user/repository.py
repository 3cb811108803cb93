"""Lookups for the User aggregate."""

from bazaar.domain import bazaar
from bazaar.user.user import User


@bazaar.repository(part_of=User)
class UserRepository:
    def by_external_id(self, external_id: str) -> User | None:
        if not external_id:
            return None
        return self.query.filter(external_id=external_id).all().first

    def by_email(self, email: str) -> User | None:
        return self.query.filter(email=email.strip().lower()).all().first
