"""Category aggregate: the browsing groups products are listed under."""

import re
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Integer, String, Text

from bazaar.domain import bazaar

_SLUG = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def slugify(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")


@bazaar.aggregate
class Category:
    """A bilingual category such as "Groceries / किराना".

    ``slug`` is unique and URL-safe. Listing shows active categories ordered
    by ``sort_order``.
    """

    name: String(required=True, max_length=100, sanitize=False)
    name_hindi: String(max_length=100, sanitize=False)
    slug: String(required=True, max_length=120, unique=True)
    description: Text(sanitize=False)
    image: String(max_length=500, sanitize=False)
    is_active: Boolean(default=True)
    sort_order: Integer(default=0)
    created_at: DateTime()

    @invariant.post
    def slug_must_be_url_safe(self):
        if self.slug and not _SLUG.match(self.slug):
            raise ValidationError({"slug": ["Slug may only contain lowercase letters, digits and hyphens"]})

    @classmethod
    def create(cls, name, slug=None, name_hindi=None, description=None, image=None, sort_order=0):
        return cls(
            name=name,
            name_hindi=name_hindi,
            slug=slug or slugify(name),
            description=description,
            image=image,
            sort_order=sort_order,
            created_at=datetime.now(UTC),
        )

    def deactivate(self):
        self.is_active = False
