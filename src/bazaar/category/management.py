"""Category management: commands, handler and the public listing."""

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from bazaar.category.category import Category
from bazaar.domain import bazaar


@bazaar.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100, sanitize=False)
    name_hindi: String(max_length=100, sanitize=False)
    slug: String(max_length=120)
    description: Text(sanitize=False)
    image: String(max_length=500, sanitize=False)
    sort_order: Integer(default=0)


@bazaar.command(part_of="Category")
class DeactivateCategory:
    category_id: Identifier(required=True)


@bazaar.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        category = Category.create(
            name=command.name,
            slug=command.slug,
            name_hindi=command.name_hindi,
            description=command.description,
            image=command.image,
            sort_order=command.sort_order or 0,
        )
        current_domain.repository_for(Category).add(category)
        return str(category.id)

    @handle(DeactivateCategory)
    def deactivate_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        category.deactivate()
        repo.add(category)


def active_categories() -> list[Category]:
    repo = current_domain.repository_for(Category)
    return repo.query.filter(is_active=True).order_by("sort_order").all().items
