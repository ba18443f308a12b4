"""Category management: commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from canteen.catalogue.category import Category
from canteen.catalogue.queries import count_items_in_category, find_category_by_name
from canteen.domain import canteen
from canteen.exceptions import ConflictError
from canteen.utils.lookup import get_or_not_found

logger = structlog.get_logger(__name__)


@canteen.command(part_of="Category")
class CreateCategory:
    name: String(max_length=50)
    description: String(max_length=200)


@canteen.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(max_length=50)
    description: String(max_length=200)


@canteen.command(part_of="Category")
class DeleteCategory:
    category_id: Identifier(required=True)


@canteen.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        if not command.name or not command.name.strip():
            raise ValidationError({"name": ["Please provide category name"]})
        if find_category_by_name(command.name):
            raise ConflictError({"name": ["Category already exists"]})

        category = Category.create(name=command.name, description=command.description)
        current_domain.repository_for(Category).add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = get_or_not_found(Category, command.category_id, "Category not found")

        if command.name is not None:
            if not command.name.strip():
                raise ValidationError({"name": ["Please provide category name"]})
            existing = find_category_by_name(command.name)
            if existing and str(existing.id) != str(category.id):
                raise ConflictError({"name": ["Category already exists"]})

        category.update_details(name=command.name, description=command.description)
        repo.add(category)

    @handle(DeleteCategory)
    def delete_category(self, command):
        repo = current_domain.repository_for(Category)
        category = get_or_not_found(Category, command.category_id, "Category not found")

        in_use = count_items_in_category(category.id)
        if in_use > 0:
            raise ConflictError(
                {"category": [f"Cannot delete category. {in_use} menu items are using this category."]}
            )

        repo._dao.delete(category)
        logger.info("Category deleted", category_id=str(category.id))
