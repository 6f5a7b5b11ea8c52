"""Category management: commands and handler."""

from pydantic import BaseModel, Field

from catalogue.category.category import Category
from catalogue.category.repository import CategoryRepository
from shared.exceptions import ConflictError, ValidationError
from shared.logging import get_logger

logger = get_logger(__name__)


class CreateCategory(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    slug: str | None = Field(None, max_length=120)
    description: str | None = Field(None, max_length=500)
    parent_id: str | None = None
    sort_order: int = 0
    is_active: bool = True


class ManageCategoryHandler:
    def __init__(self, database):
        self.categories = CategoryRepository(database)

    def create_category(self, command: CreateCategory) -> Category:
        if command.parent_id and self.categories.find(command.parent_id) is None:
            raise ValidationError({"parent_id": ["Parent category not found"]})

        category = Category.create(
            name=command.name,
            slug=command.slug,
            description=command.description,
            parent_id=command.parent_id,
            sort_order=command.sort_order,
            is_active=command.is_active,
        )
        if self.categories.find_one_by(slug=category.slug):
            raise ConflictError({"slug": ["Category with this slug already exists"]})

        self.categories.add(category)
        logger.info("Category created", category_id=category.id, slug=category.slug)
        return category
