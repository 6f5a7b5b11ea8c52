"""Category aggregate root for product categorization."""

from datetime import datetime

from pydantic import ConfigDict, Field, model_validator

from catalogue.shared.slug import slugify
from shared.model import Aggregate, utc_now


class Category(Aggregate):
    """A grouping for organizing products in the catalogue.

    Categories may point at a parent category and carry a sort order that
    controls how they are presented.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=100)
    slug: str | None = None
    description: str | None = Field(default=None, max_length=500)
    parent_id: str | None = None
    is_active: bool = True
    sort_order: int = 0
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def _derive_slug(self):
        self.slug = slugify(self.slug or self.name)
        if not self.slug:
            raise ValueError("Slug must contain at least one letter or digit")
        return self

    @classmethod
    def create(cls, name, slug=None, description=None, parent_id=None, sort_order=0, is_active=True):
        now = utc_now()
        return cls(
            name=name,
            slug=slug,
            description=description,
            parent_id=parent_id,
            sort_order=sort_order,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
