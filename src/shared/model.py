"""Base class for aggregates persisted as MongoDB documents."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from shared.database import new_id


def utc_now() -> datetime:
    return datetime.now(UTC)


class Aggregate(BaseModel):
    """A pydantic model with a string identity stored under ``_id``.

    Subclasses keep their business rules in methods; repositories only call
    ``to_document`` and ``from_document``.
    """

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    id: str = Field(default_factory=new_id)

    def to_document(self) -> dict:
        document = self.model_dump(exclude={"id"})
        document["_id"] = self.id
        return document

    @classmethod
    def from_document(cls, document: dict):
        data = dict(document)
        data["id"] = str(data.pop("_id"))
        return cls.model_validate(data)
