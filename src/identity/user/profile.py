"""User profile updates: command and handler."""

from pydantic import BaseModel, Field

from identity.user.repository import UserRepository
from identity.user.user import Address
from shared.logging import get_logger

logger = get_logger(__name__)


class UpdateProfile(BaseModel):
    """Modify the caller's personal information; unset fields are left alone."""

    first_name: str | None = Field(None, max_length=50)
    last_name: str | None = Field(None, max_length=50)
    phone: str | None = Field(None, max_length=20)
    addresses: list[Address] | None = None


class UpdateProfileHandler:
    def __init__(self, database):
        self.users = UserRepository(database)

    def update_profile(self, user_id, command: UpdateProfile):
        user = self.users.get(user_id)
        changes = command.model_dump(exclude_unset=True)
        if changes.get("addresses") is None:
            changes.pop("addresses", None)

        user.update_profile(**changes)
        self.users.add(user)
        logger.info("Profile updated", user_id=user.id, fields=sorted(changes))
        return user
