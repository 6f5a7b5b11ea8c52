"""Login and password changes: commands and handler."""

from pydantic import BaseModel, Field

from identity.security import (
    MIN_PASSWORD_LENGTH,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from identity.user.repository import UserRepository
from shared.exceptions import AuthenticationError
from shared.logging import get_logger

logger = get_logger(__name__)


class Login(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ChangePassword(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)


class AuthenticationHandler:
    def __init__(self, database):
        self.users = UserRepository(database)

    def login(self, command: Login):
        """Verify credentials and return ``(user, token)``.

        Unknown emails and wrong passwords are reported identically.
        """
        user = self.users.by_email(command.email)
        if user is None:
            raise AuthenticationError({"_entity": ["Invalid email or password"]})
        if not user.is_active:
            raise AuthenticationError({"_entity": ["Account is deactivated"]})
        if not verify_password(command.password, user.password_hash):
            logger.info("Login failed", user_id=user.id)
            raise AuthenticationError({"_entity": ["Invalid email or password"]})

        user.record_login()
        self.users.add(user)
        logger.info("User logged in", user_id=user.id)
        return user, create_access_token(user.id)

    def authenticate(self, token: str):
        """Resolve a bearer token to an active user."""
        user = self.users.find(decode_access_token(token))
        if user is None or not user.is_active:
            raise AuthenticationError({"_entity": ["User not found or inactive"]})
        return user

    def change_password(self, user_id, command: ChangePassword) -> None:
        user = self.users.get(user_id)
        if not verify_password(command.current_password, user.password_hash):
            raise AuthenticationError({"current_password": ["Current password is incorrect"]})

        user.change_password_hash(hash_password(command.new_password))
        self.users.add(user)
        logger.info("Password changed", user_id=user.id)
