"""User registration: command and handler."""

from pydantic import BaseModel, Field

from identity.security import MIN_PASSWORD_LENGTH, create_access_token, hash_password
from identity.user.repository import UserRepository
from identity.user.user import User, UserRole
from shared.exceptions import ConflictError
from shared.logging import get_logger

logger = get_logger(__name__)


class RegisterUser(BaseModel):
    """Create a new customer account."""

    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)
    phone: str | None = Field(None, max_length=20)


class RegisterUserHandler:
    def __init__(self, database):
        self.users = UserRepository(database)

    def register_user(self, command: RegisterUser, role=UserRole.CUSTOMER):
        """Create the account and return ``(user, token)``."""
        user = User.register(
            first_name=command.first_name,
            last_name=command.last_name,
            email=command.email,
            password_hash=hash_password(command.password),
            phone=command.phone,
            role=role,
        )
        if self.users.by_email(user.email):
            raise ConflictError({"email": ["User with this email already exists"]})

        self.users.add(user)
        logger.info("User registered", user_id=user.id, role=user.role)
        return user, create_access_token(user.id)
