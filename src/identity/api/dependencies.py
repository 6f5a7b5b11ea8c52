"""FastAPI dependencies resolving the caller from the ``Authorization`` header."""

from fastapi import Depends, Header

from identity.user.authentication import AuthenticationHandler
from identity.user.user import User
from shared.database import get_database
from shared.exceptions import AuthenticationError


def _bearer_token(authorization):
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_user(
    authorization: str | None = Header(None),
    database=Depends(get_database),
) -> User:
    token = _bearer_token(authorization)
    if token is None:
        raise AuthenticationError({"_entity": ["No token provided"]})
    return AuthenticationHandler(database).authenticate(token)


def get_optional_user(
    authorization: str | None = Header(None),
    database=Depends(get_database),
) -> User | None:
    """Like ``get_current_user`` but anonymous callers (or bad tokens) yield ``None``."""
    token = _bearer_token(authorization)
    if token is None:
        return None
    try:
        return AuthenticationHandler(database).authenticate(token)
    except AuthenticationError:
        return None


def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise AuthenticationError({"_entity": ["Admin privileges required"]})
    return user
