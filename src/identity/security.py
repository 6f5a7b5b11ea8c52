"""Password hashing and access tokens.

Both are thin wrappers around passlib and python-jose so the rest of the
context never touches the primitives directly.
"""

from datetime import timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from shared.config import get_settings
from shared.exceptions import AuthenticationError
from shared.model import utc_now

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

MIN_PASSWORD_LENGTH = 6


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    return pwd_context.verify(password, password_hash)


def create_access_token(user_id) -> str:
    settings = get_settings()
    payload = {
        "sub": str(user_id),
        "exp": utc_now() + timedelta(days=settings.jwt_expires_days),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> str:
    """Return the user id carried by ``token``."""
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise AuthenticationError({"_entity": ["Invalid or expired token"]}) from None

    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError({"_entity": ["Invalid or expired token"]})
    return user_id
