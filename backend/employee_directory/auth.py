"""Password hashing and access token helpers."""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import bcrypt
import jwt

from .models import User
from .schemas import TokenData

PASSWORD_HASH_ROUNDS = 10
# bcrypt only reads this many bytes of a password.
PASSWORD_MAX_BYTES = 72
TOKEN_LIFETIME = timedelta(hours=1)
TOKEN_ALGORITHM = "HS256"


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:PASSWORD_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash a password for storage."""
    salt = bcrypt.gensalt(rounds=PASSWORD_HASH_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain password against the stored hash."""
    return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))


def compute_expiry(issued_at: datetime) -> datetime:
    """Return the absolute expiration timestamp for a token issued at `issued_at`."""

    return issued_at + TOKEN_LIFETIME


def token_payload(user: User, issued_at: datetime) -> dict[str, Any]:
    """
    Generate the JWT payload for a given user.

    Only the user id is embedded; the token is a proof of login, not a profile.
    """
    return {
        "user_id": user.id,
        "iat": int(issued_at.timestamp()),
        "exp": int(compute_expiry(issued_at).timestamp()),
    }


def issue_access_token(user: User, secret_key: str) -> str:
    """Sign a one-hour bearer token for `user`."""

    issued_at = datetime.now(timezone.utc)
    return jwt.encode(token_payload(user, issued_at), secret_key, algorithm=TOKEN_ALGORITHM)


def decode_access_token(token: str, secret_key: str) -> TokenData:
    """Decode a JWT access token and return its payload.

    Raises jwt.PyJWTError when the signature is wrong or the token has expired.
    """

    payload: Dict[str, Any] = jwt.decode(
        token,
        secret_key,
        algorithms=[TOKEN_ALGORITHM],
    )
    return TokenData(**payload)
