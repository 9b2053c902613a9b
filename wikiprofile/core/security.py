import re
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from passlib.context import CryptContext

from wikiprofile.core.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


ALGORITHM = "HS256"

PASSWORD_MIN_LENGTH = 8
PASSWORD_SYMBOLS = '!@#$%^&*(),.?":{}|<>'

# (pattern, message) pairs every local password must satisfy
PASSWORD_RULES: list[tuple[str, str]] = [
    (r"[A-Z]", "at least one uppercase letter"),
    (r"[0-9]", "at least one digit"),
    (f"[{re.escape(PASSWORD_SYMBOLS)}]", "at least one symbol"),
]


def create_access_token(
    subject: str | Any,
    expires_delta: timedelta,
    role: str | None = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        subject: User ID (stored as 'sub')
        expires_delta: Token expiration time
        role: User's role at issue time (informational, the role is
            re-read from the database on every request)

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(timezone.utc)
    expire = now + expires_delta

    to_encode = {
        "sub": str(subject),
        "exp": expire,
        "iat": now,
    }

    if role:
        to_encode["role"] = role

    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt


def password_problems(password: str) -> list[str]:
    """Return the complexity rules the password fails, empty when it is strong."""
    problems = []
    if len(password) < PASSWORD_MIN_LENGTH:
        problems.append(f"at least {PASSWORD_MIN_LENGTH} characters")
    for pattern, message in PASSWORD_RULES:
        if not re.search(pattern, password):
            problems.append(message)
    return problems


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)
