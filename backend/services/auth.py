"""
Admin authentication - password hashing and JWT bearer tokens.
"""

import logging
from datetime import timedelta
from typing import Any, Dict, Optional

import bcrypt
import jwt

from env import JWT_ALGORITHM, JWT_EXPIRES_IN_HOURS, JWT_SECRET
from models.admin import Admin
from models.report import utcnow
from repositories.admin import AdminRepository

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10


class TokenExpiredError(Exception):
    """Token signature is valid but it has expired."""


class InvalidTokenError(Exception):
    """Token is malformed, tampered with, or missing claims."""


def hash_password(password: str) -> str:
    """Hash a password with a fresh bcrypt salt."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a candidate password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored hash is not a bcrypt hash
        return False


def create_access_token(
    admin: Admin,
    secret: str = JWT_SECRET,
    expires_in: timedelta = timedelta(hours=JWT_EXPIRES_IN_HOURS),
) -> str:
    """
    Issue a signed token for an admin.

    Args:
        admin: Authenticated admin (must have an id)
        secret: Signing key
        expires_in: Token lifetime

    Returns:
        Encoded JWT
    """
    now = utcnow()
    payload = {
        "admin_id": str(admin.id),
        "username": admin.username,
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str, secret: str = JWT_SECRET) -> Dict[str, Any]:
    """
    Verify a token and return its claims.

    Args:
        token: Encoded JWT
        secret: Signing key

    Returns:
        Token payload containing admin_id and username

    Raises:
        TokenExpiredError: token has expired
        InvalidTokenError: token is invalid for any other reason
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError("Token expired") from e
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError(str(e)) from e

    if not payload.get("admin_id"):
        raise InvalidTokenError("Token is missing admin_id")
    return payload


async def authenticate_admin(repo: AdminRepository, username: str, password: str) -> Optional[Admin]:
    """
    Look up an active admin and check the password.

    Args:
        repo: Admin repository
        username: Login name
        password: Plain-text password

    Returns:
        Admin with last_login updated, or None if credentials are wrong
    """
    admin = await repo.find_active_by_username(username)
    if not admin:
        return None

    if not verify_password(password, admin.password_hash):
        return None

    now = utcnow()
    updated = await repo.update(admin.id, {"last_login": now, "updated_at": now})
    logger.info("Admin logged in: %s", admin.username)
    return updated or admin
