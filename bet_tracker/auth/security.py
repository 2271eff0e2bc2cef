"""
Password hashing and session tokens.

Sessions are stateless HS256 tokens whose ``sub`` claim carries the user id.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from loguru import logger
from werkzeug.security import check_password_hash, generate_password_hash

from bet_tracker.config.settings import Settings
from bet_tracker.exceptions import AuthenticationError


@dataclass
class SessionToken:
    """Issued session token and its expiry."""

    token: str
    user_id: str
    expires_at: datetime


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    return check_password_hash(password_hash, password)


def create_session_token(user_id: str, settings: Settings) -> SessionToken:
    """
    Sign a session token for a user.

    Args:
        user_id: Id of the authenticated user
        settings: Settings holding the signing key and lifetime

    Returns:
        SessionToken with the encoded token and its naive-UTC expiry
    """
    issued_at = datetime.now(timezone.utc)
    expires_at = issued_at + timedelta(minutes=settings.session_ttl_minutes)

    token = jwt.encode(
        {"sub": user_id, "iat": issued_at, "exp": expires_at},
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )

    return SessionToken(
        token=token,
        user_id=user_id,
        expires_at=expires_at.replace(tzinfo=None),
    )


def decode_session_token(token: str, settings: Settings) -> str:
    """
    Validate a session token and return the user id it was issued for.

    Raises:
        AuthenticationError: If the token is expired, tampered with or malformed
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Session expired")
    except jwt.InvalidTokenError as e:
        logger.debug(f"Rejected session token: {e}")
        raise AuthenticationError("Invalid session")

    return payload["sub"]
