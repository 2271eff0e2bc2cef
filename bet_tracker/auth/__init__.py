"""Credentials hashing and session tokens."""

from .security import (
    SessionToken,
    create_session_token,
    decode_session_token,
    hash_password,
    verify_password,
)

__all__ = [
    "SessionToken",
    "create_session_token",
    "decode_session_token",
    "hash_password",
    "verify_password",
]
