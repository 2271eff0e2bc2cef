"""
User accounts: credentials sign-up, sign-in and profile management.
"""
from typing import Optional

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from bet_tracker.auth.security import hash_password, verify_password
from bet_tracker.database.models import User
from bet_tracker.database.schemas import SignupRequest, UserUpdate
from bet_tracker.exceptions import AuthenticationError, InvalidOperationError


class AccountService:
    """Create, authenticate and edit users."""

    def __init__(self, session: Session):
        self.session = session

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.session.scalars(
            select(User).where(User.email == email.strip().lower())
        ).first()

    def create_user(self, data: SignupRequest, starting_bankroll: float = 0.0) -> User:
        """
        Register a credentials user.

        Raises:
            InvalidOperationError: If the email is already registered
        """
        if self.get_user_by_email(data.email) is not None:
            raise InvalidOperationError("Email already registered")

        user = User(
            name=data.name,
            email=data.email,
            password_hash=hash_password(data.password),
            starting_bankroll=starting_bankroll,
        )
        self.session.add(user)
        self.session.commit()

        logger.info(f"User {user.id} signed up")
        return user

    def authenticate(self, email: str, password: str) -> User:
        """
        Check credentials.

        Raises:
            AuthenticationError: If the email is unknown, the account has no
                password (OAuth-only) or the password is wrong
        """
        user = self.get_user_by_email(email)
        if user is None or not user.password_hash:
            raise AuthenticationError("Invalid email or password")
        if not verify_password(user.password_hash, password):
            raise AuthenticationError("Invalid email or password")
        return user

    def update_user(self, user: User, data: UserUpdate) -> User:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in changes.items():
            setattr(user, field, value)
        self.session.commit()
        return user

    def delete_user(self, user: User) -> None:
        """Delete a user; picks, parlays and bankroll history cascade."""
        user_id = user.id
        self.session.delete(user)
        self.session.commit()
        logger.info(f"User {user_id} deleted with all associated data")
