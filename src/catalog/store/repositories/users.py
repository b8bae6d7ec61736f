"""User records for the demo login."""

import secrets

import structlog

from catalog.store.database import Database
from catalog.store.schemas import User

logger = structlog.get_logger()


class InvalidCredentialsError(Exception):
    """Raised when a known user gives the wrong password."""


def get_user(db: Database, user_id: int) -> User | None:
    """Get a user by id."""
    row = db.fetch_one(
        "SELECT id, username, created_at FROM users WHERE id = ?",
        (user_id,),
    )
    return User.model_validate(row) if row else None


def login_or_register(db: Database, username: str, password: str) -> tuple[User, bool]:
    """Authenticate a user, registering unknown usernames on the fly.

    Args:
        db: Open database.
        username: Login name.
        password: Plain password, stored as given.

    Returns:
        Tuple of (User, created) where created is True for a new account.

    Raises:
        InvalidCredentialsError: If the username exists with another password.
    """
    row = db.fetch_one("SELECT * FROM users WHERE username = ?", (username,))
    if row is None:
        user_id, _ = db.execute(
            "INSERT INTO users (username, password) VALUES (?, ?)",
            (username, password),
        )
        user = get_user(db, user_id or 0)
        assert user is not None
        logger.info("user_registered", user_id=user.id)
        return user, True

    if not secrets.compare_digest(str(row["password"]), password):
        raise InvalidCredentialsError(username)

    return User.model_validate(row), False
