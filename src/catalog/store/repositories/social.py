"""Library entries and friend links."""

from catalog.store.database import Database
from catalog.store.schemas import (
    Friend,
    FriendCreate,
    LibraryEntry,
    LibraryEntryCreate,
)


def list_library(db: Database, user_id: int) -> list[LibraryEntry]:
    """List a user's library, most recently added first."""
    rows = db.fetch_all(
        "SELECT * FROM library WHERE user_id = ? ORDER BY added_at DESC, id DESC",
        (user_id,),
    )
    return [LibraryEntry.model_validate(row) for row in rows]


def add_library_entry(db: Database, data: LibraryEntryCreate) -> LibraryEntry:
    """Add a film or series to a user's library."""
    entry_id, _ = db.execute(
        "INSERT INTO library (user_id, item_type, item_id) VALUES (?, ?, ?)",
        (data.user_id, data.item_type, data.item_id),
    )
    row = db.fetch_one("SELECT * FROM library WHERE id = ?", (entry_id,))
    assert row is not None
    return LibraryEntry.model_validate(row)


def list_friends(db: Database, user_id: int) -> list[Friend]:
    """List a user's friend links joined with the friend's username."""
    rows = db.fetch_all(
        """
        SELECT f.*, u.username AS friend_username
        FROM friends f
        LEFT JOIN users u ON u.id = f.friend_user_id
        WHERE f.user_id = ?
        ORDER BY f.id
        """,
        (user_id,),
    )
    return [Friend.model_validate(row) for row in rows]


def add_friend(db: Database, data: FriendCreate) -> Friend:
    """Link two users."""
    link_id, _ = db.execute(
        "INSERT INTO friends (user_id, friend_user_id, status) VALUES (?, ?, ?)",
        (data.user_id, data.friend_user_id, data.status),
    )
    row = db.fetch_one(
        """
        SELECT f.*, u.username AS friend_username
        FROM friends f
        LEFT JOIN users u ON u.id = f.friend_user_id
        WHERE f.id = ?
        """,
        (link_id,),
    )
    assert row is not None
    return Friend.model_validate(row)
