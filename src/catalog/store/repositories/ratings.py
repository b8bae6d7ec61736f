"""Ratings keyed by (movie_id, user_id)."""

from catalog.store.database import Database
from catalog.store.schemas import Rating, RatingUpsert


def find_ratings(
    db: Database,
    movie_id: int | None = None,
    user_id: int | None = None,
) -> list[Rating]:
    """List ratings, optionally filtered by film and/or user."""
    clauses: list[str] = []
    params: list[int] = []
    if movie_id is not None:
        clauses.append("movie_id = ?")
        params.append(movie_id)
    if user_id is not None:
        clauses.append("user_id = ?")
        params.append(user_id)

    sql = "SELECT * FROM ratings"
    if clauses:
        sql += " WHERE " + " AND ".join(clauses)
    sql += " ORDER BY movie_id, user_id"

    return [Rating.model_validate(row) for row in db.fetch_all(sql, params)]


def upsert_rating(db: Database, data: RatingUpsert) -> Rating:
    """Insert a rating or replace the score of an existing one."""
    db.execute(
        """
        INSERT INTO ratings (movie_id, user_id, score) VALUES (?, ?, ?)
        ON CONFLICT (movie_id, user_id)
        DO UPDATE SET score = excluded.score, rated_at = CURRENT_TIMESTAMP
        """,
        (data.movie_id, data.user_id, data.score),
    )
    row = db.fetch_one(
        "SELECT * FROM ratings WHERE movie_id = ? AND user_id = ?",
        (data.movie_id, data.user_id),
    )
    assert row is not None
    return Rating.model_validate(row)
