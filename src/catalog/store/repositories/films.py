"""Film and series records."""

from catalog.store.database import Database
from catalog.store.schemas import (
    Film,
    FilmCreate,
    FilmUpdate,
    Series,
    SeriesCreate,
)


def list_films(db: Database) -> list[Film]:
    """List films, newest first."""
    rows = db.fetch_all("SELECT * FROM films ORDER BY created_at DESC, id DESC")
    return [Film.model_validate(row) for row in rows]


def get_film(db: Database, film_id: int) -> Film | None:
    """Get a film by id."""
    row = db.fetch_one("SELECT * FROM films WHERE id = ?", (film_id,))
    return Film.model_validate(row) if row else None


def create_film(db: Database, data: FilmCreate) -> Film:
    """Insert a film and return the stored record."""
    film_id, _ = db.execute(
        "INSERT INTO films (title, description, url) VALUES (?, ?, ?)",
        (data.title, data.description, data.url),
    )
    film = get_film(db, film_id or 0)
    assert film is not None
    return film


def update_film(db: Database, film_id: int, data: FilmUpdate) -> Film | None:
    """Update the given fields of a film.

    Returns:
        The updated film, or None if no film has that id.
    """
    existing = get_film(db, film_id)
    if existing is None:
        return None

    changes = data.model_dump(exclude_none=True)
    merged = existing.model_copy(update=changes)
    db.execute(
        "UPDATE films SET title = ?, description = ?, url = ? WHERE id = ?",
        (merged.title, merged.description, merged.url, film_id),
    )
    return get_film(db, film_id)


def delete_film(db: Database, film_id: int) -> bool:
    """Delete a film. Returns True if a row was removed."""
    _, changed = db.execute("DELETE FROM films WHERE id = ?", (film_id,))
    return changed > 0


def list_series(db: Database) -> list[Series]:
    """List series, newest first."""
    rows = db.fetch_all("SELECT * FROM series ORDER BY created_at DESC, id DESC")
    return [Series.model_validate(row) for row in rows]


def get_series(db: Database, series_id: int) -> Series | None:
    """Get a series by id."""
    row = db.fetch_one("SELECT * FROM series WHERE id = ?", (series_id,))
    return Series.model_validate(row) if row else None


def create_series(db: Database, data: SeriesCreate) -> Series:
    """Insert a series and return the stored record."""
    series_id, _ = db.execute(
        "INSERT INTO series (title, description) VALUES (?, ?)",
        (data.title, data.description),
    )
    series = get_series(db, series_id or 0)
    assert series is not None
    return series
