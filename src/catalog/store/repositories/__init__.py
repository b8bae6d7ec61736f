"""Repositories for films, series, ratings, users, libraries and friends."""

from catalog.store.repositories.films import (
    create_film,
    create_series,
    delete_film,
    get_film,
    get_series,
    list_films,
    list_series,
    update_film,
)
from catalog.store.repositories.ratings import find_ratings, upsert_rating
from catalog.store.repositories.social import (
    add_friend,
    add_library_entry,
    list_friends,
    list_library,
)
from catalog.store.repositories.users import (
    InvalidCredentialsError,
    get_user,
    login_or_register,
)

__all__ = [
    "InvalidCredentialsError",
    "add_friend",
    "add_library_entry",
    "create_film",
    "create_series",
    "delete_film",
    "find_ratings",
    "get_film",
    "get_series",
    "get_user",
    "list_films",
    "list_friends",
    "list_library",
    "list_series",
    "login_or_register",
    "update_film",
    "upsert_rating",
]
