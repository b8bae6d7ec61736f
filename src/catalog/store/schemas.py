"""Pydantic schemas for catalog API requests and responses."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

ItemType = Literal["film", "series"]


class FilmCreate(BaseModel):
    """Request body for adding a film."""

    title: str = Field(min_length=1)
    description: str = ""
    url: str = ""


class FilmUpdate(BaseModel):
    """Partial film update. Omitted fields keep their stored value."""

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    url: str | None = None


class Film(BaseModel):
    """Stored film."""

    id: int
    title: str
    description: str
    url: str
    created_at: datetime


class SeriesCreate(BaseModel):
    """Request body for adding a series."""

    title: str = Field(min_length=1)
    description: str = ""


class Series(BaseModel):
    """Stored series."""

    id: int
    title: str
    description: str
    created_at: datetime


class RatingUpsert(BaseModel):
    """Request body for rating a film. One rating per user and film."""

    movie_id: int = Field(ge=1)
    user_id: int = Field(ge=1)
    score: int = Field(ge=1, le=10)


class Rating(BaseModel):
    """Stored rating keyed by (movie_id, user_id)."""

    movie_id: int
    user_id: int
    score: int
    rated_at: datetime


class LoginRequest(BaseModel):
    """Demo login credentials."""

    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1)


class User(BaseModel):
    """Public user record. The password is never returned."""

    id: int
    username: str
    created_at: datetime


class LoginResponse(BaseModel):
    """Login result with a demo token."""

    user: User
    token: str


class LibraryEntryCreate(BaseModel):
    """Request body for adding a title to a user's library."""

    user_id: int = Field(ge=1)
    item_type: ItemType
    item_id: int = Field(ge=1)


class LibraryEntry(BaseModel):
    """Stored library entry."""

    id: int
    user_id: int
    item_type: ItemType
    item_id: int
    added_at: datetime


class FriendCreate(BaseModel):
    """Request body for linking two users."""

    user_id: int = Field(ge=1)
    friend_user_id: int = Field(ge=1)
    status: Literal["pending", "accepted"] = "accepted"


class Friend(BaseModel):
    """Friend link with the friend's username when the user exists."""

    id: int
    user_id: int
    friend_user_id: int
    status: str
    friend_username: str | None = None


class SuccessResponse(BaseModel):
    """Generic acknowledgement."""

    success: bool


class ErrorResponse(BaseModel):
    """Error payload."""

    detail: str
