"""Rating endpoints."""

from fastapi import APIRouter, Query, status

from catalog.routes.deps import DatabaseDep
from catalog.store import repositories
from catalog.store.schemas import Rating, RatingUpsert

router = APIRouter(prefix="/ratings", tags=["ratings"])


@router.get(
    "",
    response_model=list[Rating] | Rating | None,
    summary="Find ratings",
    description=(
        "Filter by movie_id and/or user_id. With both filters the single "
        "matching rating (or null) is returned instead of a list."
    ),
)
def get_ratings(
    db: DatabaseDep,
    movie_id: int | None = Query(default=None, ge=1),
    user_id: int | None = Query(default=None, ge=1),
) -> list[Rating] | Rating | None:
    """Find ratings for a film, a user, or both."""
    ratings = repositories.find_ratings(db, movie_id=movie_id, user_id=user_id)
    if movie_id is not None and user_id is not None:
        return ratings[0] if ratings else None
    return ratings


@router.post(
    "",
    response_model=Rating,
    status_code=status.HTTP_201_CREATED,
    summary="Rate a film",
)
def rate(data: RatingUpsert, db: DatabaseDep) -> Rating:
    """Create or replace the caller's rating for a film."""
    return repositories.upsert_rating(db, data)
