"""Admin endpoints, guarded by the admin API key middleware."""

import structlog
from fastapi import APIRouter, status

from catalog.routes.deps import DatabaseDep
from catalog.store import repositories
from catalog.store.schemas import Film, FilmCreate

logger = structlog.get_logger()

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post(
    "/films",
    response_model=Film,
    status_code=status.HTTP_201_CREATED,
    summary="Add a film as an administrator",
)
def admin_add_film(data: FilmCreate, db: DatabaseDep) -> Film:
    """Add a film through the privileged endpoint."""
    film = repositories.create_film(db, data)
    logger.info("admin_film_created", film_id=film.id, title=film.title)
    return film
