"""Film and series endpoints."""

import structlog
from fastapi import APIRouter, HTTPException, status

from catalog.routes.deps import DatabaseDep
from catalog.store import repositories
from catalog.store.schemas import (
    ErrorResponse,
    Film,
    FilmCreate,
    FilmUpdate,
    Series,
    SeriesCreate,
    SuccessResponse,
)

logger = structlog.get_logger()

router = APIRouter(tags=["films"])


@router.get("/films", response_model=list[Film], summary="List films")
def list_films(db: DatabaseDep) -> list[Film]:
    """List all films, newest first."""
    return repositories.list_films(db)


@router.get(
    "/films/{film_id}",
    response_model=Film,
    responses={404: {"model": ErrorResponse}},
    summary="Get film by id",
)
def get_film(film_id: int, db: DatabaseDep) -> Film:
    """Get a single film.

    Raises:
        HTTPException: 404 if the film does not exist.
    """
    film = repositories.get_film(db, film_id)
    if film is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    return film


@router.post(
    "/films",
    response_model=Film,
    status_code=status.HTTP_201_CREATED,
    summary="Add a film",
)
def create_film(data: FilmCreate, db: DatabaseDep) -> Film:
    """Add a film."""
    film = repositories.create_film(db, data)
    logger.info("film_created", film_id=film.id)
    return film


@router.put(
    "/films/{film_id}",
    response_model=Film,
    responses={404: {"model": ErrorResponse}},
    summary="Update a film",
)
def update_film(film_id: int, data: FilmUpdate, db: DatabaseDep) -> Film:
    """Update the given fields of a film.

    Raises:
        HTTPException: 404 if the film does not exist.
    """
    film = repositories.update_film(db, film_id, data)
    if film is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    return film


@router.delete("/films/{film_id}", response_model=SuccessResponse, summary="Delete a film")
def delete_film(film_id: int, db: DatabaseDep) -> SuccessResponse:
    """Delete a film. Deleting a missing film still succeeds."""
    if repositories.delete_film(db, film_id):
        logger.info("film_deleted", film_id=film_id)
    return SuccessResponse(success=True)


@router.get("/series", response_model=list[Series], summary="List series")
def list_series(db: DatabaseDep) -> list[Series]:
    """List all series, newest first."""
    return repositories.list_series(db)


@router.post(
    "/series",
    response_model=Series,
    status_code=status.HTTP_201_CREATED,
    summary="Add a series",
)
def create_series(data: SeriesCreate, db: DatabaseDep) -> Series:
    """Add a series."""
    return repositories.create_series(db, data)
