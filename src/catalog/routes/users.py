"""Demo login, library and friends endpoints."""

import structlog
from fastapi import APIRouter, HTTPException, Query, status

from catalog.routes.deps import DatabaseDep
from catalog.store import repositories
from catalog.store.schemas import (
    ErrorResponse,
    Friend,
    FriendCreate,
    LibraryEntry,
    LibraryEntryCreate,
    LoginRequest,
    LoginResponse,
)

logger = structlog.get_logger()

router = APIRouter(tags=["users"])

DEMO_TOKEN = "demo-token"
DEFAULT_USER_ID = 1


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"model": ErrorResponse}},
    summary="Demo login",
)
def login(credentials: LoginRequest, db: DatabaseDep) -> LoginResponse:
    """Log in, registering unknown usernames automatically.

    This is a stub: the token is fixed and passwords are stored as given.

    Raises:
        HTTPException: 401 if the username exists with another password.
    """
    try:
        user, _ = repositories.login_or_register(
            db, credentials.username, credentials.password
        )
    except repositories.InvalidCredentialsError as e:
        logger.info("login_rejected", username=credentials.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        ) from e

    return LoginResponse(user=user, token=DEMO_TOKEN)


@router.get("/library", response_model=list[LibraryEntry], summary="List a user's library")
def get_library(
    db: DatabaseDep,
    user_id: int = Query(default=DEFAULT_USER_ID, ge=1),
) -> list[LibraryEntry]:
    """List library entries for a user."""
    return repositories.list_library(db, user_id)


@router.post(
    "/library",
    response_model=LibraryEntry,
    status_code=status.HTTP_201_CREATED,
    summary="Add to a user's library",
)
def add_to_library(data: LibraryEntryCreate, db: DatabaseDep) -> LibraryEntry:
    """Add a film or series to a user's library."""
    return repositories.add_library_entry(db, data)


@router.get("/friends", response_model=list[Friend], summary="List a user's friends")
def get_friends(
    db: DatabaseDep,
    user_id: int = Query(default=DEFAULT_USER_ID, ge=1),
) -> list[Friend]:
    """List friend links for a user."""
    return repositories.list_friends(db, user_id)


@router.post(
    "/friends",
    response_model=Friend,
    status_code=status.HTTP_201_CREATED,
    summary="Link two users",
)
def add_friend(data: FriendCreate, db: DatabaseDep) -> Friend:
    """Create a friend link."""
    return repositories.add_friend(db, data)
