"""Shared route dependencies."""
from typing import Annotated

from fastapi import Depends, Request

from catalog.store import Database


def get_database(request: Request) -> Database:
    """Return the database opened during application startup."""
    return request.app.state.database


DatabaseDep = Annotated[Database, Depends(get_database)]
