"""Request and outcome types for page resolution."""
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class PageRequest(BaseModel):
    """Incoming page request, immutable for one resolution.

    Attributes:
        path: Decoded request path, e.g. ``/films``.
        query: Raw query string without the leading ``?``.
    """

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Decoded request path")
    query: str = Field(default="", description="Raw query string")


class Redirect(BaseModel):
    """Permanent redirect to another location."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["redirect"] = "redirect"
    target: str = Field(description="Location header value")
    status_code: int = 301


class ServeFile(BaseModel):
    """Serve a resolved document from disk."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["serve_file"] = "serve_file"
    path: Path = Field(description="Absolute path of the document")


class Diagnostic(BaseModel):
    """Plain-text 200 response for a site with no landing document."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["diagnostic"] = "diagnostic"
    text: str


class NotFound(BaseModel):
    """Nothing matched the request."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["not_found"] = "not_found"
    text: str = "Not found"


class Passthrough(BaseModel):
    """The request belongs to the API and is not handled here."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["passthrough"] = "passthrough"


Resolution = Redirect | ServeFile | Diagnostic | NotFound | Passthrough
