"""Security-first request path classification and filesystem joins."""
from enum import Enum
from pathlib import Path, PurePosixPath

from pydantic import BaseModel, ConfigDict

FORBIDDEN_CHARACTERS: frozenset[str] = frozenset({"\0", "\\"})


class SecurityError(Exception):
    """Raised when a path operation violates security constraints."""

    def __init__(self, message: str, path: str) -> None:
        """Initialize security error.

        Args:
            message: Error description.
            path: The offending path value.
        """
        super().__init__(message)
        self.path = path


class UnsafePathError(SecurityError):
    """Raised when a request path could escape the configured roots."""


class PathKind(str, Enum):
    """Classification of an incoming request path."""

    API = "api"
    HAS_EXTENSION = "has_extension"
    EXTENSIONLESS = "extensionless"


class PathInfo(BaseModel):
    """Result of classifying a request path.

    Attributes:
        kind: Which branch of the pipeline handles the path.
        extension: Lowercase extension including the dot, for HAS_EXTENSION.
    """

    model_config = ConfigDict(frozen=True)

    kind: PathKind
    extension: str | None = None


def under_prefix(path: str, prefix: str) -> bool:
    """Check whether a path equals a prefix or is nested below it.

    ``/public`` matches ``/public`` and ``/public/x`` but not ``/publication``.
    """
    prefix = prefix.rstrip("/")
    if not prefix:
        return True
    return path == prefix or path.startswith(prefix + "/")


def classify_path(path: str, api_prefix: str) -> PathInfo:
    """Classify a raw request path.

    Args:
        path: Request path without the query string.
        api_prefix: Reserved API namespace, e.g. ``/api``.

    Returns:
        PathInfo with the path kind and, for extensioned paths, the extension.
    """
    # Only paths below the prefix are API; a bare "/api" is a page path.
    if path.startswith(api_prefix.rstrip("/") + "/"):
        return PathInfo(kind=PathKind.API)

    # A leading dot on the last segment names a file, not an extension.
    suffix = PurePosixPath(path).suffix
    if suffix:
        return PathInfo(kind=PathKind.HAS_EXTENSION, extension=suffix.lower())

    return PathInfo(kind=PathKind.EXTENSIONLESS)


def split_segments(path: str) -> tuple[str, ...]:
    """Split a request path into safe relative segments.

    Empty and ``.`` segments are dropped.

    Args:
        path: Request path, typically starting with ``/``.

    Returns:
        Tuple of path segments suitable for joining onto a root.

    Raises:
        UnsafePathError: If the path contains a null byte, a backslash, or a
            ``..`` segment.
    """
    for char in FORBIDDEN_CHARACTERS:
        if char in path:
            raise UnsafePathError("Path contains a forbidden character", path)

    segments = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            raise UnsafePathError("Path contains directory traversal sequence", path)
        segments.append(segment)
    return tuple(segments)


def has_hidden_segment(segments: tuple[str, ...]) -> bool:
    """Check for dot-named segments such as ``.env`` or ``.git``."""
    return any(segment.startswith(".") for segment in segments)


def join_within(root: Path, relative: str) -> Path | None:
    """Join a relative path onto a root, refusing results outside it.

    Symlinks are resolved before the containment check, so a link that
    points out of the root is rejected too.

    Args:
        root: Absolute root directory.
        relative: Slash-separated relative path.

    Returns:
        The resolved path, or None if it escapes the root or cannot be
        resolved.
    """
    try:
        resolved_root = root.resolve()
        resolved = (resolved_root / relative).resolve()
    except (OSError, RuntimeError):
        return None

    if not resolved.is_relative_to(resolved_root):
        return None
    return resolved
