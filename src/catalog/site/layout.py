"""Immutable site layout built once from settings at startup."""
from dataclasses import dataclass
from pathlib import Path

import structlog

from catalog.config import Settings

logger = structlog.get_logger()


class ConfigurationError(Exception):
    """Raised when the site layout cannot be served."""

    def __init__(self, message: str, value: str | None = None) -> None:
        """Initialize configuration error.

        Args:
            message: Error description.
            value: The offending configuration value, if any.
        """
        super().__init__(message)
        self.value = value


@dataclass(frozen=True)
class SiteLayout:
    """Everything the resolution pipeline needs to know about the site.

    Attributes:
        roots: Document roots, highest priority first.
        static_dir: Directory used by the generic static handler.
        protected_prefix: URL prefix redirected to ``/`` on direct access.
        protected_index: Reserved document served only for ``/``.
        legacy_prefix: Deprecated URL prefix stripped by redirect.
        api_prefix: URL namespace passed through untouched.
        default_documents: Landing document names tried for ``/``.
        document_extension: Lowercase extension of served pages.
    """

    roots: tuple[Path, ...]
    static_dir: Path
    protected_prefix: str
    protected_index: Path
    legacy_prefix: str
    api_prefix: str
    default_documents: tuple[str, ...]
    document_extension: str = ".html"

    @classmethod
    def from_settings(cls, settings: Settings) -> "SiteLayout":
        """Build and validate a layout from settings.

        Args:
            settings: Loaded server configuration.

        Returns:
            Validated SiteLayout.

        Raises:
            ConfigurationError: If no roots are configured, a root is not an
                absolute readable directory, or a prefix is malformed.
        """
        if not settings.site_roots:
            raise ConfigurationError("At least one site root is required")

        roots = tuple(_validate_directory(raw) for raw in settings.site_roots)
        static_dir = (
            _validate_directory(settings.static_dir)
            if settings.static_dir
            else roots[-1]
        )

        protected_prefix = _normalize_prefix(settings.protected_prefix)
        legacy_prefix = _normalize_prefix(settings.legacy_prefix)
        api_prefix = _normalize_prefix(settings.api_prefix)

        extension = settings.document_extension.lower()
        if not extension.startswith("."):
            extension = f".{extension}"

        layout = cls(
            roots=roots,
            static_dir=static_dir,
            protected_prefix=protected_prefix,
            protected_index=static_dir
            / protected_prefix.strip("/")
            / settings.protected_document,
            legacy_prefix=legacy_prefix,
            api_prefix=api_prefix,
            default_documents=tuple(settings.default_documents),
            document_extension=extension,
        )
        logger.info(
            "site_layout_loaded",
            roots=[str(root) for root in layout.roots],
            static_dir=str(layout.static_dir),
            default_documents=list(layout.default_documents),
        )
        return layout


def _validate_directory(raw: str) -> Path:
    """Check that a configured directory is absolute and readable."""
    path = Path(raw)
    if not path.is_absolute():
        raise ConfigurationError(f"Site root must be absolute: {raw}", raw)
    try:
        if not path.is_dir():
            raise ConfigurationError(f"Site root is not a directory: {raw}", raw)
        next(path.iterdir(), None)
    except PermissionError as e:
        raise ConfigurationError(f"Site root is not readable: {raw}", raw) from e
    except OSError as e:
        raise ConfigurationError(f"Site root is not accessible: {raw}", raw) from e
    return path


def _normalize_prefix(raw: str) -> str:
    prefix = "/" + raw.strip().strip("/")
    if prefix == "/":
        raise ConfigurationError("URL prefix cannot be the site root", raw)
    return prefix
