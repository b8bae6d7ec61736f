"""Server configuration loaded from environment variables."""
from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_csv(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings(BaseSettings):
    """Catalog server configuration loaded from environment variables.

    Attributes:
        host: Bind address for the server.
        port: Port number for the server.
        debug: Enable debug logging and API documentation.
        json_logs: Emit JSON log lines instead of console output.
        cors_origins_raw: Raw comma-separated CORS origins string.
        shutdown_timeout: Seconds to wait for graceful shutdown.
        key: Admin API key. Empty disables admin authentication.
        site_roots_raw: Comma-separated document roots, highest priority first.
        static_dir: Directory for generic static serving. Defaults to the
            last document root.
        protected_prefix: URL prefix that is never directly routable.
        protected_document: Reserved filename inside the protected directory,
            served only for the site root.
        legacy_prefix: Deprecated URL prefix redirected to its stripped form.
        api_prefix: URL namespace handled by the API routers.
        default_documents_raw: Comma-separated landing document names.
        document_extension: Extension of served pages.
        database_path: SQLite database file.
    """

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False
    json_logs: bool = True
    cors_origins_raw: str = "*"
    shutdown_timeout: float = 30.0
    key: str = ""

    site_roots_raw: str = "/srv/catalog,/srv/catalog/public"
    static_dir: str = ""
    protected_prefix: str = "/_hidden"
    protected_document: str = "index.html"
    legacy_prefix: str = "/public"
    api_prefix: str = "/api"
    default_documents_raw: str = "films.html,index.html"
    document_extension: str = ".html"

    database_path: str = "/srv/catalog/data/db.sqlite"

    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string.

        Returns:
            List of allowed origin URLs.
        """
        return _split_csv(self.cors_origins_raw)

    @computed_field
    @property
    def site_roots(self) -> list[str]:
        """Parse document roots from comma-separated string.

        Returns:
            Directory paths in priority order.
        """
        return _split_csv(self.site_roots_raw)

    @computed_field
    @property
    def default_documents(self) -> list[str]:
        """Parse landing document names from comma-separated string.

        Returns:
            Filenames tried in order for the site root.
        """
        return _split_csv(self.default_documents_raw)
