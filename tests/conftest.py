"""Pytest configuration and fixtures."""

import sys
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from fastapi.testclient import TestClient

from catalog.app import create_app
from catalog.config import Settings
from catalog.site import ResolutionPipeline, SiteLayout


@dataclass
class SiteTree:
    """Temporary site with a repository root and its public directory."""

    root: Path
    public: Path

    def write(self, relative: str, content: str = "<html></html>", base: Path | None = None) -> Path:
        """Create a file below a base directory (the repository root by default)."""
        path = (base or self.root) / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path


@pytest.fixture
def site(tmp_path: Path) -> SiteTree:
    """Create an empty two-root site."""
    root = tmp_path / "site"
    public = root / "public"
    public.mkdir(parents=True)
    return SiteTree(root=root, public=public)


@pytest.fixture
def settings(tmp_path: Path, site: SiteTree) -> Settings:
    """Create test settings pointing at the temporary site."""
    return Settings(
        _env_file=None,
        host="127.0.0.1",
        port=3000,
        debug=True,
        site_roots_raw=f"{site.root},{site.public}",
        default_documents_raw="main.html,index.html",
        database_path=str(tmp_path / "data" / "db.sqlite"),
    )


@pytest.fixture
def layout(settings: Settings) -> SiteLayout:
    """Build the site layout from test settings."""
    return SiteLayout.from_settings(settings)


@pytest.fixture
def pipeline(layout: SiteLayout) -> ResolutionPipeline:
    """Create a resolution pipeline over the temporary site."""
    return ResolutionPipeline(layout)


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    """Create test client with configured app and a running lifespan."""
    app = create_app(settings)
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client
