"""HTTP behavior of page resolution."""

from fastapi.testclient import TestClient

from conftest import SiteTree


def test_protected_path_redirects_permanently(client: TestClient) -> None:
    """Direct access to the protected namespace is a 301 to the root."""
    response = client.get("/_hidden/index.html?x=1")
    assert response.status_code == 301
    assert response.headers["location"] == "/"


def test_legacy_redirect_location_keeps_query(client: TestClient) -> None:
    """The Location header carries the original query string."""
    response = client.get("/public/films?genre=drama&page=2")
    assert response.status_code == 301
    assert response.headers["location"] == "/films?genre=drama&page=2"


def test_html_suffix_redirect(client: TestClient) -> None:
    """Explicit .html URLs redirect to the clean URL."""
    response = client.get("/films.html")
    assert response.status_code == 301
    assert response.headers["location"] == "/films"


def test_clean_url_serves_document(site: SiteTree, client: TestClient) -> None:
    """A clean URL serves the matching document as HTML."""
    site.write("films.html", "<h1>Films</h1>", base=site.public)

    response = client.get("/films")
    assert response.status_code == 200
    assert response.text == "<h1>Films</h1>"
    assert response.headers["content-type"].startswith("text/html")


def test_asset_served_with_content_type(site: SiteTree, client: TestClient) -> None:
    """Static assets keep their natural content type."""
    site.write("css/site.css", "body{}", base=site.public)

    response = client.get("/css/site.css")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/css")


def test_root_serves_landing_document(site: SiteTree, client: TestClient) -> None:
    """The root serves the first default document."""
    site.write("index.html", "landing", base=site.public)

    response = client.get("/")
    assert response.status_code == 200
    assert response.text == "landing"


def test_root_serves_protected_index(site: SiteTree, client: TestClient) -> None:
    """The protected index is reachable at the root."""
    site.write("_hidden/index.html", "hidden home", base=site.public)

    assert client.get("/").text == "hidden home"
    assert client.get("/_hidden/").status_code == 301


def test_empty_site_root_is_diagnostic(client: TestClient) -> None:
    """An empty site answers 200 with plain text."""
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "No default" in response.text


def test_miss_is_plain_404(client: TestClient) -> None:
    """Unknown pages answer 404 Not found."""
    response = client.get("/does-not-exist")
    assert response.status_code == 404
    assert response.text == "Not found"


def test_head_request_serves_headers(site: SiteTree, client: TestClient) -> None:
    """HEAD is accepted for pages."""
    site.write("films.html", "<h1>Films</h1>")

    response = client.head("/films")
    assert response.status_code == 200


def test_non_get_page_request_is_rejected(site: SiteTree, client: TestClient) -> None:
    """Pages only accept GET and HEAD."""
    site.write("films.html")

    response = client.post("/films")
    assert response.status_code == 405
    assert response.headers["allow"] == "GET, HEAD"


def test_api_is_not_intercepted(site: SiteTree, client: TestClient) -> None:
    """API paths reach the routers even when a same-named page exists."""
    site.write("api/films.html", "page")

    response = client.get("/api/films")
    assert response.status_code == 200
    assert response.json() == []


def test_dotfile_is_plain_404(site: SiteTree, client: TestClient) -> None:
    """Dotfiles in the static directory are never exposed."""
    site.write(".env", "SECRET=1", base=site.public)

    response = client.get("/.env")
    assert response.status_code == 404
    assert response.text == "Not found"


def test_encoded_question_mark_stays_in_path(site: SiteTree, client: TestClient) -> None:
    """A percent-encoded ? is part of the path, not a query separator."""
    site.write("films.html", "<h1>Films</h1>")

    response = client.get("/films%3Fx")
    assert response.status_code == 404
    assert response.text == "Not found"


def test_bare_api_prefix_is_a_page_miss(client: TestClient) -> None:
    """/api alone is not routed to the API."""
    response = client.get("/api")
    assert response.status_code == 404
    assert response.text == "Not found"
