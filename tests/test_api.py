"""Catalog API endpoint tests."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from catalog.app import create_app
from catalog.config import Settings
from catalog.store import DatabaseError, repositories


def create_film(client: TestClient, title: str = "Stalker", **extra: str) -> dict:
    response = client.post("/api/films", json={"title": title, **extra})
    assert response.status_code == 201
    return response.json()


class TestFilms:
    """Film CRUD endpoints."""

    def test_create_and_get(self, client: TestClient) -> None:
        """A created film can be fetched by id."""
        film = create_film(client, description="Zone", url="https://example.org/stalker")

        response = client.get(f"/api/films/{film['id']}")
        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Stalker"
        assert data["description"] == "Zone"
        assert data["url"] == "https://example.org/stalker"

    def test_list_newest_first(self, client: TestClient) -> None:
        """Films are listed newest first."""
        create_film(client, "First")
        create_film(client, "Second")

        titles = [film["title"] for film in client.get("/api/films").json()]
        assert titles == ["Second", "First"]

    def test_title_required(self, client: TestClient) -> None:
        """Creating a film without a title is rejected."""
        response = client.post("/api/films", json={"description": "no title"})
        assert response.status_code == 422

    def test_get_missing(self, client: TestClient) -> None:
        """Unknown ids answer 404."""
        response = client.get("/api/films/999")
        assert response.status_code == 404
        assert response.json() == {"detail": "Not found"}

    def test_partial_update(self, client: TestClient) -> None:
        """Only the given fields change."""
        film = create_film(client, description="old")

        response = client.put(f"/api/films/{film['id']}", json={"description": "new"})
        assert response.status_code == 200
        assert response.json()["title"] == "Stalker"
        assert response.json()["description"] == "new"

    def test_update_missing(self, client: TestClient) -> None:
        """Updating an unknown film answers 404."""
        response = client.put("/api/films/999", json={"title": "x"})
        assert response.status_code == 404

    def test_delete(self, client: TestClient) -> None:
        """Deleted films are gone."""
        film = create_film(client)

        response = client.delete(f"/api/films/{film['id']}")
        assert response.json() == {"success": True}
        assert client.get(f"/api/films/{film['id']}").status_code == 404


def test_series_create_and_list(client: TestClient) -> None:
    """Series support list and insert."""
    response = client.post("/api/series", json={"title": "Twin Peaks"})
    assert response.status_code == 201

    series = client.get("/api/series").json()
    assert [item["title"] for item in series] == ["Twin Peaks"]


class TestRatings:
    """Rating upsert and lookup."""

    def test_upsert_replaces_score(self, client: TestClient) -> None:
        """Rating the same film twice keeps one row with the latest score."""
        client.post("/api/ratings", json={"movie_id": 1, "user_id": 2, "score": 5})
        response = client.post("/api/ratings", json={"movie_id": 1, "user_id": 2, "score": 9})
        assert response.status_code == 201
        assert response.json()["score"] == 9

        ratings = client.get("/api/ratings", params={"movie_id": 1}).json()
        assert len(ratings) == 1

    def test_both_filters_return_single_rating(self, client: TestClient) -> None:
        """With film and user given, one object or null is returned."""
        client.post("/api/ratings", json={"movie_id": 1, "user_id": 2, "score": 7})

        found = client.get("/api/ratings", params={"movie_id": 1, "user_id": 2}).json()
        assert found["score"] == 7

        missing = client.get("/api/ratings", params={"movie_id": 1, "user_id": 3})
        assert missing.status_code == 200
        assert missing.json() is None

    def test_filter_by_user(self, client: TestClient) -> None:
        """Filtering by user lists every film the user rated."""
        client.post("/api/ratings", json={"movie_id": 1, "user_id": 2, "score": 7})
        client.post("/api/ratings", json={"movie_id": 3, "user_id": 2, "score": 4})
        client.post("/api/ratings", json={"movie_id": 3, "user_id": 5, "score": 4})

        ratings = client.get("/api/ratings", params={"user_id": 2}).json()
        assert [rating["movie_id"] for rating in ratings] == [1, 3]

    def test_score_out_of_range(self, client: TestClient) -> None:
        """Scores outside 1 to 10 are rejected."""
        response = client.post("/api/ratings", json={"movie_id": 1, "user_id": 2, "score": 0})
        assert response.status_code == 422


class TestLogin:
    """Demo login stub."""

    def test_unknown_user_is_registered(self, client: TestClient) -> None:
        """First login creates the account."""
        response = client.post("/api/login", json={"username": "ana", "password": "pw"})
        assert response.status_code == 200
        data = response.json()
        assert data["token"] == "demo-token"
        assert data["user"]["username"] == "ana"
        assert "password" not in data["user"]

    def test_wrong_password(self, client: TestClient) -> None:
        """A known user with the wrong password is rejected."""
        client.post("/api/login", json={"username": "ana", "password": "pw"})

        response = client.post("/api/login", json={"username": "ana", "password": "nope"})
        assert response.status_code == 401

    def test_returning_user(self, client: TestClient) -> None:
        """The same credentials log into the same account."""
        first = client.post("/api/login", json={"username": "ana", "password": "pw"}).json()
        second = client.post("/api/login", json={"username": "ana", "password": "pw"}).json()
        assert first["user"]["id"] == second["user"]["id"]


def test_library_per_user(client: TestClient) -> None:
    """Library entries are listed for their owner only."""
    client.post("/api/library", json={"user_id": 1, "item_type": "film", "item_id": 4})
    client.post("/api/library", json={"user_id": 2, "item_type": "series", "item_id": 5})

    default_user = client.get("/api/library").json()
    assert [entry["item_id"] for entry in default_user] == [4]

    other = client.get("/api/library", params={"user_id": 2}).json()
    assert other[0]["item_type"] == "series"


def test_friends_include_username(client: TestClient) -> None:
    """Friend links carry the friend's username."""
    ana = client.post("/api/login", json={"username": "ana", "password": "pw"}).json()["user"]
    ben = client.post("/api/login", json={"username": "ben", "password": "pw"}).json()["user"]

    response = client.post(
        "/api/friends",
        json={"user_id": ana["id"], "friend_user_id": ben["id"]},
    )
    assert response.status_code == 201

    friends = client.get("/api/friends", params={"user_id": ana["id"]}).json()
    assert friends[0]["friend_username"] == "ben"
    assert friends[0]["status"] == "accepted"


def test_admin_open_without_key(client: TestClient) -> None:
    """Without a configured key the admin endpoint is open."""
    response = client.post("/api/admin/films", json={"title": "Solaris"})
    assert response.status_code == 201


@pytest.fixture
def keyed_client(settings: Settings) -> Iterator[TestClient]:
    """Client for an app with an admin key configured."""
    app = create_app(settings.model_copy(update={"key": "secret"}))
    with TestClient(app) as test_client:
        yield test_client


class TestAdminKey:
    """Admin endpoints with a configured key."""

    def test_missing_key(self, keyed_client: TestClient) -> None:
        """Requests without the header are rejected."""
        response = keyed_client.post("/api/admin/films", json={"title": "Solaris"})
        assert response.status_code == 401

    def test_wrong_key(self, keyed_client: TestClient) -> None:
        """Requests with the wrong key are rejected."""
        response = keyed_client.post(
            "/api/admin/films",
            json={"title": "Solaris"},
            headers={"X-API-Key": "wrong"},
        )
        assert response.status_code == 401

    def test_valid_key(self, keyed_client: TestClient) -> None:
        """The right key is accepted and the film is stored."""
        response = keyed_client.post(
            "/api/admin/films",
            json={"title": "Solaris"},
            headers={"X-API-Key": "secret"},
        )
        assert response.status_code == 201
        assert keyed_client.get("/api/films").json()[0]["title"] == "Solaris"

    def test_public_api_needs_no_key(self, keyed_client: TestClient) -> None:
        """The key only guards admin paths."""
        assert keyed_client.get("/api/films").status_code == 200


def test_database_error_is_500(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    """Storage failures surface as a 500 with a generic message."""

    def broken(*args: object, **kwargs: object) -> None:
        raise DatabaseError("disk I/O error", "fetch_all")

    monkeypatch.setattr(repositories, "list_films", broken)

    response = client.get("/api/films")
    assert response.status_code == 500
    assert response.json() == {"detail": "Database error"}
