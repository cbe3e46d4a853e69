import pytest
import requests

from app.core.interfaces import TMDBConfig, TMDBError
from app.core.services import MovieCatalog
from app.core.tmdb_client import TMDBClient


class FakeResponse:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self._payload = payload or {}
        self.text = str(self._payload)

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.headers = {}
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        if self.error:
            raise self.error
        return self.response


def _client(session, **config):
    return TMDBClient(TMDBConfig(api_key="key", **config), session=session)


def test_successful_request_adds_key_and_language():
    session = FakeSession(FakeResponse(200, {"results": []}))
    response = _client(session, language="es-ES", timeout=5).make_request("/search/movie", {"query": "x"})

    assert response.success
    url, params, timeout = session.calls[0]
    assert url == "https://api.themoviedb.org/3/search/movie"
    assert params == {"query": "x", "api_key": "key", "language": "es-ES"}
    assert timeout == 5
    assert session.headers["accept"] == "application/json"


def test_error_status_is_not_success():
    session = FakeSession(FakeResponse(401, {"status_message": "Invalid API key"}))
    response = _client(session).make_request("movie/1")
    assert not response.success
    assert response.status_code == 401


def test_network_failure_raises():
    session = FakeSession(error=requests.exceptions.ConnectionError("down"))
    with pytest.raises(TMDBError):
        _client(session).make_request("movie/1")


def test_catalog_endpoints():
    session = FakeSession(FakeResponse(200, {}))
    catalog = MovieCatalog(_client(session, region="ES"))

    catalog.get_movie_details(603)
    catalog.get_movies_by_genre(18, page=2)
    catalog.get_upcoming_movies()

    details, genre, upcoming = session.calls
    assert details[0].endswith("/movie/603")
    assert details[1]["append_to_response"] == "credits,videos"
    assert genre[0].endswith("/discover/movie")
    assert genre[1]["with_genres"] == 18 and genre[1]["sort_by"] == "popularity.desc"
    assert upcoming[1]["region"] == "ES"


def test_movie_routes_surface_catalog_failures(client, catalog):
    catalog.add(603, "The Matrix")
    assert client.get("/movies/search", params={"query": "matrix"}).json()["results"][0]["id"] == 603
    assert client.get("/movies/603").json()["title"] == "The Matrix"
    assert client.get("/movies/1").status_code == 404

    upcoming = client.get("/movies/upcoming")
    assert upcoming.status_code == 502
    assert upcoming.json()["detail"]["error_code"] == "CATALOG_UNAVAILABLE"


def test_popular_movies_sorted_by_popularity():
    session = FakeSession(FakeResponse(200, {}))
    MovieCatalog(_client(session)).get_popular_movies(page=3)

    url, params, _ = session.calls[0]
    assert url.endswith("/discover/movie")
    assert params["page"] == 3 and params["sort_by"] == "popularity.desc"


def test_popular_and_genre_routes(client, catalog):
    catalog.add(603, "The Matrix", genre_ids=[28, 878])
    catalog.add(13, "Forrest Gump", genre_ids=[18])

    popular = client.get("/movies/popular", params={"page": 2})
    assert popular.status_code == 200
    assert {m["id"] for m in popular.json()["results"]} == {603, 13}

    drama = client.get("/movies/genre/18")
    assert drama.status_code == 200
    assert [m["id"] for m in drama.json()["results"]] == [13]

    assert ("popular", 2) in catalog.requests
    assert ("genre", 18, 1) in catalog.requests
