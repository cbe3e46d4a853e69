import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"

from datetime import date
from typing import Dict, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.auth import create_access_token
from app.core.interfaces import MovieCatalogInterface, TMDBResponse
from app.core.tmdb_service import get_movie_catalog
from app.db import Base, get_db
from app.main import app
from app.models import Match, MatchStatus, Movie, User, UserFavorite, WatchedMovie


class FakeCatalog(MovieCatalogInterface):
    """In-memory stand-in for TMDB"""

    def __init__(self):
        self.movies: Dict[int, dict] = {}
        self.requests = []

    def add(self, movie_id: int, title: str, **extra):
        self.movies[movie_id] = {"id": movie_id, "title": title, **extra}

    def _ok(self, data):
        return TMDBResponse(data, 200, True)

    def search_movies(self, query, page=1):
        self.requests.append(("search", query, page))
        results = [m for m in self.movies.values() if query.lower() in m["title"].lower()]
        return self._ok({"page": page, "results": results})

    def get_movie_details(self, movie_id):
        self.requests.append(("details", movie_id))
        if movie_id not in self.movies:
            return TMDBResponse({}, 404, False)
        return self._ok(self.movies[movie_id])

    def get_trending(self, time_window="week"):
        return self._ok({"results": list(self.movies.values())})

    def get_genres(self):
        return self._ok({"genres": [{"id": 18, "name": "Drama"}]})

    def discover_movies(self, filters=None):
        self.requests.append(("discover", filters))
        return self._ok({"results": list(self.movies.values())})

    def get_upcoming_movies(self, page=1):
        return TMDBResponse({}, 503, False)

    def get_popular_movies(self, page=1):
        self.requests.append(("popular", page))
        return self._ok({"page": page, "results": list(self.movies.values())})

    def get_movies_by_genre(self, genre_id, page=1):
        self.requests.append(("genre", genre_id, page))
        results = [m for m in self.movies.values() if genre_id in m.get("genre_ids", [])]
        return self._ok({"page": page, "results": results})


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def catalog():
    return FakeCatalog()


@pytest.fixture
def client(db_session, catalog):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_movie_catalog] = lambda: catalog
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def make_user(db, username: str) -> User:
    user = User(
        email=f"{username}@example.com",
        username=username,
        hashed_password="not-a-real-hash",
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user: User) -> Dict[str, str]:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


def make_movie(db, movie_id: int, title: str, rating: Optional[float] = None,
               genres=None, release_date: Optional[date] = None) -> Movie:
    movie = Movie(
        id=movie_id,
        tmdb_id=movie_id,
        title=title,
        rating=rating,
        genres=genres,
        release_date=release_date,
    )
    db.add(movie)
    db.commit()
    return movie


def make_match(db, user1: User, user2: User, status: MatchStatus = MatchStatus.ACCEPTED,
               match_id: Optional[str] = None) -> Match:
    match = Match(user1_id=user1.id, user2_id=user2.id, status=status)
    if match_id is not None:
        match.id = match_id
    db.add(match)
    db.commit()
    db.refresh(match)
    return match


def favorite(db, user: User, *movie_ids: int):
    for movie_id in movie_ids:
        db.add(UserFavorite(user_id=user.id, movie_id=movie_id))
    db.commit()


def mark_watched(db, match: Match, *movie_ids: int, rating: Optional[int] = None):
    for movie_id in movie_ids:
        db.add(WatchedMovie(match_id=match.id, movie_id=movie_id, rating=rating))
    db.commit()
