from .base_repository import BaseRepository
from .user_repository import UserRepository
from .match_repository import MatchRepository
from .movie_repository import MovieRepository
from .favorite_repository import FavoriteRepository
from .watched_repository import WatchedMovieRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "MatchRepository",
    "MovieRepository",
    "FavoriteRepository",
    "WatchedMovieRepository",
]
