from app.db import Base
from .movie import Movie
from .user import User
from .match import Match, MatchStatus
from .favorite import UserFavorite
from .watched import WatchedMovie

__all__ = [
    'Movie', 'User', 'Match', 'MatchStatus', 'UserFavorite', 'WatchedMovie'
]
