import logging
from typing import Any, Dict, List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    MatchAccessDeniedException,
    MovieNotFoundException,
    WatchedMovieAlreadyExistsException,
    WatchedMovieNotFoundException,
)
from app.models.watched import WatchedMovie
from app.repositories.movie_repository import MovieRepository
from app.repositories.watched_repository import WatchedMovieRepository
from app.services.match_service import MatchService
from app.services.stats_service import StatsService

logger = logging.getLogger(__name__)


class WatchedService:
    """Movies a match has watched together; these leave the daily pick pool"""

    def __init__(self, db: Session):
        self.db = db
        self.watched_repo = WatchedMovieRepository(db)
        self.movie_repo = MovieRepository(db)
        self.match_service = MatchService(db)
        self.stats_service = StatsService(db)

    def get_watched(self, user_id: int, match_id: str) -> List[WatchedMovie]:
        match = self.match_service.get_accessible_match(user_id, match_id)
        return self.watched_repo.get_for_match(match.id)

    def add_watched(self, user_id: int, match_id: str, movie_id: int, rating: Optional[int] = None) -> WatchedMovie:
        match = self.match_service.get_accessible_match(user_id, match_id)

        if not self.movie_repo.get(movie_id):
            raise MovieNotFoundException()

        if self.watched_repo.exists(match_id=match.id, movie_id=movie_id):
            raise WatchedMovieAlreadyExistsException()

        try:
            watched = self.watched_repo.create({
                "match_id": match.id,
                "movie_id": movie_id,
                "rating": rating,
            })
        except IntegrityError:
            self.db.rollback()
            raise WatchedMovieAlreadyExistsException()

        logger.info(f"Movie {movie_id} marked as watched in match {match.id}")
        return watched

    def update_rating(self, user_id: int, watched_id: str, rating: int) -> WatchedMovie:
        watched = self._get_accessible_watched(user_id, watched_id)
        return self.watched_repo.update(watched, {"rating": rating})

    def remove_watched(self, user_id: int, watched_id: str) -> None:
        watched = self._get_accessible_watched(user_id, watched_id)
        movie_id, match_id = watched.movie_id, watched.match_id
        self.watched_repo.delete_obj(watched)
        logger.info(f"Movie {movie_id} unmarked as watched in match {match_id}")

    def get_match_watch_stats(self, user_id: int, match_id: str) -> Dict[str, Any]:
        match = self.match_service.get_accessible_match(user_id, match_id)
        return self.stats_service.get_match_stats(match.id)

    def _get_accessible_watched(self, user_id: int, watched_id: str) -> WatchedMovie:
        watched = self.watched_repo.get(watched_id)
        if not watched:
            raise WatchedMovieNotFoundException()
        if not watched.match.has_participant(user_id):
            raise MatchAccessDeniedException("You do not have access to this resource")
        return watched
