import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session

from app.core.daily_pick import (
    build_candidate_ids,
    build_seed,
    filter_and_sort_movies,
    select_daily_movie_id,
    utc_today,
)
from app.core.exceptions import (
    InvalidMatchActionException,
    MatchAccessDeniedException,
    MatchAlreadyExistsException,
    MatchNotAcceptedException,
    MatchNotFoundException,
    MovieNotFoundException,
    NoUnwatchedMoviesException,
    UserNotFoundException,
)
from app.models.match import Match, MatchStatus
from app.models.movie import Movie
from app.repositories.favorite_repository import FavoriteRepository
from app.repositories.match_repository import MatchRepository
from app.repositories.movie_repository import MovieRepository
from app.repositories.user_repository import UserRepository
from app.repositories.watched_repository import WatchedMovieRepository

logger = logging.getLogger(__name__)


class MatchService:
    """Match lifecycle and the movies two matched users share."""

    def __init__(self, db: Session):
        self.db = db
        self.match_repo = MatchRepository(db)
        self.user_repo = UserRepository(db)
        self.favorite_repo = FavoriteRepository(db)
        self.watched_repo = WatchedMovieRepository(db)
        self.movie_repo = MovieRepository(db)

    def get_matches(self, user_id: int) -> List[Match]:
        return self.match_repo.get_for_user(user_id)

    def create_match(self, requester_id: int, target_username: str) -> Tuple[Match, bool]:
        """Send a match request, reviving a previously rejected one.

        Returns the match and whether a new row was created.
        """
        target = self.user_repo.get_by_username(target_username)
        if not target:
            raise UserNotFoundException()

        if target.id == requester_id:
            raise InvalidMatchActionException("You cannot match with yourself")

        existing = self.match_repo.get_between(requester_id, target.id)
        if existing:
            if existing.status != MatchStatus.REJECTED:
                raise MatchAlreadyExistsException()
            logger.info(f"Reopening rejected match {existing.id}")
            reopened = self.match_repo.update(existing, {
                "status": MatchStatus.PENDING,
                "user1_id": requester_id,
                "user2_id": target.id,
                "created_at": datetime.now(timezone.utc),
                "accepted_at": None,
            })
            return reopened, False

        match = self.match_repo.create({"user1_id": requester_id, "user2_id": target.id})
        logger.info(f"Match {match.id} requested by user {requester_id}")
        return match, True

    def accept_match(self, user_id: int, match_id: str) -> Match:
        match = self._get_match_or_raise(match_id)
        if match.user2_id != user_id:
            raise MatchAccessDeniedException("Only the invited user can accept this match")
        match.accept(datetime.now(timezone.utc))
        self.db.commit()
        self.db.refresh(match)
        logger.info(f"Match {match.id} accepted")
        return match

    def reject_match(self, user_id: int, match_id: str) -> Match:
        match = self._get_match_or_raise(match_id)
        if match.user2_id != user_id:
            raise MatchAccessDeniedException("Only the invited user can reject this match")
        match.reject()
        self.db.commit()
        self.db.refresh(match)
        logger.info(f"Match {match.id} rejected")
        return match

    def get_accessible_match(self, user_id: int, match_id: str) -> Match:
        """Load a match the caller takes part in."""
        match = self._get_match_or_raise(match_id)
        if not match.has_participant(user_id):
            raise MatchAccessDeniedException()
        return match

    def get_candidate_ids(self, match: Match) -> List[int]:
        """Unwatched favorites of either partner, ascending."""
        return build_candidate_ids(
            self.favorite_repo.get_movie_ids(match.user1_id),
            self.favorite_repo.get_movie_ids(match.user2_id),
            self.watched_repo.get_movie_ids(match.id),
        )

    def get_common_movies(
        self,
        user_id: int,
        match_id: str,
        genre: Optional[str] = None,
        min_rating: Optional[float] = None,
        sort_by: Optional[str] = None,
    ) -> List[Movie]:
        match = self._get_shared_match(user_id, match_id)
        movies = self.movie_repo.get_many(self.get_candidate_ids(match))
        return filter_and_sort_movies(movies, genre=genre, min_rating=min_rating, sort_by=sort_by)

    def get_daily_movie(self, user_id: int, match_id: str, now: Optional[datetime] = None) -> Movie:
        """Movie of the day for a match; the same for both partners all UTC day."""
        match = self._get_shared_match(user_id, match_id)
        candidate_ids = self.get_candidate_ids(match)
        if not candidate_ids:
            raise NoUnwatchedMoviesException()

        day = utc_today(now)
        movie_id = select_daily_movie_id(candidate_ids, match.id, day)
        logger.debug(
            f"Daily pick for match {match.id}: seed={build_seed(match.id, day)} "
            f"candidates={len(candidate_ids)} movie={movie_id}"
        )

        movie = self.movie_repo.get(movie_id)
        if not movie:
            raise MovieNotFoundException()
        return movie

    # ── Private helpers ──────────────────────────────────────────

    def _get_match_or_raise(self, match_id: str) -> Match:
        match = self.match_repo.get(match_id)
        if not match:
            raise MatchNotFoundException()
        return match

    def _get_shared_match(self, user_id: int, match_id: str) -> Match:
        match = self.get_accessible_match(user_id, match_id)
        if not match.is_accepted():
            raise MatchNotAcceptedException()
        return match
