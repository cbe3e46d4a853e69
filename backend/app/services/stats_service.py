import logging
from collections import Counter
from typing import Any, Dict, List
from sqlalchemy.orm import Session

from app.models.watched import WatchedMovie
from app.repositories.favorite_repository import FavoriteRepository
from app.repositories.match_repository import MatchRepository
from app.repositories.watched_repository import WatchedMovieRepository

logger = logging.getLogger(__name__)

TOP_GENRES_LIMIT = 5
RECENT_MOVIES_LIMIT = 5
STREAK_MAX_GAP_DAYS = 7


def compute_match_stats(watched: List[WatchedMovie]) -> Dict[str, Any]:
    """Aggregate the watch history of a match.

    The streak counts consecutive watches, newest first, while each gap to the
    previous one is at most a week.
    """
    ordered = sorted(
        watched,
        key=lambda w: w.watched_at.timestamp() if w.watched_at else 0,
        reverse=True,
    )
    total = len(ordered)
    average = sum(w.rating or 0 for w in ordered) / total if total else 0.0

    genre_counts = Counter()
    for w in ordered:
        for name in w.movie.genre_names:
            genre_counts[name] += 1
    top_genres = [
        {"name": name, "count": count}
        for name, count in genre_counts.most_common(TOP_GENRES_LIMIT)
    ]

    streak = 0
    last_date = None
    for w in ordered:
        if w.watched_at is None:
            break
        if last_date is None:
            streak = 1
        elif (last_date - w.watched_at).days <= STREAK_MAX_GAP_DAYS:
            streak += 1
        else:
            break
        last_date = w.watched_at

    return {
        "total_watched": total,
        "average_rating": round(average, 1),
        "top_genres": top_genres,
        "current_streak": streak,
        "recent_movies": ordered[:RECENT_MOVIES_LIMIT],
    }


class StatsService:
    """Read-only statistics for users and matches"""

    def __init__(self, db: Session):
        self.db = db
        self.watched_repo = WatchedMovieRepository(db)
        self.favorite_repo = FavoriteRepository(db)
        self.match_repo = MatchRepository(db)

    def get_match_stats(self, match_id: str) -> Dict[str, Any]:
        return compute_match_stats(self.watched_repo.get_for_match(match_id))

    def get_user_stats(self, user_id: int) -> Dict[str, int]:
        return {
            "total_favorites": self.favorite_repo.count(user_id=user_id),
            "total_matches": self.match_repo.count_accepted_for_user(user_id),
        }
