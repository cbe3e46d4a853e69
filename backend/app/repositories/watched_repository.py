from typing import List, Set
from sqlalchemy.orm import Session
from app.repositories.base_repository import BaseRepository
from app.models.watched import WatchedMovie

class WatchedMovieRepository(BaseRepository[WatchedMovie]):
    """Repository for movies watched together in a match"""
    
    def __init__(self, db: Session):
        super().__init__(WatchedMovie, db)
    
    def get_for_match(self, match_id: str) -> List[WatchedMovie]:
        """Watched movies of a match, most recent first"""
        return (
            self.db.query(WatchedMovie)
            .filter(WatchedMovie.match_id == match_id)
            .order_by(WatchedMovie.watched_at.desc(), WatchedMovie.id)
            .all()
        )
    
    def get_movie_ids(self, match_id: str) -> Set[int]:
        rows = self.db.query(WatchedMovie.movie_id).filter(WatchedMovie.match_id == match_id).all()
        return {row.movie_id for row in rows}
