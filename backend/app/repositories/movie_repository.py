from datetime import date
from typing import Any, Dict, Iterable, List, Optional
from sqlalchemy.orm import Session
from app.repositories.base_repository import BaseRepository
from app.models.movie import Movie

class MovieRepository(BaseRepository[Movie]):
    """Local copy of catalog movies"""
    
    def __init__(self, db: Session):
        super().__init__(Movie, db)
    
    def get_many(self, movie_ids: Iterable[int]) -> List[Movie]:
        """Movies for the given ids, ascending by id"""
        ids = list(movie_ids)
        if not ids:
            return []
        return self.db.query(Movie).filter(Movie.id.in_(ids)).order_by(Movie.id).all()
    
    def create_from_tmdb(self, data: Dict[str, Any]) -> Movie:
        """Store a TMDB movie payload, keyed by its TMDB id"""
        return self.create({
            "id": data["id"],
            "tmdb_id": data["id"],
            "title": data.get("title") or "",
            "description": data.get("overview"),
            "poster_path": data.get("poster_path"),
            "backdrop_path": data.get("backdrop_path"),
            "release_date": _parse_release_date(data.get("release_date")),
            "rating": data.get("vote_average"),
            "genres": data.get("genres"),
            "runtime": data.get("runtime"),
        })


def _parse_release_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None
