import logging
from typing import Any, Dict, List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import CatalogServiceException, MovieNotFoundException
from app.core.interfaces import MovieCatalogInterface, TMDBError, TMDBResponse
from app.models.movie import Movie
from app.repositories.movie_repository import MovieRepository

logger = logging.getLogger(__name__)

class MovieService:
    """Service for movie operations with TMDB integration"""
    
    def __init__(self, db: Session, catalog: MovieCatalogInterface):
        self.db = db
        self.catalog = catalog
        self.movie_repo = MovieRepository(db)
    
    def search_movies(self, query: str, page: int = 1) -> Dict[str, Any]:
        return self._unwrap(lambda: self.catalog.search_movies(query, page), "Error searching movies")
    
    def get_movie_details(self, movie_id: int) -> Dict[str, Any]:
        response = self._call(lambda: self.catalog.get_movie_details(movie_id), "Error getting movie details")
        if response.status_code == 404:
            raise MovieNotFoundException()
        if not response.success:
            raise CatalogServiceException("Error getting movie details")
        return response.data
    
    def get_trending(self, time_window: str = "week") -> Dict[str, Any]:
        return self._unwrap(lambda: self.catalog.get_trending(time_window), "Error getting trending movies")
    
    def get_genres(self) -> List[Dict[str, Any]]:
        data = self._unwrap(self.catalog.get_genres, "Error getting genres")
        return data.get("genres", [])
    
    def get_popular_movies(self, page: int = 1) -> Dict[str, Any]:
        return self._unwrap(lambda: self.catalog.get_popular_movies(page), "Error getting popular movies")
    
    def get_upcoming_movies(self, page: int = 1) -> Dict[str, Any]:
        return self._unwrap(lambda: self.catalog.get_upcoming_movies(page), "Error getting upcoming movies")
    
    def get_movies_by_genre(self, genre_id: int, page: int = 1) -> Dict[str, Any]:
        return self._unwrap(
            lambda: self.catalog.get_movies_by_genre(genre_id, page),
            "Error discovering movies",
        )
    
    def get_local_movie(self, movie_id: int) -> Movie:
        movie = self.movie_repo.get(movie_id)
        if not movie:
            raise MovieNotFoundException()
        return movie
    
    def get_or_import_movie(self, tmdb_id: int) -> Movie:
        """Return the stored movie, fetching it from TMDB the first time"""
        movie = self.movie_repo.filter_one_by(tmdb_id=tmdb_id)
        if movie:
            return movie
        
        data = self.get_movie_details(tmdb_id)
        try:
            movie = self.movie_repo.create_from_tmdb(data)
        except IntegrityError:
            # imported concurrently by another request
            self.db.rollback()
            movie = self.movie_repo.filter_one_by(tmdb_id=tmdb_id)
        logger.info(f"Imported movie {tmdb_id} from TMDB")
        return movie
    
    # ── Private helpers ──────────────────────────────────────────
    
    def _call(self, request, error_message: str) -> TMDBResponse:
        try:
            return request()
        except TMDBError as e:
            logger.error(f"{error_message}: {e.message}")
            raise CatalogServiceException(error_message)
    
    def _unwrap(self, request, error_message: str) -> Dict[str, Any]:
        response = self._call(request, error_message)
        if not response.success:
            raise CatalogServiceException(error_message)
        return response.data
