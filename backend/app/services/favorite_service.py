import logging
from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import FavoriteAlreadyExistsException
from app.models.favorite import UserFavorite
from app.repositories.favorite_repository import FavoriteRepository
from app.services.movie_service import MovieService

logger = logging.getLogger(__name__)


class FavoriteService:
    """Per-user favorite movies"""

    def __init__(self, db: Session, movie_service: MovieService):
        self.db = db
        self.favorite_repo = FavoriteRepository(db)
        self.movie_service = movie_service

    def get_favorites(self, user_id: int) -> List[UserFavorite]:
        return self.favorite_repo.get_user_favorites(user_id)

    def add_favorite(self, user_id: int, movie_id: int) -> UserFavorite:
        """Favorite a TMDB movie, importing it into the local catalog if needed"""
        movie = self.movie_service.get_or_import_movie(movie_id)

        if self.favorite_repo.exists(user_id=user_id, movie_id=movie.id):
            raise FavoriteAlreadyExistsException()

        try:
            favorite = self.favorite_repo.create({"user_id": user_id, "movie_id": movie.id})
        except IntegrityError:
            self.db.rollback()
            raise FavoriteAlreadyExistsException()

        logger.info(f"User {user_id} favorited movie {movie.id}")
        return favorite

    def remove_favorite(self, user_id: int, movie_id: int) -> int:
        return self.favorite_repo.remove(user_id, movie_id)

    def is_favorite(self, user_id: int, movie_id: int) -> bool:
        return self.favorite_repo.exists(user_id=user_id, movie_id=movie_id)
