from typing import List, Set
from sqlalchemy.orm import Session
from app.repositories.base_repository import BaseRepository
from app.models.favorite import UserFavorite

class FavoriteRepository(BaseRepository[UserFavorite]):
    """Repository for user favorites"""
    
    def __init__(self, db: Session):
        super().__init__(UserFavorite, db)
    
    def get_user_favorites(self, user_id: int) -> List[UserFavorite]:
        """Favorites of a user, newest first"""
        return (
            self.db.query(UserFavorite)
            .filter(UserFavorite.user_id == user_id)
            .order_by(UserFavorite.added_at.desc(), UserFavorite.id.desc())
            .all()
        )
    
    def get_movie_ids(self, user_id: int) -> Set[int]:
        rows = self.db.query(UserFavorite.movie_id).filter(UserFavorite.user_id == user_id).all()
        return {row.movie_id for row in rows}
    
    def remove(self, user_id: int, movie_id: int) -> int:
        deleted = (
            self.db.query(UserFavorite)
            .filter(UserFavorite.user_id == user_id, UserFavorite.movie_id == movie_id)
            .delete()
        )
        self.db.commit()
        return deleted
