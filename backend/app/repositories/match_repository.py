from typing import List, Optional
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session
from app.repositories.base_repository import BaseRepository
from app.models.match import Match, MatchStatus

class MatchRepository(BaseRepository[Match]):
    """Match lookups by participant"""
    
    def __init__(self, db: Session):
        super().__init__(Match, db)
    
    def get_for_user(self, user_id: int) -> List[Match]:
        """All matches the user takes part in, newest first"""
        return (
            self.db.query(Match)
            .filter(or_(Match.user1_id == user_id, Match.user2_id == user_id))
            .order_by(Match.created_at.desc(), Match.id)
            .all()
        )
    
    def get_between(self, user_a: int, user_b: int) -> Optional[Match]:
        """Match between two users in either direction"""
        return (
            self.db.query(Match)
            .filter(or_(
                and_(Match.user1_id == user_a, Match.user2_id == user_b),
                and_(Match.user1_id == user_b, Match.user2_id == user_a),
            ))
            .first()
        )
    
    def count_accepted_for_user(self, user_id: int) -> int:
        return (
            self.db.query(Match)
            .filter(
                or_(Match.user1_id == user_id, Match.user2_id == user_id),
                Match.status == MatchStatus.ACCEPTED,
            )
            .count()
        )
