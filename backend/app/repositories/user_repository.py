from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from app.repositories.base_repository import BaseRepository
from app.models.user import User

class UserRepository(BaseRepository[User]):
    """User repository with user-specific operations"""
    
    def __init__(self, db: Session):
        super().__init__(User, db)
    
    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        return self.filter_one_by(email=email)
    
    def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username"""
        return self.filter_one_by(username=username)
    
    def email_exists(self, email: str) -> bool:
        return self.exists(email=email)
    
    def username_exists(self, username: str) -> bool:
        return self.exists(username=username)
    
    def get_by_invitation_code(self, code: str) -> Optional[User]:
        return self.filter_one_by(invitation_code=code)
    
    def search(self, query: str, exclude_user_id: int, limit: int = 10) -> List[User]:
        """Case-insensitive substring match on username, email and names"""
        pattern = f"%{query}%"
        return (
            self.db.query(User)
            .filter(
                or_(
                    User.username.ilike(pattern),
                    User.email.ilike(pattern),
                    User.first_name.ilike(pattern),
                    User.last_name.ilike(pattern),
                ),
                User.id != exclude_user_id,
            )
            .order_by(User.username)
            .limit(limit)
            .all()
        )
    
    def create_user(self, email: str, username: str, hashed_password: str, first_name: Optional[str] = None, last_name: Optional[str] = None, invitation_code: Optional[str] = None) -> User:
        """Create new user"""
        return self.create({
            "email": email,
            "username": username,
            "first_name": first_name,
            "last_name": last_name,
            "hashed_password": hashed_password,
            "invitation_code": invitation_code,
            "is_active": True,
        })
    
    def update_user_fields(self, user: User, fields: dict) -> User:
        """Update user with given fields"""
        return self.update(user, fields)
