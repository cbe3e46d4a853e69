import logging
import secrets
from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy.orm import Session
from app.schemas.user import UserCreate, UserUpdate
from app.core.auth import get_password_hash, verify_password
from app.core.exceptions import (
    InvalidCredentialsException,
    InvitationCodeNotFoundException,
    UserAlreadyExistsException,
    UserNotFoundException,
)
from app.repositories.favorite_repository import FavoriteRepository
from app.repositories.match_repository import MatchRepository
from app.repositories.user_repository import UserRepository
from app.models.favorite import UserFavorite
from app.models.match import MatchStatus
from app.models.user import User

logger = logging.getLogger(__name__)

class UserService:
    """Registration, credentials, profiles and invitation codes"""
    
    def __init__(self, db: Session):
        self.db = db
        self.user_repository = UserRepository(db)
        self.match_repository = MatchRepository(db)
        self.favorite_repository = FavoriteRepository(db)
    
    def get_user_by_id(self, user_id: int) -> User:
        user = self.user_repository.get(user_id)
        if not user:
            raise UserNotFoundException()
        return user
    
    def get_user_by_username(self, username: str) -> User:
        user = self.user_repository.get_by_username(username)
        if not user:
            raise UserNotFoundException()
        return user
    
    def get_favorites(self, user_id: int) -> List[UserFavorite]:
        return self.favorite_repository.get_user_favorites(user_id)
    
    def create_user(self, user_data: UserCreate) -> User:
        """Create a new user, auto-matching with the owner of ``invitation_code``"""
        logger.info(f"Creating user with email: {user_data.email}")
        
        if self.user_repository.email_exists(user_data.email):
            raise UserAlreadyExistsException("Email already registered")
        
        if self.user_repository.username_exists(user_data.username):
            raise UserAlreadyExistsException("Username already taken")
        
        try:
            user = self.user_repository.create_user(
                email=user_data.email,
                username=user_data.username,
                hashed_password=get_password_hash(user_data.password),
                first_name=user_data.first_name,
                last_name=user_data.last_name,
                invitation_code=self._new_invitation_code(),
            )
        except Exception as e:
            logger.error(f"Error creating user: {str(e)}")
            self.db.rollback()
            raise
        
        logger.info(f"User created successfully with ID: {user.id}")
        
        if user_data.invitation_code:
            self._match_with_inviter(user, user_data.invitation_code)
        
        return user
    
    def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """Authenticate user with email and password"""
        user = self.user_repository.get_by_email(email)
        if not user:
            return None
        
        if not verify_password(password, user.hashed_password):
            return None
        
        return user
    
    def update_user(self, user_id: int, update_data: UserUpdate) -> User:
        """Update profile fields; username and email must stay unique"""
        user = self.get_user_by_id(user_id)
        fields_to_update = {}
        
        if update_data.username and update_data.username != user.username:
            if self.user_repository.username_exists(update_data.username):
                raise UserAlreadyExistsException("Username already taken")
            fields_to_update["username"] = update_data.username
        
        if update_data.email and update_data.email != user.email:
            if self.user_repository.email_exists(update_data.email):
                raise UserAlreadyExistsException("Email already registered")
            fields_to_update["email"] = update_data.email
        
        for field in ("first_name", "last_name", "bio"):
            value = getattr(update_data, field)
            if value is not None:
                fields_to_update[field] = value
        
        if not fields_to_update:
            return user
        
        logger.info(f"Updating profile of user {user_id}: {sorted(fields_to_update)}")
        return self.user_repository.update_user_fields(user, fields_to_update)
    
    def change_password(self, user_id: int, current_password: str, new_password: str) -> bool:
        """Change user password after verifying current password"""
        user = self.get_user_by_id(user_id)
        
        if not verify_password(current_password, user.hashed_password):
            raise InvalidCredentialsException("Current password is incorrect")
        
        self.user_repository.update_user_fields(user, {"hashed_password": get_password_hash(new_password)})
        logger.info(f"Password changed for user {user_id}")
        return True
    
    def delete_account(self, user_id: int, password: str) -> None:
        """Delete the user with their matches, watched history and favorites"""
        user = self.get_user_by_id(user_id)
        
        if not verify_password(password, user.hashed_password):
            raise InvalidCredentialsException("Incorrect password")
        
        for match in self.match_repository.get_for_user(user_id):
            self.db.delete(match)
        self.user_repository.delete_obj(user)
        logger.info(f"Deleted account of user {user_id}")
    
    def search_users(self, query: str, user_id: int, limit: int = 10) -> List[User]:
        return self.user_repository.search(query.strip(), exclude_user_id=user_id, limit=limit)
    
    def get_invitation_code(self, user_id: int) -> str:
        user = self.get_user_by_id(user_id)
        if not user.invitation_code:
            raise InvitationCodeNotFoundException("You do not have an invitation code")
        return user.invitation_code
    
    def validate_invitation_code(self, code: str) -> User:
        """Owner of an invitation code"""
        user = self.user_repository.get_by_invitation_code(code.strip().upper())
        if not user:
            raise InvitationCodeNotFoundException("Invalid invitation code")
        return user
    
    # ── Private helpers ──────────────────────────────────────────
    
    def _new_invitation_code(self) -> str:
        code = secrets.token_hex(8).upper()
        while self.user_repository.get_by_invitation_code(code):
            code = secrets.token_hex(8).upper()
        return code
    
    def _match_with_inviter(self, user: User, code: str) -> None:
        inviter = self.user_repository.get_by_invitation_code(code.strip().upper())
        if not inviter or inviter.id == user.id:
            logger.warning(f"Ignoring unknown invitation code for user {user.id}")
            return
        
        match = self.match_repository.create({
            "user1_id": inviter.id,
            "user2_id": user.id,
            "status": MatchStatus.ACCEPTED,
            "accepted_at": datetime.now(timezone.utc),
        })
        logger.info(f"Match {match.id} created from invitation of user {inviter.id}")
