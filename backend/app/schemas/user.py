from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional
from datetime import datetime

from app.schemas.movie import FavoriteResponse

class UserBase(BaseModel):
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=50)
    first_name: Optional[str] = None
    last_name: Optional[str] = None

class UserCreate(UserBase):
    password: str = Field(..., min_length=6)
    # code of an existing user; registering with it creates an accepted match
    invitation_code: Optional[str] = None

class UserLogin(BaseModel):
    email: EmailStr
    password: str

class UserResponse(UserBase):
    id: int
    is_active: bool
    bio: Optional[str] = None
    created_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True

class UserSummary(BaseModel):
    id: int
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    
    class Config:
        from_attributes = True

class UserStats(BaseModel):
    total_favorites: int
    total_matches: int

class Token(BaseModel):
    access_token: str
    token_type: str

class UserUpdate(BaseModel):
    email: Optional[EmailStr] = None
    username: Optional[str] = Field(None, min_length=3, max_length=50)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    bio: Optional[str] = None

class PasswordChange(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=6)

class AccountDelete(BaseModel):
    password: str

class UserProfile(UserResponse):
    """Own profile, favorites included"""
    favorites: List[FavoriteResponse] = []

class PublicProfile(UserSummary):
    bio: Optional[str] = None
    favorites: List[FavoriteResponse] = []

class UserSearchResult(UserSummary):
    email: EmailStr
    created_at: Optional[datetime] = None
    favorites_count: int = 0

class InvitationCode(BaseModel):
    invitation_code: str

class InvitationCodeResult(BaseModel):
    message: str
    user: UserSummary
