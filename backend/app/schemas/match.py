from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from app.models.match import MatchStatus
from app.schemas.user import UserSummary


class MatchCreate(BaseModel):
    target_username: str = Field(..., min_length=1)


class MatchResponse(BaseModel):
    id: str
    user1_id: int
    user2_id: int
    status: MatchStatus
    created_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    user1: UserSummary
    user2: UserSummary
    partner: Optional[UserSummary] = None

    class Config:
        from_attributes = True


class CommonMoviesSort(str, Enum):
    ADDED_AT = "added_at"
    RATING = "rating"
    RELEASE_DATE = "release_date"
    TITLE = "title"
