import enum
import uuid

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db import Base


class MatchStatus(enum.Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


def _new_match_id() -> str:
    return str(uuid.uuid4())


class Match(Base):
    __tablename__ = "matches"

    id = Column(String(36), primary_key=True, default=_new_match_id)
    user1_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    user2_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(Enum(MatchStatus), default=MatchStatus.PENDING, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    accepted_at = Column(DateTime(timezone=True), nullable=True)

    user1 = relationship("User", foreign_keys=[user1_id])
    user2 = relationship("User", foreign_keys=[user2_id])
    watched_movies = relationship("WatchedMovie", back_populates="match", cascade="all, delete-orphan")

    def has_participant(self, user_id: int) -> bool:
        return user_id in (self.user1_id, self.user2_id)

    def partner_of(self, user_id: int):
        return self.user2 if self.user1_id == user_id else self.user1

    def is_accepted(self) -> bool:
        return self.status == MatchStatus.ACCEPTED

    def accept(self, accepted_at):
        self.status = MatchStatus.ACCEPTED
        self.accepted_at = accepted_at

    def reject(self):
        self.status = MatchStatus.REJECTED
