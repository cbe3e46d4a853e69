import uuid

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db import Base

class WatchedMovie(Base):
    __tablename__ = "watched_movies"
    __table_args__ = (
        UniqueConstraint("match_id", "movie_id", name="uq_match_watched_movie"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    match_id = Column(String(36), ForeignKey("matches.id"), nullable=False, index=True)
    movie_id = Column(Integer, ForeignKey("movies.id"), nullable=False)
    rating = Column(Integer, nullable=True)
    watched_at = Column(DateTime(timezone=True), server_default=func.now())

    match = relationship("Match", back_populates="watched_movies")
    movie = relationship("Movie")
