import json
import logging
from typing import List

from sqlalchemy import Column, Integer, String, Float, Date, Text, JSON
from app.db import Base

logger = logging.getLogger(__name__)

class Movie(Base):
    __tablename__ = "movies"
    # primary key mirrors the TMDB id
    id = Column(Integer, primary_key=True, autoincrement=False)
    tmdb_id = Column(Integer, unique=True, index=True, nullable=False)
    title = Column(String, index=True, nullable=False)
    description = Column(Text, nullable=True)
    poster_path = Column(String, nullable=True)
    backdrop_path = Column(String, nullable=True)
    release_date = Column(Date, nullable=True)
    rating = Column(Float, nullable=True)
    genres = Column(JSON, nullable=True)
    runtime = Column(Integer, nullable=True)

    @property
    def genre_names(self) -> List[str]:
        """Genre names whether stored as TMDB objects, plain strings or a JSON string"""
        raw = self.genres
        if not raw:
            return []
        if isinstance(raw, str):
            try:
                raw = json.loads(raw)
            except ValueError:
                logger.warning(f"Unparseable genres for movie {self.id}")
                return []
        if isinstance(raw, dict):
            raw = [raw]
        names = []
        for genre in raw:
            if isinstance(genre, dict):
                name = genre.get("name")
                if name:
                    names.append(name)
            elif genre:
                names.append(str(genre))
        return names
