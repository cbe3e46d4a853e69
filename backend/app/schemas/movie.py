from pydantic import BaseModel, Field
from typing import Optional, List, Any
from datetime import date, datetime


class MovieResponse(BaseModel):
    """Locally stored movie"""
    id: int
    tmdb_id: int
    title: str
    description: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_date: Optional[date] = None
    rating: Optional[float] = None
    genres: Optional[Any] = None
    runtime: Optional[int] = None

    class Config:
        from_attributes = True


class FavoriteCreate(BaseModel):
    movie_id: int = Field(..., gt=0, description="TMDB movie ID")


class FavoriteResponse(BaseModel):
    id: int
    user_id: int
    movie_id: int
    added_at: Optional[datetime] = None
    movie: MovieResponse

    class Config:
        from_attributes = True


class FavoriteCheck(BaseModel):
    is_favorite: bool


class WatchedMovieCreate(BaseModel):
    match_id: str = Field(..., min_length=1)
    movie_id: int = Field(..., gt=0)
    rating: Optional[int] = Field(default=None, ge=1, le=10)


class WatchedMovieUpdate(BaseModel):
    rating: int = Field(..., ge=1, le=10)


class WatchedMovieResponse(BaseModel):
    id: str
    match_id: str
    movie_id: int
    rating: Optional[int] = None
    watched_at: Optional[datetime] = None
    movie: MovieResponse

    class Config:
        from_attributes = True


class GenreCount(BaseModel):
    name: str
    count: int


class MatchStats(BaseModel):
    total_watched: int
    average_rating: float
    top_genres: List[GenreCount]
    current_streak: int
    recent_movies: List[WatchedMovieResponse]

    @classmethod
    def from_stats(cls, stats: dict) -> "MatchStats":
        recent = [WatchedMovieResponse.model_validate(w) for w in stats["recent_movies"]]
        return cls(**{**stats, "recent_movies": recent})
