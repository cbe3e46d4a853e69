from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.auth import get_current_user
from app.core.exceptions import handle_exception
from app.db import get_db
from app.schemas.movie import (
    MatchStats, WatchedMovieCreate, WatchedMovieResponse, WatchedMovieUpdate
)
from app.services.watched_service import WatchedService

router = APIRouter(prefix="/watched", tags=["watched"])


@router.get("/", response_model=List[WatchedMovieResponse])
def get_watched_movies(
    match_id: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user),
):
    try:
        return WatchedService(db).get_watched(current_user_id, match_id)
    except Exception as e:
        raise handle_exception(e)


@router.post("/", response_model=WatchedMovieResponse, status_code=status.HTTP_201_CREATED)
def add_watched_movie(
    watched_data: WatchedMovieCreate,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user),
):
    """Mark a movie as watched by the match; it leaves the daily pick pool"""
    try:
        return WatchedService(db).add_watched(
            current_user_id, watched_data.match_id, watched_data.movie_id, watched_data.rating
        )
    except Exception as e:
        raise handle_exception(e)


@router.put("/{watched_id}", response_model=WatchedMovieResponse)
def update_watched_movie(
    watched_id: str,
    update: WatchedMovieUpdate,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user),
):
    try:
        return WatchedService(db).update_rating(current_user_id, watched_id, update.rating)
    except Exception as e:
        raise handle_exception(e)


@router.delete("/{watched_id}")
def remove_watched_movie(
    watched_id: str,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user),
):
    try:
        WatchedService(db).remove_watched(current_user_id, watched_id)
        return {"message": "Movie marked as not watched"}
    except Exception as e:
        raise handle_exception(e)


@router.get("/match/{match_id}/stats", response_model=MatchStats)
def get_match_watch_stats(
    match_id: str,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user),
):
    try:
        return MatchStats.from_stats(WatchedService(db).get_match_watch_stats(current_user_id, match_id))
    except Exception as e:
        raise handle_exception(e)
