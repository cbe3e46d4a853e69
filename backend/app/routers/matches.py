from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.core.auth import get_current_user
from app.core.exceptions import handle_exception
from app.db import get_db
from app.models.match import Match
from app.schemas.match import CommonMoviesSort, MatchCreate, MatchResponse
from app.schemas.movie import MatchStats, MovieResponse
from app.schemas.user import UserSummary
from app.services.match_service import MatchService
from app.services.stats_service import StatsService

router = APIRouter(prefix="/matches", tags=["matches"])


def _to_response(match: Match, user_id: int) -> MatchResponse:
    response = MatchResponse.model_validate(match)
    response.partner = UserSummary.model_validate(match.partner_of(user_id))
    return response


@router.get("/", response_model=List[MatchResponse])
def get_matches(
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user),
):
    """All matches of the logged-in user, newest first."""
    matches = MatchService(db).get_matches(current_user_id)
    return [_to_response(m, current_user_id) for m in matches]


@router.post("/", response_model=MatchResponse, status_code=status.HTTP_201_CREATED)
def create_match(
    match_data: MatchCreate,
    response: Response,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user),
):
    """Request a match; reopening a rejected one answers 200 instead of 201."""
    try:
        match, created = MatchService(db).create_match(current_user_id, match_data.target_username)
        if not created:
            response.status_code = status.HTTP_200_OK
        return _to_response(match, current_user_id)
    except Exception as e:
        raise handle_exception(e)


@router.put("/{match_id}/accept", response_model=MatchResponse)
def accept_match(
    match_id: str,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user),
):
    try:
        match = MatchService(db).accept_match(current_user_id, match_id)
        return _to_response(match, current_user_id)
    except Exception as e:
        raise handle_exception(e)


@router.put("/{match_id}/reject")
def reject_match(
    match_id: str,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user),
):
    try:
        MatchService(db).reject_match(current_user_id, match_id)
        return {"message": "Match rejected"}
    except Exception as e:
        raise handle_exception(e)


@router.get("/{match_id}/common-movies", response_model=List[MovieResponse])
def get_common_movies(
    match_id: str,
    genre: Optional[str] = Query(None, description="Genre name"),
    min_rating: Optional[float] = Query(None, ge=0, le=10),
    sort_by: CommonMoviesSort = Query(CommonMoviesSort.ADDED_AT),
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user),
):
    """Unwatched favorites of both partners."""
    try:
        return MatchService(db).get_common_movies(
            current_user_id, match_id, genre=genre, min_rating=min_rating, sort_by=sort_by.value
        )
    except Exception as e:
        raise handle_exception(e)


@router.get("/{match_id}/random-movie", response_model=MovieResponse)
def get_random_movie(
    match_id: str,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user),
):
    """Movie of the day for the match, stable for the whole UTC day."""
    try:
        return MatchService(db).get_daily_movie(current_user_id, match_id)
    except Exception as e:
        raise handle_exception(e)


@router.get("/{match_id}/stats", response_model=MatchStats)
def get_match_stats(
    match_id: str,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user),
):
    try:
        match = MatchService(db).get_accessible_match(current_user_id, match_id)
        return MatchStats.from_stats(StatsService(db).get_match_stats(match.id))
    except Exception as e:
        raise handle_exception(e)
