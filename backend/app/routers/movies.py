from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.exceptions import handle_exception
from app.core.interfaces import MovieCatalogInterface
from app.core.tmdb_service import get_movie_catalog
from app.db import get_db
from app.schemas.movie import MovieResponse
from app.services.movie_service import MovieService

router = APIRouter(prefix="/movies", tags=["movies"])


def get_movie_service(
    db: Session = Depends(get_db),
    catalog: MovieCatalogInterface = Depends(get_movie_catalog),
) -> MovieService:
    return MovieService(db, catalog)


@router.get("/search")
def search_movies(
    query: str = Query(..., min_length=1),
    page: int = Query(1, ge=1, description="Page number"),
    service: MovieService = Depends(get_movie_service),
):
    try:
        return service.search_movies(query, page)
    except Exception as e:
        raise handle_exception(e)


@router.get("/trending")
def get_trending(
    time_window: str = Query("week", pattern="^(day|week)$"),
    service: MovieService = Depends(get_movie_service),
):
    try:
        return service.get_trending(time_window)
    except Exception as e:
        raise handle_exception(e)


@router.get("/popular")
def get_popular_movies(
    page: int = Query(1, ge=1),
    service: MovieService = Depends(get_movie_service),
):
    try:
        return service.get_popular_movies(page)
    except Exception as e:
        raise handle_exception(e)


@router.get("/upcoming")
def get_upcoming_movies(
    page: int = Query(1, ge=1),
    service: MovieService = Depends(get_movie_service),
):
    try:
        return service.get_upcoming_movies(page)
    except Exception as e:
        raise handle_exception(e)


@router.get("/genres")
def get_genres(service: MovieService = Depends(get_movie_service)):
    try:
        return service.get_genres()
    except Exception as e:
        raise handle_exception(e)


@router.get("/genre/{genre_id}")
def get_movies_by_genre(
    genre_id: int,
    page: int = Query(1, ge=1),
    service: MovieService = Depends(get_movie_service),
):
    try:
        return service.get_movies_by_genre(genre_id, page)
    except Exception as e:
        raise handle_exception(e)


@router.get("/local/{movie_id}", response_model=MovieResponse)
def get_local_movie(movie_id: int, service: MovieService = Depends(get_movie_service)):
    """Movie as stored locally after being favorited"""
    try:
        return service.get_local_movie(movie_id)
    except Exception as e:
        raise handle_exception(e)


@router.get("/{tmdb_id}")
def get_movie_details(tmdb_id: int, service: MovieService = Depends(get_movie_service)):
    try:
        return service.get_movie_details(tmdb_id)
    except Exception as e:
        raise handle_exception(e)
