from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.auth import get_current_user
from app.core.exceptions import handle_exception
from app.core.interfaces import MovieCatalogInterface
from app.core.tmdb_service import get_movie_catalog
from app.db import get_db
from app.schemas.movie import FavoriteCheck, FavoriteCreate, FavoriteResponse
from app.services.favorite_service import FavoriteService
from app.services.movie_service import MovieService

router = APIRouter(prefix="/favorites", tags=["favorites"])


def get_favorite_service(
    db: Session = Depends(get_db),
    catalog: MovieCatalogInterface = Depends(get_movie_catalog),
) -> FavoriteService:
    return FavoriteService(db, MovieService(db, catalog))


@router.get("/", response_model=List[FavoriteResponse])
def get_favorites(
    service: FavoriteService = Depends(get_favorite_service),
    current_user_id: int = Depends(get_current_user),
):
    return service.get_favorites(current_user_id)


@router.post("/", response_model=FavoriteResponse, status_code=status.HTTP_201_CREATED)
def add_favorite(
    favorite_data: FavoriteCreate,
    service: FavoriteService = Depends(get_favorite_service),
    current_user_id: int = Depends(get_current_user),
):
    """Add a TMDB movie to the current user's favorites"""
    try:
        return service.add_favorite(current_user_id, favorite_data.movie_id)
    except Exception as e:
        raise handle_exception(e)


@router.delete("/{movie_id}")
def remove_favorite(
    movie_id: int,
    service: FavoriteService = Depends(get_favorite_service),
    current_user_id: int = Depends(get_current_user),
):
    service.remove_favorite(current_user_id, movie_id)
    return {"message": "Movie removed from favorites"}


@router.get("/check/{movie_id}", response_model=FavoriteCheck)
def check_favorite(
    movie_id: int,
    service: FavoriteService = Depends(get_favorite_service),
    current_user_id: int = Depends(get_current_user),
):
    return {"is_favorite": service.is_favorite(current_user_id, movie_id)}
