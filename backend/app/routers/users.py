from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.auth import get_current_user
from app.core.exceptions import handle_exception
from app.db import get_db
from app.models.user import User
from app.schemas.movie import FavoriteResponse
from app.schemas.user import (
    AccountDelete,
    PasswordChange,
    PublicProfile,
    UserProfile,
    UserResponse,
    UserSearchResult,
    UserUpdate,
)
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


def _with_favorites(schema, user: User, service: UserService):
    profile = schema.model_validate(user)
    profile.favorites = [FavoriteResponse.model_validate(f) for f in service.get_favorites(user.id)]
    return profile


@router.get("/profile", response_model=UserProfile)
def get_profile(
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user),
):
    try:
        service = UserService(db)
        return _with_favorites(UserProfile, service.get_user_by_id(current_user_id), service)
    except Exception as e:
        raise handle_exception(e)


@router.put("/profile", response_model=UserResponse)
def update_profile(
    update_data: UserUpdate,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user),
):
    try:
        return UserService(db).update_user(current_user_id, update_data)
    except Exception as e:
        raise handle_exception(e)


@router.post("/change-password")
def change_password(
    payload: PasswordChange,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user),
):
    try:
        UserService(db).change_password(current_user_id, payload.current_password, payload.new_password)
        return {"message": "Password updated"}
    except Exception as e:
        raise handle_exception(e)


@router.get("/search", response_model=List[UserSearchResult])
def search_users(
    q: str = Query(..., min_length=1),
    limit: int = Query(10, ge=1, le=50),
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user),
):
    """Other users whose username, email or name contains ``q``"""
    results = []
    for user in UserService(db).search_users(q, current_user_id, limit):
        result = UserSearchResult.model_validate(user)
        result.favorites_count = len(user.favorites)
        results.append(result)
    return results


@router.get("/profile/{username}", response_model=PublicProfile)
def get_public_profile(
    username: str,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user),
):
    try:
        service = UserService(db)
        return _with_favorites(PublicProfile, service.get_user_by_username(username), service)
    except Exception as e:
        raise handle_exception(e)


@router.delete("/account")
def delete_account(
    payload: AccountDelete,
    db: Session = Depends(get_db),
    current_user_id: int = Depends(get_current_user),
):
    try:
        UserService(db).delete_account(current_user_id, payload.password)
        return {"message": "Account deleted"}
    except Exception as e:
        raise handle_exception(e)
