from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.db import get_db
from app.schemas.user import (
    InvitationCode,
    InvitationCodeResult,
    Token,
    UserCreate,
    UserLogin,
    UserResponse,
    UserStats,
    UserSummary,
)
from app.services.user_service import UserService
from app.services.stats_service import StatsService
from app.core.auth import create_access_token, get_current_user
from app.core.exceptions import handle_exception

router = APIRouter(prefix="/auth", tags=["authentication"])

@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user"""
    try:
        return UserService(db).create_user(user_data)
    except Exception as e:
        raise handle_exception(e)

@router.post("/login", response_model=Token)
def login(user_credentials: UserLogin, db: Session = Depends(get_db)):
    """Login user and return access token"""
    try:
        user = UserService(db).authenticate_user(user_credentials.email, user_credentials.password)
        
        if not user:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect email or password",
                headers={"WWW-Authenticate": "Bearer"},
            )
        
        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Inactive user"
            )
        
        access_token = create_access_token(data={"sub": str(user.id)})
        return {"access_token": access_token, "token_type": "bearer"}
    except Exception as e:
        raise handle_exception(e)

@router.get("/me", response_model=UserResponse)
def get_current_user_info(current_user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    """Get current user information"""
    try:
        return UserService(db).get_user_by_id(current_user_id)
    except Exception as e:
        raise handle_exception(e)

@router.get("/me/stats", response_model=UserStats)
def get_current_user_stats(current_user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    """Favorites and accepted matches of the current user"""
    return StatsService(db).get_user_stats(current_user_id)

@router.get("/invitation-code", response_model=InvitationCode)
def get_invitation_code(current_user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    """Code a friend can register with to be matched automatically"""
    try:
        return {"invitation_code": UserService(db).get_invitation_code(current_user_id)}
    except Exception as e:
        raise handle_exception(e)

@router.post("/validate-code", response_model=InvitationCodeResult)
def validate_invitation_code(payload: InvitationCode, db: Session = Depends(get_db)):
    """Check an invitation code before registering with it"""
    try:
        if not payload.invitation_code.strip():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invitation code is required")
        inviter = UserService(db).validate_invitation_code(payload.invitation_code)
        return {"message": "Valid invitation code", "user": UserSummary.model_validate(inviter)}
    except Exception as e:
        raise handle_exception(e)
