import logging

from fastapi import HTTPException, status

from app.core.config import get_settings

logger = logging.getLogger(__name__)

class BaseAppException(Exception):
    """Base exception for application"""
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)
    
    def to_dict(self):
        """Return error response as dictionary with error code"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "status_code": self.status_code
        }

class UserNotFoundException(BaseAppException):
    """Raised when user is not found"""
    error_code = "USER_NOT_FOUND"

    def __init__(self, message: str = "User not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)

class UserAlreadyExistsException(BaseAppException):
    """Raised when user already exists"""
    error_code = "USER_ALREADY_EXISTS"

    def __init__(self, message: str = "User already exists"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)

class InvalidCredentialsException(BaseAppException):
    """Raised when credentials are invalid"""
    error_code = "INVALID_CREDENTIALS"

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)

class MatchNotFoundException(BaseAppException):
    """Raised when a match does not exist"""
    error_code = "MATCH_NOT_FOUND"

    def __init__(self, message: str = "Match not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)

class MatchAccessDeniedException(BaseAppException):
    """Raised when the caller is not a participant of the match"""
    error_code = "MATCH_ACCESS_DENIED"

    def __init__(self, message: str = "You do not have access to this match"):
        super().__init__(message, status.HTTP_403_FORBIDDEN)

class MatchNotAcceptedException(BaseAppException):
    """Raised when a shared-movie operation runs on a match that is not accepted"""
    error_code = "MATCH_NOT_ACCEPTED"

    def __init__(self, message: str = "The match must be accepted"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)

class MatchAlreadyExistsException(BaseAppException):
    error_code = "MATCH_ALREADY_EXISTS"

    def __init__(self, message: str = "A match with this user already exists"):
        super().__init__(message, status.HTTP_409_CONFLICT)

class InvalidMatchActionException(BaseAppException):
    error_code = "INVALID_MATCH_ACTION"

    def __init__(self, message: str = "Invalid match action"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)

class NoUnwatchedMoviesException(BaseAppException):
    """Raised when every favorited movie of a match has already been watched"""
    error_code = "NO_UNWATCHED_MOVIES"

    def __init__(self, message: str = "No unwatched movies available"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)

class MovieNotFoundException(BaseAppException):
    error_code = "MOVIE_NOT_FOUND"

    def __init__(self, message: str = "Movie not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)

class FavoriteAlreadyExistsException(BaseAppException):
    error_code = "FAVORITE_ALREADY_EXISTS"

    def __init__(self, message: str = "Movie is already in favorites"):
        super().__init__(message, status.HTTP_409_CONFLICT)

class WatchedMovieAlreadyExistsException(BaseAppException):
    error_code = "WATCHED_ALREADY_EXISTS"

    def __init__(self, message: str = "Movie is already marked as watched in this match"):
        super().__init__(message, status.HTTP_409_CONFLICT)

class WatchedMovieNotFoundException(BaseAppException):
    error_code = "WATCHED_NOT_FOUND"

    def __init__(self, message: str = "Watched movie not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)

class InvitationCodeNotFoundException(BaseAppException):
    error_code = "INVITATION_CODE_NOT_FOUND"

    def __init__(self, message: str = "Invitation code not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)

class CatalogServiceException(BaseAppException):
    """Raised when the upstream movie catalog fails"""
    error_code = "CATALOG_UNAVAILABLE"

    def __init__(self, message: str = "Movie catalog unavailable"):
        super().__init__(message, status.HTTP_502_BAD_GATEWAY)

def handle_exception(e: Exception) -> HTTPException:
    """Convert domain exceptions to HTTP responses."""
    if isinstance(e, HTTPException):
        return e
    if isinstance(e, BaseAppException):
        return HTTPException(status_code=e.status_code, detail=e.to_dict())
    logger.exception("Unhandled error while processing request")
    detail = BaseAppException("An internal server error occurred").to_dict()
    if get_settings().ENVIRONMENT == "development":
        detail["error"] = str(e)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
