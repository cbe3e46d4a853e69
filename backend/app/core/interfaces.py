from abc import ABC, abstractmethod
from typing import Dict, Optional
from dataclasses import dataclass

@dataclass
class TMDBConfig:
    """Configuration class for TMDB API"""
    api_key: str
    base_url: str = "https://api.themoviedb.org/3"
    language: str = "es-ES"
    region: Optional[str] = None
    timeout: int = 30

class TMDBResponse:
    """Response wrapper for TMDB API calls"""
    def __init__(self, data: Dict, status_code: int, success: bool):
        self.data = data
        self.status_code = status_code
        self.success = success

class TMDBError(Exception):
    """Custom exception for TMDB API errors"""
    def __init__(self, message: str, status_code: int = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

class TMDBClientInterface(ABC):
    """Abstract interface for TMDB client"""
    
    @abstractmethod
    def make_request(self, endpoint: str, params: Dict = None) -> TMDBResponse:
        pass

class MovieCatalogInterface(ABC):
    """Abstract interface for the movie catalog"""
    
    @abstractmethod
    def search_movies(self, query: str, page: int = 1) -> TMDBResponse:
        pass
    
    @abstractmethod
    def get_movie_details(self, movie_id: int) -> TMDBResponse:
        pass
    
    @abstractmethod
    def get_trending(self, time_window: str = "week") -> TMDBResponse:
        pass
    
    @abstractmethod
    def get_genres(self) -> TMDBResponse:
        pass
    
    @abstractmethod
    def discover_movies(self, filters: Optional[Dict] = None) -> TMDBResponse:
        pass
    
    @abstractmethod
    def get_upcoming_movies(self, page: int = 1) -> TMDBResponse:
        pass
    
    @abstractmethod
    def get_popular_movies(self, page: int = 1) -> TMDBResponse:
        pass
    
    @abstractmethod
    def get_movies_by_genre(self, genre_id: int, page: int = 1) -> TMDBResponse:
        pass
