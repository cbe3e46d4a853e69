import logging
from typing import Optional
from .config import get_settings
from .interfaces import TMDBConfig
from .tmdb_client import TMDBClient
from .services import MovieCatalog

logger = logging.getLogger(__name__)

class TMDBServiceFactory:
    """Factory class for creating TMDB services"""
    
    @staticmethod
    def create_movie_catalog(api_key: Optional[str] = None, language: Optional[str] = None) -> MovieCatalog:
        """Create a movie catalog bound to the configured TMDB account"""
        settings = get_settings()
        config = TMDBConfig(
            api_key=api_key if api_key is not None else settings.TMDB_API_KEY,
            language=language or settings.TMDB_LANGUAGE,
            region=settings.TMDB_REGION,
            timeout=settings.TMDB_TIMEOUT,
        )
        if not config.api_key:
            logger.warning("TMDB_API_KEY is not configured; catalog requests will fail")
        return MovieCatalog(TMDBClient(config))


def get_movie_catalog() -> MovieCatalog:
    """FastAPI dependency returning the movie catalog"""
    return TMDBServiceFactory.create_movie_catalog()
