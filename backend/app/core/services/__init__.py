from .movie_catalog import MovieCatalog

__all__ = ["MovieCatalog"]
