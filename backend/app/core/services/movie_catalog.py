from typing import Dict, Optional
from ..interfaces import MovieCatalogInterface, TMDBResponse, TMDBClientInterface

class MovieCatalog(MovieCatalogInterface):
    """TMDB movie endpoints used by the app"""
    
    def __init__(self, client: TMDBClientInterface):
        self.client = client
    
    def search_movies(self, query: str, page: int = 1) -> TMDBResponse:
        """Search movies by query"""
        return self.client.make_request("search/movie", {"query": query, "page": page})
    
    def get_movie_details(self, movie_id: int) -> TMDBResponse:
        """Get movie details with credits and videos"""
        return self.client.make_request(
            f"movie/{movie_id}", {"append_to_response": "credits,videos"}
        )
    
    def get_trending(self, time_window: str = "week") -> TMDBResponse:
        return self.client.make_request(f"trending/movie/{time_window}")
    
    def get_genres(self) -> TMDBResponse:
        return self.client.make_request("genre/movie/list")
    
    def discover_movies(self, filters: Optional[Dict] = None) -> TMDBResponse:
        """Discover movies, most popular first unless overridden"""
        params = {"sort_by": "popularity.desc"}
        params.update(filters or {})
        return self.client.make_request("discover/movie", params)
    
    def get_popular_movies(self, page: int = 1) -> TMDBResponse:
        return self.discover_movies({"page": page, "sort_by": "popularity.desc"})
    
    def get_upcoming_movies(self, page: int = 1) -> TMDBResponse:
        return self.client.make_request("movie/upcoming", {"page": page})
    
    def get_movies_by_genre(self, genre_id: int, page: int = 1) -> TMDBResponse:
        return self.discover_movies({"page": page, "with_genres": genre_id})
