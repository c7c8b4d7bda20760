# app/api/v1/movies.py

from typing import Optional
from fastapi import APIRouter, Depends, Path, Query, Request
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.movie import MovieType
from app.schemas.movie import MovieFilters
from app.services.movie_service import MovieService
from app.core.response import send_response

router = APIRouter()


def get_movie_service(db: Session = Depends(get_db)) -> MovieService:
    return MovieService(db)


@router.get(
    "",
    summary="List movies",
    description="Paginated movie catalog filtered by genre, year and type.",
)
def get_movies(
    request: Request,
    genre: Optional[str] = Query(default=None, description="Genre name"),
    year: Optional[int] = Query(default=None, ge=1800, le=3000, description="Release year"),
    type: Optional[MovieType] = Query(default=None, description="movie or tv"),
    page: int = Query(default=1, ge=1, description="Page number"),
    limit: int = Query(default=20, ge=1, le=100, description="Page size"),
    movie_service: MovieService = Depends(get_movie_service),
):
    filters = MovieFilters(genre=genre, year=year, type=type, page=page, limit=limit)
    movies = movie_service.get_movies(filters)
    return send_response(request, 200, "Movies retrieved", movies)


@router.get("/genres", summary="Movie genres")
def get_genres(request: Request, movie_service: MovieService = Depends(get_movie_service)):
    return send_response(request, 200, "Genres retrieved", movie_service.get_genres())


@router.get("/trending", summary="Trending movies", description="Most viewed movies.")
def get_trending(
    request: Request,
    limit: int = Query(default=10, ge=1, le=50),
    movie_service: MovieService = Depends(get_movie_service),
):
    return send_response(request, 200, "Trending movies", movie_service.get_trending(limit))


@router.get("/search", summary="Search movies")
def search_movies(
    request: Request,
    q: str = Query(default="", description="At least 2 characters"),
    limit: int = Query(default=20, ge=1, le=100),
    movie_service: MovieService = Depends(get_movie_service),
):
    return send_response(request, 200, "Search results", movie_service.search_movies(q, limit))


@router.get("/feed/shorts", summary="Shorts feed")
def get_shorts_feed(
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    movie_service: MovieService = Depends(get_movie_service),
):
    return send_response(request, 200, "Shorts retrieved", movie_service.get_shorts(page, limit))


@router.get(
    "/{movie_id}",
    summary="Movie detail",
    description="Movie with genres and recent ratings. Counts as a view.",
)
def get_movie(
    request: Request,
    movie_id: int = Path(description="Movie ID"),
    movie_service: MovieService = Depends(get_movie_service),
):
    return send_response(request, 200, "Movie retrieved", movie_service.get_movie(movie_id))
