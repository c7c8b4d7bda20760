# app/api/v1/search.py

from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.entity_type import EntityType
from app.schemas.user import User
from app.services.search_service import SearchService
from app.core.dependencies import get_current_user
from app.core.response import send_response

router = APIRouter()


def get_search_service(db: Session = Depends(get_db)) -> SearchService:
    return SearchService(db)


@router.get(
    "",
    summary="Search",
    description=(
        "Search movies, music and shorts. The query needs at least 2 characters. "
        "Each type is paged with the same page and limit, so without a type filter "
        "one page can hold up to 3 x limit items; total is the sum across types."
    ),
)
def search(
    request: Request,
    q: str = Query(default="", description="Search text"),
    type: Optional[EntityType] = Query(default=None, description="Restrict to one type"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    search_service: SearchService = Depends(get_search_service),
):
    results = search_service.search(q, type, page, limit)
    return send_response(request, 200, "Search results", results)


@router.get("/trending/movies", summary="Trending movies")
def trending_movies(
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    search_service: SearchService = Depends(get_search_service),
):
    movies = search_service.get_trending_movies(page, limit)
    return send_response(request, 200, "Trending movies", movies)


@router.get("/trending/music", summary="Trending music")
def trending_music(
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    search_service: SearchService = Depends(get_search_service),
):
    music = search_service.get_trending_music(page, limit)
    return send_response(request, 200, "Trending music", music)


@router.get("/recommendations", summary="Recommendations")
def recommendations(
    request: Request,
    limit: int = Query(default=20, ge=1, le=50),
    current_user: User = Depends(get_current_user),
    search_service: SearchService = Depends(get_search_service),
):
    items = search_service.get_recommendations(current_user.user_id, limit)
    return send_response(request, 200, "Recommendations", items)
