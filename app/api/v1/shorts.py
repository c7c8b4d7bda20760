# app/api/v1/shorts.py

from fastapi import APIRouter, Depends, Path, Query, Request
from app.services.movie_service import MovieService
from app.api.v1.movies import get_movie_service
from app.core.response import send_response

router = APIRouter()


@router.get("", summary="List shorts")
def get_shorts(
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    movie_service: MovieService = Depends(get_movie_service),
):
    return send_response(request, 200, "Shorts retrieved", movie_service.get_shorts(page, limit))


@router.get("/{short_id}", summary="Short detail")
def get_short(
    request: Request,
    short_id: int = Path(description="Short ID"),
    movie_service: MovieService = Depends(get_movie_service),
):
    return send_response(request, 200, "Short retrieved", movie_service.get_short(short_id))
