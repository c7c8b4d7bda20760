# app/api/v1/engagement.py

from typing import Optional
from fastapi import APIRouter, Depends, Path, Query, Request
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.entity_type import EntityType
from app.schemas.engagement import FavoriteCreate, HistoryCreate, RatingCreate, WatchlistCreate
from app.schemas.user import User
from app.services.engagement_service import EngagementService
from app.core.dependencies import get_current_user
from app.core.response import send_response

router = APIRouter()


def get_engagement_service(db: Session = Depends(get_db)) -> EngagementService:
    return EngagementService(db)


# ratings


@router.post("/ratings", summary="Rate", description="Create or update the user's 1-5 rating.")
def rate(
    request: Request,
    rating_data: RatingCreate,
    current_user: User = Depends(get_current_user),
    engagement_service: EngagementService = Depends(get_engagement_service),
):
    rating = engagement_service.rate(current_user.user_id, rating_data)
    return send_response(request, 200, "Rating saved", rating)


@router.get("/ratings/{entity_type}/{entity_id}/summary", summary="Rating summary")
def get_rating_summary(
    request: Request,
    entity_type: EntityType = Path(description="movie, music or short"),
    entity_id: int = Path(description="Entity ID"),
    engagement_service: EngagementService = Depends(get_engagement_service),
):
    summary = engagement_service.get_rating_summary(entity_id, entity_type)
    return send_response(request, 200, "Rating summary", summary)


@router.get("/ratings/{entity_type}/{entity_id}", summary="My rating")
def get_user_rating(
    request: Request,
    entity_type: EntityType = Path(description="movie, music or short"),
    entity_id: int = Path(description="Entity ID"),
    current_user: User = Depends(get_current_user),
    engagement_service: EngagementService = Depends(get_engagement_service),
):
    rating = engagement_service.get_user_rating(current_user.user_id, entity_id, entity_type)
    return send_response(request, 200, "Rating retrieved", rating)


@router.delete("/ratings/{entity_type}/{entity_id}", summary="Remove rating")
def remove_rating(
    request: Request,
    entity_type: EntityType = Path(description="movie, music or short"),
    entity_id: int = Path(description="Entity ID"),
    current_user: User = Depends(get_current_user),
    engagement_service: EngagementService = Depends(get_engagement_service),
):
    engagement_service.remove_rating(current_user.user_id, entity_id, entity_type)
    return send_response(request, 200, "Rating removed")


# favorites


@router.post("/favorites", summary="Add favorite")
def add_favorite(
    request: Request,
    favorite_data: FavoriteCreate,
    current_user: User = Depends(get_current_user),
    engagement_service: EngagementService = Depends(get_engagement_service),
):
    favorite = engagement_service.add_favorite(
        current_user.user_id, favorite_data.entity_id, favorite_data.entity_type
    )
    return send_response(request, 200, "Added to favorites", favorite)


@router.get("/favorites", summary="My favorites")
def get_favorites(
    request: Request,
    entity_type: Optional[EntityType] = Query(default=None, alias="entityType"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    engagement_service: EngagementService = Depends(get_engagement_service),
):
    favorites = engagement_service.get_favorites(current_user.user_id, entity_type, page, limit)
    return send_response(request, 200, "Favorites retrieved", favorites)


@router.get("/favorites/{entity_type}/{entity_id}/check", summary="Is favorited")
def check_favorite(
    request: Request,
    entity_type: EntityType = Path(description="movie, music or short"),
    entity_id: int = Path(description="Entity ID"),
    current_user: User = Depends(get_current_user),
    engagement_service: EngagementService = Depends(get_engagement_service),
):
    favorited = engagement_service.is_favorited(current_user.user_id, entity_id, entity_type)
    return send_response(request, 200, "Favorite status", {"isFavorited": favorited})


@router.delete("/favorites/{entity_type}/{entity_id}", summary="Remove favorite")
def remove_favorite(
    request: Request,
    entity_type: EntityType = Path(description="movie, music or short"),
    entity_id: int = Path(description="Entity ID"),
    current_user: User = Depends(get_current_user),
    engagement_service: EngagementService = Depends(get_engagement_service),
):
    engagement_service.remove_favorite(current_user.user_id, entity_id, entity_type)
    return send_response(request, 200, "Removed from favorites")


# watchlist


@router.post("/watchlist", summary="Add to watchlist")
def add_to_watchlist(
    request: Request,
    watchlist_data: WatchlistCreate,
    current_user: User = Depends(get_current_user),
    engagement_service: EngagementService = Depends(get_engagement_service),
):
    entry = engagement_service.add_to_watchlist(current_user.user_id, watchlist_data.movie_id)
    return send_response(request, 200, "Added to watchlist", entry)


@router.get("/watchlist", summary="My watchlist")
def get_watchlist(
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    engagement_service: EngagementService = Depends(get_engagement_service),
):
    watchlist = engagement_service.get_watchlist(current_user.user_id, page, limit)
    return send_response(request, 200, "Watchlist retrieved", watchlist)


@router.get("/watchlist/{movie_id}/check", summary="Is in watchlist")
def check_watchlist(
    request: Request,
    movie_id: int = Path(description="Movie ID"),
    current_user: User = Depends(get_current_user),
    engagement_service: EngagementService = Depends(get_engagement_service),
):
    in_watchlist = engagement_service.is_in_watchlist(current_user.user_id, movie_id)
    return send_response(request, 200, "Watchlist status", {"inWatchlist": in_watchlist})


@router.delete("/watchlist/{movie_id}", summary="Remove from watchlist")
def remove_from_watchlist(
    request: Request,
    movie_id: int = Path(description="Movie ID"),
    current_user: User = Depends(get_current_user),
    engagement_service: EngagementService = Depends(get_engagement_service),
):
    engagement_service.remove_from_watchlist(current_user.user_id, movie_id)
    return send_response(request, 200, "Removed from watchlist")


# history


@router.post("/history", summary="Record progress")
def update_history(
    request: Request,
    history_data: HistoryCreate,
    current_user: User = Depends(get_current_user),
    engagement_service: EngagementService = Depends(get_engagement_service),
):
    entry = engagement_service.update_history(current_user.user_id, history_data)
    return send_response(request, 200, "History updated", entry)


@router.get("/history", summary="Watch history")
def get_history(
    request: Request,
    entity_type: Optional[EntityType] = Query(default=None, alias="entityType"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    engagement_service: EngagementService = Depends(get_engagement_service),
):
    history = engagement_service.get_history(current_user.user_id, entity_type, page, limit)
    return send_response(request, 200, "History retrieved", history)


@router.delete("/history", summary="Clear history")
def clear_history(
    request: Request,
    current_user: User = Depends(get_current_user),
    engagement_service: EngagementService = Depends(get_engagement_service),
):
    removed = engagement_service.clear_history(current_user.user_id)
    return send_response(request, 200, "History cleared", {"removed": removed})


@router.get("/history/{entity_type}/{entity_id}/progress", summary="Watch progress")
def get_watch_progress(
    request: Request,
    entity_type: EntityType = Path(description="movie, music or short"),
    entity_id: int = Path(description="Entity ID"),
    current_user: User = Depends(get_current_user),
    engagement_service: EngagementService = Depends(get_engagement_service),
):
    progress = engagement_service.get_watch_progress(current_user.user_id, entity_id, entity_type)
    return send_response(request, 200, "Watch progress", progress)


@router.get("/stats", summary="Engagement stats")
def get_stats(
    request: Request,
    current_user: User = Depends(get_current_user),
    engagement_service: EngagementService = Depends(get_engagement_service),
):
    return send_response(
        request, 200, "Engagement stats", engagement_service.get_stats(current_user.user_id)
    )
