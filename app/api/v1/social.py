# app/api/v1/social.py

from typing import Optional
from fastapi import APIRouter, Depends, Path, Query, Request
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.social import ListCreate, ListItemCreate, ListUpdate
from app.schemas.user import User
from app.services.social_service import SocialService
from app.core.dependencies import get_current_user, get_optional_current_user
from app.core.response import send_response

router = APIRouter()


def get_social_service(db: Session = Depends(get_db)) -> SocialService:
    return SocialService(db)


@router.post("/follow/{user_id}", summary="Follow user")
def follow_user(
    request: Request,
    user_id: int = Path(description="User to follow"),
    current_user: User = Depends(get_current_user),
    social_service: SocialService = Depends(get_social_service),
):
    stats = social_service.follow_user(current_user.user_id, user_id)
    return send_response(request, 200, "Now following", stats)


@router.delete("/follow/{user_id}", summary="Unfollow user")
def unfollow_user(
    request: Request,
    user_id: int = Path(description="User to unfollow"),
    current_user: User = Depends(get_current_user),
    social_service: SocialService = Depends(get_social_service),
):
    stats = social_service.unfollow_user(current_user.user_id, user_id)
    return send_response(request, 200, "Unfollowed", stats)


@router.get("/follow/{user_id}/check", summary="Is following")
def check_following(
    request: Request,
    user_id: int = Path(description="Followed user"),
    current_user: User = Depends(get_current_user),
    social_service: SocialService = Depends(get_social_service),
):
    following = social_service.is_following(current_user.user_id, user_id)
    return send_response(request, 200, "Follow status", {"isFollowing": following})


@router.get("/users/{user_id}/followers", summary="Followers")
def get_followers(
    request: Request,
    user_id: int = Path(description="User ID"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    social_service: SocialService = Depends(get_social_service),
):
    followers = social_service.get_followers(user_id, page, limit)
    return send_response(request, 200, "Followers retrieved", followers)


@router.get("/users/{user_id}/following", summary="Following")
def get_following(
    request: Request,
    user_id: int = Path(description="User ID"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    social_service: SocialService = Depends(get_social_service),
):
    following = social_service.get_following(user_id, page, limit)
    return send_response(request, 200, "Following retrieved", following)


@router.get("/users/{user_id}/stats", summary="Follow stats")
def get_follow_stats(
    request: Request,
    user_id: int = Path(description="User ID"),
    social_service: SocialService = Depends(get_social_service),
):
    return send_response(request, 200, "Follow stats", social_service.get_follow_stats(user_id))


@router.get(
    "/users/{user_id}/lists",
    summary="User lists",
    description="Private lists are included only for their owner.",
)
def get_user_lists(
    request: Request,
    user_id: int = Path(description="User ID"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    current_user: Optional[User] = Depends(get_optional_current_user),
    social_service: SocialService = Depends(get_social_service),
):
    viewer_id = current_user.user_id if current_user else None
    lists = social_service.get_user_lists(user_id, viewer_id, page, limit)
    return send_response(request, 200, "Lists retrieved", lists)


@router.post("/lists", summary="Create list")
def create_list(
    request: Request,
    list_data: ListCreate,
    current_user: User = Depends(get_current_user),
    social_service: SocialService = Depends(get_social_service),
):
    user_list = social_service.create_list(current_user.user_id, list_data)
    return send_response(request, 201, "List created", user_list)


@router.get("/lists/{list_id}", summary="List detail")
def get_list(
    request: Request,
    list_id: int = Path(description="List ID"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    current_user: Optional[User] = Depends(get_optional_current_user),
    social_service: SocialService = Depends(get_social_service),
):
    viewer_id = current_user.user_id if current_user else None
    user_list = social_service.get_list(list_id, viewer_id, page, limit)
    return send_response(request, 200, "List retrieved", user_list)


@router.put("/lists/{list_id}", summary="Update list")
def update_list(
    request: Request,
    list_data: ListUpdate,
    list_id: int = Path(description="List ID"),
    current_user: User = Depends(get_current_user),
    social_service: SocialService = Depends(get_social_service),
):
    user_list = social_service.update_list(current_user.user_id, list_id, list_data)
    return send_response(request, 200, "List updated", user_list)


@router.delete("/lists/{list_id}", summary="Delete list")
def delete_list(
    request: Request,
    list_id: int = Path(description="List ID"),
    current_user: User = Depends(get_current_user),
    social_service: SocialService = Depends(get_social_service),
):
    social_service.delete_list(current_user.user_id, list_id)
    return send_response(request, 200, "List deleted")


@router.post("/lists/{list_id}/items", summary="Add list item")
def add_list_item(
    request: Request,
    item_data: ListItemCreate,
    list_id: int = Path(description="List ID"),
    current_user: User = Depends(get_current_user),
    social_service: SocialService = Depends(get_social_service),
):
    item = social_service.add_list_item(current_user.user_id, list_id, item_data)
    return send_response(request, 201, "Item added", item)


@router.delete("/lists/{list_id}/items/{item_id}", summary="Remove list item")
def remove_list_item(
    request: Request,
    list_id: int = Path(description="List ID"),
    item_id: int = Path(description="Item ID"),
    current_user: User = Depends(get_current_user),
    social_service: SocialService = Depends(get_social_service),
):
    social_service.remove_list_item(current_user.user_id, list_id, item_id)
    return send_response(request, 200, "Item removed")
