# app/api/v1/comments.py

from typing import Optional
from fastapi import APIRouter, Depends, Path, Query, Request
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.entity_type import EntityType
from app.schemas.comment import CommentCreate, CommentReply, CommentUpdate, LikeCount
from app.schemas.user import User
from app.services.comment_service import CommentService
from app.core.dependencies import get_current_user, get_optional_current_user
from app.core.response import send_response

router = APIRouter()


def get_comment_service(db: Session = Depends(get_db)) -> CommentService:
    return CommentService(db)


@router.post("", summary="Write a comment", description="Comment on a movie, track or short.")
def create_comment(
    request: Request,
    comment_data: CommentCreate,
    current_user: User = Depends(get_current_user),
    comment_service: CommentService = Depends(get_comment_service),
):
    comment = comment_service.create_comment(current_user.user_id, comment_data)
    return send_response(request, 201, "Comment created", comment)


@router.get("/me", summary="My comments")
def get_my_comments(
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    comment_service: CommentService = Depends(get_comment_service),
):
    comments = comment_service.get_user_comments(current_user.user_id, page, limit)
    return send_response(request, 200, "Comments retrieved", comments)


@router.get(
    "/entity/{entity_type}/{entity_id}",
    summary="Entity comments",
    description="Top-level comments with a preview of the newest replies.",
)
def get_entity_comments(
    request: Request,
    entity_type: EntityType = Path(description="movie, music or short"),
    entity_id: int = Path(description="Entity ID"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    current_user: Optional[User] = Depends(get_optional_current_user),
    comment_service: CommentService = Depends(get_comment_service),
):
    current_user_id = current_user.user_id if current_user else None
    comments = comment_service.get_entity_comments(
        entity_id, entity_type, current_user_id, page, limit
    )
    return send_response(request, 200, "Comments retrieved", comments)


@router.get("/{comment_id}", summary="Comment detail")
def get_comment(
    request: Request,
    comment_id: int = Path(description="Comment ID"),
    current_user: Optional[User] = Depends(get_optional_current_user),
    comment_service: CommentService = Depends(get_comment_service),
):
    current_user_id = current_user.user_id if current_user else None
    comment = comment_service.get_comment(comment_id, current_user_id)
    return send_response(request, 200, "Comment retrieved", comment)


@router.put("/{comment_id}", summary="Edit comment")
def update_comment(
    request: Request,
    comment_data: CommentUpdate,
    comment_id: int = Path(description="Comment ID"),
    current_user: User = Depends(get_current_user),
    comment_service: CommentService = Depends(get_comment_service),
):
    comment = comment_service.update_comment(current_user.user_id, comment_id, comment_data)
    return send_response(request, 200, "Comment updated", comment)


@router.delete("/{comment_id}", summary="Delete comment", description="Also removes replies.")
def delete_comment(
    request: Request,
    comment_id: int = Path(description="Comment ID"),
    current_user: User = Depends(get_current_user),
    comment_service: CommentService = Depends(get_comment_service),
):
    comment_service.delete_comment(current_user.user_id, comment_id)
    return send_response(request, 200, "Comment deleted")


@router.get("/{comment_id}/replies", summary="Replies", description="Oldest first.")
def get_replies(
    request: Request,
    comment_id: int = Path(description="Parent comment ID"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    current_user: Optional[User] = Depends(get_optional_current_user),
    comment_service: CommentService = Depends(get_comment_service),
):
    current_user_id = current_user.user_id if current_user else None
    replies = comment_service.get_replies(comment_id, current_user_id, page, limit)
    return send_response(request, 200, "Replies retrieved", replies)


@router.post("/{comment_id}/replies", summary="Reply")
def reply(
    request: Request,
    reply_data: CommentReply,
    comment_id: int = Path(description="Parent comment ID"),
    current_user: User = Depends(get_current_user),
    comment_service: CommentService = Depends(get_comment_service),
):
    comment = comment_service.reply(current_user.user_id, comment_id, reply_data.content)
    return send_response(request, 201, "Reply created", comment)


@router.post("/{comment_id}/like", summary="Like comment")
def like_comment(
    request: Request,
    comment_id: int = Path(description="Comment ID"),
    current_user: User = Depends(get_current_user),
    comment_service: CommentService = Depends(get_comment_service),
):
    likes = comment_service.like_comment(current_user.user_id, comment_id)
    result = LikeCount(comment_id=comment_id, likes_count=likes)
    return send_response(request, 200, "Comment liked", result)


@router.delete("/{comment_id}/like", summary="Unlike comment")
def unlike_comment(
    request: Request,
    comment_id: int = Path(description="Comment ID"),
    current_user: User = Depends(get_current_user),
    comment_service: CommentService = Depends(get_comment_service),
):
    likes = comment_service.unlike_comment(current_user.user_id, comment_id)
    return send_response(
        request, 200, "Comment unliked", LikeCount(comment_id=comment_id, likes_count=likes)
    )


@router.get("/{comment_id}/likes", summary="Likes count")
def get_likes(
    request: Request,
    comment_id: int = Path(description="Comment ID"),
    comment_service: CommentService = Depends(get_comment_service),
):
    comment_service.get_comment(comment_id)
    likes = comment_service.get_likes_count(comment_id)
    result = LikeCount(comment_id=comment_id, likes_count=likes)
    return send_response(request, 200, "Likes count", result)
