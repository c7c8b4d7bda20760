# app/api/v1/uploads.py

from typing import Optional
from fastapi import APIRouter, Body, Depends, Path, Query, Request
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.upload import UploadConvert, UploadCreate, UploadStatusUpdate
from app.schemas.user import User
from app.services.upload_service import UploadService
from app.core.dependencies import get_current_user, require_uploads_enabled
from app.core.response import send_response

router = APIRouter(dependencies=[Depends(require_uploads_enabled)])


def get_upload_service(db: Session = Depends(get_db)) -> UploadService:
    return UploadService(db)


@router.post(
    "",
    summary="Register upload",
    description="Record an audio upload; it starts in the processing state.",
)
def create_upload(
    request: Request,
    upload_data: UploadCreate,
    current_user: User = Depends(get_current_user),
    upload_service: UploadService = Depends(get_upload_service),
):
    upload = upload_service.create_upload(current_user.user_id, upload_data)
    return send_response(request, 201, "Upload created", upload)


@router.get("", summary="My uploads")
def get_uploads(
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    upload_service: UploadService = Depends(get_upload_service),
):
    uploads = upload_service.get_uploads(current_user.user_id, page, limit)
    return send_response(request, 200, "Uploads retrieved", uploads)


@router.get("/stats", summary="Upload stats")
def get_stats(
    request: Request,
    current_user: User = Depends(get_current_user),
    upload_service: UploadService = Depends(get_upload_service),
):
    return send_response(request, 200, "Upload stats", upload_service.get_stats(current_user.user_id))


@router.get("/{upload_id}", summary="Upload detail")
def get_upload(
    request: Request,
    upload_id: int = Path(description="Upload ID"),
    current_user: User = Depends(get_current_user),
    upload_service: UploadService = Depends(get_upload_service),
):
    upload = upload_service.get_upload(current_user.user_id, upload_id)
    return send_response(request, 200, "Upload retrieved", upload)


@router.patch("/{upload_id}/status", summary="Update upload status")
def update_status(
    request: Request,
    status_data: UploadStatusUpdate,
    upload_id: int = Path(description="Upload ID"),
    current_user: User = Depends(get_current_user),
    upload_service: UploadService = Depends(get_upload_service),
):
    upload = upload_service.update_status(current_user.user_id, upload_id, status_data)
    return send_response(request, 200, "Upload updated", upload)


@router.delete("/{upload_id}", summary="Delete upload")
def delete_upload(
    request: Request,
    upload_id: int = Path(description="Upload ID"),
    current_user: User = Depends(get_current_user),
    upload_service: UploadService = Depends(get_upload_service),
):
    upload_service.delete_upload(current_user.user_id, upload_id)
    return send_response(request, 200, "Upload deleted")


@router.post(
    "/{upload_id}/convert",
    summary="Publish upload",
    description="Turn an upload into a catalog track and notify followers.",
)
def convert_upload(
    request: Request,
    upload_id: int = Path(description="Upload ID"),
    convert_data: Optional[UploadConvert] = Body(default=None),
    current_user: User = Depends(get_current_user),
    upload_service: UploadService = Depends(get_upload_service),
):
    music = upload_service.convert_to_music(
        current_user.user_id, upload_id, convert_data or UploadConvert()
    )
    return send_response(request, 201, "Upload published", music)
