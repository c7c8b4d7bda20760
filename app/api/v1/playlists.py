# app/api/v1/playlists.py

from fastapi import APIRouter, Depends, Path, Query, Request
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.music import PlaylistCreate, PlaylistSongRequest, PlaylistUpdate
from app.schemas.user import User
from app.services.playlist_service import PlaylistService
from app.core.dependencies import get_current_user
from app.core.response import send_response

router = APIRouter()


def get_playlist_service(db: Session = Depends(get_db)) -> PlaylistService:
    return PlaylistService(db)


@router.get("", summary="My playlists")
def get_playlists(
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    playlist_service: PlaylistService = Depends(get_playlist_service),
):
    playlists = playlist_service.get_user_playlists(current_user.user_id, page, limit)
    return send_response(request, 200, "Playlists retrieved", playlists)


@router.post("", summary="Create playlist")
def create_playlist(
    request: Request,
    playlist_data: PlaylistCreate,
    current_user: User = Depends(get_current_user),
    playlist_service: PlaylistService = Depends(get_playlist_service),
):
    playlist = playlist_service.create_playlist(current_user.user_id, playlist_data)
    return send_response(request, 201, "Playlist created", playlist)


@router.get("/{playlist_id}", summary="Playlist detail")
def get_playlist(
    request: Request,
    playlist_id: int = Path(description="Playlist ID"),
    current_user: User = Depends(get_current_user),
    playlist_service: PlaylistService = Depends(get_playlist_service),
):
    playlist = playlist_service.get_playlist(current_user.user_id, playlist_id)
    return send_response(request, 200, "Playlist retrieved", playlist)


@router.put("/{playlist_id}", summary="Update playlist")
def update_playlist(
    request: Request,
    playlist_data: PlaylistUpdate,
    playlist_id: int = Path(description="Playlist ID"),
    current_user: User = Depends(get_current_user),
    playlist_service: PlaylistService = Depends(get_playlist_service),
):
    playlist = playlist_service.update_playlist(current_user.user_id, playlist_id, playlist_data)
    return send_response(request, 200, "Playlist updated", playlist)


@router.delete("/{playlist_id}", summary="Delete playlist")
def delete_playlist(
    request: Request,
    playlist_id: int = Path(description="Playlist ID"),
    current_user: User = Depends(get_current_user),
    playlist_service: PlaylistService = Depends(get_playlist_service),
):
    playlist_service.delete_playlist(current_user.user_id, playlist_id)
    return send_response(request, 200, "Playlist deleted")


@router.post("/{playlist_id}/songs", summary="Add song")
def add_song(
    request: Request,
    song: PlaylistSongRequest,
    playlist_id: int = Path(description="Playlist ID"),
    current_user: User = Depends(get_current_user),
    playlist_service: PlaylistService = Depends(get_playlist_service),
):
    playlist = playlist_service.add_song(current_user.user_id, playlist_id, song.music_id)
    return send_response(request, 200, "Song added", playlist)


@router.delete("/{playlist_id}/songs/{music_id}", summary="Remove song")
def remove_song(
    request: Request,
    playlist_id: int = Path(description="Playlist ID"),
    music_id: int = Path(description="Track ID"),
    current_user: User = Depends(get_current_user),
    playlist_service: PlaylistService = Depends(get_playlist_service),
):
    playlist = playlist_service.remove_song(current_user.user_id, playlist_id, music_id)
    return send_response(request, 200, "Song removed", playlist)
