# app/api/v1/music.py

from typing import Optional
from fastapi import APIRouter, Depends, Path, Query, Request
from sqlalchemy.orm import Session
from app.database import get_db
from app.services.music_service import MusicService
from app.core.response import send_response

router = APIRouter()


def get_music_service(db: Session = Depends(get_db)) -> MusicService:
    return MusicService(db)


@router.get("", summary="List music", description="Music filtered by artist or genre.")
def get_music(
    request: Request,
    artist: Optional[str] = Query(default=None),
    genre: Optional[str] = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=50),
    music_service: MusicService = Depends(get_music_service),
):
    music = music_service.get_music(artist, genre, page, limit)
    return send_response(request, 200, "Music retrieved", music)


@router.get("/trending", summary="Trending music", description="Most played tracks.")
def get_trending(
    request: Request,
    limit: int = Query(default=10, ge=1, le=50),
    music_service: MusicService = Depends(get_music_service),
):
    return send_response(request, 200, "Trending music", music_service.get_trending(limit))


@router.get("/artists", summary="Artists")
def get_artists(request: Request, music_service: MusicService = Depends(get_music_service)):
    return send_response(request, 200, "Artists retrieved", music_service.get_artists())


@router.get("/genres", summary="Music genres")
def get_genres(request: Request, music_service: MusicService = Depends(get_music_service)):
    return send_response(request, 200, "Genres retrieved", music_service.get_genres())


@router.get("/search", summary="Search music")
def search_music(
    request: Request,
    q: str = Query(default=""),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=50),
    music_service: MusicService = Depends(get_music_service),
):
    return send_response(request, 200, "Search results", music_service.search_music(q, page, limit))


@router.get("/{music_id}", summary="Track detail")
def get_track(
    request: Request,
    music_id: int = Path(description="Track ID"),
    music_service: MusicService = Depends(get_music_service),
):
    return send_response(request, 200, "Music retrieved", music_service.get_music_by_id(music_id))


@router.post("/{music_id}/play", summary="Count a play")
def play_track(
    request: Request,
    music_id: int = Path(description="Track ID"),
    music_service: MusicService = Depends(get_music_service),
):
    music = music_service.increment_play_count(music_id)
    return send_response(request, 200, "Play counted", music)
