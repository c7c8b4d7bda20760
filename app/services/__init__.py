# app/services/__init__.py

from .auth_service import AuthService
from .user_service import UserService
from .movie_service import MovieService
from .music_service import MusicService
from .playlist_service import PlaylistService
from .engagement_service import EngagementService
from .comment_service import CommentService
from .social_service import SocialService
from .notification_service import NotificationService
from .upload_service import UploadService
from .search_service import SearchService
from .admin_service import AdminService

__all__ = [
    "AuthService",
    "UserService",
    "MovieService",
    "MusicService",
    "PlaylistService",
    "EngagementService",
    "CommentService",
    "SocialService",
    "NotificationService",
    "UploadService",
    "SearchService",
    "AdminService",
]
