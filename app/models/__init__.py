# app/models/__init__.py

from .entity_type import EntityType
from .user import UserModel
from .session import SessionModel
from .movie import MovieModel, MovieType
from .genre import GenreModel
from .movie_genre import MovieGenreModel
from .short import ShortModel
from .music import MusicModel
from .playlist import PlaylistModel, PlaylistSongModel
from .watchlist import WatchlistModel
from .favorite import FavoriteModel
from .history import HistoryModel
from .rating import RatingModel
from .comment import CommentModel
from .comment_like import CommentLikeModel
from .follow import FollowModel
from .user_list import ListModel, ListItemModel
from .notification import NotificationModel
from .upload import UploadModel, UploadStatus
from .moderation import ReportModel, BanModel, ModerationLogModel


__all__ = [
    "EntityType",
    "UserModel",
    "SessionModel",
    "MovieModel",
    "MovieType",
    "GenreModel",
    "MovieGenreModel",
    "ShortModel",
    "MusicModel",
    "PlaylistModel",
    "PlaylistSongModel",
    "WatchlistModel",
    "FavoriteModel",
    "HistoryModel",
    "RatingModel",
    "CommentModel",
    "CommentLikeModel",
    "FollowModel",
    "ListModel",
    "ListItemModel",
    "NotificationModel",
    "UploadModel",
    "UploadStatus",
    "ReportModel",
    "BanModel",
    "ModerationLogModel",
]
