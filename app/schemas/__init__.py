# app/schemas/__init__.py

from .common import CamelModel, Page, UserSummary
from .user import (
    User,
    UserSignup,
    UserLogin,
    RefreshRequest,
    TokenPair,
    AuthResponse,
    UserProfileUpdate,
    PasswordChange,
)
from .movie import MovieFilters, MovieSummary, MovieDetail, Short
from .music import Music, PlaylistCreate, PlaylistUpdate, PlaylistSummary, PlaylistDetail
from .engagement import (
    RatingCreate,
    Rating,
    RatingSummary,
    FavoriteCreate,
    Favorite,
    WatchlistCreate,
    WatchlistEntry,
    HistoryCreate,
    HistoryEntry,
    WatchProgress,
    EngagementStats,
)
from .comment import Comment, CommentCreate, CommentReply, CommentUpdate
from .social import FollowUser, FollowStats, UserList, UserListDetail, ListItem
from .notification import Notification
from .upload import Upload, UploadCreate, UploadStats
from .search import SearchResult
from .admin import AdminUser, PlatformStats, UserStats, Report, ModerationLog

__all__ = [
    "CamelModel",
    "Page",
    "UserSummary",
    "User",
    "UserSignup",
    "UserLogin",
    "RefreshRequest",
    "TokenPair",
    "AuthResponse",
    "UserProfileUpdate",
    "PasswordChange",
    "MovieFilters",
    "MovieSummary",
    "MovieDetail",
    "Short",
    "Music",
    "PlaylistCreate",
    "PlaylistUpdate",
    "PlaylistSummary",
    "PlaylistDetail",
    "RatingCreate",
    "Rating",
    "RatingSummary",
    "FavoriteCreate",
    "Favorite",
    "WatchlistCreate",
    "WatchlistEntry",
    "HistoryCreate",
    "HistoryEntry",
    "WatchProgress",
    "EngagementStats",
    "Comment",
    "CommentCreate",
    "CommentReply",
    "CommentUpdate",
    "FollowUser",
    "FollowStats",
    "UserList",
    "UserListDetail",
    "ListItem",
    "Notification",
    "Upload",
    "UploadCreate",
    "UploadStats",
    "SearchResult",
    "AdminUser",
    "PlatformStats",
    "UserStats",
    "Report",
    "ModerationLog",
]
