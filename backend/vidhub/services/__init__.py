"""Service layer public API.

Callers import services and their DTOs from :mod:`vidhub.services`
without knowing the internal layout.

Re-exports
----------
- Base primitives: :class:`BaseService`, :class:`ServiceContext`
- Shared DTOs: :class:`PaginationIn`, :class:`PageMeta`, :class:`PageOut`
- Session manager: :class:`AuthService` and its DTOs
- Credential store: :class:`IdentityService` and its DTOs
- Toggle engine: :class:`ToggleService`, :class:`ToggleKind`, :class:`ToggleResult`
- Resources: :class:`VideoService`, :class:`CommentService`,
  :class:`PlaylistService`, :class:`DashboardService`
"""

from __future__ import annotations

from ._shared.base import BaseService, ServiceContext
from ._shared.dto import PageMeta, PageOut, PaginationIn, UserSummaryOut
from .auth.dto import LoginIn, LogoutIn, RefreshIn, SessionOut, TokenPairOut
from .auth.service import AuthService
from .comments.dto import CommentIn, CommentOut
from .comments.service import CommentService
from .dashboard.service import ChannelStatsOut, DashboardService
from .identity.dto import (
    AccountUpdateIn,
    ChannelProfileOut,
    IdentityOut,
    PasswordChangeIn,
    RegisterIn,
)
from .identity.service import IdentityService
from .playlists.dto import PlaylistIn, PlaylistOut
from .playlists.service import PlaylistService
from .toggles.dto import ToggleKind, ToggleResult
from .toggles.service import ToggleService
from .videos.dto import VideoOut, VideoPublishIn, VideoQueryIn, VideoUpdateIn, WatchEntryOut
from .videos.service import VideoService

__all__ = [
    # Base
    "BaseService",
    "ServiceContext",
    # Shared DTOs
    "PaginationIn",
    "PageMeta",
    "PageOut",
    "UserSummaryOut",
    # Auth
    "AuthService",
    "LoginIn",
    "LogoutIn",
    "RefreshIn",
    "SessionOut",
    "TokenPairOut",
    # Identity
    "IdentityService",
    "RegisterIn",
    "AccountUpdateIn",
    "PasswordChangeIn",
    "IdentityOut",
    "ChannelProfileOut",
    # Toggles
    "ToggleService",
    "ToggleKind",
    "ToggleResult",
    # Videos
    "VideoService",
    "VideoPublishIn",
    "VideoUpdateIn",
    "VideoQueryIn",
    "VideoOut",
    "WatchEntryOut",
    # Comments
    "CommentService",
    "CommentIn",
    "CommentOut",
    # Playlists
    "PlaylistService",
    "PlaylistIn",
    "PlaylistOut",
    # Dashboard
    "DashboardService",
    "ChannelStatsOut",
]
