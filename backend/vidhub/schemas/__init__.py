"""Convenience exports for API schemas."""

from __future__ import annotations

from .auth import IdentitySchema, LoginSchema, RegisterSchema, SessionSchema
from .comment import CommentInSchema, CommentSchema
from .common import PageMetaSchema, PaginationQuerySchema, UserSummarySchema, page_schema
from .playlist import PlaylistCreateSchema, PlaylistSchema, PlaylistUpdateSchema
from .relations import ToggleResultSchema
from .user import AccountUpdateSchema, ChannelProfileSchema, PasswordChangeSchema
from .video import (
    ChannelStatsSchema,
    VideoPublishSchema,
    VideoQuerySchema,
    VideoSchema,
    VideoUpdateSchema,
    WatchEntrySchema,
)

__all__ = [
    "AccountUpdateSchema",
    "ChannelProfileSchema",
    "ChannelStatsSchema",
    "CommentInSchema",
    "CommentSchema",
    "IdentitySchema",
    "LoginSchema",
    "PageMetaSchema",
    "PaginationQuerySchema",
    "PasswordChangeSchema",
    "PlaylistCreateSchema",
    "PlaylistSchema",
    "PlaylistUpdateSchema",
    "RegisterSchema",
    "SessionSchema",
    "ToggleResultSchema",
    "UserSummarySchema",
    "VideoPublishSchema",
    "VideoQuerySchema",
    "VideoSchema",
    "VideoUpdateSchema",
    "WatchEntrySchema",
    "page_schema",
]
