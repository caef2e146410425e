"""
DTOs for IdentityService.

Input DTOs carry raw request values; output DTOs never expose the password
hash or the stored refresh token.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from vidhub.services._shared.ports.object_storage import UploadedFile

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for registration.

    :param username: Desired handle (trimmed and lowercased before storage).
    :param email: Login email.
    :param full_name: Display name.
    :param password: Raw password; hashed by the model setter.
    :param avatar: Optional avatar upload.
    :param cover_image: Optional cover image upload.
    """

    username: str
    email: str
    full_name: str
    password: str
    avatar: UploadedFile | None = None
    cover_image: UploadedFile | None = None


@dataclass(frozen=True, slots=True)
class AccountUpdateIn:
    """Profile fields to change; ``None`` leaves a field untouched."""

    full_name: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class PasswordChangeIn:
    old_password: str
    new_password: str


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class IdentityOut:
    """
    Public identity projection.

    :param id: User id.
    :param username: Handle.
    :param email: Email.
    :param full_name: Display name.
    :param avatar_url: Avatar URL, if any.
    :param cover_image_url: Cover image URL, if any.
    :param created_at: Registration time.
    """

    id: int
    username: str
    email: str
    full_name: str
    avatar_url: str | None
    cover_image_url: str | None
    created_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class ChannelProfileOut:
    """A user's public channel page with subscription counters."""

    id: int
    username: str
    full_name: str
    avatar_url: str | None
    cover_image_url: str | None
    subscribers_count: int
    channels_subscribed_to_count: int
    is_subscribed: bool


def identity_out(user) -> IdentityOut:
    return IdentityOut(
        id=user.id,
        username=user.username,
        email=user.email,
        full_name=user.full_name,
        avatar_url=user.avatar_url,
        cover_image_url=user.cover_image_url,
        created_at=user.created_at,
    )
