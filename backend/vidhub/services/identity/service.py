"""
IdentityService
===============

Credential store operations on the ``User`` aggregate:

- registration with credential policies and uniqueness mapping,
- profile, password and image updates (owner only),
- public channel profiles.

Token issuance lives in :mod:`vidhub.services.auth.service`.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError

from vidhub.models.user import User
from vidhub.repositories.user import UserRepository
from vidhub.services._shared.base import BaseService, ServiceContext
from vidhub.services._shared.errors import (
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
    violates,
)
from vidhub.services._shared.policies import (
    check_password_strength,
    normalize_email,
    normalize_username,
)
from vidhub.services._shared.ports.object_storage import ObjectStorage, UploadedFile
from vidhub.services.identity.dto import (
    AccountUpdateIn,
    ChannelProfileOut,
    IdentityOut,
    PasswordChangeIn,
    RegisterIn,
    identity_out,
)

logger = logging.getLogger(__name__)


def _raise_conflict(exc: IntegrityError) -> None:
    if violates(exc, "uq_users_email"):
        raise ConflictError("User", "this email already exists") from exc
    if violates(exc, "uq_users_username"):
        raise ConflictError("User", "this username already exists") from exc


class IdentityService(BaseService):
    """
    Application service for the ``User`` aggregate.

    :param storage: Object storage for avatars and cover images. Only the
        image operations need it.
    :param ctx: Request context; ``ctx.actor_id`` is the authenticated user.
    """

    def __init__(
        self,
        *,
        storage: ObjectStorage | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.storage = storage

    # --------------------------------------------------------------------- #
    # Storage helpers
    # --------------------------------------------------------------------- #

    def _require_storage(self) -> ObjectStorage:
        if self.storage is None:
            raise InternalError("Object storage is not configured")
        return self.storage

    def _store(self, file: UploadedFile | None, folder: str) -> str | None:
        if file is None or not file.filename:
            return None
        return self._require_storage().upload(file, folder=folder).url

    def _discard(self, *urls: str | None) -> None:
        for url in urls:
            if url and self.storage is not None:
                self.storage.delete(url)

    # --------------------------------------------------------------------- #
    # Registration
    # --------------------------------------------------------------------- #

    def register(self, dto: RegisterIn) -> IdentityOut:
        """
        Create an identity.

        :raises ValidationError: Blank field, weak password, bad handle or email.
        :raises ConflictError: Username or email already taken.
        """
        if any(not (v or "").strip() for v in (dto.username, dto.email, dto.full_name)):
            raise ValidationError("All fields are required")
        if not dto.password:
            raise ValidationError("All fields are required")
        username = normalize_username(dto.username)
        email = normalize_email(dto.email)
        check_password_strength(dto.password)

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            if repo.find_by_handle_or_email(username=username, email=email) is not None:
                raise ConflictError("User", "this email or username already exists")

            avatar_url = self._store(dto.avatar, "avatars")
            cover_url = self._store(dto.cover_image, "covers")
            try:
                user = repo.add(
                    User(
                        username=username,
                        email=email,
                        full_name=dto.full_name,
                        password=dto.password,
                        avatar_url=avatar_url,
                        cover_image_url=cover_url,
                    )
                )
            except IntegrityError as exc:
                self._discard(avatar_url, cover_url)
                _raise_conflict(exc)
                raise
            out = identity_out(user)

        logger.info("User registered", extra={"actor_id": out.id, "resource": "User"})
        return out

    # --------------------------------------------------------------------- #
    # Retrieval
    # --------------------------------------------------------------------- #

    def get_identity(self, user_id: int) -> IdentityOut:
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return identity_out(user)

    def channel_profile(self, username: str) -> ChannelProfileOut:
        """
        Public channel page for ``username``.

        ``is_subscribed`` reflects the calling actor and is ``False`` for
        anonymous callers.
        """
        with self.ro_uow() as uow:
            user = uow.users.get_by_username(username)
            if user is None:
                raise NotFoundError("Channel", username)
            viewer = self.ctx.actor_id
            return ChannelProfileOut(
                id=user.id,
                username=user.username,
                full_name=user.full_name,
                avatar_url=user.avatar_url,
                cover_image_url=user.cover_image_url,
                subscribers_count=uow.subscriptions.count_subscribers(user.id),
                channels_subscribed_to_count=uow.subscriptions.count_subscriptions(user.id),
                is_subscribed=(
                    viewer is not None and uow.subscriptions.is_subscribed(viewer, user.id)
                ),
            )

    # --------------------------------------------------------------------- #
    # Account updates (owner only)
    # --------------------------------------------------------------------- #

    def update_account(self, user_id: int, dto: AccountUpdateIn) -> IdentityOut:
        """
        Change full name and/or email of ``user_id``.

        :raises NotFoundError: Unknown user.
        :raises AuthorizationError: Actor is not ``user_id``.
        :raises ConflictError: Email taken.
        """
        updates: dict[str, Any] = {}
        if dto.full_name is not None:
            if not dto.full_name.strip():
                raise ValidationError("Full name cannot be blank")
            updates["full_name"] = dto.full_name
        if dto.email is not None:
            updates["email"] = normalize_email(dto.email)
        if not updates:
            raise ValidationError("Nothing to update")

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = self.ensure_owner(repo.get_for_update(user_id), entity="User", key=user_id)
            try:
                repo.update(user, **updates)
            except IntegrityError as exc:
                _raise_conflict(exc)
                raise
            out = identity_out(user)

        logger.info("Account updated", extra={"actor_id": user_id, "resource": "User"})
        return out

    def change_password(self, user_id: int, dto: PasswordChangeIn) -> None:
        """
        Replace the password after verifying the old one.

        :raises ValidationError: Old password wrong or new password too weak.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = self.ensure_owner(repo.get_for_update(user_id), entity="User", key=user_id)
            if not user.verify_password(dto.old_password):
                raise ValidationError("Invalid old password")
            check_password_strength(dto.new_password)
            repo.update_password(user, dto.new_password)

        logger.info("Password changed", extra={"actor_id": user_id, "resource": "User"})

    def update_avatar(self, user_id: int, file: UploadedFile | None) -> IdentityOut:
        return self._replace_image(user_id, file, field="avatar_url", folder="avatars")

    def update_cover_image(self, user_id: int, file: UploadedFile | None) -> IdentityOut:
        return self._replace_image(user_id, file, field="cover_image_url", folder="covers")

    def _replace_image(
        self, user_id: int, file: UploadedFile | None, *, field: str, folder: str
    ) -> IdentityOut:
        # the previous blob is deleted only once the new URL is committed
        if file is None or not file.filename:
            raise ValidationError("Image file is missing")
        new_url: str | None = None
        try:
            with self.rw_uow() as uow:
                repo: UserRepository = uow.users
                user = self.ensure_owner(repo.get_for_update(user_id), entity="User", key=user_id)
                previous = getattr(user, field)
                new_url = self._store(file, folder)
                repo.update(user, **{field: new_url})
                out = identity_out(user)
        except Exception:
            self._discard(new_url)
            raise

        self._discard(previous)
        logger.info("Profile image replaced", extra={"actor_id": user_id, "resource": field})
        return out
