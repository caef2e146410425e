"""User repository: lookups, profile updates and refresh-token bookkeeping."""

from __future__ import annotations

from typing import cast

from sqlalchemy import or_, select, update

from vidhub.models.user import User
from vidhub.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Never issues or verifies tokens; it only stores the current refresh
    token string so the session layer can rotate and revoke it.
    """

    model = User

    # ---------------------------- Whitelists ----------------------------

    def _sortable_fields(self):
        return {
            "id": User.id,
            "username": User.username,
            "created_at": User.created_at,
        }

    def _filterable_fields(self):
        return {
            "email": User.email,
            "username": User.username,
        }

    def _updatable_fields(self):
        """Profile fields. Password and refresh token have dedicated methods."""
        return {"full_name", "email", "avatar_url", "cover_image_url"}

    # ---------------------------- Lookups ----------------------------

    def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username.strip().lower())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def find_by_handle_or_email(
        self, *, username: str | None = None, email: str | None = None
    ) -> User | None:
        """
        Find the user whose username **or** email matches.

        :param username: Handle, compared after trimming and lowercasing.
        :param email: Email, compared after trimming and lowercasing.
        :returns: First matching user, or ``None`` when neither is given.
        """
        clauses = []
        if username:
            clauses.append(User.username == username.strip().lower())
        if email:
            clauses.append(User.email == email.strip().lower())
        if not clauses:
            return None
        stmt = select(User).where(or_(*clauses)).order_by(User.id)
        return cast(User | None, self.session.execute(stmt).scalars().first())

    # ---------------------------- Password ----------------------------

    def update_password(self, user: User, new_password: str) -> None:
        user.password = new_password  # setter hashes
        self.flush()

    # ---------------------------- Refresh token ----------------------------

    def set_refresh_token(self, user_id: int, token: str) -> None:
        """Overwrite the stored refresh token (login)."""
        self.session.execute(
            update(User)
            .where(User.id == user_id)
            .values(refresh_token=token)
            .execution_options(synchronize_session=False)
        )

    def rotate_refresh_token(self, user_id: int, presented: str, new_token: str) -> bool:
        """
        Replace ``presented`` with ``new_token`` in one conditional UPDATE.

        Only one of several concurrent refreshes presenting the same token
        can match the ``WHERE`` clause.

        :returns: ``True`` when the stored token equalled ``presented``.
        """
        result = self.session.execute(
            update(User)
            .where(User.id == user_id, User.refresh_token == presented)
            .values(refresh_token=new_token)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def clear_refresh_token(self, user_id: int) -> bool:
        """Set the stored refresh token to ``NULL`` (logout)."""
        result = self.session.execute(
            update(User)
            .where(User.id == user_id)
            .values(refresh_token=None)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
