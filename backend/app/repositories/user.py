"""User repository: credential store persistence."""

from __future__ import annotations

from typing import cast

from sqlalchemy import func, or_, select, update

from app.models.user import User
from app.repositories.base import BaseRepository


def _norm(value: str) -> str:
    return value.strip().lower()


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Lookups normalize identifiers the same way the model validators do, so a
    username matches regardless of case. It NEVER issues tokens; it only
    stores the refresh-token digest it is handed.
    """

    model = User

    # Profile and media columns; never the password hash or refresh digest
    updatable = frozenset({"full_name", "email", "avatar_url", "cover_image_url"})

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_username(self, username: str) -> User | None:
        """Fetch a user by username (case-insensitive).

        :param username: Username to normalise and search.
        :type username: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(func.lower(User.username) == _norm(username))
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive)."""
        stmt = select(User).where(User.email == _norm(email))
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def find_by_username_or_email(
        self, *, username: str | None = None, email: str | None = None
    ) -> User | None:
        """Return the first user whose username OR email matches.

        Blank identifiers are ignored; ``None`` when both are blank.
        """
        clauses = []
        if username and username.strip():
            clauses.append(func.lower(User.username) == _norm(username))
        if email and email.strip():
            clauses.append(User.email == _norm(email))
        if not clauses:
            return None
        stmt = select(User).where(or_(*clauses)).order_by(User.id)
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_username_or_email(self, *, username: str, email: str) -> bool:
        """Return ``True`` when either identifier is already taken."""
        return self.find_by_username_or_email(username=username, email=email) is not None

    def email_taken_by_other(self, email: str, user_id: int) -> bool:
        """Return ``True`` when ``email`` belongs to a user other than ``user_id``."""
        return self.exists(User.email == _norm(email), User.id != user_id)

    # ---------------------------- Password ops ----------------------------

    def update_password(self, user: User, new_password: str) -> None:
        """Hash and store a new password, then flush.

        :param user: Loaded user to mutate.
        :type user: User
        :param new_password: Raw password; the model setter hashes it.
        :type new_password: str
        """
        user.password = new_password  # invokes setter → hash
        self.flush()

    # ---------------------------- Refresh token ----------------------------

    def set_refresh_token_hash(self, user: User, digest: str | None) -> None:
        """Overwrite (or clear with ``None``) the stored refresh digest."""
        user.refresh_token_hash = digest
        self.flush()

    def clear_refresh_token(self, user_id: int) -> int:
        """Clear the refresh digest for ``user_id``.

        :returns: Number of rows touched (0 when the user does not exist).
        :rtype: int
        """
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(refresh_token_hash=None)
            .execution_options(synchronize_session="fetch")
        )
        return int(self.session.execute(stmt).rowcount or 0)

    def rotate_refresh_token(self, user_id: int, *, expected: str, new: str) -> bool:
        """Swap the refresh digest only if it still equals ``expected``.

        Single conditional ``UPDATE``: of two concurrent rotations presenting
        the same digest, exactly one observes ``rowcount == 1``.

        :param user_id: Owner of the refresh session.
        :type user_id: int
        :param expected: Digest the caller presented.
        :type expected: str
        :param new: Digest of the newly issued refresh token.
        :type new: str
        :returns: ``True`` when the swap happened.
        :rtype: bool
        """
        stmt = (
            update(User)
            .where(User.id == user_id, User.refresh_token_hash == expected)
            .values(refresh_token_hash=new)
            .execution_options(synchronize_session="fetch")
        )
        return (self.session.execute(stmt).rowcount or 0) == 1
