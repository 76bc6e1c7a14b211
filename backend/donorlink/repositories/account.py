"""Account repositories for active and pending identities."""

from __future__ import annotations

from typing import Generic, TypeVar, cast

from sqlalchemy import or_, select

from donorlink.models.account import Account
from donorlink.models.pending import PendingAccount
from donorlink.repositories.base import BaseRepository

A = TypeVar("A", Account, PendingAccount)


class _IdentityLookups(BaseRepository[A], Generic[A]):
    """Email/username lookups shared by both account tables."""

    def _sortable_fields(self):
        return {
            "id": self.model.id,
            "email": self.model.email,
            "username": self.model.username,
            "created_at": self.model.created_at,
        }

    def get_by_email(self, email: str) -> A | None:
        """Fetch an account by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: Account instance or ``None`` when not found.
        """
        stmt = select(self.model).where(self.model.email == email.lower().strip())
        return cast(A | None, self.session.execute(stmt).scalars().first())

    def find_duplicate(self, email: str, username: str) -> A | None:
        """Return a row sharing ``email`` or ``username``, preferring the email match.

        :param email: Candidate email (normalized before comparison).
        :param username: Candidate username (trimmed before comparison).
        :returns: Conflicting row, or ``None`` when both values are free.
        """
        norm_email = email.lower().strip()
        stmt = (
            select(self.model)
            .where(or_(self.model.email == norm_email, self.model.username == username.strip()))
        )
        rows = list(self.session.execute(stmt).scalars().all())
        for row in rows:
            if row.email == norm_email:
                return row
        return rows[0] if rows else None


class AccountRepository(_IdentityLookups[Account]):
    """Persistence-only repository for :class:`Account`.

    Deleting an account relies on the store's ``ON DELETE CASCADE`` to remove
    its profile row.
    """

    model = Account

    def _updatable_fields(self):
        """Self-service may only change the phone number."""
        return {"phone_number"}


class PendingAccountRepository(_IdentityLookups[PendingAccount]):
    """Repository for :class:`PendingAccount`. Rows are insert/delete only."""

    model = PendingAccount
