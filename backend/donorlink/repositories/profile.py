"""Role-specific profile repositories."""

from __future__ import annotations

from sqlalchemy import select

from donorlink.models.account import DonationCenterProfile, UserProfile
from donorlink.models.pending import PendingDonationCenterProfile
from donorlink.repositories.base import BaseRepository


class UserProfileRepository(BaseRepository[UserProfile]):
    """Repository for :class:`UserProfile` (one row per user account)."""

    model = UserProfile

    def contains(self, account_id: int) -> bool:
        """Return ``True`` when ``account_id`` has a user profile row.

        This presence test is the single source of role information.
        """
        stmt = select(UserProfile.id).where(UserProfile.id == account_id)
        return self.session.execute(stmt).first() is not None


class DonationCenterProfileRepository(BaseRepository[DonationCenterProfile]):
    """Repository for :class:`DonationCenterProfile`."""

    model = DonationCenterProfile


class PendingDonationCenterProfileRepository(BaseRepository[PendingDonationCenterProfile]):
    """Repository for :class:`PendingDonationCenterProfile`."""

    model = PendingDonationCenterProfile
