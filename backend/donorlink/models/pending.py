"""Shadow tables holding donation-center signups awaiting an admin decision."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, UniqueConstraint, event
from sqlalchemy.orm import Mapped, mapped_column

from donorlink.core.extensions import db

from .base import (
    AccountColumnsMixin,
    DonationCenterColumnsMixin,
    PKMixin,
    ReprMixin,
    TimestampMixin,
)
from .identity import assign_account_id


class PendingAccount(PKMixin, ReprMixin, TimestampMixin, AccountColumnsMixin, db.Model):
    """
    Structural twin of :class:`~donorlink.models.account.Account`.

    Rows are inserted on signup and removed by approval or rejection; they are
    never updated in place. The id is drawn from the same allocator as active
    accounts and survives promotion unchanged.
    """

    __tablename__ = "pending_accounts"

    __table_args__ = (
        UniqueConstraint("email", name="uq_pending_accounts_email"),
        UniqueConstraint("username", name="uq_pending_accounts_username"),
    )


event.listen(PendingAccount, "before_insert", assign_account_id)


class PendingDonationCenterProfile(
    ReprMixin, TimestampMixin, DonationCenterColumnsMixin, db.Model
):
    """
    Organization details submitted with a pending signup.

    The foreign key is checked at commit (``DEFERRABLE INITIALLY DEFERRED``)
    and does not cascade: a promotion deletes the pending account before its
    profile inside one transaction, and rejection deletes both explicitly.
    """

    __tablename__ = "pending_donation_center_profiles"

    id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("pending_accounts.id", deferrable=True, initially="DEFERRED"),
        primary_key=True,
    )
