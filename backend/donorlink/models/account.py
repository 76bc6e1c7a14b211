"""Active account and role-specific profile models."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, Integer, String, UniqueConstraint, event
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


class Account(PKMixin, ReprMixin, TimestampMixin, AccountColumnsMixin, db.Model):
    """
    Core identity shared by users and donation centers.

    The role is never stored here. It is derived from which profile table
    holds a row with the same primary key (see
    :func:`donorlink.services._shared.roles.resolve_role`). Ids come from
    :class:`~donorlink.models.identity.AccountId` unless set explicitly.
    """

    __tablename__ = "accounts"

    __table_args__ = (
        UniqueConstraint("email", name="uq_accounts_email"),
        UniqueConstraint("username", name="uq_accounts_username"),
        Index("ix_accounts_email", "email"),
    )


event.listen(Account, "before_insert", assign_account_id)


class UserProfile(ReprMixin, TimestampMixin, db.Model):
    """
    Profile of an ordinary user.

    Shares its primary key with :class:`Account`; deleting the account
    removes the profile through ``ON DELETE CASCADE``.
    """

    __tablename__ = "user_profiles"

    id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        primary_key=True,
    )
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)


class DonationCenterProfile(ReprMixin, TimestampMixin, DonationCenterColumnsMixin, db.Model):
    """Profile of an approved donation center, keyed by its account id."""

    __tablename__ = "donation_center_profiles"

    id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        primary_key=True,
    )
