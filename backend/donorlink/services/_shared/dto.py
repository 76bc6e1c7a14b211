"""
Public-safe DTOs shared by the account workflows.

ORM rows never leave a unit of work; services map them to these frozen
dataclasses while the session is still open. No DTO carries the password
digest.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from donorlink.models.account import Account, DonationCenterProfile, UserProfile


@dataclass(frozen=True, slots=True)
class AccountOut:
    """
    Account payload with the digest stripped.

    :param id: Store-assigned identifier.
    :param email: Normalized email.
    :param username: Public handle.
    :param phone_number: Optional contact number.
    :param created_at: Insert timestamp.
    :param updated_at: Last update timestamp.
    """

    id: int
    email: str
    username: str
    phone_number: str | None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class UserProfileOut:
    id: int
    first_name: str | None = None
    last_name: str | None = None


@dataclass(frozen=True, slots=True)
class DonationCenterProfileOut:
    id: int
    organization_name: str
    address: str | None = None
    city: str | None = None
    description: str | None = None
    website: str | None = None


ProfileOut = UserProfileOut | DonationCenterProfileOut


def to_account_out(account: Account) -> AccountOut:
    """Map an ORM account to :class:`AccountOut`."""
    return AccountOut(
        id=account.id,
        email=account.email,
        username=account.username,
        phone_number=account.phone_number,
        created_at=account.created_at,
        updated_at=account.updated_at,
    )


def to_profile_out(profile: UserProfile | DonationCenterProfile) -> ProfileOut:
    """Map either profile row to its DTO."""
    if isinstance(profile, UserProfile):
        return UserProfileOut(
            id=profile.id, first_name=profile.first_name, last_name=profile.last_name
        )
    return DonationCenterProfileOut(id=profile.id, **profile.profile_fields())
