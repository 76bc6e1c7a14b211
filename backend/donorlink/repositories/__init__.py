"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from donorlink.repositories.account import AccountRepository, PendingAccountRepository
from donorlink.repositories.base import BaseRepository, parse_sort_tokens
from donorlink.repositories.profile import (
    DonationCenterProfileRepository,
    PendingDonationCenterProfileRepository,
    UserProfileRepository,
)

__all__ = [
    # Base
    "BaseRepository",
    "parse_sort_tokens",
    # Domain
    "AccountRepository",
    "PendingAccountRepository",
    "UserProfileRepository",
    "DonationCenterProfileRepository",
    "PendingDonationCenterProfileRepository",
]
