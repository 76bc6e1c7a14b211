"""Convenience exports for application schemas."""

from __future__ import annotations

from .account import (
    AccountListQuerySchema,
    AccountSchema,
    DonationCenterProfileSchema,
    UserProfileSchema,
    dump_account,
    dump_profile,
)
from .auth import (
    DonationCenterSignupSchema,
    LoginSchema,
    PhoneUpdateSchema,
    SignupQuerySchema,
    UserSignupSchema,
    WhoAmISchema,
)
from .common import SortQuerySchema

__all__ = [
    "AccountSchema",
    "AccountListQuerySchema",
    "UserProfileSchema",
    "DonationCenterProfileSchema",
    "dump_account",
    "dump_profile",
    "SignupQuerySchema",
    "UserSignupSchema",
    "DonationCenterSignupSchema",
    "LoginSchema",
    "PhoneUpdateSchema",
    "WhoAmISchema",
    "SortQuerySchema",
]
