"""
DTOs for ProvisioningService.

Contracts for signup (direct or pending), approval and rejection.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from donorlink.services._shared.dto import AccountOut, ProfileOut
from donorlink.services._shared.roles import Role

SIGNUP_ACTIVE = "active"
SIGNUP_PENDING = "pending"

# --------------------------------------------------------------------------- #
# Input
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class AccountFieldsIn:
    """
    Identity fields submitted at signup.

    :param email: Login email (normalized by the model).
    :type email: str
    :param username: Public handle.
    :type username: str
    :param password: Raw password; hashed before any write.
    :type password: str
    :param phone_number: Optional contact number.
    :type phone_number: str | None
    """

    email: str
    username: str
    password: str
    phone_number: str | None = None


@dataclass(frozen=True, slots=True)
class SignupIn:
    """
    Input payload for signup.

    :param role: Target role; decides between direct and pending signup.
    :type role: :class:`Role`
    :param account: Identity fields.
    :type account: :class:`AccountFieldsIn`
    :param profile: Role-specific profile columns, already validated.
    :type profile: Mapping[str, Any]
    """

    role: Role
    account: AccountFieldsIn
    profile: Mapping[str, Any] = field(default_factory=dict)


# --------------------------------------------------------------------------- #
# Output
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class SignupOut:
    """
    Result of signup.

    ``status`` is ``"active"`` for users (account, profile and token set) and
    ``"pending"`` for donation centers (only ``pending_id`` set).
    """

    status: str
    account: AccountOut | None = None
    profile: ProfileOut | None = None
    token: str | None = None
    pending_id: int | None = None

    @property
    def is_pending(self) -> bool:
        return self.status == SIGNUP_PENDING


@dataclass(frozen=True, slots=True)
class ApprovalOut:
    """
    Result of promoting a pending pair.

    :param pending_id: Identifier the pair had while pending.
    :param account: Newly created active account.
    :param notified: Whether the approval email was handed off.
    """

    pending_id: int
    account: AccountOut
    notified: bool


@dataclass(frozen=True, slots=True)
class RejectionOut:
    pending_id: int
    email: str
    notified: bool
