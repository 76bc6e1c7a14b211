# donorlink/services/session/dto.py
from __future__ import annotations

from dataclasses import dataclass

from donorlink.services._shared.dto import AccountOut, ProfileOut
from donorlink.services._shared.roles import Role

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class CredentialsIn:
    """
    Email and password, used for login and as the authorization of
    self-service update/delete.

    :param email: Login email.
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class PhoneUpdateIn:
    """
    Input DTO for the self-service phone update.

    :param email: Login email.
    :param password: Raw password (re-verified before the write).
    :param phone_number: New number; ``None`` clears it.
    """

    email: str
    password: str
    phone_number: str | None


@dataclass(frozen=True, slots=True)
class AccountListIn:
    sort: tuple[str, ...] = ()
    limit: int | None = None
    offset: int | None = None


# ---------------------------- Output DTOs --------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Result of a successful login.

    :param account: Account payload (digest stripped).
    :param role: Role resolved from profile presence.
    :param token: Access token bound to ``(account.id, role)``.
    """

    account: AccountOut
    role: Role
    token: str


@dataclass(frozen=True, slots=True)
class WhoAmIOut:
    account_id: int
    role: Role
    profile: ProfileOut | None
