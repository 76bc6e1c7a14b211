"""Account roles and the single place where they are derived."""

from __future__ import annotations

from enum import Enum

from donorlink.repositories.profile import UserProfileRepository


class Role(str, Enum):
    """Tagged role carried in tokens and responses; never stored as a column."""

    USER = "user"
    DONATION_CENTER = "donation_center"


def resolve_role(user_profiles: UserProfileRepository, account_id: int) -> Role:
    """
    Derive the role of ``account_id`` from relation presence.

    An id present in the user-profile table is a :attr:`Role.USER`; every
    other account is a :attr:`Role.DONATION_CENTER`.

    :param user_profiles: Repository bound to the caller's unit of work.
    :param account_id: Active account identifier.
    :returns: The resolved role.
    """
    if user_profiles.contains(account_id):
        return Role.USER
    return Role.DONATION_CENTER
