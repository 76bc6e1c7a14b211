"""Tests for the profile repositories and role resolution."""

from __future__ import annotations

from donorlink.repositories import (
    DonationCenterProfileRepository,
    PendingDonationCenterProfileRepository,
    UserProfileRepository,
)
from donorlink.services._shared.roles import Role, resolve_role
from tests.factories.account import (
    AccountFactory,
    DonationCenterAccountFactory,
    PendingPairFactory,
    UserAccountFactory,
)


def test_contains_only_user_profiles(session):
    repo = UserProfileRepository(session=session)
    user = UserAccountFactory()
    center = DonationCenterAccountFactory()

    assert repo.contains(user.id)
    assert not repo.contains(center.id)


def test_resolve_role_from_profile_presence(session):
    repo = UserProfileRepository(session=session)
    user = UserAccountFactory()
    center = DonationCenterAccountFactory()
    bare = AccountFactory()

    assert resolve_role(repo, user.id) is Role.USER
    assert resolve_role(repo, center.id) is Role.DONATION_CENTER
    # No user row means donation center, even without a profile.
    assert resolve_role(repo, bare.id) is Role.DONATION_CENTER


def test_donation_center_profile_shares_account_id(session):
    center = DonationCenterAccountFactory()

    profile = DonationCenterProfileRepository(session=session).get(center.id)

    assert profile is not None
    assert profile.organization_name.startswith("Donation Center")


def test_pending_profile_pop(session):
    repo = PendingDonationCenterProfileRepository(session=session)
    pending = PendingPairFactory()
    pending_id = pending.id

    popped = repo.pop(pending_id)

    assert popped.profile_fields()["organization_name"].startswith("Pending Center")
    assert repo.get(pending_id) is None
