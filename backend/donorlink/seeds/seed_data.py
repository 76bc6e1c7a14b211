"""Idempotent database seed helpers for local development environments."""

from __future__ import annotations

import logging
from typing import Any, cast

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from donorlink.infra.security.werkzeug_password_hasher import WerkzeugPasswordHasher
from donorlink.models.account import Account, DonationCenterProfile, UserProfile
from donorlink.models.pending import PendingAccount, PendingDonationCenterProfile

LOGGER = logging.getLogger(__name__)

USER_FIXTURES: list[dict[str, Any]] = [
    {
        "email": "alex.martinez@example.com",
        "username": "alexm",
        "password": "devPass123!",
        "phone_number": "+34 600 000 001",
        "profile": {"first_name": "Alex", "last_name": "Martinez"},
    },
    {
        "email": "jamie.lee@example.com",
        "username": "jamielee",
        "password": "strongPass123",
        "phone_number": None,
        "profile": {"first_name": "Jamie", "last_name": "Lee"},
    },
]

DONATION_CENTER_FIXTURES: list[dict[str, Any]] = [
    {
        "email": "central.bank@example.com",
        "username": "centralbank",
        "password": "giveBlood2024",
        "phone_number": "+34 910 000 000",
        "profile": {
            "organization_name": "Central Blood Bank",
            "address": "Calle Mayor 1",
            "city": "Madrid",
            "description": "Walk-in donations Monday to Saturday.",
            "website": "https://central-bank.example.com",
        },
    },
]

PENDING_FIXTURES: list[dict[str, Any]] = [
    {
        "email": "north.clinic@example.com",
        "username": "northclinic",
        "password": "pendingPass1",
        "phone_number": None,
        "profile": {
            "organization_name": "North Clinic Donor Unit",
            "address": "Avenida Norte 42",
            "city": "Bilbao",
            "description": None,
            "website": None,
        },
    },
]


def _session(database: SQLAlchemy) -> Session:
    """Return the current SQLAlchemy session."""
    return cast(Session, database.session)


def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    """Update summary counters for the given table."""
    entry = summary.setdefault(table, {"created": 0, "existing": 0})
    if created:
        entry["created"] += 1
    else:
        entry["existing"] += 1


def _identity(fixture: dict[str, Any], hasher: WerkzeugPasswordHasher) -> dict[str, Any]:
    return {
        "email": str(fixture["email"]).strip().lower(),
        "username": str(fixture["username"]),
        "password_hash": hasher.hash(str(fixture["password"])),
        "phone_number": fixture.get("phone_number"),
    }


def seed_accounts(
    database: SQLAlchemy, *, hasher: WerkzeugPasswordHasher, verbose: bool = False
) -> dict[str, dict[str, int]]:
    """Create active users and donation centers with their profiles."""
    if verbose:
        LOGGER.info("Seeding active accounts...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}

    groups = (
        (USER_FIXTURES, UserProfile, "user_profiles"),
        (DONATION_CENTER_FIXTURES, DonationCenterProfile, "donation_center_profiles"),
    )
    with session.begin():
        for fixtures, profile_model, profile_table in groups:
            for fixture in fixtures:
                email = str(fixture["email"]).strip().lower()
                account = session.execute(
                    select(Account).filter_by(email=email)
                ).scalar_one_or_none()
                created = account is None
                if account is None:
                    account = Account(**_identity(fixture, hasher))
                    session.add(account)
                    session.flush()
                    session.add(profile_model(id=account.id, **fixture["profile"]))
                    session.flush()
                _touch(summary, "accounts", created)
                _touch(summary, profile_table, created)

    return summary


def seed_pending(
    database: SQLAlchemy, *, hasher: WerkzeugPasswordHasher, verbose: bool = False
) -> dict[str, dict[str, int]]:
    """Create donation-center signups awaiting approval."""
    if verbose:
        LOGGER.info("Seeding pending donation centers...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}

    with session.begin():
        for fixture in PENDING_FIXTURES:
            email = str(fixture["email"]).strip().lower()
            pending = session.execute(
                select(PendingAccount).filter_by(email=email)
            ).scalar_one_or_none()
            active = session.execute(
                select(Account.id).filter_by(email=email)
            ).first()
            created = pending is None and active is None
            if created:
                pending = PendingAccount(**_identity(fixture, hasher))
                session.add(pending)
                session.flush()
                session.add(PendingDonationCenterProfile(id=pending.id, **fixture["profile"]))
                session.flush()
            _touch(summary, "pending_accounts", created)

    return summary


def run_all(
    database: SQLAlchemy, *, hash_method: str = "scrypt", verbose: bool = False
) -> dict[str, dict[str, int]]:
    """Run all seeders in foreign-key order."""
    if verbose:
        LOGGER.info("Running full seed pipeline...")
    hasher = WerkzeugPasswordHasher(method=hash_method)
    combined: dict[str, dict[str, int]] = {}
    for func in (seed_accounts, seed_pending):
        result = func(database, hasher=hasher, verbose=verbose)
        for table, counters in result.items():
            entry = combined.setdefault(table, {"created": 0, "existing": 0})
            entry["created"] += counters.get("created", 0)
            entry["existing"] += counters.get("existing", 0)
    return combined


__all__ = ["seed_accounts", "seed_pending", "run_all"]
