"""Tests for the ``flask seed`` command group."""

from __future__ import annotations

from sqlalchemy import func, select

from donorlink.models import (
    Account,
    DonationCenterProfile,
    PendingAccount,
    PendingDonationCenterProfile,
    UserProfile,
)


def _count(session, model) -> int:
    return session.scalar(select(func.count()).select_from(model))


def test_seed_run_creates_demo_rows(app, session):
    result = app.test_cli_runner().invoke(args=["seed", "run"])

    assert result.exit_code == 0, result.output
    assert "Seed summary:" in result.output
    assert _count(session, Account) == 3
    assert _count(session, UserProfile) == 2
    assert _count(session, DonationCenterProfile) == 1
    assert _count(session, PendingAccount) == 1
    assert _count(session, PendingDonationCenterProfile) == 1


def test_seed_run_is_idempotent(app, session):
    runner = app.test_cli_runner()
    runner.invoke(args=["seed", "run"])
    session.rollback()

    result = runner.invoke(args=["seed", "run"])

    assert result.exit_code == 0, result.output
    assert "existing= 3" in result.output
    assert _count(session, Account) == 3


def test_seeded_user_can_log_in(app, client):
    app.test_cli_runner().invoke(args=["seed", "run"])

    resp = client.post(
        "/api/v1/auth/login",
        json={"email": "alex.martinez@example.com", "password": "devPass123!"},
    )

    assert resp.status_code == 200
    assert resp.get_json()["role"] == "user"


def test_seed_fresh_requires_confirmation(app, db):
    result = app.test_cli_runner().invoke(args=["seed", "fresh"], input="n\n")

    assert result.exit_code != 0


def test_seed_fresh_recreates_schema(app, session):
    runner = app.test_cli_runner()
    runner.invoke(args=["seed", "run"])
    session.rollback()

    result = runner.invoke(args=["seed", "fresh", "--yes"])

    assert result.exit_code == 0, result.output
    assert "created= 3" in result.output
    assert _count(session, Account) == 3
