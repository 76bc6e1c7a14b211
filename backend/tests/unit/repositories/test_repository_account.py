"""Tests for AccountRepository and PendingAccountRepository."""

from __future__ import annotations

import pytest

from donorlink.repositories import AccountRepository, PendingAccountRepository, parse_sort_tokens
from tests.factories.account import AccountFactory, PendingAccountFactory


@pytest.fixture()
def repo(session) -> AccountRepository:
    return AccountRepository(session=session)


def test_parse_sort_tokens():
    assert parse_sort_tokens(["-created_at", " email", "-", ""]) == [
        ("created_at", True),
        ("email", False),
    ]


def test_get_by_email_normalizes_input(repo):
    account = AccountFactory(email="a@x.com")

    assert repo.get_by_email("  A@X.com ") is account
    assert repo.get_by_email("b@x.com") is None


def test_find_duplicate_prefers_email_row(repo):
    by_email = AccountFactory(email="a@x.com", username="first")
    AccountFactory(email="b@x.com", username="second")

    assert repo.find_duplicate("A@x.com", "second") is by_email


def test_find_duplicate_by_username(repo):
    row = AccountFactory(email="a@x.com", username="alice")

    assert repo.find_duplicate("new@x.com", "alice") is row
    assert repo.find_duplicate("new@x.com", "bob") is None


def test_update_whitelists_phone_number(repo):
    account = AccountFactory(phone_number=None)

    repo.update(account, phone_number="+34 600")
    assert account.phone_number == "+34 600"

    with pytest.raises(ValueError, match="non-updatable"):
        repo.update(account, email="evil@x.com")


def test_pop_returns_deleted_row(session):
    repo = PendingAccountRepository(session=session)
    pending = PendingAccountFactory(email="p@x.com")
    pending_id = pending.id

    popped = repo.pop(pending_id)

    assert popped.email == "p@x.com"
    assert repo.get(pending_id) is None
    assert repo.pop(pending_id) is None


def test_pending_repository_is_separate_table(session):
    AccountFactory(email="a@x.com")

    assert PendingAccountRepository(session=session).get_by_email("a@x.com") is None


def test_list_sorts_by_whitelisted_fields(repo):
    AccountFactory(username="bravo")
    AccountFactory(username="alpha")
    AccountFactory(username="charlie")

    names = [row.username for row in repo.list(sort=["username"])]
    assert names == ["alpha", "bravo", "charlie"]

    page = repo.list(sort=["-username"], limit=1, offset=1)
    assert [row.username for row in page] == ["bravo"]

