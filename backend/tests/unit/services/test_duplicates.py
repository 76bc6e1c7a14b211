"""Unit tests for unique-violation classification."""

from __future__ import annotations

import sqlite3

import pytest
from sqlalchemy.exc import IntegrityError

from donorlink.services._shared.duplicates import (
    DuplicateConflictError,
    DuplicateKind,
    classify_duplicate,
    duplicate_from_row,
)


class _PgError(Exception):
    """Stand-in for a psycopg error carrying a SQLSTATE."""

    def __init__(self, message: str, pgcode: str) -> None:
        super().__init__(message)
        self.pgcode = pgcode


def _integrity(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT INTO accounts ...", {}, orig)


class TestClassifyDuplicate:
    def test_sqlite_email(self):
        exc = _integrity(sqlite3.IntegrityError("UNIQUE constraint failed: accounts.email"))
        assert classify_duplicate(exc) == DuplicateKind.email()

    def test_sqlite_username_on_pending_table(self):
        exc = _integrity(
            sqlite3.IntegrityError("UNIQUE constraint failed: pending_accounts.username")
        )
        kind = classify_duplicate(exc)
        assert kind == DuplicateKind.other("username")
        assert not kind.is_email

    def test_postgres_detail_line(self):
        exc = _integrity(
            _PgError(
                'duplicate key value violates unique constraint "uq_accounts_username"\n'
                "DETAIL:  Key (username)=(a) already exists.",
                pgcode="23505",
            )
        )
        assert classify_duplicate(exc) == DuplicateKind.other("username")

    def test_postgres_constraint_name_only(self):
        exc = _integrity(
            _PgError(
                'duplicate key value violates unique constraint "uq_pending_accounts_email"',
                pgcode="23505",
            )
        )
        assert classify_duplicate(exc) == DuplicateKind.email()

    def test_mysql_duplicate_entry(self):
        exc = _integrity(
            Exception("(1062, \"Duplicate entry 'a@x.com' for key 'accounts.uq_accounts_email'\")")
        )
        assert classify_duplicate(exc) == DuplicateKind.email()

    @pytest.mark.parametrize(
        "orig",
        [
            sqlite3.IntegrityError("NOT NULL constraint failed: accounts.username"),
            sqlite3.IntegrityError("FOREIGN KEY constraint failed"),
            _PgError('insert violates foreign key constraint "fk_user_profiles_id_accounts"', "23503"),
        ],
    )
    def test_non_unique_errors_are_not_classified(self, orig):
        assert classify_duplicate(_integrity(orig)) is None


class TestDuplicateConflictError:
    def test_email_message(self):
        err = DuplicateConflictError(DuplicateKind.email())
        assert str(err) == "This account already exists, please login"

    def test_other_message_names_the_column(self):
        err = DuplicateConflictError(DuplicateKind.other("username"))
        assert str(err) == "This username is unavailable"

    def test_from_row_prefers_email(self):
        class Row:
            email = "a@x.com"
            username = "a"

        assert duplicate_from_row(Row(), " A@X.com ").kind.is_email
        assert duplicate_from_row(Row(), "other@x.com").kind == DuplicateKind.other("username")
