"""
Duplicate detection for unique-constraint violations.

The store is the only enforcement point for email/username uniqueness. When
two signups race past the pre-check, the loser's insert fails with an
``IntegrityError``; :func:`classify_duplicate` names the column behind it so
the workflow can answer exactly as the pre-check would have.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError

from donorlink.services._shared.errors import ServiceError

EMAIL_COLUMN = "email"

# SQLite: "UNIQUE constraint failed: accounts.email"
_SQLITE_UNIQUE = re.compile(r"unique constraint failed:\s*\w+\.(\w+)")
# PostgreSQL detail line: "Key (email)=(a@x.com) already exists."
_PG_KEY = re.compile(r"key \((\w+)\)=")
# Constraint names from the metadata convention: uq_<table>_<column>
_CONSTRAINT_NAME = re.compile(r"\buq_(\w+)")
# MySQL: "Duplicate entry 'a@x.com' for key 'accounts.uq_accounts_email'"
_MYSQL_DUPLICATE = re.compile(r"duplicate entry .* for key")

_UNIQUE_SQLSTATE = "23505"


@dataclass(frozen=True, slots=True)
class DuplicateKind:
    """
    Which unique column a conflict hit.

    :param column: Offending column name; ``"email"`` for the email case.
    """

    column: str

    @classmethod
    def email(cls) -> DuplicateKind:
        return cls(EMAIL_COLUMN)

    @classmethod
    def other(cls, column: str) -> DuplicateKind:
        return cls(column)

    @property
    def is_email(self) -> bool:
        return self.column == EMAIL_COLUMN


@dataclass(slots=True, eq=False)
class DuplicateConflictError(ServiceError):
    """
    Raised when signup collides with an existing email or other unique value.

    Email collisions are a client mistake ("already have an account"); any
    other column means the identifier belongs to someone else right now.
    """

    kind: DuplicateKind

    def __str__(self) -> str:
        if self.kind.is_email:
            return "This account already exists, please login"
        return f"This {self.kind.column} is unavailable"


def _is_unique_violation(exc: IntegrityError, message: str) -> bool:
    pgcode = getattr(exc.orig, "pgcode", None) or getattr(exc.orig, "sqlstate", None)
    if pgcode is not None:
        return pgcode == _UNIQUE_SQLSTATE
    return (
        "unique" in message
        or "duplicate key" in message
        or _MYSQL_DUPLICATE.search(message) is not None
    )


def _column_from_constraint(fragment: str, known_columns: tuple[str, ...]) -> str:
    # fragment is "<table>_<column>"; tables may contain underscores
    for column in known_columns:
        if fragment.endswith(f"_{column}"):
            return column
    return fragment.rsplit("_", 1)[-1]


def classify_duplicate(
    exc: IntegrityError,
    *,
    known_columns: tuple[str, ...] = (EMAIL_COLUMN, "username"),
) -> DuplicateKind | None:
    """
    Classify a uniqueness violation by the column that triggered it.

    :param exc: Error raised by the store on insert.
    :param known_columns: Column names used to disambiguate constraint names.
    :returns: The duplicate kind, or ``None`` when ``exc`` is not a
        uniqueness violation (callers must re-raise it unchanged).
    """
    message = str(exc.orig).lower() if exc.orig is not None else str(exc).lower()
    if not _is_unique_violation(exc, message):
        return None

    match = _SQLITE_UNIQUE.search(message) or _PG_KEY.search(message)
    if match:
        column = match.group(1)
    else:
        named = _CONSTRAINT_NAME.search(message)
        if named is None:
            return DuplicateKind.other("unknown")
        column = _column_from_constraint(named.group(1), known_columns)

    return DuplicateKind.email() if column == EMAIL_COLUMN else DuplicateKind.other(column)


def duplicate_from_row(row, email: str) -> DuplicateConflictError:
    """Build the conflict for a pre-check hit: email wins over any other column."""
    kind = DuplicateKind.email() if row.email == email.lower().strip() else DuplicateKind.other("username")
    return DuplicateConflictError(kind)
