"""Single id source for active and pending accounts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, func, insert
from sqlalchemy.orm import Mapped, mapped_column

from donorlink.core.extensions import db


class AccountId(db.Model):
    """
    Monotonic allocator behind ``accounts.id`` and ``pending_accounts.id``.

    Rows are only ever inserted, so an id is never handed out twice: a pending
    account keeps its id when promoted and cannot collide with an account
    created directly in the meantime.
    """

    __tablename__ = "account_ids"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    allocated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


def assign_account_id(mapper, connection, target) -> None:
    """``before_insert`` hook drawing ``target.id`` from :class:`AccountId`.

    An id set explicitly (a promotion) is kept as is.
    """
    if target.id is not None:
        return
    result = connection.execute(insert(AccountId.__table__))
    target.id = result.inserted_primary_key[0]
