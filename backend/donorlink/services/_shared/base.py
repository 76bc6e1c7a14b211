# donorlink/services/_shared/base.py
from __future__ import annotations

import logging
from dataclasses import dataclass

from donorlink.core import errors as api_errors
from donorlink.services._shared.duplicates import DuplicateConflictError
from donorlink.services._shared.errors import (
    InvalidCredentialsError,
    NotFoundError,
    NotificationError,
    ServiceError,
    StoreFailureError,
)
from donorlink.services._shared.ports import EmailMessageOut, Notifier
from donorlink.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data.

    :param request_id: Correlation id for logging/tracing.
    """

    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Centralize error translation and logging.
    * Deliver post-commit notifications on a best-effort basis.

    Notes
    -----
    - Services must never touch the global session; always use a Unit of Work.
    - No retries: every failure is terminal for the request.
    """

    DEFAULT_READ_ISOLATION = "READ COMMITTED"

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(
        self, *, isolation: str | None = None, enforce_db_readonly: bool = True
    ) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :param isolation: Transaction isolation level (e.g. "READ COMMITTED").
        :param enforce_db_readonly: Apply `SET TRANSACTION READ ONLY` when supported.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork(
            isolation_level=isolation or self.DEFAULT_READ_ISOLATION,
            enforce_db_readonly=enforce_db_readonly,
        )

    # -------------------------- Notifications -------------------------------

    def notify_best_effort(self, notifier: Notifier, message: EmailMessageOut) -> bool:
        """
        Hand ``message`` to ``notifier`` after a commit, never raising.

        :returns: ``True`` when the notifier accepted the message.
        """
        try:
            notifier.send(message)
        except NotificationError:
            log.warning(
                "notification.failed subject=%s",
                message.subject,
                extra={"recipient": message.to},
                exc_info=True,
            )
            return False
        return True

    # -------------------------- Error handling ------------------------------

    def translate_exceptions(self, exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :returns: Translated exception ready to be re-raised.
        """
        if isinstance(exc, NotFoundError):
            # → 404 Not Found
            return api_errors.NotFound(str(exc))

        if isinstance(exc, DuplicateConflictError):
            # email → 400, anything else → 409
            if exc.kind.is_email:
                return api_errors.DuplicateEmail(str(exc))
            return api_errors.Conflict(str(exc))

        if isinstance(exc, InvalidCredentialsError):
            return api_errors.InvalidCredentials(str(exc))

        if isinstance(exc, StoreFailureError):
            return api_errors.BadRequest(str(exc), code="store_failure")

        if isinstance(exc, ServiceError):
            return api_errors.BadRequest(str(exc))

        # Fallback: return untouched (will bubble up to Flask handler)
        return exc
