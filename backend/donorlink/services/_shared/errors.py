"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. They are the stable contract between repositories, workflows and
the API layer; translation to RFC 7807 responses happens in
``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - Any subclass without a dedicated mapping becomes a 400.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True, eq=False)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the store.

    :param entity: Entity name (e.g., "PendingAccount").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


class InvalidCredentialsError(ServiceError):
    """
    Raised for an unknown email *or* a wrong password.

    Both cases share this single type and message so callers cannot tell
    which one happened.
    """

    MESSAGE = "Invalid credentials"

    def __init__(self) -> None:
        super().__init__(self.MESSAGE)


class StoreFailureError(ServiceError):
    """
    Raised when the store rejects a transaction for a reason other than a
    missing row or a classified duplicate. The original driver error is kept
    on ``__cause__`` for logs only.
    """

    def __init__(self, message: str = "The operation could not be completed") -> None:
        super().__init__(message)


class NotificationError(ServiceError):
    """
    Raised by notifier adapters when a message cannot be delivered.

    Workflows log and swallow it; it never reaches a client.
    """

    pass
