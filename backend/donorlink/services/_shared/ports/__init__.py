"""
donorlink.services._shared.ports
================================

*Ports* (hexagonal interfaces) for the collaborators the account workflows
depend on but do not implement.

Modules
-------
- :mod:`token_provider`:
    :class:`~.TokenProvider`, abstraction for signed token creation and decoding.

- :mod:`password_hasher`:
    :class:`~.PasswordHasher`, one-way digest and verification.

- :mod:`notifier`:
    :class:`~.Notifier` and :class:`~.EmailMessageOut` for lifecycle emails.

Concrete adapters live under ``donorlink.infra``.
"""

from __future__ import annotations

from .notifier import EmailMessageOut, InMemoryNotifier, Notifier
from .password_hasher import PasswordHasher
from .token_provider import StubTokenProvider, TokenProvider

__all__ = [
    "EmailMessageOut",
    "InMemoryNotifier",
    "Notifier",
    "PasswordHasher",
    "StubTokenProvider",
    "TokenProvider",
]
