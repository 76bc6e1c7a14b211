"""Outbound notification port and an in-process adapter."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class EmailMessageOut:
    """
    A plain-text email handed to a :class:`Notifier`.

    :param to: Recipient address.
    :param subject: Subject line.
    :param body: Plain-text body.
    """

    to: str
    subject: str
    body: str


class Notifier(Protocol):
    """
    Delivery port for account lifecycle emails.

    Implementations raise
    :class:`~donorlink.services._shared.errors.NotificationError` when a
    message cannot be handed off.
    """

    def send(self, message: EmailMessageOut) -> None: ...


class InMemoryNotifier(Notifier):
    """
    Thread-safe notifier that keeps messages in a list.

    Used by the test suite and by local runs without an SMTP relay.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._outbox: list[EmailMessageOut] = []

    def send(self, message: EmailMessageOut) -> None:
        with self._lock:
            self._outbox.append(message)

    @property
    def outbox(self) -> list[EmailMessageOut]:
        with self._lock:
            return list(self._outbox)

    def sent_to(self, address: str) -> list[EmailMessageOut]:
        return [m for m in self.outbox if m.to == address]

    def clear(self) -> None:
        with self._lock:
            self._outbox.clear()
