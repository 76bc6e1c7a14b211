"""Outbound mail wiring: build the notifier once per application."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from flask import Flask, current_app

from donorlink.infra.mail.smtp_notifier import SMTPNotifier
from donorlink.services._shared.ports.notifier import InMemoryNotifier, Notifier

EXTENSION_KEY = "notifier"


def build_notifier(config: Mapping[str, Any]) -> Notifier:
    """Return the notifier selected by ``MAIL_BACKEND``.

    :param config: Flask config mapping.
    :returns: A ready-to-use notifier adapter.
    :raises RuntimeError: On an unknown backend name.
    """
    backend = str(config.get("MAIL_BACKEND", "smtp")).strip().lower()
    if backend == "memory":
        return InMemoryNotifier()
    if backend == "smtp":
        return SMTPNotifier(
            host=config.get("MAIL_SERVER", "localhost"),
            port=int(config.get("MAIL_PORT", 25)),
            username=config.get("MAIL_USERNAME"),
            password=config.get("MAIL_PASSWORD"),
            use_tls=bool(config.get("MAIL_USE_TLS", False)),
            sender=config.get("MAIL_DEFAULT_SENDER", "no-reply@donorlink.local"),
            timeout=float(config.get("MAIL_TIMEOUT", 10)),
        )
    raise RuntimeError(f"Unknown MAIL_BACKEND {backend!r}")


def init_app(app: Flask) -> None:
    """Attach the notifier to ``app.extensions`` for the process lifetime."""

    app.extensions[EXTENSION_KEY] = build_notifier(app.config)


def get_notifier() -> Notifier:
    """Return the notifier bound to the current application."""
    notifier = current_app.extensions.get(EXTENSION_KEY)
    if notifier is None:
        raise RuntimeError("Notifier is not initialized. Call init_app() first.")
    return cast(Notifier, notifier)
