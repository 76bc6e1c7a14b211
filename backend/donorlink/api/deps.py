"""Shared API helpers for service wiring and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request

from donorlink.core.errors import Unauthorized
from donorlink.core.mail import get_notifier
from donorlink.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from donorlink.infra.security.werkzeug_password_hasher import WerkzeugPasswordHasher
from donorlink.services import (
    BaseService,
    CredentialService,
    ProvisioningService,
    ReviewLinks,
    Role,
    ServiceContext,
    SessionService,
)
from donorlink.services._shared.errors import ServiceError

F = TypeVar("F", bound=Callable[..., Any])


# --------------------------------------------------------------------------- #
# Service wiring
# --------------------------------------------------------------------------- #


def service_context() -> ServiceContext:
    """Build the request-scoped context handed to services."""

    return ServiceContext(request_id=g.get("request_id"))


def credential_service() -> CredentialService:
    """Compose the credential service from application config."""

    cfg = current_app.config
    return CredentialService(
        hasher=WerkzeugPasswordHasher(method=cfg.get("PASSWORD_HASH_METHOD", "scrypt")),
        tokens=JWTTokenProvider(),
        access_expires=cfg.get("JWT_ACCESS_TOKEN_EXPIRES"),
    )


def review_links() -> ReviewLinks:
    """Return the admin link builder for the mounted API version."""

    from donorlink.api.v1 import API_VERSION

    cfg = current_app.config
    api_base = cfg.get("API_BASE_PREFIX", "/api").rstrip("/")
    return ReviewLinks(
        base_url=cfg.get("PUBLIC_BASE_URL") or request.host_url,
        api_prefix=f"{api_base}/{API_VERSION}",
    )


def provisioning_service() -> ProvisioningService:
    """Compose the provisioning workflow with the process-wide notifier."""

    return ProvisioningService(
        credentials=credential_service(),
        notifier=get_notifier(),
        admin_email=current_app.config.get("ADMIN_EMAIL"),
        links=review_links(),
        ctx=service_context(),
    )


def session_service() -> SessionService:
    return SessionService(credentials=credential_service(), ctx=service_context())


# --------------------------------------------------------------------------- #
# Decorators
# --------------------------------------------------------------------------- #


def translate_service_errors(func: F) -> F:
    """Re-raise service errors as their API counterparts."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        try:
            return func(*args, **kwargs)
        except ServiceError as exc:
            raise BaseService().translate_exceptions(exc) from exc

    return wrapper  # type: ignore[return-value]


def require_auth(func: F) -> F:
    """Ensure the request carries a valid JWT access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_account() -> tuple[int, Role]:
    """Return ``(account_id, role)`` from the verified token."""

    claims = get_jwt() or {}
    try:
        return int(get_jwt_identity()), Role(claims.get("role"))
    except (TypeError, ValueError) as exc:
        raise Unauthorized("Token does not identify an account") from exc


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
