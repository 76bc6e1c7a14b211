# tests/unit/services/test_credential_service.py
from __future__ import annotations

from datetime import timedelta

import pytest

from donorlink.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from donorlink.infra.security.werkzeug_password_hasher import WerkzeugPasswordHasher
from donorlink.services._shared.ports.token_provider import StubTokenProvider
from donorlink.services._shared.roles import Role
from donorlink.services.credentials.service import CredentialService


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def service() -> CredentialService:
    """Credential service with a cheap hash method and a stub token provider."""
    return CredentialService(
        hasher=WerkzeugPasswordHasher(method="pbkdf2:sha256:1000"),
        tokens=StubTokenProvider(),
        access_expires=timedelta(minutes=30),
    )


# -------------------------------- Tests ----------------------------------- #
def test_hash_then_verify_round_trip(service):
    digest = service.hash("p1")
    assert digest != "p1"
    assert service.verify("p1", digest) is True


def test_verify_rejects_other_plaintext_deterministically(service):
    digest = service.hash("p1")
    results = {service.verify("p2", digest) for _ in range(3)}
    assert results == {False}


def test_hash_is_salted(service):
    assert service.hash("same") != service.hash("same")


@pytest.mark.parametrize("digest", ["", None])
def test_verify_missing_digest_is_false(service, digest):
    assert service.verify("anything", digest) is False


def test_hash_rejects_empty_password(service):
    with pytest.raises(ValueError):
        service.hash("")


def test_issue_token_carries_subject_and_role(service):
    token = service.issue_token(42, Role.DONATION_CENTER)

    claims = service.tokens.decode(token)
    assert claims["sub"] == "42"
    assert claims["role"] == "donation_center"


def test_issue_token_uses_configured_lifetime(service):
    token = service.issue_token(1, Role.USER)
    expires_at = service.tokens.get_expires_at(token)
    issued_at = service.tokens._now
    assert timedelta(minutes=29) < expires_at - issued_at <= timedelta(minutes=30)


def test_issue_token_with_flask_jwt_provider(app):
    """The real adapter signs a JWT whose claims survive decoding."""
    with app.app_context():
        service = CredentialService(
            hasher=WerkzeugPasswordHasher(method="pbkdf2:sha256:1000"),
            tokens=JWTTokenProvider(),
        )
        token = service.issue_token(7, Role.USER)
        claims = service.tokens.decode(token)

    assert claims["sub"] == "7"
    assert claims["role"] == "user"
    assert claims["type"] == "access"
