# donorlink/services/credentials/service.py
from __future__ import annotations

from datetime import timedelta

from donorlink.services._shared.ports.password_hasher import PasswordHasher
from donorlink.services._shared.ports.token_provider import TokenProvider
from donorlink.services._shared.roles import Role

ROLE_CLAIM = "role"


class CredentialService:
    """
    Password digests and role-bearing access tokens.

    The service only composes two ports; the primitives (salted hashing,
    constant-time comparison, JWT signing) belong to the adapters.
    """

    def __init__(
        self,
        *,
        hasher: PasswordHasher,
        tokens: TokenProvider,
        access_expires: timedelta | None = None,
    ) -> None:
        """
        :param hasher: One-way digest adapter.
        :param tokens: Signed token adapter.
        :param access_expires: Token lifetime; ``None`` defers to the provider.
        """
        self.hasher = hasher
        self.tokens = tokens
        self.access_expires = access_expires

    def hash(self, plaintext: str) -> str:
        """Return a salted digest of ``plaintext``."""
        return self.hasher.hash(plaintext)

    def verify(self, plaintext: str, digest: str | None) -> bool:
        """
        Check ``plaintext`` against ``digest``.

        :returns: ``False`` on mismatch or a missing digest. Never raises for a mismatch.
        """
        if not digest:
            return False
        return self.hasher.verify(plaintext, digest)

    def issue_token(self, account_id: int, role: Role) -> str:
        """
        Issue an access token whose subject is ``account_id``.

        :param account_id: Active account identifier.
        :param role: Resolved role, carried in the ``role`` claim.
        :returns: Encoded token.
        """
        return self.tokens.create_access_token(
            identity=account_id,
            additional_claims={ROLE_CLAIM: Role(role).value},
            expires_delta=self.access_expires,
        )
