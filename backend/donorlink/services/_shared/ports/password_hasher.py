from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    """Port for one-way salted password digests."""

    def hash(self, plaintext: str) -> str: ...

    def verify(self, plaintext: str, digest: str) -> bool: ...
