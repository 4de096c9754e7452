"""Repository abstraction for account state persistence."""

from __future__ import annotations

from typing import AsyncIterator, Optional, Protocol

from ..contracts import Grant, GrantKey, GrantRecord


class GrantRepository(Protocol):
    """Protocol for account state persistence backends.

    Backends hold two pieces of state: the owner public key singleton and
    the grants map keyed by ``(scope, delegate)``.
    """

    async def save_pubkey(self, pubkey: bytes) -> None:
        """Persist the owner public key."""

    async def load_pubkey(self) -> bytes | None:
        """Return the owner public key, or ``None`` when unset."""

    async def save_grant(self, scope: str, delegate: bytes, grant: Grant) -> None:
        """Insert or overwrite the grant stored under ``(scope, delegate)``."""

    async def load_grant(self, scope: str, delegate: bytes) -> Grant | None:
        """Return the grant stored under ``(scope, delegate)`` if any."""

    async def delete_grant(self, scope: str, delegate: bytes) -> None:
        """Remove the grant if present."""

    def iter_grants(
        self, start_after: Optional[GrantKey] = None, limit: int = 10
    ) -> AsyncIterator[GrantRecord]:
        """Yield up to ``limit`` grants ordered by key, strictly after ``start_after``."""
