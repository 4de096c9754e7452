"""Read-only queries over account state."""

from __future__ import annotations

from typing import Optional

from .contracts import GrantKey, GrantResponse, GrantsResponse, PubkeyResponse
from .ledger import GrantLedger
from .security.credentials import CredentialStore


async def pubkey(credentials: CredentialStore) -> PubkeyResponse:
    return PubkeyResponse(pubkey=await credentials.load())


async def grant(ledger: GrantLedger, scope: str, delegate: bytes) -> GrantResponse:
    return GrantResponse(grant=await ledger.get(scope, delegate))


async def grants(
    ledger: GrantLedger,
    start_after: Optional[GrantKey] = None,
    limit: Optional[int] = None,
) -> GrantsResponse:
    """Return one page of grants ordered by ``(scope, delegate)``."""
    return GrantsResponse(grants=[record async for record in ledger.list(start_after, limit)])
