"""Account facade wiring storage, ledger and authorization together."""

from __future__ import annotations

from typing import Optional

from . import execute, query
from .authorize import AuthorizationEngine
from .config import GranterConfig, load_config
from .contracts import (
    BlockInfo,
    Env,
    Expiration,
    GrantKey,
    GrantResponse,
    GrantsResponse,
    PubkeyResponse,
    Response,
    TransactionRequest,
)
from .ledger import GrantLedger
from .persistence import GrantRepository, get_repository
from .security.credentials import CredentialStore


class GranterAccount:
    """A programmable account that delegates scoped authority to other keys."""

    def __init__(
        self,
        repository: GrantRepository | None = None,
        config: Optional[GranterConfig] = None,
    ) -> None:
        self.config = config or load_config()
        self._repository = repository or get_repository()
        self.credentials = CredentialStore(self._repository)
        self.ledger = GrantLedger(self._repository, self.config.pagination)
        self.engine = AuthorizationEngine(
            self.credentials, self.ledger, max_batch_size=self.config.max_batch_size
        )

    # ------------------------------------------------------------------
    # Lifecycle and hooks
    async def instantiate(self, pubkey: bytes) -> Response:
        return await self.credentials.init(pubkey)

    async def before_tx(self, block: BlockInfo, request: TransactionRequest) -> Response:
        return await self.engine.before_tx(
            block,
            request.messages,
            request.pubkey,
            request.sign_bytes,
            request.signature,
        )

    async def after_tx(self) -> Response:
        return await self.engine.after_tx()

    # ------------------------------------------------------------------
    # Mutations
    async def grant(
        self,
        env: Env,
        sender: str,
        scope: str,
        delegate: bytes,
        expiry: Optional[Expiration] = None,
    ) -> Response:
        return await execute.grant(self.ledger, env, sender, scope, delegate, expiry)

    async def revoke(self, env: Env, sender: str, scope: str, delegate: bytes) -> Response:
        return await execute.revoke(self.ledger, env, sender, scope, delegate)

    # ------------------------------------------------------------------
    # Queries
    async def query_pubkey(self) -> PubkeyResponse:
        return await query.pubkey(self.credentials)

    async def query_grant(self, scope: str, delegate: bytes) -> GrantResponse:
        return await query.grant(self.ledger, scope, delegate)

    async def query_grants(
        self, start_after: Optional[GrantKey] = None, limit: Optional[int] = None
    ) -> GrantsResponse:
        return await query.grants(self.ledger, start_after, limit)
