"""Grant ledger: the ``(scope, delegate) -> Grant`` map."""

from __future__ import annotations

import logging
from typing import AsyncIterator, Optional

from .config import PaginationConfig
from .contracts import Grant, GrantKey, GrantRecord
from .persistence import GrantRepository

logger = logging.getLogger(__name__)


class GrantLedger:
    """Point access and ordered pagination over stored grants."""

    def __init__(
        self,
        repository: GrantRepository,
        pagination: Optional[PaginationConfig] = None,
    ) -> None:
        self._repository = repository
        self._pagination = pagination or PaginationConfig()

    async def put(self, scope: str, delegate: bytes, grant: Grant) -> None:
        """Insert or overwrite the grant for ``(scope, delegate)``."""
        await self._repository.save_grant(scope, delegate, grant)
        logger.info(f"Stored grant scope={scope} delegate={delegate.hex()} expiry={grant.expiry.kind}")

    async def get(self, scope: str, delegate: bytes) -> Grant | None:
        grant = await self._repository.load_grant(scope, delegate)
        logger.debug(f"Grant lookup scope={scope} delegate={delegate.hex()} found={grant is not None}")
        return grant

    async def remove(self, scope: str, delegate: bytes) -> None:
        """Delete the grant; a missing key is not an error."""
        await self._repository.delete_grant(scope, delegate)
        logger.info(f"Removed grant scope={scope} delegate={delegate.hex()}")

    def page_size(self, limit: Optional[int] = None) -> int:
        """Resolve a requested ``limit`` against the configured bounds."""
        if limit is None:
            limit = self._pagination.default_limit
        if limit <= 0:
            raise ValueError(f"limit must be positive, got {limit}")
        return min(limit, self._pagination.max_limit)

    def list(
        self, start_after: Optional[GrantKey] = None, limit: Optional[int] = None
    ) -> AsyncIterator[GrantRecord]:
        """Iterate grants in key order, resuming strictly after ``start_after``."""
        return self._repository.iter_grants(start_after, self.page_size(limit))
