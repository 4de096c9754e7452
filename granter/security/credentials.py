"""Owner credential storage."""

from __future__ import annotations

import logging

from ..contracts import Response
from ..errors import NotInitialized
from ..persistence import GrantRepository

logger = logging.getLogger(__name__)


class CredentialStore:
    """Holds the account owner's public key.

    The key is written once when the account is created. Whether a second
    ``init`` is allowed is decided by the host; the store simply persists
    whatever it is given.
    """

    def __init__(self, repository: GrantRepository) -> None:
        self._repository = repository

    async def init(self, pubkey: bytes) -> Response:
        """Persist ``pubkey`` as the owner key."""
        await self._repository.save_pubkey(pubkey)
        logger.info(f"Account initialized with pubkey {pubkey.hex()}")
        return (
            Response()
            .add_attribute("method", "init")
            .add_attribute("pubkey", pubkey)
        )

    async def load(self) -> bytes:
        """Return the owner key or raise :class:`NotInitialized`."""
        pubkey = await self._repository.load_pubkey()
        if pubkey is None:
            raise NotInitialized()
        return pubkey

    async def is_initialized(self) -> bool:
        return await self._repository.load_pubkey() is not None
