"""Pre- and post-execution authorization hooks."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .constants import MAX_BATCH_SIZE
from .contracts import BlockInfo, Message, Response
from .errors import BatchTooLarge, GrantExpired, GrantNotFound, InvalidSignature
from .ledger import GrantLedger
from .security import crypto
from .security.credentials import CredentialStore

logger = logging.getLogger(__name__)


class AuthorizationEngine:
    """Accepts or rejects a transaction before it executes.

    A transaction signed by the owner key only needs a valid signature. A
    transaction signed by any other key additionally needs an unexpired
    grant for that key on every message scope in the batch; a single
    missing or expired grant rejects the whole batch.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        ledger: GrantLedger,
        max_batch_size: int = MAX_BATCH_SIZE,
    ) -> None:
        self._credentials = credentials
        self._ledger = ledger
        self._max_batch_size = max_batch_size

    async def before_tx(
        self,
        block: BlockInfo,
        messages: Sequence[Message],
        pubkey: Optional[bytes],
        sign_bytes: bytes,
        signature: bytes,
    ) -> Response:
        """Run the pre-execution check.

        Args:
            block: Current block, used to evaluate grant expiry.
            messages: Messages in the transaction, in order.
            pubkey: Key that signed the transaction. ``None`` means the owner.
            sign_bytes: Bytes whose SHA-256 digest was signed.
            signature: 64-byte compact secp256k1 signature.

        Raises:
            NotInitialized: The account has no owner key.
            BatchTooLarge: More messages than ``max_batch_size``.
            GrantNotFound: A delegate lacks a grant for some message scope.
            GrantExpired: A delegate's grant for some message scope has expired.
            InvalidSignature: The signature does not verify.
        """
        owner = await self._credentials.load()
        signer = pubkey if pubkey is not None else owner

        if len(messages) > self._max_batch_size:
            raise BatchTooLarge(len(messages), self._max_batch_size)

        if signer != owner:
            await self._assert_has_grants(block, messages, signer)

        if not crypto.verify(crypto.sha256(sign_bytes), signature, signer):
            logger.warning(f"Rejected transaction: invalid signature from {signer.hex()}")
            raise InvalidSignature()

        logger.info(
            f"Accepted transaction of {len(messages)} message(s) signed by "
            f"{'owner' if signer == owner else 'delegate ' + signer.hex()}"
        )
        return Response().add_attribute("method", "before_tx")

    async def after_tx(self) -> Response:
        return Response().add_attribute("method", "after_tx")

    async def _assert_has_grants(
        self, block: BlockInfo, messages: Sequence[Message], delegate: bytes
    ) -> None:
        for message in messages:
            grant = await self._ledger.get(message.scope, delegate)
            if grant is None:
                logger.warning(
                    f"Rejected transaction: no grant for scope={message.scope} delegate={delegate.hex()}"
                )
                raise GrantNotFound(message.scope, delegate)
            if grant.is_expired(block):
                logger.warning(
                    f"Rejected transaction: expired grant for scope={message.scope} delegate={delegate.hex()}"
                )
                raise GrantExpired(message.scope, delegate)
