from __future__ import annotations

from typing import Iterable, Optional

import pytest

from granter import GranterAccount, Message, TransactionRequest
from granter.config import GranterConfig
from granter.persistence import InMemoryGrantRepository
from granter.security import crypto

ACCOUNT = "cosmos1account"
SIGN_BYTES = b"chain-id|account-number|sequence|body"


@pytest.fixture
def owner() -> crypto.KeyPair:
    return crypto.generate_keypair()


@pytest.fixture
def delegate() -> crypto.KeyPair:
    return crypto.generate_keypair()


@pytest.fixture
def account() -> GranterAccount:
    return GranterAccount(InMemoryGrantRepository(), GranterConfig(account=ACCOUNT))


def _make_request(
    signer: crypto.KeyPair,
    scopes: Iterable[str],
    pubkey: Optional[bytes] = None,
    sign_bytes: bytes = SIGN_BYTES,
) -> TransactionRequest:
    """Build a transaction over ``scopes`` signed by ``signer``."""
    return TransactionRequest(
        messages=[Message(scope=scope) for scope in scopes],
        pubkey=pubkey,
        sign_bytes=sign_bytes,
        signature=crypto.sign(signer.private_key, sign_bytes),
    )


@pytest.fixture
def make_request():
    return _make_request

