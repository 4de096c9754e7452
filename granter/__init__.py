"""Granter: scoped, expiring delegation for programmable accounts."""

from .account import GranterAccount
from .authorize import AuthorizationEngine
from .contracts import (
    AtHeight,
    AtTime,
    BlockInfo,
    Env,
    Grant,
    GrantKey,
    GrantRecord,
    Message,
    Never,
    Response,
    TransactionRequest,
)
from .errors import (
    BatchTooLarge,
    GranterError,
    GrantExpired,
    GrantNotFound,
    InvalidSignature,
    NewGrantExpired,
    NotInitialized,
    Unauthorized,
)
from .ledger import GrantLedger
from .persistence import get_repository
from .security import CredentialStore

__version__ = "0.1.0"
__all__ = [
    "AtHeight",
    "AtTime",
    "AuthorizationEngine",
    "BatchTooLarge",
    "BlockInfo",
    "CredentialStore",
    "Env",
    "Grant",
    "GrantExpired",
    "GrantKey",
    "GrantLedger",
    "GrantNotFound",
    "GrantRecord",
    "GranterAccount",
    "GranterError",
    "InvalidSignature",
    "Message",
    "Never",
    "NewGrantExpired",
    "NotInitialized",
    "Response",
    "TransactionRequest",
    "Unauthorized",
    "get_repository",
]
