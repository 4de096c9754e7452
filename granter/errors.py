"""Errors raised by the account authorization core."""

from __future__ import annotations

import base64


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


class GranterError(Exception):
    """Base error for account operations."""


class Unauthorized(GranterError):
    """Mutation was not sent by the account itself."""

    def __init__(self) -> None:
        super().__init__("unauthorized")


class NotInitialized(GranterError):
    """Owner public key has not been set."""

    def __init__(self) -> None:
        super().__init__("account public key is not initialized")


class GrantNotFound(GranterError):
    def __init__(self, scope: str, delegate: bytes) -> None:
        self.scope = scope
        self.delegate = delegate
        super().__init__(f"grant not found: scope={scope}, delegate={_b64(delegate)}")


class GrantExpired(GranterError):
    def __init__(self, scope: str, delegate: bytes) -> None:
        self.scope = scope
        self.delegate = delegate
        super().__init__(f"grant expired: scope={scope}, delegate={_b64(delegate)}")


class NewGrantExpired(GranterError):
    """Grant was created with an expiry that has already been reached."""

    def __init__(self) -> None:
        super().__init__("cannot create a grant that is already expired")


class InvalidSignature(GranterError):
    def __init__(self) -> None:
        super().__init__("signature verification failed")


class BatchTooLarge(GranterError):
    """Transaction carries more messages than the engine will check."""

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"transaction has {size} messages, maximum is {limit}")
