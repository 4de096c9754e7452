"""Owner-only mutations of the grant ledger."""

from __future__ import annotations

from typing import Optional

from .contracts import Env, Expiration, Grant, Never, Response
from .errors import NewGrantExpired, Unauthorized
from .ledger import GrantLedger


def assert_self(sender: str, account: str) -> None:
    """Only the account itself may change its grants."""
    if sender != account:
        raise Unauthorized()


async def grant(
    ledger: GrantLedger,
    env: Env,
    sender: str,
    scope: str,
    delegate: bytes,
    expiry: Optional[Expiration] = None,
) -> Response:
    """Give ``delegate`` permission to sign messages of ``scope``.

    An existing grant for the same key is replaced.
    """
    assert_self(sender, env.account)

    expiry = expiry if expiry is not None else Never()
    if expiry.is_expired(env.block):
        raise NewGrantExpired()

    await ledger.put(scope, delegate, Grant(expiry=expiry))

    return (
        Response()
        .add_attribute("method", "grant")
        .add_attribute("granter", env.account)
        .add_attribute("delegate", delegate)
        .add_attribute("scope", scope)
    )


async def revoke(
    ledger: GrantLedger,
    env: Env,
    sender: str,
    scope: str,
    delegate: bytes,
) -> Response:
    """Remove the grant for ``(scope, delegate)``; revoking nothing succeeds."""
    assert_self(sender, env.account)

    await ledger.remove(scope, delegate)

    return (
        Response()
        .add_attribute("method", "revoke")
        .add_attribute("granter", env.account)
        .add_attribute("delegate", delegate)
        .add_attribute("scope", scope)
    )
