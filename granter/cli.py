"""Command line interface for managing a granter account."""

from __future__ import annotations

import asyncio
from datetime import datetime
from pathlib import Path
from typing import Any, Coroutine, Optional

import typer
from pydantic import ValidationError

from granter import GranterAccount
from granter.contracts import AtHeight, AtTime, BlockInfo, Env, GrantKey, TransactionRequest
from granter.errors import GranterError
from granter.security import crypto

app = typer.Typer(help="CLI for granter accounts")

grants_app = typer.Typer(help="Commands for inspecting grants")
app.add_typer(grants_app, name="grants")


@app.callback()
def main() -> None:
    """Granter CLI entry point."""
    pass


def _parse_hex(value: str, name: str) -> bytes:
    try:
        return bytes.fromhex(value.removeprefix("0x"))
    except ValueError:
        raise typer.BadParameter(f"{name} must be hex encoded")


def _run(coro: Coroutine[Any, Any, Any]) -> Any:
    """Run ``coro`` and turn account errors into a failed exit."""
    try:
        return asyncio.run(coro)
    except GranterError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)


def _env(account: GranterAccount, height: int) -> Env:
    return Env(block=BlockInfo(height=height), account=account.config.account)


@app.command("keygen")
def keygen() -> None:
    """Generate a secp256k1 key pair and print it as hex."""
    pair = crypto.generate_keypair()
    typer.echo(f"private_key: {pair.private_key.hex()}")
    typer.echo(f"public_key: {pair.public_key.hex()}")


@app.command("init")
def init(pubkey: str) -> None:
    """
    Initialize the account with the owner's public key.

    Example:
        granter init 02a1b2...
    """
    owner = _parse_hex(pubkey, "pubkey")
    account = GranterAccount()
    if asyncio.run(account.credentials.is_initialized()):
        typer.secho("Account already initialized", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    _run(account.instantiate(owner))
    typer.echo(f"Account initialized with pubkey {owner.hex()}")


@app.command("pubkey")
def pubkey() -> None:
    """Show the owner's public key."""
    response = _run(GranterAccount().query_pubkey())
    typer.echo(response.pubkey.hex())


@app.command("grant")
def grant(
    scope: str,
    delegate: str,
    at_height: Optional[int] = typer.Option(None, help="Expire at this block height"),
    at_time: Optional[datetime] = typer.Option(None, help="Expire at this time (UTC)"),
    sender: Optional[str] = typer.Option(None, help="Caller address (default: the account)"),
    height: int = typer.Option(0, help="Current block height"),
) -> None:
    """
    Allow DELEGATE to sign messages of SCOPE on behalf of the account.

    Example:
        granter grant /cosmos.bank.v1beta1.MsgSend 03c4d5... --at-height 1000
    """
    if at_height is not None and at_time is not None:
        raise typer.BadParameter("use either --at-height or --at-time, not both")
    expiry = None
    if at_height is not None:
        expiry = AtHeight(height=at_height)
    elif at_time is not None:
        expiry = AtTime(time=at_time)

    delegate_key = _parse_hex(delegate, "delegate")
    account = GranterAccount()
    env = _env(account, height)
    _run(account.grant(env, sender or env.account, scope, delegate_key, expiry))
    typer.echo(f"Granted {scope} to {delegate_key.hex()}")


@app.command("revoke")
def revoke(
    scope: str,
    delegate: str,
    sender: Optional[str] = typer.Option(None, help="Caller address (default: the account)"),
) -> None:
    """Remove DELEGATE's permission for SCOPE."""
    delegate_key = _parse_hex(delegate, "delegate")
    account = GranterAccount()
    env = _env(account, 0)
    _run(account.revoke(env, sender or env.account, scope, delegate_key))
    typer.echo(f"Revoked {scope} from {delegate_key.hex()}")


@grants_app.command("list")
def grants_list(
    start_after_scope: Optional[str] = typer.Option(None, help="Resume after this scope"),
    start_after_delegate: Optional[str] = typer.Option(None, help="Resume after this delegate"),
    limit: Optional[int] = typer.Option(None, help="Page size"),
) -> None:
    """
    List grants ordered by scope and delegate.

    Returns:
        Tab-separated scope, delegate and expiry, or "No grants found"
    """
    start_after = None
    if start_after_scope is not None:
        start_after = GrantKey(
            scope=start_after_scope,
            delegate=_parse_hex(start_after_delegate or "", "start-after-delegate"),
        )
    try:
        response = _run(GranterAccount().query_grants(start_after, limit))
    except ValueError as exc:
        raise typer.BadParameter(str(exc))
    if not response.grants:
        typer.echo("No grants found")
        return
    for record in response.grants:
        typer.echo(f"{record.scope}\t{record.delegate.hex()}\t{record.grant.expiry.model_dump_json()}")


@grants_app.command("show")
def grants_show(scope: str, delegate: str) -> None:
    """Show the grant held by DELEGATE for SCOPE."""
    response = _run(GranterAccount().query_grant(scope, _parse_hex(delegate, "delegate")))
    if response.grant is None:
        typer.echo("Grant not found")
        raise typer.Exit(code=1)
    typer.echo(f"{scope}\t{delegate}\t{response.grant.expiry.model_dump_json()}")


@app.command("authorize")
def authorize(
    request_path: Path,
    height: int = typer.Option(0, help="Current block height"),
) -> None:
    """
    Run the pre-execution check on a JSON encoded transaction request.

    Byte fields in the request are base64 encoded.

    Example:
        granter authorize ./tx.json --height 120
    """
    try:
        request = TransactionRequest.model_validate_json(request_path.read_text())
    except (OSError, ValidationError) as exc:
        typer.secho(f"Could not read request: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    _run(GranterAccount().before_tx(BlockInfo(height=height), request))
    typer.echo("Transaction accepted")


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    app()
