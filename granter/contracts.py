"""Core data contracts for the granter account."""

from __future__ import annotations

import base64
from datetime import datetime, timezone
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class _BinaryModel(BaseModel):
    """Base for models carrying raw bytes; bytes travel as base64 in JSON."""

    model_config = ConfigDict(ser_json_bytes="base64", val_json_bytes="base64")


class BlockInfo(BaseModel):
    """Block context supplied by the host for each invocation."""

    height: int = Field(default=0, ge=0)
    time: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("time")
    @classmethod
    def normalize_time(cls, value: datetime) -> datetime:
        return _as_utc(value)


class Env(BaseModel):
    """Host environment: current block and the account's own address."""

    block: BlockInfo = Field(default_factory=BlockInfo)
    account: str


class Never(BaseModel):
    """Expiration that is never reached."""

    kind: Literal["never"] = "never"

    def is_expired(self, block: BlockInfo) -> bool:
        return False


class AtHeight(BaseModel):
    """Expires once the block height reaches ``height``."""

    kind: Literal["at_height"] = "at_height"
    height: int = Field(ge=0)

    def is_expired(self, block: BlockInfo) -> bool:
        return block.height >= self.height


class AtTime(BaseModel):
    """Expires once the block time reaches ``time``."""

    kind: Literal["at_time"] = "at_time"
    time: datetime

    @field_validator("time")
    @classmethod
    def normalize_time(cls, value: datetime) -> datetime:
        return _as_utc(value)

    def is_expired(self, block: BlockInfo) -> bool:
        return block.time >= self.time


Expiration = Annotated[Union[Never, AtHeight, AtTime], Field(discriminator="kind")]


class Grant(BaseModel):
    """Permission for a delegate to act within one scope."""

    expiry: Expiration = Field(default_factory=Never)

    def is_expired(self, block: BlockInfo) -> bool:
        return self.expiry.is_expired(block)


class GrantKey(_BinaryModel):
    """Composite ledger key, ordered by scope then delegate bytes."""

    scope: str
    delegate: bytes

    def sort_key(self) -> tuple[bytes, bytes]:
        return self.scope.encode("utf-8"), self.delegate


class GrantRecord(_BinaryModel):
    """A single ledger entry."""

    scope: str
    delegate: bytes
    grant: Grant

    @property
    def key(self) -> GrantKey:
        return GrantKey(scope=self.scope, delegate=self.delegate)


class Message(_BinaryModel):
    """A transaction message; only its scope is inspected here."""

    scope: str
    value: bytes = b""


class TransactionRequest(_BinaryModel):
    """Everything the host hands to the pre-execution hook."""

    messages: List[Message] = Field(default_factory=list)
    pubkey: Optional[bytes] = None
    sign_bytes: bytes
    signature: bytes


class Attribute(BaseModel):
    key: str
    value: str


class Response(BaseModel):
    """Accept signal carrying event attributes."""

    attributes: List[Attribute] = Field(default_factory=list)

    def add_attribute(self, key: str, value: str | bytes) -> "Response":
        if isinstance(value, bytes):
            value = base64.b64encode(value).decode("ascii")
        self.attributes.append(Attribute(key=key, value=value))
        return self

    def get(self, key: str) -> Optional[str]:
        """Return the first attribute value stored under ``key``."""
        return next((a.value for a in self.attributes if a.key == key), None)


class PubkeyResponse(_BinaryModel):
    pubkey: bytes


class GrantResponse(BaseModel):
    grant: Optional[Grant] = None


class GrantsResponse(BaseModel):
    grants: List[GrantRecord] = Field(default_factory=list)
