"""Tests for ordered grant pagination."""

import pytest

from granter import Env, GrantKey, GranterAccount
from granter.config import GranterConfig
from granter.persistence import SQLiteGrantRepository

# Deliberately inserted out of order.
KEYS = [
    ("/cosmos.gov.v1beta1.MsgVote", b"\x02" + b"\x01" * 32),
    ("/cosmos.bank.v1beta1.MsgSend", b"\x03" + b"\x09" * 32),
    ("/cosmos.bank.v1beta1.MsgSend", b"\x02" + b"\x05" * 32),
    ("/cosmos.staking.v1beta1.MsgDelegate", b"\x02" + b"\x07" * 32),
    ("/cosmos.bank.v1beta1.MsgMultiSend", b"\x02" + b"\x01" * 32),
]


async def _populate(account) -> None:
    env = Env(account=account.config.account)
    for scope, delegate in KEYS:
        await account.grant(env, env.account, scope, delegate)


async def _assert_pages(account) -> None:
    expected = sorted(KEYS, key=lambda k: (k[0].encode(), k[1]))

    first = (await account.query_grants(limit=2)).grants
    assert [(g.scope, g.delegate) for g in first] == expected[:2]

    second = (await account.query_grants(start_after=first[-1].key, limit=2)).grants
    assert [(g.scope, g.delegate) for g in second] == expected[2:4]

    third = (await account.query_grants(start_after=second[-1].key, limit=2)).grants
    assert [(g.scope, g.delegate) for g in third] == expected[4:]

    rest = (await account.query_grants(start_after=third[-1].key, limit=2)).grants
    assert rest == []

    combined = [(g.scope, g.delegate) for g in first + second + third]
    assert combined == expected


@pytest.mark.asyncio
async def test_inmemory_pagination(account):
    await _populate(account)
    await _assert_pages(account)


@pytest.mark.asyncio
async def test_sqlite_pagination(tmp_path):
    account = GranterAccount(SQLiteGrantRepository(tmp_path / "grants.db"), GranterConfig())
    await _populate(account)
    await _assert_pages(account)


@pytest.mark.asyncio
async def test_start_after_missing_key_resumes_at_next(account):
    await _populate(account)

    key = GrantKey(scope="/cosmos.bank.v1beta1.MsgSend", delegate=b"\x02")
    page = (await account.query_grants(start_after=key, limit=10)).grants

    assert [(g.scope, g.delegate) for g in page][0] == (
        "/cosmos.bank.v1beta1.MsgSend",
        b"\x02" + b"\x05" * 32,
    )
    assert len(page) == 4
