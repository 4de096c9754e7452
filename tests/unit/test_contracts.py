from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from granter.contracts import (
    AtHeight,
    AtTime,
    BlockInfo,
    Grant,
    GrantRecord,
    Never,
    Response,
    TransactionRequest,
)

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def test_never_does_not_expire():
    assert not Never().is_expired(BlockInfo(height=10**9, time=NOW + timedelta(days=10**4)))


def test_at_height_expires_at_threshold():
    expiry = AtHeight(height=10)
    assert not expiry.is_expired(BlockInfo(height=9, time=NOW))
    assert expiry.is_expired(BlockInfo(height=10, time=NOW))
    assert expiry.is_expired(BlockInfo(height=11, time=NOW))


def test_at_time_expires_at_threshold():
    expiry = AtTime(time=NOW)
    assert not expiry.is_expired(BlockInfo(time=NOW - timedelta(seconds=1)))
    assert expiry.is_expired(BlockInfo(time=NOW))


def test_naive_datetimes_are_utc():
    expiry = AtTime(time=datetime(2024, 3, 1, 12, 0))
    assert expiry.time == NOW
    assert BlockInfo(time=datetime(2024, 3, 1, 12, 0)).time == NOW


def test_grant_defaults_to_never():
    assert Grant().expiry == Never()


def test_grant_expiry_is_discriminated():
    grant = Grant.model_validate({"expiry": {"kind": "at_height", "height": 5}})
    assert grant.expiry == AtHeight(height=5)

    with pytest.raises(ValidationError):
        Grant.model_validate({"expiry": {"kind": "sometimes"}})


def test_bytes_travel_as_base64_in_json():
    record = GrantRecord(scope="s", delegate=b"\x02\xff", grant=Grant())
    data = record.model_dump_json()
    assert '"Av8="' in data
    assert GrantRecord.model_validate_json(data) == record

    request = TransactionRequest.model_validate_json(
        '{"messages": [{"scope": "s", "value": ""}], "pubkey": null,'
        ' "sign_bytes": "aGk=", "signature": "AAAA"}'
    )
    assert request.sign_bytes == b"hi"
    assert request.pubkey is None


def test_response_attributes():
    response = Response().add_attribute("method", "grant").add_attribute("delegate", b"\x01")
    assert response.get("method") == "grant"
    assert response.get("delegate") == "AQ=="
    assert response.get("missing") is None
