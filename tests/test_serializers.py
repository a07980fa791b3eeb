# tests/test_serializers.py
import json
from datetime import datetime, timedelta, timezone

import msgpack
import pytest

from simple_token import (
    InvalidArgumentError,
    JsonTokenSerializer,
    MalformedTokenError,
    MsgpackTokenSerializer,
    SecureToken,
)


@pytest.fixture
def token() -> SecureToken:
    issued = datetime(2024, 3, 1, 12, 30, 15, 123456, tzinfo=timezone.utc)
    return SecureToken.create(
        issued,
        issued + timedelta(seconds=90),
        {"user": "42", "role": "admin", "name": "Zoë"},
    )


@pytest.mark.parametrize("serializer", [JsonTokenSerializer(), MsgpackTokenSerializer()])
def test_round_trip_is_lossless(serializer, token):
    restored = serializer.deserialize(serializer.serialize(token))

    assert restored.issued == token.issued
    assert restored.expires == token.expires
    assert restored.issued.microsecond == 123456
    assert dict(restored.data) == dict(token.data)


@pytest.mark.parametrize("serializer", [JsonTokenSerializer(), MsgpackTokenSerializer()])
def test_round_trip_keeps_instant_of_non_utc_offsets(serializer):
    tz = timezone(timedelta(hours=5, minutes=30))
    issued = datetime(2024, 1, 1, 8, 0, tzinfo=tz)
    token = SecureToken.create(issued, issued + timedelta(minutes=1), {})

    restored = serializer.deserialize(serializer.serialize(token))
    assert restored.issued == issued
    assert restored.expires == token.expires


@pytest.mark.parametrize("serializer", [JsonTokenSerializer(), MsgpackTokenSerializer()])
def test_garbage_is_malformed(serializer):
    with pytest.raises(MalformedTokenError):
        serializer.deserialize(b"\xff\xfe not a token")


# --- JSON ----------------------------------------------------------------


def test_json_wire_shape(token):
    document = json.loads(JsonTokenSerializer().serialize(token))

    assert set(document) == {"issued", "expires", "data"}
    assert document["issued"] == "2024-03-01T12:30:15.123456+00:00"
    assert document["data"]["role"] == "admin"


@pytest.mark.parametrize(
    "document",
    [
        {"issued": "2024-03-01T12:00:00+00:00", "data": {}},
        {"issued": "2024-03-01T12:00:00+00:00", "expires": "2024-03-01T12:01:00+00:00", "data": {}, "x": 1},
        {"issued": "yesterday", "expires": "2024-03-01T12:01:00+00:00", "data": {}},
        {"issued": "2024-03-01T12:00:00", "expires": "2024-03-01T12:01:00", "data": {}},
        {"issued": 1, "expires": "2024-03-01T12:01:00+00:00", "data": {}},
        {"issued": "2024-03-01T12:00:00+00:00", "expires": "2024-03-01T12:01:00+00:00", "data": []},
        {"issued": "2024-03-01T12:00:00+00:00", "expires": "2024-03-01T12:01:00+00:00", "data": {"a": 1}},
        ["2024-03-01T12:00:00+00:00", "2024-03-01T12:01:00+00:00", {}],
    ],
)
def test_json_rejects_wrong_shape(document):
    with pytest.raises(MalformedTokenError):
        JsonTokenSerializer().deserialize(json.dumps(document).encode())


def test_json_inverted_timestamps_break_token_invariant():
    raw = json.dumps(
        {"issued": "2024-03-01T12:01:00+00:00", "expires": "2024-03-01T12:00:00+00:00", "data": {}}
    ).encode()

    with pytest.raises(InvalidArgumentError):
        JsonTokenSerializer().deserialize(raw)


# --- msgpack -------------------------------------------------------------


def test_msgpack_is_more_compact_than_json(token):
    assert len(MsgpackTokenSerializer().serialize(token)) < len(JsonTokenSerializer().serialize(token))


def test_msgpack_wire_shape(token):
    issued_us, expires_us, data = msgpack.unpackb(MsgpackTokenSerializer().serialize(token))

    assert expires_us - issued_us == 90 * 1_000_000
    assert data["user"] == "42"


@pytest.mark.parametrize(
    "contract",
    [
        {"issued": 1, "expires": 2, "data": {}},
        [1, 2],
        [1, 2, {}, "extra"],
        ["1", 2, {}],
        [1, 2, {"a": 1}],
        [1, 2, ["a"]],
        [1, 2 ** 63 - 1, {}],
    ],
)
def test_msgpack_rejects_wrong_shape(contract):
    with pytest.raises(MalformedTokenError):
        MsgpackTokenSerializer().deserialize(msgpack.packb(contract))


def test_msgpack_rejects_truncated_input(token):
    raw = MsgpackTokenSerializer().serialize(token)
    with pytest.raises(MalformedTokenError):
        MsgpackTokenSerializer().deserialize(raw[:-3])


def test_msgpack_inverted_timestamps_break_token_invariant():
    with pytest.raises(InvalidArgumentError):
        MsgpackTokenSerializer().deserialize(msgpack.packb([2_000_000, 1_000_000, {}]))
