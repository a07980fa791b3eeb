"""Compact binary token serializer backed by MessagePack."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import msgpack
from msgpack.exceptions import UnpackException

from ...domain.entities import SecureToken
from ...domain.exceptions import MalformedTokenError
from ...domain.ports import TokenSerializer

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _to_microseconds(value: datetime) -> int:
    # exact integer arithmetic, no float rounding
    return (value - _EPOCH) // timedelta(microseconds=1)


def _from_microseconds(value: Any, name: str) -> datetime:
    if not isinstance(value, int) or isinstance(value, bool):
        raise MalformedTokenError(f"Field {name!r} must be an integer timestamp")
    try:
        return _EPOCH + timedelta(microseconds=value)
    except OverflowError as exc:
        raise MalformedTokenError(f"Field {name!r} is out of range") from exc


class MsgpackTokenSerializer(TokenSerializer):
    """
    Adapter implementing TokenSerializer with MessagePack.

    Wire shape is a three element array, in field order:

        [issued_us, expires_us, {key: value, ...}]

    where the timestamps are integer microseconds since the Unix epoch (UTC).
    Smaller than the JSON form and still self-describing enough to reject
    anything that is not exactly this shape.
    """

    def serialize(self, token: SecureToken) -> bytes:
        contract = [
            _to_microseconds(token.issued),
            _to_microseconds(token.expires),
            dict(token.data),
        ]
        return msgpack.packb(contract, use_bin_type=True)

    def deserialize(self, raw: bytes) -> SecureToken:
        try:
            contract = msgpack.unpackb(bytes(raw), raw=False, strict_map_key=True)
        except (UnpackException, ValueError, TypeError) as exc:
            raise MalformedTokenError("Token payload is not valid msgpack") from exc

        if not isinstance(contract, (list, tuple)) or len(contract) != 3:
            raise MalformedTokenError("Token payload does not have the expected fields")

        issued_us, expires_us, data = contract
        if not isinstance(data, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in data.items()
        ):
            raise MalformedTokenError("Field 'data' must map strings to strings")

        return SecureToken.create(
            _from_microseconds(issued_us, "issued"),
            _from_microseconds(expires_us, "expires"),
            data,
        )
