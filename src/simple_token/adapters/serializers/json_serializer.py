from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Mapping

from ...domain.entities import SecureToken
from ...domain.exceptions import MalformedTokenError
from ...domain.ports import TokenSerializer

_FIELDS = frozenset({"issued", "expires", "data"})


class JsonTokenSerializer(TokenSerializer):
    """
    Adapter implementing TokenSerializer as compact UTF-8 JSON:

        {"issued":"<ISO-8601>","expires":"<ISO-8601>","data":{...}}

    Timestamps keep their UTC offset and microseconds, so a round trip
    is lossless.
    """

    def serialize(self, token: SecureToken) -> bytes:
        document = {
            "issued": token.issued.isoformat(),
            "expires": token.expires.isoformat(),
            "data": dict(token.data),
        }
        return json.dumps(document, separators=(",", ":"), ensure_ascii=False).encode("utf-8")

    def deserialize(self, raw: bytes) -> SecureToken:
        try:
            document = json.loads(bytes(raw).decode("utf-8"))
        except (UnicodeDecodeError, ValueError, TypeError) as exc:
            raise MalformedTokenError("Token payload is not valid JSON") from exc

        if not isinstance(document, dict) or set(document) != _FIELDS:
            raise MalformedTokenError("Token payload does not have the expected fields")

        issued = _parse_instant(document["issued"], "issued")
        expires = _parse_instant(document["expires"], "expires")
        data = _parse_data(document["data"])

        # InvalidArgumentError from the token invariants propagates as-is
        return SecureToken.create(issued, expires, data)


def _parse_instant(value: Any, name: str) -> datetime:
    if not isinstance(value, str):
        raise MalformedTokenError(f"Field {name!r} must be a timestamp string")
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise MalformedTokenError(f"Field {name!r} is not an ISO-8601 timestamp") from exc
    if parsed.tzinfo is None:
        raise MalformedTokenError(f"Field {name!r} has no UTC offset")
    return parsed


def _parse_data(value: Any) -> Mapping[str, str]:
    if not isinstance(value, dict):
        raise MalformedTokenError("Field 'data' must be an object")
    if not all(isinstance(v, str) for v in value.values()):
        raise MalformedTokenError("Field 'data' must only contain string values")
    return value
