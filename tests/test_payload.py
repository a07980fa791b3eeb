# tests/test_payload.py
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import NamedTuple, Optional

import pytest

from simple_token import InvalidArgumentError, issue_for, to_payload


class Role(Enum):
    ADMIN = "admin"


@dataclass
class Download:
    file_id: int
    owner: str
    role: Role
    expires_on: date
    note: Optional[str] = None


class Grant(NamedTuple):
    user: str
    level: int


def test_mapping_values_are_stringified():
    assert to_payload({"Foo": 12, "Bar": "test", "ok": True}) == {
        "Foo": "12",
        "Bar": "test",
        "ok": "True",
    }


def test_dataclass_fields_are_enumerated():
    payload = to_payload(Download(7, "alice", Role.ADMIN, date(2024, 5, 1)))

    assert payload == {
        "file_id": "7",
        "owner": "alice",
        "role": "admin",
        "expires_on": "2024-05-01",
    }


def test_named_tuple_fields_are_enumerated():
    assert to_payload(Grant("bob", 3)) == {"user": "bob", "level": "3"}


def test_datetimes_use_iso_format():
    moment = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert to_payload({"at": moment}) == {"at": "2024-01-02T03:04:05+00:00"}


@pytest.mark.parametrize("source", [None, 42, "text", ["a", "b"], Download])
def test_unsupported_sources_are_rejected(source):
    with pytest.raises(InvalidArgumentError):
        to_payload(source)


def test_issue_for_round_trip(provider):
    token = issue_for(provider, Grant("bob", 3), ttl=30)
    validated = provider.validate(token)

    assert validated.data["user"] == "bob"
    assert validated.data["level"] == "3"
    assert validated.ttl_seconds == 30


def test_issue_for_requires_provider():
    with pytest.raises(InvalidArgumentError):
        issue_for(None, {"a": "b"})
