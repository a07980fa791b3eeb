from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Mapping, Optional

from .exceptions import InvalidArgumentError


def _require_aware(name: str, value: datetime) -> None:
    if not isinstance(value, datetime):
        raise InvalidArgumentError(f"{name} must be a datetime, got {type(value).__name__}")
    if value.tzinfo is None or value.utcoffset() is None:
        raise InvalidArgumentError(f"{name} must be timezone-aware")


@dataclass(frozen=True, slots=True)
class SecureToken:
    """
    Deserialized token information.

    - issued:  instant in time when the token was issued
    - expires: instant in time when the token expires
    - data:    string payload carried inside the token (read-only view)

    Instances are immutable; `data` is copied on construction so the
    caller's mapping can change afterwards without affecting the token.

    `is_expired` is a read-only property, not a method: use
    `token.is_expired`, not `token.is_expired()`. It reads the clock on
    every access.
    """

    issued: datetime
    expires: datetime
    data: Mapping[str, str]

    def __post_init__(self) -> None:
        _require_aware("issued", self.issued)
        _require_aware("expires", self.expires)

        if self.data is None:
            raise InvalidArgumentError("data is required")
        if not isinstance(self.data, Mapping):
            raise InvalidArgumentError(f"data must be a mapping, got {type(self.data).__name__}")
        if self.issued > self.expires:
            raise InvalidArgumentError("issued cannot be after expires")

        copied = dict(self.data)
        for key, value in copied.items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise InvalidArgumentError(
                    f"data must map str to str, got {key!r}: {value!r}"
                )

        object.__setattr__(self, "data", MappingProxyType(copied))

    @classmethod
    def create(
            cls,
            issued: datetime,
            expires: datetime,
            data: Optional[Mapping[str, str]],
    ) -> SecureToken:
        return cls(issued=issued, expires=expires, data=data)

    @property
    def is_expired(self) -> bool:
        return datetime.now(timezone.utc) > self.expires

    @property
    def ttl_seconds(self) -> float:
        """Lifetime the token was issued with."""
        return (self.expires - self.issued).total_seconds()
