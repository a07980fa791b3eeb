from __future__ import annotations

import dataclasses
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from ..domain.exceptions import InvalidArgumentError
from ..domain.ports import TokenProvider


def _format_value(value: Any) -> str:
    """Culture-neutral string form of a payload value."""
    if isinstance(value, str):
        return value
    if isinstance(value, Enum):
        return _format_value(value.value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def _items(source: Any):
    if isinstance(source, Mapping):
        return source.items()
    if dataclasses.is_dataclass(source) and not isinstance(source, type):
        return ((f.name, getattr(source, f.name)) for f in dataclasses.fields(source))
    fields = getattr(type(source), "_fields", None)
    if isinstance(source, tuple) and fields is not None:
        return zip(fields, source)
    raise InvalidArgumentError(
        f"Cannot build a token payload from {type(source).__name__}; "
        "pass a mapping, a dataclass instance or a named tuple"
    )


def to_payload(source: Any) -> Dict[str, str]:
    """
    Flatten `source` into the str -> str mapping a token carries.

    Accepts a mapping, a dataclass instance or a named tuple. Fields are
    enumerated explicitly; `None` values are left out.
    """
    if source is None:
        raise InvalidArgumentError("source is required")

    return {
        str(name): _format_value(value)
        for name, value in _items(source)
        if value is not None
    }


def issue_for(provider: TokenProvider, source: Any, ttl: Optional[int] = None) -> str:
    """Issue a token whose payload is `to_payload(source)`."""
    if provider is None:
        raise InvalidArgumentError("provider is required")
    return provider.issue(to_payload(source), ttl)
