from __future__ import annotations

import base64
import binascii
from typing import Union


def b64decode_canonical(value: Union[str, bytes]) -> bytes:
    """
    Strict base64 decode that also rejects non-canonical input.

    `base64.b64decode(..., validate=True)` ignores the unused low bits of
    the last quantum, so several strings decode to the same bytes. Only
    the exact string `b64encode` would produce is accepted here.

    Raises:
        binascii.Error -- not base64, or not the canonical encoding
        ValueError     -- non-ASCII text
    """
    encoded = value.encode("ascii") if isinstance(value, str) else bytes(value)
    decoded = base64.b64decode(encoded, validate=True)
    if base64.b64encode(decoded) != encoded:
        raise binascii.Error("Non-canonical base64 encoding")
    return decoded
