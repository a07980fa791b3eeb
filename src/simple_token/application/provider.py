from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Mapping, Optional

from ..domain.constants import DEFAULT_TTL_SECONDS
from ..domain.entities import SecureToken
from ..domain.exceptions import (
    DecryptionFailedError,
    InvalidArgumentError,
    MalformedTokenError,
    ProtectionFailedError,
    TokenExpiredError,
)
from ..domain.ports import TokenProtector, TokenSerializer
from ..helpers import b64decode_canonical


def _check_ttl(ttl: object) -> int:
    if isinstance(ttl, bool) or not isinstance(ttl, int):
        raise InvalidArgumentError(f"ttl must be an integer number of seconds, got {ttl!r}")
    if ttl <= 0:
        raise InvalidArgumentError(f"ttl must be positive, got {ttl}")
    return ttl


@dataclass(frozen=True, slots=True)
class SecureTokenProvider:
    """
    Application service tying issuance and validation together:

      issue:    payload -> SecureToken -> serialize -> protect -> base64
      validate: base64 -> unprotect -> deserialize -> expiry check

    Holds no mutable state, so one instance can be shared by every
    request handler. Build a new provider to rotate keys.
    """

    serializer: TokenSerializer
    protector: TokenProtector
    default_ttl: int = DEFAULT_TTL_SECONDS

    def __post_init__(self) -> None:
        if self.serializer is None:
            raise InvalidArgumentError("serializer is required")
        if self.protector is None:
            raise InvalidArgumentError("protector is required")
        _check_ttl(self.default_ttl)

    def issue(self, payload: Mapping[str, str], ttl: Optional[int] = None) -> str:
        """
        Issue a token carrying `payload`, valid for `ttl` seconds
        (default: `default_ttl`).

        Raises:
            InvalidArgumentError
            ProtectionFailedError
        """
        if payload is None:
            raise InvalidArgumentError("payload is required")
        ttl = _check_ttl(self.default_ttl if ttl is None else ttl)

        now = datetime.now(timezone.utc)
        token = SecureToken.create(now, now + timedelta(seconds=ttl), payload)

        serialized = self.serializer.serialize(token)
        protected = self.protector.protect(serialized)
        if not protected:
            raise ProtectionFailedError("Token encryption failed")

        return base64.b64encode(protected).decode("ascii")

    def validate(self, token: str) -> SecureToken:
        """
        Validate a token string and return the SecureToken it carries.

        Raises:
            InvalidArgumentError  -- token missing
            MalformedTokenError   -- not base64, or payload has the wrong shape
            DecryptionFailedError -- anything the protector rejected
            ProtectionFailedError -- protector returned nothing
            TokenExpiredError
        """
        if token is None or not isinstance(token, str) or not token.strip():
            raise InvalidArgumentError("token is required")

        try:
            decoded = b64decode_canonical(token.strip())
        except (binascii.Error, ValueError) as exc:
            raise MalformedTokenError("Token is not valid base64") from exc

        try:
            decrypted = self.protector.unprotect(decoded)
        except Exception as exc:
            # one message for every cause, so callers learn nothing about why
            raise DecryptionFailedError("Unable to decrypt token") from exc

        if not decrypted:
            raise ProtectionFailedError("Token decryption failed")

        try:
            deserialized = self.serializer.deserialize(decrypted)
        except InvalidArgumentError as exc:
            # e.g. issued after expires
            raise MalformedTokenError("Token payload is not a valid token") from exc

        if deserialized.is_expired:
            raise TokenExpiredError("Token has expired")

        return deserialized
