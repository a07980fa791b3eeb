from __future__ import annotations

from typing import Mapping, Optional, Protocol

from .entities import SecureToken


class TokenSerializer(Protocol):
    """
    Port for turning a SecureToken into bytes and back.

    Implementations live in the adapters layer (JSON, msgpack).
    """

    def serialize(self, token: SecureToken) -> bytes:
        ...

    def deserialize(self, raw: bytes) -> SecureToken:
        """
        Rebuild a token from bytes produced by `serialize`.

        Raises:
          - MalformedTokenError when the bytes have the wrong shape
          - InvalidArgumentError when the decoded fields break the
            SecureToken invariants
        """
        ...


class TokenProtector(Protocol):
    """
    Port for encrypting opaque bytes.

    Implementations live in the adapters layer (e.g. AES protector).
    """

    def protect(self, raw: bytes) -> bytes:
        ...

    def unprotect(self, protected: bytes) -> bytes:
        """
        Reverse `protect`.

        Raises:
          - DecryptionFailedError on framing, encoding or cipher failures
        """
        ...


class TokenProvider(Protocol):
    """
    Port consumed by integrations: issue a token string, validate it back.
    """

    def issue(self, payload: Mapping[str, str], ttl: Optional[int] = None) -> str:
        ...

    def validate(self, token: str) -> SecureToken:
        ...
