from __future__ import annotations

from dataclasses import dataclass

from ..domain.constants import (
    DEFAULT_KEY_SIZE,
    DEFAULT_TTL_SECONDS,
    CipherMode,
    PaddingMode,
)
from ..domain.value_objects import EncryptionConfiguration

SERIALIZER_JSON = "json"
SERIALIZER_MSGPACK = "msgpack"
SERIALIZERS = (SERIALIZER_JSON, SERIALIZER_MSGPACK)

DEFAULT_TOKEN_HEADER = "X-Secure-Token"
DEFAULT_TOKEN_QUERY_PARAMETER = "token"


@dataclass(slots=True)
class TokenSettings:
    """
    Token issuance / validation settings.

    Host code decides how to construct this (env, config file, secret store).
    """
    encryption_key: str
    key_size: int = DEFAULT_KEY_SIZE
    cipher_mode: CipherMode = CipherMode.CBC
    padding: PaddingMode = PaddingMode.PKCS7
    default_ttl: int = DEFAULT_TTL_SECONDS
    serializer: str = SERIALIZER_JSON

    # Where integrations look for the token on inbound requests
    header_name: str = DEFAULT_TOKEN_HEADER
    query_parameter: str = DEFAULT_TOKEN_QUERY_PARAMETER

    @property
    def encryption_configuration(self) -> EncryptionConfiguration:
        return EncryptionConfiguration(
            encryption_key=self.encryption_key,
            key_size=self.key_size,
            cipher_mode=self.cipher_mode,
            padding=self.padding,
        )
