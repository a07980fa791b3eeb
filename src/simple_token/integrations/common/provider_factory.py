from __future__ import annotations

from typing import Optional

from ...adapters.aes.protector import AESTokenProtector
from ...adapters.serializers.json_serializer import JsonTokenSerializer
from ...adapters.serializers.msgpack_serializer import MsgpackTokenSerializer
from ...application.provider import SecureTokenProvider
from ...config.env import settings_from_env
from ...config.settings import SERIALIZER_MSGPACK, TokenSettings
from ...domain.constants import DEFAULT_TTL_SECONDS
from ...domain.ports import TokenSerializer
from ...domain.value_objects import EncryptionConfiguration


def create_provider(
        configuration: EncryptionConfiguration,
        *,
        serializer: Optional[TokenSerializer] = None,
        default_ttl: int = DEFAULT_TTL_SECONDS,
) -> SecureTokenProvider:
    """AES protector + the given serializer (JSON when omitted)."""
    return SecureTokenProvider(
        serializer=serializer or JsonTokenSerializer(),
        protector=AESTokenProtector(configuration),
        default_ttl=default_ttl,
    )


def create_default_provider(
        configuration: EncryptionConfiguration,
        default_ttl: int = DEFAULT_TTL_SECONDS,
) -> SecureTokenProvider:
    return create_provider(configuration, default_ttl=default_ttl)


def create_provider_from_settings(settings: TokenSettings) -> SecureTokenProvider:
    """
    High-level factory: TokenSettings -> SecureTokenProvider.

    Build it once at startup and hand the instance to every call site.
    """
    serializer: TokenSerializer
    if settings.serializer == SERIALIZER_MSGPACK:
        serializer = MsgpackTokenSerializer()
    else:
        serializer = JsonTokenSerializer()

    return create_provider(
        settings.encryption_configuration,
        serializer=serializer,
        default_ttl=settings.default_ttl,
    )


def create_provider_from_env() -> SecureTokenProvider:
    return create_provider_from_settings(settings_from_env())
