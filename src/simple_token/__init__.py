"""
simple_token

Compact, encrypted, time-limited bearer tokens carrying a string payload.
Clean-architecture core that can be integrated with multiple frameworks
(FastAPI, CLI, etc.).
"""

__version__ = "0.1.0"

from .domain.entities import SecureToken
from .domain.constants import CipherMode, PaddingMode
from .domain.exceptions import (
    SecureTokenError,
    InvalidArgumentError,
    EncryptionConfigurationError,
    InvalidTokenError,
    MalformedTokenError,
    DecryptionFailedError,
    ProtectionFailedError,
    TokenExpiredError,
)
from .domain.value_objects import EncryptionConfiguration
from .domain.ports import TokenSerializer, TokenProtector, TokenProvider

from .application.provider import SecureTokenProvider
from .application.payload import to_payload, issue_for

from .config.settings import TokenSettings
from .config.env import settings_from_env

from .adapters.serializers.json_serializer import JsonTokenSerializer
from .adapters.serializers.msgpack_serializer import MsgpackTokenSerializer
from .adapters.aes.protector import AESTokenProtector

from .integrations.common.provider_factory import (
    create_provider,
    create_default_provider,
    create_provider_from_settings,
    create_provider_from_env,
)

__all__ = [
    "__version__",
    # domain core
    "SecureToken",
    "CipherMode",
    "PaddingMode",
    "EncryptionConfiguration",
    "TokenSerializer",
    "TokenProtector",
    "TokenProvider",
    # exceptions
    "SecureTokenError",
    "InvalidArgumentError",
    "EncryptionConfigurationError",
    "InvalidTokenError",
    "MalformedTokenError",
    "DecryptionFailedError",
    "ProtectionFailedError",
    "TokenExpiredError",
    # application
    "SecureTokenProvider",
    "to_payload",
    "issue_for",
    # config
    "TokenSettings",
    "settings_from_env",
    # adapters
    "JsonTokenSerializer",
    "MsgpackTokenSerializer",
    "AESTokenProtector",
    # factories
    "create_provider",
    "create_default_provider",
    "create_provider_from_settings",
    "create_provider_from_env",
]
