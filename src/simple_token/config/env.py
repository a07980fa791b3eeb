from __future__ import annotations

import os

from ..domain.constants import DEFAULT_KEY_SIZE, DEFAULT_TTL_SECONDS, CipherMode, PaddingMode
from .settings import (
    DEFAULT_TOKEN_HEADER,
    DEFAULT_TOKEN_QUERY_PARAMETER,
    SERIALIZER_JSON,
    SERIALIZERS,
    TokenSettings,
)

ENV_PREFIX = "SIMPLE_TOKEN_"


def settings_from_env() -> TokenSettings:
    def _int(key: str, default: int) -> int:
        raw = os.getenv(ENV_PREFIX + key)
        if raw is None or not raw.strip():
            return default
        try:
            return int(raw.strip())
        except ValueError as exc:
            raise RuntimeError(f"{ENV_PREFIX}{key} must be an integer, got {raw!r}") from exc

    def _choice(key: str, enum_type, default):
        raw = os.getenv(ENV_PREFIX + key)
        if raw is None or not raw.strip():
            return default
        try:
            return enum_type(raw.strip().upper())
        except ValueError as exc:
            allowed = ", ".join(m.value for m in enum_type)
            raise RuntimeError(f"{ENV_PREFIX}{key} must be one of: {allowed}") from exc

    encryption_key = os.getenv(ENV_PREFIX + "ENCRYPTION_KEY")
    if not encryption_key:
        raise RuntimeError(f"Missing token settings: {ENV_PREFIX}ENCRYPTION_KEY")

    serializer = (os.getenv(ENV_PREFIX + "SERIALIZER") or SERIALIZER_JSON).strip().lower()
    if serializer not in SERIALIZERS:
        raise RuntimeError(f"{ENV_PREFIX}SERIALIZER must be one of: {', '.join(SERIALIZERS)}")

    return TokenSettings(
        encryption_key=encryption_key.strip(),
        key_size=_int("KEY_SIZE", DEFAULT_KEY_SIZE),
        cipher_mode=_choice("CIPHER_MODE", CipherMode, CipherMode.CBC),
        padding=_choice("PADDING", PaddingMode, PaddingMode.PKCS7),
        default_ttl=_int("DEFAULT_TTL", DEFAULT_TTL_SECONDS),
        serializer=serializer,
        header_name=os.getenv(ENV_PREFIX + "HEADER") or DEFAULT_TOKEN_HEADER,
        query_parameter=os.getenv(ENV_PREFIX + "QUERY_PARAMETER") or DEFAULT_TOKEN_QUERY_PARAMETER,
    )
