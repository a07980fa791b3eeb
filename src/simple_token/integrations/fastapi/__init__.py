from __future__ import annotations

from typing import Optional

from .decorators import FastAPITokenDecorators
from .deps import FastAPISecureToken
from .security import extract_token_from_request, get_request_token
from ..common.provider_factory import create_provider_from_settings
from ...config.env import settings_from_env
from ...config.settings import TokenSettings


def create_fastapi_secure_token(settings: Optional[TokenSettings] = None) -> FastAPISecureToken:
    """
    High-level helper for FastAPI apps:

    - Builds a SecureTokenProvider from `settings` (SIMPLE_TOKEN_* env when omitted)
    - Wraps it in FastAPISecureToken, exposing dependencies like:

        secure_token.get_secure_token
        secure_token.get_optional_token
        secure_token.match_token_data(...)
        secure_token.decorators()
    """
    settings = settings or settings_from_env()
    return FastAPISecureToken(
        provider=create_provider_from_settings(settings),
        header_name=settings.header_name,
        query_parameter=settings.query_parameter,
    )


__all__ = [
    "FastAPISecureToken",
    "FastAPITokenDecorators",
    "create_fastapi_secure_token",
    "extract_token_from_request",
    "get_request_token",
]
