from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from fastapi import Depends, HTTPException, Request

from ...config.settings import DEFAULT_TOKEN_HEADER, DEFAULT_TOKEN_QUERY_PARAMETER
from ...domain.entities import SecureToken
from ...domain.ports import TokenProvider
from .decorators import FastAPITokenDecorators
from .security import authenticate_request, check_token_data


@dataclass(slots=True)
class FastAPISecureToken:
    """
    FastAPI integration for simple_token.

    Wraps a TokenProvider in FastAPI dependencies. The token is read from
    the `header_name` header, falling back to the `query_parameter` query
    string parameter.
    """

    provider: TokenProvider
    header_name: str = DEFAULT_TOKEN_HEADER
    query_parameter: str = DEFAULT_TOKEN_QUERY_PARAMETER

    # ------------------------------------------------------------------ #
    # Base dependencies
    # ------------------------------------------------------------------ #

    async def get_secure_token(self, request: Request) -> SecureToken:
        """Dependency: require a valid token."""
        return authenticate_request(
            self.provider,
            request,
            self.header_name,
            self.query_parameter,
        )

    async def get_optional_token(self, request: Request) -> Optional[SecureToken]:
        """Dependency: a valid token, or None."""
        try:
            return authenticate_request(
                self.provider,
                request,
                self.header_name,
                self.query_parameter,
            )
        except HTTPException:
            # missing or bad token -> anonymous
            return None

    # ------------------------------------------------------------------ #
    # Dependency factories
    # ------------------------------------------------------------------ #

    def match_token_data(self, *names: str) -> Callable:
        """
        Dependency factory: the named path/query parameters must equal
        the token data entries of the same name.
        """

        async def dependency(
                request: Request,
                token: SecureToken = Depends(self.get_secure_token),
        ) -> SecureToken:
            check_token_data(request, token, names)
            return token

        return dependency

    def decorators(self) -> FastAPITokenDecorators:
        return FastAPITokenDecorators(
            provider=self.provider,
            header_name=self.header_name,
            query_parameter=self.query_parameter,
        )


"""

from simple_token.integrations.fastapi import create_fastapi_secure_token

secure_token = create_fastapi_secure_token()  # settings from SIMPLE_TOKEN_* env

@app.get("/documents/{document_id}")
async def read_document(
    document_id: str,
    token: SecureToken = Depends(secure_token.match_token_data("document_id")),
):
    ...

"""
