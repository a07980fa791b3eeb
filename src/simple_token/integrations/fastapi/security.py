from __future__ import annotations

from typing import Iterable, Optional

from fastapi import HTTPException, Request, status
from loguru import logger

from ...config.settings import DEFAULT_TOKEN_HEADER, DEFAULT_TOKEN_QUERY_PARAMETER
from ...domain.entities import SecureToken
from ...domain.exceptions import InvalidArgumentError, InvalidTokenError
from ...domain.ports import TokenProvider

# Key under request.state where the validated token is stored
REQUEST_STATE_KEY = "secure_token"


def extract_token_from_request(
    request: Request,
    header_name: str = DEFAULT_TOKEN_HEADER,
    query_parameter: str = DEFAULT_TOKEN_QUERY_PARAMETER,
) -> Optional[str]:
    """
    Extract a secure token from either:

      1. the `header_name` header (preferred)
      2. the `query_parameter` query string parameter

    Returns None if no token is found.
    """
    token = (request.headers.get(header_name) or "").strip()
    if token:
        logger.debug("Secure token found inside header {}", header_name)
        return token

    token = (request.query_params.get(query_parameter) or "").strip()
    if token:
        logger.debug("Secure token found inside query string parameter {}", query_parameter)
        return token

    return None


def unauthorized() -> HTTPException:
    # Same response for every failure so clients cannot tell them apart
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
    )


def authenticate_request(
    provider: TokenProvider,
    request: Request,
    header_name: str = DEFAULT_TOKEN_HEADER,
    query_parameter: str = DEFAULT_TOKEN_QUERY_PARAMETER,
) -> SecureToken:
    """
    Extract and validate the request's token, store it on
    `request.state`, and return it.

    Raises HTTPException(401) when the token is missing or rejected.
    """
    token = extract_token_from_request(request, header_name, query_parameter)
    if token is None:
        logger.warning("No secure token found for the request. Access is denied.")
        raise unauthorized()

    try:
        validated = provider.validate(token)
    except (InvalidTokenError, InvalidArgumentError) as exc:
        logger.warning("Invalid or expired token for the request. Access is denied.")
        raise unauthorized() from exc

    setattr(request.state, REQUEST_STATE_KEY, validated)
    return validated


def get_request_token(request: Request) -> Optional[SecureToken]:
    """Token validated earlier in this request, if any."""
    return getattr(request.state, REQUEST_STATE_KEY, None)


def check_token_data(request: Request, token: SecureToken, names: Iterable[str]) -> None:
    """
    Require each named path/query parameter to equal the token data entry
    of the same name.

    Raises HTTPException(403) on the first missing or mismatched parameter.
    """
    for name in names:
        if name in request.path_params:
            argument = request.path_params[name]
        else:
            argument = request.query_params.get(name)

        if argument is None or name not in token.data:
            logger.warning("Parameter {} not found. Access is denied.", name)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Parameter {name} not found",
            )

        if token.data[name] != str(argument):
            logger.warning("Parameter {} mismatched. Access is denied.", name)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Parameter {name} mismatched",
            )
