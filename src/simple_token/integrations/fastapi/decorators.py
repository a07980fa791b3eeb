from __future__ import annotations

import inspect
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Optional, ParamSpec, TypeVar

from fastapi import HTTPException
from starlette.requests import Request

from ...config.settings import DEFAULT_TOKEN_HEADER, DEFAULT_TOKEN_QUERY_PARAMETER
from ...domain.entities import SecureToken
from ...domain.ports import TokenProvider
from .security import authenticate_request, check_token_data

P = ParamSpec("P")
R = TypeVar("R")

INJECTED_KWARG = "secure_token"


@dataclass(slots=True)
class FastAPITokenDecorators:
    """
    Decorator-based token validation for FastAPI route handlers.

    Usage example in your FastAPI app:

        token_decorators = FastAPISecureToken(provider).decorators()

        @router.get("/downloads/{file_id}")
        @token_decorators.matching("file_id")
        async def download(request: Request, file_id: str, secure_token: SecureToken):
            ...

    All decorators will:
      - Extract the token from the configured header *or* query parameter
      - Validate it with the provider
      - Inject `secure_token` (SecureToken) into kwargs
      - Answer 401 for missing/invalid tokens, 403 for data mismatches

    The route needs a `request: Request` parameter. `secure_token` is
    hidden from FastAPI's signature inspection, so it is never treated as
    a query or body parameter.
    """

    provider: TokenProvider
    header_name: str = DEFAULT_TOKEN_HEADER
    query_parameter: str = DEFAULT_TOKEN_QUERY_PARAMETER

    # ------------------------------------------------------------------ #
    # helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _extract_request(args: tuple[Any, ...], kwargs: dict[str, Any]) -> Request:
        """Extract Request object from function arguments."""
        if "request" in kwargs and isinstance(kwargs["request"], Request):
            return kwargs["request"]

        for arg in args:
            if isinstance(arg, Request):
                return arg

        raise ValueError(
            "Request object not found. "
            "Ensure your route has a 'request: Request' parameter."
        )

    def _authenticate(self, request: Request) -> SecureToken:
        return authenticate_request(
            self.provider,
            request,
            self.header_name,
            self.query_parameter,
        )

    @staticmethod
    def _route_signature(func: Callable[..., Any]) -> inspect.Signature:
        """Handler signature without the injected kwarg, annotations resolved."""
        signature = inspect.signature(func, eval_str=True)
        params = [p for name, p in signature.parameters.items() if name != INJECTED_KWARG]
        return signature.replace(parameters=params)

    def _inject(
            self,
            func: Callable[P, R],
            resolve: Callable[[Request], Optional[SecureToken]],
    ) -> Callable[..., Any]:
        @wraps(func)
        async def async_impl(*args: Any, **kwargs: Any) -> Any:
            request = self._extract_request(args, kwargs)
            kwargs[INJECTED_KWARG] = resolve(request)
            return await func(*args, **kwargs)  # type: ignore[misc]

        @wraps(func)
        def sync_impl(*args: Any, **kwargs: Any) -> Any:
            request = self._extract_request(args, kwargs)
            kwargs[INJECTED_KWARG] = resolve(request)
            return func(*args, **kwargs)

        wrapper = async_impl if inspect.iscoroutinefunction(func) else sync_impl
        wrapper.__signature__ = self._route_signature(func)  # type: ignore[attr-defined]
        return wrapper

    # ------------------------------------------------------------------ #
    # decorators
    # ------------------------------------------------------------------ #

    def validated(self, func: Callable[P, R]) -> Callable[..., Any]:
        """
        Decorator: require a valid token.

        Injects `secure_token: SecureToken` into kwargs.
        """
        return self._inject(func, self._authenticate)

    def optional(self, func: Callable[P, R]) -> Callable[..., Any]:
        """
        Decorator: optional token.

        Injects `secure_token: SecureToken | None` into kwargs.
        """

        def resolve(request: Request) -> Optional[SecureToken]:
            try:
                return self._authenticate(request)
            except HTTPException:
                return None

        return self._inject(func, resolve)

    def matching(self, *names: str):
        """
        Decorator: require a valid token whose data matches the named
        path/query parameters.

        Also injects `secure_token` into kwargs.
        """

        def resolve(request: Request) -> SecureToken:
            token = self._authenticate(request)
            check_token_data(request, token, names)
            return token

        def decorator(func: Callable[P, R]) -> Callable[..., Any]:
            return self._inject(func, resolve)

        return decorator
