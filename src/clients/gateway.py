"""
Content Gateway

Thin HTTP client for the upstream content providers (Quran text/translation
API and Hadith API). One instance per provider, each built with its own base
URL, credential and timeout.

Patterns Applied:
- Connection pooling (one httpx.AsyncClient per provider, reused)
- Repository Pattern: Protocol for duck typing, FakeContentGateway for tests
- Custom namespaced exceptions (GatewayError instead of httpx errors)

The gateway never retries: a failed call is reported to the caller at once.
"""

import asyncio
from collections.abc import Mapping
from typing import Any, Final, Protocol
from urllib.parse import urlencode

import httpx

from src.core.exceptions import GatewayError
from src.core.logging import get_logger

logger = get_logger(__name__)

# =============================================================================
# Module Constants
# =============================================================================

DEFAULT_TIMEOUT: Final[float] = 10.0
DEFAULT_CACHE_HINT: Final[int] = 86400

# Status reported when the upstream answered 2xx with a body that is not JSON
MALFORMED_BODY_STATUS: Final[int] = 502


# =============================================================================
# Protocol for Duck Typing (Repository Pattern)
# =============================================================================


class ContentGatewayProtocol(Protocol):
    """Protocol for content gateways.

    Enables FakeContentGateway for testing without real HTTP calls.
    """

    async def fetch(
        self,
        path: str,
        cache_hint_seconds: int = DEFAULT_CACHE_HINT,
        params: Mapping[str, str] | None = None,
    ) -> Any:
        """Fetch and decode a JSON document from the provider."""
        ...


# =============================================================================
# ContentGateway Implementation
# =============================================================================


class ContentGateway:
    """HTTP client for one upstream content provider.

    Attributes:
        base_url: Provider base URL (e.g., https://api.sunnah.com/v1/)
        name: Provider label used in errors and logs
        timeout: Transport timeout in seconds
    """

    def __init__(
        self,
        base_url: str,
        *,
        name: str = "content",
        timeout: float = DEFAULT_TIMEOUT,
        default_params: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            base_url: Provider base URL
            name: Provider label for errors and logs
            timeout: Transport timeout in seconds
            default_params: Query parameters sent with every request (credentials)
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url
        self.name = name
        self.timeout = timeout
        self._default_params = dict(default_params or {})

        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "ContentGateway":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def fetch(
        self,
        path: str,
        cache_hint_seconds: int = DEFAULT_CACHE_HINT,
        params: Mapping[str, str] | None = None,
    ) -> Any:
        """Fetch a JSON document from the provider.

        Args:
            path: Request path relative to the base URL
            cache_hint_seconds: Advisory freshness hint for the transport
            params: Request-specific query parameters

        Returns:
            Decoded JSON body

        Raises:
            GatewayError: status 0 when no response was received, the upstream
                status on non-2xx, 502 when a 2xx body is not JSON
        """
        query = {**self._default_params, **(params or {})}

        try:
            response = await self._client.get(
                path,
                params=query,
                headers={"Cache-Control": f"max-age={cache_hint_seconds}"},
            )
        except httpx.RequestError as e:
            logger.warning(
                "gateway_unreachable",
                provider=self.name,
                path=path,
                error_type=type(e).__name__,
            )
            raise GatewayError(0, path, provider=self.name) from e

        if not response.is_success:
            logger.warning(
                "gateway_error",
                provider=self.name,
                path=path,
                status=response.status_code,
            )
            raise GatewayError(response.status_code, path, provider=self.name)

        try:
            return response.json()
        except ValueError as e:
            logger.warning("gateway_malformed_body", provider=self.name, path=path)
            raise GatewayError(MALFORMED_BODY_STATUS, path, provider=self.name) from e

    async def close(self) -> None:
        """Close the HTTP client connection pool."""
        await self._client.aclose()


# =============================================================================
# FakeContentGateway for Testing
# =============================================================================


class FakeContentGateway:
    """Fake gateway for unit testing without real HTTP.

    Routes are keyed either by bare path or by ``path?query`` with the query
    parameters sorted; the more specific key wins. A route value that is an
    exception instance is raised instead of returned.
    """

    def __init__(self, routes: dict[str, Any] | None = None) -> None:
        self._routes: dict[str, Any] = dict(routes or {})
        self.calls: list[tuple[str, dict[str, str]]] = []

    @staticmethod
    def route_key(path: str, params: Mapping[str, str] | None = None) -> str:
        """Build the specific route key for a path and its parameters."""
        if not params:
            return path
        return f"{path}?{urlencode(sorted(params.items()))}"

    def set_route(self, key: str, value: Any) -> None:
        self._routes[key] = value

    async def fetch(
        self,
        path: str,
        cache_hint_seconds: int = DEFAULT_CACHE_HINT,  # noqa: ARG002
        params: Mapping[str, str] | None = None,
    ) -> Any:
        await asyncio.sleep(0)
        self.calls.append((path, dict(params or {})))

        specific = self.route_key(path, params)
        if specific in self._routes:
            value = self._routes[specific]
        elif path in self._routes:
            value = self._routes[path]
        else:
            raise GatewayError(404, path, provider="fake")

        if isinstance(value, BaseException):
            raise value
        return value
