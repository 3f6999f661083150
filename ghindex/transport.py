"""
Async HTTP transport for the GitHub REST and GraphQL APIs.

Handles credential headers, request logging and error response parsing
using the httpx async client. Requests are never retried: every failure is
raised to the caller as a typed exception.
"""

import time
from typing import Any

import httpx

from ghindex.exceptions import PreconditionError, RateLimitedError, UpstreamError
from ghindex.logging import log_http_request, log_http_response


class GitHubTransport:
    """
    Async transport shared by the fetch strategies.

    Handles:
    - Optional bearer credential on every request
    - REST search requests and GraphQL documents
    - Error response parsing into typed exceptions
    """

    DEFAULT_BASE_URL = "https://api.github.com"

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.github.com")
            token: Optional bearer credential; never validated or stored elsewhere
            timeout: Request timeout in seconds
            transport: httpx transport override (used by tests to fake GitHub)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._token = token or None

        headers = {"Accept": "application/vnd.github+json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers=headers,
            transport=transport,
        )

    @property
    def has_credential(self) -> bool:
        return self._token is not None

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "GitHubTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def rest_get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Make a GET request against the REST API.

        Args:
            path: API path (e.g., "/search/repositories")
            params: Query parameters

        Returns:
            Parsed JSON response

        Raises:
            UpstreamError: On non-success status or network failure
        """
        response = await self._send("GET", path, params=params)
        return self._decode(response)

    async def graphql(
        self, query: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """
        Execute a GraphQL document.

        Args:
            query: GraphQL document
            variables: Values for the document's variables

        Returns:
            The ``data`` member of the response

        Raises:
            PreconditionError: If the transport has no credential
            UpstreamError: On non-success status, network failure, or a
                response carrying an ``errors`` array
        """
        if not self.has_credential:
            raise PreconditionError("GitHub token is required for GraphQL queries")

        body = {"query": query, "variables": variables or {}}
        response = await self._send("POST", "/graphql", json=body)
        payload = self._decode(response)

        errors = payload.get("errors")
        if errors:
            first = errors[0]
            message = f"GraphQL Error: {first.get('message', 'unknown error')}"
            if first.get("type") == "RATE_LIMITED":
                raise RateLimitedError(response.status_code, message, body=response.text)
            raise UpstreamError(
                response.status_code, message, body=response.text, code="GRAPHQL_ERROR"
            )

        return payload.get("data") or {}

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        url = f"{self.base_url}{path}"
        log_http_request(method, url, headers=dict(self._client.headers), body=kwargs.get("json"))

        started = time.perf_counter()
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            raise UpstreamError(None, str(e) or type(e).__name__, code="CONNECTION_ERROR") from e

        log_http_response(
            response.status_code, url, elapsed_ms=(time.perf_counter() - started) * 1000
        )

        if response.status_code >= 400:
            raise self._parse_error_response(response)

        return response

    @staticmethod
    def _decode(response: httpx.Response) -> dict[str, Any]:
        """Parse a success body, which must be a JSON object."""
        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamError(
                response.status_code, "Invalid JSON response", body=response.text
            ) from e
        if not isinstance(payload, dict):
            raise UpstreamError(
                response.status_code, "Invalid JSON response", body=response.text
            )
        return payload

    def _parse_error_response(self, response: httpx.Response) -> UpstreamError:
        """
        Parse an error response into a typed exception.

        Args:
            response: HTTP response with error status

        Returns:
            RateLimitedError when GitHub reports the limit as exhausted,
            UpstreamError otherwise
        """
        body = response.text
        try:
            data = response.json()
        except ValueError:
            data = {}

        detail = data.get("message") if isinstance(data, dict) else None
        status_code = response.status_code
        message = f"GitHub API returned {status_code}: {detail or body}"

        remaining = response.headers.get("X-RateLimit-Remaining")
        if status_code == 429 or (status_code == 403 and remaining == "0"):
            reset_str = response.headers.get("X-RateLimit-Reset")
            try:
                reset_at = int(reset_str) if reset_str else None
            except ValueError:
                reset_at = None
            return RateLimitedError(status_code, message, reset_at=reset_at, body=body)

        return UpstreamError(status_code, message, body=body)
