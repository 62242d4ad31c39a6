"""
Core HTTP client for the Qiita API v2.

Handles configuration, authentication, request/response, and status mapping.
"""

import json
import logging
import os
import urllib.parse
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Literal, TypeVar

import httpx

from qiita_client.core.errors import ConfigurationError, error_for_status
from qiita_client.core.pagination import PaginationMode, Paginator

logger = logging.getLogger(__name__)

# Configuration
DEFAULT_BASE_URL = "https://qiita.com"
DEFAULT_VERSION_PATH = "/api/v2"
DEFAULT_TIMEOUT = 60
DEFAULT_MAX_PAGE = 100

T = TypeVar("T")

HTTPMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]


def _query_value(value: Any) -> Any:
    """Render booleans the way the API expects them (true/false)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


# =============================================================================
# Request / Response
# =============================================================================


@dataclass
class ClientConfig:
    """Mutable connection settings read by every request."""

    base_url: str = DEFAULT_BASE_URL
    version_path: str = DEFAULT_VERSION_PATH
    token: str = ""
    timeout: float = DEFAULT_TIMEOUT
    pagination: PaginationMode = "link"
    max_page: int | None = DEFAULT_MAX_PAGE
    stop_on_empty: bool = True

    def __post_init__(self) -> None:
        self.set_base_url(self.base_url)
        self.set_version_path(self.version_path)

    def set_token(self, token: str) -> None:
        self.token = token

    def set_base_url(self, url: str) -> None:
        self.base_url = url.rstrip("/")

    def set_version_path(self, path: str) -> None:
        self.version_path = path.rstrip("/")

    def get_token(self) -> str:
        return self.token

    def get_base_url(self) -> str:
        return self.base_url

    def get_version_path(self) -> str:
        return self.version_path


@dataclass
class RequestDescriptor:
    """A single request to send through the gateway."""

    method: HTTPMethod
    url: str
    params: dict[str, Any] | None = None
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class APIResponse:
    """A successful response with its body decoded."""

    status: int
    headers: httpx.Headers
    data: Any
    links: dict[str | None, dict[str, str]] = field(default_factory=dict)
    url: str = ""

    @property
    def next_url(self) -> str | None:
        """Absolute URL of the `rel="next"` entry of the Link header, if any."""
        link = self.links.get("next")
        if not link or not link.get("url"):
            return None
        if self.url:
            # Link targets may be relative to the request URL
            return str(httpx.URL(self.url).join(link["url"]))
        return link["url"]


class APIClient:
    """
    Low-level async HTTP client for the Qiita API.

    Handles:
    - Authentication via bearer token
    - HTTP methods (GET, POST, PUT, PATCH, DELETE)
    - Error handling and response parsing
    - Pagination for list endpoints
    """

    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        version_path: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        pagination: PaginationMode = "link",
        max_page: int | None = DEFAULT_MAX_PAGE,
        stop_on_empty: bool = True,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the API client.

        Args:
            token: Qiita access token (or QIITA_TOKEN env var)
            base_url: Qiita host (or QIITA_BASE_URL env var)
            version_path: API version path (or QIITA_API_VERSION env var)
            timeout: Request timeout in seconds
            pagination: "link" to follow Link headers, "page" to count pages
            max_page: Highest page number requested in "page" mode (None for no cap)
            stop_on_empty: Stop "page" mode pagination at the first empty page
            http_client: Shared httpx AsyncClient; created lazily when omitted

        """
        self.config = ClientConfig(
            base_url=base_url or os.environ.get("QIITA_BASE_URL", DEFAULT_BASE_URL),
            version_path=version_path or os.environ.get("QIITA_API_VERSION", DEFAULT_VERSION_PATH),
            token=token or os.environ.get("QIITA_TOKEN", ""),
            timeout=timeout,
            pagination=pagination,
            max_page=max_page,
            stop_on_empty=stop_on_empty,
        )
        self._http_client = http_client
        self._owns_http_client = http_client is None

    # =========================================================================
    # Configuration
    # =========================================================================

    @property
    def token(self) -> str:
        return self.config.get_token()

    @token.setter
    def token(self, value: str) -> None:
        self.config.set_token(value)

    @property
    def base_url(self) -> str:
        return self.config.get_base_url()

    @base_url.setter
    def base_url(self, value: str) -> None:
        self.config.set_base_url(value)

    @property
    def version_path(self) -> str:
        return self.config.get_version_path()

    @version_path.setter
    def version_path(self, value: str) -> None:
        self.config.set_version_path(value)

    # =========================================================================
    # Transport
    # =========================================================================

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create the httpx client."""
        if self._http_client is None or (self._owns_http_client and self._http_client.is_closed):
            self._http_client = httpx.AsyncClient(timeout=self.config.timeout, follow_redirects=True)
            self._owns_http_client = True
        return self._http_client

    async def aclose(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_http_client and self._http_client is not None and not self._http_client.is_closed:
            await self._http_client.aclose()

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def _build_url(self, path: str, params: dict[str, Any] | None = None) -> str:
        """Build full URL from path and query parameters."""
        if path.startswith(("http://", "https://")):
            url = path
        else:
            url = f"{self.config.base_url}{self.config.version_path}{path}"

        if params:
            # Filter out None values and URL-encode
            filtered_params = {k: _query_value(v) for k, v in params.items() if v is not None}
            if filtered_params:
                query_string = urllib.parse.urlencode(filtered_params, quote_via=urllib.parse.quote)
                separator = "&" if "?" in url else "?"
                url = f"{url}{separator}{query_string}"
        return url

    def _build_headers(self, headers: dict[str, str] | None) -> httpx.Headers:
        request_headers = httpx.Headers(headers or {})
        if "Content-Type" not in request_headers:
            request_headers["Content-Type"] = "application/json"
        if "Accept" not in request_headers:
            request_headers["Accept"] = "application/json"
        if self.config.token:
            request_headers["Authorization"] = f"Bearer {self.config.token}"
        return request_headers

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        """Decode a JSON body, returning the raw text when it is not JSON."""
        try:
            return response.json()
        except ValueError:
            return response.text

    async def request(self, descriptor: RequestDescriptor) -> APIResponse:
        """
        Send one request to the API.

        Args:
            descriptor: Method, path or URL, query parameters, body and headers

        Returns:
            APIResponse with the decoded body

        Raises:
            ConfigurationError: If no host is configured (nothing is sent)
            APIError: On a non-2xx response (a subclass for well-known statuses)

        """
        if not self.config.base_url:
            raise ConfigurationError()

        url = self._build_url(descriptor.url, descriptor.params)
        headers = self._build_headers(descriptor.headers)

        content = None
        if descriptor.method != "GET" and descriptor.body:
            content = json.dumps(descriptor.body).encode("utf-8")

        client = await self._get_http_client()
        logger.debug("%s %s", descriptor.method, url)
        response = await client.request(descriptor.method, url, content=content, headers=headers)
        logger.debug("%s %s -> %d", descriptor.method, url, response.status_code)

        data = self._parse_body(response)
        if not response.is_success:
            raise error_for_status(response.status_code, data)

        return APIResponse(
            status=response.status_code,
            headers=response.headers,
            data=data,
            links=response.links,
            url=str(response.url),
        )

    # =========================================================================
    # HTTP Methods
    # =========================================================================

    async def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        *,
        headers: dict[str, str] | None = None,
    ) -> APIResponse:
        """Make a GET request."""
        return await self.request(RequestDescriptor("GET", path, params=params, headers=headers or {}))

    async def post(self, path: str, data: Any = None, *, headers: dict[str, str] | None = None) -> APIResponse:
        """Make a POST request."""
        return await self.request(RequestDescriptor("POST", path, body=data, headers=headers or {}))

    async def put(self, path: str, data: Any = None, *, headers: dict[str, str] | None = None) -> APIResponse:
        """Make a PUT request."""
        return await self.request(RequestDescriptor("PUT", path, body=data, headers=headers or {}))

    async def patch(self, path: str, data: Any = None, *, headers: dict[str, str] | None = None) -> APIResponse:
        """Make a PATCH request."""
        return await self.request(RequestDescriptor("PATCH", path, body=data, headers=headers or {}))

    async def delete(self, path: str, data: Any = None, *, headers: dict[str, str] | None = None) -> APIResponse:
        """Make a DELETE request."""
        return await self.request(RequestDescriptor("DELETE", path, body=data, headers=headers or {}))

    # =========================================================================
    # Pagination
    # =========================================================================

    def paginate(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        parser: Callable[[dict[str, Any]], T] | None = None,
        mode: PaginationMode | None = None,
    ) -> Paginator[T]:
        """
        Create a paginator over a list endpoint.

        Args:
            path: API path relative to the version path
            params: Query parameters sent with every page (page/per_page included)
            parser: Optional function to parse each item
            mode: Override the configured pagination scheme

        Returns:
            A Paginator yielding one list per page

        """
        return Paginator(
            self,
            path,
            params=params,
            parser=parser,
            mode=mode or self.config.pagination,
            max_page=self.config.max_page,
            stop_on_empty=self.config.stop_on_empty,
        )
