"""Pytest configuration - loads .env for live tests and provides a fake backend."""

from pathlib import Path
from typing import Any

import httpx
import pytest
from dotenv import load_dotenv

from qiita_client.core.client import APIClient

# Load .env from project root
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)

BASE_URL = "https://qiita.com"
API_URL = f"{BASE_URL}/api/v2"
TOKEN = "test-token"


class FakeQiita:
    """
    Deterministic in-memory backend serving one list endpoint.

    Pages are addressed by the `page` query parameter (1-indexed). In link
    mode every page but the last carries a `rel="next"` Link header.
    """

    def __init__(
        self,
        pages: list[list[Any]],
        link_mode: bool = False,
        overflow: list[Any] | None = None,
        failures: dict[int, int] | None = None,
    ):
        self.pages = pages
        self.link_mode = link_mode
        self.overflow = overflow or []
        self.failures = failures or {}
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        page = int(request.url.params.get("page", 1))

        if page in self.failures:
            return httpx.Response(self.failures[page], json={"message": "boom", "type": "error"})

        body = self.pages[page - 1] if page <= len(self.pages) else self.overflow
        headers = {}
        if self.link_mode and page < len(self.pages):
            next_url = request.url.copy_set_param("page", str(page + 1))
            last_url = request.url.copy_set_param("page", str(len(self.pages)))
            headers["Link"] = f'<{next_url}>; rel="next", <{last_url}>; rel="last"'
        return httpx.Response(200, json=body, headers=headers)

    def requested_pages(self) -> list[str | None]:
        return [r.url.params.get("page") for r in self.requests]

    def client(self, **kwargs: Any) -> APIClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        return APIClient(token=TOKEN, base_url=BASE_URL, http_client=http_client, **kwargs)


@pytest.fixture
def api_client() -> APIClient:
    """APIClient with a fixed token; requests go through respx when mocked."""
    return APIClient(token=TOKEN, base_url=BASE_URL, version_path="/api/v2")
