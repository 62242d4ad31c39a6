"""Tests for Paginator: page-counter and Link-header cursoring, termination and restart."""

import httpx
import pytest

from qiita_client.core.errors import InternalServerError, ValidationError
from qiita_client.core.pagination import Paginator
from qiita_client.core.types import Tag

from .conftest import API_URL, FakeQiita

A = {"id": "a"}
B = {"id": "b"}
C = {"id": "c"}


# =============================================================================
# Page-counter addressing
# =============================================================================


class TestPageMode:
    @pytest.mark.asyncio
    async def test_stops_on_empty_page(self):
        backend = FakeQiita([[A, B], [C], []])
        paginator = backend.client().paginate("/items", mode="page")

        assert await paginator.advance() == [A, B]
        assert await paginator.advance() == [C]
        assert await paginator.advance() is None
        assert paginator.exhausted
        assert backend.requested_pages() == ["1", "2", "3"]

    @pytest.mark.asyncio
    async def test_exhausted_paginator_sends_nothing(self):
        backend = FakeQiita([[A]])
        paginator = backend.client().paginate("/items", mode="page")

        pages = [page async for page in paginator]
        assert pages == [[A]]

        assert await paginator.advance() is None
        assert len(backend.requests) == 2

    @pytest.mark.asyncio
    async def test_page_ceiling(self):
        backend = FakeQiita([], overflow=[A])
        paginator = backend.client(max_page=3).paginate("/items", mode="page")

        pages = [page async for page in paginator]

        assert pages == [[A], [A], [A]]
        assert backend.requested_pages() == ["1", "2", "3"]

    @pytest.mark.asyncio
    async def test_default_ceiling_is_one_hundred(self):
        backend = FakeQiita([], overflow=[A])
        paginator = backend.client().paginate("/items", mode="page")

        pages = [page async for page in paginator]

        assert len(pages) == 100
        assert backend.requested_pages()[-1] == "100"

    @pytest.mark.asyncio
    async def test_empty_pages_kept_when_stop_on_empty_disabled(self):
        backend = FakeQiita([[A], []])
        paginator = backend.client(max_page=3, stop_on_empty=False).paginate("/items", mode="page")

        pages = [page async for page in paginator]

        assert pages == [[A], [], []]

    @pytest.mark.asyncio
    async def test_start_page_and_parameters(self):
        backend = FakeQiita([[A], [B], [C]])
        paginator = backend.client().paginate("/items", {"page": 2, "per_page": 1}, mode="page")

        pages = [page async for page in paginator]

        assert pages == [[B], [C]]
        first = backend.requests[0]
        assert first.url.path == "/api/v2/items"
        assert first.url.params.multi_items() == [("per_page", "1"), ("page", "2")]

    @pytest.mark.asyncio
    async def test_restart_after_second_page(self):
        backend = FakeQiita([[A, B], [C], []])
        paginator = backend.client().paginate("/items", mode="page")

        await paginator.advance()
        await paginator.advance()
        assert paginator.cursor == 3

        assert await paginator.restart() == [A, B]
        assert backend.requested_pages() == ["1", "2", "1"]
        assert await paginator.advance() == [C]

    @pytest.mark.asyncio
    async def test_configured_mode_used_by_default(self):
        backend = FakeQiita([[A], []])
        paginator = backend.client(pagination="page").paginate("/items")

        assert paginator.mode == "page"
        assert await paginator.collect() == [A]


# =============================================================================
# Link-header addressing
# =============================================================================


class TestLinkMode:
    @pytest.mark.asyncio
    async def test_follows_next_until_absent(self):
        backend = FakeQiita([[A, B], [C]], link_mode=True)
        paginator = backend.client().paginate("/items", {"per_page": 2})

        assert await paginator.advance() == [A, B]
        assert paginator.cursor == f"{API_URL}/items?per_page=2&page=2"
        assert await paginator.advance() == [C]
        assert paginator.exhausted
        assert await paginator.advance() is None
        assert len(backend.requests) == 2

    @pytest.mark.asyncio
    async def test_parameters_only_on_first_request(self):
        backend = FakeQiita([[A], [B]], link_mode=True)
        paginator = backend.client().paginate("/items", {"query": "tag:python"})

        await paginator.collect()

        first, second = backend.requests
        assert first.url.params.multi_items() == [("query", "tag:python")]
        assert second.url.params.multi_items() == [("query", "tag:python"), ("page", "2")]

    @pytest.mark.asyncio
    async def test_empty_page_does_not_stop_while_next_present(self):
        backend = FakeQiita([[], [A]], link_mode=True)
        paginator = backend.client().paginate("/items")

        pages = [page async for page in paginator]

        assert pages == [[], [A]]

    @pytest.mark.asyncio
    async def test_restart_targets_first_url(self):
        backend = FakeQiita([[A, B], [C]], link_mode=True)
        paginator = backend.client().paginate("/items", {"per_page": 2})

        await paginator.advance()
        await paginator.advance()

        assert await paginator.restart() == [A, B]
        assert str(backend.requests[-1].url) == str(backend.requests[0].url)
        assert not paginator.exhausted

    @pytest.mark.asyncio
    async def test_relative_next_link(self, api_client, respx_mock):
        route = respx_mock.get(path="/api/v2/items").mock(
            side_effect=[
                httpx.Response(200, json=[A], headers={"Link": '</api/v2/items?page=2>; rel="next"'}),
                httpx.Response(200, json=[B]),
            ]
        )

        pages = [page async for page in api_client.paginate("/items")]

        assert pages == [[A], [B]]
        assert route.calls[1].request.url == httpx.URL(f"{API_URL}/items?page=2")

    @pytest.mark.asyncio
    async def test_reset_then_iterate_again(self):
        backend = FakeQiita([[A], [B]], link_mode=True)
        paginator = backend.client().paginate("/items")

        first_pass = [page async for page in paginator]
        paginator.reset()
        second_pass = [page async for page in paginator]

        assert first_pass == second_pass == [[A], [B]]


# =============================================================================
# Shared behaviour
# =============================================================================


class TestPaginator:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("mode", ["page", "link"])
    async def test_errors_propagate_and_terminate(self, mode):
        backend = FakeQiita([[A], [B], []], link_mode=mode == "link", failures={2: 500})
        paginator = backend.client().paginate("/items", mode=mode)

        assert await paginator.advance() == [A]
        with pytest.raises(InternalServerError):
            await paginator.advance()

        assert paginator.exhausted
        assert await paginator.advance() is None

    @pytest.mark.asyncio
    async def test_non_array_body(self):
        backend = FakeQiita([{"id": "a"}])  # type: ignore[list-item]
        paginator = backend.client().paginate("/items", mode="page")

        with pytest.raises(ValidationError):
            await paginator.advance()

    @pytest.mark.asyncio
    async def test_parser_applied_to_items(self):
        backend = FakeQiita([[{"id": "python", "items_count": 10}], []])
        paginator = backend.client().paginate("/tags", parser=Tag.from_dict, mode="page")

        page = await paginator.advance()

        assert page == [Tag(id="python", items_count=10)]

    @pytest.mark.asyncio
    async def test_collect_flattens_pages(self):
        backend = FakeQiita([[A, B], [C]], link_mode=True)
        paginator = backend.client().paginate("/items")

        assert await paginator.collect() == [A, B, C]

    def test_unknown_mode_rejected(self):
        backend = FakeQiita([])
        with pytest.raises(ValueError):
            Paginator(backend.client(), "/items", mode="offset")  # type: ignore[arg-type]
