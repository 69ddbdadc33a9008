"""Tests for the card database client."""

from typing import Any

import httpx
import pytest
import respx

from fabsearch.client.fabtcg import (
    card_page_url,
    fetch_card_page,
    fetch_prints,
    fetch_search_results,
)
from fabsearch.models.failure import UpstreamError

ORIGIN = "https://cards.fabtcg.com"
SEARCH_URL = f"{ORIGIN}/api/search/v1/cards/"
PRINTS_URL = f"{ORIGIN}/api/fab/v1/prints/"


class TestCardPageUrl:
    def test_card_only(self) -> None:
        assert card_page_url("snatch-red") == f"{ORIGIN}/card/snatch-red/"

    def test_with_print(self) -> None:
        assert card_page_url("snatch-red", "JA_WTR167") == f"{ORIGIN}/card/snatch-red/JA_WTR167/"

    def test_reserved_characters_are_encoded(self) -> None:
        """'/' and '?' in ids cannot change the requested resource."""
        url = card_page_url("a/b?c", "d#e")

        assert url == f"{ORIGIN}/card/a%2Fb%3Fc/d%23e/"


class TestFetchSearchResults:
    @respx.mock
    async def test_sends_query_as_name_param(self, search_payload: dict[str, Any]) -> None:
        route = respx.get(SEARCH_URL).mock(return_value=httpx.Response(200, json=search_payload))

        data = await fetch_search_results("snatch & grab")

        assert data == search_payload
        request = route.calls.last.request
        assert request.url.params["name"] == "snatch & grab"

    @respx.mock
    async def test_raises_on_http_error(self) -> None:
        respx.get(SEARCH_URL).mock(return_value=httpx.Response(500))

        with pytest.raises(UpstreamError, match="HTTP 500") as exc_info:
            await fetch_search_results("snatch")

        assert exc_info.value.status_code == 500

    @respx.mock
    async def test_raises_on_connect_error(self) -> None:
        respx.get(SEARCH_URL).mock(side_effect=httpx.ConnectError("unreachable"))

        with pytest.raises(UpstreamError, match="unreachable"):
            await fetch_search_results("snatch")

    @respx.mock
    async def test_raises_on_timeout(self) -> None:
        respx.get(SEARCH_URL).mock(side_effect=httpx.ReadTimeout("timed out"))

        with pytest.raises(UpstreamError):
            await fetch_search_results("snatch")

    @respx.mock
    async def test_raises_on_invalid_json(self) -> None:
        respx.get(SEARCH_URL).mock(return_value=httpx.Response(200, text="<html></html>"))

        with pytest.raises(UpstreamError, match="not valid JSON"):
            await fetch_search_results("snatch")

    @respx.mock
    async def test_raises_on_non_object_json(self) -> None:
        respx.get(SEARCH_URL).mock(return_value=httpx.Response(200, json=[1, 2]))

        with pytest.raises(UpstreamError, match="not a JSON object"):
            await fetch_search_results("snatch")

    @respx.mock
    async def test_uses_given_client(self, search_payload: dict[str, Any]) -> None:
        route = respx.get(SEARCH_URL).mock(return_value=httpx.Response(200, json=search_payload))

        async with httpx.AsyncClient() as client:
            await fetch_search_results("snatch", client=client)

        assert route.call_count == 1


class TestFetchPrints:
    @respx.mock
    async def test_filters_by_card_id(self, prints_payload: dict[str, Any]) -> None:
        route = respx.get(PRINTS_URL).mock(return_value=httpx.Response(200, json=prints_payload))

        data = await fetch_prints("snatch-red")

        assert data["results"][0]["print_id"] == "WTR167"
        assert route.calls.last.request.url.params["card_id"] == "snatch-red"

    @respx.mock
    async def test_raises_on_not_found(self) -> None:
        respx.get(PRINTS_URL).mock(return_value=httpx.Response(404))

        with pytest.raises(UpstreamError, match="HTTP 404"):
            await fetch_prints("no-such-card")


class TestFetchCardPage:
    @respx.mock
    async def test_returns_html(self, card_page_html: str) -> None:
        respx.get(f"{ORIGIN}/card/snatch-red/").mock(
            return_value=httpx.Response(200, text=card_page_html)
        )

        html = await fetch_card_page("snatch-red")

        assert "card-details" in html

    @respx.mock
    async def test_requests_print_page(self, card_page_html: str) -> None:
        route = respx.get(f"{ORIGIN}/card/snatch-red/JA_WTR167/").mock(
            return_value=httpx.Response(200, text=card_page_html)
        )

        await fetch_card_page("snatch-red", "JA_WTR167")

        assert route.called

    @respx.mock
    async def test_encodes_path_segments(self) -> None:
        route = respx.get(host="cards.fabtcg.com").mock(return_value=httpx.Response(200, text=""))

        await fetch_card_page("a/b?c")

        request = route.calls.last.request
        assert request.url.raw_path == b"/card/a%2Fb%3Fc/"
        assert request.url.query == b""

    @respx.mock
    async def test_raises_on_server_error(self) -> None:
        respx.get(f"{ORIGIN}/card/snatch-red/").mock(return_value=httpx.Response(503))

        with pytest.raises(UpstreamError, match="HTTP 503"):
            await fetch_card_page("snatch-red")
