"""Tests for the FastMCP tool registration."""

import json

import httpx
import respx

from fabsearch.mcp.server import mcp
from fabsearch.mcp.tools import TOOL_DEFINITIONS

ORIGIN = "https://cards.fabtcg.com"


class TestToolRegistration:
    async def test_registers_every_tool(self) -> None:
        tools = await mcp.list_tools()

        assert {t.name for t in tools} == {t.name for t in TOOL_DEFINITIONS}

    async def test_declares_camel_case_parameters(self) -> None:
        tools = {t.name: t for t in await mcp.list_tools()}

        assert set(tools["get_card_detail"].inputSchema["properties"]) == {"cardId", "printId"}
        assert set(tools["get_fab_card_prints"].inputSchema["properties"]) == {"cardId"}
        assert set(tools["fetch"].inputSchema["properties"]) == {"id"}

    async def test_descriptions_match_definitions(self) -> None:
        tools = {t.name: t for t in await mcp.list_tools()}

        for definition in TOOL_DEFINITIONS:
            assert tools[definition.name].description == definition.description


class TestToolCalls:
    @respx.mock
    async def test_call_returns_text_content(self, card_page_html: str) -> None:
        respx.get(f"{ORIGIN}/card/snatch-red/").mock(
            return_value=httpx.Response(200, text=card_page_html)
        )

        result = await mcp.call_tool("get_card_detail", {"cardId": "snatch-red"})

        # FastMCP returns either content blocks or (content blocks, structured output)
        content = result[0] if isinstance(result, tuple) else result
        assert content[0].type == "text"
        assert json.loads(content[0].text)["printId"] == "JA_WTR167"

    @respx.mock
    async def test_upstream_failure_is_in_band(self) -> None:
        respx.get(host="cards.fabtcg.com").mock(side_effect=httpx.ConnectError("unreachable"))

        result = await mcp.call_tool("get_card_detail", {"cardId": "snatch-red"})

        content = result[0] if isinstance(result, tuple) else result
        assert content[0].text.startswith("Error:")

    @respx.mock
    async def test_missing_identifier_gets_error_text(self) -> None:
        """An omitted cardId is reported like an empty one, without an upstream call."""
        route = respx.route(host="cards.fabtcg.com").mock(return_value=httpx.Response(200))

        result = await mcp.call_tool("get_card_detail", {})

        content = result[0] if isinstance(result, tuple) else result
        assert content[0].text == (
            "Error: a problem occurred while fetching card detail - "
            "'cardId' is required and must be a non-empty string"
        )
        assert not route.called
