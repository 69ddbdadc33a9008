"""
MCP server exposing the card tools.

Registers every tool from TOOL_DEFINITIONS on a FastMCP server. Each handler
delegates to `execute_tool`, so failures come back as text content and the
call itself always succeeds. Identifier parameters default to "" so a
missing one is reported by `execute_tool` like an empty one.

Two transports share the same tool set:
- SSE (streaming subscribe): GET /sse, client messages POSTed to /sse/message/
- Streamable HTTP (direct call): /mcp
"""

from typing import Annotated

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from fabsearch.config import settings
from fabsearch.mcp.tools import TOOL_DEFINITIONS, execute_tool

SSE_PATH = "/sse"
SSE_MESSAGE_PATH = "/sse/message/"
STREAMABLE_HTTP_PATH = "/mcp"

_DESCRIPTIONS = {tool.name: tool.description for tool in TOOL_DEFINITIONS}

mcp = FastMCP(
    settings.app_name,
    instructions=(
        "Search Flesh and Blood cards, list their prints and read card details "
        "from cards.fabtcg.com."
    ),
    host=settings.host,
    sse_path=SSE_PATH,
    message_path=SSE_MESSAGE_PATH,
    streamable_http_path=STREAMABLE_HTTP_PATH,
    # No state is kept between calls
    stateless_http=True,
)


@mcp.tool(name="search_fab_cards", description=_DESCRIPTIONS["search_fab_cards"])
async def search_fab_cards(
    query: Annotated[str, Field(description="Card name or part of it")] = "",
) -> str:
    return await execute_tool("search_fab_cards", {"query": query})


@mcp.tool(name="get_fab_card_prints", description=_DESCRIPTIONS["get_fab_card_prints"])
async def get_fab_card_prints(
    cardId: Annotated[str, Field(description="Card id (e.g. 'snatch-red')")] = "",  # noqa: N803
) -> str:
    return await execute_tool("get_fab_card_prints", {"cardId": cardId})


@mcp.tool(name="get_card_detail", description=_DESCRIPTIONS["get_card_detail"])
async def get_card_detail(
    cardId: Annotated[str, Field(description="Card id")] = "",  # noqa: N803
    printId: Annotated[  # noqa: N803
        str | None, Field(description="Print id; site default if omitted")
    ] = None,
) -> str:
    return await execute_tool("get_card_detail", {"cardId": cardId, "printId": printId})


@mcp.tool(name="search", description=_DESCRIPTIONS["search"])
async def search(
    query: Annotated[str, Field(description="Search keywords")] = "",
) -> str:
    return await execute_tool("search", {"query": query})


@mcp.tool(name="fetch", description=_DESCRIPTIONS["fetch"])
async def fetch(
    id: Annotated[str, Field(description="Id returned by search")] = "",  # noqa: A002
) -> str:
    return await execute_tool("fetch", {"id": id})
