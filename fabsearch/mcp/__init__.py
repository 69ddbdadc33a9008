"""MCP tool definitions for the card database."""

from fabsearch.mcp.tools import (
    TOOL_DEFINITIONS,
    execute_tool,
    fetch_tool,
    get_card_detail_tool,
    get_fab_card_prints_tool,
    search_fab_cards_tool,
    search_tool,
)

__all__ = [
    "TOOL_DEFINITIONS",
    "execute_tool",
    "fetch_tool",
    "get_card_detail_tool",
    "get_fab_card_prints_tool",
    "search_fab_cards_tool",
    "search_tool",
]
