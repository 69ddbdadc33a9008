"""
MCP tool definitions for the card database.

Defines the tools an agent can call to search cards, list prints and read
card details, plus a generic search/fetch pair for simple citation-style
clients.

Every tool call completes. Results are returned as pretty-printed JSON text;
failures are returned as an error text naming the failed operation, never
raised to the transport.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from fabsearch.client.fabtcg import (
    card_page_url,
    fetch_card_page,
    fetch_prints,
    fetch_search_results,
)
from fabsearch.config import GENERIC_SEARCH_LIMIT
from fabsearch.models.card import (
    CardDetail,
    CardSummary,
    FetchedDocument,
    PrintVariant,
    SearchHit,
)
from fabsearch.models.failure import KnownError, NotFoundError, ValidationError
from fabsearch.parsers.fabtcg_api import normalize_prints, normalize_search_results
from fabsearch.scrapers.card_page import parse_card_page

logger = logging.getLogger(__name__)


@dataclass
class ToolDefinition:
    """Definition of an MCP tool."""

    name: str
    description: str
    parameters: dict[str, Any]


# Tool definitions exposed over MCP
TOOL_DEFINITIONS: list[ToolDefinition] = [
    ToolDefinition(
        name="search_fab_cards",
        description="Search Flesh and Blood cards by name. Results keep the site's ranking.",
        parameters={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Card name or part of it",
                },
            },
            "required": ["query"],
        },
    ),
    ToolDefinition(
        name="get_fab_card_prints",
        description="List every print of a card: set, finish, layout and images.",
        parameters={
            "type": "object",
            "properties": {
                "cardId": {
                    "type": "string",
                    "description": "Card id from search_fab_cards (e.g. 'snatch-red')",
                },
            },
            "required": ["cardId"],
        },
    ),
    ToolDefinition(
        name="get_card_detail",
        description=(
            "Get details of a card print from its card page: English and localized "
            "name/text/type line, pitch/cost/power/defense, set, rarity, artist and "
            "the variants shown on the page."
        ),
        parameters={
            "type": "object",
            "properties": {
                "cardId": {
                    "type": "string",
                    "description": "Card id",
                },
                "printId": {
                    "type": "string",
                    "description": "Print id (e.g. 'JA_WTR001'); site default if omitted",
                },
            },
            "required": ["cardId"],
        },
    ),
    ToolDefinition(
        name="search",
        description=f"Search cards by keyword. Returns up to {GENERIC_SEARCH_LIMIT} results.",
        parameters={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search keywords",
                },
            },
            "required": ["query"],
        },
    ),
    ToolDefinition(
        name="fetch",
        description="Fetch the full text of a card by id ('cardId' or 'cardId/printId').",
        parameters={
            "type": "object",
            "properties": {
                "id": {
                    "type": "string",
                    "description": "Id returned by search",
                },
            },
            "required": ["id"],
        },
    ),
]

# Operation names used in error texts
OPERATION_LABELS: dict[str, str] = {
    "search_fab_cards": "searching cards",
    "get_fab_card_prints": "fetching card prints",
    "get_card_detail": "fetching card detail",
    "search": "searching",
    "fetch": "fetching card document",
}


def _require_text(value: Any, field: str) -> str:
    """Return value if it is a non-blank string, else raise ValidationError."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field)
    return value


def _optional_text(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def to_json(payload: Any) -> str:
    """Pretty-print a tool result."""
    return json.dumps(payload, indent=2, ensure_ascii=False)


def format_error(tool_name: str, error: Exception) -> str:
    """Error text returned in place of a result."""
    operation = OPERATION_LABELS.get(tool_name, tool_name)
    message = error.message if isinstance(error, KnownError) else str(error)
    return f"Error: a problem occurred while {operation} - {message or type(error).__name__}"


async def search_fab_cards_tool(
    query: str,
    client: httpx.AsyncClient | None = None,
) -> list[dict[str, Any]]:
    """
    Search cards by name.

    Returns:
        Card summaries in upstream ranking order
    """
    query = _require_text(query, "query")
    raw = await fetch_search_results(query, client)
    return [card.to_dict() for card in normalize_search_results(raw)]


async def get_fab_card_prints_tool(
    card_id: str,
    client: httpx.AsyncClient | None = None,
) -> list[dict[str, Any]]:
    """List all prints of a card."""
    card_id = _require_text(card_id, "cardId")
    raw = await fetch_prints(card_id, client)
    return [print_.to_dict() for print_ in normalize_prints(raw)]


async def _card_detail(
    card_id: str,
    print_id: str | None,
    client: httpx.AsyncClient | None,
) -> CardDetail:
    html = await fetch_card_page(card_id, print_id, client)
    return parse_card_page(html, card_id, print_id)


async def get_card_detail_tool(
    card_id: str,
    print_id: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """
    Scrape the detail page of a card print.

    One request to the card page; everything else is parsing.
    """
    card_id = _require_text(card_id, "cardId")
    detail = await _card_detail(card_id, _optional_text(print_id), client)
    return detail.to_dict()


def _search_hit(card: CardSummary) -> SearchHit:
    return SearchHit(
        id=card.id,
        title=card.display_name or card.name,
        text=card.text or card.typebox or "",
        url=card.card_url,
    )


async def search_tool(
    query: str,
    client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """Keyword search returning lightweight hits (top results only)."""
    query = _require_text(query, "query")
    raw = await fetch_search_results(query, client)
    cards = normalize_search_results(raw)[:GENERIC_SEARCH_LIMIT]
    return {"results": [_search_hit(card).to_dict() for card in cards]}


def _split_document_id(document_id: str) -> tuple[str, str | None]:
    card_id, _, print_id = document_id.strip().partition("/")
    return card_id, print_id or None


async def _find_card(card_id: str, client: httpx.AsyncClient | None) -> PrintVariant:
    """Look a card id up through its prints; the first print names the card."""
    raw = await fetch_prints(card_id, client)
    for print_ in normalize_prints(raw):
        if print_.card_id == card_id:
            return print_
    raise NotFoundError(f"No card found with id '{card_id}'")


def compose_document_text(title: str, detail: CardDetail) -> str:
    """Readable plain-text rendering of a card for citation."""
    sections: list[str] = []

    heading = [title or detail.en_name, detail.en_typebox or ""]
    sections.append("\n".join(line for line in heading if line))

    stats = [
        f"{label}: {value}"
        for label, value in (
            ("Pitch", detail.pitch),
            ("Cost", detail.cost),
            ("Power", detail.power),
            ("Defense", detail.defense),
        )
        if value
    ]
    if stats:
        sections.append(" | ".join(stats))

    if detail.en_text:
        sections.append(detail.en_text)

    localized = [
        detail.localized_name or "",
        detail.localized_typebox or "",
        detail.localized_text or "",
    ]
    if any(localized):
        sections.append("\n".join(line for line in localized if line))

    publication = [
        f"{label}: {value}"
        for label, value in (
            ("Set", detail.set_name),
            ("Rarity", detail.rarity),
            ("Artist", detail.artist),
        )
        if value
    ]
    if publication:
        sections.append(" | ".join(publication))

    return "\n\n".join(section for section in sections if section)


def _document_metadata(detail: CardDetail) -> dict[str, str]:
    fields = {
        "cardId": detail.card_id,
        "printId": detail.print_id,
        "language": detail.language,
        "pitch": detail.pitch,
        "cost": detail.cost,
        "power": detail.power,
        "defense": detail.defense,
        "setName": detail.set_name,
        "rarity": detail.rarity,
        "artist": detail.artist,
        "imageUrl": detail.image_url,
    }
    return {key: value for key, value in fields.items() if value}


async def fetch_tool(
    document_id: str,
    client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """
    Fetch a card as a citation document.

    Args:
        document_id: "cardId" or "cardId/printId"

    Raises:
        ValidationError: If the id is empty
        NotFoundError: If the card has no prints
    """
    card_id, print_id = _split_document_id(_require_text(document_id, "id"))
    if not card_id:
        raise ValidationError("id")

    card = await _find_card(card_id, client)
    detail = await _card_detail(card_id, print_id, client)
    title = card.display_name or card.name or detail.en_name

    document = FetchedDocument(
        id=document_id.strip(),
        title=title,
        text=compose_document_text(title, detail),
        url=card_page_url(card_id, print_id),
        metadata=_document_metadata(detail),
    )
    return document.to_dict()


async def _dispatch(
    tool_name: str,
    arguments: dict[str, Any],
    client: httpx.AsyncClient | None,
) -> Any:
    if tool_name == "search_fab_cards":
        return await search_fab_cards_tool(arguments.get("query"), client)
    elif tool_name == "get_fab_card_prints":
        return await get_fab_card_prints_tool(arguments.get("cardId"), client)
    elif tool_name == "get_card_detail":
        return await get_card_detail_tool(
            arguments.get("cardId"),
            print_id=arguments.get("printId"),
            client=client,
        )
    elif tool_name == "search":
        return await search_tool(arguments.get("query"), client)
    elif tool_name == "fetch":
        return await fetch_tool(arguments.get("id"), client)
    else:
        raise ValueError(f"Unknown tool: {tool_name}")


async def execute_tool(
    tool_name: str,
    arguments: dict[str, Any],
    client: httpx.AsyncClient | None = None,
) -> str:
    """
    Execute an MCP tool by name.

    Args:
        tool_name: Name of the tool to execute
        arguments: Tool arguments as sent by the client
        client: Optional httpx client for connection reuse

    Returns:
        Pretty-printed JSON result, or an error text if the call failed

    Raises:
        ValueError: If tool name is unknown
    """
    if tool_name not in OPERATION_LABELS:
        raise ValueError(f"Unknown tool: {tool_name}")

    logger.info("tool_call", extra={"tool": tool_name})
    try:
        result = await _dispatch(tool_name, arguments, client)
    except KnownError as e:
        logger.warning(
            "tool_failed",
            extra={"tool": tool_name, "kind": e.kind.value, "error": e.message},
        )
        return format_error(tool_name, e)
    except Exception as e:
        logger.exception("tool_crashed", extra={"tool": tool_name})
        return format_error(tool_name, e)

    return to_json(result)
