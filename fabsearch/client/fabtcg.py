"""
Flesh and Blood card database client.

Fetches raw payloads from cards.fabtcg.com:
- JSON card search (by name)
- JSON print listing (by card id)
- HTML card detail page (by card id, optionally by print id)

Every failure (transport error, timeout, non-2xx status, undecodable JSON)
surfaces as UpstreamError. Nothing is retried or cached.
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from fabsearch.config import settings
from fabsearch.models.failure import UpstreamError

logger = logging.getLogger(__name__)

SEARCH_PATH = "/api/search/v1/cards/"
PRINTS_PATH = "/api/fab/v1/prints/"
CARD_PAGE_PATH = "/card/{card_id}/"
PRINT_PAGE_PATH = "/card/{card_id}/{print_id}/"


def _segment(value: str) -> str:
    """Percent-encode a path segment so '/', '?' and '#' cannot change the target."""
    return quote(value, safe="")


def card_page_url(card_id: str, print_id: str | None = None, origin: str | None = None) -> str:
    """Build the detail page URL for a card or one of its prints."""
    base = origin or settings.fab_origin
    if print_id:
        path = PRINT_PAGE_PATH.format(card_id=_segment(card_id), print_id=_segment(print_id))
    else:
        path = CARD_PAGE_PATH.format(card_id=_segment(card_id))
    return f"{base}{path}"


async def _get(
    url: str,
    params: dict[str, str] | None,
    client: httpx.AsyncClient | None,
    log: logging.Logger,
) -> httpx.Response:
    """GET a URL, translating every httpx failure into UpstreamError."""
    log.debug("upstream_request", extra={"url": url, "params": params})
    try:
        if client:
            response = await client.get(url, params=params)
            response.raise_for_status()
            return response

        async with httpx.AsyncClient(
            timeout=settings.request_timeout,
            headers={"User-Agent": settings.user_agent},
            follow_redirects=True,
        ) as own_client:
            response = await own_client.get(url, params=params)
            response.raise_for_status()
            return response
    except httpx.HTTPStatusError as e:
        status_code = e.response.status_code
        log.warning("upstream_status_error", extra={"url": url, "status_code": status_code})
        raise UpstreamError(
            f"Request to {url} failed: HTTP {status_code}",
            status_code=status_code,
        ) from e
    except httpx.HTTPError as e:
        log.warning("upstream_transport_error", extra={"url": url, "error": str(e)})
        raise UpstreamError(f"Request to {url} failed: {str(e) or type(e).__name__}") from e


def _json_object(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError as e:
        raise UpstreamError(f"Response from {response.request.url} is not valid JSON") from e

    if not isinstance(data, dict):
        raise UpstreamError(f"Response from {response.request.url} is not a JSON object")
    return data


async def fetch_search_results(
    query: str,
    client: httpx.AsyncClient | None = None,
    log: logging.Logger | None = None,
) -> dict[str, Any]:
    """
    Search cards by name.

    Args:
        query: Free-text card name query
        client: Optional httpx client for connection reuse
        log: Logger for request diagnostics (defaults to the module logger)

    Returns:
        Raw JSON payload ({"results": [...], ...})

    Raises:
        UpstreamError: If the request fails or the body is not a JSON object
    """
    url = f"{settings.fab_origin}{SEARCH_PATH}"
    response = await _get(url, {"name": query}, client, log or logger)
    return _json_object(response)


async def fetch_prints(
    card_id: str,
    client: httpx.AsyncClient | None = None,
    log: logging.Logger | None = None,
) -> dict[str, Any]:
    """
    List every print of a card.

    Args:
        card_id: Card identifier (e.g. "snatch-red")
        client: Optional httpx client for connection reuse
        log: Logger for request diagnostics (defaults to the module logger)

    Returns:
        Raw JSON payload ({"results": [...], ...})

    Raises:
        UpstreamError: If the request fails or the body is not a JSON object
    """
    url = f"{settings.fab_origin}{PRINTS_PATH}"
    response = await _get(url, {"card_id": card_id}, client, log or logger)
    return _json_object(response)


async def fetch_card_page(
    card_id: str,
    print_id: str | None = None,
    client: httpx.AsyncClient | None = None,
    log: logging.Logger | None = None,
) -> str:
    """
    Fetch the HTML detail page of a card.

    Args:
        card_id: Card identifier
        print_id: Optional print identifier; without it the site picks a default print
        client: Optional httpx client for connection reuse
        log: Logger for request diagnostics (defaults to the module logger)

    Returns:
        Raw HTML content

    Raises:
        UpstreamError: If the request fails
    """
    url = card_page_url(card_id, print_id)
    response = await _get(url, None, client, log or logger)
    return response.text
