"""
Normalizers for the card database JSON endpoints.

Map raw search and prints payloads to CardSummary / PrintVariant records.
Upstream field access tolerates absence everywhere: optional fields become
None, identifying fields become empty strings. Output order always follows
the upstream `results` order (search results are relevance-ranked).
"""

from typing import Any

from fabsearch.config import settings
from fabsearch.models.card import Attribute, CardSummary, PrintVariant


def absolute_url(path: str, origin: str | None = None) -> str:
    """Prefix a site-relative path with the card database origin."""
    if not path or path.startswith(("http://", "https://")):
        return path
    base = origin or settings.fab_origin
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{base}{path}"


def _results(raw: dict[str, Any]) -> list[dict[str, Any]]:
    results = raw.get("results") or []
    if not isinstance(results, list):
        return []
    return [entry for entry in results if isinstance(entry, dict)]


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _optional_text(value: Any) -> str | None:
    return None if value is None else str(value)


def _attribute(value: Any) -> Attribute | None:
    # bool is an int subclass; upstream never means a boolean here
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str | int):
        return value
    return str(value)


def _image(entry: dict[str, Any], size: str) -> str:
    image = entry.get("image")
    if not isinstance(image, dict):
        return ""
    return _text(image.get(size))


def normalize_search_results(raw: dict[str, Any], origin: str | None = None) -> list[CardSummary]:
    """
    Map a search payload to card summaries.

    Args:
        raw: JSON payload from the search endpoint
        origin: Origin for absolutizing card URLs (defaults to settings)

    Returns:
        One CardSummary per result entry, in upstream order
    """
    summaries: list[CardSummary] = []
    for card in _results(raw):
        summaries.append(
            CardSummary(
                id=_text(card.get("card_id")),
                name=_text(card.get("name")),
                display_name=_text(card.get("display_name")),
                card_url=absolute_url(_text(card.get("url")), origin),
                image_url=_image(card, "normal"),
                pitch=_attribute(card.get("pitch")),
                cost=_attribute(card.get("cost")),
                power=_attribute(card.get("power")),
                defense=_attribute(card.get("defense")),
                text=_optional_text(card.get("text")),
                text_html=_optional_text(card.get("text_html")),
                typebox=_optional_text(card.get("typebox")),
            )
        )
    return summaries


def normalize_prints(raw: dict[str, Any]) -> list[PrintVariant]:
    """
    Map a prints payload to print variants.

    Layout and finish type values are copied through unchanged. A missing
    or non-list `finish_types` becomes an empty list.

    Args:
        raw: JSON payload from the prints endpoint

    Returns:
        One PrintVariant per result entry, in upstream order
    """
    prints: list[PrintVariant] = []
    for entry in _results(raw):
        finish_types = entry.get("finish_types")
        prints.append(
            PrintVariant(
                print_id=_text(entry.get("print_id")),
                card_id=_text(entry.get("card_id")),
                name=_text(entry.get("name")),
                display_name=_text(entry.get("display_name")),
                pitch=_attribute(entry.get("pitch")),
                image_url=_image(entry, "normal"),
                image_url_small=_image(entry, "small"),
                image_url_large=_image(entry, "large"),
                layout=entry.get("layout"),
                finish_types=finish_types if isinstance(finish_types, list) else [],
            )
        )
    return prints
