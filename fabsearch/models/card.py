"""
Card records returned by the tools.

All records are immutable and request-scoped: built from upstream data for
one call, serialized, and discarded. Serialized keys are camelCase and
absent optional fields are omitted.
"""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Print ids of non-English prints carry a language prefix, e.g. "JA_WTR001"
_LANGUAGE_PREFIX = re.compile(r"^([A-Z]{2})_")

DEFAULT_LANGUAGE = "EN"

# Attributes are printed as small numbers but some cards print X or *
Attribute = str | int


def language_from_print_id(print_id: str) -> str:
    """
    Derive the two-letter language code of a print.

    "JA_WTR001" -> "JA", "WTR001" -> "EN".
    """
    match = _LANGUAGE_PREFIX.match(print_id)
    return match.group(1) if match else DEFAULT_LANGUAGE


class Record(BaseModel):
    """Base for serialized records."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys, dropping top-level fields that are None."""
        data = self.model_dump(by_alias=True)
        return {key: value for key, value in data.items() if value is not None}


class CardSummary(Record):
    """One entry of a card search."""

    id: str
    name: str
    display_name: str
    card_url: str
    image_url: str
    pitch: Attribute | None = None
    cost: Attribute | None = None
    power: Attribute | None = None
    defense: Attribute | None = None
    text: str | None = None
    text_html: str | None = None
    typebox: str | None = None


class PrintVariant(Record):
    """
    A specific printing of a card as listed by the prints endpoint.

    `layout` and the `finish_types` entries are passed through exactly as the
    upstream sends them (normally objects with `key` and `label`).
    """

    print_id: str
    card_id: str
    name: str
    display_name: str
    pitch: Attribute | None = None
    image_url: str
    image_url_small: str
    image_url_large: str
    layout: Any = None
    finish_types: list[Any] = Field(default_factory=list)


class VariantRef(Record):
    """A variant block found on a card detail page."""

    print_id: str
    language: str
    set_name: str
    finish: str
    url: str


class CardDetail(Record):
    """
    Detail fields scraped from a card page.

    `print_id` is the print the page actually rendered, which may differ from
    the one requested. `variants` lists only what the page rendered; the
    prints endpoint is the authoritative catalog.
    """

    card_id: str
    print_id: str
    language: str
    image_url: str
    en_name: str = ""
    en_text: str | None = None
    en_typebox: str | None = None
    localized_name: str | None = None
    localized_text: str | None = None
    localized_typebox: str | None = None
    pitch: str | None = None
    cost: str | None = None
    power: str | None = None
    defense: str | None = None
    set_name: str | None = None
    rarity: str | None = None
    artist: str | None = None
    variants: list[VariantRef] = Field(default_factory=list)


class SearchHit(Record):
    """Lightweight search result for the generic `search` tool."""

    id: str
    title: str
    text: str
    url: str


class FetchedDocument(Record):
    """Citation-style document returned by the generic `fetch` tool."""

    id: str
    title: str
    text: str
    url: str
    metadata: dict[str, str] = Field(default_factory=dict)
