"""
Card detail page scraper.

Extracts a CardDetail from the HTML of a cards.fabtcg.com card page.

Note: Web scraping is inherently fragile. The page is not ours and carries no
version. The CSS selectors below are the contract with its current structure:
- a card face region holding the print image
- a variant selector whose active entry names the rendered print
- two language tabs ("rules" = English, "print" = the print's own language),
  each with a title, a blurb and a footer carrying the type line
- "corner" badges carrying pitch/cost/power/defense, labeled on most cards
- a production region (set, rarity, artist)
- repeated variant blocks

Every field is extracted by an independent rule. A rule that finds nothing
yields an empty value; it never stops the other rules. The only hard failure
is markup that cannot be parsed at all.
"""

import logging
import re
from dataclasses import dataclass

from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag

from fabsearch.models.card import CardDetail, VariantRef, language_from_print_id
from fabsearch.models.failure import ExtractionError
from fabsearch.parsers.fabtcg_api import absolute_url

logger = logging.getLogger(__name__)

# Card face
FACE_IMAGE = ".card-details__face img"

# Variant selector: the active entry is followed by its print id
ACTIVE_VARIANT = ".card-details__variants .variant-selector.is-active"
PRINT_ID_CLASS = "variant-selector__print-id"

# Language tabs
RULES_TAB = '.tab-pane[data-tab="rules"]'
PRINT_TAB = '.tab-pane[data-tab="print"]'
TAB_TITLE = ".card-text__title"
TAB_BLURB = ".card-text__blurb"
TAB_FOOTER = ".card-text__footer"
TAB_TYPEBOX = ".card-text__typebox"
TAB_HEADER = ".card-text__header"

# Attribute badges
CORNER = ".corner"
CORNER_LABEL = ".corner__label"

# Publication
PRODUCTION = ".card-details__production"
PUBLICATION_SEPARATOR = "•"

# Variant blocks
VARIANT_BLOCK = ".card-variant"
VARIANT_PRINT_ID = ".card-variant__print-id"
VARIANT_SET = ".card-variant__set"
VARIANT_FINISH = ".card-variant__finish"
VARIANT_URL = ".card-variant__url"

_NON_DIGITS = re.compile(r"\D")


@dataclass(frozen=True)
class CornerPosition:
    """A positional fallback: the corner at `index` within `region` of `tab`."""

    tab: str
    region: str
    index: int


# Accepted badge labels, compared after dropping the trailing colon
ATTRIBUTE_LABELS: dict[str, frozenset[str]] = {
    "pitch": frozenset({"pitch", "ピッチ"}),
    "cost": frozenset({"cost", "コスト"}),
    "power": frozenset({"power", "パワー", "攻撃力"}),
    "defense": frozenset({"defense", "防御", "防御力"}),
}

# Tried in order when no labeled badge yields a value. Reprints, foreign
# prints and some card types render unlabeled corners.
ATTRIBUTE_FALLBACKS: dict[str, tuple[CornerPosition, ...]] = {
    "pitch": (
        CornerPosition(RULES_TAB, TAB_HEADER, 0),
        CornerPosition(PRINT_TAB, TAB_HEADER, 0),
    ),
    "cost": (
        CornerPosition(RULES_TAB, TAB_HEADER, -1),
        CornerPosition(PRINT_TAB, TAB_HEADER, -1),
    ),
    "power": (
        CornerPosition(RULES_TAB, TAB_FOOTER, 0),
        CornerPosition(PRINT_TAB, TAB_FOOTER, 0),
    ),
    "defense": (
        CornerPosition(RULES_TAB, TAB_FOOTER, -1),
        CornerPosition(PRINT_TAB, TAB_FOOTER, -1),
    ),
}


@dataclass(frozen=True)
class TabText:
    """Name, text and type line rendered in one language tab."""

    name: str | None = None
    text: str | None = None
    typebox: str | None = None


def _inline(node: Tag | None) -> str:
    """Text of a node with whitespace collapsed."""
    if node is None:
        return ""
    return " ".join(node.get_text().split())


def _block(node: Tag | None) -> str:
    """Text of a node, one line per paragraph."""
    if node is None:
        return ""
    paragraphs = node.find_all("p")
    if not paragraphs:
        return _inline(node)
    lines = (_inline(p) for p in paragraphs)
    return "\n".join(line for line in lines if line)


def _or_none(value: str) -> str | None:
    return value or None


def parse_document(html: str) -> BeautifulSoup:
    """
    Parse raw HTML into a queryable tree.

    Raises:
        ExtractionError: If the parser rejects the markup or it holds no elements
    """
    try:
        soup = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as e:
        raise ExtractionError("Card page could not be parsed as HTML", detail=str(e)) from e

    if soup.find() is None:
        raise ExtractionError("Card page contains no markup")
    return soup


def extract_image_url(soup: BeautifulSoup) -> str:
    image = soup.select_one(FACE_IMAGE)
    if image is None:
        return ""
    src = image.get("src")
    return src.strip() if isinstance(src, str) else ""


def extract_print_id(soup: BeautifulSoup, requested: str | None = None) -> str:
    """
    Print id the page actually rendered.

    Read from the print id node next to the active variant selector entry.
    Falls back to the requested print id, then to "".
    """
    active = soup.select_one(ACTIVE_VARIANT)
    if active is not None:
        node = active.find_next_sibling(class_=PRINT_ID_CLASS)
        if node is None:
            node = active.find(class_=PRINT_ID_CLASS)
        print_id = _inline(node) if isinstance(node, Tag) else ""
        if print_id:
            return print_id
    return requested or ""


def extract_tab_text(soup: BeautifulSoup, tab_selector: str) -> TabText:
    """Title, blurb and type line of one language tab."""
    tab = soup.select_one(tab_selector)
    if tab is None:
        return TabText()

    footer = tab.select_one(TAB_FOOTER)
    typebox = footer.select_one(TAB_TYPEBOX) if footer is not None else None

    return TabText(
        name=_or_none(_inline(tab.select_one(TAB_TITLE))),
        text=_or_none(_block(tab.select_one(TAB_BLURB))),
        typebox=_or_none(_inline(typebox)),
    )


def _normalize_label(label: str) -> str:
    return label.strip().rstrip(":：").strip().casefold()


def _labeled_attribute(soup: BeautifulSoup, attribute: str) -> str:
    labels = ATTRIBUTE_LABELS[attribute]
    for corner in soup.select(CORNER):
        label = corner.select_one(CORNER_LABEL)
        if label is None or _normalize_label(_inline(label)) not in labels:
            continue
        value = _NON_DIGITS.sub("", _inline(corner))
        if value:
            return value
    return ""


def _positional_attribute(soup: BeautifulSoup, position: CornerPosition) -> str:
    tab = soup.select_one(position.tab)
    region = tab.select_one(position.region) if tab is not None else None
    if region is None:
        return ""

    corners = region.select(CORNER)
    if not corners or position.index >= len(corners) or -position.index > len(corners):
        return ""

    spans = corners[position.index].find_all("span")
    return _inline(spans[-1]) if spans else ""


def extract_attribute(soup: BeautifulSoup, attribute: str) -> str | None:
    """
    Value of pitch, cost, power or defense.

    The labeled badge wins; otherwise the positional fallbacks are tried in
    order. The first non-empty value is returned, None if all miss.
    """
    value = _labeled_attribute(soup, attribute)
    if value:
        return value

    for position in ATTRIBUTE_FALLBACKS[attribute]:
        value = _positional_attribute(soup, position)
        if value:
            return value
    return None


def split_publication(text: str) -> tuple[str | None, str | None]:
    """
    Split "Set Name • Rarity" into its parts.

    Without a separator the whole trimmed text is the set name.
    """
    text = text.strip()
    if not text:
        return None, None
    if PUBLICATION_SEPARATOR not in text:
        return text, None

    set_name, rarity = text.split(PUBLICATION_SEPARATOR, 1)
    return _or_none(set_name.strip()), _or_none(rarity.strip())


def extract_publication(soup: BeautifulSoup) -> tuple[str | None, str | None, str | None]:
    """Set name, rarity and artist from the production region."""
    region = soup.select_one(PRODUCTION)
    if region is None:
        return None, None, None

    paragraphs = region.find_all("p")
    if not paragraphs:
        return None, None, None

    set_name, rarity = split_publication(_inline(paragraphs[0]))
    artist_link = paragraphs[-1].find("a")
    artist = _inline(artist_link) if isinstance(artist_link, Tag) else ""
    return set_name, rarity, _or_none(artist)


def extract_variants(soup: BeautifulSoup) -> list[VariantRef]:
    """
    Variant blocks in document order.

    A block needs both a print id and a URL; set and finish may be empty.
    The URL is the text of the URL node, not an href.
    """
    variants: list[VariantRef] = []
    for block in soup.select(VARIANT_BLOCK):
        print_id = _inline(block.select_one(VARIANT_PRINT_ID))
        url = _inline(block.select_one(VARIANT_URL))
        if not print_id or not url:
            continue

        variants.append(
            VariantRef(
                print_id=print_id,
                language=language_from_print_id(print_id),
                set_name=_inline(block.select_one(VARIANT_SET)),
                finish=_inline(block.select_one(VARIANT_FINISH)),
                url=absolute_url(url),
            )
        )
    return variants


def parse_card_page(html: str, card_id: str, print_id: str | None = None) -> CardDetail:
    """
    Parse a card detail page.

    Args:
        html: Raw HTML of the card page
        card_id: Card id the page was requested for
        print_id: Print id the page was requested for, if any

    Returns:
        CardDetail with every field the page provided

    Raises:
        ExtractionError: If the HTML cannot be parsed at all
    """
    soup = parse_document(html)

    resolved_print_id = extract_print_id(soup, print_id)
    english = extract_tab_text(soup, RULES_TAB)
    localized = extract_tab_text(soup, PRINT_TAB)
    set_name, rarity, artist = extract_publication(soup)
    variants = extract_variants(soup)

    logger.debug(
        "card_page_parsed",
        extra={
            "card_id": card_id,
            "print_id": resolved_print_id,
            "variant_count": len(variants),
        },
    )

    return CardDetail(
        card_id=card_id,
        print_id=resolved_print_id,
        language=language_from_print_id(resolved_print_id),
        image_url=extract_image_url(soup),
        en_name=english.name or "",
        en_text=english.text,
        en_typebox=english.typebox,
        localized_name=localized.name,
        localized_text=localized.text,
        localized_typebox=localized.typebox,
        pitch=extract_attribute(soup, "pitch"),
        cost=extract_attribute(soup, "cost"),
        power=extract_attribute(soup, "power"),
        defense=extract_attribute(soup, "defense"),
        set_name=set_name,
        rarity=rarity,
        artist=artist,
        variants=variants,
    )
