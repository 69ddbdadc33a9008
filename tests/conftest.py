import json
from pathlib import Path
from typing import Any

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def card_page_html() -> str:
    """Captured detail page of a Japanese print (JA_WTR167)."""
    return (FIXTURES / "fabtcg_card_page.html").read_text(encoding="utf-8")


@pytest.fixture
def search_payload() -> dict[str, Any]:
    return json.loads((FIXTURES / "fabtcg_search.json").read_text(encoding="utf-8"))


@pytest.fixture
def prints_payload() -> dict[str, Any]:
    return json.loads((FIXTURES / "fabtcg_prints.json").read_text(encoding="utf-8"))
