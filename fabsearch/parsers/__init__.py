from fabsearch.parsers.fabtcg_api import (
    absolute_url,
    normalize_prints,
    normalize_search_results,
)

__all__ = [
    "absolute_url",
    "normalize_prints",
    "normalize_search_results",
]
