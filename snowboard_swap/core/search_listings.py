"""Listing Search: keyword and facet filtering over a listing feed.

Invariants:
    - PURE: input sequence is never mutated; result keeps input order
    - Query is split on whitespace; every token must appear (case- and
      diacritic-insensitively) in title, description, location, or seller nickname
    - Blank query matches everything; trade_option/condition filter exactly when given
"""

import unicodedata
from collections.abc import Iterable

from snowboard_swap.core.domain_types import Condition, TradeOption
from snowboard_swap.core.listing_models import Listing


def fold_text(text: str) -> str:
    """Casefold and strip combining marks ("Café" -> "cafe")."""
    decomposed = unicodedata.normalize("NFKD", text.casefold())
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def tokenize_query(query: str) -> list[str]:
    return [fold_text(token) for token in query.split()]


def _searchable_fields(listing: Listing) -> list[str]:
    return [
        fold_text(listing.title),
        fold_text(listing.description),
        fold_text(listing.location),
        fold_text(listing.seller.nickname),
    ]


def matches_keywords(listing: Listing, tokens: list[str]) -> bool:
    if not tokens:
        return True
    fields = _searchable_fields(listing)
    return all(any(token in f for f in fields) for token in tokens)


def filter_listings(
    listings: Iterable[Listing],
    text: str = "",
    trade_option: TradeOption | None = None,
    condition: Condition | None = None,
) -> list[Listing]:
    tokens = tokenize_query(text)
    return [
        listing for listing in listings
        if matches_keywords(listing, tokens)
        and (trade_option is None or listing.trade_option == trade_option)
        and (condition is None or listing.condition == condition)
    ]
