"""Listing Catalog: tests for refresh, publish, filtering, and favorites.

Tests cover:
    - refresh replaces the feed; failures keep the old feed and record last_error
    - publish validates locally, then posts and inserts the result first
    - filtered delegates to the search rules
"""

import pytest

from snowboard_swap.core.domain_types import Condition, TradeOption
from snowboard_swap.services.listing_catalog import ListingCatalog
from tests.builders import make_listing


@pytest.fixture
async def signed_in_client(api_client):
    await api_client.register("alice@example.com", "secret1", "Alice")
    return api_client


async def test_refresh_replaces_feed(signed_in_client, backend):
    backend.add_listing(title="Burton Process")
    catalog = ListingCatalog([make_listing(title="Stale")])
    assert await catalog.refresh(signed_in_client) is True
    assert [item.title for item in catalog.listings()] == ["Burton Process"]
    assert catalog.is_loading is False
    assert catalog.last_error is None


async def test_failed_refresh_keeps_previous_feed(signed_in_client, backend):
    stale = make_listing(title="Stale")
    catalog = ListingCatalog([stale])
    backend.fail_next = (500, b"")
    assert await catalog.refresh(signed_in_client) is False
    assert catalog.listings() == [stale]
    assert "500" in catalog.last_error
    assert catalog.is_loading is False


async def test_refresh_with_unknown_enum_keeps_feed(signed_in_client, backend):
    backend.add_listing(condition="mint")
    catalog = ListingCatalog()
    assert await catalog.refresh(signed_in_client) is False
    assert catalog.listings() == []
    assert "mint" in catalog.last_error


async def test_publish_inserts_first(signed_in_client):
    existing = make_listing(title="Old board")
    catalog = ListingCatalog([existing])
    created = await catalog.publish(
        signed_in_client, "  New board ", "Fresh wax", 199.0, "Laax",
        TradeOption.HYBRID, Condition.NEW,
    )
    assert created.title == "New board"
    assert created.condition is Condition.NEW
    assert [item.id for item in catalog.listings()] == [created.id, existing.id]


@pytest.mark.parametrize("title, price", [("   ", 100.0), ("Board", -1.0)])
async def test_publish_validation(api_client, backend, title, price):
    catalog = ListingCatalog()
    result = await catalog.publish(
        api_client, title, "", price, "Laax", TradeOption.COURIER, Condition.GOOD,
    )
    assert result is None
    assert catalog.last_error
    assert backend.requests == []


async def test_publish_without_token(api_client):
    catalog = ListingCatalog()
    result = await catalog.publish(
        api_client, "Board", "", 10.0, "Laax", TradeOption.COURIER, Condition.GOOD,
    )
    assert result is None
    assert "token" in catalog.last_error.lower()


def test_filtered_and_lookup():
    courier = make_listing(title="Lib Tech Orca", trade_option=TradeOption.COURIER)
    local = make_listing(title="Burton Custom", trade_option=TradeOption.FACE_TO_FACE)
    catalog = ListingCatalog([courier, local])
    assert catalog.filtered(trade_option=TradeOption.COURIER) == [courier]
    assert catalog.filtered(text="burton") == [local]
    found = catalog.listing(local.id)
    assert found == local
    assert found is not local


def test_toggle_favorite():
    listing = make_listing()
    catalog = ListingCatalog([listing])
    assert catalog.toggle_favorite(listing.id).is_favorite is True
    assert catalog.toggle_favorite(listing.id).is_favorite is False


def test_listings_returns_copy():
    catalog = ListingCatalog([make_listing()])
    catalog.listings().clear()
    assert len(catalog.listings()) == 1


def test_returned_listings_are_copies():
    listing = make_listing(title="Original")
    catalog = ListingCatalog([listing])
    catalog.listings()[0].title = "Edited outside"
    catalog.listing(listing.id).is_favorite = True
    listing.price = 1.0
    stored = catalog.listing(listing.id)
    assert stored.title == "Original"
    assert stored.is_favorite is False
    assert stored.price == 280.0
