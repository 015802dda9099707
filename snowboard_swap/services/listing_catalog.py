"""Listing Catalog: the listing feed, refreshed from and published to the REST API.

Invariants:
    - A failed refresh keeps the previous listings and records last_error
    - is_loading is True only while a refresh is in flight
    - Newly published or locally added listings go first
    - Queries return copies of the feed and of each listing, never the stored objects
"""

import logging
import threading
from dataclasses import replace
from uuid import UUID

from snowboard_swap.core.domain_types import Condition, TradeOption
from snowboard_swap.core.errors import APIError, ListingValidationError
from snowboard_swap.core.listing_models import Listing
from snowboard_swap.core.search_listings import filter_listings
from snowboard_swap.infrastructure.api_client import APIClient
from snowboard_swap.schemas.listing import CreateListingRequest

logger = logging.getLogger(__name__)


def _copy(listing: Listing) -> Listing:
    return replace(listing, photos=list(listing.photos))


class ListingCatalog:
    def __init__(self, listings: list[Listing] | None = None):
        self._lock = threading.RLock()
        self._listings: list[Listing] = [_copy(item) for item in listings or []]
        self.is_loading = False
        self.last_error: str | None = None

    def listings(self) -> list[Listing]:
        with self._lock:
            return [_copy(item) for item in self._listings]

    def listing(self, listing_id: UUID) -> Listing | None:
        with self._lock:
            item = self._find(listing_id)
            return _copy(item) if item else None

    def filtered(
        self,
        text: str = "",
        trade_option: TradeOption | None = None,
        condition: Condition | None = None,
    ) -> list[Listing]:
        return filter_listings(self.listings(), text, trade_option, condition)

    async def refresh(self, client: APIClient) -> bool:
        self.is_loading = True
        self.last_error = None
        try:
            remote = await client.fetch_listings()
        except APIError as e:
            self.last_error = e.message
            logger.warning("Listing refresh failed: %s", e.message, extra=e.log_extra())
            return False
        finally:
            self.is_loading = False
        with self._lock:
            self._listings = [_copy(item) for item in remote]
        return True

    async def publish(
        self,
        client: APIClient,
        title: str,
        description: str,
        price: float,
        location: str,
        trade_option: TradeOption,
        condition: Condition,
    ) -> Listing | None:
        try:
            if not title.strip():
                raise ListingValidationError("Title cannot be empty.", "title")
            if price < 0:
                raise ListingValidationError("Price cannot be negative.", "price")
            draft = CreateListingRequest.from_domain(
                title=title.strip(),
                description=description.strip(),
                condition=condition,
                price=price,
                location=location.strip(),
                trade_option=trade_option,
            )
            created = await client.create_listing(draft)
        except (APIError, ListingValidationError) as e:
            self.last_error = e.message
            logger.warning("Publishing listing failed: %s", e.message, extra=e.log_extra())
            return None

        self.add_local(created)
        self.last_error = None
        return _copy(created)

    def add_local(self, listing: Listing) -> None:
        with self._lock:
            self._listings.insert(0, _copy(listing))

    def toggle_favorite(self, listing_id: UUID) -> Listing | None:
        with self._lock:
            listing = self._find(listing_id)
            if listing is None:
                return None
            listing.is_favorite = not listing.is_favorite
            return _copy(listing)

    def _find(self, listing_id: UUID) -> Listing | None:
        return next((item for item in self._listings if item.id == listing_id), None)
