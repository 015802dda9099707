"""Listing Records: sellers, listings, and their photos.

Invariants:
    - Seller.rating is bounded MIN_RATING..MAX_RATING; deals_count >= 0
    - Listing.price >= 0 and every listing has exactly one seller
    - Listing identity (id) never changes; equality/hash use id only
    - Photos keep upload order
"""

from dataclasses import dataclass, field
from uuid import UUID, uuid4

from snowboard_swap.core.domain_types import (
    Condition,
    ListingId,
    SellerId,
    TradeOption,
    MAX_RATING,
    MIN_RATING,
)


@dataclass(frozen=True)
class Seller:
    """Public identity of an account as shown on listings."""
    id: SellerId
    nickname: str
    rating: float = 0.0
    deals_count: int = 0

    def __post_init__(self):
        if not MIN_RATING <= self.rating <= MAX_RATING:
            raise ValueError(
                f"rating must be within {MIN_RATING}..{MAX_RATING}, got {self.rating}"
            )
        if self.deals_count < 0:
            raise ValueError(f"deals_count must be >= 0, got {self.deals_count}")


@dataclass(frozen=True)
class ListingPhoto:
    data: bytes
    id: UUID = field(default_factory=uuid4)


@dataclass(eq=False)
class Listing:
    """A board offered for sale."""
    id: ListingId
    title: str
    description: str
    condition: Condition
    price: float
    location: str
    trade_option: TradeOption
    seller: Seller
    is_favorite: bool = False
    image_name: str = ""
    photos: list[ListingPhoto] = field(default_factory=list)

    def __post_init__(self):
        if self.price < 0:
            raise ValueError(f"price must be >= 0, got {self.price}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Listing):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def same_content(self, other: "Listing") -> bool:
        """Field-by-field comparison, unlike == which compares identity."""
        return (
            self.id == other.id
            and self.title == other.title
            and self.description == other.description
            and self.condition == other.condition
            and self.price == other.price
            and self.location == other.location
            and self.trade_option == other.trade_option
            and self.seller == other.seller
            and self.is_favorite == other.is_favorite
            and self.image_name == other.image_name
            and self.photos == other.photos
        )
