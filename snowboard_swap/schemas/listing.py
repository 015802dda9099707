"""Listing Schemas: listing feed responses and the create-listing body.

Invariants:
    - condition / trade_option travel as wire strings ("like_new", "face_to_face")
    - Unknown wire strings fail mapping with DomainMappingError naming the value
    - Missing is_favorite -> False, missing image_url -> "", missing seller rating/deals -> 0
"""

from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from snowboard_swap.core.domain_types import (
    Condition,
    ListingId,
    SellerId,
    TradeOption,
    condition_api_value,
    parse_condition,
    parse_trade_option,
    trade_option_api_value,
)
from snowboard_swap.core.errors import DomainMappingError
from snowboard_swap.core.listing_models import Listing, Seller


class SellerResponse(BaseModel):
    seller_id: UUID
    display_name: str
    rating: float | None = Field(None, ge=0, le=5)
    deals_count: int | None = Field(None, ge=0)

    def to_domain(self) -> Seller:
        return Seller(
            id=SellerId(self.seller_id),
            nickname=self.display_name,
            rating=self.rating or 0.0,
            deals_count=self.deals_count or 0,
        )


class ListingResponse(BaseModel):
    listing_id: UUID
    title: str
    description: str
    condition: str
    price: float = Field(ge=0)
    location: str
    trade_option: str
    is_favorite: bool | None = None
    image_url: str | None = None
    seller: SellerResponse

    def to_domain(self) -> Listing:
        condition = parse_condition(self.condition)
        if condition is None:
            raise DomainMappingError("condition", self.condition)
        trade_option = parse_trade_option(self.trade_option)
        if trade_option is None:
            raise DomainMappingError("trade_option", self.trade_option)

        return Listing(
            id=ListingId(self.listing_id),
            title=self.title,
            description=self.description,
            condition=condition,
            price=self.price,
            location=self.location,
            trade_option=trade_option,
            seller=self.seller.to_domain(),
            is_favorite=self.is_favorite or False,
            image_name=self.image_url or "",
            photos=[],
        )


class CreateListingRequest(BaseModel):
    """Body of POST /listings; the server assigns the seller from the token."""
    title: str
    description: str
    condition: str
    price: float = Field(ge=0)
    location: str
    trade_option: str
    is_favorite: bool = False
    image_url: str | None = None

    @field_validator("condition", mode="before")
    @classmethod
    def condition_to_api_value(cls, v):
        return condition_api_value(v) if isinstance(v, Condition) else v

    @field_validator("trade_option", mode="before")
    @classmethod
    def trade_option_to_api_value(cls, v):
        return trade_option_api_value(v) if isinstance(v, TradeOption) else v

    @classmethod
    def from_domain(
        cls,
        title: str,
        description: str,
        condition: Condition,
        price: float,
        location: str,
        trade_option: TradeOption,
        is_favorite: bool = False,
        image_url: str | None = None,
    ) -> "CreateListingRequest":
        return cls(
            title=title,
            description=description,
            condition=condition,
            price=price,
            location=location,
            trade_option=trade_option,
            is_favorite=is_favorite,
            image_url=image_url,
        )
