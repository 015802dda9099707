"""Account Records: a registered account and its follow graph.

Invariants:
    - Account.seller.id == Account.id (the seller is the account's public face)
    - following_seller_ids / followers_of_current_user never contain the account's own id
"""

from dataclasses import dataclass, field, replace

from snowboard_swap.core.domain_types import AccountId, SellerId, UserId
from snowboard_swap.core.listing_models import Seller


@dataclass
class Account:
    """A registered account. Passwords are stored verbatim (in-memory demo store)."""
    id: AccountId
    username: str
    password: str = field(repr=False)
    seller: Seller
    following_seller_ids: set[SellerId] = field(default_factory=set)
    followers_of_current_user: set[SellerId] = field(default_factory=set)
    email: str = ""
    location: str = ""
    bio: str = ""

    @property
    def display_name(self) -> str:
        return self.seller.nickname

    def is_following(self, seller_id: SellerId) -> bool:
        return seller_id in self.following_seller_ids

    def is_followed_by(self, seller_id: SellerId) -> bool:
        return seller_id in self.followers_of_current_user

    def snapshot(self) -> "Account":
        """Detached copy; mutating it never touches the store."""
        return replace(
            self,
            following_seller_ids=set(self.following_seller_ids),
            followers_of_current_user=set(self.followers_of_current_user),
        )


@dataclass(frozen=True)
class AuthenticatedUser:
    """User as reported by the remote API, optional fields already defaulted."""
    user_id: UserId
    email: str
    display_name: str
    location: str = ""
    bio: str = ""
    rating: float = 0.0
    deals_count: int = 0

    def to_seller(self) -> Seller:
        return Seller(
            id=self.user_id,
            nickname=self.display_name,
            rating=self.rating,
            deals_count=self.deals_count,
        )


@dataclass(frozen=True)
class AuthSession:
    token: str = field(repr=False)
    user: AuthenticatedUser
