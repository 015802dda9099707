"""Auth Schemas: login/register bodies and the user/session responses.

Invariants:
    - Requests serialize with snake_case keys (display_name)
    - UserResponse optional fields default on mapping: location/bio -> "", rating/deals_count -> 0
    - rating is bounded 0..5 at the boundary so mapping to Seller cannot fail
"""

from uuid import UUID

from pydantic import BaseModel, Field

from snowboard_swap.core.account_models import AuthenticatedUser, AuthSession
from snowboard_swap.core.domain_types import UserId


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    email: str
    password: str
    display_name: str


class UserResponse(BaseModel):
    user_id: UUID
    email: str
    display_name: str
    location: str | None = None
    bio: str | None = None
    rating: float | None = Field(None, ge=0, le=5)
    deals_count: int | None = Field(None, ge=0)

    def to_domain(self) -> AuthenticatedUser:
        return AuthenticatedUser(
            user_id=UserId(self.user_id),
            email=self.email,
            display_name=self.display_name,
            location=self.location or "",
            bio=self.bio or "",
            rating=self.rating or 0.0,
            deals_count=self.deals_count or 0,
        )


class AuthResponse(BaseModel):
    token: str = Field(min_length=1)
    user: UserResponse

    def to_domain(self) -> AuthSession:
        return AuthSession(token=self.token, user=self.user.to_domain())


class ErrorEnvelope(BaseModel):
    """Error body some endpoints return on non-2xx responses."""
    message: str | None = None
