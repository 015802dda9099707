"""REST Client: async, token-authenticated access to the SnowboardSwap API.

Invariants:
    - Auth-required calls without a cached/stored token fail with MissingTokenError
      before any request is sent
    - Every failure is an APIError subclass (core/errors.py): invalid URL, missing
      token, transport, HTTP status (code + raw body kept), decoding, encoding,
      domain mapping; nothing propagates unclassified, and each is logged with method and path
    - Cached-token reads/writes happen under one asyncio.Lock (last write wins);
      token store IO runs in a worker thread while the lock is held
    - login/register persist the token; logout clears it without a network call
    - Tokens and passwords are never logged
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from snowboard_swap.config import Settings, get_settings
from snowboard_swap.core.account_models import AuthenticatedUser, AuthSession
from snowboard_swap.core.errors import (
    APIError,
    DecodingError,
    EncodingError,
    HTTPStatusError,
    InvalidResponseError,
    InvalidURLError,
    MissingTokenError,
    ServerMessageError,
    TransportError,
)
from snowboard_swap.core.listing_models import Listing
from snowboard_swap.core.store_protocols import TokenStore
from snowboard_swap.schemas.auth import (
    AuthResponse,
    ErrorEnvelope,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)
from snowboard_swap.schemas.listing import CreateListingRequest, ListingResponse

logger = logging.getLogger(__name__)

_LISTINGS_ADAPTER = TypeAdapter(list[ListingResponse])


class APIClient:
    """Request builder over a fixed base URL with a cached bearer token."""

    def __init__(
        self,
        base_url: str,
        token_store: TokenStore,
        *,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url
        self._token_store = token_store
        self._cached_token = token_store.load_token()
        self._token_lock = asyncio.Lock()
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=timeout_seconds, transport=transport,
        )

    @classmethod
    def from_settings(
        cls, token_store: TokenStore, settings: Settings | None = None,
    ) -> "APIClient":
        settings = settings or get_settings()
        return cls(
            settings.api_base_url,
            token_store,
            timeout_seconds=settings.api_timeout_seconds,
        )

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()

    # ─── Auth ────────────────────────────────────────────────────

    async def login(self, email: str, password: str) -> AuthSession:
        """POST /auth/login; persists the returned token."""
        session = await self._send(
            "POST", "/auth/login", AuthResponse,
            body=LoginRequest(email=email, password=password),
            requires_auth=False,
            convert=AuthResponse.to_domain,
        )
        await self._store_token(session.token)
        logger.info("Logged in", extra={"account_id": str(session.user.user_id)})
        return session

    async def register(
        self, email: str, password: str, display_name: str,
    ) -> AuthSession:
        """POST /auth/register; persists the returned token."""
        session = await self._send(
            "POST", "/auth/register", AuthResponse,
            body=RegisterRequest(
                email=email, password=password, display_name=display_name,
            ),
            requires_auth=False,
            convert=AuthResponse.to_domain,
        )
        await self._store_token(session.token)
        logger.info("Registered", extra={"account_id": str(session.user.user_id)})
        return session

    async def fetch_current_user(self) -> AuthenticatedUser | None:
        """GET /auth/me; None when no token is cached or stored."""
        if await self._current_token() is None:
            return None
        return await self._send(
            "GET", "/auth/me", UserResponse, convert=UserResponse.to_domain,
        )

    async def logout(self) -> None:
        await self._store_token(None)
        logger.info("Logged out")

    # ─── Listings ────────────────────────────────────────────────

    async def fetch_listings(self) -> list[Listing]:
        """GET /listings; one unknown enum value fails the whole feed."""
        return await self._send(
            "GET", "/listings", _LISTINGS_ADAPTER,
            convert=lambda responses: [r.to_domain() for r in responses],
        )

    async def create_listing(self, draft: CreateListingRequest) -> Listing:
        """POST /listings; the server assigns the seller from the token."""
        return await self._send(
            "POST", "/listings", ListingResponse,
            body=draft, convert=ListingResponse.to_domain,
        )

    # ─── Token cache ─────────────────────────────────────────────

    async def _current_token(self) -> str | None:
        async with self._token_lock:
            if self._cached_token is None:
                self._cached_token = await asyncio.to_thread(self._token_store.load_token)
            return self._cached_token

    async def _store_token(self, token: str | None) -> None:
        async with self._token_lock:
            self._cached_token = token
            await asyncio.to_thread(self._token_store.save_token, token)

    # ─── Request cycle ───────────────────────────────────────────

    def _build_url(self, path: str) -> httpx.URL:
        try:
            base = httpx.URL(self.base_url)
        except (httpx.InvalidURL, TypeError) as e:
            raise InvalidURLError(str(self.base_url)) from e
        if base.scheme not in ("http", "https") or not base.host:
            raise InvalidURLError(str(self.base_url))
        joined = f"{base.path.rstrip('/')}/{path.strip('/')}"
        return base.copy_with(path=joined)

    async def _build_headers(self, requires_auth: bool) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if requires_auth:
            token = await self._current_token()
            if token is None:
                raise MissingTokenError()
            headers["Authorization"] = f"Bearer {token}"
        return headers

    @staticmethod
    def _encode(body: BaseModel) -> bytes:
        try:
            return body.model_dump_json().encode("utf-8")
        except (PydanticSerializationError, ValueError, TypeError) as e:
            raise EncodingError(e) from e

    @staticmethod
    def _decode(response_type: Any, content: bytes) -> Any:
        if not content:
            raise InvalidResponseError()
        try:
            if isinstance(response_type, TypeAdapter):
                return response_type.validate_json(content)
            return response_type.model_validate_json(content)
        except ValidationError as e:
            raise DecodingError(e) from e

    @staticmethod
    def _status_error(response: httpx.Response) -> HTTPStatusError:
        body = response.content
        message = None
        if body:
            try:
                message = ErrorEnvelope.model_validate_json(body).message
            except ValidationError:
                message = None
        if message:
            return ServerMessageError(response.status_code, body, message)
        return HTTPStatusError(response.status_code, body)

    async def _send(
        self,
        method: str,
        path: str,
        response_type: Any,
        *,
        body: BaseModel | None = None,
        requires_auth: bool = True,
        convert: Callable[[Any], Any] | None = None,
    ) -> Any:
        """One request cycle; decoding and domain mapping fail inside the logged path."""
        try:
            url = self._build_url(path)
            headers = await self._build_headers(requires_auth)
            content = None
            if body is not None:
                content = self._encode(body)
                headers["Content-Type"] = "application/json"

            logger.debug(
                "%s %s", method, path, extra={"method": method, "path": path},
            )
            try:
                response = await self._http.request(
                    method, url, headers=headers, content=content,
                )
            except httpx.HTTPError as e:
                raise TransportError(e) from e

            if not response.is_success:
                raise self._status_error(response)
            decoded = self._decode(response_type, response.content)
            return convert(decoded) if convert else decoded

        except APIError as e:
            e.context.method = method
            e.context.path = path
            extra = {**e.log_extra(), "method": method, "path": path}
            if isinstance(e, HTTPStatusError):
                extra["status_code"] = e.status_code
            logger.warning("API call failed: %s", e.message, extra=extra)
            raise
