"""Error Hierarchy: typed, categorized exceptions for every SnowboardSwap failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Account and validation errors carry a user-facing message and the offending field
    - Authorization denials are returned by gate checks as values, never raised by them
    - Every REST failure is an APIError subclass; nothing leaves the client unclassified
    - Passwords and tokens never appear in messages or context
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    SERIALIZATION = "serialization"
    DOMAIN_MAPPING = "domain_mapping"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Extra context attached to an error for logs and diagnostics."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    account_id: str | None = None
    thread_id: str | None = None
    trip_id: str | None = None
    method: str | None = None
    path: str | None = None
    debug_info: dict[str, Any] | None = None


class SnowboardSwapError(Exception):
    """Base exception for all SnowboardSwap errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        """Convert to a serializable error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "account_id": self.context.account_id,
                    "thread_id": self.context.thread_id,
                    "trip_id": self.context.trip_id,
                    "method": self.context.method,
                    "path": self.context.path,
                },
            }
        }

    def log_extra(self) -> dict:
        """Fields for logger `extra=` so JSON logs carry the error code."""
        return {
            "error_code": self.code,
            "account_id": self.context.account_id,
            "trip_id": self.context.trip_id,
            "thread_id": self.context.thread_id,
        }


# ─── Account Errors ──────────────────────────────────────────────

class AccountError(SnowboardSwapError):
    """Local, field-specific account failure; never reaches the network."""
    def __init__(
        self,
        message: str,
        code: str,
        field: str,
        category: ErrorCategory = ErrorCategory.VALIDATION,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, category, ErrorSeverity.WARNING, context,
        )
        self.field = field


class EmptyUsernameError(AccountError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Please enter a username.", "EMPTY_USERNAME", "username",
            context=context,
        )


class NoMatchingAccountError(AccountError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "No matching account.", "NO_MATCHING_ACCOUNT", "username",
            ErrorCategory.AUTHENTICATION, context,
        )


class IncorrectPasswordError(AccountError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Incorrect password.", "INCORRECT_PASSWORD", "password",
            ErrorCategory.AUTHENTICATION, context,
        )


class UsernameTooShortError(AccountError):
    def __init__(self, minimum: int, context: ErrorContext | None = None):
        super().__init__(
            f"Username must be at least {minimum} characters.",
            "USERNAME_TOO_SHORT", "username", context=context,
        )
        self.minimum = minimum


class WeakPasswordError(AccountError):
    def __init__(self, minimum: int, context: ErrorContext | None = None):
        super().__init__(
            f"Password must be at least {minimum} characters.",
            "WEAK_PASSWORD", "password", context=context,
        )
        self.minimum = minimum


class UsernameTakenError(AccountError):
    def __init__(self, username: str, context: ErrorContext | None = None):
        super().__init__(
            f"Username taken: '{username}'.", "USERNAME_TAKEN", "username",
            context=context,
        )
        self.username = username


class EmptyDisplayNameError(AccountError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Display name cannot be empty.", "EMPTY_DISPLAY_NAME",
            "display_name", context=context,
        )


class InvalidEmailError(AccountError):
    def __init__(self, email: str, context: ErrorContext | None = None):
        super().__init__(
            f"'{email}' is not a valid email address.", "INVALID_EMAIL",
            "email", context=context,
        )
        self.email = email


class IncorrectCurrentPasswordError(AccountError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Current password is incorrect.", "INCORRECT_CURRENT_PASSWORD",
            "current_password", ErrorCategory.AUTHENTICATION, context,
        )


class PasswordsDoNotMatchError(AccountError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "New passwords do not match.", "PASSWORDS_DO_NOT_MATCH",
            "confirm_password", context=context,
        )


class NoActiveAccountError(AccountError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "No account is signed in.", "NO_ACTIVE_ACCOUNT", "session",
            ErrorCategory.AUTHENTICATION, context,
        )


# ─── Authorization Denials (returned, not raised) ────────────────

class AuthorizationDenial(SnowboardSwapError):
    """A defined non-available state produced by a gate check."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.AUTHORIZATION,
            ErrorSeverity.INFO, context,
        )


class ChatNotAvailableError(AuthorizationDenial):
    def __init__(self, status, context: ErrorContext | None = None):
        super().__init__(
            f"Chat requires a mutual follow (status: {status.value}).",
            "CHAT_NOT_AVAILABLE", context,
        )
        self.status = status


class TripChatAccessDeniedError(AuthorizationDenial):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Only the organizer and approved riders can open the trip chat.",
            "TRIP_CHAT_ACCESS_DENIED", context,
        )


class JoinRequestNotAllowedError(AuthorizationDenial):
    def __init__(self, state, context: ErrorContext | None = None):
        super().__init__(
            f"Cannot request to join (current state: {state.value}).",
            "JOIN_REQUEST_NOT_ALLOWED", context,
        )
        self.state = state


class NotTripOrganizerError(AuthorizationDenial):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Only the trip organizer can manage join requests.",
            "NOT_TRIP_ORGANIZER", context,
        )


# ─── Domain Input Validation ─────────────────────────────────────

class TripValidationError(SnowboardSwapError):
    """Trip creation input rejected."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "TRIP_VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context,
        )
        self.field = field


class ListingValidationError(SnowboardSwapError):
    """Listing draft rejected before publishing."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "LISTING_VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context,
        )
        self.field = field


# ─── REST Client Errors ──────────────────────────────────────────

class APIError(SnowboardSwapError):
    """Base for every failure surfaced by the REST client."""


class InvalidURLError(APIError):
    def __init__(self, url: str, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to build request URL from '{url}'.", "INVALID_URL",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL, context,
        )
        self.url = url


class MissingTokenError(APIError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "No authentication token available.", "MISSING_TOKEN",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.ERROR, context,
        )


class TransportError(APIError):
    def __init__(self, cause: Exception, context: ErrorContext | None = None):
        super().__init__(
            f"Network request failed: {cause}", "TRANSPORT_ERROR",
            ErrorCategory.EXTERNAL_API, ErrorSeverity.ERROR, context,
        )
        self.cause = cause


class InvalidResponseError(APIError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Server response was invalid.", "INVALID_RESPONSE",
            ErrorCategory.EXTERNAL_API, ErrorSeverity.ERROR, context,
        )


class HTTPStatusError(APIError):
    """Non-2xx response; status code and raw body kept for diagnostics."""
    def __init__(
        self,
        status_code: int,
        body: bytes,
        context: ErrorContext | None = None,
        message: str | None = None,
        code: str = "HTTP_STATUS_ERROR",
    ):
        super().__init__(
            message or f"Server responded with status code {status_code}.",
            code, ErrorCategory.EXTERNAL_API, ErrorSeverity.ERROR, context,
        )
        self.status_code = status_code
        self.body = body


class ServerMessageError(HTTPStatusError):
    """Non-2xx response whose body carried a readable `message`."""
    def __init__(
        self,
        status_code: int,
        body: bytes,
        server_message: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            status_code, body, context,
            message=server_message, code="SERVER_MESSAGE",
        )
        self.server_message = server_message


class DecodingError(APIError):
    def __init__(self, cause: Exception, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to decode server response: {cause}", "DECODING_ERROR",
            ErrorCategory.SERIALIZATION, ErrorSeverity.ERROR, context,
        )
        self.cause = cause


class EncodingError(APIError):
    def __init__(self, cause: Exception, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to encode request body: {cause}", "ENCODING_ERROR",
            ErrorCategory.SERIALIZATION, ErrorSeverity.ERROR, context,
        )
        self.cause = cause


class DomainMappingError(APIError):
    """Wire value that has no domain counterpart (e.g. unknown condition)."""
    def __init__(
        self, field: str, value: str, context: ErrorContext | None = None,
    ):
        label = {
            "condition": "condition value",
            "trade_option": "trade option",
        }.get(field, field)
        super().__init__(
            f"Unknown {label}: {value}", "DOMAIN_MAPPING_ERROR",
            ErrorCategory.DOMAIN_MAPPING, ErrorSeverity.ERROR, context,
        )
        self.field = field
        self.value = value
