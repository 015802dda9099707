"""Boundary Protocols: contracts between the core and the shell.

Invariants:
    - Core NEVER imports from services/infrastructure; dependency arrows point inward
    - Token persistence is an opaque key-value store reached only through TokenStore
    - The current identity is supplied by an AccountProvider, never looked up globally
"""

from typing import Protocol

from snowboard_swap.core.account_models import Account


class TokenStore(Protocol):
    """Persistent home of the bearer token. save_token(None) removes it."""
    def load_token(self) -> str | None: ...
    def save_token(self, token: str | None) -> None: ...


class AccountProvider(Protocol):
    """Returns the signed-in account or raises NoActiveAccountError."""
    def __call__(self) -> Account: ...
