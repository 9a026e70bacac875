"""Auth collaborator contract.

The journal only needs to know who is signed in (for row scoping) and how
to sign them out. Real providers live in the host application.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from loguru import logger


@dataclass(frozen=True)
class AuthUser:
    """The signed-in identity."""

    id: str
    email: str = ""


@runtime_checkable
class AuthProvider(Protocol):
    """Supplies the current user, or None when nobody is signed in."""

    def current_user(self) -> AuthUser | None: ...

    async def sign_out(self) -> None: ...


class StaticAuthProvider:
    """A fixed identity, e.g. from configuration."""

    def __init__(self, user: AuthUser | None = None):
        self._user = user

    def current_user(self) -> AuthUser | None:
        return self._user

    async def sign_out(self) -> None:
        if self._user is not None:
            logger.info(f"Signed out {self._user.email or self._user.id}")
        self._user = None
