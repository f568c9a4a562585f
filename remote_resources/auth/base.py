"""
Base authentication classes and interfaces.

An authentication method turns credentials into the query parameters and
headers the transport attaches to every request.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


class AuthLocation(str, Enum):
    """Where to place authentication credentials."""

    HEADER = "header"
    QUERY = "query"


@dataclass
class AuthResult:
    """Result of authentication operation."""

    success: bool
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None


class AuthMethod(ABC):
    """
    Abstract base class for all authentication methods.

    Results are cached after the first successful call because credentials
    for this API do not expire; ``refresh`` drops the cache.
    """

    def __init__(self) -> None:
        self._cached_result: Optional[AuthResult] = None

    @abstractmethod
    async def authenticate(self) -> AuthResult:
        """
        Produce request credentials.

        Returns:
            AuthResult with the parameters and headers to attach
        """

    async def refresh(self) -> AuthResult:
        """Discard cached credentials and authenticate again."""
        self._cached_result = None
        return await self.get_auth_data()

    async def get_auth_data(self) -> AuthResult:
        """Return cached credentials, authenticating on first use."""
        if self._cached_result is None or not self._cached_result.success:
            self._cached_result = await self.authenticate()
        return self._cached_result
