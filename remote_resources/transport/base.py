"""
Transport contract consumed by the resource client.

A transport performs single network round trips. ``endpoint`` is a resource
type name (``"forecast"``) and ``path`` is a resource identifier
(``"forecast/5f3c..."``); both are relative to the API root the transport
was configured with. Failures are raised as ``TransportError`` subclasses.
"""

from __future__ import annotations

import re
from typing import Any, List, Optional, Protocol, Tuple, runtime_checkable

from ..models.base import ResourceDocument

_QUERY_SEPARATOR = re.compile(r"[;&]")


@runtime_checkable
class Transport(Protocol):
    """Network collaborator of ResourceClient."""

    async def create_resource(
        self, endpoint: str, body: ResourceDocument
    ) -> ResourceDocument: ...

    async def get_resource(self, path: str) -> ResourceDocument: ...

    async def update_resource(
        self, path: str, body: ResourceDocument
    ) -> ResourceDocument: ...

    async def delete_resource(self, path: str) -> ResourceDocument: ...

    async def list_resources(
        self, endpoint: str, query: Optional[str] = None
    ) -> ResourceDocument: ...

    async def close(self) -> None: ...


def parse_query(query: Optional[str]) -> List[Tuple[str, str]]:
    """
    Split an opaque listing query into key/value pairs.

    Both ``;`` and ``&`` separate terms; a leading ``?`` is ignored and a
    term without ``=`` gets an empty value.
    """
    if not query:
        return []
    pairs: List[Tuple[str, str]] = []
    for term in _QUERY_SEPARATOR.split(query.lstrip("?")):
        term = term.strip()
        if not term:
            continue
        key, _, value = term.partition("=")
        pairs.append((key, value))
    return pairs


def describe(body: Any, limit: int = 200) -> str:
    """Short printable form of a request body for debug logging."""
    text = repr(body)
    return text if len(text) <= limit else text[: limit - 3] + "..."


__all__ = ["Transport", "parse_query", "describe"]
