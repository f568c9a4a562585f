"""
In-memory transport.

A pure-python stand-in for the remote API. It assigns identifiers, keeps
documents in a dict, merges updates and forgets deleted resources, and it
records every call it receives.

This transport is intended for tests and offline experiments only.
"""

from __future__ import annotations

import copy
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from ..exceptions import ErrorHandler, NotFoundError
from ..models.base import ResourceDocument, StatusCode
from ..models.resource import ID_SUFFIX_LENGTH
from .base import parse_query


@dataclass(frozen=True)
class TransportCall:
    """One call received by the memory transport."""

    operation: str
    target: str
    body: Optional[ResourceDocument] = None
    query: Optional[str] = None


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _lookup(document: Mapping[str, Any], key: str) -> Any:
    """Value at a dotted path such as ``status.code``, or None."""
    value: Any = document
    for part in key.split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(part)
    return value


class MemoryTransport:
    """Transport that simulates the API in process memory."""

    def __init__(self, initial_status: StatusCode = StatusCode.FINISHED) -> None:
        """
        Args:
            initial_status: Status code given to newly created resources
        """
        self.initial_status = initial_status
        self.documents: Dict[str, ResourceDocument] = {}
        self.calls: List[TransportCall] = []
        self.closed = False

    def _record(
        self,
        operation: str,
        target: str,
        body: Optional[ResourceDocument] = None,
        query: Optional[str] = None,
    ) -> None:
        self.calls.append(
            TransportCall(operation, target, copy.deepcopy(body), query)
        )

    def calls_for(self, operation: str) -> List[TransportCall]:
        return [call for call in self.calls if call.operation == operation]

    def _stored(self, path: str) -> ResourceDocument:
        document = self.documents.get(path)
        if document is None:
            raise NotFoundError(f"Resource not found: {path}", 404, path)
        return document

    def add(
        self,
        resource_type: str,
        status: StatusCode = StatusCode.FINISHED,
        fields: Optional[Mapping[str, Any]] = None,
    ) -> ResourceDocument:
        """Seed a resource without recording a call; returns a copy."""
        resource_id = f"{resource_type}/{uuid.uuid4().hex[:ID_SUFFIX_LENGTH]}"
        document: ResourceDocument = {
            **copy.deepcopy(dict(fields or {})),
            "resource": resource_id,
            "status": {"code": int(status), "message": status.name.lower()},
            "created": _now(),
        }
        self.documents[resource_id] = document
        return copy.deepcopy(document)

    def set_status(self, resource_id: str, status: StatusCode) -> None:
        """Simulate server-side progress of a stored resource."""
        self._stored(resource_id)["status"] = {
            "code": int(status),
            "message": status.name.lower(),
        }

    async def create_resource(
        self, endpoint: str, body: ResourceDocument
    ) -> ResourceDocument:
        self._record("create", endpoint, body)
        return self.add(endpoint, self.initial_status, body)

    async def get_resource(self, path: str) -> ResourceDocument:
        self._record("get", path)
        return copy.deepcopy(self._stored(path))

    async def update_resource(
        self, path: str, body: ResourceDocument
    ) -> ResourceDocument:
        self._record("update", path, body)
        document = self._stored(path)
        changes = {k: v for k, v in copy.deepcopy(body).items() if k != "resource"}
        document.update(changes)
        document["updated"] = _now()
        return copy.deepcopy(document)

    async def delete_resource(self, path: str) -> ResourceDocument:
        self._record("delete", path)
        self._stored(path)
        del self.documents[path]
        return {}

    async def list_resources(
        self, endpoint: str, query: Optional[str] = None
    ) -> ResourceDocument:
        self._record("list", endpoint, query=query)
        limit: Optional[int] = None
        offset = 0
        filters: Dict[str, str] = {}
        for key, value in parse_query(query):
            if key in ("limit", "offset"):
                if not value.isdecimal():
                    raise ErrorHandler.handle_http_status_error(
                        400, f"{key} must be a non-negative integer, got {value!r}", endpoint
                    )
                if key == "limit":
                    limit = int(value)
                else:
                    offset = int(value)
            else:
                filters[key] = value

        prefix = f"{endpoint}/"
        matches = [
            copy.deepcopy(document)
            for resource_id, document in self.documents.items()
            if resource_id.startswith(prefix)
            and all(str(_lookup(document, k)) == v for k, v in filters.items())
        ]
        page = matches[offset:] if limit is None else matches[offset : offset + limit]
        return {
            "meta": {
                "limit": limit,
                "offset": offset,
                "total_count": len(matches),
            },
            "objects": page,
        }

    async def close(self) -> None:
        self.closed = True


__all__ = ["MemoryTransport", "TransportCall"]
