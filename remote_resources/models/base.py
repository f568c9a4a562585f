"""
Base models and common types for the remote_resources library.

This module contains the enums, result dataclass and pydantic base model
shared by the client, the transports and the configuration layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

# Server-side state of one resource, as returned by the API.
ResourceDocument = Dict[str, Any]


class StatusCode(int, Enum):
    """
    Processing status codes reported under ``status.code``.

    Positive values are steps of the asynchronous pipeline, negative values
    are terminal or abnormal states.
    """

    WAITING = 0
    QUEUED = 1
    STARTED = 2
    IN_PROGRESS = 3
    SUMMARIZED = 4
    FINISHED = 5
    UPLOADING = 6
    FAULTY = -1
    UNKNOWN = -2
    RUNNABLE = -3


class ReadinessVerdict(str, Enum):
    """Three-valued readiness of a resource."""

    READY = "ready"  # Terminal, usable
    PENDING = "pending"  # Still processing (or status not known yet)
    FAILED = "failed"  # Terminal failure, waiting will not help


class ErrorKind(str, Enum):
    """
    Why an operation did not produce a document.

    Cancellation is not listed: ``asyncio.CancelledError`` propagates to the
    caller instead of being folded into a result.
    """

    INVALID_INPUT = "invalid_input"
    DEPENDENCY_NOT_READY = "dependency_not_ready"
    TRANSPORT_FAILURE = "transport_failure"


class BaseConfig(BaseModel):
    """Base configuration class with common validation settings."""

    model_config = ConfigDict(
        use_enum_values=True, validate_assignment=True, extra="forbid"
    )


@dataclass
class ResourceResult:
    """
    Outcome of a single client operation.

    Exactly one of ``document`` and ``error_kind`` is meaningful: a successful
    result carries the server document verbatim, a failed one carries the
    error kind and a human-readable message.
    """

    document: Optional[ResourceDocument] = None
    resource_id: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    error: Optional[str] = None
    status_code: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return self.error_kind is None

    @classmethod
    def success(
        cls,
        document: ResourceDocument,
        resource_id: Optional[str] = None,
        **metadata: Any,
    ) -> ResourceResult:
        """Build a successful result, taking the id from the document if present."""
        return cls(
            document=document,
            resource_id=document.get("resource") or resource_id,
            metadata=dict(metadata),
        )

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        resource_id: Optional[str] = None,
        status_code: Optional[int] = None,
        **metadata: Any,
    ) -> ResourceResult:
        """Build a failed result."""
        return cls(
            resource_id=resource_id,
            error_kind=kind,
            error=message,
            status_code=status_code,
            metadata=dict(metadata),
        )


__all__ = [
    "ResourceDocument",
    "StatusCode",
    "ReadinessVerdict",
    "ErrorKind",
    "BaseConfig",
    "ResourceResult",
]
