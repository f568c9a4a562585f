"""
Resource type descriptions, polling policy and create-request building.

A resource type couples a type name (the identifier prefix and endpoint name)
with the upstream type a new resource is created from. The registry below
lists the types the client knows about; new types can be registered without
touching the client.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Pattern

from pydantic import Field

from .base import BaseConfig, ResourceDocument

ID_SUFFIX_LENGTH = 24


def identifier_pattern(type_name: str) -> Pattern[str]:
    """Return the identifier pattern for a resource type name."""
    return re.compile(
        rf"^{re.escape(type_name)}/[a-zA-Z0-9]{{{ID_SUFFIX_LENGTH}}}$"
    )


@dataclass(frozen=True)
class ResourceType:
    """
    Description of one kind of remote resource.

    Attributes:
        name: Type name, used as identifier prefix and endpoint path
        dependency: Upstream type new resources are created from (None when
            the type cannot be created from another resource)
        dependency_field: Request field carrying the dependency id; defaults
            to the dependency type name
        input_field: Request field carrying the input payload, or None for
            types created from the dependency alone
    """

    name: str
    dependency: Optional[str] = None
    dependency_field: Optional[str] = None
    input_field: Optional[str] = None
    pattern: Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "pattern", identifier_pattern(self.name))
        if self.dependency and not self.dependency_field:
            object.__setattr__(self, "dependency_field", self.dependency)

    @property
    def creatable(self) -> bool:
        """Whether resources of this type are created from a dependency."""
        return self.dependency is not None


class PollingPolicy(BaseConfig):
    """
    How long ``create`` waits for its dependency to become ready.

    An interval of 0 or an attempt budget of 0 skips the wait entirely.
    """

    interval_millis: int = Field(
        default=3000, ge=0, description="Wait between readiness probes (ms)"
    )
    max_attempts: int = Field(
        default=10, ge=0, description="Maximum number of readiness probes"
    )

    @property
    def interval_seconds(self) -> float:
        return self.interval_millis / 1000.0

    @property
    def skips_wait(self) -> bool:
        return self.interval_millis <= 0 or self.max_attempts <= 0

    @classmethod
    def no_wait(cls) -> PollingPolicy:
        return cls(interval_millis=0)


def build_create_request(
    resource_type: ResourceType,
    dependency_id: str,
    input_data: Optional[Mapping[str, Any]] = None,
    args: Optional[Mapping[str, Any]] = None,
) -> ResourceDocument:
    """
    Build the body of a create request.

    The caller's ``args`` mapping is copied, never modified. The dependency id
    and the input payload (an empty object when absent) are injected into the
    copy.

    Args:
        resource_type: Type of the resource being created
        dependency_id: Identifier of the upstream resource
        input_data: Input payload, for types that take one
        args: Extra creation arguments

    Returns:
        A new request document
    """
    body: Dict[str, Any] = dict(args) if args else {}
    if resource_type.dependency_field:
        body[resource_type.dependency_field] = dependency_id
    if resource_type.input_field:
        body[resource_type.input_field] = dict(input_data) if input_data else {}
    return body


RESOURCE_TYPES: Dict[str, ResourceType] = {}


def register_resource_type(resource_type: ResourceType) -> ResourceType:
    """Add a resource type to the registry, replacing any previous entry."""
    RESOURCE_TYPES[resource_type.name] = resource_type
    return resource_type


def get_resource_type(name: str) -> ResourceType:
    """
    Lookup a resource type by name.

    Raises:
        KeyError: When no type is registered under the name.
    """
    key = (name or "").strip().lower()
    if not key:
        raise KeyError("Resource type name is required")

    resource_type = RESOURCE_TYPES.get(key)
    if resource_type is None:
        raise KeyError(f"Unknown resource type: {name}")
    return resource_type


SOURCE = register_resource_type(ResourceType(name="source"))
DATASET = register_resource_type(ResourceType(name="dataset", dependency="source"))
MODEL = register_resource_type(ResourceType(name="model", dependency="dataset"))
TIMESERIES = register_resource_type(
    ResourceType(name="timeseries", dependency="dataset")
)
PREDICTION = register_resource_type(
    ResourceType(name="prediction", dependency="model", input_field="input_data")
)
FORECAST = register_resource_type(
    ResourceType(name="forecast", dependency="timeseries", input_field="input_data")
)


__all__ = [
    "ID_SUFFIX_LENGTH",
    "identifier_pattern",
    "ResourceType",
    "PollingPolicy",
    "build_create_request",
    "RESOURCE_TYPES",
    "register_resource_type",
    "get_resource_type",
    "SOURCE",
    "DATASET",
    "MODEL",
    "TIMESERIES",
    "PREDICTION",
    "FORECAST",
]
