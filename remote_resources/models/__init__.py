"""
Data models for the remote_resources library.
"""

from .base import (
    BaseConfig,
    ErrorKind,
    ReadinessVerdict,
    ResourceDocument,
    ResourceResult,
    StatusCode,
)
from .resource import (
    DATASET,
    FORECAST,
    ID_SUFFIX_LENGTH,
    MODEL,
    PREDICTION,
    RESOURCE_TYPES,
    SOURCE,
    TIMESERIES,
    PollingPolicy,
    ResourceType,
    build_create_request,
    get_resource_type,
    identifier_pattern,
    register_resource_type,
)

__all__ = [
    "BaseConfig",
    "ErrorKind",
    "ReadinessVerdict",
    "ResourceDocument",
    "ResourceResult",
    "StatusCode",
    "DATASET",
    "FORECAST",
    "ID_SUFFIX_LENGTH",
    "MODEL",
    "PREDICTION",
    "RESOURCE_TYPES",
    "SOURCE",
    "TIMESERIES",
    "PollingPolicy",
    "ResourceType",
    "build_create_request",
    "get_resource_type",
    "identifier_pattern",
    "register_resource_type",
]
