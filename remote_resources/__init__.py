"""
Async client for asynchronously processed remote resources.

Resources (sources, datasets, models, time series, predictions, forecasts)
are created on a remote service from an upstream resource and processed in
the background. This package validates identifiers locally, waits a bounded
time for a dependency to finish before creating from it, and reports every
outcome as a ``ResourceResult`` instead of raising.

Features:
- Async CRUD client per resource type over a pluggable transport
- aiohttp transport with username/API key authentication
- In-memory transport for tests and offline use
- Bounded readiness polling with an injectable sleep
- Pydantic configuration from files and environment variables
"""

from .api import ResourceApi, build_transport
from .auth import APIKeyAuth, APIKeyConfig, AuthLocation
from .client import ResourceClient, resource_id_of
from .config import ClientConfig, ConfigLoader, LoggingConfig, load_config
from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    ConnectionError,
    ContentError,
    HTTPError,
    InvalidInputError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ResourceError,
    ServerError,
    TimeoutError,
    TransportError,
)
from .models import (
    DATASET,
    FORECAST,
    MODEL,
    PREDICTION,
    RESOURCE_TYPES,
    SOURCE,
    TIMESERIES,
    ErrorKind,
    PollingPolicy,
    ReadinessVerdict,
    ResourceResult,
    ResourceType,
    StatusCode,
    get_resource_type,
    register_resource_type,
)
from .polling import ReadinessPoller
from .status import interpret, is_finished, status_code
from .transport import HTTPTransport, MemoryTransport, Transport
from .validation import resource_type_of, validate, validate_resource_id

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "ResourceApi",
    "ResourceClient",
    "build_transport",
    "resource_id_of",
    # Authentication
    "APIKeyAuth",
    "APIKeyConfig",
    "AuthLocation",
    # Configuration
    "ClientConfig",
    "ConfigLoader",
    "LoggingConfig",
    "load_config",
    # Exceptions
    "ResourceError",
    "InvalidInputError",
    "ConfigurationError",
    "TransportError",
    "NetworkError",
    "TimeoutError",
    "ConnectionError",
    "ContentError",
    "HTTPError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    # Models
    "ErrorKind",
    "PollingPolicy",
    "ReadinessVerdict",
    "ResourceResult",
    "ResourceType",
    "StatusCode",
    "RESOURCE_TYPES",
    "SOURCE",
    "DATASET",
    "MODEL",
    "TIMESERIES",
    "PREDICTION",
    "FORECAST",
    "get_resource_type",
    "register_resource_type",
    # Polling and status
    "ReadinessPoller",
    "interpret",
    "is_finished",
    "status_code",
    # Transports
    "Transport",
    "HTTPTransport",
    "MemoryTransport",
    # Validation
    "validate",
    "validate_resource_id",
    "resource_type_of",
]
