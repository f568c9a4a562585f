"""
Entry point tying configuration, transport and per-type clients together.

A ``ResourceApi`` owns one transport and hands out a ``ResourceClient`` for
each registered resource type. It is itself the readiness probe for every
dependency, so ``api.forecast.create(...)`` waits on the time series through
``api.readiness``.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from .auth import APIKeyAuth, APIKeyConfig
from .client import ResourceClient, ResourceRef, resource_id_of
from .config.models import ClientConfig
from .exceptions import ConfigurationError
from .models.base import ReadinessVerdict
from .models.resource import RESOURCE_TYPES, get_resource_type
from .polling import ReadinessPoller
from .transport.base import Transport
from .transport.http import HTTPTransport
from .validation import resource_type_of

logger = logging.getLogger(__name__)


def build_transport(config: ClientConfig) -> HTTPTransport:
    """
    Build the HTTP transport described by ``config``.

    Raises:
        ConfigurationError: If the username or API key is missing
    """
    if not config.has_credentials:
        raise ConfigurationError(
            "Username and API key are required to reach the remote API"
        )
    auth = APIKeyAuth(
        APIKeyConfig(username=str(config.username), api_key=config.api_key)
    )
    return HTTPTransport(
        config.api_url, auth=auth, timeout_seconds=config.timeout_seconds
    )


class ResourceApi:
    """
    Access to every registered resource type through one transport.

    Args:
        config: Client settings; defaults are used when omitted
        transport: Transport to use instead of the HTTP one built from config
        poller: Poller shared by all clients (e.g. one with a fake sleep)

    Example:
        ```python
        config = ClientConfig(username="alice", api_key="abc123")
        async with ResourceApi(config) as api:
            result = await api.forecast.create(
                "timeseries/5f3c0e1a2b3c4d5e6f708192",
                {"000005": {"horizon": 30}},
            )
        ```
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        transport: Optional[Transport] = None,
        poller: Optional[ReadinessPoller] = None,
    ) -> None:
        self.config = config or ClientConfig()
        self.transport = transport if transport is not None else build_transport(self.config)
        self.poller = poller or ReadinessPoller()
        self._clients: Dict[str, ResourceClient] = {}

    def resource(self, type_name: str) -> ResourceClient:
        """
        Client for the named resource type.

        Raises:
            KeyError: If the type is not registered
        """
        resource_type = get_resource_type(type_name)
        client = self._clients.get(resource_type.name)
        if client is None:
            probes = {}
            if resource_type.dependency:
                probes[resource_type.dependency] = self.readiness
            client = ResourceClient(
                resource_type,
                self.transport,
                probes=probes,
                policy=self.config.polling,
                poller=self.poller,
            )
            self._clients[resource_type.name] = client
        return client

    def __getattr__(self, name: str) -> ResourceClient:
        if name.startswith("_") or name not in RESOURCE_TYPES:
            raise AttributeError(
                f"{type(self).__name__!r} object has no attribute {name!r}"
            )
        return self.resource(name)

    async def readiness(self, resource: ResourceRef) -> ReadinessVerdict:
        """Readiness of any resource, dispatched on its id prefix."""
        type_name = resource_type_of(resource_id_of(resource))
        if type_name is None or type_name not in RESOURCE_TYPES:
            logger.info("Cannot tell the type of %r", resource_id_of(resource))
            return ReadinessVerdict.FAILED
        return await self.resource(type_name).readiness(resource)

    async def is_ready(self, resource: ResourceRef) -> bool:
        """Whether any resource (id or document) has finished processing."""
        return await self.readiness(resource) is ReadinessVerdict.READY

    async def close(self) -> None:
        await self.transport.close()

    async def __aenter__(self) -> "ResourceApi":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


__all__ = ["ResourceApi", "build_transport"]
