"""
CRUD client for one type of asynchronously processed remote resource.

Every operation returns a ``ResourceResult``. Identifiers are validated
before any request is made, creation waits (bounded) for its dependency to
finish processing, and transport failures are reported, never retried.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

from .exceptions import InvalidInputError, TransportError
from .models.base import ErrorKind, ReadinessVerdict, ResourceDocument, ResourceResult
from .models.resource import (
    PollingPolicy,
    ResourceType,
    build_create_request,
    get_resource_type,
    identifier_pattern,
)
from .polling import ProbeOutcome, ReadinessPoller
from .status import interpret
from .transport.base import Transport
from .validation import validate, validate_resource_id

logger = logging.getLogger(__name__)

# An identifier string, or a document holding one under "resource".
ResourceRef = Union[str, Mapping[str, Any], None]
Changes = Union[Mapping[str, Any], str]
DependencyProbe = Callable[[str], Union[ProbeOutcome, Awaitable[ProbeOutcome]]]


def resource_id_of(resource: ResourceRef) -> Optional[str]:
    """Extract the identifier from an id string or a resource document."""
    if isinstance(resource, Mapping):
        resource = resource.get("resource")
    return resource if isinstance(resource, str) else None


class ResourceClient:
    """
    Create, read, update, delete and list resources of one type.

    Args:
        resource_type: Type handled by this client (or its registered name)
        transport: Network collaborator
        probes: Readiness checks keyed by dependency type name; each takes a
            dependency id and returns a bool or ReadinessVerdict (or an
            awaitable of one)
        policy: Default wait policy for ``create``
        poller: Poller used for the pre-create wait

    Example:
        ```python
        forecasts = ResourceClient(
            "forecast", transport, probes={"timeseries": timeseries_client.is_ready}
        )
        result = await forecasts.create(
            "timeseries/5f3c0e1a2b3c4d5e6f708192", {"000005": {"horizon": 10}}
        )
        if result.is_success:
            print(result.resource_id)
        ```
    """

    def __init__(
        self,
        resource_type: Union[ResourceType, str],
        transport: Transport,
        *,
        probes: Optional[Mapping[str, DependencyProbe]] = None,
        policy: Optional[PollingPolicy] = None,
        poller: Optional[ReadinessPoller] = None,
    ) -> None:
        if isinstance(resource_type, str):
            resource_type = get_resource_type(resource_type)
        self.resource_type = resource_type
        self.transport = transport
        self.probes: Dict[str, DependencyProbe] = dict(probes or {})
        self.policy = policy or PollingPolicy()
        self.poller = poller or ReadinessPoller()

    @property
    def name(self) -> str:
        return self.resource_type.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    def is_instance(self, document: Mapping[str, Any]) -> bool:
        """Whether the document is a resource of this client's type."""
        return validate_resource_id(resource_id_of(document), self.resource_type)

    async def create(
        self,
        dependency_id: Optional[str],
        input_data: Optional[Mapping[str, Any]] = None,
        args: Optional[Mapping[str, Any]] = None,
        policy: Optional[PollingPolicy] = None,
    ) -> ResourceResult:
        """
        Create a resource from a dependency.

        Waits for the dependency according to ``policy`` (or the client
        default), then sends one create request built from a copy of
        ``args`` plus the dependency id and the input payload.

        Args:
            dependency_id: Identifier of the upstream resource
            input_data: Input payload; sent as ``{}`` when absent
            args: Extra creation arguments; never modified
            policy: Wait policy overriding the client default

        Returns:
            The server document, or a failed result. ``metadata`` holds
            ``dependency_ready``: True/False when a wait happened, None when
            it was skipped or no probe is registered.

        Raises:
            asyncio.CancelledError: If cancelled while waiting; nothing is sent
        """
        resource_type = self.resource_type
        if not resource_type.creatable:
            return self._invalid(
                InvalidInputError(
                    f"Resources of type {self.name} cannot be created from a dependency",
                    resource_type=self.name,
                )
            )

        dependency = resource_type.dependency
        if not validate(dependency_id, identifier_pattern(dependency)):
            return self._invalid(
                InvalidInputError(
                    f"Wrong {dependency} id: {dependency_id!r}",
                    value=dependency_id,
                    resource_type=dependency,
                )
            )
        for label, value in (("input data", input_data), ("args", args)):
            if value is not None and not isinstance(value, Mapping):
                return self._invalid(
                    InvalidInputError(
                        f"Creation {label} must be a mapping, got {type(value).__name__}",
                        value=value,
                    )
                )

        dependency_ready = await self._await_dependency(
            dependency_id, policy or self.policy
        )

        body = build_create_request(resource_type, dependency_id, input_data, args)
        logger.info("Creating %s from %s", self.name, dependency_id)
        result = await self._call(
            "create", self.name, self.transport.create_resource(self.name, body)
        )
        result.metadata["dependency_ready"] = dependency_ready
        if not result.is_success and dependency_ready is False:
            result.error_kind = ErrorKind.DEPENDENCY_NOT_READY
        return result

    async def get(self, resource: ResourceRef) -> ResourceResult:
        """
        Retrieve a resource by id, or by the ``resource`` field of a document.
        """
        try:
            resource_id = self._require_id(resource)
        except InvalidInputError as e:
            return self._invalid(e)
        return await self._call(
            "get", resource_id, self.transport.get_resource(resource_id)
        )

    async def readiness(self, resource: ResourceRef) -> ReadinessVerdict:
        """
        Three-valued readiness of a resource.

        A document already reporting FINISHED is trusted as is; any other
        document is re-fetched once by its id.

        Returns:
            READY, PENDING, or FAILED (failed status, malformed id or a
            resource the server does not know)
        """
        if isinstance(resource, Mapping) and interpret(resource) is ReadinessVerdict.READY:
            return ReadinessVerdict.READY

        result = await self.get(resource)
        if result.is_success:
            return interpret(result.document)
        if result.error_kind is ErrorKind.INVALID_INPUT or result.status_code == 404:
            return ReadinessVerdict.FAILED
        return ReadinessVerdict.PENDING

    async def is_ready(self, resource: ResourceRef) -> bool:
        """Whether the resource (id or document) has finished processing."""
        return await self.readiness(resource) is ReadinessVerdict.READY

    async def list(self, query: Optional[str] = None) -> ResourceResult:
        """
        List resources of this type.

        Args:
            query: Opaque filter string, e.g. ``"limit=5;status.code=5"``
        """
        return await self._call(
            "list", self.name, self.transport.list_resources(self.name, query)
        )

    async def update(self, resource: ResourceRef, changes: Changes) -> ResourceResult:
        """
        Update a resource.

        Args:
            resource: Identifier or document of the resource
            changes: Mapping of changes, or the same as a JSON object string
        """
        try:
            resource_id = self._require_id(resource)
            body = self._parse_changes(changes)
        except InvalidInputError as e:
            return self._invalid(e)
        return await self._call(
            "update", resource_id, self.transport.update_resource(resource_id, body)
        )

    async def delete(self, resource: ResourceRef) -> ResourceResult:
        """Delete a resource by id, or by the ``resource`` field of a document."""
        try:
            resource_id = self._require_id(resource)
        except InvalidInputError as e:
            return self._invalid(e)
        return await self._call(
            "delete", resource_id, self.transport.delete_resource(resource_id)
        )

    async def _await_dependency(
        self, dependency_id: str, policy: PollingPolicy
    ) -> Optional[bool]:
        probe = self.probes.get(self.resource_type.dependency or "")
        if probe is None:
            logger.debug("No readiness probe for %s; not waiting", dependency_id)
            return None

        ready = await self.poller.await_ready(lambda: probe(dependency_id), policy)
        if policy.skips_wait:
            return None
        if not ready:
            logger.warning(
                "%s not confirmed ready; creating %s anyway", dependency_id, self.name
            )
        return ready

    def _require_id(self, resource: ResourceRef) -> str:
        resource_id = resource_id_of(resource)
        if resource_id is None or not validate_resource_id(
            resource_id, self.resource_type
        ):
            raise InvalidInputError(
                f"Wrong {self.name} id: {resource_id!r}",
                value=resource_id,
                resource_type=self.name,
            )
        return resource_id

    @staticmethod
    def _parse_changes(changes: Changes) -> ResourceDocument:
        if isinstance(changes, str):
            try:
                changes = json.loads(changes)
            except json.JSONDecodeError as e:
                raise InvalidInputError(f"Changes are not valid JSON: {e}") from e
        if not isinstance(changes, Mapping):
            raise InvalidInputError(
                f"Changes must be a JSON object, got {type(changes).__name__}"
            )
        return dict(changes)

    def _invalid(self, error: InvalidInputError) -> ResourceResult:
        logger.info("%s", error.message)
        resource_id = error.value if error.resource_type == self.name else None
        return ResourceResult.failure(
            ErrorKind.INVALID_INPUT, error.message, resource_id=resource_id
        )

    async def _call(
        self,
        operation: str,
        target: str,
        request: Awaitable[ResourceDocument],
    ) -> ResourceResult:
        try:
            document = await request
        except TransportError as e:
            logger.error("Error on %s %s: %s", operation, target, e)
            return ResourceResult.failure(
                ErrorKind.TRANSPORT_FAILURE,
                str(e),
                resource_id=target if operation not in ("create", "list") else None,
                status_code=getattr(e, "status_code", None),
            )
        logger.debug("%s %s succeeded", operation, target)
        return ResourceResult.success(
            document, target if operation not in ("create", "list") else None
        )


__all__ = ["ResourceClient", "ResourceRef", "DependencyProbe", "resource_id_of"]
