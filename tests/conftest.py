"""
Shared test fixtures and configuration for the remote_resources test suite.
"""

from unittest.mock import AsyncMock

import aioresponses
import pytest

from remote_resources import (
    ClientConfig,
    MemoryTransport,
    PollingPolicy,
    ReadinessPoller,
    ResourceApi,
    StatusCode,
)

BASE_URL = "https://api.example.com/andromeda/"


@pytest.fixture
def memory_transport() -> MemoryTransport:
    """In-memory transport; created resources start FINISHED."""
    return MemoryTransport()


@pytest.fixture
def fake_sleep() -> AsyncMock:
    """Sleep replacement that records its delays and returns immediately."""
    return AsyncMock(return_value=None)


@pytest.fixture
def poller(fake_sleep: AsyncMock) -> ReadinessPoller:
    return ReadinessPoller(sleep=fake_sleep)


@pytest.fixture
def quick_policy() -> PollingPolicy:
    """Ten milliseconds between probes, three probes at most."""
    return PollingPolicy(interval_millis=10, max_attempts=3)


@pytest.fixture
def client_config(quick_policy: PollingPolicy) -> ClientConfig:
    return ClientConfig(
        username="alice",
        api_key="s3cr3t",
        base_url=BASE_URL,
        polling=quick_policy,
    )


@pytest.fixture
def api(
    client_config: ClientConfig,
    memory_transport: MemoryTransport,
    poller: ReadinessPoller,
) -> ResourceApi:
    """ResourceApi wired to the memory transport and the fake sleep."""
    return ResourceApi(client_config, transport=memory_transport, poller=poller)


@pytest.fixture
def seeded_timeseries(memory_transport: MemoryTransport) -> str:
    """Identifier of a finished time series stored in the memory transport."""
    return memory_transport.add("timeseries", StatusCode.FINISHED)["resource"]


@pytest.fixture
def mock_aiohttp():
    """Mock aiohttp responses."""
    with aioresponses.aioresponses() as m:
        yield m

