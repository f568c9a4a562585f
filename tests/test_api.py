"""
Tests for the ResourceApi entry point.
"""

import re

import pytest

from remote_resources import (
    ClientConfig,
    ConfigurationError,
    HTTPTransport,
    ReadinessVerdict,
    ResourceApi,
    ResourceClient,
    StatusCode,
    build_transport,
)


class TestResourceApiClients:
    """Test per-type client construction."""

    def test_attribute_and_named_access(self, api):
        forecasts = api.forecast

        assert isinstance(forecasts, ResourceClient)
        assert forecasts.name == "forecast"
        assert api.resource("forecast") is forecasts

    def test_type_names_are_case_insensitive(self, api):
        assert api.resource("Forecast") is api.forecast
        assert api.resource("TIMESERIES") is api.timeseries

    def test_dependency_probe_is_the_api(self, api):
        assert api.forecast.probes == {"timeseries": api.readiness}
        assert api.source.probes == {}

    def test_clients_share_transport_policy_and_poller(self, api, memory_transport):
        assert api.model.transport is memory_transport
        assert api.model.policy == api.config.polling
        assert api.model.poller is api.poller

    def test_unknown_type(self, api):
        with pytest.raises(AttributeError):
            api.spreadsheet
        with pytest.raises(KeyError):
            api.resource("spreadsheet")


class TestResourceApiCreate:
    """Test creation through the dependency chain."""

    @pytest.mark.asyncio
    async def test_ready_dependency(self, api, memory_transport, seeded_timeseries, fake_sleep):
        result = await api.forecast.create(seeded_timeseries, {"000005": {"horizon": 10}})

        assert result.is_success
        assert result.metadata["dependency_ready"] is True
        assert [(c.operation, c.target) for c in memory_transport.calls] == [
            ("get", seeded_timeseries),
            ("create", "forecast"),
        ]
        fake_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_dependency_still_processing(self, api, memory_transport, fake_sleep):
        queued = memory_transport.add("timeseries", StatusCode.QUEUED)["resource"]

        result = await api.forecast.create(queued, {"000005": {"horizon": 10}})

        assert len(memory_transport.calls_for("get")) == 3
        assert fake_sleep.await_count == 2
        assert len(memory_transport.calls_for("create")) == 1
        assert result.metadata["dependency_ready"] is False

    @pytest.mark.asyncio
    async def test_dependency_finishes_while_waiting(
        self, api, memory_transport, fake_sleep
    ):
        queued = memory_transport.add("timeseries", StatusCode.IN_PROGRESS)["resource"]

        async def finish(_delay):
            memory_transport.set_status(queued, StatusCode.FINISHED)

        fake_sleep.side_effect = finish

        result = await api.forecast.create(queued)

        assert result.metadata["dependency_ready"] is True
        assert len(memory_transport.calls_for("get")) == 2

    @pytest.mark.asyncio
    async def test_faulty_dependency_stops_waiting(self, api, memory_transport, fake_sleep):
        faulty = memory_transport.add("timeseries", StatusCode.FAULTY)["resource"]

        result = await api.forecast.create(faulty)

        assert len(memory_transport.calls_for("get")) == 1
        fake_sleep.assert_not_awaited()
        assert result.metadata["dependency_ready"] is False

    @pytest.mark.asyncio
    async def test_chain(self, api, memory_transport):
        source = memory_transport.add("source")["resource"]

        dataset = await api.dataset.create(source)
        timeseries = await api.timeseries.create(dataset.resource_id)
        forecast = await api.forecast.create(timeseries.resource_id, {"000001": 5})

        assert forecast.is_success
        assert forecast.document["timeseries"] == timeseries.resource_id
        assert memory_transport.calls_for("create")[1].body == {
            "dataset": dataset.resource_id
        }


class TestResourceApiReadiness:
    @pytest.mark.asyncio
    async def test_dispatch_by_prefix(self, api, memory_transport, seeded_timeseries):
        assert await api.is_ready(seeded_timeseries)
        assert memory_transport.calls_for("get")[0].target == seeded_timeseries

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "resource",
        [None, "", "timeseries/short", "spreadsheet/abc123def456abc123def456"],
    )
    async def test_unrecognized_ids(self, api, memory_transport, resource):
        assert await api.readiness(resource) is ReadinessVerdict.FAILED
        assert not await api.is_ready(resource)
        assert memory_transport.calls == []


class TestResourceApiLifecycle:
    @pytest.mark.asyncio
    async def test_context_manager_closes_transport(self, client_config, memory_transport):
        async with ResourceApi(client_config, transport=memory_transport) as api:
            assert api.transport is memory_transport

        assert memory_transport.closed

    def test_requires_credentials_for_http(self):
        with pytest.raises(ConfigurationError):
            ResourceApi(ClientConfig())

    def test_build_transport(self, client_config):
        transport = build_transport(client_config)

        assert isinstance(transport, HTTPTransport)
        assert transport.base_url == client_config.api_url
        assert transport.timeout_seconds == client_config.timeout_seconds

    @pytest.mark.asyncio
    async def test_over_http(self, client_config, mock_aiohttp):
        forecast_id = "forecast/0123456789abcdef01234567"
        mock_aiohttp.get(
            re.compile(r"^https://api\.example\.com/andromeda/forecast/0123456789abcdef01234567\?.*$"),
            payload={"resource": forecast_id, "status": {"code": 5}},
        )

        async with ResourceApi(client_config) as api:
            assert await api.is_ready(forecast_id)

        ((_, url),) = mock_aiohttp.requests.keys()
        assert url.query["username"] == "alice"
