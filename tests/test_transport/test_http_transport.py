"""
Tests for the aiohttp transport.
"""

import asyncio
import re

import aiohttp
import pytest

from remote_resources import FORECAST, ErrorKind, ResourceClient
from remote_resources.auth import APIKeyAuth, APIKeyConfig, AuthLocation
from remote_resources.exceptions import (
    AuthenticationError,
    ConnectionError,
    ContentError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TimeoutError,
    TransportError,
)
from remote_resources.transport import HTTPTransport, Transport

BASE_URL = "https://api.example.com/andromeda/"
FORECAST_ID = "forecast/0123456789abcdef01234567"
FORECAST_URL = re.compile(r"^https://api\.example\.com/andromeda/forecast/0123456789abcdef01234567(\?.*)?$")
FORECAST_ENDPOINT = re.compile(r"^https://api\.example\.com/andromeda/forecast(\?.*)?$")


def only_request(mock_aiohttp):
    """The single (method, url, kwargs) recorded by aioresponses."""
    assert len(mock_aiohttp.requests) == 1
    (method, url), calls = next(iter(mock_aiohttp.requests.items()))
    assert len(calls) == 1
    return method, url, calls[0].kwargs


@pytest.fixture
def auth() -> APIKeyAuth:
    return APIKeyAuth(APIKeyConfig(username="alice", api_key="s3cr3t"))


@pytest.fixture
async def transport(auth):
    async with HTTPTransport(BASE_URL, auth=auth, timeout_seconds=5) as t:
        yield t


class TestHTTPTransportBasics:
    def test_satisfies_protocol(self):
        assert isinstance(HTTPTransport(BASE_URL), Transport)

    def test_trailing_slash_and_urls(self):
        transport = HTTPTransport("https://api.example.com/andromeda")

        assert transport.base_url == BASE_URL
        assert transport.url_for(FORECAST_ID) == BASE_URL + FORECAST_ID
        assert transport.url_for("/forecast") == BASE_URL + "forecast"

    def test_default_timeout(self):
        assert HTTPTransport(BASE_URL).timeout_seconds == 30.0

    @pytest.mark.asyncio
    async def test_close_owned_session(self):
        transport = HTTPTransport(BASE_URL)
        session = transport.session

        await transport.close()

        assert session.closed
        assert transport._session is None

    @pytest.mark.asyncio
    async def test_external_session_left_open(self):
        async with aiohttp.ClientSession() as session:
            transport = HTTPTransport(BASE_URL, session=session)
            await transport.close()
            assert not session.closed


class TestHTTPTransportRequests:
    """Test request building and response handling."""

    @pytest.mark.asyncio
    async def test_get_with_query_credentials(self, transport, mock_aiohttp):
        mock_aiohttp.get(
            FORECAST_URL, payload={"resource": FORECAST_ID, "status": {"code": 5}}
        )

        document = await transport.get_resource(FORECAST_ID)

        assert document["resource"] == FORECAST_ID
        method, url, kwargs = only_request(mock_aiohttp)
        assert method == "GET"
        assert url.path == "/andromeda/" + FORECAST_ID
        assert url.query["username"] == "alice"
        assert url.query["api_key"] == "s3cr3t"
        assert kwargs["json"] is None

    @pytest.mark.asyncio
    async def test_create_posts_json_body(self, transport, mock_aiohttp):
        body = {"timeseries": "timeseries/abc123def456abc123def456", "input_data": {}}
        mock_aiohttp.post(
            FORECAST_ENDPOINT,
            status=201,
            payload={"resource": FORECAST_ID, **body},
        )

        document = await transport.create_resource("forecast", body)

        assert document["resource"] == FORECAST_ID
        method, url, kwargs = only_request(mock_aiohttp)
        assert method == "POST"
        assert url.path == "/andromeda/forecast"
        assert kwargs["json"] == body

    @pytest.mark.asyncio
    async def test_update_uses_put(self, transport, mock_aiohttp):
        mock_aiohttp.put(FORECAST_URL, payload={"resource": FORECAST_ID, "name": "x"})

        document = await transport.update_resource(FORECAST_ID, {"name": "x"})

        assert document["name"] == "x"
        method, _, kwargs = only_request(mock_aiohttp)
        assert method == "PUT"
        assert kwargs["json"] == {"name": "x"}

    @pytest.mark.asyncio
    async def test_delete_empty_body(self, transport, mock_aiohttp):
        mock_aiohttp.delete(FORECAST_URL, status=204)

        assert await transport.delete_resource(FORECAST_ID) == {}

    @pytest.mark.asyncio
    async def test_list_appends_query(self, transport, mock_aiohttp):
        mock_aiohttp.get(FORECAST_ENDPOINT, payload={"meta": {}, "objects": []})

        document = await transport.list_resources("forecast", "limit=5;status.code=5")

        assert document["objects"] == []
        _, url, _ = only_request(mock_aiohttp)
        assert url.query["limit"] == "5"
        assert url.query["status.code"] == "5"
        assert url.query["username"] == "alice"

    @pytest.mark.asyncio
    async def test_header_credentials(self, mock_aiohttp):
        auth = APIKeyAuth(
            APIKeyConfig(username="alice", api_key="s3cr3t", location=AuthLocation.HEADER)
        )
        mock_aiohttp.get(FORECAST_URL, payload={"resource": FORECAST_ID})

        async with HTTPTransport(BASE_URL, auth=auth) as transport:
            await transport.get_resource(FORECAST_ID)

        _, url, kwargs = only_request(mock_aiohttp)
        assert kwargs["headers"] == {"Authorization": "ApiKey alice:s3cr3t"}
        assert "api_key" not in url.query

    @pytest.mark.asyncio
    async def test_blank_credentials(self, mock_aiohttp):
        auth = APIKeyAuth(APIKeyConfig(username="", api_key=""))

        async with HTTPTransport(BASE_URL, auth=auth) as transport:
            with pytest.raises(TransportError, match="Authentication unavailable"):
                await transport.get_resource(FORECAST_ID)

        assert len(mock_aiohttp.requests) == 0


class TestHTTPTransportErrors:
    """Test mapping of failures onto the exception hierarchy."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status, error_class",
        [
            (401, AuthenticationError),
            (403, AuthenticationError),
            (404, NotFoundError),
            (500, ServerError),
            (503, ServerError),
        ],
    )
    async def test_status_codes(self, transport, mock_aiohttp, status, error_class):
        mock_aiohttp.get(FORECAST_URL, status=status, body='{"code": %d}' % status)

        with pytest.raises(error_class) as exc_info:
            await transport.get_resource(FORECAST_ID)

        assert exc_info.value.status_code == status
        assert exc_info.value.response_text == '{"code": %d}' % status

    @pytest.mark.asyncio
    async def test_rate_limit(self, transport, mock_aiohttp):
        mock_aiohttp.get(FORECAST_URL, status=429, headers={"Retry-After": "7"})

        with pytest.raises(RateLimitError) as exc_info:
            await transport.get_resource(FORECAST_ID)

        assert exc_info.value.retry_after == 7.0

    @pytest.mark.asyncio
    async def test_timeout(self, transport, mock_aiohttp):
        mock_aiohttp.get(FORECAST_URL, exception=asyncio.TimeoutError())

        with pytest.raises(TimeoutError):
            await transport.get_resource(FORECAST_ID)

    @pytest.mark.asyncio
    async def test_connection_refused(self, transport, mock_aiohttp):
        mock_aiohttp.get(
            FORECAST_URL, exception=aiohttp.ClientConnectionError("refused")
        )

        with pytest.raises(ConnectionError):
            await transport.get_resource(FORECAST_ID)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", ["not json", "[1, 2, 3]", '"text"'])
    async def test_non_object_body(self, transport, mock_aiohttp, body):
        mock_aiohttp.get(FORECAST_URL, body=body)

        with pytest.raises(ContentError):
            await transport.get_resource(FORECAST_ID)

    @pytest.mark.asyncio
    async def test_undecodable_body(self, transport, mock_aiohttp):
        mock_aiohttp.get(FORECAST_URL, body=b'{"a": "\xff\xfe"}')

        with pytest.raises(ContentError, match="not valid utf-8"):
            await transport.get_resource(FORECAST_ID)

    @pytest.mark.asyncio
    async def test_undecodable_error_body(self, transport, mock_aiohttp):
        mock_aiohttp.get(FORECAST_URL, status=500, body=b"\xff oops")

        with pytest.raises(ServerError) as exc_info:
            await transport.get_resource(FORECAST_ID)

        assert exc_info.value.response_text.endswith(" oops")


class TestHTTPTransportThroughClient:
    """Test that unusable responses become failure results."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [b'{"a": "\xff\xfe"}', b"{oops", b"[1]"])
    async def test_bad_body_is_transport_failure(self, auth, mock_aiohttp, body):
        mock_aiohttp.get(FORECAST_URL, body=body)

        async with HTTPTransport(BASE_URL, auth=auth) as transport:
            result = await ResourceClient(FORECAST, transport).get(FORECAST_ID)

        assert not result.is_success
        assert result.error_kind is ErrorKind.TRANSPORT_FAILURE
        assert result.resource_id == FORECAST_ID
