"""
aiohttp transport for the remote resource API.

Each method is a single request: no retries happen at this layer. HTTP error
statuses and aiohttp failures are mapped onto the exception hierarchy in
``remote_resources.exceptions``.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional, Tuple, cast

import aiohttp

from ..auth import AuthMethod
from ..exceptions import ContentError, ErrorHandler, TransportError
from ..models.base import ResourceDocument
from .base import describe, parse_query

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT_SECONDS = 30.0


class HTTPTransport:
    """
    Transport speaking JSON over HTTP with aiohttp.

    Endpoints resolve to ``<base_url><type>`` and resources to
    ``<base_url><type>/<id>``. Credentials from ``auth`` are attached to
    every request.

    Example:
        ```python
        auth = APIKeyAuth(APIKeyConfig(username="alice", api_key="abc123"))
        async with HTTPTransport("https://bigml.io/andromeda/", auth=auth) as transport:
            document = await transport.get_resource("forecast/5f3c0e1a2b3c4d5e6f708192")
        ```
    """

    def __init__(
        self,
        base_url: str,
        *,
        auth: Optional[AuthMethod] = None,
        timeout_seconds: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
            base_url: API root; a trailing slash is added if missing
            auth: Authentication method, or None for anonymous requests
            timeout_seconds: Total timeout per request
            session: Externally owned session (not closed by ``close``)
            headers: Extra headers sent with every request
        """
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.auth = auth
        self.timeout_seconds = float(timeout_seconds or _DEFAULT_TIMEOUT_SECONDS)
        self.headers = {"Accept": "application/json", **(headers or {})}

        self._session = session
        self._owns_session = session is None

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
                headers=self.headers,
            )
        return self._session

    async def close(self) -> None:
        """Close the internally owned aiohttp session."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> HTTPTransport:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def url_for(self, path: str) -> str:
        """Absolute URL of an endpoint or resource path."""
        return self.base_url + path.lstrip("/")

    async def create_resource(
        self, endpoint: str, body: ResourceDocument
    ) -> ResourceDocument:
        return await self._request("POST", endpoint, body=body)

    async def get_resource(self, path: str) -> ResourceDocument:
        return await self._request("GET", path)

    async def update_resource(
        self, path: str, body: ResourceDocument
    ) -> ResourceDocument:
        return await self._request("PUT", path, body=body)

    async def delete_resource(self, path: str) -> ResourceDocument:
        return await self._request("DELETE", path)

    async def list_resources(
        self, endpoint: str, query: Optional[str] = None
    ) -> ResourceDocument:
        return await self._request("GET", endpoint, query=query)

    async def _auth_parts(self) -> Tuple[List[Tuple[str, str]], Dict[str, str]]:
        if self.auth is None:
            return [], {}
        result = await self.auth.get_auth_data()
        if not result.success:
            raise TransportError(f"Authentication unavailable: {result.error}")
        return list(result.params.items()), dict(result.headers)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        body: Optional[ResourceDocument] = None,
        query: Optional[str] = None,
    ) -> ResourceDocument:
        url = self.url_for(path)
        params, headers = await self._auth_parts()
        params.extend(parse_query(query))

        if body is not None:
            logger.debug("%s %s body=%s", method, url, describe(body))
        else:
            logger.debug("%s %s", method, url)

        try:
            async with self.session.request(
                method, url, params=params or None, json=body, headers=headers or None
            ) as resp:
                raw = await resp.read()
                charset = resp.charset or "utf-8"
                if resp.status >= 400:
                    raise ErrorHandler.handle_http_status_error(
                        resp.status,
                        resp.reason or f"HTTP {resp.status}",
                        url,
                        dict(resp.headers),
                        raw.decode("utf-8", errors="replace"),
                    )
                return self._parse_body(raw, charset, url, resp.content_type)
        except (asyncio.TimeoutError, aiohttp.ClientError) as e:
            raise ErrorHandler.handle_aiohttp_error(e, url) from e

    @staticmethod
    def _parse_body(
        raw: bytes, charset: str, url: str, content_type: Optional[str]
    ) -> ResourceDocument:
        try:
            text = raw.decode(charset)
        except (UnicodeDecodeError, LookupError) as e:
            raise ContentError(
                f"Response is not valid {charset} text: {e}",
                url=url,
                content_type=content_type,
            ) from e
        if not text.strip():
            return {}
        try:
            any_obj: Any = json.loads(text)
        except json.JSONDecodeError as e:
            raise ContentError(
                f"Response is not valid JSON: {e}", url=url, content_type=content_type
            ) from e
        if not isinstance(any_obj, dict):
            raise ContentError(
                "Response is not a JSON object", url=url, content_type=content_type
            )
        return cast(ResourceDocument, any_obj)


__all__ = ["HTTPTransport"]
