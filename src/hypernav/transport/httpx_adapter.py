from __future__ import annotations

import logging
import os
from typing import Any

import httpx

from hypernav.core.ports.transport import RequestOptions

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def get_timeout() -> float:
    raw = os.getenv("HYPERNAV_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring invalid HYPERNAV_TIMEOUT=%r", raw)
        return DEFAULT_TIMEOUT


def get_follow_redirects() -> bool:
    raw = os.getenv("HYPERNAV_FOLLOW_REDIRECTS")
    if raw is None:
        return True
    return raw.strip().lower() in _TRUE_VALUES


class HttpxFetch:
    """Fetch capability backed by httpx.

    Implements the ``Fetch`` protocol. Without a supplied client every request
    runs on a short-lived ``AsyncClient``; cookies set by responses are kept in
    :attr:`cookies` and sent with later requests unless the options say
    ``credentials: "omit"``. A supplied client is used as-is and stays owned by
    the caller.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        follow_redirects: bool | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = client
        self._timeout = timeout if timeout is not None else get_timeout()
        self._follow_redirects = follow_redirects if follow_redirects is not None else get_follow_redirects()
        self._transport = transport
        self.cookies = httpx.Cookies()

    async def __call__(self, url: str, options: RequestOptions) -> httpx.Response:
        if self._client is not None:
            return await self._send(self._client, url, options)

        include_cookies = options.get("credentials") != "omit"
        logger.debug("Opening httpx client for %s (timeout=%s)", url, self._timeout)
        async with httpx.AsyncClient(
            timeout=self._timeout,
            follow_redirects=self._follow_redirects,
            cookies=self.cookies if include_cookies else None,
            transport=self._transport,
        ) as client:
            response = await self._send(client, url, options)
            if include_cookies:
                self.cookies.update(client.cookies)
        return response

    async def _send(self, client: httpx.AsyncClient, url: str, options: RequestOptions) -> httpx.Response:
        extra: dict[str, Any] = {}
        if "timeout" in options:
            extra["timeout"] = options["timeout"]
        request = client.build_request(
            options.get("method", "GET"),
            url,
            headers=options.get("headers"),
            content=options.get("body"),
            params=options.get("params"),
            **extra,
        )
        if options.get("credentials") == "omit":
            return await self._send_without_cookies(client, request)
        return await client.send(request)

    async def _send_without_cookies(self, client: httpx.AsyncClient, request: httpx.Request) -> httpx.Response:
        # Redirect requests carry the client jar again; each hop is sent with the header stripped.
        for _ in range(client.max_redirects + 1):
            request.headers.pop("Cookie", None)
            response = await client.send(request, follow_redirects=False)
            if not client.follow_redirects or response.next_request is None:
                return response
            await response.aclose()
            request = response.next_request
        raise httpx.TooManyRedirects("Exceeded maximum allowed redirects.", request=request)
