import json
import logging
from typing import Any, cast

from hypernav.core.errors import FaultKind, ignore_fault
from hypernav.core.ports.transport import ErrorHandler, Fetch, RequestOptions
from hypernav.core.transform import transform
from hypernav.models import READ_METHOD, WRITE_METHOD

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


def build_request_options(
    method: str,
    body: Any = None,
    details: dict[str, Any] | None = None,
    raw_body: bool = False,
) -> RequestOptions:
    """Assemble the options handed to the fetch capability.

    ``details`` is merged over the base options and may replace any of them.
    The body rules are applied afterwards, on a copy of the resulting headers.
    """
    options: dict[str, Any] = {
        "method": method,
        "headers": {"Accept": JSON_CONTENT_TYPE},
        "credentials": "include",
    }
    if details:
        options.update(details)

    headers = dict(options.get("headers") or {})
    if body is not None and not raw_body:
        headers["Content-Type"] = JSON_CONTENT_TYPE
        options["body"] = json.dumps(body)
    elif body is not None:
        options["body"] = body
    elif method == WRITE_METHOD:
        headers["Content-Type"] = JSON_CONTENT_TYPE
        options["body"] = None
    options["headers"] = headers

    return cast(RequestOptions, options)


class RestClient:
    """Issues requests relative to ``base_url`` and transforms every JSON result."""

    def __init__(self, base_url: str, fetch: Fetch, on_error: ErrorHandler | None = None) -> None:
        self.base_url = base_url
        self._fetch = fetch
        self._on_error = on_error

    async def perform(
        self,
        address: str,
        method: str | None = None,
        body: Any = None,
        details: dict[str, Any] | None = None,
        raw_body: bool = False,
        on_error: ErrorHandler | None = None,
    ) -> Any:
        """Fetch ``base_url + address`` and return the transformed JSON.

        Faults are reported to ``on_error`` (falling back to the client-wide
        handler) and resolve to ``None``; they are never raised.
        """
        handler = on_error or self._on_error or ignore_fault
        method = method or READ_METHOD
        url = self.base_url + address
        options = build_request_options(method, body, details, raw_body)

        logger.debug("%s %s", method, url)
        try:
            response = await self._fetch(url, options)
        except Exception as exc:
            logger.warning("%s fault on %s %s: %s", FaultKind.TRANSPORT.name, method, url, exc)
            handler(FaultKind.TRANSPORT, exc)
            return None

        if not response.is_success:
            logger.warning("%s fault on %s %s: HTTP %s", FaultKind.STATUS.name, method, url, response.status_code)
            handler(FaultKind.STATUS, response)
            return None

        try:
            data = response.json()
        except ValueError as exc:
            logger.warning("%s fault on %s %s: %s", FaultKind.DECODE.name, method, url, exc)
            handler(FaultKind.DECODE, exc)
            return None

        return transform(data, self)
