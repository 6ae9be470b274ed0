from typing import Any

from hypernav.core.client import RestClient
from hypernav.core.ports.transport import ErrorHandler, Fetch
from hypernav.transport.httpx_adapter import HttpxFetch


async def open_resource(
    base_url: str,
    start_path: str,
    method: str | None = None,
    body: Any = None,
    details: dict[str, Any] | None = None,
    raw_body: bool = False,
    on_error: ErrorHandler | None = None,
    *,
    fetch: Fetch | None = None,
) -> Any:
    """Fetch ``base_url + start_path`` and return it as a live resource.

    ``on_error`` becomes the handler for this call and for every operation
    reached from the result. Without ``fetch`` an :class:`HttpxFetch` is used.

    Returns the live resource, the unchanged JSON value when it carries no
    links, or ``None`` when the request failed.
    """
    client = RestClient(base_url, fetch if fetch is not None else HttpxFetch(), on_error)
    return await client.perform(start_path, method, body, details, raw_body)
