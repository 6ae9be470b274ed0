from collections.abc import Callable
from typing import Any, Protocol, TypedDict

ErrorHandler = Callable[[int, Any], None]
AddressRewriter = Callable[[str], str]


class RequestOptions(TypedDict, total=False):
    method: str
    headers: dict[str, str]
    credentials: str
    body: str | bytes | None
    params: dict[str, Any]
    timeout: float


class FetchResponse(Protocol):
    @property
    def status_code(self) -> int: ...

    @property
    def is_success(self) -> bool: ...

    def json(self) -> Any: ...


class Fetch(Protocol):
    async def __call__(self, url: str, options: RequestOptions) -> FetchResponse: ...


class Performer(Protocol):
    async def perform(
        self,
        address: str,
        method: str | None = None,
        body: Any = None,
        details: dict[str, Any] | None = None,
        raw_body: bool = False,
        on_error: ErrorHandler | None = None,
    ) -> Any: ...
