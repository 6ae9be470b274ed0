"""Shared fixtures and helpers for tests."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from hypernav.core.ports.transport import ErrorHandler, RequestOptions

# ---------------------------------------------------------------------------
# Fakes for the fetch capability and the performer
# ---------------------------------------------------------------------------


class FakeFetch:
    """Serves canned documents by URL and records every request.

    A document may be a JSON value, an ``httpx.Response`` returned as-is, or an
    exception to raise. Unknown URLs answer 404.
    """

    def __init__(self, documents: dict[str, Any] | None = None) -> None:
        self.documents: dict[str, Any] = dict(documents or {})
        self.calls: list[tuple[str, RequestOptions]] = []

    async def __call__(self, url: str, options: RequestOptions) -> httpx.Response:
        self.calls.append((url, options))
        if url not in self.documents:
            return httpx.Response(404)
        document = self.documents[url]
        if isinstance(document, Exception):
            raise document
        if isinstance(document, httpx.Response):
            return document
        return httpx.Response(200, json=document)

    @property
    def urls(self) -> list[str]:
        return [url for url, _ in self.calls]

    @property
    def methods(self) -> list[str | None]:
        return [options.get("method") for _, options in self.calls]


class RecordingPerformer:
    def __init__(self, result: Any = None) -> None:
        self.result = result
        self.calls: list[dict[str, Any]] = []

    async def perform(
        self,
        address: str,
        method: str | None = None,
        body: Any = None,
        details: dict[str, Any] | None = None,
        raw_body: bool = False,
        on_error: ErrorHandler | None = None,
    ) -> Any:
        self.calls.append(
            {
                "address": address,
                "method": method,
                "body": body,
                "details": details,
                "raw_body": raw_body,
                "on_error": on_error,
            }
        )
        return self.result


class FaultRecorder:
    def __init__(self) -> None:
        self.faults: list[tuple[int, Any]] = []

    def __call__(self, kind: int, payload: Any) -> None:
        self.faults.append((kind, payload))

    @property
    def kinds(self) -> list[int]:
        return [kind for kind, _ in self.faults]


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def performer() -> RecordingPerformer:
    return RecordingPerformer()


@pytest.fixture
def fake_fetch() -> FakeFetch:
    return FakeFetch()


@pytest.fixture
def faults() -> FaultRecorder:
    return FaultRecorder()


@pytest.fixture(autouse=True)
def _clear_hypernav_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("HYPERNAV_TIMEOUT", raising=False)
    monkeypatch.delenv("HYPERNAV_FOLLOW_REDIRECTS", raising=False)
