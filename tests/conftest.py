"""
Root conftest.py for svc-body tests.

Provides marker registration and a few hand-rolled body sources used to
drive the reader without a server.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterable

import pytest

from svc_body.app.core.env import is_prod
from svc_body.app.settings import get_body_settings


def pytest_collection_modifyitems(config, items):
    """Tag request-size tests with `security` and everything under body/ with `body`."""
    for item in items:
        norm = str(item.fspath).replace("\\", "/")
        if "size" in norm or "limit" in item.name:
            item.add_marker(pytest.mark.security)
        if "/body/" in norm or "parse_body" in norm:
            item.add_marker(pytest.mark.body)


def pytest_configure(config):
    for name, desc in [
        ("security", "Request-size and abuse protection tests"),
        ("body", "Body reading and parsing tests"),
    ]:
        config.addinivalue_line("markers", f"{name}: {desc}")


@pytest.fixture(autouse=True)
def _fresh_cached_config():
    is_prod.cache_clear()
    get_body_settings.cache_clear()
    yield
    is_prod.cache_clear()
    get_body_settings.cache_clear()


class TrackingSource:
    """Body source that records how many chunks were pulled and whether it was closed."""

    def __init__(self, chunks: Iterable[bytes], content_type: str | None = None, error: BaseException | None = None):
        self._chunks = list(chunks)
        self._error = error
        self.headers = {"content-type": content_type} if content_type else {}
        self.pulled = 0
        self.closed = False

    async def stream(self) -> AsyncIterator[bytes]:
        try:
            for chunk in self._chunks:
                self.pulled += 1
                yield chunk
            if self._error is not None:
                raise self._error
        finally:
            self.closed = True


@pytest.fixture
def tracking_source():
    return TrackingSource


class CallbackRecorder:
    """Collects ``(error, value)`` pairs passed to a parse_body callback."""

    def __init__(self):
        self.calls: list[tuple[BaseException | None, object]] = []

    def __call__(self, err, value):
        self.calls.append((err, value))

    @property
    def error(self):
        assert len(self.calls) == 1
        return self.calls[0][0]

    @property
    def value(self):
        assert len(self.calls) == 1
        return self.calls[0][1]


@pytest.fixture
def recorder() -> CallbackRecorder:
    return CallbackRecorder()
