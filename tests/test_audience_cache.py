"""
Tests for the current-audience cache.

Covers both the bare `AudienceCache` (loader injected) and the context-level
behaviour against the fake API.
"""

from __future__ import annotations

import threading
import time

import pytest

from streamsend.adapters.api import ApiContext, Resource, Subscriber
from streamsend.core.domain.errors import ApiError, MalformedResponseError, NotFoundError
from streamsend.core.services.audience_cache import AudienceCache

from .conftest import FakeApi


def _audiences_xml(*ids: int) -> str:
    items = "".join(f"<audience><id type=\"integer\">{i}</id></audience>" for i in ids)
    return f'<?xml version="1.0" encoding="UTF-8"?>\n<audiences type="array">{items}</audiences>'


class TestAudienceCache:
    """Tests for the lock-guarded memo."""

    def test_loads_once(self) -> None:
        """Test that the loader runs only on the first call."""
        calls: list[int] = []

        def loader() -> int:
            calls.append(1)
            return 5

        cache = AudienceCache(loader)
        assert cache.audience_id() == 5
        assert cache.audience_id() == 5
        assert len(calls) == 1

    def test_clear_reloads(self) -> None:
        """Test that clear() forces a new load."""
        values = iter([2, 1])
        cache = AudienceCache(lambda: next(values))
        assert cache.audience_id() == 2
        cache.clear()
        assert cache.cached is None
        assert cache.audience_id() == 1

    def test_concurrent_callers_fetch_once(self) -> None:
        """Test that concurrent population is serialized."""
        calls: list[int] = []

        def loader() -> int:
            calls.append(1)
            time.sleep(0.05)
            return 9

        cache = AudienceCache(loader)
        results: list[int] = []
        threads = [threading.Thread(target=lambda: results.append(cache.audience_id())) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results == [9] * 8
        assert len(calls) == 1

    def test_loader_error_leaves_cache_empty(self) -> None:
        """Test that a failed load is not cached."""

        def loader() -> int:
            raise NotFoundError("nope")

        cache = AudienceCache(loader)
        with pytest.raises(NotFoundError):
            cache.audience_id()
        assert cache.cached is None


class TestContextAudience:
    """Tests for `audience_id()` against the fake API."""

    def test_first_audience(self, context: ApiContext) -> None:
        """Test that the id of the first audience is returned."""
        assert Subscriber.current_audience_id(context=context) == 2

    def test_first_of_many(self, api: FakeApi, context: ApiContext) -> None:
        """Test that only the first entry is used."""
        api.add("GET", "/audiences.xml", body=_audiences_xml(7, 3))
        assert context.audience_id() == 7

    def test_cached_until_cleared(self, api: FakeApi, context: ApiContext) -> None:
        """Test that backing changes are invisible until clear_audience()."""
        assert Resource.current_audience_id(context=context) == 2

        api.add("GET", "/audiences.xml", body=_audiences_xml(1))
        assert Resource.current_audience_id(context=context) == 2
        assert api.paths().count("/audiences.xml") == 1

        Resource.clear_audience(context=context)
        assert Resource.current_audience_id(context=context) == 1
        assert api.paths().count("/audiences.xml") == 2

    def test_malformed_document(self, api: FakeApi, context: ApiContext) -> None:
        """Test that a non-audiences document raises an API error."""
        api.add("GET", "/audiences.xml", body='<?xml version="1.0" encoding="UTF-8"?>\n<foo></foo>\n')
        with pytest.raises(ApiError) as excinfo:
            context.audience_id()
        assert isinstance(excinfo.value, MalformedResponseError)

    def test_no_audiences(self, api: FakeApi, context: ApiContext) -> None:
        """Test that an empty audience list raises an API error."""
        api.add("GET", "/audiences.xml", body=_audiences_xml())
        with pytest.raises(ApiError):
            context.audience_id()
