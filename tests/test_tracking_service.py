"""Tests for tracking service configuration and orchestration."""

from unittest.mock import AsyncMock, patch

import pytest

from tracking import repository, service
from tracking.query import SearchFilters
from tracking.schemas import StatusUpdate


class TestConfig:
    def test_defaults(self) -> None:
        assert service.search_row_limit() == 2000
        assert service.tracking_url_row_limit() == 2000
        assert service.tracking_url_chunk_size() == 30
        assert service.tracking_url_base() == "https://tools.usps.com/go/TrackConfirmAction.action"
        assert service.terminal_status() == "delivered"

    def test_terminal_status_keeps_casing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TERMINAL_STATUS", "Delivered")
        assert service.terminal_status() == "Delivered"

    @pytest.mark.parametrize("raw", ["abc", "0", "-5"])
    def test_invalid_limits_fall_back(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv("TRACKING_URL_ROW_LIMIT", raw)
        monkeypatch.setenv("TRACKING_URL_CHUNK_SIZE", raw)
        assert service.tracking_url_row_limit() == 2000
        assert service.tracking_url_chunk_size() == 30

    def test_row_limit_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TRACKING_URL_ROW_LIMIT", "300")
        assert service.tracking_url_row_limit() == 300


class TestTrackingUrls:
    @pytest.mark.asyncio
    async def test_chunks_open_tracking_numbers(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TRACKING_URL_CHUNK_SIZE", "2")
        monkeypatch.setenv("TRACKING_URL_BASE", "https://carrier.test/track")
        open_numbers = AsyncMock(return_value=["A", "B", "C"])
        with patch.object(repository, "list_open_tracking_numbers", open_numbers):
            urls = await service.tracking_urls()

        assert urls == [
            "https://carrier.test/track?tLabels=A%2CB",
            "https://carrier.test/track?tLabels=C",
        ]
        open_numbers.assert_awaited_once_with(terminal_status="delivered", limit=2000)

    @pytest.mark.asyncio
    async def test_nothing_open(self) -> None:
        with patch.object(repository, "list_open_tracking_numbers", AsyncMock(return_value=[])):
            assert await service.tracking_urls() == []


class TestSearch:
    @pytest.mark.asyncio
    async def test_uses_configured_limit(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SEARCH_ROW_LIMIT", "50")
        filters = SearchFilters(status="pending")
        with patch.object(repository, "search", AsyncMock(return_value=[])) as search:
            await service.search(filters)
        search.assert_awaited_once_with(filters, limit=50)


class TestApplyStatusUpdates:
    @pytest.mark.asyncio
    async def test_passes_pairs_in_order(self) -> None:
        updates = [
            StatusUpdate(tracking_number="A", status="in_transit"),
            StatusUpdate(tracking_number="B", status="delivered"),
        ]
        with patch.object(repository, "update_statuses", AsyncMock(return_value=2)) as update:
            assert await service.apply_status_updates(updates) == 2
        update.assert_awaited_once_with([("A", "in_transit"), ("B", "delivered")])
