"""End-to-end pipeline behaviour with the HTTP layer mocked out."""

from unittest.mock import AsyncMock, patch

import pytest

from capitalflow.core.config import Settings
from capitalflow.core.errors import NetworkFailure
from capitalflow.pipeline import (
    PipelineStatus,
    build_dashboard,
    fetch_market_data,
    fetch_market_data_sync,
)
from capitalflow.render.widgets import MOVERS_PLACEHOLDER


def _market_sinks(sinks):
    return (sinks.gainers, sinks.losers, sinks.breadth)


class TestFetchMarketData:
    @pytest.mark.asyncio
    async def test_success_renders_movers_and_mock_breadth(self, settings, sinks, make_session, movers_body):
        status = await fetch_market_data(settings, sinks, session=make_session(movers_body))

        assert status is PipelineStatus.SUCCEEDED
        assert len(sinks.gainers) == 2
        assert len(sinks.losers) == 1
        assert "$10.00" in sinks.gainers.fragments[0]
        assert "81%" in sinks.breadth.html

    @pytest.mark.asyncio
    async def test_rate_limit_note_reaches_all_three_sinks(self, settings, sinks, make_session):
        status = await fetch_market_data(settings, sinks, session=make_session({"Note": "rate limit exceeded"}))

        assert status is PipelineStatus.FAILED
        for sink in _market_sinks(sinks):
            assert len(sink) == 1
            assert "rate limit exceeded" in sink.html
        assert "81%" not in sinks.breadth.html

    @pytest.mark.asyncio
    async def test_missing_arrays_renders_empty_tables(self, settings, sinks, make_session):
        status = await fetch_market_data(settings, sinks, session=make_session({"metadata": "x"}))

        assert status is PipelineStatus.SUCCEEDED
        assert sinks.gainers.html == ""
        assert sinks.losers.html == ""
        assert MOVERS_PLACEHOLDER not in sinks.gainers.html
        assert "81%" in sinks.breadth.html

    @pytest.mark.asyncio
    async def test_parse_failure_collapses_to_message(self, settings, sinks, make_session):
        body = {"top_gainers": [{"ticker": "A", "price": "abc", "change_percentage": "1%"}], "top_losers": []}
        status = await fetch_market_data(settings, sinks, session=make_session(body))

        assert status is PipelineStatus.FAILED
        for sink in _market_sinks(sinks):
            assert "could not parse price" in sink.html

    @pytest.mark.asyncio
    async def test_placeholder_key_never_hits_network(self, sinks, make_session):
        session = make_session({})
        settings = Settings(api_key="YOUR_ALPHA_VANTAGE_API_KEY")
        status = await fetch_market_data(settings, sinks, session=session)

        assert status is PipelineStatus.FAILED
        session.get.assert_not_called()
        assert "YOUR_ALPHA_VANTAGE_API_KEY" in sinks.breadth.html

    @pytest.mark.asyncio
    async def test_missing_key(self, sinks):
        status = await fetch_market_data(Settings(api_key=""), sinks)
        assert status is PipelineStatus.FAILED
        assert "ALPHAVANTAGE_API_KEY" in sinks.gainers.html

    @pytest.mark.asyncio
    async def test_settings_forwarded_to_client(self, sinks):
        settings = Settings(api_key="k", quotes_base_url="https://q.test", timeout_seconds=2.5)
        with patch("capitalflow.pipeline.fetch_top_movers", new=AsyncMock(side_effect=NetworkFailure("down"))) as fetch:
            status = await fetch_market_data(settings, sinks)

        assert status is PipelineStatus.FAILED
        fetch.assert_awaited_once_with("k", base_url="https://q.test", timeout=2.5, session=None)
        assert "down" in sinks.losers.html


class TestFetchMarketDataSync:
    @patch("capitalflow.clients.alphavantage_client.requests.get")
    def test_success(self, mock_get, settings, sinks, movers_body):
        mock_get.return_value.json.return_value = movers_body
        assert fetch_market_data_sync(settings, sinks) is PipelineStatus.SUCCEEDED
        assert len(sinks.gainers) == 2

    @patch("capitalflow.clients.alphavantage_client.requests.get")
    def test_error_message(self, mock_get, settings, sinks):
        mock_get.return_value.json.return_value = {"Error Message": "Invalid API call."}
        assert fetch_market_data_sync(settings, sinks) is PipelineStatus.FAILED
        assert "Invalid API call." in sinks.breadth.html


class TestBuildDashboard:
    @pytest.mark.asyncio
    async def test_all_widgets_filled(self, settings, make_session, movers_body):
        sinks = await build_dashboard(settings, session=make_session(movers_body))
        assert len(sinks.gainers) == 2
        assert "marketChartConfig" in sinks.chart.html
        assert len(sinks.news) == 5
        assert len(sinks.blogs) == 3

    @pytest.mark.asyncio
    async def test_static_widgets_survive_market_failure(self, settings, make_session):
        sinks = await build_dashboard(settings, session=make_session({"Note": "slow down"}))
        assert "slow down" in sinks.gainers.html
        assert len(sinks.news) == 5
