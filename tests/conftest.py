"""Shared fixtures for dashboard tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from capitalflow.core.config import Settings
from capitalflow.render.sinks import PageSinks


@pytest.fixture
def settings():
    return Settings(api_key="demo-key", quotes_base_url="https://quotes.test/query")


@pytest.fixture
def sinks():
    return PageSinks()


@pytest.fixture
def movers_body():
    """Trimmed TOP_GAINERS_LOSERS response."""
    return {
        "metadata": "Top gainers, losers, and most actively traded US tickers",
        "last_updated": "2024-05-17 16:15:59 US/Eastern",
        "top_gainers": [
            {"ticker": "AAA", "price": "10", "change_amount": "0.52", "change_percentage": "5.5%", "volume": "100"},
            {"ticker": "BBB", "price": "3.456", "change_amount": "1.1", "change_percentage": "46.8123%", "volume": "2500"},
        ],
        "top_losers": [
            {"ticker": "ZZZ", "price": "0.5", "change_amount": "-0.5", "change_percentage": "-50.0%", "volume": "900"},
        ],
        "most_actively_traded": [],
    }


@pytest.fixture
def make_session():
    """Build a fake aiohttp session whose get() resolves to a response with the given body."""
    def _make(body=None, json_error=None, get_error=None, status_error=None):
        response = MagicMock()
        response.raise_for_status = MagicMock(side_effect=status_error)
        if json_error is not None:
            response.json = AsyncMock(side_effect=json_error)
        else:
            response.json = AsyncMock(return_value=body)

        session = MagicMock()
        if get_error is not None:
            session.get = AsyncMock(side_effect=get_error)
        else:
            session.get = AsyncMock(return_value=response)
        return session
    return _make
