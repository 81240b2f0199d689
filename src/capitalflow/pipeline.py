"""
Market data pipeline: fetch top movers, render them, render breadth.

fetch_market_data runs once per page build and ends SUCCEEDED or FAILED.
Any error is caught here, once, and shown as the same message in the
gainers, losers and breadth widgets.
"""

from enum import Enum
from typing import Optional

import aiohttp

from capitalflow.clients.alphavantage_client import fetch_top_movers, fetch_top_movers_sync
from capitalflow.core.config import Settings, check_credential
from capitalflow.core.logger import get_logger
from capitalflow.core.models import MoversResult
from capitalflow.mock_data import MOCK_BLOGS, MOCK_BREADTH, MOCK_CHART, MOCK_NEWS
from capitalflow.render.sinks import PageSinks
from capitalflow.render.widgets import (
    render_breadth,
    render_chart,
    render_error,
    render_insights,
    render_movers,
)

logger = get_logger(__name__)


class PipelineStatus(str, Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def _render_market(result: MoversResult, sinks: PageSinks) -> PipelineStatus:
    render_movers(result, sinks)
    # no live breadth source; always the mock snapshot
    render_breadth(MOCK_BREADTH, sinks)
    return PipelineStatus.SUCCEEDED


def _fail(error: Exception, sinks: PageSinks) -> PipelineStatus:
    logger.exception(f"Failed to fetch market data: {error}")
    render_error(str(error), sinks)
    return PipelineStatus.FAILED


async def fetch_market_data(
    settings: Settings,
    sinks: PageSinks,
    session: Optional[aiohttp.ClientSession] = None,
) -> PipelineStatus:
    try:
        check_credential(settings.api_key)
        result = await fetch_top_movers(
            settings.api_key,
            base_url=settings.quotes_base_url,
            timeout=settings.timeout_seconds,
            session=session,
        )
        return _render_market(result, sinks)
    except Exception as e:
        return _fail(e, sinks)


def fetch_market_data_sync(settings: Settings, sinks: PageSinks) -> PipelineStatus:
    """Same as fetch_market_data, over a blocking HTTP call."""
    try:
        check_credential(settings.api_key)
        result = fetch_top_movers_sync(
            settings.api_key,
            base_url=settings.quotes_base_url,
            timeout=settings.timeout_seconds,
        )
        return _render_market(result, sinks)
    except Exception as e:
        return _fail(e, sinks)


def render_static_widgets(sinks: PageSinks) -> None:
    render_chart(MOCK_CHART, sinks)
    render_insights(MOCK_NEWS, MOCK_BLOGS, sinks)


async def build_dashboard(
    settings: Settings,
    session: Optional[aiohttp.ClientSession] = None,
) -> PageSinks:
    """Fresh sinks with every widget rendered."""
    sinks = PageSinks()
    status = await fetch_market_data(settings, sinks, session=session)
    logger.info(f"Market data pipeline {status.value}")
    render_static_widgets(sinks)
    return sinks
