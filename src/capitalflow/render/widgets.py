"""
Widget renderers: write dashboard data into PageSinks.

Every renderer validates its input first and falls back to a fixed
placeholder instead of raising, so a bad argument never breaks the page.
"""

import json
import math
from html import escape
from typing import Any, Mapping, Optional, Sequence

from pydantic import ValidationError

from capitalflow.core.logger import get_logger
from capitalflow.core.models import (
    BlogPost,
    BreadthCounts,
    BreadthShares,
    ChartData,
    MoverRecord,
    MoversResult,
    NewsItem,
)
from capitalflow.render.sinks import PageSinks

logger = get_logger(__name__)

UNAVAILABLE = "Data unavailable."
DEFAULT_ERROR = "Failed to load data."
NO_SHARE = "—"

MOVERS_PLACEHOLDER = f'<tr><td colspan="3">{UNAVAILABLE}</td></tr>'
BREADTH_PLACEHOLDER = f'<p class="col-span-3">{UNAVAILABLE}</p>'
CHART_PLACEHOLDER = f'<p class="text-sm text-gray-500">{UNAVAILABLE}</p>'
NEWS_PLACEHOLDER = f"<li>{UNAVAILABLE}</li>"
BLOGS_PLACEHOLDER = f"<div>{UNAVAILABLE}</div>"

CELL = "px-6 py-4 whitespace-nowrap text-sm"

CHART_OPTIONS = {
    "responsive": True,
    "maintainAspectRatio": False,
    "plugins": {"legend": {"display": False}},
    "scales": {"y": {"beginAtZero": True}},
}


# ---------------------------
# Top movers
# ---------------------------
def _coerce_movers(result: Any) -> Optional[MoversResult]:
    if isinstance(result, MoversResult):
        return result
    if not isinstance(result, Mapping):
        return None
    if not isinstance(result.get("gainers"), list) or not isinstance(result.get("losers"), list):
        return None
    try:
        return MoversResult.model_validate(dict(result))
    except ValidationError:
        return None


def mover_row(record: MoverRecord, is_gainer: bool) -> str:
    direction = "price-up" if is_gainer else "price-down"
    return (
        "<tr>"
        f'<td class="{CELL} font-medium text-gray-900">{escape(record.symbol)}</td>'
        f'<td class="{CELL} text-gray-500">${escape(record.price)}</td>'
        f'<td class="{CELL} {direction}">{escape(record.change)}%</td>'
        "</tr>"
    )


def render_movers(result: Any, sinks: PageSinks) -> None:
    """Write one table row per mover, gainers and losers kept in input order."""
    movers = _coerce_movers(result)
    if movers is None:
        logger.error(f"render_movers received invalid data: {result!r}")
        sinks.gainers.replace(MOVERS_PLACEHOLDER)
        sinks.losers.replace(MOVERS_PLACEHOLDER)
        return

    sinks.gainers.clear()
    sinks.losers.clear()
    for record in movers.gainers:
        sinks.gainers.append(mover_row(record, True))
    for record in movers.losers:
        sinks.losers.append(mover_row(record, False))


# ---------------------------
# Market breadth
# ---------------------------
def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def breadth_shares(counts: BreadthCounts) -> Optional[BreadthShares]:
    """Percent of total per bucket, or None when there is nothing to divide by."""
    total = counts.advancing + counts.declining + counts.unchanged
    if total == 0:
        return None
    return BreadthShares(
        advancing=_round_half_up(counts.advancing / total * 100),
        declining=_round_half_up(counts.declining / total * 100),
        unchanged=_round_half_up(counts.unchanged / total * 100),
    )


def _breadth_block(label: str, css: str, share: Optional[int]) -> str:
    text = NO_SHARE if share is None else f"{share}%"
    return (
        '<div class="flex flex-col items-center">'
        f'<p class="text-sm font-medium text-gray-500">{label}</p>'
        f'<span class="text-lg font-bold {css}">{text}</span>'
        "</div>"
    )


def render_breadth(counts: Any, sinks: PageSinks) -> None:
    parsed = None
    if counts is not None:
        try:
            parsed = BreadthCounts.model_validate(counts)
        except ValidationError:
            parsed = None
    if parsed is None:
        logger.error(f"render_breadth received invalid data: {counts!r}")
        sinks.breadth.replace(BREADTH_PLACEHOLDER)
        return

    shares = breadth_shares(parsed)
    sinks.breadth.clear()
    sinks.breadth.append(_breadth_block("Advancing", "indicator-up", shares and shares.advancing))
    sinks.breadth.append(_breadth_block("Declining", "indicator-down", shares and shares.declining))
    sinks.breadth.append(_breadth_block("Unchanged", "text-gray-600", shares and shares.unchanged))


# ---------------------------
# Chart
# ---------------------------
def chart_config(chart_data: ChartData) -> dict:
    """Chart.js line chart config for the market performance canvas."""
    return {
        "type": "line",
        "data": chart_data.model_dump(by_alias=True),
        "options": CHART_OPTIONS,
    }


def render_chart(chart_data: Any, sinks: PageSinks) -> None:
    try:
        parsed = ChartData.model_validate(chart_data)
    except ValidationError:
        logger.error(f"render_chart received invalid data: {chart_data!r}")
        sinks.chart.replace(CHART_PLACEHOLDER)
        return

    # "</" must not close the script element early
    config_json = json.dumps(chart_config(parsed)).replace("</", "<\\/")
    sinks.chart.clear()
    sinks.chart.append(f'<canvas id="{sinks.chart.element_id}"></canvas>')
    sinks.chart.append(
        f'<script type="application/json" id="{sinks.chart.element_id}Config">{config_json}</script>'
    )


# ---------------------------
# News and blogs
# ---------------------------
def news_item(item: NewsItem) -> str:
    return f'<li><a href="{escape(item.url)}" class="hover:text-blue-600">{escape(item.title)}</a></li>'


def blog_item(item: BlogPost) -> str:
    return (
        '<div class="border-b last:border-b-0 pb-2 mb-2">'
        f'<h4 class="text-md font-medium text-gray-800">'
        f'<a href="{escape(item.url)}" class="hover:text-blue-600">{escape(item.title)}</a></h4>'
        f'<p class="text-sm text-gray-500">{escape(item.author)}</p>'
        "</div>"
    )


def render_insights(news: Any, blogs: Any, sinks: PageSinks) -> None:
    parsed_news = parsed_blogs = None
    if isinstance(news, Sequence) and not isinstance(news, str) \
            and isinstance(blogs, Sequence) and not isinstance(blogs, str):
        try:
            parsed_news = [NewsItem.model_validate(n) for n in news]
            parsed_blogs = [BlogPost.model_validate(b) for b in blogs]
        except ValidationError:
            parsed_news = parsed_blogs = None

    if parsed_news is None or parsed_blogs is None:
        logger.error("render_insights received invalid data.")
        sinks.news.replace(NEWS_PLACEHOLDER)
        sinks.blogs.replace(BLOGS_PLACEHOLDER)
        return

    sinks.news.clear()
    sinks.blogs.clear()
    for item in parsed_news:
        sinks.news.append(news_item(item))
    for item in parsed_blogs:
        sinks.blogs.append(blog_item(item))


# ---------------------------
# Failure surface
# ---------------------------
def render_error(message: str, sinks: PageSinks) -> None:
    """Replace the three market widgets with the same error text."""
    text = escape(message or DEFAULT_ERROR)
    row = f'<tr><td colspan="3" class="{CELL} text-gray-500">{text}</td></tr>'
    sinks.gainers.replace(row)
    sinks.losers.replace(row)
    sinks.breadth.replace(f'<p class="col-span-3 text-red-500">{text}</p>')
